"""Configuration models and helpers."""

from __future__ import annotations

from .settings import (
    AppSettings,
    AuthSettings,
    CalendarSettings,
    LimitSettings,
    ScheduleSettings,
    StorageSettings,
    SupabaseSettings,
    VapiSettings,
    get_settings,
)

__all__ = [
    "AppSettings",
    "AuthSettings",
    "CalendarSettings",
    "LimitSettings",
    "ScheduleSettings",
    "StorageSettings",
    "SupabaseSettings",
    "VapiSettings",
    "get_settings",
]
