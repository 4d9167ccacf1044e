from __future__ import annotations

import os
from dataclasses import dataclass, field
from datetime import timedelta
from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv

load_dotenv()


@dataclass(frozen=True)
class AuthSettings:
    api_key: Optional[str]

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)


@dataclass(frozen=True)
class SupabaseSettings:
    url: Optional[str]
    service_key: Optional[str]

    @property
    def is_configured(self) -> bool:
        return bool(self.url and self.service_key)

    @property
    def missing_env_vars(self) -> list[str]:
        missing = []
        if not self.url:
            missing.append("SUPABASE_URL")
        if not self.service_key:
            missing.append("SUPABASE_SERVICE_ROLE_KEY")
        return missing


@dataclass(frozen=True)
class StorageSettings:
    documents_table: str = "daily_documents"
    max_attempts: int = 5


@dataclass(frozen=True)
class LimitSettings:
    max_tasks: int = 50
    max_task_length: int = 500
    max_meal_length: int = 1000
    max_todo_items: int = 50
    max_todo_length: int = 500


@dataclass(frozen=True)
class VapiSettings:
    api_key: Optional[str]
    assistant_id: Optional[str]
    phone_number_id: Optional[str]
    base_url: str = "https://api.vapi.ai"
    timeout: float = 10.0

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)


@dataclass(frozen=True)
class CalendarSettings:
    access_token: Optional[str]
    calendar_id: str = "primary"
    base_url: str = "https://www.googleapis.com/calendar/v3"
    window: timedelta = field(default=timedelta(hours=24))
    max_results: int = 50
    timeout: float = 10.0


@dataclass(frozen=True)
class ScheduleSettings:
    timezone: str = "UTC"
    window: timedelta = field(default=timedelta(minutes=5))


@dataclass(frozen=True)
class AppSettings:
    auth: AuthSettings
    supabase: SupabaseSettings
    storage: StorageSettings
    limits: LimitSettings
    vapi: VapiSettings
    calendar: CalendarSettings
    schedule: ScheduleSettings


def _int_from_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _float_from_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


@lru_cache(maxsize=1)
def get_settings() -> AppSettings:
    auth = AuthSettings(api_key=os.getenv("JOURNAL_API_KEY") or None)

    supabase = SupabaseSettings(
        url=os.getenv("SUPABASE_URL"),
        service_key=os.getenv("SUPABASE_SERVICE_ROLE_KEY"),
    )

    storage = StorageSettings(
        documents_table=os.getenv("PLANNER_DOCUMENTS_TABLE", "daily_documents"),
        max_attempts=max(_int_from_env("PLANNER_STORE_MAX_ATTEMPTS", 5), 1),
    )

    limits = LimitSettings(
        max_tasks=_int_from_env("PLANNER_MAX_TASKS", 50),
        max_task_length=_int_from_env("PLANNER_MAX_TASK_LENGTH", 500),
        max_meal_length=_int_from_env("PLANNER_MAX_MEAL_LENGTH", 1000),
        max_todo_items=_int_from_env("PLANNER_MAX_TODO_ITEMS", 50),
        max_todo_length=_int_from_env("PLANNER_MAX_TODO_LENGTH", 500),
    )

    vapi = VapiSettings(
        api_key=os.getenv("VAPI_API_KEY") or None,
        assistant_id=os.getenv("VAPI_ASSISTANT_ID"),
        phone_number_id=os.getenv("VAPI_PHONE_NUMBER_ID"),
        base_url=os.getenv("VAPI_BASE_URL", "https://api.vapi.ai"),
        timeout=_float_from_env("VAPI_TIMEOUT_SECONDS", 10.0),
    )

    calendar = CalendarSettings(
        access_token=os.getenv("GOOGLE_CALENDAR_ACCESS_TOKEN") or None,
        calendar_id=os.getenv("GOOGLE_CALENDAR_ID", "primary"),
        base_url=os.getenv("GOOGLE_CALENDAR_BASE_URL", "https://www.googleapis.com/calendar/v3"),
        timeout=_float_from_env("GOOGLE_CALENDAR_TIMEOUT_SECONDS", 10.0),
    )

    schedule = ScheduleSettings(timezone=os.getenv("PLANNER_CALL_TIMEZONE", "UTC"))

    return AppSettings(
        auth=auth,
        supabase=supabase,
        storage=storage,
        limits=limits,
        vapi=vapi,
        calendar=calendar,
        schedule=schedule,
    )
