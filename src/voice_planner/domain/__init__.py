"""Domain models for daily planner documents."""

from __future__ import annotations

from .enums import CallKind, DocumentKind
from .models import (
    MEAL_SLOTS,
    DailyList,
    ListItem,
    MealPlan,
    PlannerDocument,
    StatusUpdate,
    TaskItem,
    UserProfile,
)

__all__ = [
    "MEAL_SLOTS",
    "CallKind",
    "DailyList",
    "DocumentKind",
    "ListItem",
    "MealPlan",
    "PlannerDocument",
    "StatusUpdate",
    "TaskItem",
    "UserProfile",
]
