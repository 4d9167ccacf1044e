"""Application services orchestrating data access and domain logic."""

from __future__ import annotations

from .calendar import CalendarService
from .calls import CallScheduler, build_call_request
from .context import ServiceContext
from .journal import JournalService
from .planner import PlannerService
from .todo import TodoService
from .triggers import ProfileChangeObserver

__all__ = [
    "CalendarService",
    "CallScheduler",
    "JournalService",
    "PlannerService",
    "ProfileChangeObserver",
    "ServiceContext",
    "TodoService",
    "build_call_request",
]
