from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Optional

import httpx

from ..api.auth import AccessGuard
from ..config import AppSettings, get_settings
from ..core import utcnow
from ..data import DailyDocumentStore, DocumentBackend, SupabaseDocumentBackend, SupabaseGateway
from .calendar import CalendarService
from .calls import CallScheduler
from .journal import JournalService
from .planner import PlannerService
from .todo import TodoService
from .triggers import ProfileChangeObserver


@dataclass(slots=True)
class ServiceContext:
    """Aggregate root wiring settings, storage, and outbound clients into the services.

    Pass ``backend``, ``http_client`` or ``clock`` to substitute the Supabase
    table, the real Vapi/Google endpoints, or the wall clock.
    """

    settings: AppSettings = field(default_factory=get_settings)
    backend: Optional[DocumentBackend] = None
    http_client: Optional[httpx.Client] = None
    clock: Callable[[], datetime] = field(default=utcnow)
    gateway: SupabaseGateway = field(init=False)
    store: DailyDocumentStore = field(init=False)
    guard: AccessGuard = field(init=False)
    todos: TodoService = field(init=False)
    planner: PlannerService = field(init=False)
    calendar: CalendarService = field(init=False)
    calls: CallScheduler = field(init=False)
    profiles: ProfileChangeObserver = field(init=False)
    journal: JournalService = field(init=False)

    def __post_init__(self) -> None:
        self.gateway = SupabaseGateway(self.settings.supabase)
        if self.backend is None:
            self.backend = SupabaseDocumentBackend(
                gateway=self.gateway,
                table_name=self.settings.storage.documents_table,
                max_attempts=self.settings.storage.max_attempts,
            )
        self.store = DailyDocumentStore(backend=self.backend, clock=self.clock)
        self.guard = AccessGuard(self.settings.auth.api_key)
        self.todos = TodoService(store=self.store, limits=self.settings.limits)
        self.planner = PlannerService(store=self.store, limits=self.settings.limits)
        self.calendar = CalendarService(
            settings=self.settings.calendar,
            client=self.http_client,
            clock=self.clock,
        )
        self.calls = CallScheduler(
            settings=self.settings.vapi,
            schedule=self.settings.schedule,
            client=self.http_client,
            clock=self.clock,
        )
        self.profiles = ProfileChangeObserver(scheduler=self.calls)
        self.journal = JournalService(guard=self.guard, clock=self.clock)
