from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Dict, List, Optional, Sequence
from uuid import uuid4

from ..core.clock import utcnow
from ..domain import (
    DailyList,
    DocumentKind,
    ListItem,
    MealPlan,
    PlannerDocument,
    StatusUpdate,
    TaskItem,
)
from ..errors import NotFoundError
from .backends import DocumentBackend, DocumentKey, Record

logger = logging.getLogger(__name__)


@dataclass
class DailyDocumentStore:
    """Owns the lifecycle of per-user, per-day to-do and planner documents.

    Reads never create anything. Every write goes through the backend's
    ``transact`` so concurrent writers to one day's document are serialized.
    """

    backend: DocumentBackend
    clock: Callable[[], datetime] = field(default=utcnow)

    @staticmethod
    def _key(user_id: str, kind: DocumentKind, date_key: str) -> DocumentKey:
        return DocumentKey(user_id=user_id, kind=kind, date=date_key)

    # -- to-do lists -------------------------------------------------------

    def fetch_todo(self, user_id: str, date_key: str) -> Optional[DailyList]:
        record = self.backend.get(self._key(user_id, DocumentKind.TO_DO_LIST, date_key))
        if record is None:
            return None
        return DailyList.from_record(user_id, date_key, record)

    def append_todo_items(
        self,
        user_id: str,
        date_key: str,
        texts: Sequence[str],
        writer_id: str,
    ) -> DailyList:
        now = self.clock()
        new_items = [
            ListItem(id=uuid4().hex, text=text, is_complete=False, created_at=now) for text in texts
        ]

        def mutate(current: Optional[Record]) -> Record:
            if current is None:
                document = DailyList(user_id=user_id, date=date_key, created_at=now)
            else:
                document = DailyList.from_record(user_id, date_key, current)
            document.items.extend(new_items)
            document.last_modified = now
            document.modified_by = writer_id
            return document.to_record()

        record = self.backend.transact(self._key(user_id, DocumentKind.TO_DO_LIST, date_key), mutate)
        logger.info("Appended %d to-do item(s) for %s on %s", len(new_items), user_id, date_key)
        return DailyList.from_record(user_id, date_key, record)

    def set_todo_status(
        self,
        user_id: str,
        date_key: str,
        updates: Sequence[StatusUpdate],
        writer_id: str,
    ) -> DailyList:
        now = self.clock()
        wanted: Dict[str, bool] = {update.id: update.is_complete for update in updates}

        def mutate(current: Optional[Record]) -> Record:
            if current is None:
                raise NotFoundError("No to-do list found for today")
            document = DailyList.from_record(user_id, date_key, current)
            known = {item.id for item in document.items}
            missing = [item_id for item_id in wanted if item_id not in known]
            if missing:
                raise NotFoundError(f"To-do item not found: {', '.join(missing)}")
            for item in document.items:
                if item.id in wanted:
                    item.is_complete = wanted[item.id]
            document.last_modified = now
            document.modified_by = writer_id
            return document.to_record()

        record = self.backend.transact(self._key(user_id, DocumentKind.TO_DO_LIST, date_key), mutate)
        return DailyList.from_record(user_id, date_key, record)

    # -- planners ----------------------------------------------------------

    def fetch_planner(self, user_id: str, date_key: str) -> Optional[PlannerDocument]:
        record = self.backend.get(self._key(user_id, DocumentKind.PLANNER, date_key))
        if record is None:
            return None
        return PlannerDocument.from_record(user_id, date_key, record)

    def _mutate_planner(
        self,
        user_id: str,
        date_key: str,
        writer_id: str,
        apply: Callable[[PlannerDocument], None],
        *,
        create: bool,
        missing_message: str = "No planner found for today",
    ) -> PlannerDocument:
        now = self.clock()

        def mutate(current: Optional[Record]) -> Record:
            if current is None:
                if not create:
                    raise NotFoundError(missing_message)
                document = PlannerDocument(user_id=user_id, date=date_key, created_at=now)
            else:
                document = PlannerDocument.from_record(user_id, date_key, current)
            apply(document)
            document.last_modified = now
            document.modified_by = writer_id
            return document.to_record()

        record = self.backend.transact(self._key(user_id, DocumentKind.PLANNER, date_key), mutate)
        return PlannerDocument.from_record(user_id, date_key, record)

    def replace_tasks(
        self,
        user_id: str,
        date_key: str,
        tasks: List[TaskItem],
        writer_id: str,
    ) -> PlannerDocument:
        def apply(document: PlannerDocument) -> None:
            document.tasks = [TaskItem(id=t.id, text=t.text, is_complete=t.is_complete) for t in tasks]

        return self._mutate_planner(user_id, date_key, writer_id, apply, create=True)

    def set_task_completion(
        self,
        user_id: str,
        date_key: str,
        task_id: str,
        is_complete: bool,
        writer_id: str,
    ) -> PlannerDocument:
        def apply(document: PlannerDocument) -> None:
            for task in document.tasks:
                if task.id == task_id:
                    task.is_complete = is_complete
                    return
            raise NotFoundError("Task not found")

        return self._mutate_planner(user_id, date_key, writer_id, apply, create=False)

    def merge_meals(
        self,
        user_id: str,
        date_key: str,
        meals: Dict[str, str],
        writer_id: str,
    ) -> PlannerDocument:
        def apply(document: PlannerDocument) -> None:
            document.meals = (document.meals or MealPlan()).merged(meals)

        return self._mutate_planner(user_id, date_key, writer_id, apply, create=True)


__all__ = ["DailyDocumentStore"]
