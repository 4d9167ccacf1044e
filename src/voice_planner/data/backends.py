from __future__ import annotations

import logging
import threading
from copy import deepcopy
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional, Protocol, Tuple

from ..domain import DocumentKind
from ..errors import ConflictError
from .supabase import SupabaseGateway

logger = logging.getLogger(__name__)

Record = Dict[str, Any]
Mutator = Callable[[Optional[Record]], Record]


@dataclass(frozen=True, slots=True)
class DocumentKey:
    user_id: str
    kind: DocumentKind
    date: str

    @property
    def path(self) -> str:
        return f"users/{self.user_id}/{self.kind.value}/{self.date}"


class DocumentBackend(Protocol):
    """Key-value document storage with a per-key read-modify-write primitive.

    ``transact`` hands ``mutate`` a private copy of the current record (or
    ``None``) and persists what it returns. Exceptions raised by ``mutate``
    abort the write. Concurrent ``transact`` calls on one key must not lose
    each other's updates.
    """

    def get(self, key: DocumentKey) -> Optional[Record]:
        ...

    def transact(self, key: DocumentKey, mutate: Mutator) -> Record:
        ...


@dataclass
class InMemoryDocumentBackend:
    _documents: Dict[DocumentKey, Record] = field(default_factory=dict)
    _lock: threading.Lock = field(default_factory=threading.Lock)

    def get(self, key: DocumentKey) -> Optional[Record]:
        with self._lock:
            record = self._documents.get(key)
            return deepcopy(record) if record is not None else None

    def transact(self, key: DocumentKey, mutate: Mutator) -> Record:
        with self._lock:
            current = self._documents.get(key)
            updated = mutate(deepcopy(current) if current is not None else None)
            self._documents[key] = deepcopy(updated)
            return deepcopy(updated)

    def keys(self) -> list[DocumentKey]:
        with self._lock:
            return list(self._documents)


@dataclass
class SupabaseDocumentBackend:
    """Stores each daily document as a jsonb row guarded by a version counter.

    Expected table layout::

        create table daily_documents (
            user_id text not null,
            kind text not null,
            date text not null,
            data jsonb not null,
            version integer not null default 1,
            primary key (user_id, kind, date)
        );
    """

    gateway: SupabaseGateway
    table_name: str = "daily_documents"
    max_attempts: int = 5

    def _query(self):
        return self.gateway.table(self.table_name)

    def _read(self, key: DocumentKey) -> Optional[Tuple[Record, int]]:
        response = (
            self._query()
            .select("data, version")
            .eq("user_id", key.user_id)
            .eq("kind", key.kind.value)
            .eq("date", key.date)
            .limit(1)
            .execute()
        )
        rows = response.data or []
        if not rows:
            return None
        row = rows[0]
        return dict(row.get("data") or {}), int(row.get("version") or 0)

    def get(self, key: DocumentKey) -> Optional[Record]:
        current = self._read(key)
        return current[0] if current else None

    def _insert(self, key: DocumentKey, record: Record) -> bool:
        response = (
            self._query()
            .upsert(
                {
                    "user_id": key.user_id,
                    "kind": key.kind.value,
                    "date": key.date,
                    "data": record,
                    "version": 1,
                },
                on_conflict="user_id,kind,date",
                ignore_duplicates=True,
            )
            .execute()
        )
        return bool(response.data)

    def _compare_and_set(self, key: DocumentKey, record: Record, version: int) -> bool:
        response = (
            self._query()
            .update({"data": record, "version": version + 1})
            .eq("user_id", key.user_id)
            .eq("kind", key.kind.value)
            .eq("date", key.date)
            .eq("version", version)
            .execute()
        )
        return bool(response.data)

    def transact(self, key: DocumentKey, mutate: Mutator) -> Record:
        for attempt in range(1, self.max_attempts + 1):
            current = self._read(key)
            if current is None:
                record = mutate(None)
                if self._insert(key, record):
                    return record
            else:
                data, version = current
                record = mutate(deepcopy(data))
                if self._compare_and_set(key, record, version):
                    return record
            logger.info(
                "Concurrent write detected on %s (attempt %d/%d)",
                key.path,
                attempt,
                self.max_attempts,
            )
        raise ConflictError(f"Could not update {key.path}: too many concurrent writers")


__all__ = [
    "DocumentBackend",
    "DocumentKey",
    "InMemoryDocumentBackend",
    "Mutator",
    "Record",
    "SupabaseDocumentBackend",
]
