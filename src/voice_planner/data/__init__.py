"""Data access layer."""

from __future__ import annotations

from .backends import (
    DocumentBackend,
    DocumentKey,
    InMemoryDocumentBackend,
    SupabaseDocumentBackend,
)
from .documents import DailyDocumentStore
from .supabase import SupabaseGateway, SupabaseNotInitializedError

__all__ = [
    "DailyDocumentStore",
    "DocumentBackend",
    "DocumentKey",
    "InMemoryDocumentBackend",
    "SupabaseDocumentBackend",
    "SupabaseGateway",
    "SupabaseNotInitializedError",
]
