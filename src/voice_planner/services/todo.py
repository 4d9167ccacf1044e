from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Mapping

from ..api.serializers import serialize_items, serialize_todo_summary
from ..config import LimitSettings
from ..core import iso_utc, normalize_status_updates, normalize_todo_texts, today_key
from ..data import DailyDocumentStore
from .arguments import optional_str, require_str, writer_id

logger = logging.getLogger(__name__)

DEFAULT_USER_ID = "default_user"


@dataclass(slots=True)
class TodoService:
    store: DailyDocumentStore
    limits: LimitSettings

    def get_today(self, arguments: Mapping[str, Any], tool_call_id: str) -> Dict[str, Any]:
        user_id = require_str(arguments, "user_id")
        date_key = today_key(self.store.clock())
        document = self.store.fetch_todo(user_id, date_key)
        if document is None:
            logger.info("No to-do list exists for %s on %s", user_id, date_key)
            message = "No to-do list found for today"
        else:
            message = "To-do list retrieved successfully"
        return {"message": message, **serialize_todo_summary(date_key, document)}

    def create(self, arguments: Mapping[str, Any], tool_call_id: str) -> Dict[str, Any]:
        texts = normalize_todo_texts(
            arguments.get("to_do_list"),
            max_items=self.limits.max_todo_items,
            max_text=self.limits.max_todo_length,
        )
        user_id = optional_str(arguments, "user_id")
        if user_id is None:
            logger.warning("No user_id found in tool call. Using default user id: %s", DEFAULT_USER_ID)
            user_id = DEFAULT_USER_ID

        now = self.store.clock()
        date_key = today_key(now)
        document = self.store.append_todo_items(user_id, date_key, texts, writer_id(arguments, tool_call_id))
        created = document.total_items == len(texts)
        return {
            "success": True,
            "message": "To-do list created successfully" if created else "To-do list updated successfully",
            "timestamp": iso_utc(now),
            "date": date_key,
            "tool_call_id": tool_call_id,
            "items": serialize_items(document),
            "items_added": len(texts),
            "total_items": document.total_items,
        }

    def update_status(self, arguments: Mapping[str, Any], tool_call_id: str) -> Dict[str, Any]:
        user_id = require_str(arguments, "user_id", "Invalid request. Must provide user_id and items array.")
        updates = normalize_status_updates(arguments.get("items"))

        now = self.store.clock()
        date_key = today_key(now)
        document = self.store.set_todo_status(user_id, date_key, updates, writer_id(arguments, tool_call_id))
        return {
            "success": True,
            "message": "To-do items updated successfully",
            "timestamp": iso_utc(now),
            "date": date_key,
            "tool_call_id": tool_call_id,
            "updated_items": len(updates),
            "items": serialize_items(document),
            "total_items": document.total_items,
            "completed_items": document.completed_items,
        }
