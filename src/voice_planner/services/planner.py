from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Mapping

from ..api.serializers import serialize_meals, serialize_planner_summary, serialize_tasks
from ..config import LimitSettings
from ..core import completion_flag, iso_utc, normalize_meals, normalize_tasks, today_key
from ..data import DailyDocumentStore
from ..domain import PlannerDocument
from ..errors import ValidationError
from .arguments import require_str, writer_id

logger = logging.getLogger(__name__)


def _task_counts(document: PlannerDocument) -> Dict[str, Any]:
    return {
        "tasks": serialize_tasks(document.tasks),
        "total_tasks": document.total_tasks,
        "completed_tasks": document.completed_tasks,
    }


@dataclass(slots=True)
class PlannerService:
    store: DailyDocumentStore
    limits: LimitSettings

    def get_today(self, arguments: Mapping[str, Any], tool_call_id: str) -> Dict[str, Any]:
        user_id = require_str(arguments, "user_id")
        date_key = today_key(self.store.clock())
        document = self.store.fetch_planner(user_id, date_key)
        if document is None:
            logger.info("No planner exists for %s on %s", user_id, date_key)
            message = "No planner found for today"
        else:
            message = "Planner retrieved successfully"
        return {"message": message, **serialize_planner_summary(date_key, document)}

    def replace_tasks(self, arguments: Mapping[str, Any], tool_call_id: str) -> Dict[str, Any]:
        user_id = require_str(arguments, "user_id", "Missing required fields: user_id or tasks")
        if "tasks" not in arguments:
            raise ValidationError("Missing required fields: user_id or tasks")
        tasks = normalize_tasks(
            arguments.get("tasks"),
            max_items=self.limits.max_tasks,
            max_text=self.limits.max_task_length,
        )

        now = self.store.clock()
        document = self.store.replace_tasks(user_id, today_key(now), tasks, writer_id(arguments, tool_call_id))
        return {
            "success": True,
            "message": "Tasks updated successfully",
            "timestamp": iso_utc(now),
            "operation_id": tool_call_id,
            **_task_counts(document),
        }

    def set_task_completion(self, arguments: Mapping[str, Any], tool_call_id: str) -> Dict[str, Any]:
        message = "Missing or invalid required fields: user_id, task_id, is_complete"
        user_id = require_str(arguments, "user_id", message)
        task_id = require_str(arguments, "task_id", message)
        is_complete = completion_flag(arguments)

        now = self.store.clock()
        document = self.store.set_task_completion(
            user_id,
            today_key(now),
            task_id,
            is_complete,
            writer_id(arguments, tool_call_id),
        )
        return {
            "success": True,
            "message": f"Task {'marked as complete' if is_complete else 'marked as incomplete'}",
            "timestamp": iso_utc(now),
            "operation_id": tool_call_id,
            **_task_counts(document),
        }

    def merge_meals(self, arguments: Mapping[str, Any], tool_call_id: str) -> Dict[str, Any]:
        user_id = require_str(arguments, "user_id", "Missing required fields: user_id or meals")
        if arguments.get("meals") is None:
            raise ValidationError("Missing required fields: user_id or meals")
        meals = normalize_meals(arguments.get("meals"), max_text=self.limits.max_meal_length)

        now = self.store.clock()
        document = self.store.merge_meals(user_id, today_key(now), meals, writer_id(arguments, tool_call_id))
        return {
            "success": True,
            "message": "Meals updated successfully",
            "timestamp": iso_utc(now),
            "operation_id": tool_call_id,
            "meals": serialize_meals(document.meals),
        }
