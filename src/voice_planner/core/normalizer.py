"""Boundary normalization for items sent by voice-platform tool calls.

Clients send completion state as either ``isComplete`` or ``is_complete``;
everything past this module only sees the canonical ``is_complete`` attribute.
Every check rejects the whole batch so nothing is partially written.
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping

from ..domain import MEAL_SLOTS, StatusUpdate, TaskItem
from ..errors import ValidationError


def completion_flag(item: Mapping[str, Any]) -> bool:
    if "isComplete" in item and item["isComplete"] is not None:
        value = item["isComplete"]
    elif "is_complete" in item and item["is_complete"] is not None:
        value = item["is_complete"]
    else:
        raise ValidationError("Each item must have an isComplete or is_complete field")
    if not isinstance(value, bool):
        raise ValidationError("isComplete must be a boolean")
    return value


def _require_mapping(item: Any) -> Mapping[str, Any]:
    if not isinstance(item, Mapping):
        raise ValidationError("Each item must be an object")
    return item


def _require_text(item: Mapping[str, Any], key: str) -> str:
    value = item.get(key)
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"Each item must have a non-empty {key}")
    return value


def _require_list(raw: Any, name: str) -> List[Any]:
    if not isinstance(raw, list):
        raise ValidationError(f"{name} must be an array")
    return raw


def normalize_tasks(raw: Any, *, max_items: int = 50, max_text: int = 500) -> List[TaskItem]:
    items = _require_list(raw, "tasks")
    if len(items) > max_items:
        raise ValidationError(f"Too many tasks. Maximum allowed: {max_items}")

    tasks: List[TaskItem] = []
    seen: set[str] = set()
    for entry in items:
        item = _require_mapping(entry)
        task_id = _require_text(item, "id")
        text = _require_text(item, "text")
        if len(text) > max_text:
            raise ValidationError(f"Task text too long. Maximum length: {max_text} characters")
        if task_id in seen:
            raise ValidationError(f"Duplicate task id: {task_id}")
        seen.add(task_id)
        tasks.append(TaskItem(id=task_id, text=text, is_complete=completion_flag(item)))
    return tasks


def normalize_status_updates(raw: Any) -> List[StatusUpdate]:
    items = _require_list(raw, "items")
    if not items:
        raise ValidationError("Invalid request. Must provide user_id and items array.")
    updates = []
    for entry in items:
        item = _require_mapping(entry)
        updates.append(StatusUpdate(id=_require_text(item, "id"), is_complete=completion_flag(item)))
    return updates


def normalize_todo_texts(raw: Any, *, max_items: int = 50, max_text: int = 500) -> List[str]:
    if not isinstance(raw, list) or not raw:
        raise ValidationError("Invalid or empty to_do_list")
    if len(raw) > max_items:
        raise ValidationError(f"Too many to-do items. Maximum allowed: {max_items}")
    texts = []
    for value in raw:
        if not isinstance(value, str) or not value.strip():
            raise ValidationError("Each to-do item must be a non-empty string")
        if len(value) > max_text:
            raise ValidationError(f"To-do text too long. Maximum length: {max_text} characters")
        texts.append(value)
    return texts


def normalize_meals(raw: Any, *, max_text: int = 1000) -> Dict[str, str]:
    if not isinstance(raw, Mapping):
        raise ValidationError("meals must be an object")
    if not raw:
        raise ValidationError(
            "At least one meal type must be provided (breakfast, lunch, snacks, dinner)"
        )
    meals: Dict[str, str] = {}
    for slot, value in raw.items():
        if slot not in MEAL_SLOTS:
            raise ValidationError(f"Invalid meal type: {slot}. Allowed types: {', '.join(MEAL_SLOTS)}")
        if not isinstance(value, str):
            raise ValidationError(f"{slot} must be a string")
        if len(value) > max_text:
            raise ValidationError(
                f"{slot} description too long. Maximum length: {max_text} characters"
            )
        meals[slot] = value
    return meals


__all__ = [
    "completion_flag",
    "normalize_meals",
    "normalize_status_updates",
    "normalize_tasks",
    "normalize_todo_texts",
]
