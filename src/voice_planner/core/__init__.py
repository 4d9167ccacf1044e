"""Clock parsing and payload normalization shared by the endpoints."""

from .clock import iso_utc, parse_time_of_day, resolve_timezone, to_24_hour, today_key, utcnow
from .normalizer import (
    completion_flag,
    normalize_meals,
    normalize_status_updates,
    normalize_tasks,
    normalize_todo_texts,
)

__all__ = [
    "completion_flag",
    "iso_utc",
    "normalize_meals",
    "normalize_status_updates",
    "normalize_tasks",
    "normalize_todo_texts",
    "parse_time_of_day",
    "resolve_timezone",
    "to_24_hour",
    "today_key",
    "utcnow",
]
