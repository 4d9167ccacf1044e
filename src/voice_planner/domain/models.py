from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional

MEAL_SLOTS = ("breakfast", "lunch", "snacks", "dinner")


def _parse_datetime(value: Any) -> Optional[datetime]:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, str):
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    raise ValueError(f"Unsupported datetime value: {value!r}")


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


def _flag(record: Mapping[str, Any]) -> bool:
    if "isComplete" in record:
        return bool(record["isComplete"])
    return bool(record.get("is_complete", False))


@dataclass(slots=True)
class ListItem:
    id: str
    text: str
    is_complete: bool = False
    created_at: Optional[datetime] = None

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "ListItem":
        return cls(
            id=str(record.get("id") or ""),
            text=str(record.get("text") or ""),
            is_complete=_flag(record),
            created_at=_parse_datetime(record.get("createdAt")),
        )

    def to_record(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "text": self.text,
            "isComplete": self.is_complete,
            "createdAt": _iso(self.created_at),
        }


@dataclass(slots=True)
class TaskItem:
    id: str
    text: str
    is_complete: bool = False

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "TaskItem":
        return cls(
            id=str(record.get("id") or ""),
            text=str(record.get("text") or ""),
            is_complete=_flag(record),
        )

    def to_record(self) -> Dict[str, Any]:
        return {"id": self.id, "text": self.text, "isComplete": self.is_complete}


@dataclass(slots=True, frozen=True)
class StatusUpdate:
    id: str
    is_complete: bool


@dataclass(slots=True)
class MealPlan:
    breakfast: str = ""
    lunch: str = ""
    snacks: str = ""
    dinner: str = ""

    @classmethod
    def from_record(cls, record: Optional[Mapping[str, Any]]) -> "MealPlan":
        record = record or {}
        return cls(**{slot: str(record.get(slot) or "") for slot in MEAL_SLOTS})

    def merged(self, partial: Mapping[str, str]) -> "MealPlan":
        """Return a copy with the provided slots replaced; other slots keep their value."""
        return replace(self, **{slot: partial[slot] for slot in MEAL_SLOTS if slot in partial})

    def to_record(self) -> Dict[str, str]:
        return {slot: getattr(self, slot) for slot in MEAL_SLOTS}


@dataclass(slots=True)
class DailyList:
    user_id: str
    date: str
    items: List[ListItem] = field(default_factory=list)
    created_at: Optional[datetime] = None
    last_modified: Optional[datetime] = None
    modified_by: str = ""

    @property
    def total_items(self) -> int:
        return len(self.items)

    @property
    def completed_items(self) -> int:
        return sum(1 for item in self.items if item.is_complete)

    @classmethod
    def from_record(cls, user_id: str, date: str, record: Mapping[str, Any]) -> "DailyList":
        return cls(
            user_id=user_id,
            date=date,
            items=[ListItem.from_record(item) for item in record.get("items") or []],
            created_at=_parse_datetime(record.get("createdAt")),
            last_modified=_parse_datetime(record.get("lastModified")),
            modified_by=str(record.get("modifiedBy") or ""),
        )

    def to_record(self) -> Dict[str, Any]:
        return {
            "items": [item.to_record() for item in self.items],
            "createdAt": _iso(self.created_at),
            "lastModified": _iso(self.last_modified),
            "modifiedBy": self.modified_by,
        }


@dataclass(slots=True)
class PlannerDocument:
    user_id: str
    date: str
    tasks: List[TaskItem] = field(default_factory=list)
    meals: MealPlan = field(default_factory=MealPlan)
    created_at: Optional[datetime] = None
    last_modified: Optional[datetime] = None
    modified_by: str = ""

    @property
    def total_tasks(self) -> int:
        return len(self.tasks)

    @property
    def completed_tasks(self) -> int:
        return sum(1 for task in self.tasks if task.is_complete)

    @classmethod
    def from_record(cls, user_id: str, date: str, record: Mapping[str, Any]) -> "PlannerDocument":
        return cls(
            user_id=user_id,
            date=date,
            tasks=[TaskItem.from_record(task) for task in record.get("tasks") or []],
            meals=MealPlan.from_record(record.get("meals")),
            created_at=_parse_datetime(record.get("createdAt")),
            last_modified=_parse_datetime(record.get("lastModified")),
            modified_by=str(record.get("modifiedBy") or ""),
        )

    def to_record(self) -> Dict[str, Any]:
        return {
            "tasks": [task.to_record() for task in self.tasks],
            "meals": self.meals.to_record(),
            "createdAt": _iso(self.created_at),
            "lastModified": _iso(self.last_modified),
            "modifiedBy": self.modified_by,
        }


@dataclass(slots=True)
class UserProfile:
    """Read-only view of the profile fields the call scheduler reacts to."""

    id: str
    name: str = ""
    phone_number: str = ""
    morning_call_time: str = ""
    evening_call_time: str = ""

    @classmethod
    def from_record(cls, user_id: str, record: Optional[Mapping[str, Any]]) -> "UserProfile":
        record = record or {}
        return cls(
            id=str(record.get("id") or user_id),
            name=str(record.get("name") or ""),
            phone_number=str(record.get("phoneNumber") or ""),
            morning_call_time=str(record.get("morningCallTime") or ""),
            evening_call_time=str(record.get("eveningCallTime") or ""),
        )

    def call_time(self, field_name: str) -> str:
        return {
            "morningCallTime": self.morning_call_time,
            "eveningCallTime": self.evening_call_time,
        }.get(field_name, "")
