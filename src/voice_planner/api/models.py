from __future__ import annotations

from typing import Any, Dict, List, Optional

import orjson
from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..domain import DailyList, ListItem, MealPlan, PlannerDocument, TaskItem


class FunctionCall(BaseModel):
    model_config = ConfigDict(extra="allow")

    name: str = Field(default="")
    arguments: Dict[str, Any]

    @field_validator("arguments", mode="before")
    @classmethod
    def _decode_arguments(cls, value: Any) -> Any:
        # Some assistants send the arguments object JSON-encoded.
        if isinstance(value, (str, bytes)):
            try:
                return orjson.loads(value)
            except orjson.JSONDecodeError as exc:
                raise ValueError("function.arguments is not valid JSON") from exc
        return value


class ToolCall(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: str = Field(default="")
    type: str = Field(default="function")
    function: FunctionCall


class ToolCallMessage(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    tool_calls: List[ToolCall] = Field(alias="toolCallList", min_length=1)


class ToolCallRequest(BaseModel):
    model_config = ConfigDict(extra="allow")

    message: ToolCallMessage


class ListItemPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    text: str
    is_complete: bool = Field(default=False, serialization_alias="isComplete")
    created_at: Optional[str] = Field(default=None, serialization_alias="createdAt")

    @classmethod
    def from_domain(cls, item: ListItem) -> "ListItemPayload":
        return cls(
            id=item.id,
            text=item.text,
            is_complete=item.is_complete,
            created_at=item.created_at.isoformat() if item.created_at else None,
        )


class TaskPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    text: str
    is_complete: bool = Field(default=False, serialization_alias="isComplete")

    @classmethod
    def from_domain(cls, task: TaskItem) -> "TaskPayload":
        return cls(id=task.id, text=task.text, is_complete=task.is_complete)


class MealsPayload(BaseModel):
    breakfast: str = ""
    lunch: str = ""
    snacks: str = ""
    dinner: str = ""

    @classmethod
    def from_domain(cls, meals: MealPlan) -> "MealsPayload":
        return cls(**meals.to_record())


class TodoSummary(BaseModel):
    date: str
    items: List[ListItemPayload] = Field(default_factory=list)
    total_items: int = 0
    completed_items: int = 0

    @classmethod
    def from_domain(cls, date: str, document: Optional[DailyList]) -> "TodoSummary":
        if document is None:
            return cls(date=date)
        return cls(
            date=date,
            items=[ListItemPayload.from_domain(item) for item in document.items],
            total_items=document.total_items,
            completed_items=document.completed_items,
        )


class PlannerSummary(BaseModel):
    date: str
    tasks: List[TaskPayload] = Field(default_factory=list)
    meals: MealsPayload = Field(default_factory=MealsPayload)
    total_tasks: int = 0
    completed_tasks: int = 0

    @classmethod
    def from_domain(cls, date: str, document: Optional[PlannerDocument]) -> "PlannerSummary":
        if document is None:
            return cls(date=date)
        return cls(
            date=date,
            tasks=[TaskPayload.from_domain(task) for task in document.tasks],
            meals=MealsPayload.from_domain(document.meals),
            total_tasks=document.total_tasks,
            completed_tasks=document.completed_tasks,
        )
