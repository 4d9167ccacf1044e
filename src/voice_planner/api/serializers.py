from __future__ import annotations

from typing import Any, Dict, List, Optional

from ..domain import DailyList, MealPlan, PlannerDocument, TaskItem
from .models import ListItemPayload, MealsPayload, PlannerSummary, TaskPayload, TodoSummary


def serialize_items(document: DailyList) -> List[Dict[str, Any]]:
    return [ListItemPayload.from_domain(item).model_dump(by_alias=True) for item in document.items]


def serialize_tasks(tasks: List[TaskItem]) -> List[Dict[str, Any]]:
    return [TaskPayload.from_domain(task).model_dump(by_alias=True) for task in tasks]


def serialize_meals(meals: MealPlan) -> Dict[str, str]:
    return MealsPayload.from_domain(meals).model_dump()


def serialize_todo_summary(date: str, document: Optional[DailyList]) -> Dict[str, Any]:
    return TodoSummary.from_domain(date, document).model_dump(by_alias=True)


def serialize_planner_summary(date: str, document: Optional[PlannerDocument]) -> Dict[str, Any]:
    return PlannerSummary.from_domain(date, document).model_dump(by_alias=True)
