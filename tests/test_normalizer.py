# -*- coding: utf-8 -*-
"""Tests for boundary normalization of tool-call items."""
import pytest

from voice_planner.core import (
    completion_flag,
    normalize_meals,
    normalize_status_updates,
    normalize_tasks,
    normalize_todo_texts,
)
from voice_planner.domain import StatusUpdate, TaskItem
from voice_planner.errors import ValidationError


def test_snake_case_flag_becomes_canonical() -> None:
    tasks = normalize_tasks([{"id": "t1", "text": "Walk", "is_complete": True}])
    assert tasks == [TaskItem(id="t1", text="Walk", is_complete=True)]


def test_camel_case_flag_wins_when_both_present() -> None:
    assert completion_flag({"isComplete": False, "is_complete": True}) is False


def test_flag_must_be_boolean() -> None:
    with pytest.raises(ValidationError, match="boolean"):
        completion_flag({"isComplete": "yes"})


def test_missing_flag_is_rejected() -> None:
    with pytest.raises(ValidationError):
        normalize_tasks([{"id": "t1", "text": "Walk"}])


def test_one_oversized_task_rejects_whole_batch() -> None:
    batch = [
        {"id": "t1", "text": "fine", "isComplete": False},
        {"id": "t2", "text": "x" * 501, "isComplete": False},
    ]
    with pytest.raises(ValidationError, match="Maximum length: 500"):
        normalize_tasks(batch)


def test_too_many_tasks() -> None:
    batch = [{"id": f"t{i}", "text": "t", "isComplete": False} for i in range(51)]
    with pytest.raises(ValidationError, match="Maximum allowed: 50"):
        normalize_tasks(batch)


def test_configured_limits_apply() -> None:
    with pytest.raises(ValidationError):
        normalize_tasks([{"id": "t1", "text": "abcdef", "isComplete": False}], max_text=5)


@pytest.mark.parametrize(
    "item",
    [
        {"id": "", "text": "Walk", "isComplete": False},
        {"id": "t1", "text": "   ", "isComplete": False},
        {"text": "Walk", "isComplete": False},
        "not-an-object",
    ],
)
def test_tasks_need_id_and_text(item) -> None:
    with pytest.raises(ValidationError):
        normalize_tasks([item])


def test_duplicate_task_ids_rejected() -> None:
    batch = [
        {"id": "t1", "text": "a", "isComplete": False},
        {"id": "t1", "text": "b", "isComplete": True},
    ]
    with pytest.raises(ValidationError, match="Duplicate"):
        normalize_tasks(batch)


def test_tasks_must_be_a_list() -> None:
    with pytest.raises(ValidationError, match="array"):
        normalize_tasks({"id": "t1"})


def test_empty_task_list_is_allowed() -> None:
    assert normalize_tasks([]) == []


def test_status_updates_accept_either_name() -> None:
    updates = normalize_status_updates([{"id": "a", "is_complete": True}, {"id": "b", "isComplete": False}])
    assert updates == [StatusUpdate(id="a", is_complete=True), StatusUpdate(id="b", is_complete=False)]


def test_status_updates_require_items() -> None:
    with pytest.raises(ValidationError):
        normalize_status_updates([])


def test_todo_texts() -> None:
    assert normalize_todo_texts(["A", "B"]) == ["A", "B"]
    with pytest.raises(ValidationError, match="empty to_do_list"):
        normalize_todo_texts([])
    with pytest.raises(ValidationError):
        normalize_todo_texts(["A", ""])
    with pytest.raises(ValidationError):
        normalize_todo_texts("A")


def test_partial_meals_pass_through() -> None:
    assert normalize_meals({"lunch": "soup"}) == {"lunch": "soup"}


@pytest.mark.parametrize(
    ("meals", "message"),
    [
        ({}, "At least one meal type"),
        ({"brunch": "eggs"}, "Invalid meal type: brunch"),
        ({"dinner": 3}, "dinner must be a string"),
        ({"snacks": "y" * 1001}, "snacks description too long"),
        (["lunch"], "meals must be an object"),
    ],
)
def test_invalid_meals(meals, message: str) -> None:
    with pytest.raises(ValidationError, match=message):
        normalize_meals(meals)
