# -*- coding: utf-8 -*-
"""Tests for outbound call scheduling and the profile-change observer."""
from __future__ import annotations

import pytest

from conftest import make_settings
from voice_planner.config import ScheduleSettings
from voice_planner.domain import CallKind
from voice_planner.errors import UpstreamError
from voice_planner.services import CallScheduler, ProfileChangeObserver


@pytest.fixture
def scheduler(http_client, clock) -> CallScheduler:
    return CallScheduler(
        settings=make_settings().vapi,
        schedule=ScheduleSettings(),
        client=http_client,
        clock=clock,
    )


def test_schedule_call_submits_vapi_payload(scheduler, upstream) -> None:
    created = scheduler.schedule_call("u1", "Ada", "+15550001", "8:00 AM", CallKind.MORNING)

    assert created["id"] == "call-123"
    request = upstream.requests[-1]
    assert request.method == "POST"
    assert str(request.url) == "https://vapi.test/call"
    assert request.headers["Authorization"] == "Bearer vapi-key"
    assert upstream.json_bodies("/call") == [
        {
            "type": "outboundPhoneCall",
            "name": "Morning Call",
            "phoneNumberId": "phone-1",
            "assistantId": "assistant-1",
            "customer": {"number": "+15550001", "name": "Ada"},
            "assistantOverrides": {"backgroundSound": "off"},
            "schedulePlan": {
                "earliestAt": "2026-10-16T08:00:00.000Z",
                "latestAt": "2026-10-16T08:05:00.000Z",
            },
        }
    ]


def test_past_time_is_scheduled_for_tomorrow(scheduler, upstream) -> None:
    scheduler.schedule_call("u1", "Ada", "+15550001", "6:30 AM", CallKind.EVENING)
    body = upstream.json_bodies("/call")[0]
    assert body["name"] == "Evening Call"
    assert body["schedulePlan"]["earliestAt"] == "2026-10-17T06:30:00.000Z"


def test_missing_api_key_skips_submission(http_client, clock, upstream) -> None:
    scheduler = CallScheduler(
        settings=make_settings(vapi_key=None).vapi,
        schedule=ScheduleSettings(),
        client=http_client,
        clock=clock,
    )
    assert scheduler.schedule_call("u1", "Ada", "+15550001", "8:00 AM", CallKind.MORNING) is None
    assert upstream.requests == []


def test_unparseable_time_skips_submission(scheduler, upstream) -> None:
    assert scheduler.schedule_call("u1", "Ada", "+15550001", "breakfast", CallKind.MORNING) is None
    assert upstream.requests == []


def test_rejected_submission_raises(scheduler, upstream) -> None:
    upstream.call_status = 500
    with pytest.raises(UpstreamError, match="500"):
        scheduler.schedule_call("u1", "Ada", "+15550001", "8:00 AM", CallKind.MORNING)


@pytest.mark.parametrize("content", [b"", b"Accepted"])
def test_created_call_without_json_body(scheduler, upstream, content: bytes) -> None:
    upstream.call_content = content
    assert scheduler.schedule_call("u1", "Ada", "+15550001", "8:00 AM", CallKind.MORNING) == {}


@pytest.fixture
def observer(scheduler) -> ProfileChangeObserver:
    return ProfileChangeObserver(scheduler=scheduler)


def profile(**fields: str) -> dict[str, str]:
    return {"id": "u1", "name": "Ada", "phoneNumber": "+15550001", **fields}


def test_observer_counts_call_created_without_json_body(observer, upstream) -> None:
    upstream.call_content = b""
    assert observer.on_updated("u1", profile(), profile(morningCallTime="8:00 AM")) == ["morning"]


def test_changed_call_time_schedules_that_call(observer, upstream) -> None:
    scheduled = observer.on_updated(
        "u1",
        profile(morningCallTime="7:00 AM", eveningCallTime="9:00 PM"),
        profile(morningCallTime="8:00 AM", eveningCallTime="9:00 PM"),
    )
    assert scheduled == ["morning"]
    assert [body["name"] for body in upstream.json_bodies("/call")] == ["Morning Call"]


def test_both_changed_schedules_morning_then_evening(observer, upstream) -> None:
    scheduled = observer.on_updated(
        "u1",
        profile(),
        profile(morningCallTime="8:00 AM", eveningCallTime="9:00 PM"),
    )
    assert scheduled == ["morning", "evening"]
    assert [body["name"] for body in upstream.json_bodies("/call")] == ["Morning Call", "Evening Call"]


def test_unchanged_or_cleared_time_schedules_nothing(observer, upstream) -> None:
    assert observer.on_updated("u1", profile(morningCallTime="8:00 AM"), profile(morningCallTime="8:00 AM")) == []
    assert observer.on_updated("u1", profile(morningCallTime="8:00 AM"), profile(morningCallTime="")) == []
    assert upstream.requests == []


def test_missing_contact_details_skip_scheduling(observer, upstream) -> None:
    after = {"id": "u1", "name": "Ada", "morningCallTime": "8:00 AM"}
    assert observer.on_updated("u1", {"id": "u1"}, after) == []
    assert upstream.requests == []


def test_failed_call_does_not_stop_the_next_one(observer, upstream) -> None:
    upstream.call_status = 502
    scheduled = observer.on_updated(
        "u1",
        profile(),
        profile(morningCallTime="8:00 AM", eveningCallTime="9:00 PM"),
    )
    assert scheduled == []
    assert len(upstream.json_bodies("/call")) == 2


def test_invalid_time_does_not_stop_the_next_one(observer, upstream) -> None:
    scheduled = observer.on_updated(
        "u1",
        profile(),
        profile(morningCallTime="25:00 AM", eveningCallTime="9:00 PM"),
    )
    assert scheduled == ["evening"]


def test_dispatch_routes_by_event(observer, upstream) -> None:
    assert observer.dispatch("INSERT", "u1", profile(morningCallTime="8:00 AM"), None) == []
    assert observer.dispatch("DELETE", "u1", None, profile()) == []
    assert observer.dispatch("TRUNCATE", "u1", None, None) == []
    assert upstream.requests == []
    assert observer.dispatch("update", "u1", profile(morningCallTime="8:00 AM"), profile()) == ["morning"]
