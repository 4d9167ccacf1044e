# -*- coding: utf-8 -*-
"""Shared fixtures: frozen clock, in-memory storage, fake upstream HTTP services."""
from __future__ import annotations

import json
import typing as t
from datetime import datetime, timedelta, timezone

import httpx
import pytest
from fastapi.testclient import TestClient

from voice_planner.config import (
    AppSettings,
    AuthSettings,
    CalendarSettings,
    LimitSettings,
    ScheduleSettings,
    StorageSettings,
    SupabaseSettings,
    VapiSettings,
)
from voice_planner.data import DailyDocumentStore, InMemoryDocumentBackend
from voice_planner.services import ServiceContext
from voice_planner.services.http import app, get_context

API_KEY = "test-secret"
FIXED_NOW = datetime(2026, 10, 16, 7, 0, tzinfo=timezone.utc)
TODAY = "2026-10-16"


class FrozenClock:
    """Callable clock that only moves when told to."""

    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now = self.now + timedelta(**kwargs)


class FakeUpstream:
    """Stands in for the Vapi and Google Calendar REST APIs."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.call_status = 201
        self.call_content: t.Optional[bytes] = None
        self.calendar_status = 200
        self.calendar_items: list[dict[str, t.Any]] = [
            {
                "id": "evt-1",
                "summary": "Standup",
                "start": {"dateTime": "2026-10-16T09:00:00Z"},
                "end": {"dateTime": "2026-10-16T09:15:00Z"},
                "status": "confirmed",
                "htmlLink": "https://calendar.example/evt-1",
                "etag": "ignored",
            }
        ]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.path.endswith("/call"):
            body = json.loads(request.content)
            if self.call_content is not None:
                return httpx.Response(self.call_status, content=self.call_content)
            return httpx.Response(self.call_status, json={"id": "call-123", "name": body.get("name")})
        if request.url.path.endswith("/events"):
            return httpx.Response(
                self.calendar_status,
                json={"items": self.calendar_items, "nextPageToken": None},
            )
        return httpx.Response(404, json={"error": "not found"})

    def json_bodies(self, suffix: str) -> list[dict[str, t.Any]]:
        return [json.loads(r.content) for r in self.requests if r.url.path.endswith(suffix)]


def make_settings(
    *,
    api_key: t.Optional[str] = API_KEY,
    vapi_key: t.Optional[str] = "vapi-key",
    calendar_token: t.Optional[str] = "calendar-token",
    timezone_name: str = "UTC",
) -> AppSettings:
    return AppSettings(
        auth=AuthSettings(api_key=api_key),
        supabase=SupabaseSettings(url=None, service_key=None),
        storage=StorageSettings(),
        limits=LimitSettings(),
        vapi=VapiSettings(
            api_key=vapi_key,
            assistant_id="assistant-1",
            phone_number_id="phone-1",
            base_url="https://vapi.test",
        ),
        calendar=CalendarSettings(access_token=calendar_token, base_url="https://calendar.test/v3"),
        schedule=ScheduleSettings(timezone=timezone_name),
    )


def tool_call(arguments: t.Any, call_id: str = "call-1", name: str = "tool") -> dict[str, t.Any]:
    """Wrap arguments in the voice platform's tool-call envelope."""
    return {
        "message": {
            "toolCallList": [
                {"id": call_id, "type": "function", "function": {"name": name, "arguments": arguments}}
            ]
        }
    }


def result_of(response: httpx.Response) -> dict[str, t.Any]:
    payload = response.json()
    assert len(payload["results"]) == 1
    return payload["results"][0]["result"]


@pytest.fixture
def clock() -> FrozenClock:
    return FrozenClock(FIXED_NOW)


@pytest.fixture
def backend() -> InMemoryDocumentBackend:
    return InMemoryDocumentBackend()


@pytest.fixture
def store(backend: InMemoryDocumentBackend, clock: FrozenClock) -> DailyDocumentStore:
    return DailyDocumentStore(backend=backend, clock=clock)


@pytest.fixture
def upstream() -> FakeUpstream:
    return FakeUpstream()


@pytest.fixture
def http_client(upstream: FakeUpstream) -> t.Iterator[httpx.Client]:
    with httpx.Client(transport=httpx.MockTransport(upstream.handler)) as client:
        yield client


@pytest.fixture
def context(backend, http_client, clock) -> ServiceContext:
    return ServiceContext(settings=make_settings(), backend=backend, http_client=http_client, clock=clock)


@pytest.fixture
def client(context: ServiceContext) -> t.Iterator[TestClient]:
    app.dependency_overrides[get_context] = lambda: context
    try:
        with TestClient(app) as test_client:
            yield test_client
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def auth_headers() -> dict[str, str]:
    return {"apikey": API_KEY}
