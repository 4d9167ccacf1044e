from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Dict, List, Mapping, Optional

import httpx

from ..config import CalendarSettings
from ..core import iso_utc, utcnow
from ..errors import UpstreamError
from .arguments import require_str

logger = logging.getLogger(__name__)

EVENT_FIELDS = (
    "id",
    "summary",
    "description",
    "location",
    "start",
    "end",
    "attendees",
    "organizer",
    "status",
    "htmlLink",
)


def _project_event(item: Mapping[str, Any]) -> Dict[str, Any]:
    return {name: item.get(name) for name in EVENT_FIELDS if item.get(name) is not None}


@dataclass(slots=True)
class CalendarService:
    """Passthrough to the Google Calendar events API using a single static access token."""

    settings: CalendarSettings
    client: Optional[httpx.Client] = None
    clock: Callable[[], datetime] = field(default=utcnow)

    def _get(self, url: str, params: Dict[str, Any]) -> httpx.Response:
        headers = {"Authorization": f"Bearer {self.settings.access_token or ''}"}
        if self.client is not None:
            return self.client.get(url, params=params, headers=headers)
        with httpx.Client(timeout=self.settings.timeout) as client:
            return client.get(url, params=params, headers=headers)

    def upcoming_events(self) -> Dict[str, Any]:
        now = self.clock()
        params = {
            "timeMin": iso_utc(now),
            "timeMax": iso_utc(now + self.settings.window),
            "maxResults": self.settings.max_results,
            "singleEvents": "true",
            "orderBy": "startTime",
        }
        url = f"{self.settings.base_url.rstrip('/')}/calendars/{self.settings.calendar_id}/events"
        try:
            response = self._get(url, params)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            logger.error("Calendar API returned %s: %s", exc.response.status_code, exc.response.text)
            raise UpstreamError(f"Calendar request failed with status {exc.response.status_code}") from exc
        except httpx.HTTPError as exc:
            logger.error("Calendar API request failed: %s", exc)
            raise UpstreamError(f"Calendar request failed: {exc}") from exc

        data = response.json()
        events: List[Dict[str, Any]] = [_project_event(item) for item in data.get("items") or []]
        return {"events": events, "nextPageToken": data.get("nextPageToken")}

    def get_events(self, arguments: Mapping[str, Any], tool_call_id: str) -> Dict[str, Any]:
        require_str(arguments, "user_id")
        listing = self.upcoming_events()
        return {
            "message": "Calendar events retrieved successfully",
            "events": listing["events"],
            "total_events": len(listing["events"]),
            "nextPageToken": listing["nextPageToken"],
        }


__all__ = ["CalendarService"]
