from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Dict, Optional

import httpx

from ..config import ScheduleSettings, VapiSettings
from ..core import iso_utc, parse_time_of_day, resolve_timezone, utcnow
from ..domain import CallKind
from ..errors import TimeParseError, UpstreamError

logger = logging.getLogger(__name__)


def build_call_request(
    *,
    display_name: str,
    phone_number: str,
    earliest_at: datetime,
    call_kind: CallKind,
    settings: VapiSettings,
    schedule: ScheduleSettings,
) -> Dict[str, Any]:
    """Build the Vapi ``POST /call`` payload for a scheduled outbound call."""
    return {
        "type": "outboundPhoneCall",
        "name": call_kind.label,
        "phoneNumberId": settings.phone_number_id,
        "assistantId": settings.assistant_id,
        "customer": {"number": phone_number, "name": display_name},
        "assistantOverrides": {"backgroundSound": "off"},
        "schedulePlan": {
            "earliestAt": iso_utc(earliest_at),
            "latestAt": iso_utc(earliest_at + schedule.window),
        },
    }


@dataclass(slots=True)
class CallScheduler:
    settings: VapiSettings
    schedule: ScheduleSettings
    client: Optional[httpx.Client] = None
    clock: Callable[[], datetime] = field(default=utcnow)

    def _post(self, path: str, payload: Dict[str, Any]) -> httpx.Response:
        url = f"{self.settings.base_url.rstrip('/')}{path}"
        headers = {"Authorization": f"Bearer {self.settings.api_key}"}
        if self.client is not None:
            return self.client.post(url, json=payload, headers=headers)
        with httpx.Client(timeout=self.settings.timeout) as client:
            return client.post(url, json=payload, headers=headers)

    def schedule_call(
        self,
        user_id: str,
        display_name: str,
        phone_number: str,
        time_text: str,
        call_kind: CallKind,
    ) -> Optional[Dict[str, Any]]:
        """Schedule one outbound call at the next occurrence of ``time_text``.

        Returns the created call, or ``None`` when the call cannot be scheduled
        because the API key is missing or ``time_text`` does not parse.
        Submission failures are logged and raised as :class:`UpstreamError`.
        """

        if not self.settings.is_configured:
            logger.error("VAPI_API_KEY is not set; cannot schedule %s call for %s", call_kind.value, user_id)
            return None

        try:
            earliest_at = parse_time_of_day(
                time_text,
                now=self.clock(),
                tz=resolve_timezone(self.schedule.timezone),
            )
        except TimeParseError as exc:
            logger.error("Invalid %s call time for user %s: %s", call_kind.value, user_id, exc)
            return None

        logger.info("Parsed time for %s call: %s", call_kind.value, iso_utc(earliest_at))
        payload = build_call_request(
            display_name=display_name,
            phone_number=phone_number,
            earliest_at=earliest_at,
            call_kind=call_kind,
            settings=self.settings,
            schedule=self.schedule,
        )

        try:
            response = self._post("/call", payload)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            logger.error(
                "Vapi rejected %s call for user %s: %s %s",
                call_kind.value,
                user_id,
                exc.response.status_code,
                exc.response.text,
            )
            raise UpstreamError(f"Call scheduling failed with status {exc.response.status_code}") from exc
        except httpx.HTTPError as exc:
            logger.error("Error scheduling %s call for user %s: %s", call_kind.value, user_id, exc)
            raise UpstreamError(f"Call scheduling failed: {exc}") from exc

        logger.info("Successfully scheduled %s call for user %s", call_kind.value, user_id)
        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError:
            logger.warning("Vapi returned a non-JSON body for %s call of user %s", call_kind.value, user_id)
            return {}


__all__ = ["CallScheduler", "build_call_request"]
