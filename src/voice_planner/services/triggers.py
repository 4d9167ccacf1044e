from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional

from ..domain import CallKind, UserProfile
from .calls import CallScheduler

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ProfileChangeObserver:
    """Reacts to writes on a user's profile document.

    Nothing raised here may fail the profile write that triggered it, so every
    scheduling failure is logged and dropped.
    """

    scheduler: CallScheduler

    def on_created(self, user_id: str, record: Optional[Mapping[str, Any]]) -> List[str]:
        logger.info("New user created with ID: %s", user_id)
        return []

    def on_deleted(self, user_id: str, record: Optional[Mapping[str, Any]]) -> List[str]:
        logger.info("User %s was deleted", user_id)
        return []

    def on_updated(
        self,
        user_id: str,
        before: Optional[Mapping[str, Any]],
        after: Optional[Mapping[str, Any]],
    ) -> List[str]:
        """Schedule calls for each call-time field that changed to a non-empty value.

        Returns the call kinds that were submitted successfully.
        """

        logger.info("User %s updated", user_id)
        previous = UserProfile.from_record(user_id, before)
        current = UserProfile.from_record(user_id, after)

        changed = [
            kind
            for kind in CallKind
            if current.call_time(kind.profile_field)
            and current.call_time(kind.profile_field) != previous.call_time(kind.profile_field)
        ]
        if not changed:
            return []

        if not current.phone_number or not current.name:
            logger.warning("Cannot schedule calls for user %s: no phone number or name found", user_id)
            return []

        scheduled: List[str] = []
        for kind in changed:
            time_text = current.call_time(kind.profile_field)
            try:
                result = self.scheduler.schedule_call(
                    user_id,
                    current.name,
                    current.phone_number,
                    time_text,
                    kind,
                )
            except Exception:  # noqa: BLE001
                logger.exception("Error scheduling %s call for user %s", kind.value, user_id)
                continue
            if result is not None:
                logger.info("Scheduled %s call for user %s at %s", kind.value, user_id, time_text)
                scheduled.append(kind.value)
        return scheduled

    def dispatch(
        self,
        event: str,
        user_id: str,
        record: Optional[Dict[str, Any]],
        old_record: Optional[Dict[str, Any]],
    ) -> List[str]:
        event = event.upper()
        if event == "INSERT":
            return self.on_created(user_id, record)
        if event == "UPDATE":
            return self.on_updated(user_id, old_record, record)
        if event == "DELETE":
            return self.on_deleted(user_id, old_record)
        logger.warning("Ignoring unknown profile event %r for user %s", event, user_id)
        return []


__all__ = ["ProfileChangeObserver"]
