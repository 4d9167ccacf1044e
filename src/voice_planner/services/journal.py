from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Dict, Mapping

from ..api.auth import AccessGuard
from ..core import iso_utc, utcnow
from ..errors import ValidationError

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class JournalService:
    """Callable-style journal save: the secret travels inside the payload as ``apiKey``."""

    guard: AccessGuard
    clock: Callable[[], datetime] = field(default=utcnow)

    def save(self, payload: Any) -> Dict[str, Any]:
        if not isinstance(payload, Mapping):
            raise ValidationError("Request data must be an object")
        self.guard.check(payload.get("apiKey"), source="journal")

        entry = {key: value for key, value in payload.items() if key != "apiKey"}
        if not entry:
            raise ValidationError("Journal entry is empty")
        logger.info("Journal entry received with fields: %s", ", ".join(sorted(entry)))
        return {
            "success": True,
            "message": "Journal entry saved successfully",
            "timestamp": iso_utc(self.clock()),
            "data": entry,
        }
