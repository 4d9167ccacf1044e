from __future__ import annotations

import hmac
import logging
from dataclasses import dataclass
from typing import Any, Optional

from ..errors import AuthError

logger = logging.getLogger(__name__)

UNAUTHORIZED = "Unauthorized: Invalid or missing API key"


@dataclass(frozen=True, slots=True)
class AccessGuard:
    """Shared-secret check applied to every endpoint.

    An unset or empty configured secret denies every caller, including callers
    that also send an empty secret.
    """

    secret: Optional[str]

    def allows(self, candidate: Any) -> bool:
        if not self.secret or not isinstance(candidate, str) or not candidate:
            return False
        return hmac.compare_digest(candidate.encode("utf-8"), self.secret.encode("utf-8"))

    def check(self, candidate: Any, *, source: str = "") -> None:
        if not self.allows(candidate):
            logger.warning("Unauthorized access attempt%s", f" from {source}" if source else "")
            raise AuthError(UNAUTHORIZED)


__all__ = ["AccessGuard", "UNAUTHORIZED"]
