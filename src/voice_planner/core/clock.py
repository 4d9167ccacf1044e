from __future__ import annotations

import logging
import re
from datetime import datetime, timedelta, timezone, tzinfo
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from ..errors import TimeParseError

logger = logging.getLogger(__name__)

TIME_OF_DAY_PATTERN = re.compile(r"^(\d{1,2}):(\d{2})\s*(AM|PM)$", re.IGNORECASE | re.ASCII)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def iso_utc(moment: datetime) -> str:
    """Format an aware datetime as ISO-8601 UTC with millisecond precision and a ``Z`` suffix."""
    return moment.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def today_key(now: Optional[datetime] = None) -> str:
    """Return the UTC calendar day used to key daily documents (YYYY-MM-DD)."""
    moment = now or utcnow()
    if moment.tzinfo is not None:
        moment = moment.astimezone(timezone.utc)
    return moment.date().isoformat()


def resolve_timezone(name: str) -> tzinfo:
    if not name or name.upper() == "UTC":
        return timezone.utc
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise TimeParseError(f"Unknown timezone: {name}") from exc


def _instant(moment: datetime) -> datetime:
    # Same-zone comparisons ignore fold, so compare in UTC.
    return moment.astimezone(timezone.utc)


def to_24_hour(hour: int, period: str) -> int:
    period = period.upper()
    if period == "AM":
        return 0 if hour == 12 else hour
    return hour if hour == 12 else hour + 12


def parse_time_of_day(
    text: str,
    *,
    now: Optional[datetime] = None,
    tz: Optional[tzinfo] = None,
) -> datetime:
    """Resolve a 12-hour clock string such as ``"8:00 AM"`` to its next occurrence.

    The result is an aware datetime in ``tz`` (UTC by default) at hh:mm:00.000.
    It falls on today when that instant is still ahead of ``now``; when it is
    exactly ``now`` or already past, it falls on tomorrow.
    """

    if not isinstance(text, str):
        raise TimeParseError(f"Time must be a string, got {type(text).__name__}")
    match = TIME_OF_DAY_PATTERN.match(text.strip())
    if not match:
        raise TimeParseError(f"Time string does not match expected format: {text!r}")

    hour = int(match.group(1))
    minute = int(match.group(2))
    if not 1 <= hour <= 12 or not 0 <= minute <= 59:
        raise TimeParseError(f"Time string is out of range: {text!r}")

    zone = tz or timezone.utc
    current = (now or utcnow()).astimezone(zone)
    candidate = datetime(
        current.year,
        current.month,
        current.day,
        to_24_hour(hour, match.group(3)),
        minute,
        tzinfo=zone,
    )
    if _instant(candidate) <= _instant(current):
        # Second pass of a repeated hour when clocks fall back.
        repeated = candidate.replace(fold=1)
        if _instant(repeated) > _instant(current):
            candidate = repeated
        else:
            # Wall-clock arithmetic so DST shifts keep the requested hour.
            tomorrow = candidate.date() + timedelta(days=1)
            candidate = candidate.replace(year=tomorrow.year, month=tomorrow.month, day=tomorrow.day)

    logger.debug("Resolved %r to %s", text, candidate.isoformat())
    return candidate


__all__ = [
    "TIME_OF_DAY_PATTERN",
    "iso_utc",
    "parse_time_of_day",
    "resolve_timezone",
    "to_24_hour",
    "today_key",
    "utcnow",
]
