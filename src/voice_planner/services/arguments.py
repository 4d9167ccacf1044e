from __future__ import annotations

from typing import Any, Mapping, Optional

from ..errors import ValidationError


def require_str(arguments: Mapping[str, Any], name: str, message: Optional[str] = None) -> str:
    value = arguments.get(name)
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(message or f"Missing {name} in request")
    return value


def optional_str(arguments: Mapping[str, Any], name: str) -> Optional[str]:
    value = arguments.get(name)
    if isinstance(value, str) and value.strip():
        return value
    return None


def writer_id(arguments: Mapping[str, Any], tool_call_id: str) -> str:
    """Identify the writing operation: an explicit ``tool_id`` wins over the envelope id."""
    return optional_str(arguments, "tool_id") or tool_call_id
