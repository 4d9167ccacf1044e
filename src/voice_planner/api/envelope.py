from __future__ import annotations

import logging
from typing import Any, Dict

from pydantic import ValidationError as SchemaError

from ..errors import ValidationError
from .models import ToolCall, ToolCallRequest

logger = logging.getLogger(__name__)

INVALID_ENVELOPE = "Invalid request structure. Expected VAPI tool call format."


def extract_tool_call(body: Any) -> ToolCall:
    """Return the first tool invocation of a voice-platform request body.

    Only the first entry of ``message.toolCallList`` is processed; any later
    entries are ignored.
    """

    if not isinstance(body, dict):
        raise ValidationError(INVALID_ENVELOPE)
    try:
        request = ToolCallRequest.model_validate(body)
    except SchemaError as exc:
        logger.warning("Invalid tool call envelope: %s", exc.errors(include_url=False))
        raise ValidationError(INVALID_ENVELOPE) from exc

    tool_calls = request.message.tool_calls
    if len(tool_calls) > 1:
        logger.debug("Ignoring %d additional tool call(s) in request", len(tool_calls) - 1)
    return tool_calls[0]


def tool_result(tool_call_id: str, result: Dict[str, Any]) -> Dict[str, Any]:
    return {"results": [{"toolCallId": tool_call_id, "result": result}]}


def error_body(message: str, code: int) -> Dict[str, Any]:
    return {"success": False, "error": message, "code": code}


__all__ = ["INVALID_ENVELOPE", "error_body", "extract_tool_call", "tool_result"]
