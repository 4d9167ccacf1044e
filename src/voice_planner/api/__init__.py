"""Tool-call envelope handling, access control, and response payloads."""

from __future__ import annotations

from .auth import AccessGuard
from .envelope import error_body, extract_tool_call, tool_result
from .models import ToolCall, ToolCallRequest

__all__ = [
    "AccessGuard",
    "ToolCall",
    "ToolCallRequest",
    "error_body",
    "extract_tool_call",
    "tool_result",
]
