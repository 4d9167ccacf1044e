from __future__ import annotations


class PlannerError(Exception):
    """Base class for failures that map onto an HTTP status."""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class AuthError(PlannerError):
    """Raised when the caller's secret is missing or does not match."""

    status_code = 401


class ValidationError(PlannerError):
    """Raised for malformed envelopes, missing fields, or oversized input."""

    status_code = 400


class TimeParseError(ValidationError):
    """Raised when a 12-hour clock string cannot be parsed."""


class NotFoundError(PlannerError):
    """Raised when a day's document or an item inside it does not exist."""

    status_code = 404


class MethodNotAllowedError(PlannerError):
    status_code = 405

    def __init__(self, message: str = "Method not allowed. Please use POST.") -> None:
        super().__init__(message)


class UpstreamError(PlannerError):
    """Raised when the call-scheduling or calendar service fails."""

    status_code = 500


class ConflictError(PlannerError):
    """Raised when a document write keeps losing the optimistic-concurrency race."""

    status_code = 500


class InternalError(PlannerError):
    status_code = 500


__all__ = [
    "AuthError",
    "ConflictError",
    "InternalError",
    "MethodNotAllowedError",
    "NotFoundError",
    "PlannerError",
    "TimeParseError",
    "UpstreamError",
    "ValidationError",
]
