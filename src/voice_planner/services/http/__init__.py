"""HTTP surface for the voice planner."""

from .server import app, get_context, run_local_server

__all__ = ["app", "get_context", "run_local_server"]
