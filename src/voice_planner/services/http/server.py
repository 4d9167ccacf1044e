from __future__ import annotations

import logging
from functools import lru_cache
from typing import Any, Callable, Dict, Mapping, Optional

from fastapi import Body, Depends, FastAPI, Header
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from ...api import error_body, extract_tool_call, tool_result
from ...errors import InternalError, MethodNotAllowedError, PlannerError, ValidationError
from ...logging import configure_logging
from ..context import ServiceContext

configure_logging()
logger = logging.getLogger(__name__)

app = FastAPI(title="Voice Planner API", version="0.1.0")

ToolOperation = Callable[[Mapping[str, Any], str], Dict[str, Any]]


@lru_cache(maxsize=1)
def get_context() -> ServiceContext:
    return ServiceContext()


@app.exception_handler(PlannerError)
async def _planner_error(_request, exc: PlannerError) -> JSONResponse:
    return JSONResponse(error_body(exc.message, exc.status_code), status_code=exc.status_code)


@app.exception_handler(StarletteHTTPException)
async def _http_error(request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == 405:
        return await _planner_error(request, MethodNotAllowedError())
    return JSONResponse(error_body(str(exc.detail), exc.status_code), status_code=exc.status_code)


@app.exception_handler(RequestValidationError)
async def _request_error(_request, exc: RequestValidationError) -> JSONResponse:
    logger.warning("Rejected unreadable request body: %s", exc.errors())
    return JSONResponse(error_body("Request body must be valid JSON", 400), status_code=400)


def _invoke_tool(
    context: ServiceContext,
    body: Any,
    credential: Optional[str],
    operation: ToolOperation,
) -> Dict[str, Any]:
    context.guard.check(credential, source="tool endpoint")
    tool_call = extract_tool_call(body)
    logger.info("Tool call %s (%s)", tool_call.function.name or "<unnamed>", tool_call.id)
    try:
        result = operation(tool_call.function.arguments, tool_call.id)
    except PlannerError:
        raise
    except Exception as exc:  # noqa: BLE001
        logger.exception("Tool call %s failed", tool_call.id)
        raise InternalError(str(exc) or "Unknown error occurred") from exc
    return tool_result(tool_call.id, result)


@app.get("/health")
def health(context: ServiceContext = Depends(get_context)) -> Dict[str, Any]:
    return {
        "status": "ok",
        "service": "voice-planner",
        "auth_configured": context.settings.auth.is_configured,
        "storage_backend": type(context.backend).__name__,
        "storage_client_initialized": context.gateway.is_ready(),
    }


@app.post("/todo/create")
def create_todo_list(
    body: Any = Body(default=None),
    apikey: Optional[str] = Header(default=None),
    context: ServiceContext = Depends(get_context),
) -> Dict[str, Any]:
    if body is None:
        raise ValidationError("Request body is required")
    credential = apikey or (body.get("apiKey") if isinstance(body, dict) else None)
    return _invoke_tool(context, body, credential, context.todos.create)


@app.post("/todo/today")
def get_todo_list(
    body: Any = Body(default=None),
    apikey: Optional[str] = Header(default=None),
    context: ServiceContext = Depends(get_context),
) -> Dict[str, Any]:
    return _invoke_tool(context, body, apikey, context.todos.get_today)


@app.post("/todo/status")
def update_todo_status(
    body: Any = Body(default=None),
    apikey: Optional[str] = Header(default=None),
    context: ServiceContext = Depends(get_context),
) -> Dict[str, Any]:
    return _invoke_tool(context, body, apikey, context.todos.update_status)


@app.post("/planner/today")
def get_todays_planner(
    body: Any = Body(default=None),
    apikey: Optional[str] = Header(default=None),
    context: ServiceContext = Depends(get_context),
) -> Dict[str, Any]:
    return _invoke_tool(context, body, apikey, context.planner.get_today)


@app.post("/planner/tasks")
def update_tasks(
    body: Any = Body(default=None),
    apikey: Optional[str] = Header(default=None),
    context: ServiceContext = Depends(get_context),
) -> Dict[str, Any]:
    return _invoke_tool(context, body, apikey, context.planner.replace_tasks)


@app.post("/planner/tasks/completion")
def update_task_completion(
    body: Any = Body(default=None),
    apikey: Optional[str] = Header(default=None),
    context: ServiceContext = Depends(get_context),
) -> Dict[str, Any]:
    return _invoke_tool(context, body, apikey, context.planner.set_task_completion)


@app.post("/planner/meals")
def update_meals(
    body: Any = Body(default=None),
    apikey: Optional[str] = Header(default=None),
    context: ServiceContext = Depends(get_context),
) -> Dict[str, Any]:
    return _invoke_tool(context, body, apikey, context.planner.merge_meals)


@app.post("/calendar/events")
def get_calendar_events(
    body: Any = Body(default=None),
    apikey: Optional[str] = Header(default=None),
    context: ServiceContext = Depends(get_context),
) -> Dict[str, Any]:
    return _invoke_tool(context, body, apikey, context.calendar.get_events)


@app.post("/journal/save")
def save_journal_entry(
    body: Any = Body(default=None),
    context: ServiceContext = Depends(get_context),
) -> Dict[str, Any]:
    # Callable-function protocol wraps the payload in "data"; bare objects are accepted too.
    payload = body.get("data", body) if isinstance(body, dict) else body
    try:
        result = context.journal.save(payload)
    except PlannerError:
        raise
    except Exception as exc:  # noqa: BLE001
        logger.exception("Journal save failed")
        raise InternalError(str(exc) or "Unknown error occurred") from exc
    return {"result": result}


@app.post("/hooks/users")
def user_profile_changed(
    body: Any = Body(default=None),
    apikey: Optional[str] = Header(default=None),
    context: ServiceContext = Depends(get_context),
) -> Dict[str, Any]:
    """Database webhook for writes on the users table; schedules calls on call-time changes."""
    context.guard.check(apikey, source="profile webhook")
    if not isinstance(body, dict) or not isinstance(body.get("type"), str):
        raise ValidationError("Invalid webhook payload. Expected type, record and old_record.")

    record = body.get("record") if isinstance(body.get("record"), dict) else None
    old_record = body.get("old_record") if isinstance(body.get("old_record"), dict) else None
    user_id = (record or old_record or {}).get("id")
    if not user_id:
        raise ValidationError("Webhook payload does not identify a user")

    scheduled = context.profiles.dispatch(body["type"], str(user_id), record, old_record)
    return {"success": True, "event": body["type"].upper(), "scheduled": scheduled}


def run_local_server(host: str = "127.0.0.1", port: int = 8000) -> None:
    import asyncio

    from hypercorn.asyncio import serve
    from hypercorn.config import Config

    config = Config()
    config.bind = [f"{host}:{port}"]
    logger.info("Serving Voice Planner API on %s:%s", host, port)
    asyncio.run(serve(app, config))


__all__ = ["app", "get_context", "run_local_server"]
