from __future__ import annotations

import argparse
import logging
from typing import Optional, Sequence

from .core import iso_utc, parse_time_of_day, resolve_timezone
from .config import get_settings
from .data import InMemoryDocumentBackend
from .errors import TimeParseError
from .logging import configure_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Voice planner command line interface.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    serve_parser = subparsers.add_parser("serve", help="Start the HTTP API on hypercorn.")
    serve_parser.add_argument("--host", default="127.0.0.1")
    serve_parser.add_argument("--port", type=int, default=8000)
    serve_parser.add_argument(
        "--memory",
        action="store_true",
        help="Keep documents in process memory instead of Supabase.",
    )

    parse_parser = subparsers.add_parser("parse-time", help="Show when a call time would next fire.")
    parse_parser.add_argument("time", help='12-hour clock time such as "8:00 AM".')
    parse_parser.add_argument("--timezone", default=None)

    return parser


def _serve(host: str, port: int, memory: bool) -> None:
    from .services import ServiceContext
    from .services.http import app, get_context, run_local_server

    if memory:
        context = ServiceContext(backend=InMemoryDocumentBackend())
        app.dependency_overrides[get_context] = lambda: context
        logging.getLogger(__name__).warning("Using in-memory document storage; data is lost on exit")
    run_local_server(host=host, port=port)


def main(argv: Optional[Sequence[str]] = None) -> int:
    configure_logging()
    logging.getLogger(__name__).debug("Voice planner CLI starting")
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == "serve":
        _serve(args.host, args.port, args.memory)
    elif args.command == "parse-time":
        zone_name = args.timezone or get_settings().schedule.timezone
        try:
            moment = parse_time_of_day(args.time, tz=resolve_timezone(zone_name))
        except TimeParseError as exc:
            parser.error(exc.message)
        print(f"{moment.isoformat()} ({iso_utc(moment)})")
    else:  # pragma: no cover - argparse enforces choices
        parser.print_help()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
