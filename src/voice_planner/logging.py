from __future__ import annotations

import logging
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

LOG_LEVEL = os.getenv("PLANNER_LOG_LEVEL", "INFO").upper()
LOG_DIR = Path(os.getenv("PLANNER_LOG_DIR", Path.cwd() / "logs"))

_INITIALIZED = False


def configure_logging(level: Optional[str] = None, *, log_dir: Optional[Path] = None) -> None:
    """Configure application-wide logging with console and dated file output."""

    global _INITIALIZED
    if _INITIALIZED:
        return

    resolved_level = getattr(logging, (level or LOG_LEVEL).upper(), logging.INFO)
    formatter = logging.Formatter(
        fmt="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    handlers: list[logging.Handler] = [logging.StreamHandler()]
    target_dir = log_dir or LOG_DIR
    log_path: Optional[Path] = None
    try:
        target_dir.mkdir(parents=True, exist_ok=True)
        stamp = datetime.now(timezone.utc).strftime("%Y%m%d")
        log_path = target_dir / f"voice-planner-{stamp}.log"
        handlers.append(logging.FileHandler(log_path, encoding="utf-8"))
    except OSError:
        # Read-only filesystems (serverless hosts) only get console output.
        log_path = None

    root = logging.getLogger()
    root.setLevel(resolved_level)
    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)

    _INITIALIZED = True
    logging.getLogger(__name__).debug("Logging configured. Output file: %s", log_path)


__all__ = ["configure_logging"]
