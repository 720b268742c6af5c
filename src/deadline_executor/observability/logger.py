"""
observability/logger.py — Deadline Executor Structured Logger

structlog routed through stdlib logging. The interpreter and the demo
drivers own stdout, so log lines go to a rotating JSON file by default and
reach the terminal only when logging.console_output is switched on.

Every line carries timestamp, level, logger and event, plus run_id / mode
once bind_run() has been called by main.

Usage:
    from deadline_executor.observability.logger import get_logger, setup_logging
    setup_logging(level="INFO", log_dir="./data/logs")

    log = get_logger(__name__)
    log.info("executor.task_selected", id="T2", at=0)
"""

from __future__ import annotations

import logging
import logging.handlers
import sys
import uuid
from pathlib import Path
from typing import Any, Optional

import structlog

LOG_FILENAME = "deadline_executor.log"


# ─────────────────────────────────────────────────────────────────────────────
# Building blocks
# ─────────────────────────────────────────────────────────────────────────────

def _pre_chain() -> list[Any]:
    """Processors applied to structlog and foreign (stdlib) records alike."""
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]


def _formatter(renderer: Any) -> structlog.stdlib.ProcessorFormatter:
    return structlog.stdlib.ProcessorFormatter(
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
        foreign_pre_chain=_pre_chain(),
    )


def _file_handler(log_dir: Path, level: int, max_bytes: int, backup_count: int) -> logging.Handler:
    handler = logging.handlers.RotatingFileHandler(
        filename=log_dir / LOG_FILENAME,
        maxBytes=max_bytes,
        backupCount=backup_count,
        encoding="utf-8",
    )
    handler.setLevel(level)
    # Always JSON: the file is for machines.
    handler.setFormatter(_formatter(structlog.processors.JSONRenderer()))
    return handler


def _console_handler(level: int, json_format: bool) -> logging.Handler:
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    renderer = (
        structlog.processors.JSONRenderer()
        if json_format
        else structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())
    )
    handler.setFormatter(_formatter(renderer))
    return handler


# ─────────────────────────────────────────────────────────────────────────────
# Public API
# ─────────────────────────────────────────────────────────────────────────────

def setup_logging(
    level: str = "INFO",
    log_dir: str | Path = "./data/logs",
    json_format: Optional[bool] = None,  # None = pretty on a TTY, JSON otherwise
    console_output: bool = False,
    max_bytes: int = 10 * 1024 * 1024,   # 10 MB
    backup_count: int = 5,
) -> None:
    """
    Configure structlog and stdlib logging. Call once at startup; calling it
    again replaces the previous handlers.

    Args:
        level:          DEBUG | INFO | WARNING | ERROR | CRITICAL. DEBUG adds a
                        line per tick (executor.tick / executor.idle).
        log_dir:        Directory for the rotating log file. Created if missing.
        json_format:    Console format only; the file is always JSON.
        console_output: Also write log lines to stderr.
        max_bytes:      Rotation threshold for the log file.
        backup_count:   Rotated files to keep.
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    handlers = [_file_handler(log_dir, numeric_level, max_bytes, backup_count)]
    if console_output:
        if json_format is None:
            json_format = not sys.stderr.isatty()
        handlers.append(_console_handler(numeric_level, json_format))

    logging.basicConfig(level=numeric_level, handlers=handlers, force=True)

    structlog.configure(
        processors=_pre_chain() + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def get_logger(name: str = "deadline_executor", **initial_values: Any) -> structlog.stdlib.BoundLogger:
    """
    Get a structlog logger, optionally with values bound to every line.

    Example:
        log = get_logger(__name__, component="cli")
        log.info("cli.command", kind="TICK")
        # → {"event": "cli.command", "kind": "TICK", "component": "cli", ...}
    """
    logger = structlog.get_logger(name)
    if initial_values:
        logger = logger.bind(**initial_values)
    return logger


def bind_run(mode: str, run_id: Optional[str] = None) -> str:
    """
    Tag every later log line of this process with a run id and the run mode
    (interactive / demo / presentation), so one session can be grepped out of
    a shared log file. Returns the run id.
    """
    run_id = run_id or uuid.uuid4().hex[:8]
    structlog.contextvars.bind_contextvars(run_id=run_id, mode=mode)
    return run_id


def clear_run() -> None:
    structlog.contextvars.clear_contextvars()
