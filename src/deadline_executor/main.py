"""
main.py — Deadline Executor Entry Point

Usage:
    python -m deadline_executor                          # interactive interpreter
    python -m deadline_executor --mode demo              # run the demo workload to completion
    python -m deadline_executor --mode presentation      # step through the demo workload
    python -m deadline_executor --log-level DEBUG        # one log line per tick
    python -m deadline_executor --config path/to/config.yaml
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import NoReturn

import yaml
from dotenv import load_dotenv

MODES = ("interactive", "demo", "presentation")


def _find_env_file() -> Path | None:
    """Nearest .env in the working directory or one of its parents."""
    cwd = Path.cwd()
    for d in (cwd, *cwd.parents):
        if (d / ".env").is_file():
            return d / ".env"
    return None


def _fail(message: str) -> NoReturn:
    print(message, file=sys.stderr)
    sys.exit(1)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="deadline-executor",
        description="Single-slot task executor: Earliest Deadline First, with undo",
    )
    parser.add_argument(
        "--mode",
        choices=MODES,
        default="interactive",
        help=(
            "interactive: read commands from the prompt (default); "
            "demo: run the configured demo tasks to completion; "
            "presentation: tick through the demo tasks one step at a time"
        ),
    )
    parser.add_argument(
        "--config",
        metavar="PATH",
        default=None,
        help="config.yaml to load (default: $DEADLINE_EXECUTOR_CONFIG, else config/config.yaml)",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default=None,
        help="Override logging.level from the config file",
    )
    return parser.parse_args(argv)


def _load_config(config_path: str | None):
    from pydantic import ValidationError

    from deadline_executor.config.settings import ConfigError, load_settings

    try:
        settings = load_settings(config_path)
    except ValidationError as exc:
        lines = [
            f"  • {'.'.join(str(part) for part in err['loc']) or '?'}: {err['msg']}"
            for err in exc.errors()
        ]
        _fail("\n❌  Invalid configuration:\n\n" + "\n".join(lines) + "\n")
    except (OSError, ValueError, yaml.YAMLError) as exc:
        _fail(f"\n❌  Could not read configuration: {type(exc).__name__}: {exc}\n")

    try:
        settings.validate_all()
    except ConfigError as exc:
        _fail(str(exc))
    return settings


def bootstrap(args: argparse.Namespace):
    """
    Load .env and settings, validate them, and configure logging.
    Returns (settings, log).

    Exits with status 1 after printing the problems to stderr when the config
    has invalid values, cannot be parsed, or fails validate_all().
    """
    from deadline_executor.observability.logger import get_logger, setup_logging

    env_file = _find_env_file()
    if env_file is not None:
        load_dotenv(dotenv_path=env_file)

    settings = _load_config(args.config)

    setup_logging(
        level=args.log_level or settings.log_level,
        log_dir=settings.log_dir,
        json_format=settings.logging.json_format,
        console_output=settings.logging.console_output,
        max_bytes=settings.log_max_bytes,
        backup_count=settings.logging.backup_count,
    )
    return settings, get_logger("deadline_executor.main")


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    settings, log = bootstrap(args)

    from rich.console import Console

    from deadline_executor.observability.logger import bind_run
    from deadline_executor.scheduler.executor import TaskExecutor

    run_id = bind_run(args.mode)
    log.info("deadline_executor.starting", mode=args.mode, run_id=run_id,
             start_time=settings.executor.start_time)

    executor = TaskExecutor.from_settings(settings)
    console = Console()

    if args.mode == "demo":
        from deadline_executor.interfaces.demo import run_demo
        run_demo(executor, settings, console)
    elif args.mode == "presentation":
        from deadline_executor.interfaces.demo import run_presentation
        try:
            run_presentation(executor, settings, console)
        except KeyboardInterrupt:
            console.print("\n[dim]Presentation stopped.[/]")
            log.info("presentation.interrupted", at=executor.current_time)
    else:
        from deadline_executor.interfaces.cli import run_cli
        run_cli(settings, log, executor=executor, console=console)

    log.info("deadline_executor.stopped", mode=args.mode,
             current_time=executor.current_time, total_value=executor.total_value)
    return 0


def main_sync() -> None:
    """console_scripts entry point (see pyproject.toml)."""
    sys.exit(main())


if __name__ == "__main__":
    main_sync()
