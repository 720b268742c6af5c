"""
interfaces/cli.py — Deadline Executor Interactive Interpreter

Line-oriented REPL over a TaskExecutor. Uses rich for terminal rendering.

Features:
  - ADD_TASK / TICK / RUN_ALL / REPORT / UNDO / HELP / EXIT
  - Per-command error handling: a bad line is reported and the loop goes on
  - Graceful Ctrl+C / Ctrl+D handling

Usage:
    python -m deadline_executor --mode interactive
"""

from __future__ import annotations

from dataclasses import asdict
from typing import Optional

from rich.console import Console
from rich.panel import Panel

from deadline_executor.config.settings import Settings
from deadline_executor.exceptions import DeadlineExecutorError
from deadline_executor.interfaces.commands import Command, CommandKind, parse_command
from deadline_executor.interfaces.render import (
    render_added,
    render_error,
    render_help,
    render_report,
    render_state,
    render_undo,
)
from deadline_executor.observability.logger import get_logger
from deadline_executor.scheduler.executor import TaskExecutor

log = get_logger(__name__)


class CLIInterface:
    """
    Interactive command interpreter.

    dispatch() handles exactly one line and is what tests drive; run() is
    the blocking input loop around it.
    """

    def __init__(
        self,
        settings: Settings,
        executor: Optional[TaskExecutor] = None,
        console: Optional[Console] = None,
    ):
        self.settings = settings
        self.executor = executor or TaskExecutor.from_settings(settings)
        self.console = console or Console()

    # ── Loop ──────────────────────────────────────────────────────────────────

    def run(self) -> None:
        """Read and dispatch lines until EXIT, EOF or Ctrl+C."""
        self._print_banner()
        while True:
            try:
                line = self.console.input(self.settings.cli.prompt)
            except (EOFError, KeyboardInterrupt):
                self.console.print("\n[dim]👋 Goodbye![/]")
                break

            if not self.dispatch(line):
                break

    def _print_banner(self) -> None:
        self.console.print(
            Panel(
                "[bold]DEADLINE-AWARE TASK EXECUTOR[/]\n"
                "Earliest Deadline First (EDF) scheduler\n\n"
                "Type [bold]HELP[/] for commands. [bold]EXIT[/] or Ctrl+D to quit.",
                border_style="cyan",
                padding=(0, 2),
            )
        )

    # ── Command Dispatch ──────────────────────────────────────────────────────

    def dispatch(self, line: str) -> bool:
        """
        Handle one input line. Returns False when the interpreter should stop.

        Errors from parsing or from the executor are rendered, logged and
        swallowed so the loop keeps going.
        """
        try:
            command = parse_command(line)
            if command is None:
                return True
            if command.kind == CommandKind.EXIT:
                self.console.print("[dim]👋 Goodbye![/]")
                return False
            self._execute(command)
        except DeadlineExecutorError as e:
            log.info("cli.command_failed", line=line.strip(), error=str(e),
                     error_type=type(e).__name__)
            render_error(self.console, e)
        return True

    def _execute(self, command: Command) -> None:
        log.debug("cli.command", kind=command.kind.value)

        if command.kind == CommandKind.ADD_TASK:
            args = command.add_task
            task = self.executor.add_task(args.task_id, args.duration, args.deadline, args.value)
            render_added(self.console, task)

        elif command.kind == CommandKind.TICK:
            before = self.executor.current_time
            report = self.executor.tick()
            self.console.print(f"\n[bold]⏰ TICK[/] {before} → {report.current_time}")
            if self.settings.cli.show_state_after_tick:
                render_state(self.console, report)

        elif command.kind == CommandKind.RUN_ALL:
            report = self.executor.run_to_completion()
            self.console.print("[bold]🎯 All tasks processed.[/]")
            render_state(self.console, report)

        elif command.kind == CommandKind.REPORT:
            render_report(self.console, self.executor.report())

        elif command.kind == CommandKind.UNDO:
            render_undo(self.console, self.executor.undo())

        elif command.kind == CommandKind.HELP:
            render_help(self.console)


def run_cli(
    settings: Settings,
    log_,
    executor: Optional[TaskExecutor] = None,
    console: Optional[Console] = None,
) -> None:
    """
    Entry point called from main.py.

    Args:
        settings: Loaded settings.
        log_:     Application-level logger.
        executor: Executor to drive; built from settings when omitted.
        console:  Console to render to.
    """
    cli = CLIInterface(settings=settings, executor=executor, console=console)

    log_.info("cli.starting")
    try:
        cli.run()
    finally:
        log_.info("cli.stopped", **asdict(cli.executor.report().stats))
