"""
interfaces/demo.py — Scripted Demo Runs

Two non-interactive drivers over the configured demo workload
(settings.demo.tasks, T1/T2/T3 by default):

  run_demo          add tasks → initial report → run to completion → final report
  run_presentation  add tasks → initial report → N single ticks, pausing between
                    steps → final report
"""

from __future__ import annotations

from typing import Callable, Optional

from rich.console import Console

from deadline_executor.config.settings import Settings
from deadline_executor.interfaces.render import render_added, render_report, render_state
from deadline_executor.observability.logger import get_logger
from deadline_executor.scheduler.executor import TaskExecutor
from deadline_executor.scheduler.report import ExecutionReport

log = get_logger(__name__)

PauseFn = Callable[[], None]


def _load_demo_tasks(executor: TaskExecutor, settings: Settings, console: Console) -> None:
    console.print("\n[bold]📥 Adding demo tasks...[/]")
    for demo_task in settings.demo.tasks:
        task = executor.add_task(demo_task.id, demo_task.duration, demo_task.deadline, demo_task.value)
        render_added(console, task)


def run_demo(executor: TaskExecutor, settings: Settings, console: Console) -> ExecutionReport:
    """Run the demo workload to completion. Returns the final report."""
    log.info("demo.start", tasks=len(settings.demo.tasks))

    _load_demo_tasks(executor, settings, console)
    render_report(console, executor.report(), title="Initial Report")

    console.print("\n[bold]🚀 Running simulation...[/]")
    final = executor.run_to_completion()
    render_report(console, final, title="Final Report")

    log.info("demo.done", total_value=final.total_value, at=final.current_time)
    return final


def run_presentation(
    executor: TaskExecutor,
    settings: Settings,
    console: Console,
    pause: Optional[PauseFn] = None,
) -> ExecutionReport:
    """
    Step through the demo workload one tick at a time.

    Args:
        pause: Called between steps. Defaults to waiting for Enter on the console.
    """
    if pause is None:
        def pause() -> None:
            try:
                console.input("[dim]Press Enter to continue...[/]")
            except EOFError:
                pass

    steps = settings.demo.presentation_ticks
    log.info("presentation.start", tasks=len(settings.demo.tasks), steps=steps)

    _load_demo_tasks(executor, settings, console)
    render_report(console, executor.report(), title="Initial State")
    pause()

    console.print("\n[bold]🚀 Simulation step by step[/]")
    for _ in range(steps):
        report = executor.tick()
        render_state(console, report)
        pause()

    final = executor.report()
    render_report(console, final, title="Final Results")

    log.info("presentation.done", total_value=final.total_value, at=final.current_time)
    return final
