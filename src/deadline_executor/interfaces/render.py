"""
interfaces/render.py — Rich Console Rendering

Turns executor results (ExecutionReport, UndoResult, Task) into rich
tables and panels. Pure presentation: nothing here touches the executor.
"""

from __future__ import annotations

from rich import box
from rich.console import Console
from rich.markdown import Markdown
from rich.panel import Panel
from rich.table import Table

from deadline_executor.scheduler.history import UndoOutcome, UndoResult
from deadline_executor.scheduler.report import ExecutionReport, ExecutorState, TaskView
from deadline_executor.scheduler.task import Task

HELP_TEXT = """
## Deadline Executor Commands

| Command | Description |
|---------|-------------|
| `ADD_TASK <id> <duration> <deadline> <value>` | Admit a task into the ready set |
| `TICK` | Advance time by one unit |
| `RUN_ALL` | Tick until no task is pending or running |
| `REPORT` | Show the current execution report |
| `UNDO` | Revert the most recent task selection |
| `HELP` | Show this help message |
| `EXIT` / `QUIT` / Ctrl+D | Leave the interpreter |

Tasks run Earliest-Deadline-First. A task that can no longer finish by its
deadline is expired when it comes up for selection.
"""

_STATE_COLOURS = {
    ExecutorState.IDLE: "yellow",
    ExecutorState.EXECUTING: "green",
    ExecutorState.DRAINED: "dim",
}

_UNDO_MESSAGES = {
    UndoOutcome.REVERTED: "[cyan]↩ UNDO:[/] reverted selection of [bold]{id}[/], back in the ready set",
    UndoOutcome.SUPERSEDED: "[yellow]↩ UNDO:[/] selection of [bold]{id}[/] is no longer live, nothing changed",
    UndoOutcome.NOTHING_TO_UNDO: "[dim]Nothing to undo.[/]",
}


def render_help(console: Console) -> None:
    console.print(Markdown(HELP_TEXT))


def render_added(console: Console, task: Task) -> None:
    console.print(
        f"[green]✅ ADDED:[/] Task [bold]{task.id}[/] | Duration: {task.duration} | "
        f"Deadline: {task.deadline} | Value: {task.value}"
    )


def render_error(console: Console, exc: Exception) -> None:
    console.print(f"[red]❌ Error:[/] {exc}")


def render_undo(console: Console, result: UndoResult) -> None:
    console.print(_UNDO_MESSAGES[result.outcome].format(id=result.task_id))


def render_state(console: Console, report: ExecutionReport) -> None:
    """One-line state summary printed after each tick."""
    colour = _STATE_COLOURS.get(report.state, "white")
    current = (
        f"{report.current.id} ({report.current.progress_summary})"
        if report.current else "None"
    )
    console.print(
        f"[bold]⏰ Time {report.current_time}[/]  ·  "
        f"State: [{colour}]{report.state.value}[/]  ·  "
        f"Current: [cyan]{current}[/]  ·  "
        f"Value: [green]{report.total_value}[/]  ·  "
        f"Pending: {len(report.pending)}  ·  "
        f"Completed: {len(report.completed)}  ·  "
        f"Expired: {len(report.expired)}"
    )


def _task_table(title: str, tasks: tuple[TaskView, ...], colour: str, show_value: bool) -> Table:
    table = Table(title=title, box=box.ROUNDED, border_style="dim", title_style=colour)
    table.add_column("Task", style="cyan bold", no_wrap=True)
    table.add_column("Duration", justify="right")
    table.add_column("Deadline", justify="right")
    if show_value:
        table.add_column("Value", justify="right")
    for t in tasks:
        row = [t.id, str(t.duration), str(t.deadline)]
        if show_value:
            row.append(str(t.value))
        table.add_row(*row)
    if not tasks:
        table.add_row("[dim]None[/]", "", "", *([""] if show_value else []))
    return table


def render_report(console: Console, report: ExecutionReport, title: str = "Execution Report") -> None:
    """Full report: headline panel, then completed / expired / pending tables."""
    colour = _STATE_COLOURS.get(report.state, "white")
    stats = report.stats
    console.print(
        Panel(
            f"⏰ Current time: [bold]{report.current_time}[/]\n"
            f"💰 Total value earned: [bold green]{report.total_value}[/]\n"
            f"State: [{colour}]{report.state.value}[/]  ·  "
            f"ticks {stats.ticks} (idle {stats.idle_ticks})  ·  "
            f"selections {stats.selections}  ·  undos {stats.undos}",
            title=f"📈 {title}",
            border_style="cyan",
            padding=(0, 2),
        )
    )
    console.print(_task_table(f"✅ Completed ({len(report.completed)})", report.completed, "green", True))
    console.print(_task_table(f"❌ Expired ({len(report.expired)})", report.expired, "red", False))
    console.print(_task_table(f"⏳ Pending ({len(report.pending)})", report.pending, "yellow", True))

    if report.current is not None:
        console.print(
            f"[bold]⚡ Currently executing:[/] [cyan]{report.current.id}[/], "
            f"progress {report.current.progress_summary}"
        )
