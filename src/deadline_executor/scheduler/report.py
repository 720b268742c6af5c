"""
scheduler/report.py — Read-only Executor Snapshots

Immutable views handed out by TaskExecutor.report() / tick() /
run_to_completion(). Nothing here references live Task objects, so a report
stays valid after the executor moves on.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Optional

from deadline_executor.scheduler.task import Task


class ExecutorState(str, Enum):
    IDLE      = "idle"
    EXECUTING = "executing"
    DRAINED   = "drained"


@dataclass(frozen=True)
class TaskView:
    id: str
    duration: int
    deadline: int
    value: int
    time_worked: int

    @classmethod
    def of(cls, task: Task) -> "TaskView":
        return cls(
            id=task.id,
            duration=task.duration,
            deadline=task.deadline,
            value=task.value,
            time_worked=task.time_worked,
        )


@dataclass(frozen=True)
class CurrentProgress:
    id: str
    time_worked: int
    duration: int

    @property
    def progress_summary(self) -> str:
        return f"{self.time_worked}/{self.duration}"


@dataclass
class ExecutorStats:
    """Running counters kept by the executor. Copied into every report."""
    ticks: int = 0
    idle_ticks: int = 0
    selections: int = 0
    completions: int = 0
    expirations: int = 0
    undos: int = 0

    def copy(self) -> "ExecutorStats":
        return ExecutorStats(**asdict(self))


@dataclass(frozen=True)
class ExecutionReport:
    """
    Aggregate view of the executor at one instant.

    completed and expired are in insertion order; pending is sorted by
    (deadline, admission order) for display.
    """
    current_time: int
    total_value: int
    state: ExecutorState
    completed: tuple[TaskView, ...] = ()
    expired: tuple[TaskView, ...] = ()
    pending: tuple[TaskView, ...] = ()
    current: Optional[CurrentProgress] = None
    stats: ExecutorStats = field(default_factory=ExecutorStats)

    @property
    def completed_ids(self) -> list[str]:
        return [t.id for t in self.completed]

    @property
    def expired_ids(self) -> list[str]:
        return [t.id for t in self.expired]

    @property
    def pending_ids(self) -> list[str]:
        return [t.id for t in self.pending]

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["state"] = self.state.value
        return data
