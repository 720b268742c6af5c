"""
scheduler/ — EDF Executor Core

Public API:
    from deadline_executor.scheduler import TaskExecutor, ExecutionReport

Component overview:
    Task            One admitted job (duration, deadline, value, progress)
    ReadySet        Min-heap of waiting tasks, earliest deadline first, FIFO on ties
    UndoHistory     LIFO log of selection events
    TaskExecutor    Clock + single execution slot + feasibility + undo
    ExecutionReport Immutable snapshot returned by tick/report/run_to_completion
"""

from deadline_executor.scheduler.executor import TaskExecutor
from deadline_executor.scheduler.history import SelectionRecord, UndoHistory, UndoOutcome, UndoResult
from deadline_executor.scheduler.ready_set import ReadySet
from deadline_executor.scheduler.report import (
    CurrentProgress,
    ExecutionReport,
    ExecutorState,
    ExecutorStats,
    TaskView,
)
from deadline_executor.scheduler.task import Task

__all__ = [
    "TaskExecutor",
    "Task",
    "ReadySet",
    "UndoHistory",
    "SelectionRecord",
    "UndoOutcome",
    "UndoResult",
    "ExecutionReport",
    "ExecutorState",
    "ExecutorStats",
    "CurrentProgress",
    "TaskView",
]
