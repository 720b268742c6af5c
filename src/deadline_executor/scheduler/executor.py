"""
scheduler/executor.py — EDF Task Executor

Single-slot, deadline-aware executor over a discrete logical clock.

Each tick:
  1. If nothing is current, pull candidates from the ready set in
     earliest-deadline order. A candidate that can still finish by its
     deadline (now + duration <= deadline) becomes current; one that cannot
     is moved to the expired list for good and the next candidate is tried.
  2. The current task (if any) is worked one unit. When it reaches its
     duration it completes, its value is credited, and the next task is
     selected immediately, inside the same tick and before the clock
     moves.
  3. The clock advances by exactly one.

undo() reverts the most recent selection while that task is still current:
its progress is discarded and it goes back into the ready set. Completions
and expirations are never reverted, and the clock never rolls back.

All public methods take one re-entrant lock, so a shared executor processes
one logical operation at a time.
"""

from __future__ import annotations

import threading
from typing import Any, Optional

from deadline_executor.exceptions import DuplicateTaskError, InvalidTaskError
from deadline_executor.observability.logger import get_logger
from deadline_executor.scheduler.history import UndoHistory, UndoOutcome, UndoResult
from deadline_executor.scheduler.ready_set import ReadySet
from deadline_executor.scheduler.report import (
    CurrentProgress,
    ExecutionReport,
    ExecutorState,
    ExecutorStats,
    TaskView,
)
from deadline_executor.scheduler.task import Task

log = get_logger(__name__)


class TaskExecutor:
    """
    Earliest-Deadline-First executor with one-step undo.

    Usage:
        ex = TaskExecutor()
        ex.add_task("T1", duration=3, deadline=5, value=100)
        ex.add_task("T2", duration=2, deadline=4, value=80)
        final = ex.run_to_completion()
        final.completed_ids   # ["T2", "T1"]
    """

    def __init__(self, start_time: int = 0):
        if start_time < 0:
            raise ValueError("start_time must be >= 0")

        self._ready = ReadySet()
        self._history = UndoHistory()
        self._completed: list[Task] = []
        self._expired: list[Task] = []
        self._current: Optional[Task] = None

        self._current_time = start_time
        self._total_value = 0
        self._admissions = 0
        self._known_ids: set[str] = set()
        self._stats = ExecutorStats()

        self._lock = threading.RLock()

    # ── Read-only state ───────────────────────────────────────────────────────

    @property
    def current_time(self) -> int:
        return self._current_time

    @property
    def total_value(self) -> int:
        return self._total_value

    @property
    def current_task(self) -> Optional[Task]:
        return self._current

    @property
    def state(self) -> ExecutorState:
        if self._current is not None:
            return ExecutorState.EXECUTING
        if not self._ready:
            return ExecutorState.DRAINED
        return ExecutorState.IDLE

    @property
    def pending_count(self) -> int:
        return len(self._ready)

    @property
    def undo_depth(self) -> int:
        return len(self._history)

    def has_task(self, task_id: str) -> bool:
        return task_id in self._known_ids

    # ── Admission ─────────────────────────────────────────────────────────────

    def add_task(self, task_id: str, duration: int, deadline: int, value: int = 0) -> Task:
        """
        Admit a task into the ready set.

        Raises:
            DuplicateTaskError: the id was admitted before (in any set).
            InvalidTaskError:   blank id, a non-int (or bool) number, duration <= 0,
                                deadline < 0 or value < 0.

        The executor is unchanged when either error is raised.
        """
        with self._lock:
            reason = _validate(task_id, duration, deadline, value)
            if reason is not None:
                log.warning("executor.task_rejected", id=task_id, reason=reason)
                raise InvalidTaskError(task_id, reason)
            if task_id in self._known_ids:
                log.warning("executor.task_rejected", id=task_id, reason="duplicate")
                raise DuplicateTaskError(task_id)

            task = Task(
                id=task_id,
                duration=duration,
                deadline=deadline,
                value=value,
                admission_seq=self._admissions,
            )
            self._admissions += 1
            self._known_ids.add(task_id)
            self._ready.push(task)

            log.info("executor.task_added",
                     id=task_id, duration=duration, deadline=deadline, value=value,
                     at=self._current_time)
            return task

    # ── Time ──────────────────────────────────────────────────────────────────

    def tick(self) -> ExecutionReport:
        """Advance the clock by one unit. Returns the state after the step."""
        with self._lock:
            self._tick()
            return self._build_report()

    def run_to_completion(self) -> ExecutionReport:
        """
        Tick until the ready set is empty and nothing is current.

        Terminates: every tick either works the current task one unit or
        permanently expires at least one candidate, and no new work arrives
        while this call holds the lock.
        """
        with self._lock:
            start = self._current_time
            log.info("executor.run_to_completion.start",
                     at=start, pending=len(self._ready),
                     current=self._current.id if self._current else None)

            while self._ready or self._current is not None:
                self._tick()

            log.info("executor.run_to_completion.done",
                     at=self._current_time, ticks=self._current_time - start,
                     total_value=self._total_value)
            return self._build_report()

    # ── Undo ──────────────────────────────────────────────────────────────────

    def undo(self) -> UndoResult:
        """
        Revert the most recent selection.

        Returns an UndoResult:
          REVERTED:        the newest selection was still current; it is back
                            in the ready set with time_worked reset to 0.
          SUPERSEDED:      the newest selection already completed or was
                            already undone; the log entry is consumed, nothing else changes.
          NOTHING_TO_UNDO: the log is empty.
        """
        with self._lock:
            record = self._history.pop()
            if record is None:
                log.info("executor.undo", outcome=UndoOutcome.NOTHING_TO_UNDO.value)
                return UndoResult(UndoOutcome.NOTHING_TO_UNDO)

            self._stats.undos += 1

            if self._current is None or record.task is not self._current:
                log.info("executor.undo",
                         outcome=UndoOutcome.SUPERSEDED.value, id=record.task.id,
                         selected_at=record.selected_at)
                return UndoResult(UndoOutcome.SUPERSEDED, record.task.id)

            task = self._current
            lost = task.time_worked
            task.time_worked = 0
            self._current = None
            self._ready.push(task)

            log.info("executor.undo",
                     outcome=UndoOutcome.REVERTED.value, id=task.id,
                     selected_at=record.selected_at, discarded_work=lost,
                     at=self._current_time)
            return UndoResult(UndoOutcome.REVERTED, task.id)

    # ── Reporting ─────────────────────────────────────────────────────────────

    def report(self) -> ExecutionReport:
        """Pure snapshot of the executor. Never mutates state."""
        with self._lock:
            return self._build_report()

    # ── Internals ─────────────────────────────────────────────────────────────

    def _tick(self) -> None:
        if self._current is None:
            self._select_next()

        task = self._current
        if task is not None:
            task.time_worked += 1
            log.debug("executor.tick",
                      at=self._current_time, id=task.id,
                      progress=f"{task.time_worked}/{task.duration}")
            if task.is_finished:
                self._complete_current()
        else:
            self._stats.idle_ticks += 1
            log.debug("executor.idle", at=self._current_time)

        self._current_time += 1
        self._stats.ticks += 1

    def _select_next(self) -> None:
        """Commit the earliest-deadline feasible candidate, expiring the rest on the way."""
        while self._ready:
            candidate = self._ready.pop()
            if candidate.can_finish(self._current_time):
                self._current = candidate
                self._history.record(candidate, self._current_time)
                self._stats.selections += 1
                log.info("executor.task_selected",
                         id=candidate.id, at=self._current_time,
                         deadline=candidate.deadline, duration=candidate.duration)
                return

            self._expired.append(candidate)
            self._stats.expirations += 1
            log.info("executor.task_expired",
                     id=candidate.id, at=self._current_time,
                     finish_at=self._current_time + candidate.duration,
                     deadline=candidate.deadline)

        self._current = None
        log.debug("executor.drained", at=self._current_time)

    def _complete_current(self) -> None:
        task = self._current
        self._completed.append(task)
        self._total_value += task.value
        self._current = None
        self._stats.completions += 1

        log.info("executor.task_completed",
                 id=task.id, at=self._current_time, value=task.value,
                 total_value=self._total_value)

        if self._ready:
            self._select_next()

    def _build_report(self) -> ExecutionReport:
        current = None
        if self._current is not None:
            current = CurrentProgress(
                id=self._current.id,
                time_worked=self._current.time_worked,
                duration=self._current.duration,
            )
        return ExecutionReport(
            current_time=self._current_time,
            total_value=self._total_value,
            state=self.state,
            completed=tuple(TaskView.of(t) for t in self._completed),
            expired=tuple(TaskView.of(t) for t in self._expired),
            pending=tuple(TaskView.of(t) for t in self._ready.snapshot()),
            current=current,
            stats=self._stats.copy(),
        )

    # ── Factory ───────────────────────────────────────────────────────────────

    @classmethod
    def from_settings(cls, settings: Any) -> "TaskExecutor":
        """Create a TaskExecutor from deadline executor Settings."""
        return cls(start_time=settings.executor.start_time)


def _is_int(x: Any) -> bool:
    return isinstance(x, int) and not isinstance(x, bool)


def _validate(task_id: str, duration: int, deadline: int, value: int) -> Optional[str]:
    """Return the first problem with the task parameters, or None."""
    if not isinstance(task_id, str) or not task_id.strip():
        return "id must be a non-empty string"
    for name, number in (("duration", duration), ("deadline", deadline), ("value", value)):
        if not _is_int(number):
            return f"{name} must be an integer, got {number!r}"
    if duration <= 0:
        return f"duration must be > 0, got {duration}"
    if deadline < 0:
        return f"deadline must be >= 0, got {deadline}"
    if value < 0:
        return f"value must be >= 0, got {value}"
    return None
