"""
scheduler/task.py — Task Entity

One Task per admitted job. Created by TaskExecutor.add_task(), mutated only
by the executor (time_worked), and finally parked in the completed or
expired list.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(eq=False)
class Task:
    """
    A unit of work competing for the single execution slot.

    Identity matters: the undo log compares tasks with `is`, so eq is left
    as object identity.

    Attributes:
        id:            Unique task id.
        duration:      Time units required to finish (> 0).
        deadline:      Absolute time by which execution must complete (>= 0).
        value:         Reward credited on completion (>= 0).
        admission_seq: Admission order, the tie-break for equal deadlines.
        time_worked:   Units executed so far while current.
    """
    id: str
    duration: int
    deadline: int
    value: int = 0
    admission_seq: int = 0
    time_worked: int = field(default=0)

    def can_finish(self, current_time: int) -> bool:
        """Feasibility: starting now, the task ends on or before its deadline."""
        return current_time + self.duration <= self.deadline

    @property
    def is_finished(self) -> bool:
        return self.time_worked >= self.duration
