"""
scheduler/history.py — Selection Log for Undo

Every time the executor commits a task as current it appends a
SelectionRecord. undo() pops the newest record; only a record whose task is
still the live current task can be reverted, older ones are inert.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from deadline_executor.scheduler.task import Task


class UndoOutcome(str, Enum):
    REVERTED        = "reverted"
    SUPERSEDED      = "superseded"
    NOTHING_TO_UNDO = "nothing_to_undo"


@dataclass(frozen=True)
class SelectionRecord:
    """One selection event: which task became current, and when."""
    seq: int
    task: Task
    selected_at: int


@dataclass(frozen=True)
class UndoResult:
    outcome: UndoOutcome
    task_id: Optional[str] = None

    @property
    def reverted(self) -> bool:
        return self.outcome == UndoOutcome.REVERTED


class UndoHistory:
    """LIFO log of SelectionRecords."""

    def __init__(self) -> None:
        self._records: list[SelectionRecord] = []
        self._next_seq = 0

    def record(self, task: Task, selected_at: int) -> SelectionRecord:
        rec = SelectionRecord(seq=self._next_seq, task=task, selected_at=selected_at)
        self._next_seq += 1
        self._records.append(rec)
        return rec

    def pop(self) -> Optional[SelectionRecord]:
        """Remove and return the newest record, or None when empty."""
        if not self._records:
            return None
        return self._records.pop()

    def __len__(self) -> int:
        return len(self._records)

    def __bool__(self) -> bool:
        return bool(self._records)
