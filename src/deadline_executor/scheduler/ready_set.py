"""
scheduler/ready_set.py — EDF Ready Set

Min-heap of admitted-but-not-dispatched tasks keyed by
(deadline, admission_seq). heapq has no stability guarantee of its own, so
the admission sequence stored on each Task breaks deadline ties FIFO.

Usage:
    ready = ReadySet()
    ready.push(task)
    nxt = ready.pop()          # earliest deadline, earliest admission
"""

from __future__ import annotations

import heapq
from typing import Optional

from deadline_executor.scheduler.task import Task


class ReadySet:
    """
    Priority container for tasks waiting for the execution slot.

    Not thread-safe on its own; TaskExecutor serialises access.
    """

    def __init__(self) -> None:
        self._heap: list[tuple[int, int, Task]] = []
        self._ids: set[str] = set()

    def push(self, task: Task) -> None:
        """Insert a task. O(log n). Raises ValueError on a duplicate id."""
        if task.id in self._ids:
            raise ValueError(f"Task '{task.id}' is already in the ready set")
        heapq.heappush(self._heap, (task.deadline, task.admission_seq, task))
        self._ids.add(task.id)

    def peek(self) -> Optional[Task]:
        """Return the minimum-deadline task without removing it, or None."""
        if not self._heap:
            return None
        return self._heap[0][2]

    def pop(self) -> Task:
        """Remove and return the minimum-deadline task. Raises IndexError when empty."""
        if not self._heap:
            raise IndexError("pop from an empty ready set")
        _, _, task = heapq.heappop(self._heap)
        self._ids.discard(task.id)
        return task

    def snapshot(self) -> list[Task]:
        """Tasks sorted by (deadline, admission_seq). The heap is left untouched."""
        return [entry[2] for entry in sorted(self._heap, key=lambda e: (e[0], e[1]))]

    def __len__(self) -> int:
        return len(self._heap)

    def __bool__(self) -> bool:
        return bool(self._heap)

    def __contains__(self, task_id: object) -> bool:
        return task_id in self._ids
