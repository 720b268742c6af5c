"""
tests/unit/test_undo.py — Undo Semantics

Covers:
  - Empty log → NOTHING_TO_UNDO, no state change
  - Undo of the live selection: progress reset, task back in the ready set,
    executor IDLE, clock not rolled back
  - Undo right after selection restores the pre-selection ready set
  - Stale entries (completed / already undone) are consumed as SUPERSEDED
  - Completed and expired lists are never touched
  - Re-selection after undo is logged again
  - Undo can push a task past its feasibility window
  - UndoHistory in isolation
"""

from __future__ import annotations

from deadline_executor.scheduler.executor import TaskExecutor
from deadline_executor.scheduler.history import UndoHistory, UndoOutcome
from deadline_executor.scheduler.report import ExecutorState
from deadline_executor.scheduler.task import Task


# ── Helpers ───────────────────────────────────────────────────────────────────

def _make_executor(*tasks: tuple) -> TaskExecutor:
    ex = TaskExecutor()
    for t in tasks:
        ex.add_task(*t)
    return ex


# ─────────────────────────────────────────────────────────────────────────────
# Executor undo
# ─────────────────────────────────────────────────────────────────────────────

class TestUndo:

    def test_nothing_to_undo_on_fresh_executor(self):
        ex = _make_executor(("A", 1, 5, 1))
        before = ex.report()
        result = ex.undo()
        assert result.outcome == UndoOutcome.NOTHING_TO_UNDO
        assert result.task_id is None
        assert not result.reverted
        assert ex.report() == before

    def test_undo_live_selection(self):
        ex = _make_executor(("T1", 3, 5, 100))
        ex.tick()
        result = ex.undo()

        assert result.outcome == UndoOutcome.REVERTED
        assert result.task_id == "T1"
        report = ex.report()
        assert report.state == ExecutorState.IDLE
        assert report.current is None
        assert report.pending_ids == ["T1"]
        assert report.pending[0].time_worked == 0
        assert report.current_time == 1

    def test_undo_restores_pre_selection_ready_set(self):
        ex = _make_executor(("A", 2, 9, 1), ("B", 2, 4, 1), ("C", 1, 9, 1))
        before = ex.report().pending
        ex.tick()
        assert ex.current_task.id == "B"
        ex.undo()
        assert ex.report().pending == before

    def test_second_undo_after_revert_finds_nothing(self):
        ex = _make_executor(("A", 3, 5, 1))
        ex.tick()
        assert ex.undo().outcome == UndoOutcome.REVERTED
        assert ex.undo().outcome == UndoOutcome.NOTHING_TO_UNDO

    def test_undo_after_completion_is_superseded(self):
        ex = _make_executor(("A", 1, 5, 10))
        ex.tick()
        result = ex.undo()
        assert result.outcome == UndoOutcome.SUPERSEDED
        assert result.task_id == "A"
        report = ex.report()
        assert report.completed_ids == ["A"]
        assert report.total_value == 10
        assert report.pending == ()

    def test_undo_walks_back_through_log(self):
        # A completes and B is selected in the same tick: log is [A, B].
        ex = _make_executor(("A", 1, 5, 1), ("B", 2, 5, 1))
        ex.tick()
        assert ex.undo_depth == 2

        first = ex.undo()
        assert first.outcome == UndoOutcome.REVERTED
        assert first.task_id == "B"

        second = ex.undo()
        assert second.outcome == UndoOutcome.SUPERSEDED
        assert second.task_id == "A"
        assert ex.report().completed_ids == ["A"]

        assert ex.undo().outcome == UndoOutcome.NOTHING_TO_UNDO

    def test_undo_never_touches_expired(self):
        ex = _make_executor(("X", 5, 1, 1), ("A", 2, 10, 1))
        ex.tick()
        assert ex.report().expired_ids == ["X"]
        ex.undo()
        report = ex.report()
        assert report.expired_ids == ["X"]
        assert "X" not in report.pending_ids

    def test_reselection_after_undo_is_logged_again(self):
        ex = _make_executor(("A", 3, 9, 1))
        ex.tick()
        ex.undo()
        ex.tick()
        assert ex.current_task.id == "A"
        assert ex.current_task.time_worked == 1
        assert ex.undo_depth == 1
        assert ex.report().stats.selections == 2

    def test_run_after_undo_completes_task(self):
        ex = _make_executor(("A", 3, 5, 100))
        ex.tick()
        ex.undo()
        report = ex.run_to_completion()
        assert report.completed_ids == ["A"]
        assert report.total_value == 100
        assert report.current_time == 4

    def test_undo_can_make_task_infeasible(self):
        ex = _make_executor(("A", 3, 4, 1))
        ex.tick()
        ex.tick()
        ex.undo()
        report = ex.tick()
        assert report.expired_ids == ["A"]
        assert report.completed_ids == []

    def test_undo_counter(self):
        ex = _make_executor(("A", 3, 9, 1))
        ex.undo()
        ex.tick()
        ex.undo()
        assert ex.report().stats.undos == 1


# ─────────────────────────────────────────────────────────────────────────────
# UndoHistory
# ─────────────────────────────────────────────────────────────────────────────

class TestUndoHistory:

    def test_lifo_order_and_sequence_numbers(self):
        h = UndoHistory()
        a = Task(id="a", duration=1, deadline=1)
        b = Task(id="b", duration=1, deadline=1)
        h.record(a, selected_at=0)
        h.record(b, selected_at=3)
        assert len(h) == 2

        rec = h.pop()
        assert rec.task is b
        assert rec.seq == 1
        assert rec.selected_at == 3
        assert h.pop().task is a
        assert h.pop() is None
        assert not h

    def test_records_keep_identity(self):
        h = UndoHistory()
        t = Task(id="x", duration=2, deadline=5)
        h.record(t, selected_at=0)
        t.time_worked = 1
        rec = h.pop()
        assert rec.task is t
        assert rec.task.time_worked == 1
