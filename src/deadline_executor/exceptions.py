"""
exceptions.py — Deadline Executor Error Hierarchy

All project-specific exceptions live here. The core raises typed subclasses
of DeadlineExecutorError, never bare Exception.

Import from here, not from individual modules:
    from deadline_executor.exceptions import DuplicateTaskError, InvalidTaskError

Hierarchy:
    DeadlineExecutorError
    ├── TaskError
    │   ├── DuplicateTaskError
    │   └── InvalidTaskError
    └── CommandError

Both TaskError subclasses are raised by TaskExecutor.add_task() before any
state is touched, so catching them never leaves the executor half-updated.
"Nothing to undo" is not an error; see scheduler.history.UndoOutcome.
"""

from __future__ import annotations


# ─────────────────────────────────────────────────────────────────────────────
# Root
# ─────────────────────────────────────────────────────────────────────────────

class DeadlineExecutorError(Exception):
    """Base class for all deadline executor exceptions."""


# ─────────────────────────────────────────────────────────────────────────────
# Task admission
# ─────────────────────────────────────────────────────────────────────────────

class TaskError(DeadlineExecutorError):
    """Base for task admission errors."""

    def __init__(self, task_id: str, message: str):
        super().__init__(message)
        self.task_id = task_id


class DuplicateTaskError(TaskError):
    """A task with the same id was already admitted (ready, current, completed or expired)."""

    def __init__(self, task_id: str):
        super().__init__(task_id, f"Task '{task_id}' already exists")


class InvalidTaskError(TaskError):
    """Task parameters are out of range (non-positive duration, negative deadline/value, blank id)."""

    def __init__(self, task_id: str, reason: str):
        super().__init__(task_id, f"Invalid task '{task_id}': {reason}")
        self.reason = reason


# ─────────────────────────────────────────────────────────────────────────────
# Command interpreter
# ─────────────────────────────────────────────────────────────────────────────

class CommandError(DeadlineExecutorError):
    """A command line could not be parsed (unknown verb, wrong arity, bad integer)."""
