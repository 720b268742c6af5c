"""
deadline_executor — Earliest-Deadline-First task executor with undo.

    from deadline_executor.scheduler import TaskExecutor
"""

__version__ = "1.0.0"
