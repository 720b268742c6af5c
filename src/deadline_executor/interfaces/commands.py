"""
interfaces/commands.py — Command Line Grammar

Parses one line of interpreter input into a Command. No executor access
here; dispatch lives in interfaces/cli.py.

Grammar (verbs are case-insensitive, fields separated by whitespace):
    ADD_TASK <id> <duration> <deadline> <value>
    TICK
    RUN_ALL
    REPORT
    UNDO
    HELP
    EXIT | QUIT
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from deadline_executor.exceptions import CommandError


class CommandKind(str, Enum):
    ADD_TASK = "ADD_TASK"
    TICK     = "TICK"
    RUN_ALL  = "RUN_ALL"
    REPORT   = "REPORT"
    UNDO     = "UNDO"
    HELP     = "HELP"
    EXIT     = "EXIT"


_ALIASES = {
    "QUIT": CommandKind.EXIT,
}

_ADD_TASK_USAGE = "ADD_TASK <id> <duration> <deadline> <value>"


@dataclass(frozen=True)
class AddTaskArgs:
    task_id: str
    duration: int
    deadline: int
    value: int


@dataclass(frozen=True)
class Command:
    kind: CommandKind
    add_task: Optional[AddTaskArgs] = None


def parse_command(line: str) -> Optional[Command]:
    """
    Parse a single input line.

    Returns None for blank lines. Raises CommandError for unknown verbs,
    wrong argument counts and non-integer numeric fields.
    """
    parts = line.split()
    if not parts:
        return None

    verb = parts[0].upper()
    kind = _ALIASES.get(verb)
    if kind is None:
        try:
            kind = CommandKind(verb)
        except ValueError:
            raise CommandError(f"Unknown command: {parts[0]}") from None

    args = parts[1:]

    if kind == CommandKind.ADD_TASK:
        if len(args) != 4:
            raise CommandError(f"Wrong format. Usage: {_ADD_TASK_USAGE}")
        task_id = args[0]
        duration = _parse_int("duration", args[1])
        deadline = _parse_int("deadline", args[2])
        value = _parse_int("value", args[3])
        return Command(kind, AddTaskArgs(task_id, duration, deadline, value))

    if args:
        raise CommandError(f"{kind.value} takes no arguments")
    return Command(kind)


def _parse_int(field: str, raw: str) -> int:
    try:
        return int(raw)
    except ValueError:
        raise CommandError(f"{field} must be an integer, got '{raw}'") from None
