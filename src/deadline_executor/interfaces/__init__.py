"""
interfaces/ — Console Front Ends

    CLIInterface      Interactive ADD_TASK / TICK / RUN_ALL / REPORT / UNDO interpreter
    run_demo          Scripted run of the demo workload to completion
    run_presentation  Scripted step-by-step run of the demo workload
"""

from deadline_executor.interfaces.cli import CLIInterface, run_cli
from deadline_executor.interfaces.commands import Command, CommandKind, parse_command
from deadline_executor.interfaces.demo import run_demo, run_presentation

__all__ = [
    "CLIInterface",
    "run_cli",
    "Command",
    "CommandKind",
    "parse_command",
    "run_demo",
    "run_presentation",
]
