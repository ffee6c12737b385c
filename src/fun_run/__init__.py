"""Run subprocesses with readable names and errors worth reading."""

from fun_run.classify import classify, nonzero_captured, nonzero_streamed, on_system_error
from fun_run.command import Command, CommandWithName, NamedCommand
from fun_run.diagnostics import map_which_problem
from fun_run.errors import CmdError, CmdErrorKind
from fun_run.naming import display, display_with_env_keys
from fun_run.output import ExitStatus, NamedOutput
from fun_run.runner import ProcessResult, ProcessRunner, RealProcessRunner

__version__ = "0.1.0"

__all__ = [
    # Commands
    "Command",
    "CommandWithName",
    "NamedCommand",
    # Naming
    "display",
    "display_with_env_keys",
    # Output
    "ExitStatus",
    "NamedOutput",
    # Errors
    "CmdError",
    "CmdErrorKind",
    # Classification
    "classify",
    "nonzero_captured",
    "nonzero_streamed",
    "on_system_error",
    # Runners
    "ProcessResult",
    "ProcessRunner",
    "RealProcessRunner",
    # Diagnostics
    "map_which_problem",
]
