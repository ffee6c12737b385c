"""Diagnostics for commands that could not be run.

A SYSTEM_ERROR means the command could not be started at all, which usually
means a typo in the program name or a problem with the system, such as an
empty PATH. map_which_problem() simulates `which <program>` against a given
PATH and appends what it found (missing directories, similarly named
executables, permission problems) to the error.

The report may reveal details about the system, such as PATH contents and
directory listings. Consider who will see the output before enabling it for
untrusted input.
"""

import difflib
import logging
import os
import shutil
from pathlib import Path

from fun_run.command import Command
from fun_run.errors import CmdError, CmdErrorKind

logger = logging.getLogger(__name__)

MAX_SUGGESTIONS = 3


class AnnotatedOSError(OSError):
    """An OSError that displays extra diagnostic text after the original message."""

    def __init__(self, source: OSError, annotation: str) -> None:
        super().__init__(source.errno, source.strerror, source.filename)
        self.source = source
        self.annotation = annotation
        self.__cause__ = source

    def __str__(self) -> str:
        return f"{self.source}\n{self.annotation}"


def _executables_in(directory: Path) -> list[str]:
    names: list[str] = []
    for entry in sorted(directory.iterdir()):
        if entry.is_file() and os.access(entry, os.X_OK):
            names.append(entry.name)
    return names


def _diagnose_path_program(program: str, cwd: Path | None) -> list[str]:
    candidate = Path(program)
    if not candidate.is_absolute() and cwd is not None:
        candidate = cwd / candidate

    if not candidate.exists():
        if candidate.is_symlink():
            target = os.readlink(candidate)
            return [f"Program `{program}` is a broken symlink: {candidate} -> {target}"]
        return [f"Program `{program}` does not exist: {candidate}"]
    if candidate.is_dir():
        return [f"Program `{program}` is a directory: {candidate}"]
    if not os.access(candidate, os.X_OK):
        return [f"Program `{program}` is not executable: {candidate}"]
    return [f"Program `{program}` found at {candidate}"]


def diagnose_program(program: str, path_env: str | None, cwd: Path | None = None) -> str:
    """Explain why `program` might not be runnable with the given PATH.

    Args:
        program: Program name or path, as passed to the OS
        path_env: PATH value to search, None when PATH is unset
        cwd: Working directory the command would run in

    Returns:
        Multi-line diagnostic report

    Raises:
        OSError: If the filesystem could not be inspected
    """
    if os.sep in program or (os.altsep is not None and os.altsep in program):
        return "\n".join(_diagnose_path_program(program, cwd))

    lines: list[str] = []
    if not path_env:
        lines.append("PATH is empty or not set, the program cannot be found")
        return "\n".join(lines)

    found = shutil.which(program, path=path_env)
    if found is not None:
        lines.append(f"Program `{program}` found on PATH at {found}")

    available: list[str] = []
    for entry in path_env.split(os.pathsep):
        if not entry:
            continue
        directory = Path(entry)
        if not directory.exists():
            lines.append(f"PATH entry does not exist: {entry}")
            continue
        if not directory.is_dir():
            lines.append(f"PATH entry is not a directory: {entry}")
            continue
        try:
            available.extend(_executables_in(directory))
        except PermissionError:
            lines.append(f"PATH entry cannot be read: {entry}")

    if found is None:
        lines.append(f"Program `{program}` not found on PATH")
        suggestions = difflib.get_close_matches(program, sorted(set(available)), n=MAX_SUGGESTIONS)
        if suggestions:
            lines.append("Did you mean: " + ", ".join(f"`{name}`" for name in suggestions))

    return "\n".join(lines)


def map_which_problem(error: CmdError, command: Command, path_env: str | None) -> CmdError:
    """Add PATH diagnostics to a SYSTEM_ERROR; other errors are returned unchanged.

    Example:
        try:
            cmd.named_output()
        except CmdError as e:
            raise map_which_problem(e, cmd.mut_cmd(), os.environ.get("PATH")) from e
    """
    if error.kind is not CmdErrorKind.SYSTEM_ERROR:
        return error

    assert error.error is not None
    cwd = Path(command.cwd) if command.cwd is not None else None
    try:
        details = diagnose_program(command.program, path_env, cwd)
        annotation = f"\nSystem diagnostic information:\n\n{details}"
    except OSError as e:
        logger.debug("Diagnostics for `%s` failed: %s", command.program, e)
        annotation = f"\nInternal error while gathering diagnostic information:\n\n{e}"

    annotated = AnnotatedOSError(error.error, annotation)
    return CmdError.system_error(error.name, annotated)
