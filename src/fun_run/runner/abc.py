"""Process runner interface.

This module defines the abstract interface for running a Command to
completion, following the ABC-based dependency injection pattern so that
naming and classification can be tested without spawning processes.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import IO, TYPE_CHECKING, Any

if TYPE_CHECKING:
    from fun_run.command import Command


@dataclass(frozen=True)
class ProcessResult:
    """Raw result of a process that ran to completion.

    Attributes:
        returncode: Process return code (negative on POSIX when killed by a signal)
        stdout: Everything the process wrote to stdout
        stderr: Everything the process wrote to stderr
    """

    returncode: int | None
    stdout: bytes
    stderr: bytes


class ProcessRunner(ABC):
    """Abstract interface for blocking process execution.

    Implementations never inspect the return code: a process that ran to
    completion always produces a ProcessResult. Classification into success
    or failure happens afterwards in fun_run.classify.
    """

    @abstractmethod
    def capture(self, command: "Command") -> ProcessResult:
        """Run the command and collect its output without showing it.

        Args:
            command: Command to execute

        Returns:
            ProcessResult with the captured stdout and stderr

        Raises:
            OSError: If the process could not be started (missing executable,
                permission denied, ...)
        """
        ...

    @abstractmethod
    def stream(
        self, command: "Command", stdout_sink: IO[Any], stderr_sink: IO[Any]
    ) -> ProcessResult:
        """Run the command, copying output live to the sinks while buffering it.

        stdout bytes go only to stdout_sink and stderr bytes only to
        stderr_sink. Both streams are copied concurrently.

        Args:
            command: Command to execute
            stdout_sink: Writer receiving stdout as it is produced
            stderr_sink: Writer receiving stderr as it is produced

        Returns:
            ProcessResult with every byte that was streamed

        Raises:
            OSError: If the process could not be started or a copy failed
        """
        ...
