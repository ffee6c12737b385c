"""Output of a completed command, paired with the command's display name."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ExitStatus:
    """Exit status of a completed process.

    Attributes:
        code: Exit code, or None if the process did not exit normally
            (for example it was terminated by a signal)
        signal: Signal number that terminated the process, if any
    """

    code: int | None
    signal: int | None = None

    @classmethod
    def from_returncode(cls, returncode: int | None) -> "ExitStatus":
        """Build an ExitStatus from a subprocess returncode.

        On POSIX a negative returncode -N means the child was terminated by
        signal N, so there is no exit code.
        """
        if returncode is None:
            return cls(code=None)
        if returncode < 0:
            return cls(code=None, signal=-returncode)
        return cls(code=returncode)

    @classmethod
    def unknown(cls) -> "ExitStatus":
        return cls(code=None)

    @property
    def success(self) -> bool:
        return self.code == 0

    def __str__(self) -> str:
        if self.code is not None:
            return f"exit status: {self.code}"
        if self.signal is not None:
            return f"signal: {self.signal}"
        return "exit status: unknown"


@dataclass(frozen=True)
class NamedOutput:
    """Output of a command's execution along with its display name.

    A NamedOutput is not an error: it exists for every process that ran to
    completion, whatever its exit status. Use nonzero_captured() or
    nonzero_streamed() to turn a failed status into a CmdError.

    Attributes:
        name: Display name of the command that was run
        status: Exit status of the process
        stdout: Raw bytes written to stdout
        stderr: Raw bytes written to stderr
    """

    name: str
    status: ExitStatus
    stdout: bytes = b""
    stderr: bytes = b""

    def stdout_lossy(self) -> str:
        """Return stdout decoded as UTF-8, replacing invalid bytes."""
        return self.stdout.decode("utf-8", errors="replace")

    def stderr_lossy(self) -> str:
        """Return stderr decoded as UTF-8, replacing invalid bytes."""
        return self.stderr.decode("utf-8", errors="replace")

    def nonzero_captured(self) -> "NamedOutput":
        """Check status and raise if nonzero, showing output in the error.

        Use when the output has not been shown to the user yet, so the error
        display includes stdout and stderr.

        Returns:
            self when the status is zero

        Raises:
            CmdError: NON_ZERO_EXIT_NOT_STREAMED if the status is not zero
        """
        # Import here to avoid circular dependency
        from fun_run.classify import nonzero_captured

        return nonzero_captured(self.name, self)

    def nonzero_streamed(self) -> "NamedOutput":
        """Check status and raise if nonzero, hiding output in the error.

        Use when the output was already streamed to the user, so the error
        display does not repeat it.

        Returns:
            self when the status is zero

        Raises:
            CmdError: NON_ZERO_EXIT_ALREADY_STREAMED if the status is not zero
        """
        # Import here to avoid circular dependency
        from fun_run.classify import nonzero_streamed

        return nonzero_streamed(self.name, self)
