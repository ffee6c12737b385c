"""Fake implementation of ProcessRunner for testing.

This fake enables testing naming, classification and the CLI without
spawning real processes.
"""

from typing import IO, Any

from fun_run.command import Command
from fun_run.runner.abc import ProcessResult, ProcessRunner


class FakeProcessRunner(ProcessRunner):
    """In-memory fake implementation of process execution.

    Constructor Injection:
    - All state is provided via constructor parameters
    - Calls are recorded for assertions

    In stream mode the configured stdout/stderr are written to the sinks
    before being returned, like a real process would.

    Examples:
        # Process that fails with output
        >>> runner = FakeProcessRunner(returncode=1, stdout=b"out", stderr=b"err")

        # Program that cannot be started
        >>> runner = FakeProcessRunner(
        ...     system_error=FileNotFoundError(2, "No such file or directory", "becho")
        ... )
    """

    def __init__(
        self,
        *,
        returncode: int | None = 0,
        stdout: bytes = b"",
        stderr: bytes = b"",
        system_error: OSError | None = None,
    ) -> None:
        self._returncode = returncode
        self._stdout = stdout
        self._stderr = stderr
        self._system_error = system_error
        self._capture_calls: list[list[str]] = []
        self._stream_calls: list[list[str]] = []

    @property
    def capture_calls(self) -> list[list[str]]:
        """argv of every capture() call, for test assertions only."""
        return self._capture_calls

    @property
    def stream_calls(self) -> list[list[str]]:
        """argv of every stream() call, for test assertions only."""
        return self._stream_calls

    def _result(self) -> ProcessResult:
        if self._system_error is not None:
            raise self._system_error
        return ProcessResult(returncode=self._returncode, stdout=self._stdout, stderr=self._stderr)

    def capture(self, command: Command) -> ProcessResult:
        self._capture_calls.append(command.argv())
        return self._result()

    def stream(self, command: Command, stdout_sink: IO[Any], stderr_sink: IO[Any]) -> ProcessResult:
        self._stream_calls.append(command.argv())
        result = self._result()
        stdout_sink.write(result.stdout)
        stderr_sink.write(result.stderr)
        return result
