"""Real process runner using the subprocess module.

Captured mode is a thin call to subprocess.run(). Streamed mode uses
subprocess.Popen with both pipes and copies each pipe on its own thread into
a TeeWriter, so a child writing heavily to one stream never blocks on the
other stream's full pipe.
"""

import io
import logging
import os
import subprocess
import threading
from typing import IO, TYPE_CHECKING, Any

from fun_run.config import FunRunConfig
from fun_run.runner.abc import ProcessResult, ProcessRunner
from fun_run.runner.tee import binary_sink, tee

if TYPE_CHECKING:
    from fun_run.command import Command

logger = logging.getLogger(__name__)


def _popen_kwargs(command: "Command") -> dict[str, Any]:
    kwargs: dict[str, Any] = {}
    if command.env:
        kwargs["env"] = {**os.environ, **command.env}
    if command.cwd is not None:
        kwargs["cwd"] = command.cwd
    return kwargs


class _CopyThread(threading.Thread):
    """Copies a pipe into its buffer and sink until EOF.

    If writing to the sink fails, the error is kept for the caller and the
    rest of the pipe is still drained into the buffer, so the child never
    blocks on a full pipe.
    """

    def __init__(
        self, pipe: IO[bytes], buffer: io.BytesIO, sink: IO[bytes], chunk_size: int, label: str
    ) -> None:
        super().__init__(name=f"fun-run-{label}", daemon=True)
        self._pipe = pipe
        self._buffer = buffer
        self._sink = sink
        self._chunk_size = chunk_size
        self.label = label
        self.error: Exception | None = None

    def _read(self) -> bytes:
        return self._pipe.read1(self._chunk_size)  # type: ignore[attr-defined]

    def run(self) -> None:
        writer = tee(self._buffer, self._sink)
        try:
            for chunk in iter(self._read, b""):
                writer.write(chunk)
                writer.flush()
        except Exception as e:
            # Sink failed; the buffer already holds this chunk
            self.error = e
            for chunk in iter(self._read, b""):
                self._buffer.write(chunk)


class RealProcessRunner(ProcessRunner):
    """Production implementation using subprocess.

    Example:
        runner = RealProcessRunner()
        result = runner.stream(Command("ls"), sys.stdout, sys.stderr)
    """

    def __init__(self, config: FunRunConfig | None = None) -> None:
        self._config = config or FunRunConfig()

    def capture(self, command: "Command") -> ProcessResult:
        """Run the command with subprocess.run() and capture both streams."""
        argv = command.argv()
        logger.debug("Capturing output of %s", argv)

        result = subprocess.run(
            argv,
            capture_output=True,
            check=False,
            **_popen_kwargs(command),
        )

        logger.debug("Process %s finished: returncode=%s", argv, result.returncode)
        return ProcessResult(
            returncode=result.returncode,
            stdout=result.stdout,
            stderr=result.stderr,
        )

    def stream(
        self, command: "Command", stdout_sink: IO[Any], stderr_sink: IO[Any]
    ) -> ProcessResult:
        """Run the command, teeing stdout and stderr to the sinks and to buffers.

        Each pipe is drained by its own thread. Both threads are joined before
        the process is waited on, so the call stays a single blocking
        operation for the caller. A failure writing to a sink is raised as an
        OSError after the child has exited.
        """
        argv = command.argv()
        logger.debug("Streaming output of %s", argv)

        stdout_buffer = io.BytesIO()
        stderr_buffer = io.BytesIO()

        with subprocess.Popen(
            argv,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            **_popen_kwargs(command),
        ) as process:
            assert process.stdout is not None
            assert process.stderr is not None

            chunk_size = self._config.copy_chunk_size
            copiers = [
                _CopyThread(
                    process.stdout, stdout_buffer, binary_sink(stdout_sink), chunk_size, "stdout"
                ),
                _CopyThread(
                    process.stderr, stderr_buffer, binary_sink(stderr_sink), chunk_size, "stderr"
                ),
            ]
            for copier in copiers:
                copier.start()
            for copier in copiers:
                copier.join()

            returncode = process.wait()

        logger.debug("Process %s finished: returncode=%s", argv, returncode)

        for copier in copiers:
            if copier.error is None:
                continue
            if isinstance(copier.error, OSError):
                raise copier.error
            raise OSError(
                f"Could not write {copier.label} to its sink: {copier.error}"
            ) from copier.error

        return ProcessResult(
            returncode=returncode,
            stdout=stdout_buffer.getvalue(),
            stderr=stderr_buffer.getvalue(),
        )
