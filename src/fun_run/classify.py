"""Classification of completed commands into success or CmdError.

Classification is separate from execution: runners always return the output
of a completed process, and these functions decide afterwards whether that
output is a failure. classify() is the pure form; nonzero_captured() and
nonzero_streamed() raise.
"""

import logging
import subprocess

from fun_run.errors import CmdError
from fun_run.output import ExitStatus, NamedOutput
from fun_run.runner.abc import ProcessResult

logger = logging.getLogger(__name__)

CompletedOutput = NamedOutput | ProcessResult | subprocess.CompletedProcess


def to_named_output(name: str, output: CompletedOutput) -> NamedOutput:
    """Pair any completed-process output with a display name.

    Accepts a NamedOutput (renamed to `name`), a ProcessResult, or a
    subprocess.CompletedProcess run without text mode.
    """
    if isinstance(output, NamedOutput):
        if output.name == name:
            return output
        return NamedOutput(
            name=name, status=output.status, stdout=output.stdout, stderr=output.stderr
        )

    return NamedOutput(
        name=name,
        status=ExitStatus.from_returncode(output.returncode),
        stdout=output.stdout or b"",
        stderr=output.stderr or b"",
    )


def classify(output: NamedOutput, *, streamed: bool) -> CmdError | None:
    """Decide whether a completed command failed.

    Args:
        output: Output of a completed process
        streamed: Whether the output was already shown to the user

    Returns:
        None when the exit status is present and zero, otherwise the CmdError
        describing the failure (NON_ZERO_EXIT_ALREADY_STREAMED when streamed,
        NON_ZERO_EXIT_NOT_STREAMED otherwise)
    """
    if output.status.success:
        return None

    logger.debug("Command `%s` failed: %s (streamed=%s)", output.name, output.status, streamed)
    if streamed:
        return CmdError.already_streamed(output)
    return CmdError.not_streamed(output)


def nonzero_captured(name: str, output: CompletedOutput) -> NamedOutput:
    """Raise when the status is nonzero, including the output in the error.

    Use when the output comes from a source that was not streamed to the
    user, so it is shown when the error is displayed.

    Raises:
        CmdError: NON_ZERO_EXIT_NOT_STREAMED if the status is not zero
    """
    named_output = to_named_output(name, output)
    error = classify(named_output, streamed=False)
    if error is not None:
        raise error
    return named_output


def nonzero_streamed(name: str, output: CompletedOutput) -> NamedOutput:
    """Raise when the status is nonzero, hiding the output in the error.

    Use when the output was already streamed to the user; repeating it in
    the error would be jarring.

    Raises:
        CmdError: NON_ZERO_EXIT_ALREADY_STREAMED if the status is not zero
    """
    named_output = to_named_output(name, output)
    error = classify(named_output, streamed=True)
    if error is not None:
        raise error
    return named_output


def on_system_error(name: str, error: OSError | ValueError) -> CmdError:
    """Convert a failure to start a command into a CmdError carrying its name.

    subprocess rejects some arguments (such as an embedded NUL byte) with a
    ValueError before anything runs; that is reported as an OSError too.
    """
    if isinstance(error, ValueError):
        os_error = OSError(str(error))
        os_error.__cause__ = error
        return CmdError.system_error(name, os_error)
    return CmdError.system_error(name, error)
