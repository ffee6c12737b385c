"""Command errors that carry everything a user needs to debug a failure.

A CmdError includes the name of the command that failed and any output it
produced (like error messages in stderr). Errors don't overwhelm users: when
the output was already streamed, the rendered message does not repeat it,
while the bytes stay available through the error's accessors.

The three outcomes are modelled as a single exception type tagged with a
CmdErrorKind rather than a class hierarchy, since every kind shares the same
payload shape.

Error output formatting is not a stable interface.
"""

from enum import Enum

from fun_run.output import ExitStatus, NamedOutput

EMPTY_PLACEHOLDER = "<empty>"
STREAMED_PLACEHOLDER = "<see above>"


class CmdErrorKind(Enum):
    """Which way a command failed."""

    SYSTEM_ERROR = "system_error"
    NON_ZERO_EXIT_NOT_STREAMED = "non_zero_exit_not_streamed"
    NON_ZERO_EXIT_ALREADY_STREAMED = "non_zero_exit_already_streamed"


class CmdError(RuntimeError):
    """A command that could not run, or ran and exited unsuccessfully.

    Build instances with system_error(), not_streamed() or already_streamed().

    Attributes:
        kind: The failure variant
        name: Display name of the command
        error: Underlying OSError for SYSTEM_ERROR, None otherwise
        named_output: Output of the completed process, None for SYSTEM_ERROR
    """

    def __init__(
        self,
        kind: CmdErrorKind,
        name: str,
        *,
        named_output: NamedOutput | None = None,
        error: OSError | None = None,
    ) -> None:
        if kind is CmdErrorKind.SYSTEM_ERROR:
            if error is None:
                raise ValueError("SYSTEM_ERROR requires the underlying OSError")
        elif named_output is None:
            raise ValueError(f"{kind.name} requires the command's NamedOutput")

        self.kind = kind
        self.name = name
        self.named_output = named_output
        self.error = error
        super().__init__(render_cmd_error(self))

    @classmethod
    def system_error(cls, name: str, error: OSError) -> "CmdError":
        """The command could not be run at all (missing executable, permissions, ...)."""
        return cls(CmdErrorKind.SYSTEM_ERROR, name, error=error)

    @classmethod
    def not_streamed(cls, named_output: NamedOutput) -> "CmdError":
        """The command ran and failed, and its output was never shown."""
        return cls(
            CmdErrorKind.NON_ZERO_EXIT_NOT_STREAMED, named_output.name, named_output=named_output
        )

    @classmethod
    def already_streamed(cls, named_output: NamedOutput) -> "CmdError":
        """The command ran and failed, and its output was already shown live."""
        return cls(
            CmdErrorKind.NON_ZERO_EXIT_ALREADY_STREAMED,
            named_output.name,
            named_output=named_output,
        )

    @property
    def status(self) -> ExitStatus | None:
        """Exit status of the process, None when it could not be run."""
        if self.named_output is None:
            return None
        return self.named_output.status

    @property
    def stdout(self) -> bytes:
        return self.to_named_output().stdout

    @property
    def stderr(self) -> bytes:
        return self.to_named_output().stderr

    def stdout_lossy(self) -> str:
        return self.to_named_output().stdout_lossy()

    def stderr_lossy(self) -> str:
        return self.to_named_output().stderr_lossy()

    def to_named_output(self) -> NamedOutput:
        """Recover the output view of this error without re-running the command.

        For SYSTEM_ERROR there is no process output, so the result has empty
        stdout, the OS error message as stderr, and an unknown status.
        """
        if self.named_output is not None:
            return self.named_output

        return NamedOutput(
            name=self.name,
            status=ExitStatus.unknown(),
            stdout=b"",
            stderr=str(self.error).encode("utf-8"),
        )


def display_out_or_empty(contents: bytes) -> str:
    """Decode output for display, using a placeholder when it is blank."""
    text = contents.decode("utf-8", errors="replace")
    if not text.strip():
        return EMPTY_PLACEHOLDER
    return text


def _display_exit_code(status: ExitStatus) -> str:
    if status.code is None:
        return "unknown"
    return str(status.code)


def render_cmd_error(error: CmdError) -> str:
    """Render a CmdError as the text shown to users.

    SYSTEM_ERROR:
        Could not run command `<name>`. <os error>

    NON_ZERO_EXIT_NOT_STREAMED / NON_ZERO_EXIT_ALREADY_STREAMED:
        Command failed `<name>`
        exit status: <code or unknown>
        stdout: <output, <empty> or <see above>>
        stderr: <output, <empty> or <see above>>
    """
    if error.kind is CmdErrorKind.SYSTEM_ERROR:
        return f"Could not run command `{error.name}`. {error.error}"

    named_output = error.named_output
    assert named_output is not None

    if error.kind is CmdErrorKind.NON_ZERO_EXIT_ALREADY_STREAMED:
        stdout = STREAMED_PLACEHOLDER
        stderr = STREAMED_PLACEHOLDER
    else:
        stdout = display_out_or_empty(named_output.stdout)
        stderr = display_out_or_empty(named_output.stderr)

    lines = [
        f"Command failed `{error.name}`",
        f"exit status: {_display_exit_code(named_output.status)}",
        f"stdout: {stdout}",
        f"stderr: {stderr}",
    ]
    return "\n".join(lines)
