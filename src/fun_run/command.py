"""Commands with names.

Command describes a process to run: a program, its arguments and optional
environment and working directory. CommandWithName adds naming, renaming and
the two run modes on top of any object that can hand out a Command.

Rename a command:

    output = (
        Command("gem")
        .args_extend(["install", "bundler", "-v", "2.4.1.7"])
        # Overwrites the default name, which would include every argument
        .named("gem install")
        .stream_output(sys.stdout, sys.stderr)
    )
    assert output.name == "gem install"

Or include important env vars in the name:

    env = dict(os.environ)
    output = (
        Command("gem")
        .args_extend(["install", "bundler", "-v", "2.4.1.7"])
        .envs(env)
        .named_fn(lambda cmd: display_with_env_keys(cmd, env, ["GEM_HOME"]))
        .stream_output(sys.stdout, sys.stderr)
    )
"""

import copy
import logging
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable, Mapping
from pathlib import Path
from typing import IO, Any

from fun_run.classify import nonzero_captured, nonzero_streamed, on_system_error, to_named_output
from fun_run.naming import display
from fun_run.output import NamedOutput
from fun_run.runner.abc import ProcessRunner
from fun_run.runner.real import RealProcessRunner

logger = logging.getLogger(__name__)


class CommandWithName(ABC):
    """Anything that can produce a display name and the Command to run."""

    @abstractmethod
    def name(self) -> str:
        """Return the display name of the command."""
        ...

    @abstractmethod
    def mut_cmd(self) -> "Command":
        """Return the underlying Command.

        Useful for passing the command to other libraries or mutating it
        after it was named.
        """
        ...

    def named(self, name: str) -> "NamedCommand":
        """Rename the command via a given string.

        Useful when part of the command is distracting or surprising, or to
        include extra information such as environment variables. Renaming
        never changes what is executed.

        Example:
            >>> cmd = Command("bin/bundle").arg("install").arg("--no-doc").named("bundle install")
            >>> cmd.name()
            'bundle install'
        """
        return NamedCommand(self.mut_cmd(), name)

    def named_fn(self, fn: Callable[["Command"], str]) -> "NamedCommand":
        """Rename the command with the string returned by `fn(command)`.

        Example:
            >>> cmd = Command("bundle").arg("install")
            >>> cmd.named_fn(lambda c: c.name().replace("bundle", "bin/bundle")).name()
            'bin/bundle install'
        """
        command = self.mut_cmd()
        return self.named(fn(command))

    def named_output(self, runner: ProcessRunner | None = None) -> NamedOutput:
        """Run the command without streaming.

        Args:
            runner: Process runner to use, defaults to RealProcessRunner

        Returns:
            NamedOutput of a command that exited with status zero

        Raises:
            CmdError: SYSTEM_ERROR if the command could not be run,
                NON_ZERO_EXIT_NOT_STREAMED if the exit status is not zero
        """
        name = self.name()
        active_runner = runner or RealProcessRunner()
        try:
            result = active_runner.capture(self.mut_cmd())
        except (OSError, ValueError) as e:
            logger.debug("Could not run `%s`: %s", name, e)
            raise on_system_error(name, e) from e

        return nonzero_captured(name, to_named_output(name, result))

    def stream_output(
        self,
        stdout: IO[Any],
        stderr: IO[Any],
        runner: ProcessRunner | None = None,
    ) -> NamedOutput:
        """Run the command, streaming to the given writers while capturing output.

        Args:
            stdout: Writer receiving the child's stdout (e.g. sys.stdout)
            stderr: Writer receiving the child's stderr (e.g. sys.stderr)
            runner: Process runner to use, defaults to RealProcessRunner

        Returns:
            NamedOutput of a command that exited with status zero

        Raises:
            CmdError: SYSTEM_ERROR if the command could not be run,
                NON_ZERO_EXIT_ALREADY_STREAMED if the exit status is not zero
        """
        name = self.name()
        active_runner = runner or RealProcessRunner()
        try:
            result = active_runner.stream(self.mut_cmd(), stdout, stderr)
        except (OSError, ValueError) as e:
            logger.debug("Could not run `%s`: %s", name, e)
            raise on_system_error(name, e) from e

        return nonzero_streamed(name, to_named_output(name, result))


class Command(CommandWithName):
    """A process description: program, arguments, environment and working directory.

    Mutable until it is run. Builder methods mutate in place and return self
    so calls can be chained.

    Attributes:
        program: Program to execute, resolved by the OS against PATH
        args: Ordered arguments
        env: Variables set on top of the inherited environment
        cwd: Working directory, None to inherit
    """

    def __init__(
        self,
        program: str,
        args: Iterable[str] | None = None,
        *,
        env: Mapping[str, str] | None = None,
        cwd: Path | str | None = None,
    ) -> None:
        self.program = program
        self.args: list[str] = list(args or [])
        self.env: dict[str, str] = dict(env or {})
        self.cwd = cwd

    def __repr__(self) -> str:
        return f"Command({self.program!r}, {self.args!r})"

    def arg(self, arg: str) -> "Command":
        self.args.append(arg)
        return self

    def args_extend(self, args: Iterable[str]) -> "Command":
        self.args.extend(args)
        return self

    def env_set(self, key: str, value: str) -> "Command":
        self.env[key] = value
        return self

    def envs(self, env: Mapping[str, str]) -> "Command":
        self.env.update(env)
        return self

    def current_dir(self, cwd: Path | str) -> "Command":
        self.cwd = cwd
        return self

    def argv(self) -> list[str]:
        """Return the program followed by its arguments."""
        return [self.program, *self.args]

    def copy(self) -> "Command":
        """Return an independent copy of this command."""
        return copy.deepcopy(self)

    def into_named(self, name: str) -> "NamedCommand":
        """Name an independent copy of this command.

        Unlike named(), later changes to this command are not seen by the
        returned NamedCommand.
        """
        return NamedCommand(self.copy(), name)

    def name(self) -> str:
        return display(self)

    def mut_cmd(self) -> "Command":
        return self


class NamedCommand(CommandWithName):
    """A Command with a display name that overrides the generated one.

    Created by CommandWithName.named(), named_fn() or Command.into_named().
    The wrapped Command is shared with the caller for named() and named_fn(),
    so mutations through mut_cmd() are visible to both.
    """

    def __init__(self, command: Command, name: str) -> None:
        self._command = command
        self._name = name

    def __repr__(self) -> str:
        return f"NamedCommand({self._command!r}, name={self._name!r})"

    def name(self) -> str:
        return self._name

    def mut_cmd(self) -> Command:
        return self._command
