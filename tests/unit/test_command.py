"""Tests for Command, NamedCommand and the CommandWithName run methods."""

import io

import pytest

from fun_run.command import Command, NamedCommand
from fun_run.errors import CmdError, CmdErrorKind
from fun_run.naming import display_with_env_keys
from fun_run.output import ExitStatus
from tests.fakes.process_runner import FakeProcessRunner


def test_builder_methods_mutate_and_chain() -> None:
    command = Command("gem").arg("install").args_extend(["bundler", "-v", "2.4.1.7"])
    command.env_set("GEM_HOME", "/gems").envs({"RAILS_ENV": "production"}).current_dir("/app")

    assert command.argv() == ["gem", "install", "bundler", "-v", "2.4.1.7"]
    assert command.env == {"GEM_HOME": "/gems", "RAILS_ENV": "production"}
    assert command.cwd == "/app"


def test_command_name_is_generated() -> None:
    assert Command("bundle", ["install"]).name() == "bundle install"


def test_named_overrides_name_verbatim() -> None:
    command = Command("bin/bundle", ["install", "--no-doc"])

    named = command.named('bundle "install"')

    assert named.name() == 'bundle "install"'


def test_named_does_not_change_what_runs() -> None:
    command = Command("bin/bundle", ["install", "--no-doc"])

    named = command.named("bundle install").named("something else")

    assert named.mut_cmd() is command
    assert named.mut_cmd().argv() == ["bin/bundle", "install", "--no-doc"]
    assert command.name() == "bin/bundle install --no-doc"


def test_named_wraps_by_reference() -> None:
    command = Command("bundle")
    named = command.named("bundle install")

    command.arg("install")

    assert named.mut_cmd().args == ["install"]


def test_into_named_owns_a_copy() -> None:
    command = Command("bundle", ["install"])
    named = command.into_named("bundle install")

    command.arg("--extra")
    command.env_set("RAILS_ENV", "production")

    assert named.mut_cmd() is not command
    assert named.mut_cmd().args == ["install"]
    assert named.mut_cmd().env == {}


def test_named_fn_receives_command() -> None:
    command = Command("bundle", ["install"])

    named = command.named_fn(lambda cmd: cmd.name().replace("bundle", "bin/bundle"))

    assert isinstance(named, NamedCommand)
    assert named.name() == "bin/bundle install"


def test_named_fn_with_env_keys() -> None:
    env = {"GEM_HOME": "/usr/bin/local/.gems"}
    command = Command("gem", ["install", "bundler", "-v", "2.4.1.7"]).envs(env)

    named = command.named_fn(lambda cmd: display_with_env_keys(cmd, env, ["GEM_HOME"]))

    assert named.name() == 'GEM_HOME="/usr/bin/local/.gems" gem install bundler -v 2.4.1.7'


def test_named_output_success_returns_named_output() -> None:
    runner = FakeProcessRunner(returncode=0, stdout=b"ok\n")

    output = Command("echo", ["ok"]).named_output(runner=runner)

    assert output.name == "echo ok"
    assert output.status == ExitStatus(code=0)
    assert output.stdout == b"ok\n"
    assert runner.capture_calls == [["echo", "ok"]]
    assert runner.stream_calls == []


def test_named_output_nonzero_raises_not_streamed() -> None:
    runner = FakeProcessRunner(returncode=2, stdout=b"partial", stderr=b"boom")

    with pytest.raises(CmdError) as exc_info:
        Command("make", ["build"]).named_output(runner=runner)

    error = exc_info.value
    assert error.kind is CmdErrorKind.NON_ZERO_EXIT_NOT_STREAMED
    assert error.name == "make build"
    assert error.stdout == b"partial"
    assert error.stderr == b"boom"


def test_named_output_uses_override_name_in_error() -> None:
    runner = FakeProcessRunner(returncode=1)

    with pytest.raises(CmdError) as exc_info:
        Command("gem", ["install", "bundler", "-v", "2.4.1.7"]).named("gem install").named_output(
            runner=runner
        )

    assert exc_info.value.name == "gem install"
    assert runner.capture_calls == [["gem", "install", "bundler", "-v", "2.4.1.7"]]


def test_named_output_system_error_chains_os_error() -> None:
    os_error = FileNotFoundError(2, "No such file or directory", "becho")
    runner = FakeProcessRunner(system_error=os_error)

    with pytest.raises(CmdError) as exc_info:
        Command("becho", ["hello", "world"]).named_output(runner=runner)

    error = exc_info.value
    assert error.kind is CmdErrorKind.SYSTEM_ERROR
    assert error.error is os_error
    assert error.__cause__ is os_error
    assert str(error).startswith("Could not run command `becho hello world`.")


def test_stream_output_writes_sinks_and_keeps_bytes() -> None:
    runner = FakeProcessRunner(returncode=0, stdout=b"out", stderr=b"err")
    stdout = io.BytesIO()
    stderr = io.BytesIO()

    output = Command("tool").stream_output(stdout, stderr, runner=runner)

    assert stdout.getvalue() == b"out"
    assert stderr.getvalue() == b"err"
    assert output.stdout == b"out"
    assert output.stderr == b"err"
    assert runner.stream_calls == [["tool"]]


def test_stream_output_nonzero_raises_already_streamed() -> None:
    runner = FakeProcessRunner(returncode=1, stdout=b"compiled 3 files", stderr=b"linker failed")

    with pytest.raises(CmdError) as exc_info:
        Command("tool").stream_output(io.BytesIO(), io.BytesIO(), runner=runner)

    error = exc_info.value
    assert error.kind is CmdErrorKind.NON_ZERO_EXIT_ALREADY_STREAMED
    assert error.stdout_lossy() == "compiled 3 files"
    assert error.stderr_lossy() == "linker failed"
    assert "compiled 3 files" not in str(error)
    assert "linker failed" not in str(error)


def test_stream_output_system_error() -> None:
    runner = FakeProcessRunner(system_error=PermissionError(13, "Permission denied", "./tool"))

    with pytest.raises(CmdError) as exc_info:
        Command("./tool").stream_output(io.BytesIO(), io.BytesIO(), runner=runner)

    assert exc_info.value.kind is CmdErrorKind.SYSTEM_ERROR
    assert exc_info.value.status is None
