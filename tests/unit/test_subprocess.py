"""Tests for RealProcessRunner.capture() calls into subprocess.run()."""

import subprocess
from pathlib import Path
from unittest.mock import Mock, patch

import pytest

from fun_run.command import Command
from fun_run.runner.abc import ProcessResult
from fun_run.runner.real import RealProcessRunner


def test_capture_returns_process_result() -> None:
    """Test that a completed subprocess.run() becomes a ProcessResult."""
    with patch("fun_run.runner.real.subprocess.run") as mock_run:
        mock_result = Mock(spec=subprocess.CompletedProcess)
        mock_result.returncode = 0
        mock_result.stdout = b"On branch main"
        mock_result.stderr = b""
        mock_run.return_value = mock_result

        result = RealProcessRunner().capture(Command("git", ["status"]))

        assert result == ProcessResult(returncode=0, stdout=b"On branch main", stderr=b"")
        mock_run.assert_called_once_with(
            ["git", "status"],
            capture_output=True,
            check=False,
        )


def test_capture_nonzero_is_not_an_exception() -> None:
    """Test that a nonzero exit is returned, leaving classification to the caller."""
    with patch("fun_run.runner.real.subprocess.run") as mock_run:
        mock_result = Mock(spec=subprocess.CompletedProcess)
        mock_result.returncode = 1
        mock_result.stdout = b""
        mock_result.stderr = b"fatal: not a git repository"
        mock_run.return_value = mock_result

        result = RealProcessRunner().capture(Command("git", ["status"]))

        assert result.returncode == 1
        assert result.stderr == b"fatal: not a git repository"


def test_capture_passes_cwd_and_merged_env() -> None:
    """Test that the command's cwd and env overrides reach subprocess.run()."""
    with patch("fun_run.runner.real.subprocess.run") as mock_run:
        mock_result = Mock(spec=subprocess.CompletedProcess)
        mock_result.returncode = 0
        mock_result.stdout = b""
        mock_result.stderr = b""
        mock_run.return_value = mock_result

        command = Command("bundle", ["install"], env={"RAILS_ENV": "production"}, cwd=Path("/app"))
        with patch.dict("os.environ", {"HOME": "/home/dev"}, clear=True):
            RealProcessRunner().capture(command)

        call_kwargs = mock_run.call_args.kwargs
        assert call_kwargs["cwd"] == Path("/app")
        assert call_kwargs["env"] == {"HOME": "/home/dev", "RAILS_ENV": "production"}


def test_capture_without_env_inherits_environment() -> None:
    """Test that env is not passed when the command sets no variables."""
    with patch("fun_run.runner.real.subprocess.run") as mock_run:
        mock_result = Mock(spec=subprocess.CompletedProcess)
        mock_result.returncode = 0
        mock_result.stdout = b""
        mock_result.stderr = b""
        mock_run.return_value = mock_result

        RealProcessRunner().capture(Command("ls"))

        assert "env" not in mock_run.call_args.kwargs
        assert "cwd" not in mock_run.call_args.kwargs


def test_capture_missing_program_raises_os_error() -> None:
    """Test that FileNotFoundError propagates for the caller to classify."""
    with patch("fun_run.runner.real.subprocess.run") as mock_run:
        original_error = FileNotFoundError(2, "No such file or directory", "becho")
        mock_run.side_effect = original_error

        with pytest.raises(FileNotFoundError) as exc_info:
            RealProcessRunner().capture(Command("becho", ["hello"]))

        assert exc_info.value is original_error
