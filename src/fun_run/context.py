"""Application context with dependency injection."""

import os
from collections.abc import Mapping
from dataclasses import dataclass

from fun_run.config import FunRunConfig, load_config
from fun_run.runner.abc import ProcessRunner
from fun_run.runner.real import RealProcessRunner


@dataclass(frozen=True)
class FunRunContext:
    """Immutable context holding the dependencies of CLI commands.

    Created at the CLI entry point; tests pass their own through
    `CliRunner.invoke(..., obj=ctx)`.
    """

    runner: ProcessRunner
    config: FunRunConfig
    environ: Mapping[str, str]

    @staticmethod
    def for_test(
        runner: ProcessRunner | None = None,
        config: FunRunConfig | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> "FunRunContext":
        """Create a test context; unspecified values get in-memory defaults."""
        active_config = config or FunRunConfig()
        return FunRunContext(
            runner=runner or RealProcessRunner(active_config),
            config=active_config,
            environ=dict(environ or {}),
        )


def create_context() -> FunRunContext:
    """Create production context from the process environment.

    Raises:
        ValueError: If a FUN_RUN_* variable is malformed
    """
    environ = dict(os.environ)
    config = load_config(environ)
    return FunRunContext(
        runner=RealProcessRunner(config),
        config=config,
        environ=environ,
    )
