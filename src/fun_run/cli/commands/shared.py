"""Helpers shared by the run and name commands."""

from collections.abc import Mapping

import click

from fun_run.command import Command, CommandWithName
from fun_run.naming import display_with_env_keys

COMMAND_CONTEXT_SETTINGS = dict(
    ignore_unknown_options=True,
    allow_interspersed_args=False,
)


def name_option(fn):
    return click.option(
        "--name",
        "display_name",
        default=None,
        help="Display name to use instead of the generated one.",
    )(fn)


def env_key_option(fn):
    return click.option(
        "--env-key",
        "env_keys",
        multiple=True,
        help="Environment variable to show in front of the command name (repeatable).",
    )(fn)


def build_command(
    program: str,
    args: tuple[str, ...],
    display_name: str | None,
    env_keys: tuple[str, ...],
    environ: Mapping[str, str],
) -> CommandWithName:
    """Build the command to run, applying --name or --env-key naming."""
    command = Command(program, args)
    if display_name is not None:
        return command.named(display_name)
    if env_keys:
        return command.named_fn(lambda cmd: display_with_env_keys(cmd, environ, env_keys))
    return command
