import click

from fun_run.cli.commands.shared import (
    COMMAND_CONTEXT_SETTINGS,
    build_command,
    env_key_option,
    name_option,
)
from fun_run.context import FunRunContext


@click.command("name", context_settings=COMMAND_CONTEXT_SETTINGS)
@name_option
@env_key_option
@click.argument("program")
@click.argument("args", nargs=-1, type=click.UNPROCESSED)
@click.pass_obj
def name_cmd(
    ctx: FunRunContext,
    display_name: str | None,
    env_keys: tuple[str, ...],
    program: str,
    args: tuple[str, ...],
) -> None:
    """Print the display name of PROGRAM ARGS without running it."""
    command = build_command(program, args, display_name, env_keys, ctx.environ)
    click.echo(command.name())
