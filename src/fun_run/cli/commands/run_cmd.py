import logging

import click

from fun_run.cli.commands.shared import (
    COMMAND_CONTEXT_SETTINGS,
    build_command,
    env_key_option,
    name_option,
)
from fun_run.context import FunRunContext
from fun_run.diagnostics import map_which_problem
from fun_run.errors import CmdError, CmdErrorKind

logger = logging.getLogger(__name__)

SYSTEM_ERROR_EXIT_CODE = 127


def exit_code_for(error: CmdError) -> int:
    """Exit code the CLI uses for a failed command."""
    if error.kind is CmdErrorKind.SYSTEM_ERROR:
        return SYSTEM_ERROR_EXIT_CODE
    status = error.status
    if status is None or status.code is None or status.code == 0:
        return 1
    return status.code


@click.command("run", context_settings=COMMAND_CONTEXT_SETTINGS)
@name_option
@env_key_option
@click.option("--capture", is_flag=True, help="Capture output instead of streaming it.")
@click.option(
    "--diagnose",
    is_flag=True,
    help="When the program cannot be started, explain what was found on PATH.",
)
@click.argument("program")
@click.argument("args", nargs=-1, type=click.UNPROCESSED)
@click.pass_obj
def run_cmd(
    ctx: FunRunContext,
    display_name: str | None,
    env_keys: tuple[str, ...],
    capture: bool,
    diagnose: bool,
    program: str,
    args: tuple[str, ...],
) -> None:
    """Run PROGRAM ARGS and report failures with the command's name and output.

    Output is streamed live by default. With --capture it is only shown
    on success (stdout) or inside the failure report.
    """
    command = build_command(program, args, display_name, env_keys, ctx.environ)
    logger.debug("Running `%s` (capture=%s)", command.name(), capture)

    try:
        if capture:
            output = command.named_output(runner=ctx.runner)
            click.echo(output.stdout_lossy(), nl=False)
        else:
            command.stream_output(
                click.get_binary_stream("stdout"),
                click.get_binary_stream("stderr"),
                runner=ctx.runner,
            )
    except CmdError as e:
        error = e
        if diagnose:
            error = map_which_problem(e, command.mut_cmd(), ctx.environ.get("PATH"))
        click.echo(click.style("Error: ", fg="red") + str(error), err=True)
        raise SystemExit(exit_code_for(error)) from e
