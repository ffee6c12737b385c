import logging

import click

from fun_run.cli.commands.name_cmd import name_cmd
from fun_run.cli.commands.run_cmd import run_cmd
from fun_run.context import create_context

CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])  # terse help flags


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(package_name="fun-run")
@click.pass_context
def cli(ctx: click.Context) -> None:
    """Run commands with readable names and descriptive failures."""
    # Only create context if not already provided (e.g., by tests)
    if ctx.obj is None:
        try:
            ctx.obj = create_context()
        except ValueError as e:
            raise click.ClickException(str(e)) from e

    if ctx.obj.config.debug:
        logging.basicConfig(level=logging.DEBUG, format="[DEBUG %(name)s:%(lineno)d] %(message)s")


cli.add_command(name_cmd)
cli.add_command(run_cmd)


def main() -> None:
    """CLI entry point used by the `fun-run` console script."""
    cli()
