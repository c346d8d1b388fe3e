"""affected CLI - affected command."""

import click

from affected.cli.classify import classify_command
from affected.cli.run import run_command
from affected.core.logging import configure_logging


@click.group()
@click.version_option(version="0.1.0", prog_name="affected")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """affected - find the monorepo apps and libs touched by a change."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    configure_logging(level="DEBUG" if verbose else "INFO")


cli.add_command(run_command, name="run")
cli.add_command(classify_command, name="classify")


if __name__ == "__main__":
    cli()
