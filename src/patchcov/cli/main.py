"""patchcov CLI."""

import click

from patchcov import __version__
from patchcov.cli.delta import delta_command
from patchcov.cli.run import run_command
from patchcov.core.logging import configure_logging


@click.group()
@click.version_option(version=__version__, prog_name="patchcov")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """patchcov - flag untested lines added by a change."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    configure_logging(level="DEBUG" if verbose else "WARNING")


cli.add_command(run_command, name="run")
cli.add_command(delta_command, name="delta")


if __name__ == "__main__":
    cli()
