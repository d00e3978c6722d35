"""patchcov delta command - compare base and head coverage runs."""

from pathlib import Path

import click

from patchcov.cli.utils import echo_messages
from patchcov.config.loader import load_config
from patchcov.core.errors import PatchCovError
from patchcov.coverage.summary import report


@click.command()
@click.argument("path", default=".", type=click.Path(exists=True, file_okay=False, path_type=Path))
@click.option("--base", "base_path", default=None, help="Base run summary (default from config)")
@click.option("--head", "head_path", default=None, help="Head run summary (default from config)")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def delta_command(
    path: Path,
    base_path: str | None,
    head_path: str | None,
    as_json: bool,
) -> None:
    """Show the coverage delta between the base and head runs.

    PATH is the project root the summary paths are relative to.
    """
    root = path.resolve()
    try:
        config = load_config(root)
        messages = report(
            root / (base_path or config.report.base_path),
            root / (head_path or config.report.head_path),
        )
    except PatchCovError as e:
        raise click.ClickException(str(e)) from e

    if not messages and not as_json:
        click.echo("No coverage delta: base or head summary not found.")
        return
    echo_messages(messages, as_json=as_json)
