"""patchcov run command - annotate the current change."""

from pathlib import Path

import click
from pydantic import ValidationError

from patchcov.cli.utils import echo_messages, find_repo_root, reaches_level
from patchcov.config.loader import load_config
from patchcov.config.models import AnalyzerConfig
from patchcov.core.errors import ConfigError, PatchCovError
from patchcov.core.logging import configure_logging
from patchcov.git import GitError, collect_patches
from patchcov.messages import Severity
from patchcov.runner import Runner


def _analyzer_overrides(
    base: AnalyzerConfig,
    repo_root: Path,
    lcov: str | None,
    ruby_syntax: str | None,
) -> AnalyzerConfig:
    """Apply CLI options on top of the configured analyzer options."""
    values = base.model_dump()
    if lcov is not None:
        values["lcov"] = lcov
    if ruby_syntax is not None:
        values["ruby_syntax"] = ruby_syntax
    values["path"] = values["path"] or str(repo_root)
    try:
        return AnalyzerConfig.model_validate(values)
    except ValidationError as e:
        raise ConfigError.from_validation(e, prefix="analyzer") from e


@click.command()
@click.argument("path", default=".", type=click.Path(exists=True, path_type=Path))
@click.option("-c", "--commit", default=None, help="Base ref to diff against (default: HEAD)")
@click.option("--target", default=None, help="Target ref (default: working tree)")
@click.option("-l", "--lcov", default=None, help="LCOV file (overrides config)")
@click.option("-r", "--ruby-syntax", default=None, help="Syntax version hint (overrides config)")
@click.option(
    "--level",
    "fail_level",
    type=click.Choice([s.value for s in Severity]),
    default=Severity.ERROR.value,
    show_default=True,
    help="Exit with status 1 when a message at or above this level is emitted",
)
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def run_command(
    ctx: click.Context,
    path: Path,
    commit: str | None,
    target: str | None,
    lcov: str | None,
    ruby_syntax: str | None,
    fail_level: str,
    as_json: bool,
) -> None:
    """Flag added lines that lack test coverage.

    PATH is inside the repository to check (default: current directory).
    """
    repo_root = find_repo_root(path)

    try:
        config = load_config(repo_root)
        config = config.model_copy(
            update={"analyzer": _analyzer_overrides(config.analyzer, repo_root, lcov, ruby_syntax)}
        )
        if not (ctx.obj or {}).get("verbose"):
            configure_logging(config=config.logging)

        patches = collect_patches(repo_root, commit, target)
        messages = Runner(patches, commit, config=config).run()
    except (PatchCovError, GitError) as e:
        raise click.ClickException(str(e)) from e

    echo_messages(messages, as_json=as_json)
    if reaches_level(messages, Severity(fail_level)):
        ctx.exit(1)
