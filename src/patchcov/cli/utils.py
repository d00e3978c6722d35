"""CLI utilities."""

import json
from collections.abc import Sequence
from pathlib import Path

import click

from patchcov.messages import Message, Severity


def find_repo_root(start_path: Path | None = None) -> Path:
    """Find the git repository root from the given path.

    Walks up the directory tree looking for a .git entry.

    Raises:
        click.ClickException: If not inside a git repository
    """
    if start_path is None:
        start_path = Path.cwd()

    current = start_path.resolve()

    while current != current.parent:
        if (current / ".git").exists():
            return current
        current = current.parent

    if (current / ".git").exists():
        return current

    raise click.ClickException(
        f"Not inside a git repository: {start_path}\n"
        "patchcov run must be pointed at a git working tree."
    )


def format_message(message: Message) -> str:
    """Plain text form: ``path:line: [level] text``."""
    location = ""
    if message.path is not None:
        location = message.path
        if message.lineno is not None:
            location += f":{message.lineno}"
        location += ": "
    return f"{location}[{message.level.value}] {message.text}"


def echo_messages(messages: Sequence[Message], *, as_json: bool) -> None:
    if as_json:
        click.echo(json.dumps([m.to_dict() for m in messages], indent=2))
        return
    for message in messages:
        click.echo(format_message(message))


def reaches_level(messages: Sequence[Message], level: Severity) -> bool:
    """True if any message is at or above the given severity."""
    return any(m.level.rank >= level.rank for m in messages)
