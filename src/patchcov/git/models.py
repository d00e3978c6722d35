"""Patch data model handed over by the review host."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

import pygit2

_ADDED_ORIGIN = "+"


@dataclass(frozen=True, slots=True)
class AddedLine:
    """A line present in the new file version but not the old one."""

    new_lineno: int
    content: str = ""
    patch: Patch | None = field(default=None, compare=False, repr=False)

    def __post_init__(self) -> None:
        if self.new_lineno < 1:
            raise ValueError(f"Line numbers are 1-based, got {self.new_lineno}")


@dataclass(slots=True)
class Patch:
    """Diff of a single file within a change.

    Owns its added lines. ``path`` is repository-relative; ``full_path`` is
    the absolute location of the new file revision.
    """

    path: str
    repo_root: Path
    added_lines: tuple[AddedLine, ...] = ()

    @classmethod
    def create(
        cls,
        path: str,
        repo_root: Path,
        lines: Iterable[tuple[int, str] | int],
    ) -> Patch:
        """Build a patch and its added lines together.

        ``lines`` yields ``(new_lineno, content)`` pairs or bare line numbers.
        """
        patch = cls(path=path, repo_root=repo_root)
        added: list[AddedLine] = []
        for item in lines:
            lineno, content = item if isinstance(item, tuple) else (item, "")
            added.append(AddedLine(new_lineno=lineno, content=content, patch=patch))
        patch.added_lines = tuple(added)
        return patch

    @classmethod
    def from_pygit2(cls, patch: pygit2.Patch, repo_root: Path) -> Patch:
        return cls.create(
            patch.delta.new_file.path,
            repo_root,
            (
                (line.new_lineno, line.content.rstrip("\n"))
                for hunk in patch.hunks
                for line in hunk.lines
                if line.origin == _ADDED_ORIGIN
            ),
        )

    @property
    def full_path(self) -> Path:
        return self.repo_root / self.path

    @property
    def additions(self) -> int:
        return len(self.added_lines)

    @property
    def added_line_numbers(self) -> list[int]:
        """New-file line numbers in patch order."""
        return [line.new_lineno for line in self.added_lines]
