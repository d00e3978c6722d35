"""Build patches from a git repository.

Plays the review host's role when patchcov runs standalone: the host
normally supplies patches itself.
"""

from __future__ import annotations

from pathlib import Path

import pygit2

from patchcov.core.logging import get_logger
from patchcov.git.errors import NotARepositoryError, RefNotFoundError, UnbornHeadError
from patchcov.git.models import Patch

log = get_logger(__name__)


class PatchSource:
    """Owns a pygit2.Repository and turns diffs into Patch objects."""

    def __init__(self, repo_path: Path | str) -> None:
        self._path = Path(repo_path)
        try:
            self._repo = pygit2.Repository(str(self._path))
        except pygit2.GitError as e:
            raise NotARepositoryError(str(self._path)) from e

    @property
    def root(self) -> Path:
        """Working tree root (falls back to the given path for bare repos)."""
        return Path(self._repo.workdir).resolve() if self._repo.workdir else self._path.resolve()

    def resolve_commit(self, ref: str) -> pygit2.Commit:
        try:
            obj, _ = self._repo.resolve_refish(ref)
        except (pygit2.GitError, KeyError, ValueError) as e:
            raise RefNotFoundError(ref) from e
        if isinstance(obj, pygit2.Tag):
            obj = obj.peel(pygit2.Commit)
        if not isinstance(obj, pygit2.Commit):
            raise RefNotFoundError(ref, f"points at a {type(obj).__name__}, not a commit")
        return obj

    def _head_commit(self) -> pygit2.Commit:
        if self._repo.head_is_unborn:
            raise UnbornHeadError()
        return self._repo.head.peel(pygit2.Commit)

    def diff(self, base: str | None = None, target: str | None = None) -> pygit2.Diff:
        """Diff base (default HEAD) against target, or the working tree when target is None."""
        base_commit = self.resolve_commit(base) if base else self._head_commit()
        if target is None:
            diff = self._repo.diff(base_commit)
        else:
            diff = self._repo.diff(base_commit, self.resolve_commit(target))
        diff.find_similar()
        return diff

    def patches(self, base: str | None = None, target: str | None = None) -> list[Patch]:
        """Patches for every file still present in the new revision, in diff order."""
        root = self.root
        result: list[Patch] = []
        for raw in self.diff(base, target):
            if raw is None or raw.delta.status == pygit2.GIT_DELTA_DELETED:
                continue
            result.append(Patch.from_pygit2(raw, root))
        log.debug("patches_collected", count=len(result), base=base, target=target)
        return result


def collect_patches(
    repo_root: Path | str,
    base: str | None = None,
    target: str | None = None,
) -> list[Patch]:
    """Convenience wrapper around PatchSource.patches()."""
    return PatchSource(repo_root).patches(base, target)
