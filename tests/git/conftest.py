"""Test fixtures for git module."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import pygit2
import pytest

if TYPE_CHECKING:
    from collections.abc import Callable, Generator

FOO_V1 = "class Foo\n  def bar\n    1\n  end\nend\n"


def commit_all(repo: pygit2.Repository, message: str) -> pygit2.Oid:
    """Stage everything in the working tree and commit on HEAD."""
    repo.index.add_all()
    repo.index.write()
    tree = repo.index.write_tree()
    sig = pygit2.Signature("Test User", "test@example.com")
    parents = [] if repo.head_is_unborn else [repo.head.target]
    return repo.create_commit("HEAD", sig, sig, message, tree, parents)


@pytest.fixture
def commit() -> Callable[[pygit2.Repository, str], pygit2.Oid]:
    return commit_all


@pytest.fixture
def temp_repo(tmp_path: Path) -> Generator[pygit2.Repository, None, None]:
    """Temporary git repository with app/foo.rb and README.md committed."""
    repo_path = tmp_path / "repo"
    (repo_path / "app").mkdir(parents=True)

    repo = pygit2.init_repository(str(repo_path), initial_head="main")
    repo.config["user.name"] = "Test User"
    repo.config["user.email"] = "test@example.com"

    (repo_path / "README.md").write_text("# Test Repo\n")
    (repo_path / "app" / "foo.rb").write_text(FOO_V1)
    commit_all(repo, "Initial commit")

    yield repo


@pytest.fixture
def repo_root(temp_repo: pygit2.Repository) -> Path:
    return Path(temp_repo.workdir).resolve()
