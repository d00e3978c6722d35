"""Fixtures for CLI tests."""

from __future__ import annotations

import json
from collections.abc import Callable, Generator
from pathlib import Path
from unittest.mock import patch

import pygit2
import pytest

FOO_V1 = "class Foo\n  def bar\n    1\n  end\nend\n"
FOO_V2 = "class Foo\n  def bar\n    1\n  end\n\n  def baz\n    2\n  end\nend\n"

FOO_LCOV = """\
SF:app/foo.rb
FN:2,Foo#bar
FN:6,Foo#baz
DA:1,1
DA:2,1
DA:3,1
DA:6,1
DA:7,0
end_of_record
"""


@pytest.fixture(autouse=True)
def _isolated_config(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> Generator[None, None, None]:
    """No global config file and no info-level log lines mixed into output."""
    monkeypatch.setenv("PATCHCOV__LOGGING__LEVEL", "ERROR")
    with patch("patchcov.config.loader.GLOBAL_CONFIG_PATH", tmp_path / "no-global.yaml"):
        yield


def write_summaries(root: Path, base: float, head: float) -> None:
    coverage = root / "coverage"
    coverage.mkdir(exist_ok=True)
    for name, percent in ((".last_base_run.json", base), (".last_run.json", head)):
        (coverage / name).write_text(json.dumps({"result": {"covered_percent": percent}}))


@pytest.fixture
def summaries() -> Callable[[Path, float, float], None]:
    return write_summaries


@pytest.fixture
def ruby_repo(tmp_path: Path) -> Path:
    """Repo with app/foo.rb committed, then extended in the working tree.

    The working tree adds Foo#baz (lines 5-8) and the LCOV file marks line 7
    as never executed.
    """
    repo_path = tmp_path / "repo"
    (repo_path / "app").mkdir(parents=True)
    repo = pygit2.init_repository(str(repo_path), initial_head="main")

    (repo_path / "app" / "foo.rb").write_text(FOO_V1)
    repo.index.add_all()
    repo.index.write()
    tree = repo.index.write_tree()
    sig = pygit2.Signature("Test", "test@test.com")
    repo.create_commit("HEAD", sig, sig, "Initial commit", tree, [])

    (repo_path / "app" / "foo.rb").write_text(FOO_V2)
    (repo_path / "coverage").mkdir()
    (repo_path / "coverage" / "lcov.info").write_text(FOO_LCOV)
    return repo_path.resolve()
