"""Tests for building patches from git diffs."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pygit2
import pytest

from patchcov.git import (
    GitError,
    NotARepositoryError,
    PatchSource,
    RefNotFoundError,
    UnbornHeadError,
    collect_patches,
)

CommitFn = Callable[[pygit2.Repository, str], pygit2.Oid]

FOO_V2 = "class Foo\n  def bar\n    1\n  end\n\n  def baz\n    2\n  end\nend\n"


class TestPatchSource:
    def test_not_a_repository(self, tmp_path: Path) -> None:
        with pytest.raises(NotARepositoryError):
            PatchSource(tmp_path / "nowhere")

    def test_root_is_workdir(self, temp_repo: pygit2.Repository, repo_root: Path) -> None:
        assert PatchSource(repo_root).root == repo_root

    def test_unknown_ref(self, repo_root: Path) -> None:
        with pytest.raises(RefNotFoundError, match="does-not-exist") as exc_info:
            PatchSource(repo_root).patches(base="does-not-exist")

        assert isinstance(exc_info.value, GitError)
        assert exc_info.value.ref == "does-not-exist"

    def test_clean_tree_has_no_patches(self, repo_root: Path) -> None:
        assert collect_patches(repo_root) == []


class TestWorkingTreeDiff:
    def test_added_lines_in_patch_order(self, repo_root: Path) -> None:
        (repo_root / "app" / "foo.rb").write_text(FOO_V2)

        patches = collect_patches(repo_root)

        assert len(patches) == 1
        patch = patches[0]
        assert patch.path == "app/foo.rb"
        assert patch.full_path == repo_root / "app" / "foo.rb"
        assert patch.added_line_numbers == [5, 6, 7, 8]
        assert [line.content for line in patch.added_lines] == ["", "  def baz", "    2", "  end"]
        assert all(line.patch is patch for line in patch.added_lines)

    def test_deleted_files_are_skipped(self, repo_root: Path) -> None:
        (repo_root / "README.md").unlink()

        assert collect_patches(repo_root) == []

    def test_removal_only_patch_has_no_additions(self, repo_root: Path) -> None:
        (repo_root / "README.md").write_text("")

        patches = collect_patches(repo_root)

        assert [(p.path, p.additions) for p in patches] == [("README.md", 0)]


class TestRefDiff:
    def test_base_ref_to_working_tree(
        self, temp_repo: pygit2.Repository, repo_root: Path, commit: CommitFn
    ) -> None:
        base = str(temp_repo.head.target)
        (repo_root / "app" / "foo.rb").write_text(FOO_V2)
        commit(temp_repo, "Add baz")
        (repo_root / "app" / "bar.rb").write_text("puts 1\n")

        patches = collect_patches(repo_root, base=base)

        # untracked files are not part of a tree-to-workdir diff
        assert [p.path for p in patches] == ["app/foo.rb"]

    def test_ref_to_ref(
        self, temp_repo: pygit2.Repository, repo_root: Path, commit: CommitFn
    ) -> None:
        base = str(temp_repo.head.target)
        (repo_root / "app" / "foo.rb").write_text(FOO_V2)
        (repo_root / "app" / "bar.rb").write_text("puts 1\nputs 2\n")
        target = str(commit(temp_repo, "Add baz and bar"))

        patches = collect_patches(repo_root, base=base, target=target)

        by_path = {p.path: p.added_line_numbers for p in patches}
        assert by_path == {"app/bar.rb": [1, 2], "app/foo.rb": [5, 6, 7, 8]}


class TestUnbornRepository:
    def test_head_diff_requires_a_commit(self, tmp_path: Path) -> None:
        repo_path = tmp_path / "empty"
        pygit2.init_repository(str(repo_path))

        with pytest.raises(UnbornHeadError, match="unborn"):
            collect_patches(repo_path)
