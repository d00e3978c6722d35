"""Tests for the LCOV-backed coverage warning analyzer."""

from collections.abc import Callable
from pathlib import Path

import pytest

from patchcov.config.models import AnalyzerConfig
from patchcov.core.errors import AnalyzerError, ErrorCode
from patchcov.coverage.analyzer import LcovAnalyzer, group_lines, resolve_lcov_path
from patchcov.coverage.models import FileCoverage, FunctionCoverage, SourceConstruct
from patchcov.git.models import Patch

FOO_LCOV = """\
SF:app/foo.rb
FN:3,Foo#bar
FN:9,Foo#baz
DA:1,1
DA:3,1
DA:4,0
DA:5,1
DA:9,1
DA:10,0
DA:11,0
end_of_record
"""

MakePatch = Callable[..., Patch]


@pytest.fixture
def config(tmp_path: Path) -> AnalyzerConfig:
    lcov = tmp_path / "coverage" / "lcov.info"
    lcov.parent.mkdir()
    lcov.write_text(FOO_LCOV)
    return AnalyzerConfig(path=str(tmp_path))


class TestGroupLines:
    def test_functions_split_at_next_start(self) -> None:
        fc = FileCoverage(
            path="a.py",
            lines={1: 1, 3: 1, 4: 0, 9: 1, 10: 0},
            functions={
                ("bar", 3): FunctionCoverage(name="bar", start_line=3, hits=1),
                ("baz", 9): FunctionCoverage(name="baz", start_line=9, hits=1),
            },
        )

        grouped = group_lines(fc, "function", "a.py")

        assert grouped == [
            (SourceConstruct("file", "a.py"), [1]),
            (SourceConstruct("function", "bar"), [3, 4]),
            (SourceConstruct("function", "baz"), [9, 10]),
        ]

    def test_nested_function_with_end_line_owns_its_lines(self) -> None:
        fc = FileCoverage(
            path="a.rb",
            lines={2: 1, 5: 0, 6: 0, 8: 1, 20: 1},
            functions={
                ("Outer", 2): FunctionCoverage(name="Outer", start_line=2, hits=1, end_line=20),
                ("inner", 5): FunctionCoverage(name="inner", start_line=5, hits=0, end_line=6),
            },
        )

        grouped = dict((c.name, lines) for c, lines in group_lines(fc, "method", "a.rb"))

        assert grouped == {"Outer": [2, 8, 20], "inner": [5, 6]}

    def test_same_named_functions_grouped_separately(self) -> None:
        fc = FileCoverage(
            path="a.py",
            lines={2: 1, 3: 0, 8: 1, 9: 0},
            functions={
                ("__init__", 2): FunctionCoverage(name="__init__", start_line=2, hits=1),
                ("__init__", 8): FunctionCoverage(name="__init__", start_line=8, hits=1),
            },
        )

        assert group_lines(fc, "function", "a.py") == [
            (SourceConstruct("function", "__init__"), [2, 3]),
            (SourceConstruct("function", "__init__"), [8, 9]),
        ]

    def test_no_functions_gives_single_file_construct(self) -> None:
        fc = FileCoverage(path="a.py", lines={1: 0, 2: 1})

        assert group_lines(fc, "function", "a.py") == [
            (SourceConstruct("file", "a.py"), [1, 2])
        ]

    def test_function_records_without_start_line_ignored(self) -> None:
        fc = FileCoverage(
            path="a.py",
            lines={1: 0},
            functions={("ghost", 0): FunctionCoverage(name="ghost", start_line=0, hits=0)},
        )

        assert [c.kind for c, _ in group_lines(fc, "function", "a.py")] == ["file"]


class TestResolveLcovPath:
    def test_explicit_relative_path_under_root(self, tmp_path: Path) -> None:
        config = AnalyzerConfig(lcov="out/app.lcov", path=str(tmp_path))
        assert resolve_lcov_path(config) == tmp_path / "out" / "app.lcov"

    def test_explicit_absolute_path(self, tmp_path: Path) -> None:
        lcov = tmp_path / "x.info"
        assert resolve_lcov_path(AnalyzerConfig(lcov=str(lcov))) == lcov

    def test_prefers_project_named_lcov(self, tmp_path: Path) -> None:
        named = tmp_path / "coverage" / "lcov" / f"{tmp_path.name}.lcov"
        named.parent.mkdir(parents=True)
        named.write_text("")
        (tmp_path / "coverage" / "lcov.info").write_text("")

        assert resolve_lcov_path(AnalyzerConfig(path=str(tmp_path))) == named

    def test_falls_back_to_lcov_info(self, tmp_path: Path) -> None:
        info = tmp_path / "coverage" / "lcov.info"
        info.parent.mkdir()
        info.write_text("")

        assert resolve_lcov_path(AnalyzerConfig(path=str(tmp_path))) == info


class TestLcovAnalyzer:
    def test_flags_construct_with_uncovered_added_line(
        self, config: AnalyzerConfig, make_patch: MakePatch, tmp_path: Path
    ) -> None:
        warnings = LcovAnalyzer().build([make_patch("app/foo.rb", [4])], config)

        assert len(warnings) == 1
        warning = warnings[0]
        assert warning.file_path == str(tmp_path / "app" / "foo.rb")
        assert warning.construct == SourceConstruct("method", "Foo#bar")
        assert warning.coverage == {3: True, 4: False, 5: True}
        assert warning.ratio == 0.6667
        assert warning.uncovered_lines == [4]

    def test_covered_added_lines_are_not_flagged(
        self, config: AnalyzerConfig, make_patch: MakePatch
    ) -> None:
        assert LcovAnalyzer().build([make_patch("app/foo.rb", [1, 3, 5])], config) == []

    def test_non_instrumented_added_lines_are_not_flagged(
        self, config: AnalyzerConfig, make_patch: MakePatch
    ) -> None:
        assert LcovAnalyzer().build([make_patch("app/foo.rb", [2, 6, 7])], config) == []

    def test_multiple_constructs_in_order(
        self, config: AnalyzerConfig, make_patch: MakePatch
    ) -> None:
        warnings = LcovAnalyzer().build([make_patch("app/foo.rb", [10, 4])], config)

        assert [w.construct.name for w in warnings] == ["Foo#bar", "Foo#baz"]
        assert warnings[1].ratio == 0.3333

    def test_files_without_coverage_are_ignored(
        self, config: AnalyzerConfig, make_patch: MakePatch
    ) -> None:
        assert LcovAnalyzer().build([make_patch("app/other.rb", [1, 2])], config) == []

    def test_function_kind_for_non_ruby(self, tmp_path: Path, make_patch: MakePatch) -> None:
        lcov = tmp_path / "lcov.info"
        lcov.write_text("SF:pkg/mod.py\nFN:1,run\nDA:1,1\nDA:2,0\nend_of_record\n")
        config = AnalyzerConfig(lcov=str(lcov), path=str(tmp_path))

        warnings = LcovAnalyzer().build([make_patch("pkg/mod.py", [2])], config)

        assert warnings[0].construct == SourceConstruct("function", "run")

    def test_syntax_hint_selects_method_kind(self, tmp_path: Path, make_patch: MakePatch) -> None:
        lcov = tmp_path / "lcov.info"
        lcov.write_text("SF:pkg/mod.py\nFN:1,run\nDA:1,1\nDA:2,0\nend_of_record\n")
        config = AnalyzerConfig(lcov=str(lcov), path=str(tmp_path), ruby_syntax="3.2")

        warnings = LcovAnalyzer().build([make_patch("pkg/mod.py", [2])], config)

        assert warnings[0].construct.kind == "method"

    def test_same_named_functions_keep_their_own_lines(
        self, tmp_path: Path, make_patch: MakePatch
    ) -> None:
        lcov = tmp_path / "lcov.info"
        lcov.write_text(
            "SF:app/foo.rb\nFN:2,4,initialize\nFN:10,12,initialize\nFNDA:1,initialize\n"
            "DA:1,1\nDA:2,1\nDA:3,1\nDA:10,1\nDA:11,0\nend_of_record\n"
        )
        config = AnalyzerConfig(lcov=str(lcov), path=str(tmp_path))

        warnings = LcovAnalyzer().build([make_patch("app/foo.rb", [11])], config)

        assert len(warnings) == 1
        assert warnings[0].construct == SourceConstruct("method", "initialize")
        assert warnings[0].coverage == {10: True, 11: False}

    def test_missing_lcov_raises_analyzer_error(
        self, tmp_path: Path, make_patch: MakePatch
    ) -> None:
        config = AnalyzerConfig(lcov="nope.info", path=str(tmp_path))

        with pytest.raises(AnalyzerError) as exc_info:
            LcovAnalyzer().build([make_patch("app/foo.rb", [4])], config)

        assert exc_info.value.code == ErrorCode.ANALYZER_ERROR
        assert exc_info.value.details["lcov"] == str(tmp_path / "nope.info")
