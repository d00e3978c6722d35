"""Coverage data model.

File-centric model for LCOV data plus the warning and summary records the
annotator and delta reporter consume.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field


class CoverageParseError(Exception):
    """Coverage data could not be read."""


@dataclass(frozen=True, slots=True)
class FunctionCoverage:
    """Function/method coverage.

    ``end_line`` is only known when the LCOV producer emits the
    ``FN:<start>,<end>,<name>`` form.
    """

    name: str
    start_line: int
    hits: int
    end_line: int | None = None

    @property
    def key(self) -> tuple[str, int]:
        return self.name, self.start_line


@dataclass(slots=True)
class FileCoverage:
    """Coverage data for a single file.

    ``lines`` maps each instrumented 1-based line to its hit count.
    ``functions`` is keyed by (name, start line); one file can define several
    functions with the same name.
    """

    path: str
    lines: dict[int, int] = field(default_factory=dict)
    functions: dict[tuple[str, int], FunctionCoverage] = field(default_factory=dict)

    def merge(self, other: FileCoverage) -> None:
        """Fold in another record for the same file, keeping the higher hit counts."""
        for line, hits in other.lines.items():
            self.lines[line] = max(hits, self.lines.get(line, 0))
        for key, fn in other.functions.items():
            prev = self.functions.get(key)
            if prev is None or fn.hits > prev.hits:
                self.functions[key] = fn


@dataclass(slots=True)
class CoverageReport:
    """Parsed coverage, keyed by file path as resolved by the parser.

    Test runners that split a suite emit one record per file per run, so the
    same path can appear more than once.
    """

    files: dict[str, FileCoverage] = field(default_factory=dict)

    def add(self, coverage: FileCoverage) -> None:
        existing = self.files.get(coverage.path)
        if existing is None:
            self.files[coverage.path] = coverage
        else:
            existing.merge(coverage)

    def get(self, path: str) -> FileCoverage | None:
        return self.files.get(path)


@dataclass(frozen=True, slots=True)
class SourceConstruct:
    """A named piece of source a warning is attributed to (e.g. method `foo`)."""

    kind: str
    name: str


@dataclass(frozen=True, slots=True)
class CoverageWarning:
    """Analyzer finding: a construct has uncovered lines.

    ``coverage`` maps each instrumented line of the construct to whether it
    was executed. Lines absent from the mapping are not instrumented and are
    never reported as uncovered.
    """

    file_path: str
    construct: SourceConstruct
    coverage: Mapping[int, bool]
    ratio: float

    def uncovered(self, line: int) -> bool:
        return self.coverage.get(line) is False

    @property
    def uncovered_lines(self) -> list[int]:
        return sorted(line for line, covered in self.coverage.items() if not covered)


@dataclass(frozen=True, slots=True)
class CoverageSummary:
    """Aggregate coverage percentage for a whole test run."""

    covered_percent: float
