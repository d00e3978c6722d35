"""Coverage warning analyzers.

An analyzer turns a coverage data file plus the change's patches into
CoverageWarning records: one per source construct that has at least one
uncovered line among the lines the change added.

LcovAnalyzer attributes lines to constructs using only the function records
(FN) already present in the LCOV file. Lines outside every function belong
to a top-level "file" construct.
"""

from __future__ import annotations

import os
from collections.abc import Sequence
from pathlib import Path
from typing import Protocol

from patchcov.config.models import AnalyzerConfig
from patchcov.core.errors import AnalyzerError
from patchcov.core.languages import detect_language
from patchcov.core.logging import get_logger
from patchcov.coverage.lcov import LcovParser
from patchcov.coverage.models import (
    CoverageParseError,
    CoverageWarning,
    FileCoverage,
    FunctionCoverage,
    SourceConstruct,
)
from patchcov.git.models import Patch

log = get_logger(__name__)

RATIO_PRECISION = 4


class WarningAnalyzer(Protocol):
    """Protocol for the collaborator that produces coverage warnings."""

    def build(self, patches: Sequence[Patch], config: AnalyzerConfig) -> list[CoverageWarning]:
        """Return every warning for the change.

        Raises:
            AnalyzerError: If the coverage data cannot be loaded.
        """
        ...


def source_root(config: AnalyzerConfig) -> Path:
    return Path(os.path.abspath(config.path or Path.cwd()))


def resolve_lcov_path(config: AnalyzerConfig) -> Path:
    """Locate the LCOV file: explicit option, else the conventional locations."""
    root = source_root(config)
    if config.lcov:
        path = Path(config.lcov).expanduser()
        return path if path.is_absolute() else root / path

    candidates = (
        root / "coverage" / "lcov" / f"{root.name}.lcov",
        root / "coverage" / "lcov.info",
    )
    for candidate in candidates:
        if candidate.is_file():
            return candidate
    return candidates[0]


def _construct_kind(path: str, config: AnalyzerConfig) -> str:
    if config.ruby_syntax or detect_language(path) == "ruby":
        return "method"
    return "function"


def _display_name(abs_path: str, root: Path) -> str:
    """Root-relative path for files under the source root, else the basename."""
    if abs_path.startswith(str(root) + os.sep):
        return os.path.relpath(abs_path, root)
    return os.path.basename(abs_path)


def _function_spans(fc: FileCoverage) -> list[tuple[FunctionCoverage, int, int]]:
    """(function, first line, last line) sorted by start line."""
    functions = sorted(
        (fn for fn in fc.functions.values() if fn.start_line > 0),
        key=lambda fn: fn.start_line,
    )
    last_line = max(fc.lines, default=0)
    spans = []
    for i, fn in enumerate(functions):
        if fn.end_line is not None:
            end = fn.end_line
        elif i + 1 < len(functions):
            end = functions[i + 1].start_line - 1
        else:
            end = last_line
        spans.append((fn, fn.start_line, max(end, fn.start_line)))
    return spans


def group_lines(
    fc: FileCoverage, kind: str, file_name: str
) -> list[tuple[SourceConstruct, list[int]]]:
    """Split instrumented lines into constructs.

    A line inside nested spans belongs to the innermost (latest starting)
    function. The top-level construct, if it owns any line, comes first.
    """
    owner: dict[int, int] = {}
    spans = _function_spans(fc)
    for index, (_fn, start, end) in enumerate(spans):
        for line in fc.lines:
            if start <= line <= end:
                owner[line] = index

    grouped: list[tuple[SourceConstruct, list[int]]] = []
    top_level = sorted(line for line in fc.lines if line not in owner)
    if top_level:
        grouped.append((SourceConstruct(kind="file", name=file_name), top_level))
    for index, (fn, _start, _end) in enumerate(spans):
        owned = sorted(line for line, idx in owner.items() if idx == index)
        if owned:
            grouped.append((SourceConstruct(kind=kind, name=fn.name), owned))
    return grouped


class LcovAnalyzer:
    """Builds coverage warnings from an LCOV file."""

    def __init__(self, parser: LcovParser | None = None) -> None:
        self._parser = parser or LcovParser()

    def build(self, patches: Sequence[Patch], config: AnalyzerConfig) -> list[CoverageWarning]:
        root = source_root(config)
        lcov_path = resolve_lcov_path(config)
        log.debug("lcov_load", path=str(lcov_path), root=str(root))

        try:
            report = self._parser.parse(lcov_path, base_path=root)
        except CoverageParseError as e:
            raise AnalyzerError.failed(str(e), lcov=str(lcov_path)) from e

        coverage_by_path = {os.path.abspath(p): fc for p, fc in report.files.items()}

        # Changed line numbers per file, in first-seen file order
        changed: dict[str, set[int]] = {}
        for patch in patches:
            abs_path = os.path.abspath(patch.full_path)
            changed.setdefault(abs_path, set()).update(patch.added_line_numbers)

        warnings: list[CoverageWarning] = []
        for abs_path, lines in changed.items():
            fc = coverage_by_path.get(abs_path)
            if fc is None or not lines:
                continue
            kind = _construct_kind(abs_path, config)
            for construct, owned in group_lines(fc, kind, _display_name(abs_path, root)):
                coverage = {line: fc.lines[line] > 0 for line in owned}
                if not any(coverage.get(line) is False for line in lines):
                    continue
                ratio = round(sum(coverage.values()) / len(coverage), RATIO_PRECISION)
                warnings.append(
                    CoverageWarning(
                        file_path=abs_path,
                        construct=construct,
                        coverage=coverage,
                        ratio=ratio,
                    )
                )

        log.info("coverage_warnings_built", lcov=str(lcov_path), flagged=len(warnings))
        return warnings
