"""Patch annotation - flag added lines that fall in untested constructs.

Only warnings touched by the change are reported: a construct whose
uncovered lines were all present before the change is left alone.
"""

from __future__ import annotations

import os
from collections.abc import Callable, Iterable, Sequence
from pathlib import Path

from patchcov.core.formatting import format_missing_tests
from patchcov.core.languages import is_source_file
from patchcov.core.logging import get_logger
from patchcov.coverage.models import CoverageWarning
from patchcov.git.models import Patch
from patchcov.messages import Message, Severity

log = get_logger(__name__)

DEFAULT_LEVEL = Severity.WARNING

WarningsForFile = Callable[[str], Sequence[CoverageWarning]]


def canonical_path(path: str | Path) -> str:
    """Absolute, normalized form used on both sides of path comparison."""
    return os.path.abspath(os.fspath(path))


class WarningIndex:
    """Warnings grouped by canonical absolute path, in analyzer order.

    Callable as ``warnings_for_file``.
    """

    def __init__(self, warnings: Iterable[CoverageWarning]) -> None:
        self._by_path: dict[str, list[CoverageWarning]] = {}
        for warning in warnings:
            self._by_path.setdefault(canonical_path(warning.file_path), []).append(warning)

    def __call__(self, path: str) -> list[CoverageWarning]:
        return self._by_path.get(canonical_path(path), [])

    def __len__(self) -> int:
        return sum(len(ws) for ws in self._by_path.values())


def index_warnings(warnings: Iterable[CoverageWarning]) -> WarningIndex:
    return WarningIndex(warnings)


def is_annotatable(patch: Patch, languages: Iterable[str] | None = None) -> bool:
    """A patch qualifies if it adds lines to a recognized source file."""
    return patch.additions > 0 and is_source_file(patch.full_path, languages)


def first_offending_line(patch: Patch, warning: CoverageWarning) -> int | None:
    """First added line number, in patch order, the warning marks uncovered."""
    return next((n for n in patch.added_line_numbers if warning.uncovered(n)), None)


def annotate_patch(
    patch: Patch,
    warnings: Sequence[CoverageWarning],
    *,
    level: Severity = DEFAULT_LEVEL,
) -> list[Message]:
    messages: list[Message] = []
    for warning in warnings:
        lineno = first_offending_line(patch, warning)
        if lineno is None:
            continue
        text = format_missing_tests(
            warning.construct.kind,
            warning.construct.name,
            warning.uncovered_lines,
            warning.ratio,
        )
        messages.extend(
            Message(patch.path, line, level, text)
            for line in patch.added_lines
            if line.new_lineno == lineno
        )
    return messages


def annotate(
    patches: Iterable[Patch],
    warnings_for_file: WarningsForFile,
    *,
    languages: Iterable[str] | None = None,
    level: Severity = DEFAULT_LEVEL,
) -> list[Message]:
    """Messages for every added line that first touches an uncovered construct.

    Args:
        patches: Patches in host order.
        warnings_for_file: Returns the warnings for a canonical absolute path.
        languages: Restrict to these source languages. None = all known.
        level: Severity of emitted messages.
    """
    language_filter = list(languages) if languages is not None else None
    messages: list[Message] = []
    for patch in patches:
        if not is_annotatable(patch, language_filter):
            continue
        path = canonical_path(patch.full_path)
        warnings = [w for w in warnings_for_file(path) if canonical_path(w.file_path) == path]
        found = annotate_patch(patch, warnings, level=level)
        log.debug("patch_annotated", path=patch.path, warnings=len(warnings), messages=len(found))
        messages.extend(found)
    return messages
