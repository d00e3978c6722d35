"""Message text formatting.

Pure helpers so message wording can be tested without building patches or
warnings. Grammatically correct (1 line vs 2 lines).
"""

from __future__ import annotations

from collections.abc import Iterable


def pluralize(word: str, count: int) -> str:
    """Return word with an "s" unless count is exactly one."""
    return word if count == 1 else f"{word}s"


def format_line_list(lines: Iterable[int]) -> str:
    """Sorted, de-duplicated, comma-joined line numbers.

    Examples:
        [12, 10, 12] -> "10, 12"
        [7] -> "7"
    """
    return ", ".join(str(n) for n in sorted(set(lines)))


def format_missing_tests(kind: str, name: str, lines: Iterable[int], ratio: float) -> str:
    """Text for an added line that falls in an untested construct.

    Example:
        ("method", "bar", [10, 12], 0.5)
        -> "method bar missing tests for lines 10, 12 (coverage: 0.5)"
    """
    distinct = sorted(set(lines))
    return (
        f"{kind} {name} missing tests for {pluralize('line', len(distinct))} "
        f"{format_line_list(distinct)} (coverage: {ratio})"
    )
