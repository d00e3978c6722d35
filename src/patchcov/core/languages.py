"""Source language definitions.

Maps file extensions and exact filenames to the languages whose added lines
are worth annotating. Patches touching anything else (docs, lockfiles,
images) are skipped before coverage analysis runs.

RULES:
1. Filenames are lowercase, EXACT match only (no globs)
2. Extensions include the dot and are matched case-insensitively
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True, slots=True)
class Language:
    """Canonical definition for a language name.

    Attributes:
        name: Unique identifier (lowercase, e.g., "ruby", "python")
        extensions: File extensions including dot (e.g., ".rb", ".rake")
        filenames: Special filenames to detect (lowercase, EXACT match only)
    """

    name: str
    extensions: frozenset[str]
    filenames: frozenset[str] = field(default_factory=frozenset)


ALL_LANGUAGES: tuple[Language, ...] = (
    Language(
        name="ruby",
        extensions=frozenset({".rb", ".rake", ".gemspec", ".ru", ".jbuilder", ".builder"}),
        filenames=frozenset({"gemfile", "rakefile", "guardfile", "capfile", "vagrantfile"}),
    ),
    Language(
        name="python",
        extensions=frozenset({".py", ".pyw"}),
    ),
    Language(
        name="javascript",
        extensions=frozenset({".js", ".jsx", ".ts", ".tsx", ".mjs", ".cjs"}),
    ),
    Language(
        name="go",
        extensions=frozenset({".go"}),
    ),
    Language(
        name="rust",
        extensions=frozenset({".rs"}),
    ),
    Language(
        name="java",
        extensions=frozenset({".java", ".kt", ".kts", ".scala"}),
    ),
    Language(
        name="php",
        extensions=frozenset({".php"}),
    ),
    Language(
        name="elixir",
        extensions=frozenset({".ex", ".exs"}),
    ),
)

LANGUAGES_BY_NAME: dict[str, Language] = {lang.name: lang for lang in ALL_LANGUAGES}


def get_language(name: str) -> Language | None:
    return LANGUAGES_BY_NAME.get(name.lower())


def detect_language(path: str | Path, languages: Iterable[str] | None = None) -> str | None:
    """Return the language name for a path, or None if it is not source.

    Args:
        path: File path (only the name is inspected).
        languages: Restrict detection to these language names. None = all.
    """
    candidates = (
        ALL_LANGUAGES
        if languages is None
        else tuple(LANGUAGES_BY_NAME[n] for n in languages if n in LANGUAGES_BY_NAME)
    )
    p = Path(path)
    suffix = p.suffix.lower()
    filename = p.name.lower()
    for lang in candidates:
        if suffix and suffix in lang.extensions:
            return lang.name
        if filename in lang.filenames:
            return lang.name
    return None


def is_source_file(path: str | Path, languages: Iterable[str] | None = None) -> bool:
    """Check whether a path is a recognized source file."""
    return detect_language(path, languages) is not None
