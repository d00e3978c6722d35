"""Review message model - what patchcov hands back to the host."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from patchcov.git.models import AddedLine

SOURCE_TAG = "patchcov"


class Severity(Enum):
    """Message severity level."""

    INFO = "info"
    WARNING = "warning"
    ERROR = "error"

    @property
    def rank(self) -> int:
        return _RANK[self]


_RANK = {Severity.INFO: 0, Severity.WARNING: 1, Severity.ERROR: 2}


@dataclass(frozen=True, slots=True)
class Message:
    """A single review comment.

    ``path`` and ``line`` are None for change-wide messages such as the
    coverage delta summary.
    """

    path: str | None
    line: AddedLine | None
    level: Severity
    text: str
    source: str = SOURCE_TAG

    @property
    def lineno(self) -> int | None:
        return self.line.new_lineno if self.line is not None else None

    def to_dict(self) -> dict[str, Any]:
        return {
            "path": self.path,
            "line": self.lineno,
            "level": self.level.value,
            "text": self.text,
            "source": self.source,
        }
