"""patchcov error types with typed error codes.

Error code ranges:
- 2xxx: Config
- 3xxx: Coverage summary
- 4xxx: Analyzer
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any

from pydantic import ValidationError


class ErrorCode(IntEnum):
    """Typed error codes for programmatic handling."""

    # Config (2xxx)
    CONFIG_PARSE_ERROR = 2001
    CONFIG_INVALID_VALUE = 2002

    # Coverage summary (3xxx)
    SUMMARY_PARSE_ERROR = 3001

    # Analyzer (4xxx)
    ANALYZER_ERROR = 4001


@dataclass(frozen=True, slots=True)
class PatchCovError(Exception):
    """Base error with structured context."""

    code: ErrorCode
    message: str
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def error_name(self) -> str:
        """String identifier for logging (e.g., 'SUMMARY_PARSE_ERROR')."""
        return self.code.name

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON output."""
        return {
            "code": self.code.value,
            "error": self.error_name,
            "message": self.message,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.error_name}: {self.message}"


class ConfigError(PatchCovError):
    """Configuration-related errors."""

    @classmethod
    def parse_error(cls, path: str, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_PARSE_ERROR,
            message=f"Failed to parse config at {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def invalid_value(cls, field: str, value: Any, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_INVALID_VALUE,
            message=f"Invalid value for '{field}': {reason}",
            details={"field": field, "value": str(value), "reason": reason},
        )

    @classmethod
    def from_validation(cls, exc: ValidationError, prefix: str = "") -> "ConfigError":
        """Report the first pydantic validation failure as a dotted field path."""
        err = exc.errors()[0]
        field = ".".join(str(loc) for loc in (prefix, *err["loc"]) if loc != "")
        return cls.invalid_value(field, err.get("input"), err["msg"])


class SummaryParseError(PatchCovError):
    """A coverage summary file exists but cannot be read or understood."""

    @classmethod
    def malformed(cls, path: str, reason: str) -> "SummaryParseError":
        return cls(
            code=ErrorCode.SUMMARY_PARSE_ERROR,
            message=f"Malformed coverage summary at {path}: {reason}",
            details={"path": path, "reason": reason},
        )


class AnalyzerError(PatchCovError):
    """The coverage warning analyzer failed to build its report."""

    @classmethod
    def failed(cls, reason: str, **details: Any) -> "AnalyzerError":
        return cls(
            code=ErrorCode.ANALYZER_ERROR,
            message=f"Coverage analysis failed: {reason}",
            details=details,
        )

