"""Pydantic configuration models with env var support.

Configuration Hierarchy (highest to lowest precedence):
1. Direct kwargs to load_config()
2. Environment variables (PATCHCOV__SECTION__KEY)
3. Repo YAML (.patchcov.yaml)
4. Global YAML (~/.config/patchcov/config.yaml)
5. Built-in defaults (this file)

Environment Variable Format:
    PATCHCOV__<SECTION>__<KEY>=<VALUE>

Examples:
    PATCHCOV__LOGGING__LEVEL=DEBUG
    PATCHCOV__ANALYZER__LCOV=coverage/lcov.info
    PATCHCOV__ANNOTATOR__LEVEL=error
"""

import re
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from patchcov.core.languages import LANGUAGES_BY_NAME

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
MessageLevel = Literal["info", "warning", "error"]

_RUBY_SYNTAX_RE = re.compile(r"^(ruby)?\d+(\.?\d+)*$")


class LogOutputConfig(BaseModel):
    """Single logging output configuration.

    Env vars: Not directly configurable via env (use YAML for multi-output).
    """

    format: Literal["json", "console"] = "console"
    destination: str = "stderr"  # stderr, stdout, or absolute file path
    level: LogLevel | None = None  # Inherits from parent if None

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, v: str) -> str:
        if v in ("stderr", "stdout"):
            return v
        path = Path(v).expanduser()
        if not path.is_absolute():
            raise ValueError(f"File destination must be absolute path: {v}")
        return str(path)


class LoggingConfig(BaseModel):
    """Logging configuration.

    Env vars:
        PATCHCOV__LOGGING__LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """

    level: LogLevel = Field(
        default="INFO",
        description="Root log level. DEBUG logs every flagged construct.",
    )
    outputs: list[LogOutputConfig] = Field(default_factory=lambda: [LogOutputConfig()])


class AnalyzerConfig(BaseModel):
    """Options handed to the coverage warning analyzer.

    None of these are interpreted by the annotator itself. Absent values use
    the analyzer's own defaults.

    Env vars:
        PATCHCOV__ANALYZER__LCOV: Coverage data file
        PATCHCOV__ANALYZER__RUBY_SYNTAX: Language syntax version hint
        PATCHCOV__ANALYZER__PATH: Source root
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    lcov: str | None = Field(
        default=None,
        description="LCOV file path. Default: coverage/lcov/<project>.lcov, "
        "then coverage/lcov.info under the source root.",
    )
    ruby_syntax: str | None = Field(
        default=None,
        alias="ruby-syntax",
        description="Language syntax version hint, e.g. '3.2' or 'ruby33'.",
    )
    path: str | None = Field(
        default=None,
        description="Source root used to resolve relative coverage paths. Default: cwd.",
    )

    @field_validator("ruby_syntax")
    @classmethod
    def validate_ruby_syntax(cls, v: str | None) -> str | None:
        if v is None:
            return v
        if not _RUBY_SYNTAX_RE.match(v):
            raise ValueError(f"Unrecognized syntax version: {v!r}")
        return v

    @field_validator("path")
    @classmethod
    def validate_path(cls, v: str | None) -> str | None:
        if v is None:
            return v
        path = Path(v).expanduser()
        if not path.is_dir():
            raise ValueError(f"Source root is not a directory: {v}")
        return str(path)


class AnnotatorConfig(BaseModel):
    """Patch annotation options.

    Env vars:
        PATCHCOV__ANNOTATOR__LEVEL: Severity of missing-test messages
    """

    languages: list[str] | None = Field(
        default=None,
        description="Only annotate files of these languages. None = every known language.",
    )
    level: MessageLevel = Field(
        default="warning",
        description="Severity attached to missing-test messages.",
    )

    @field_validator("languages")
    @classmethod
    def validate_languages(cls, v: list[str] | None) -> list[str] | None:
        if v is None:
            return v
        normalized = [name.lower() for name in v]
        unknown = [name for name in normalized if name not in LANGUAGES_BY_NAME]
        if unknown:
            valid = ", ".join(sorted(LANGUAGES_BY_NAME))
            raise ValueError(f"Unknown languages: {', '.join(unknown)}. Valid: {valid}")
        return normalized


class ReportConfig(BaseModel):
    """Coverage delta report inputs, relative to the source root."""

    base_path: str = Field(
        default="coverage/.last_base_run.json",
        description="Coverage summary from the base branch run.",
    )
    head_path: str = Field(
        default="coverage/.last_run.json",
        description="Coverage summary from the current run.",
    )


class PatchCovConfig(BaseModel):
    """Root config (type hint only; use load_config() to instantiate)."""

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    analyzer: AnalyzerConfig = Field(default_factory=AnalyzerConfig)
    annotator: AnnotatorConfig = Field(default_factory=AnnotatorConfig)
    report: ReportConfig = Field(default_factory=ReportConfig)
