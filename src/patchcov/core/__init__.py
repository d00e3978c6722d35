"""Core module exports."""

from patchcov.core.errors import (
    AnalyzerError,
    ConfigError,
    ErrorCode,
    PatchCovError,
    SummaryParseError,
)
from patchcov.core.logging import (
    clear_run_id,
    configure_logging,
    get_logger,
    get_run_id,
    set_run_id,
)

__all__ = [
    # Errors
    "AnalyzerError",
    "ConfigError",
    "ErrorCode",
    "PatchCovError",
    "SummaryParseError",
    # Logging
    "clear_run_id",
    "configure_logging",
    "get_logger",
    "get_run_id",
    "set_run_id",
]
