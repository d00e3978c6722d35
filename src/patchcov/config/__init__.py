"""Config module exports."""

from patchcov.config.loader import load_config
from patchcov.config.models import (
    AnalyzerConfig,
    AnnotatorConfig,
    LoggingConfig,
    LogOutputConfig,
    PatchCovConfig,
    ReportConfig,
)

__all__ = [
    "load_config",
    "AnalyzerConfig",
    "AnnotatorConfig",
    "LoggingConfig",
    "LogOutputConfig",
    "PatchCovConfig",
    "ReportConfig",
]
