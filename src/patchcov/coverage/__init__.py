"""Coverage parsing, warning analysis, and delta reporting.

Usage:
    from patchcov.coverage import LcovAnalyzer, report

    # Coverage delta between two runs
    messages = report("coverage/.last_base_run.json", "coverage/.last_run.json")

    # Warnings for constructs with uncovered added lines
    warnings = LcovAnalyzer().build(patches, AnalyzerConfig(lcov="coverage/lcov.info"))
"""

from patchcov.coverage.analyzer import (
    LcovAnalyzer,
    WarningAnalyzer,
    group_lines,
    resolve_lcov_path,
)
from patchcov.coverage.lcov import LcovParser
from patchcov.coverage.models import (
    CoverageParseError,
    CoverageReport,
    CoverageSummary,
    CoverageWarning,
    FileCoverage,
    FunctionCoverage,
    SourceConstruct,
)
from patchcov.coverage.summary import (
    build_delta_messages,
    delta_indicator,
    format_delta,
    load_summary,
    report,
)

__all__ = [
    # Models
    "CoverageParseError",
    "CoverageReport",
    "CoverageSummary",
    "CoverageWarning",
    "FileCoverage",
    "FunctionCoverage",
    "SourceConstruct",
    # Parsing
    "LcovParser",
    # Analysis
    "LcovAnalyzer",
    "WarningAnalyzer",
    "group_lines",
    "resolve_lcov_path",
    # Delta report
    "build_delta_messages",
    "delta_indicator",
    "format_delta",
    "load_summary",
    "report",
]
