"""Coverage delta report.

Compares the aggregate coverage of the base branch run against the current
run. Input files look like SimpleCov's ``.last_run.json``:

    {"result": {"covered_percent": 82.345}}

The report is optional: when either file is missing nothing is reported.
"""

from __future__ import annotations

import json
from pathlib import Path

from patchcov.core.errors import SummaryParseError
from patchcov.core.logging import get_logger
from patchcov.coverage.models import CoverageSummary
from patchcov.messages import Message, Severity

log = get_logger(__name__)

DEFAULT_BASE_PATH = Path("coverage/.last_base_run.json")
DEFAULT_HEAD_PATH = Path("coverage/.last_run.json")

REPORT_TITLE = "Coverage report"
UP_INDICATOR = ":arrow_up:"
DOWN_INDICATOR = ":arrow_down:"
PRECISION = 3


def load_summary(path: Path) -> CoverageSummary:
    """Read one coverage summary record.

    Raises:
        FileNotFoundError: If the file does not exist.
        SummaryParseError: If it cannot be read or lacks result.covered_percent.
    """
    try:
        raw = path.read_text()
    except FileNotFoundError:
        raise
    except (OSError, UnicodeDecodeError) as e:
        raise SummaryParseError.malformed(str(path), str(e)) from e

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise SummaryParseError.malformed(str(path), f"invalid JSON: {e}") from e

    result = data.get("result") if isinstance(data, dict) else None
    if not isinstance(result, dict):
        raise SummaryParseError.malformed(str(path), "missing 'result' object")
    if "covered_percent" not in result:
        raise SummaryParseError.malformed(str(path), "missing 'result.covered_percent'")

    percent = result["covered_percent"]
    if isinstance(percent, bool) or not isinstance(percent, int | float):
        raise SummaryParseError.malformed(
            str(path), f"'covered_percent' is not a number: {percent!r}"
        )
    return CoverageSummary(covered_percent=float(percent))


def delta_indicator(diff: float) -> str:
    return DOWN_INDICATOR if diff < 0 else UP_INDICATOR


def format_delta(base: float, head: float) -> str:
    """One-line base/head/diff summary.

    Example:
        (80.0, 82.345) -> "base branch: **80.0%**, head branch: **82.345%**,
                           diff: **2.345%** :arrow_up:"
    """
    # adding 0.0 turns a rounded -0.0 into 0.0
    diff = round(head - base, PRECISION) + 0.0
    return (
        f"base branch: **{round(base, PRECISION)}%**, "
        f"head branch: **{round(head, PRECISION)}%**, "
        f"diff: **{diff}%** {delta_indicator(diff)}"
    )


def report(
    base_path: Path | str = DEFAULT_BASE_PATH,
    head_path: Path | str = DEFAULT_HEAD_PATH,
) -> list[Message]:
    """Build the coverage delta messages (title, then body).

    Returns an empty list when either summary file is absent.

    Raises:
        SummaryParseError: If a present file is malformed.
    """
    base_path = Path(base_path)
    head_path = Path(head_path)
    missing = [str(p) for p in (base_path, head_path) if not p.exists()]
    if missing:
        log.debug("coverage_delta_skipped", missing=missing)
        return []

    try:
        base = load_summary(base_path)
        head = load_summary(head_path)
    except FileNotFoundError as e:
        log.debug("coverage_delta_skipped", missing=[str(e.filename)])
        return []

    body = format_delta(base.covered_percent, head.covered_percent)
    log.info(
        "coverage_delta",
        base=base.covered_percent,
        head=head.covered_percent,
    )
    return [
        Message(None, None, Severity.INFO, REPORT_TITLE),
        Message(None, None, Severity.INFO, body),
    ]


build_delta_messages = report
