"""Host-facing entry point.

The review host builds a Runner with the change's patches and calls run().
Everything patchcov reports for the change comes back as one flat list:
the coverage delta summary (if both summary files exist) followed by the
per-line missing-test messages.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from patchcov.annotator import annotate, index_warnings, is_annotatable
from patchcov.config.models import PatchCovConfig
from patchcov.core.errors import SummaryParseError
from patchcov.core.logging import clear_run_id, get_logger, set_run_id
from patchcov.coverage import summary
from patchcov.coverage.analyzer import LcovAnalyzer, WarningAnalyzer, source_root
from patchcov.git.models import Patch
from patchcov.messages import Message, Severity

log = get_logger(__name__)


class Runner:
    """Coverage annotation runner for one change."""

    def __init__(
        self,
        patches: Sequence[Patch] | None,
        commit: str | None = None,
        *,
        config: PatchCovConfig | None = None,
        analyzer: WarningAnalyzer | None = None,
    ) -> None:
        self._patches = list(patches or [])
        self._commit = commit  # accepted for host compatibility, unused
        self._config = config or PatchCovConfig()
        self._analyzer = analyzer or LcovAnalyzer()

    @property
    def patches(self) -> list[Patch]:
        return self._patches

    def _summary_paths(self) -> tuple[Path, Path]:
        root = source_root(self._config.analyzer)
        return root / self._config.report.base_path, root / self._config.report.head_path

    def run(self) -> list[Message]:
        """Build all messages for the change.

        A malformed coverage summary (or an unreadable input file) aborts the
        run with an empty result; analyzer failures propagate.
        """
        if not self._patches:
            return []

        set_run_id()
        try:
            return self._run()
        finally:
            clear_run_id()

    def _run(self) -> list[Message]:
        log.info("run_started", patches=len(self._patches))

        try:
            delta_messages = summary.report(*self._summary_paths())
        except (SummaryParseError, OSError) as e:
            log.error("run_aborted", error=str(e))
            return []

        languages = self._config.annotator.languages
        qualifying = [p for p in self._patches if is_annotatable(p, languages)]
        patch_messages: list[Message] = []
        if qualifying:
            warnings = self._analyzer.build(self._patches, self._config.analyzer)
            patch_messages = annotate(
                qualifying,
                index_warnings(warnings),
                languages=languages,
                level=Severity(self._config.annotator.level),
            )

        log.info(
            "run_finished",
            qualifying=len(qualifying),
            delta_messages=len(delta_messages),
            patch_messages=len(patch_messages),
        )
        return [*delta_messages, *patch_messages]


def run(
    patches: Sequence[Patch] | None,
    commit: str | None = None,
    *,
    config: PatchCovConfig | None = None,
    analyzer: WarningAnalyzer | None = None,
) -> list[Message]:
    """Functional shortcut for Runner(...).run()."""
    return Runner(patches, commit, config=config, analyzer=analyzer).run()
