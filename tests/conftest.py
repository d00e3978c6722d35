"""Root conftest.py for test configuration.

Ensures local src/ directory takes priority over any installed packages,
and provides builders shared by annotator/runner/analyzer tests.
"""

import sys
from collections.abc import Callable, Iterable
from pathlib import Path

import pytest

# Insert local src directory at the beginning of sys.path
# This ensures that the local patchcov package is used, not any installed one
_src_dir = Path(__file__).parent.parent / "src"
if str(_src_dir) not in sys.path:
    sys.path.insert(0, str(_src_dir))

from patchcov.coverage.models import CoverageWarning, SourceConstruct  # noqa: E402
from patchcov.git.models import Patch  # noqa: E402


@pytest.fixture
def make_patch(tmp_path: Path) -> Callable[..., Patch]:
    """Build a Patch rooted at tmp_path from bare line numbers."""

    def _make(path: str, lines: Iterable[int], root: Path | None = None) -> Patch:
        return Patch.create(path, root or tmp_path, [(n, f"line {n}") for n in lines])

    return _make


@pytest.fixture
def make_warning(tmp_path: Path) -> Callable[..., CoverageWarning]:
    """Build a CoverageWarning for a root-relative path."""

    def _make(
        path: str,
        name: str,
        coverage: dict[int, bool],
        ratio: float,
        kind: str = "method",
        root: Path | None = None,
    ) -> CoverageWarning:
        return CoverageWarning(
            file_path=str((root or tmp_path) / path),
            construct=SourceConstruct(kind=kind, name=name),
            coverage=coverage,
            ratio=ratio,
        )

    return _make
