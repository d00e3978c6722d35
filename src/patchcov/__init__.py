"""patchcov - flag untested lines added by a change.

Usage (as a review-host plugin):
    from patchcov import Runner

    messages = Runner(patches, config=load_config(repo_root)).run()
"""

from patchcov.annotator import annotate, index_warnings
from patchcov.config.loader import load_config
from patchcov.coverage.summary import report
from patchcov.git.models import AddedLine, Patch
from patchcov.messages import Message, Severity
from patchcov.runner import Runner, run

__version__ = "0.1.0"

__all__ = [
    "AddedLine",
    "Message",
    "Patch",
    "Runner",
    "Severity",
    "annotate",
    "index_warnings",
    "load_config",
    "report",
    "run",
    "__version__",
]
