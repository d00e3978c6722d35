"""Git patch source module."""

from patchcov.git.errors import (
    GitError,
    NotARepositoryError,
    RefNotFoundError,
    UnbornHeadError,
)
from patchcov.git.models import AddedLine, Patch
from patchcov.git.ops import PatchSource, collect_patches

__all__ = [
    "PatchSource",
    "collect_patches",
    # Models
    "AddedLine",
    "Patch",
    # Errors
    "GitError",
    "NotARepositoryError",
    "RefNotFoundError",
    "UnbornHeadError",
]
