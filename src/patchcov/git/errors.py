"""Errors raised while building patches from a repository."""


class GitError(Exception):
    """Patches could not be read from the repository."""


class NotARepositoryError(GitError):
    def __init__(self, path: str) -> None:
        super().__init__(f"Not a git repository: {path}")
        self.path = path


class RefNotFoundError(GitError):
    """A diff endpoint does not name a commit."""

    def __init__(self, ref: str, reason: str = "no such reference") -> None:
        super().__init__(f"Cannot diff against {ref!r}: {reason}")
        self.ref = ref
        self.reason = reason


class UnbornHeadError(GitError):
    """HEAD was requested as the diff base but the branch has no commits yet."""

    def __init__(self) -> None:
        super().__init__("HEAD has no commits yet (unborn branch)")
