"""Core exception types for repo-sync."""
from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    """Outcome categories callers can branch on instead of parsing messages."""

    PATH_NOT_FOUND = "path_not_found"
    NOT_A_REPOSITORY = "not_a_repository"
    REF_NOT_FOUND = "ref_not_found"
    REMOTE_UNREACHABLE = "remote_unreachable"
    NO_COMMITS = "no_commits"
    NO_REMOTE = "no_remote"
    GIT_FAILURE = "git_failure"


# Checked in order, against the lowercased git message.
_MESSAGE_PATTERNS = [
    ("no such remote", ErrorKind.NO_REMOTE),
    ("couldn't find remote ref", ErrorKind.REF_NOT_FOUND),
    ("not found in upstream", ErrorKind.REF_NOT_FOUND),
    ("not a git repository", ErrorKind.NOT_A_REPOSITORY),
    ("no such file or directory", ErrorKind.PATH_NOT_FOUND),
    ("needed a single revision", ErrorKind.NO_COMMITS),
    ("ambiguous argument 'head'", ErrorKind.NO_COMMITS),
    ("does not have any commits", ErrorKind.NO_COMMITS),
    ("does not exist", ErrorKind.REMOTE_UNREACHABLE),
    ("could not read from remote", ErrorKind.REMOTE_UNREACHABLE),
    ("unable to access", ErrorKind.REMOTE_UNREACHABLE),
    ("could not resolve host", ErrorKind.REMOTE_UNREACHABLE),
]


def classify(message: str) -> ErrorKind:
    """Map a git error message to an ErrorKind.

    Examples:
        fatal: repository 'foobar' does not exist -> REMOTE_UNREACHABLE
        fatal: couldn't find remote ref dev -> REF_NOT_FOUND
        anything unrecognised -> GIT_FAILURE
    """
    lowered = message.lower()
    for pattern, kind in _MESSAGE_PATTERNS:
        if pattern in lowered:
            return kind
    return ErrorKind.GIT_FAILURE


class RepoSyncError(Exception):
    """Base exception for all repo-sync errors."""
    pass


class ConfigError(RepoSyncError):
    """Raised when configuration cannot be loaded or is invalid."""
    pass


class GitCommandError(RepoSyncError):
    """Raised when the git executable fails or cannot be started.

    The message is git's own stderr, unchanged.
    """

    def __init__(self, message: str, returncode: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.returncode = returncode


class OperationError(RepoSyncError):
    """Base exception for a failed repository operation.

    The string form is "<prefix>: <detail>", where detail is the underlying
    git message kept verbatim.
    """

    prefix = "repository operation failed"

    def __init__(self, detail: str, kind: Optional[ErrorKind] = None):
        super().__init__(f"{self.prefix}: {detail}")
        self.detail = detail
        self.kind = kind if kind is not None else classify(detail)


class CloneError(OperationError):
    """Raised when a remote repository cannot be cloned."""

    prefix = "unable to clone plugin"


class UpdateError(OperationError):
    """Raised when a local clone cannot be brought up to date."""

    prefix = "unable to update plugin"


class HeadError(OperationError):
    """Raised when the HEAD commit cannot be resolved."""

    prefix = "unable to resolve HEAD"


class RemoteError(OperationError):
    """Raised when the remote URL cannot be read."""

    prefix = "unable to read remote URL"


class HistoryError(OperationError):
    """Raised when commits between two revisions cannot be listed."""

    prefix = "unable to list commits"
