"""Git repository management: clone, update and inspect plugin clones."""
from repo_sync.git.models import CommitSummary, UpdateResult
from repo_sync.git.repository import Repository
from repo_sync.core.errors import CloneError, HeadError, RemoteError, UpdateError

__all__ = [
    "Repository",
    "UpdateResult",
    "CommitSummary",
    "CloneError",
    "UpdateError",
    "HeadError",
    "RemoteError",
]
