"""Plugin repository handle: clone, update and inspect a local git clone."""
import logging
from pathlib import Path
from typing import List, Optional, Type

from repo_sync.core.config import SyncConfig
from repo_sync.core.errors import (
    CloneError,
    ErrorKind,
    GitCommandError,
    HeadError,
    HistoryError,
    OperationError,
    RemoteError,
    UpdateError,
)
from repo_sync.git.command import run_git
from repo_sync.git.models import CommitSummary, UpdateResult

logger = logging.getLogger(__name__)

HEAD = "HEAD"
FETCH_HEAD = "FETCH_HEAD"
BRANCH_PREFIX = "refs/heads/"


class Repository:
    """Handle on a directory that holds, or will hold, a plugin clone.

    Creating a handle does no I/O. Each operation re-opens the repository
    on disk, so changes made by other processes between calls are seen.
    A directory must not be operated on by two callers at once.

    Args:
        path: Local directory of the clone
        remote: Remote to clone from and sync against (defaults to config.remote)
        config: Shared settings (defaults to SyncConfig())
    """

    def __init__(
        self,
        path: Path,
        remote: Optional[str] = None,
        config: Optional[SyncConfig] = None,
    ):
        self.config = config or SyncConfig()
        self.path = Path(path).absolute()
        self.remote = remote or self.config.remote

    def __repr__(self) -> str:
        return f"Repository({str(self.path)!r}, remote={self.remote!r})"

    @property
    def _tracking_prefix(self) -> str:
        return f"refs/remotes/{self.remote}/"

    def _git(self, *args: str) -> str:
        return run_git(
            args,
            cwd=self.path,
            git=self.config.git_executable,
            ceiling=self.path.resolve().parent,
        )

    def _open(self, error_cls: Type[OperationError]) -> None:
        """Check that the path exists and is the root of a git repository."""
        if not self.path.exists():
            raise error_cls(
                f"open {self.path}: no such file or directory",
                kind=ErrorKind.PATH_NOT_FOUND,
            )
        try:
            self._git("rev-parse", "--git-dir")
        except GitCommandError as e:
            raise error_cls(e.message, kind=ErrorKind.NOT_A_REPOSITORY) from e

    def _resolve(self, revision: str, error_cls: Type[OperationError]) -> str:
        """Resolve a revision to the commit it names."""
        try:
            return self._git("rev-parse", "--verify", f"{revision}^{{commit}}")
        except GitCommandError as e:
            raise error_cls(e.message) from e

    def clone(self, url: str, ref: str = "") -> None:
        """Clone url into the handle's path, checking out ref if given.

        Raises:
            CloneError: If the remote or ref cannot be found, or git fails.
                The path may hold partial content afterwards.
        """
        if not url:
            raise CloneError("repository URL must not be empty", kind=ErrorKind.REMOTE_UNREACHABLE)

        args = ["clone", "--quiet", "--origin", self.remote]
        if ref:
            args += ["--branch", ref]
        args += ["--", url, str(self.path)]

        logger.info(f"Cloning {url} to {self.path}" + (f" at {ref}" if ref else ""))
        try:
            run_git(args, git=self.config.git_executable)
        except GitCommandError as e:
            raise CloneError(e.message) from e

    def head(self) -> str:
        """Return the commit HEAD points at.

        Raises:
            HeadError: If the path is not a repository or has no commits
        """
        self._open(HeadError)
        return self._resolve(HEAD, HeadError)

    def remote_url(self) -> str:
        """Return the URL configured for the handle's remote.

        Raises:
            RemoteError: If the path is not a repository or the remote is missing
        """
        self._open(RemoteError)
        try:
            return self._git("remote", "get-url", self.remote)
        except GitCommandError as e:
            raise RemoteError(e.message) from e

    def update(self, ref: str = "") -> UpdateResult:
        """Fetch from the remote and hard-reset the clone to ref.

        An empty ref follows whatever branch the remote's HEAD names at
        the time of the call. The reset only touches paths git tracks, so
        untracked files and directories are left as they are. When the
        clone is already at the target commit nothing on disk changes.

        Returns:
            UpdateResult with the resolved ref and HEAD before and after

        Raises:
            UpdateError: If the path is missing or not a repository, the ref
                is not on the remote, or fetch/reset fails
        """
        self._open(UpdateError)
        if ref:
            self._check_ref(ref)
        previous = self._resolve(HEAD, UpdateError)

        logger.info(f"Fetching {self.remote} into {self.path}")
        try:
            if ref:
                branch = self._fetch_ref(ref)
                label = ref
                target = self._resolve(FETCH_HEAD, UpdateError)
            else:
                self._git("fetch", "--quiet", "--no-prune", self.remote)
                branch = self._default_branch()
                label = BRANCH_PREFIX + branch
                target = self._resolve(self._tracking_prefix + branch, UpdateError)
        except GitCommandError as e:
            raise UpdateError(e.message) from e

        if target == previous:
            logger.info(f"{self.path} already up to date at {label} ({previous[:12]})")
            return UpdateResult(ref=label, previous=previous, current=previous)

        try:
            if branch:
                # HEAD moves to the branch ref; index and working tree still
                # describe previous until the reset.
                self._git("symbolic-ref", HEAD, BRANCH_PREFIX + branch)
            else:
                self._git("update-ref", "--no-deref", HEAD, previous)
            self._git("reset", "--hard", "--quiet", target)
        except GitCommandError as e:
            raise UpdateError(e.message) from e

        current = self._resolve(HEAD, UpdateError)
        logger.info(f"Updated {self.path} to {label}: {previous[:12]} -> {current[:12]}")
        return UpdateResult(ref=label, previous=previous, current=current)

    def _default_branch(self) -> str:
        """Ask the remote which branch its HEAD names."""
        self._git("remote", "set-head", self.remote, "--auto")
        symref = self._git("symbolic-ref", self._tracking_prefix + HEAD)
        return symref[len(self._tracking_prefix):]

    def _check_ref(self, ref: str) -> None:
        """Reject refs git would read as an option or that are not valid names."""
        missing = f"fatal: couldn't find remote ref {ref}"
        if ref.startswith("-"):
            raise UpdateError(missing, kind=ErrorKind.REF_NOT_FOUND)
        try:
            self._git("check-ref-format", "--allow-onelevel", ref)
        except GitCommandError as e:
            raise UpdateError(missing, kind=ErrorKind.REF_NOT_FOUND) from e

    def _fetch_ref(self, ref: str) -> Optional[str]:
        """Fetch ref into FETCH_HEAD.

        Returns:
            ref if the remote has it as a branch, None for tags and other refs
        """
        refspec = f"+{BRANCH_PREFIX}{ref}:{self._tracking_prefix}{ref}"
        try:
            self._git("fetch", "--quiet", "--no-prune", self.remote, "--", refspec)
            return ref
        except GitCommandError:
            logger.debug(f"{ref} is not a branch on {self.remote}, fetching it as given")
        self._git("fetch", "--quiet", "--no-prune", self.remote, "--", ref)
        return None

    def log(self, start: str, end: str) -> List[CommitSummary]:
        """List commits reachable from end but not from start, newest first.

        Raises:
            HistoryError: If either revision is unknown
        """
        self._open(HistoryError)
        try:
            output = self._git("log", "--format=%H%x09%s", f"{start}..{end}", "--")
        except GitCommandError as e:
            raise HistoryError(e.message) from e

        commits = []
        for line in output.splitlines():
            revision, _, summary = line.partition("\t")
            commits.append(CommitSummary(revision=revision, summary=summary))
        return commits
