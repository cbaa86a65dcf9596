"""Run the git executable."""
import logging
import os
import subprocess
from pathlib import Path
from typing import Optional, Sequence

from repo_sync.core.errors import GitCommandError

logger = logging.getLogger(__name__)


def git_env(ceiling: Optional[Path] = None) -> dict:
    """Environment for git subprocesses.

    Prompts are disabled so a missing credential fails instead of blocking,
    and messages are kept in English for substring diagnostics. With
    ``ceiling`` set, git does not search above that directory for a
    repository.
    """
    env = dict(os.environ)
    env["GIT_TERMINAL_PROMPT"] = "0"
    env["LC_ALL"] = "C"
    if ceiling is not None:
        env["GIT_CEILING_DIRECTORIES"] = str(ceiling)
    return env


def run_git(
    args: Sequence[str],
    cwd: Optional[Path] = None,
    git: str = "git",
    ceiling: Optional[Path] = None,
) -> str:
    """Run a git subcommand and return its stripped stdout.

    Args:
        args: Arguments after the git executable, e.g. ["rev-parse", "HEAD"]
        cwd: Directory to run in (passed as ``git -C``)
        git: git executable name or path
        ceiling: Directory above which git must not look for a repository

    Returns:
        Standard output with surrounding whitespace removed

    Raises:
        GitCommandError: If git cannot be started or exits non-zero
    """
    cmd = [git]
    if cwd is not None:
        cmd += ["-C", str(cwd)]
    cmd += list(args)

    logger.debug(f"Running {' '.join(cmd)}")
    try:
        result = subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            env=git_env(ceiling),
        )
    except OSError as e:
        raise GitCommandError(f"unable to run {git}: {e}") from e

    if result.returncode != 0:
        message = result.stderr.strip() or result.stdout.strip()
        raise GitCommandError(message, returncode=result.returncode)

    return result.stdout.strip()
