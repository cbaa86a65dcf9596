"""Pytest fixtures for repo-sync tests."""
import subprocess
from pathlib import Path
from typing import Dict

import pytest

from repo_sync.git import Repository

PLUGIN_SCRIPTS = ["download", "install", "list-all"]


def git(repo_path: Path, *args: str) -> str:
    """Run git in repo_path and return stripped stdout."""
    result = subprocess.run(
        ["git", *args],
        cwd=repo_path,
        capture_output=True,
        text=True,
        check=True,
    )
    return result.stdout.strip()


def commit_file(repo_path: Path, name: str, content: str, message: str) -> str:
    """Write a file, commit it, and return the new commit SHA."""
    target = repo_path / name
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(content)
    git(repo_path, "add", name)
    git(repo_path, "commit", "-m", message)
    return git(repo_path, "rev-parse", "HEAD")


def init_repo(repo_path: Path) -> Path:
    """Create an empty repository whose initial branch is master."""
    repo_path.mkdir(parents=True)
    git(repo_path, "init")
    git(repo_path, "symbolic-ref", "HEAD", "refs/heads/master")
    git(repo_path, "config", "user.email", "test@example.com")
    git(repo_path, "config", "user.name", "Test User")
    return repo_path


@pytest.fixture
def remote_repo(tmp_path: Path) -> Dict[str, any]:
    """Create a plugin repository to clone from.

    History:
        master: initial (tag v0.1) -> latest-stable
        dev:    master + dev-only commit

    Returns dict with:
        - path: Path to repo (HEAD on master)
        - url: str(path), usable as a clone URL
        - initial_sha: SHA of the first commit (tag v0.1, annotated)
        - master_sha: SHA of master
        - dev_sha: SHA of dev
    """
    repo_path = init_repo(tmp_path / "remote" / "dummy_plugin")

    for script in PLUGIN_SCRIPTS:
        (repo_path / "bin").mkdir(exist_ok=True)
        (repo_path / "bin" / script).write_text(f"#!/usr/bin/env bash\necho {script}\n")
    git(repo_path, "add", "bin")
    git(repo_path, "commit", "-m", "Initial plugin scripts")
    initial_sha = git(repo_path, "rev-parse", "HEAD")
    git(repo_path, "tag", "-a", "v0.1", "-m", "Release v0.1")

    master_sha = commit_file(
        repo_path,
        "bin/latest-stable",
        "#!/usr/bin/env bash\necho 1.0.0\n",
        "Add latest-stable",
    )

    git(repo_path, "checkout", "-q", "-b", "dev")
    dev_sha = commit_file(repo_path, "DEV.md", "work in progress\n", "Add dev notes")
    git(repo_path, "checkout", "-q", "master")

    return {
        "path": repo_path,
        "url": str(repo_path),
        "initial_sha": initial_sha,
        "master_sha": master_sha,
        "dev_sha": dev_sha,
    }


@pytest.fixture
def cloned_repo(tmp_path: Path, remote_repo: Dict[str, any]) -> Repository:
    """Clone remote_repo's default branch into tmp_path/plugins/dummy."""
    repo = Repository(tmp_path / "plugins" / "dummy")
    repo.clone(remote_repo["url"])
    return repo
