"""Repo Sync CLI - Command line interface for repo-sync."""
import logging
import sys
from pathlib import Path

import click

from repo_sync.core.config import SyncConfig
from repo_sync.core.errors import ConfigError, ErrorKind, OperationError
from repo_sync.git import Repository

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(name)s: %(message)s",
)
logger = logging.getLogger("repo_sync")

EXIT_CODES = {
    ErrorKind.REF_NOT_FOUND: 3,
    ErrorKind.PATH_NOT_FOUND: 4,
    ErrorKind.NOT_A_REPOSITORY: 4,
    ErrorKind.NO_COMMITS: 4,
    ErrorKind.REMOTE_UNREACHABLE: 5,
    ErrorKind.NO_REMOTE: 5,
}


def _fail(e: OperationError) -> None:
    logger.error(str(e))
    sys.exit(EXIT_CODES.get(e.kind, 1))


@click.group()
@click.option(
    "--config",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="JSON configuration file",
)
@click.pass_context
def main(ctx, config):
    """Repo Sync - clone and update plugin repositories.

    Exit codes:
        0: Success
        1: Generic runtime failure
        3: Requested ref not found on the remote
        4: Path missing, not a repository, or without commits
        5: Remote unreachable or not configured
        7: Configuration error
    """
    try:
        ctx.obj = SyncConfig.load(config)
    except ConfigError as e:
        logger.error(str(e))
        sys.exit(7)
    logging.getLogger().setLevel(ctx.obj.log_level)


@main.command()
@click.argument("url")
@click.argument("path", type=click.Path(file_okay=False, path_type=Path))
@click.option("--ref", default="", help="Branch or tag to check out (default: remote HEAD)")
@click.pass_obj
def clone(config: SyncConfig, url: str, path: Path, ref: str):
    """Clone URL into PATH.

    Examples:
        repo-sync clone https://github.com/asdf-vm/asdf-nodejs.git plugins/nodejs
        repo-sync clone ./local-plugin plugins/local --ref v1.2.0
    """
    repo = Repository(path, config=config)
    try:
        repo.clone(url, ref)
        head = repo.head()
    except OperationError as e:
        _fail(e)

    click.echo(f"[OK] Cloned {url}")
    click.echo(f"  Path: {repo.path}")
    click.echo(f"  Commit: {head[:12]}")


@main.command()
@click.argument("path", type=click.Path(file_okay=False, path_type=Path))
@click.option("--ref", default="", help="Branch or tag to update to (default: remote HEAD)")
@click.pass_obj
def update(config: SyncConfig, path: Path, ref: str):
    """Update the clone at PATH from its remote, keeping untracked files.

    Prints the commits pulled in by the update.
    """
    repo = Repository(path, config=config)
    try:
        result = repo.update(ref)
        changes = repo.log(result.previous, result.current) if result.changed else []
    except OperationError as e:
        _fail(e)

    if not result.changed:
        click.echo(f"[OK] Already up to date: {result.ref} ({result.current[:12]})")
        return

    click.echo(f"[OK] Updated {result.ref}: {result.previous[:12]} -> {result.current[:12]}")
    for commit in changes:
        click.echo(f"  {commit.short} {commit.summary}")


@main.command()
@click.argument("path", type=click.Path(file_okay=False, path_type=Path))
@click.pass_obj
def head(config: SyncConfig, path: Path):
    """Print the commit checked out at PATH."""
    try:
        click.echo(Repository(path, config=config).head())
    except OperationError as e:
        _fail(e)


@main.command("remote-url")
@click.argument("path", type=click.Path(file_okay=False, path_type=Path))
@click.pass_obj
def remote_url(config: SyncConfig, path: Path):
    """Print the URL of the remote the clone at PATH syncs against."""
    try:
        click.echo(Repository(path, config=config).remote_url())
    except OperationError as e:
        _fail(e)


if __name__ == "__main__":
    main()
