"""Clone missing repositories and fast-forward present ones."""

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from lightcone_installer.cli.ensure import Ensure
from lightcone_installer.cli.output import info, ok, warn
from lightcone_installer.core.constants import GITHUB_ORG_NAME, REPOS, RepoSpec
from lightcone_installer.core.runner.abc import CommandRunner

logger = logging.getLogger(__name__)


class SyncStatus(Enum):
    CLONED = "cloned"
    UPDATED = "updated"
    DIVERGED = "diverged"


@dataclass(frozen=True)
class RepoSyncOutcome:
    repo: RepoSpec
    path: Path
    status: SyncStatus


def is_git_checkout(path: Path) -> bool:
    """A repository counts as present once its `.git` directory exists."""
    return (path / ".git").is_dir()


def update_repo(runner: CommandRunner, repo: RepoSpec, repo_dir: Path) -> RepoSyncOutcome:
    """Fast-forward an existing checkout; local divergence is only a warning."""
    info(f"Updating {repo.name}...")
    result = runner.run(["git", "-C", str(repo_dir), "pull", "--ff-only", "--quiet"])
    if result.success:
        ok(f"Updated {repo.name}")
        return RepoSyncOutcome(repo=repo, path=repo_dir, status=SyncStatus.UPDATED)

    logger.debug("pull --ff-only failed for %s: %s", repo.name, result.stderr.strip())
    warn(f"Could not fast-forward {repo.name} (you may have local changes)")
    return RepoSyncOutcome(repo=repo, path=repo_dir, status=SyncStatus.DIVERGED)


def clone_repo(
    runner: CommandRunner, repo: RepoSpec, repo_dir: Path, *, use_ssh: bool
) -> RepoSyncOutcome:
    """Clone a missing repository; any failure aborts the run."""
    url = repo.remote_url(use_ssh=use_ssh)
    info(f"Cloning {repo.name}...")
    logger.debug("Cloning %s from %s into %s", repo.name, url, repo_dir)
    result = runner.run(["git", "clone", "--quiet", url, str(repo_dir)])
    Ensure.command_succeeded(
        result,
        f"Failed to clone {repo.name}. "
        f"Do you have access to the {GITHUB_ORG_NAME} GitHub org?",
    )
    ok(f"Cloned {repo.name}")
    return RepoSyncOutcome(repo=repo, path=repo_dir, status=SyncStatus.CLONED)


def sync_repositories(
    runner: CommandRunner,
    install_root: Path,
    *,
    use_ssh: bool,
    repos: tuple[RepoSpec, ...] = REPOS,
) -> list[RepoSyncOutcome]:
    """Bring every repository under install_root up to date, in declared order.

    Later stages (linking, installing) assume all repositories exist, so a
    clone failure exits before the remaining repositories are touched.

    Args:
        runner: Command runner used for git
        install_root: Directory holding one checkout per repository
        use_ssh: Clone over SSH instead of HTTPS
        repos: Repositories to process

    Returns:
        One outcome per repository, in processing order
    """
    install_root.mkdir(parents=True, exist_ok=True)
    info(f"Setting up repositories in {install_root}...")

    outcomes: list[RepoSyncOutcome] = []
    for repo in repos:
        repo_dir = install_root / repo.name
        if is_git_checkout(repo_dir):
            outcomes.append(update_repo(runner, repo, repo_dir))
        else:
            outcomes.append(clone_repo(runner, repo, repo_dir, use_ssh=use_ssh))
    return outcomes
