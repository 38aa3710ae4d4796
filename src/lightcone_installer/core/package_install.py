"""Create the venv if needed and install the repositories into it."""

import logging
from pathlib import Path

from lightcone_installer.cli.ensure import Ensure
from lightcone_installer.cli.output import info, ok
from lightcone_installer.core.constants import (
    REPOS,
    SCM_PRETEND_VERSION,
    SCM_VERSION_ENV_VAR,
    RepoSpec,
)
from lightcone_installer.core.install_config import InstallConfig
from lightcone_installer.core.preflight import PythonInterpreter
from lightcone_installer.core.runner.abc import CommandRunner
from lightcone_installer.core.venv_layout import find_venv_pip

logger = logging.getLogger(__name__)


def ensure_venv(runner: CommandRunner, config: InstallConfig, python: PythonInterpreter) -> bool:
    """Create the venv for mode "new" when its directory does not exist yet.

    Returns:
        True if a venv was created by this call
    """
    if config.venv_mode != "new" or config.venv_path.is_dir():
        logger.debug("Skipping venv creation for %s (%s)", config.venv_path, config.venv_mode)
        return False

    info(f"Creating virtual environment at {config.venv_path}...")
    result = runner.run([python.command, "-m", "venv", str(config.venv_path)])
    Ensure.command_succeeded(result, f"Failed to create virtual environment at {config.venv_path}")
    ok("Created venv")
    return True


def install_target(repo: RepoSpec, repo_dir: Path) -> str:
    """Editable-install target, e.g. `/root/Prism[canvas]`."""
    if repo.extras:
        return f"{repo_dir}[{','.join(repo.extras)}]"
    return str(repo_dir)


def install_packages(
    runner: CommandRunner,
    venv_path: Path,
    install_root: Path,
    repos: tuple[RepoSpec, ...] = REPOS,
) -> list[str]:
    """Editable-install each repository in dependency order.

    The first failing install exits; later packages are not attempted.

    Returns:
        Installed package names, in install order
    """
    pip = Ensure.not_none(find_venv_pip(venv_path), f"Cannot find pip in {venv_path}")

    info("Installing packages (this may take a minute)...")
    env = {SCM_VERSION_ENV_VAR: SCM_PRETEND_VERSION}

    installed: list[str] = []
    for repo in repos:
        target = install_target(repo, install_root / repo.name)
        result = runner.run([str(pip), "install", "--quiet", "-e", target], env=env)
        if not result.success:
            logger.debug("pip install %s failed: %s", target, result.stderr.strip())
        Ensure.command_succeeded(result, f"Failed to install {repo.package}")
        ok(f"Installed {repo.package}")
        installed.append(repo.package)
    return installed
