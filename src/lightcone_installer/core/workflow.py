"""End-to-end install pipeline.

Stages run strictly in order, each assuming the previous one succeeded:

1. preflight        git and a Python >= 3.11 interpreter
2. repo sync        clone or fast-forward ASP, Canvas, Prism
3. link             Prism/extern/ASP -> ASP
4. venv selection   saved config, prompt, or silent default
5. package install  create venv if new, then pip install -e in dependency order
6. shell PATH       only when this run created the venv

Fatal conditions exit from inside the stage via SystemExit; everything a
stage learns is collected on InstallResult.
"""

import logging
from dataclasses import dataclass, field

from lightcone_installer.core.context import InstallerContext
from lightcone_installer.core.dependency_link import LinkOutcome, link_dependencies
from lightcone_installer.core.install_config import InstallConfig
from lightcone_installer.core.package_install import ensure_venv, install_packages
from lightcone_installer.core.preflight import PythonInterpreter, run_preflight
from lightcone_installer.core.repo_sync import RepoSyncOutcome, sync_repositories
from lightcone_installer.core.shell_integration import configure_shell_path
from lightcone_installer.core.venv_layout import venv_bin_dir
from lightcone_installer.core.venv_selection import select_environment

logger = logging.getLogger(__name__)


@dataclass
class InstallResult:
    """Accumulated outcome of one install run."""

    python: PythonInterpreter | None = None
    repos: list[RepoSyncOutcome] = field(default_factory=list)
    link: LinkOutcome | None = None
    config: InstallConfig | None = None
    venv_created: bool = False
    installed_packages: list[str] = field(default_factory=list)
    shell_configured: bool = False


def run_install(ctx: InstallerContext) -> InstallResult:
    """Run every stage against ctx and return what happened."""
    result = InstallResult()
    logger.debug("Install root: %s (ssh=%s)", ctx.install_root, ctx.use_ssh)

    python = run_preflight(ctx.runner)
    result.python = python

    result.repos = sync_repositories(ctx.runner, ctx.install_root, use_ssh=ctx.use_ssh)
    result.link = link_dependencies(ctx.install_root)

    config = select_environment(
        ctx.config_store,
        ctx.prompter,
        default_venv_path=ctx.default_venv_path,
        home=ctx.home,
        environ=ctx.environ,
    )
    result.config = config

    result.venv_created = ensure_venv(ctx.runner, config, python)
    result.installed_packages = install_packages(ctx.runner, config.venv_path, ctx.install_root)

    if result.venv_created:
        result.shell_configured = configure_shell_path(
            ctx.environ, ctx.home, venv_bin_dir(config.venv_path)
        )
    return result
