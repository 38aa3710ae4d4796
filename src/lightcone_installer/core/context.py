"""Application context with dependency injection."""

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from lightcone_installer.core.constants import (
    CONFIG_FILENAME,
    DEFAULT_VENV_DIRNAME,
    INSTALL_ROOT_DIRNAME,
    INSTALL_ROOT_ENV_VAR,
)
from lightcone_installer.core.install_config import ConfigStore, FilesystemConfigStore
from lightcone_installer.core.prompter import Prompter, RealPrompter
from lightcone_installer.core.runner.abc import CommandRunner
from lightcone_installer.core.runner.real import RealCommandRunner


@dataclass(frozen=True)
class InstallerContext:
    """Immutable context holding all dependencies for an install run.

    Created at CLI entry point and threaded through every stage.
    Frozen to prevent accidental modification at runtime.

    environ is a snapshot of the variables the stages read (SHELL, VIRTUAL_ENV);
    stages never consult os.environ directly.
    """

    runner: CommandRunner
    prompter: Prompter
    config_store: ConfigStore
    install_root: Path
    home: Path
    use_ssh: bool
    environ: Mapping[str, str] = field(default_factory=dict)

    @property
    def default_venv_path(self) -> Path:
        return self.install_root / DEFAULT_VENV_DIRNAME

    def repo_dir(self, name: str) -> Path:
        return self.install_root / name

    @staticmethod
    def for_test(
        *,
        runner: CommandRunner | None = None,
        prompter: Prompter | None = None,
        config_store: ConfigStore | None = None,
        install_root: Path | None = None,
        home: Path | None = None,
        use_ssh: bool = False,
        environ: Mapping[str, str] | None = None,
    ) -> "InstallerContext":
        """Create test context with fakes for any unspecified dependency.

        Args:
            runner: Optional CommandRunner. If None, creates empty FakeCommandRunner.
            prompter: Optional Prompter. If None, creates a non-interactive FakePrompter.
            config_store: Optional ConfigStore. If None, creates empty InMemoryConfigStore.
            install_root: Optional root. If None, uses Path("/test/lightcone").
            home: Optional home directory. If None, uses Path("/test/home").
            use_ssh: SSH transport flag (default False).
            environ: Optional environment snapshot. If None, uses {}.
        """
        from tests.fakes.prompter import FakePrompter

        from lightcone_installer.core.install_config import InMemoryConfigStore
        from lightcone_installer.core.runner.fake import FakeCommandRunner

        return InstallerContext(
            runner=runner if runner is not None else FakeCommandRunner(),
            prompter=prompter if prompter is not None else FakePrompter(interactive=False),
            config_store=config_store if config_store is not None else InMemoryConfigStore(),
            install_root=install_root if install_root is not None else Path("/test/lightcone"),
            home=home if home is not None else Path("/test/home"),
            use_ssh=use_ssh,
            environ=dict(environ or {}),
        )


def resolve_install_root(environ: Mapping[str, str], home: Path) -> Path:
    """Installation root: $LIGHTCONE_DIR if set, else ~/.lightcone."""
    override = environ.get(INSTALL_ROOT_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return home / INSTALL_ROOT_DIRNAME


def create_context(*, use_ssh: bool) -> InstallerContext:
    """Create production context with real implementations.

    Called at CLI entry point to create the context for the run.
    """
    home = Path.home()
    environ = dict(os.environ)
    install_root = resolve_install_root(environ, home)

    return InstallerContext(
        runner=RealCommandRunner(),
        prompter=RealPrompter(),
        config_store=FilesystemConfigStore(install_root / CONFIG_FILENAME),
        install_root=install_root,
        home=home,
        use_ssh=use_ssh,
        environ=environ,
    )
