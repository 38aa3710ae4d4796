"""Choose the virtual environment the packages are installed into.

States:
- unconfigured: nothing known yet
- configured: a mode and a non-empty path are known
- prompting: no usable saved config; ask the user (or default silently)

A saved config short-circuits the prompt on every later run. A choice reached
by prompting is saved, replacing whatever was there.
"""

import logging
from collections.abc import Mapping
from pathlib import Path

from lightcone_installer.cli.ensure import Ensure, fail
from lightcone_installer.cli.output import info, user_output, warn
from lightcone_installer.core.install_config import ConfigStore, InstallConfig
from lightcone_installer.core.prompter import Prompter

logger = logging.getLogger(__name__)

CHOICE_NEW = "1"
CHOICE_EXISTING = "2"
ACTIVE_VENV_ENV_VAR = "VIRTUAL_ENV"


def load_saved_config(store: ConfigStore) -> InstallConfig | None:
    """Return the saved config, or None if absent or unusable.

    An unreadable or malformed file is reported and then treated as absent; the next save
    overwrites it.
    """
    if not store.exists():
        return None
    try:
        return store.load()
    except ValueError as e:
        warn(f"Ignoring saved install config: {e}")
        return None


def expand_home(raw_path: str, home: Path) -> Path:
    """Expand a leading `~` against home; other paths are returned as given."""
    if raw_path == "~":
        return home
    if raw_path.startswith("~/"):
        return home / raw_path[2:]
    return Path(raw_path)


def _ask_existing_venv_path(prompter: Prompter, environ: Mapping[str, str]) -> str:
    active = environ.get(ACTIVE_VENV_ENV_VAR)
    if active:
        user_output(f"  Detected active venv: {active}")
        # Non-interactive runs accept the active venv rather than block
        use_active = True
        if prompter.is_interactive():
            use_active = prompter.ask_yes_no("  Use it?", default=True)
        if use_active:
            return active
    return prompter.ask_path("  Path to venv")


def prompt_for_config(
    prompter: Prompter,
    *,
    default_venv_path: Path,
    home: Path,
    environ: Mapping[str, str],
) -> InstallConfig:
    """Ask where to install; non-interactive runs take the default venv.

    Raises:
        SystemExit: On an unknown menu choice or a path that is not a venv
    """
    if prompter.is_interactive():
        user_output()
        info("Where should Lightcone packages be installed?")
        user_output(f"  1) Create a new venv at {default_venv_path} (default)")
        user_output("  2) Install into an existing virtual environment")
        choice = prompter.ask_choice("  Choice", default=CHOICE_NEW)
    else:
        logger.debug("stdin is not a terminal; using default venv")
        choice = CHOICE_NEW

    if choice == CHOICE_NEW:
        return InstallConfig(venv_mode="new", venv_path=default_venv_path)
    if choice == CHOICE_EXISTING:
        raw_path = _ask_existing_venv_path(prompter, environ)
        Ensure.invariant(bool(raw_path), "No venv path given")
        venv_path = expand_home(raw_path, home)
        Ensure.valid_venv(venv_path)
        return InstallConfig(venv_mode="existing", venv_path=venv_path)
    fail(f"Invalid choice: {choice}")


def select_environment(
    store: ConfigStore,
    prompter: Prompter,
    *,
    default_venv_path: Path,
    home: Path,
    environ: Mapping[str, str],
) -> InstallConfig:
    """Resolve the venv selection, prompting only when nothing usable is saved.

    Returns:
        InstallConfig with venv_mode in {"new", "existing"} and a non-empty path
    """
    saved = load_saved_config(store)
    if saved is not None:
        info(f"Using previously configured venv: {saved.venv_path}")
        return saved

    config = prompt_for_config(
        prompter, default_venv_path=default_venv_path, home=home, environ=environ
    )
    store.save(config)
    logger.debug("Saved install config to %s: %s", store.path(), config)
    return config
