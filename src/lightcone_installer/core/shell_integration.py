"""Put the venv's bin directory on the user's PATH.

Appends a guarded block to the startup file of the detected shell:

    # Added by Lightcone installer
    export PATH="/home/me/.lightcone/.venv/bin:$PATH"

Startup files are never created and never rewritten; a file already holding
the sentinel is left alone.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from lightcone_installer.cli.output import ok, warn
from lightcone_installer.core.constants import SHELL_SENTINEL

logger = logging.getLogger(__name__)

DEFAULT_SHELL = "/bin/bash"


@dataclass(frozen=True)
class ShellTarget:
    """The startup file to edit and the statement syntax it needs."""

    shell: str
    rc_file: Path


def detect_shell_target(environ: Mapping[str, str], home: Path) -> ShellTarget | None:
    """Map $SHELL to a startup file.

    Bash prefers ~/.bash_profile when it exists (login shells on macOS) and
    falls back to ~/.bashrc.

    Returns:
        ShellTarget, or None for unsupported shells
    """
    shell_path = environ.get("SHELL") or DEFAULT_SHELL
    shell_name = Path(shell_path).name

    if shell_name == "zsh":
        return ShellTarget(shell="zsh", rc_file=home / ".zshrc")
    if shell_name == "bash":
        bash_profile = home / ".bash_profile"
        if bash_profile.is_file():
            return ShellTarget(shell="bash", rc_file=bash_profile)
        return ShellTarget(shell="bash", rc_file=home / ".bashrc")
    if shell_name == "fish":
        return ShellTarget(shell="fish", rc_file=home / ".config" / "fish" / "config.fish")
    return None


def path_statement(shell: str, bin_dir: Path) -> str:
    if shell == "fish":
        return f"fish_add_path {bin_dir}"
    return f'export PATH="{bin_dir}:$PATH"'


def add_to_path(target: ShellTarget, bin_dir: Path) -> bool:
    """Append the guarded PATH block to target.rc_file.

    Returns:
        True if the file was modified
    """
    rc_file = target.rc_file
    if not rc_file.is_file():
        logger.debug("Startup file %s does not exist; not creating it", rc_file)
        return False

    content = rc_file.read_text(encoding="utf-8", errors="replace")
    if SHELL_SENTINEL in content:
        logger.debug("Startup file %s already configured", rc_file)
        return False

    block = f"\n{SHELL_SENTINEL}\n{path_statement(target.shell, bin_dir)}\n"
    with rc_file.open("a", encoding="utf-8") as f:
        f.write(block)
    ok(f"Added {bin_dir} to PATH in {rc_file.name}")
    return True


def configure_shell_path(environ: Mapping[str, str], home: Path, bin_dir: Path) -> bool:
    """Detect the shell and add bin_dir to its PATH; warn for unknown shells.

    Returns:
        True if a startup file was modified
    """
    target = detect_shell_target(environ, home)
    if target is None:
        warn(f"Could not detect shell. Add {bin_dir} to your PATH manually.")
        return False
    return add_to_path(target, bin_dir)
