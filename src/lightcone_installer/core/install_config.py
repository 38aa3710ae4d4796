"""Persisted install configuration.

Remembers which virtual environment the packages were installed into so that
later runs skip the interactive prompt. Stored as TOML at
`<install root>/config.toml`:

    # Lightcone install config (auto-generated)
    venv_mode = "new"
    venv_path = "/home/me/.lightcone/.venv"

The file is parsed, never evaluated.
"""

import tomllib
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Literal, cast

import tomlkit

VenvMode = Literal["new", "existing"]
VENV_MODES: tuple[VenvMode, ...] = ("new", "existing")


@dataclass(frozen=True)
class InstallConfig:
    """Immutable venv selection.

    venv_mode is "new" when the installer owns the venv (it creates it and adds
    it to PATH) and "existing" when packages go into a user-supplied venv.
    """

    venv_mode: VenvMode
    venv_path: Path


def parse_install_config(text: str, source: Path) -> InstallConfig:
    """Parse and validate config file contents.

    Args:
        text: TOML document
        source: File the text came from (for error messages)

    Returns:
        InstallConfig with both fields populated

    Raises:
        ValueError: If the document is not TOML, or a field is missing, empty
            or has an unknown value
    """
    try:
        data = tomllib.loads(text)
    except tomllib.TOMLDecodeError as e:
        raise ValueError(f"Malformed config {source}: {e}") from e

    mode = data.get("venv_mode")
    path = data.get("venv_path")
    if not isinstance(mode, str) or not mode:
        raise ValueError(f"Missing 'venv_mode' in {source}")
    if not isinstance(path, str) or not path:
        raise ValueError(f"Missing 'venv_path' in {source}")
    if mode not in VENV_MODES:
        raise ValueError(f"Unknown venv_mode {mode!r} in {source}")

    return InstallConfig(venv_mode=cast(VenvMode, mode), venv_path=Path(path))


def render_install_config(config: InstallConfig) -> str:
    doc = tomlkit.document()
    doc.add(tomlkit.comment("Lightcone install config (auto-generated)"))
    doc["venv_mode"] = config.venv_mode
    doc["venv_path"] = str(config.venv_path)
    return tomlkit.dumps(doc)


class ConfigStore(ABC):
    """Abstract interface for install config persistence.

    Provides dependency injection for config access, enabling in-memory
    implementations for tests without touching the filesystem.
    """

    @abstractmethod
    def exists(self) -> bool:
        """Check if a saved config exists."""
        ...

    @abstractmethod
    def load(self) -> InstallConfig:
        """Load the saved config.

        Raises:
            FileNotFoundError: If config doesn't exist
            ValueError: If config is unreadable, malformed or missing required fields
        """
        ...

    @abstractmethod
    def save(self, config: InstallConfig) -> None:
        """Save config, replacing any previous one."""
        ...

    @abstractmethod
    def path(self) -> Path:
        """Get the path to the config file (for messages and debugging)."""
        ...


class FilesystemConfigStore(ConfigStore):
    """Production implementation that reads/writes <install root>/config.toml."""

    def __init__(self, config_path: Path) -> None:
        self._config_path = config_path

    def exists(self) -> bool:
        return self._config_path.is_file()

    def load(self) -> InstallConfig:
        if not self._config_path.is_file():
            raise FileNotFoundError(f"Install config not found at {self._config_path}")
        try:
            text = self._config_path.read_text(encoding="utf-8")
        except OSError as e:
            raise ValueError(f"Cannot read config {self._config_path}: {e}") from e
        return parse_install_config(text, self._config_path)

    def save(self, config: InstallConfig) -> None:
        self._config_path.parent.mkdir(parents=True, exist_ok=True)
        self._config_path.write_text(render_install_config(config), encoding="utf-8")

    def path(self) -> Path:
        return self._config_path


class InMemoryConfigStore(ConfigStore):
    """Test implementation that stores config in memory without touching filesystem."""

    def __init__(self, config: InstallConfig | None = None) -> None:
        """Initialize in-memory config store.

        Args:
            config: Initial config state (None = config doesn't exist)
        """
        self._config = config
        self._save_count = 0

    @property
    def config(self) -> InstallConfig | None:
        return self._config

    @property
    def save_count(self) -> int:
        """Number of save() calls, for test assertions."""
        return self._save_count

    def exists(self) -> bool:
        return self._config is not None

    def load(self) -> InstallConfig:
        if self._config is None:
            raise FileNotFoundError(f"Install config not found at {self.path()}")
        return self._config

    def save(self, config: InstallConfig) -> None:
        self._config = config
        self._save_count += 1

    def path(self) -> Path:
        return Path("/fake/lightcone/config.toml")
