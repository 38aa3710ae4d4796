"""Fixed names, locations and strings shared across install stages."""

from dataclasses import dataclass

GITHUB_HTTPS_BASE = "https://github.com/LightconeResearch"
GITHUB_SSH_BASE = "git@github.com:LightconeResearch"
GITHUB_ORG_NAME = "LightconeResearch"

INSTALL_ROOT_DIRNAME = ".lightcone"
INSTALL_ROOT_ENV_VAR = "LIGHTCONE_DIR"
DEBUG_ENV_VAR = "LIGHTCONE_DEBUG"
CONFIG_FILENAME = "config.toml"
DEFAULT_VENV_DIRNAME = ".venv"

# Consumed by the build metadata of the installed packages
SCM_VERSION_ENV_VAR = "SETUPTOOLS_SCM_PRETEND_VERSION"
SCM_PRETEND_VERSION = "0.1.0"

PYTHON_CANDIDATES = ("python3", "python")
MIN_PYTHON_VERSION = (3, 11)

SHELL_SENTINEL = "# Added by Lightcone installer"


@dataclass(frozen=True)
class RepoSpec:
    """A repository cloned under the installation root.

    `package` is the distribution name used in install messages; `extras` are
    requested when the repository is installed into the venv.
    """

    name: str
    package: str
    extras: tuple[str, ...] = ()

    def remote_url(self, *, use_ssh: bool) -> str:
        base = GITHUB_SSH_BASE if use_ssh else GITHUB_HTTPS_BASE
        return f"{base}/{self.name}.git"


# Declaration order is clone order and install order (base -> dependent -> top-level)
REPOS: tuple[RepoSpec, ...] = (
    RepoSpec(name="ASP", package="asp"),
    RepoSpec(name="Canvas", package="asp-canvas"),
    RepoSpec(name="Prism", package="prism", extras=("canvas",)),
)

# Prism/extern/ASP -> <root>/ASP
LINK_HOST_REPO = "Prism"
LINK_DIRNAME = "extern"
LINK_TARGET_REPO = "ASP"
