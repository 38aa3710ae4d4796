"""Link ASP into Prism's extern/ directory.

Prism's build looks for ASP sources at `Prism/extern/ASP`; a symlink to the
sibling checkout keeps a single copy of ASP on disk.

An existing symlink is never replaced, even when it points elsewhere. A stale
target is reported with a warning so the user can remove the link and rerun.
"""

import logging
import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from lightcone_installer.cli.output import ok, warn
from lightcone_installer.core.constants import LINK_DIRNAME, LINK_HOST_REPO, LINK_TARGET_REPO

logger = logging.getLogger(__name__)


class LinkStatus(Enum):
    CREATED = "created"
    PRESENT = "present"
    STALE = "stale"
    BLOCKED = "blocked"


@dataclass(frozen=True)
class LinkOutcome:
    link_path: Path
    target: Path
    status: LinkStatus


def _points_at(link_path: Path, target: Path) -> bool:
    raw = Path(os.readlink(link_path))
    if not raw.is_absolute():
        raw = link_path.parent / raw
    return os.path.realpath(raw) == os.path.realpath(target)


def ensure_symlink(link_path: Path, target: Path) -> LinkOutcome:
    """Create link_path -> target unless a symlink is already there.

    The parent directory is created if missing.
    """
    link_path.parent.mkdir(parents=True, exist_ok=True)

    if link_path.is_symlink():
        if _points_at(link_path, target):
            logger.debug("Link %s already points at %s", link_path, target)
            return LinkOutcome(link_path=link_path, target=target, status=LinkStatus.PRESENT)
        current = os.readlink(link_path)
        warn(
            f"{link_path} points to {current}, not {target}. "
            f"Remove it and rerun to relink."
        )
        return LinkOutcome(link_path=link_path, target=target, status=LinkStatus.STALE)

    if link_path.exists():
        warn(f"{link_path} exists and is not a symlink; leaving it in place.")
        return LinkOutcome(link_path=link_path, target=target, status=LinkStatus.BLOCKED)

    link_path.symlink_to(target, target_is_directory=True)
    return LinkOutcome(link_path=link_path, target=target, status=LinkStatus.CREATED)


def link_dependencies(install_root: Path) -> LinkOutcome:
    link_path = install_root / LINK_HOST_REPO / LINK_DIRNAME / LINK_TARGET_REPO
    outcome = ensure_symlink(link_path, install_root / LINK_TARGET_REPO)
    if outcome.status is LinkStatus.CREATED:
        ok(f"Linked {LINK_HOST_REPO}/{LINK_DIRNAME}/{LINK_TARGET_REPO}")
    return outcome
