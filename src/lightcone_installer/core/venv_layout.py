"""Executable locations inside a virtual environment.

A venv created on POSIX keeps executables in `bin/`; one created on Windows
keeps them in `Scripts/` with an `.exe` suffix. Both layouts are probed so a
venv is recognized regardless of the host that created it.
"""

from pathlib import Path

PYTHON_CANDIDATES = (Path("bin") / "python", Path("Scripts") / "python.exe")
PIP_CANDIDATES = (Path("bin") / "pip", Path("Scripts") / "pip.exe")


def _first_file(venv_path: Path, candidates: tuple[Path, ...]) -> Path | None:
    for relative in candidates:
        candidate = venv_path / relative
        if candidate.is_file():
            return candidate
    return None


def find_venv_python(venv_path: Path) -> Path | None:
    """Return the venv interpreter, or None if venv_path is not a venv."""
    return _first_file(venv_path, PYTHON_CANDIDATES)


def find_venv_pip(venv_path: Path) -> Path | None:
    """Return the venv's pip executable, or None if neither layout has one."""
    return _first_file(venv_path, PIP_CANDIDATES)


def venv_bin_dir(venv_path: Path) -> Path:
    return venv_path / "bin"
