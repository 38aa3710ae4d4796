"""Prerequisite checks run before anything is written to disk."""

import logging
from dataclasses import dataclass

from lightcone_installer.cli.ensure import Ensure, fail
from lightcone_installer.cli.output import info, ok
from lightcone_installer.core.constants import MIN_PYTHON_VERSION, PYTHON_CANDIDATES
from lightcone_installer.core.runner.abc import CommandRunner

logger = logging.getLogger(__name__)

VERSION_PROBE = 'import sys; print(f"{sys.version_info.major}.{sys.version_info.minor}")'


@dataclass(frozen=True)
class PythonInterpreter:
    """An interpreter that satisfies MIN_PYTHON_VERSION."""

    command: str
    version: tuple[int, int]

    @property
    def version_str(self) -> str:
        return f"{self.version[0]}.{self.version[1]}"


def parse_version(output: str) -> tuple[int, int] | None:
    """Parse `major.minor` probe output; None if it isn't two integers."""
    parts = output.strip().split(".")
    if len(parts) != 2:
        return None
    major, minor = parts
    if not (major.isdecimal() and minor.isdecimal()):
        return None
    return int(major), int(minor)


def meets_minimum(version: tuple[int, int]) -> bool:
    """Major must match exactly; minor must be at least the minimum."""
    major, minor = version
    return major == MIN_PYTHON_VERSION[0] and minor >= MIN_PYTHON_VERSION[1]


def find_python(runner: CommandRunner) -> PythonInterpreter | None:
    """Probe PYTHON_CANDIDATES in order and return the first that qualifies."""
    for candidate in PYTHON_CANDIDATES:
        if runner.which(candidate) is None:
            logger.debug("Interpreter candidate %s not on PATH", candidate)
            continue

        result = runner.run([candidate, "-c", VERSION_PROBE])
        if not result.success:
            logger.debug("Version probe failed for %s: %s", candidate, result.stderr.strip())
            continue

        version = parse_version(result.stdout)
        if version is None:
            logger.debug("Unparseable version from %s: %r", candidate, result.stdout)
            continue
        if not meets_minimum(version):
            logger.debug("Interpreter %s is too old: %s", candidate, version)
            continue

        return PythonInterpreter(command=candidate, version=version)
    return None


def run_preflight(runner: CommandRunner) -> PythonInterpreter:
    """Verify git and a qualifying interpreter exist; exit otherwise.

    Returns:
        The interpreter later used to create a new venv
    """
    info("Checking prerequisites...")

    Ensure.tool_on_path(runner, "git", "git is required but not found. Please install git first.")
    ok("git found")

    python = find_python(runner)
    if python is None:
        required = ".".join(str(part) for part in MIN_PYTHON_VERSION)
        fail(f"Python >= {required} is required but not found.")
    ok(f"Python {python.version_str} ({python.command})")
    return python
