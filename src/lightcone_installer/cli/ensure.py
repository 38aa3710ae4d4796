"""Error handling utilities with styled output.

This module provides the Ensure class for asserting invariants during an
install with consistent, user-friendly error messages. Every failure prints a
red `✗` line to stderr and exits with status 1.

Domain-Specific Methods:
- Prerequisite validations (executable on PATH)
- Command outcome validations (external command succeeded)
- Virtual environment validations (interpreter present)
"""

from pathlib import Path
from typing import NoReturn, TypeVar

from lightcone_installer.cli.output import error
from lightcone_installer.core.runner.abc import CommandResult, CommandRunner
from lightcone_installer.core.venv_layout import find_venv_python

T = TypeVar("T")


def fail(error_message: str) -> NoReturn:
    """Print a styled error and exit with status 1.

    Raises:
        SystemExit: Always (with exit code 1)
    """
    error(error_message)
    raise SystemExit(1)


class Ensure:
    """Helper class for asserting invariants with consistent error handling."""

    @staticmethod
    def invariant(condition: bool, error_message: str) -> None:
        """Ensure condition is true, otherwise output styled error and exit.

        Args:
            condition: Boolean condition to check
            error_message: Error message to display if condition is false

        Raises:
            SystemExit: If condition is false (with exit code 1)
        """
        if not condition:
            fail(error_message)

    @staticmethod
    def not_none(value: T | None, error_message: str) -> T:
        """Ensure value is not None, otherwise output styled error and exit.

        Provides type narrowing from `T | None` to `T`.

        Raises:
            SystemExit: If value is None (with exit code 1)
        """
        if value is None:
            fail(error_message)
        return value

    @staticmethod
    def tool_on_path(runner: CommandRunner, name: str, error_message: str) -> str:
        """Ensure an executable resolves on PATH and return its location.

        Example:
            >>> Ensure.tool_on_path(runner, "git", "git is required but not found.")
        """
        return Ensure.not_none(runner.which(name), error_message)

    @staticmethod
    def command_succeeded(result: CommandResult, error_message: str) -> CommandResult:
        """Ensure an external command exited with status 0.

        Raises:
            SystemExit: If the command failed (with exit code 1)
        """
        if not result.success:
            fail(error_message)
        return result

    @staticmethod
    def valid_venv(venv_path: Path, error_message: str | None = None) -> None:
        """Ensure venv_path contains a Python interpreter.

        Accepts either the POSIX (`bin/python`) or Windows
        (`Scripts/python.exe`) layout.
        """
        if find_venv_python(venv_path) is None:
            if error_message is None:
                error_message = f"No valid venv found at {venv_path}"
            fail(error_message)
