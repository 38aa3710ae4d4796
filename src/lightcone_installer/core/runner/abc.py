"""Command execution interface.

This module provides a narrow abstraction over external processes (git, the
Python interpreter, pip) so the install stages can be tested without spawning
anything.

Architecture:
- CommandRunner: Abstract base class defining the interface
- RealCommandRunner: Production implementation using subprocess
- FakeCommandRunner: In-memory implementation for tests
"""

from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from dataclasses import dataclass


@dataclass(frozen=True)
class CommandResult:
    """Outcome of a single external command."""

    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def success(self) -> bool:
        return self.returncode == 0


class CommandRunner(ABC):
    """Abstract interface for running external commands.

    Every call is a single attempt. Implementations never raise for a non-zero
    exit; callers classify the result themselves.
    """

    @abstractmethod
    def which(self, name: str) -> str | None:
        """Resolve an executable on PATH.

        Args:
            name: Executable name (e.g. "git")

        Returns:
            Absolute path to the executable, or None if not found
        """
        ...

    @abstractmethod
    def run(
        self,
        cmd: Sequence[str],
        *,
        env: Mapping[str, str] | None = None,
    ) -> CommandResult:
        """Run a command to completion and capture its output.

        Args:
            cmd: Command and arguments
            env: Extra environment variables layered over the current environment

        Returns:
            CommandResult with exit status and captured output
        """
        ...
