"""Fake CommandRunner for testing.

FakeCommandRunner is an in-memory implementation that accepts pre-configured
state in its constructor. Construct instances directly with keyword arguments.
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path

from lightcone_installer.core.runner.abc import CommandResult, CommandRunner


@dataclass(frozen=True)
class RunCall:
    """A recorded call to FakeCommandRunner.run()."""

    cmd: tuple[str, ...]
    env: dict[str, str] = field(default_factory=dict)


class FakeCommandRunner(CommandRunner):
    """In-memory fake implementation of command execution.

    This class has NO public setup methods. All state is provided via constructor
    using keyword arguments with sensible defaults.

    Results are looked up by exact command first, then by the longest configured
    prefix of the command. Unconfigured commands succeed with empty output.

    With simulate_filesystem=True, successful `git clone <url> <dest>` creates
    `<dest>/.git` and successful `<python> -m venv <path>` creates the POSIX
    interpreter and pip executables under `<path>/bin`, so idempotence can be
    exercised on a real tmp_path.
    """

    def __init__(
        self,
        *,
        executables: Mapping[str, str] | None = None,
        results: Mapping[tuple[str, ...], CommandResult] | None = None,
        simulate_filesystem: bool = False,
    ) -> None:
        """Create FakeCommandRunner with pre-configured state.

        Args:
            executables: Mapping of executable name -> resolved path for which()
            results: Mapping of command (or command prefix) -> CommandResult
            simulate_filesystem: Apply clone/venv side effects to the filesystem
        """
        self._executables = dict(executables or {})
        self._results = dict(results or {})
        self._simulate_filesystem = simulate_filesystem
        self._run_calls: list[RunCall] = []

    @property
    def run_calls(self) -> list[RunCall]:
        """Get the list of run() calls that were made.

        This property is for test assertions only.
        """
        return self._run_calls.copy()

    @property
    def commands(self) -> list[tuple[str, ...]]:
        """Commands passed to run(), in call order."""
        return [call.cmd for call in self._run_calls]

    def which(self, name: str) -> str | None:
        return self._executables.get(name)

    def run(
        self,
        cmd: Sequence[str],
        *,
        env: Mapping[str, str] | None = None,
    ) -> CommandResult:
        key = tuple(str(arg) for arg in cmd)
        self._run_calls.append(RunCall(cmd=key, env=dict(env or {})))

        result = self._lookup(key)
        if result.success and self._simulate_filesystem:
            self._apply_side_effects(key)
        return result

    def _lookup(self, key: tuple[str, ...]) -> CommandResult:
        if key in self._results:
            return self._results[key]

        best: tuple[str, ...] | None = None
        for prefix in self._results:
            if key[: len(prefix)] == prefix and (best is None or len(prefix) > len(best)):
                best = prefix
        if best is not None:
            return self._results[best]
        return CommandResult(returncode=0)

    def _apply_side_effects(self, key: tuple[str, ...]) -> None:
        if len(key) >= 4 and key[0] == "git" and key[1] == "clone":
            (Path(key[-1]) / ".git").mkdir(parents=True, exist_ok=True)
        elif len(key) == 4 and key[1:3] == ("-m", "venv"):
            bin_dir = Path(key[3]) / "bin"
            bin_dir.mkdir(parents=True, exist_ok=True)
            (bin_dir / "python").touch()
            (bin_dir / "pip").touch()
