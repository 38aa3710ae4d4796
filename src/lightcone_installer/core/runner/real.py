"""Production CommandRunner implementation using subprocess."""

import logging
import os
import shutil
import subprocess
from collections.abc import Mapping, Sequence

from lightcone_installer.core.runner.abc import CommandResult, CommandRunner

logger = logging.getLogger(__name__)

# Shell convention for "command not found"
COMMAND_NOT_FOUND_EXIT_CODE = 127


class RealCommandRunner(CommandRunner):
    """Runs commands with subprocess.run and captures text output."""

    def which(self, name: str) -> str | None:
        return shutil.which(name)

    def run(
        self,
        cmd: Sequence[str],
        *,
        env: Mapping[str, str] | None = None,
    ) -> CommandResult:
        """Run the command, turning a missing binary into a failed result.

        Implementation details:
        - check=False, so non-zero exits come back as data
        - env is merged over os.environ, never replaces it
        """
        cmd_list = [str(arg) for arg in cmd]
        child_env: dict[str, str] | None = None
        if env:
            child_env = os.environ.copy()
            child_env.update(env)

        logger.debug("Running command: %s", " ".join(cmd_list))
        try:
            result = subprocess.run(
                cmd_list,
                env=child_env,
                capture_output=True,
                text=True,
                encoding="utf-8",
                check=False,
            )
        except (FileNotFoundError, PermissionError) as e:
            logger.debug("Command could not be started: %s", e)
            return CommandResult(returncode=COMMAND_NOT_FOUND_EXIT_CODE, stderr=str(e))

        logger.debug("Command exited with %d", result.returncode)
        return CommandResult(
            returncode=result.returncode,
            stdout=result.stdout or "",
            stderr=result.stderr or "",
        )
