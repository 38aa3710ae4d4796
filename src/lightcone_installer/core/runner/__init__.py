from lightcone_installer.core.runner.abc import CommandResult, CommandRunner
from lightcone_installer.core.runner.real import RealCommandRunner

__all__ = ["CommandResult", "CommandRunner", "RealCommandRunner"]
