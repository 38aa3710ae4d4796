"""Interactive question abstraction.

Separates the decision logic of venv selection from the terminal so it can be
driven by a fake in tests. Callers must check is_interactive() before asking;
the real implementation would block on a closed or piped stdin.
"""

import sys
from abc import ABC, abstractmethod

import click


class Prompter(ABC):
    """Abstract interface for asking the user questions."""

    @abstractmethod
    def is_interactive(self) -> bool:
        """Whether stdin is attached to a terminal."""
        ...

    @abstractmethod
    def ask_choice(self, prompt: str, default: str) -> str:
        """Ask for a free-form menu choice.

        Returns:
            The raw answer, or default when the answer is empty
        """
        ...

    @abstractmethod
    def ask_path(self, prompt: str) -> str:
        """Ask for a filesystem path; returned unexpanded."""
        ...

    @abstractmethod
    def ask_yes_no(self, prompt: str, default: bool) -> bool:
        ...


class RealPrompter(Prompter):
    """Production implementation using click prompts on the process stdin."""

    def is_interactive(self) -> bool:
        return sys.stdin is not None and sys.stdin.isatty()

    def ask_choice(self, prompt: str, default: str) -> str:
        answer = click.prompt(prompt, default=default, show_default=True, type=str)
        return answer.strip() or default

    def ask_path(self, prompt: str) -> str:
        return click.prompt(prompt, type=str).strip()

    def ask_yes_no(self, prompt: str, default: bool) -> bool:
        return click.confirm(prompt, default=default)
