"""Output utilities for the installer with clear intent.

Status lines go to stdout; failures go to stderr. Each line is prefixed with a
colored marker:

- info:  `==> message` (blue)
- ok:    `  ✓ message` (green)
- warn:  `  ! message` (yellow)
- error: `  ✗ message` (red, stderr)
"""

from pathlib import Path

import click
from rich.console import Console
from rich.panel import Panel
from rich.text import Text


def user_output(message: str = "", *, nl: bool = True) -> None:
    """Write a plain line to stdout."""
    click.echo(message, nl=nl)


def info(message: str) -> None:
    click.echo(click.style("==>", fg="blue") + f" {message}")


def ok(message: str) -> None:
    click.echo(click.style("  ✓", fg="green") + f" {message}")


def warn(message: str) -> None:
    click.echo(click.style("  !", fg="yellow") + f" {message}")


def error(message: str) -> None:
    click.echo(click.style("  ✗", fg="red") + f" {message}", err=True)


def format_install_summary(installed_packages: list[str]) -> Panel:
    """Format the closing panel shown after a successful install.

    Args:
        installed_packages: Package names in install order

    Returns:
        Rich Panel listing what was installed and what to try next
    """
    lines: list[Text] = [
        Text(f"Installed: {', '.join(installed_packages)}"),
        Text(""),
        Text("Next steps:"),
        Text(""),
        Text("  prism --help        # See all commands"),
        Text("  prism init my-proj  # Create a new project"),
        Text("  prism canvas        # Open the visual canvas"),
    ]

    return Panel(
        Text("\n").join(lines),
        title="Lightcone tools installed successfully!",
        border_style="green",
        padding=(1, 2),
    )


def print_install_summary(
    installed_packages: list[str],
    bin_dir: Path | None,
    *,
    shell_configured: bool,
    console: Console | None = None,
) -> None:
    """Print the summary panel, then the PATH hint for an installer-owned venv.

    The export line is echoed as plain text after the panel so that it is never
    wrapped or framed and can be copied as-is.
    """
    if console is None:
        console = Console()
    console.print()
    console.print(format_install_summary(installed_packages))

    if bin_dir is None:
        return
    user_output()
    if shell_configured:
        user_output("To get started, either restart your shell or run:")
    else:
        user_output("If prism is not on your PATH yet, run:")
    user_output()
    user_output(f'  export PATH="{bin_dir}:$PATH"')
