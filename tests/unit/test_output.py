"""Tests for the install summary output."""

from pathlib import Path

import pytest
from rich.console import Console

from lightcone_installer.cli.output import format_install_summary, print_install_summary

PACKAGES = ["asp", "asp-canvas", "prism"]


def test_summary_panel_lists_installed_packages() -> None:
    console = Console(width=100, record=True)

    console.print(format_install_summary(PACKAGES))

    text = console.export_text()
    assert "Lightcone tools installed successfully!" in text
    assert "Installed: asp, asp-canvas, prism" in text


def test_long_path_hint_is_printed_on_one_line(capsys: pytest.CaptureFixture[str]) -> None:
    bin_dir = Path("/home/someone-with-a-long-name/projects/lightcone-install-root/.venv/bin")

    print_install_summary(PACKAGES, bin_dir, shell_configured=True, console=Console(width=80))

    lines = capsys.readouterr().out.splitlines()
    assert f'  export PATH="{bin_dir}:$PATH"' in lines
    assert "To get started, either restart your shell or run:" in lines


def test_hint_wording_when_shell_was_not_configured(capsys: pytest.CaptureFixture[str]) -> None:
    print_install_summary(
        PACKAGES, Path("/v/bin"), shell_configured=False, console=Console(width=80)
    )

    out = capsys.readouterr().out
    assert "If prism is not on your PATH yet, run:" in out
    assert 'export PATH="/v/bin:$PATH"' in out


def test_existing_venv_gets_no_path_hint(capsys: pytest.CaptureFixture[str]) -> None:
    print_install_summary(PACKAGES, None, shell_configured=False, console=Console(width=80))

    assert "export PATH" not in capsys.readouterr().out
