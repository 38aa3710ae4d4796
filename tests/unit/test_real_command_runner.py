"""Tests for RealCommandRunner's subprocess wrapping."""

import subprocess
from unittest.mock import Mock, patch

import pytest

from lightcone_installer.core.runner.real import COMMAND_NOT_FOUND_EXIT_CODE, RealCommandRunner


def test_run_returns_structured_result() -> None:
    with patch("lightcone_installer.core.runner.real.subprocess.run") as mock_run:
        mock_result = Mock(spec=subprocess.CompletedProcess)
        mock_result.returncode = 0
        mock_result.stdout = "3.12\n"
        mock_result.stderr = ""
        mock_run.return_value = mock_result

        result = RealCommandRunner().run(["python3", "-c", "print()"])

        assert result.success
        assert result.stdout == "3.12\n"
        mock_run.assert_called_once_with(
            ["python3", "-c", "print()"],
            env=None,
            capture_output=True,
            text=True,
            encoding="utf-8",
            check=False,
        )


def test_non_zero_exit_is_returned_not_raised() -> None:
    with patch("lightcone_installer.core.runner.real.subprocess.run") as mock_run:
        mock_result = Mock(spec=subprocess.CompletedProcess)
        mock_result.returncode = 128
        mock_result.stdout = ""
        mock_result.stderr = "fatal: Not possible to fast-forward"
        mock_run.return_value = mock_result

        result = RealCommandRunner().run(["git", "pull", "--ff-only"])

        assert not result.success
        assert result.returncode == 128
        assert "fast-forward" in result.stderr


def test_env_is_layered_over_process_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXISTING_VAR", "kept")
    with patch("lightcone_installer.core.runner.real.subprocess.run") as mock_run:
        mock_run.return_value = Mock(returncode=0, stdout="", stderr="")

        RealCommandRunner().run(["pip", "install"], env={"EXTRA": "1"})

        child_env = mock_run.call_args.kwargs["env"]
        assert child_env["EXISTING_VAR"] == "kept"
        assert child_env["EXTRA"] == "1"


def test_missing_binary_becomes_failed_result() -> None:
    result = RealCommandRunner().run(["nonexistent-tool-xyz-123", "--version"])

    assert result.returncode == COMMAND_NOT_FOUND_EXIT_CODE
    assert not result.success


def test_which_finds_sh() -> None:
    runner = RealCommandRunner()

    assert runner.which("sh") is not None
    assert runner.which("nonexistent-tool-xyz-123") is None
