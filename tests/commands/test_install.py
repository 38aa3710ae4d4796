"""End-to-end tests for the lightcone-install command."""

from pathlib import Path

from click.testing import CliRunner

from lightcone_installer.cli.cli import cli
from lightcone_installer.core.constants import SHELL_SENTINEL
from lightcone_installer.core.context import InstallerContext
from lightcone_installer.core.install_config import FilesystemConfigStore, InstallConfig
from lightcone_installer.core.runner.abc import CommandResult
from tests.fakes.prompter import FakePrompter
from tests.test_utils.env_helpers import InstallerEnv, build_runner, python_probe

REPO_NAMES = ["ASP", "Canvas", "Prism"]


def _fresh_env(tmp_path: Path) -> InstallerEnv:
    env = InstallerEnv.create(tmp_path)
    (env.home / ".bashrc").write_text("# user bashrc\n", encoding="utf-8")
    return env


def _snapshot(env: InstallerEnv) -> dict[str, str]:
    return {
        "bashrc": (env.home / ".bashrc").read_text(encoding="utf-8"),
        "config": env.config_path.read_text(encoding="utf-8"),
    }


def test_fresh_non_interactive_install(tmp_path: Path) -> None:
    """Fresh machine, piped stdin, no flag: clone over HTTPS, new venv, PATH set."""
    env = _fresh_env(tmp_path)
    runner = build_runner()
    ctx = env.build_context(runner=runner)

    result = CliRunner().invoke(cli, [], obj=ctx)

    assert result.exit_code == 0, result.output
    pip = str(env.default_venv / "bin" / "pip")
    assert runner.commands == [
        python_probe(),
        *[
            (
                "git",
                "clone",
                "--quiet",
                f"https://github.com/LightconeResearch/{name}.git",
                str(env.install_root / name),
            )
            for name in REPO_NAMES
        ],
        ("python3", "-m", "venv", str(env.default_venv)),
        (pip, "install", "--quiet", "-e", str(env.install_root / "ASP")),
        (pip, "install", "--quiet", "-e", str(env.install_root / "Canvas")),
        (pip, "install", "--quiet", "-e", f"{env.install_root / 'Prism'}[canvas]"),
    ]

    for name in REPO_NAMES:
        assert (env.install_root / name / ".git").is_dir()
    link = env.install_root / "Prism" / "extern" / "ASP"
    assert link.resolve() == (env.install_root / "ASP").resolve()

    store = FilesystemConfigStore(env.config_path)
    assert store.load() == InstallConfig(venv_mode="new", venv_path=env.default_venv)

    bashrc = (env.home / ".bashrc").read_text(encoding="utf-8")
    assert bashrc.count(SHELL_SENTINEL) == 1
    assert f'export PATH="{env.default_venv / "bin"}:$PATH"' in bashrc

    assert "Lightcone tools installed successfully!" in result.output
    assert f'  export PATH="{env.default_venv / "bin"}:$PATH"' in result.output.splitlines()


def test_rerun_is_idempotent(tmp_path: Path) -> None:
    """Second run with all state present: only pulls and installs, no file changes."""
    env = _fresh_env(tmp_path)
    first = CliRunner().invoke(cli, [], obj=env.build_context(runner=build_runner()))
    assert first.exit_code == 0, first.output
    before = _snapshot(env)

    runner = build_runner()
    result = CliRunner().invoke(cli, [], obj=env.build_context(runner=runner))

    assert result.exit_code == 0, result.output
    git_commands = [cmd for cmd in runner.commands if cmd[0] == "git"]
    assert git_commands == [
        ("git", "-C", str(env.install_root / name), "pull", "--ff-only", "--quiet")
        for name in REPO_NAMES
    ]
    assert not any(cmd[1:3] == ("-m", "venv") for cmd in runner.commands)
    assert _snapshot(env) == before
    assert "Using previously configured venv" in result.output
    for name in REPO_NAMES:
        assert f"Updated {name}" in result.output
    assert "Linked Prism/extern/ASP" not in result.output


def test_ssh_flag_uses_ssh_remotes(tmp_path: Path) -> None:
    env = _fresh_env(tmp_path)
    runner = build_runner()

    result = CliRunner().invoke(cli, ["--ssh"], obj=env.build_context(runner=runner))

    assert result.exit_code == 0, result.output
    clone_urls = [cmd[3] for cmd in runner.commands if cmd[:2] == ("git", "clone")]
    assert clone_urls == [f"git@github.com:LightconeResearch/{name}.git" for name in REPO_NAMES]


def test_unknown_argument_is_usage_error(tmp_path: Path) -> None:
    env = _fresh_env(tmp_path)
    runner = build_runner()

    result = CliRunner().invoke(cli, ["--https"], obj=env.build_context(runner=runner))

    assert result.exit_code == 2
    assert "--https" in result.output
    assert runner.commands == []


def test_unexpected_positional_argument_is_usage_error(tmp_path: Path) -> None:
    env = _fresh_env(tmp_path)

    result = CliRunner().invoke(cli, ["extra"], obj=env.build_context())

    assert result.exit_code == 2
    assert "extra" in result.output


def test_interactive_invalid_existing_venv_installs_nothing(tmp_path: Path) -> None:
    """User picks an existing venv, declines the active one, gives a bad path."""
    env = _fresh_env(tmp_path)
    active = env.make_venv(tmp_path / "active")
    bogus = tmp_path / "nowhere"
    runner = build_runner()
    prompter = FakePrompter(
        interactive=True, choices=["2"], confirms=[False], paths=[str(bogus)]
    )
    ctx = env.build_context(
        runner=runner,
        prompter=prompter,
        environ={"SHELL": "/bin/bash", "VIRTUAL_ENV": str(active)},
    )

    result = CliRunner().invoke(cli, [], obj=ctx)

    assert result.exit_code == 1
    assert f"No valid venv found at {bogus}" in result.output
    assert not any(cmd[1:2] == ("install",) for cmd in runner.commands)
    assert not env.config_path.exists()


def test_existing_venv_skips_shell_integration(tmp_path: Path) -> None:
    env = _fresh_env(tmp_path)
    venv = env.make_venv(tmp_path / "work-venv")
    prompter = FakePrompter(interactive=True, choices=["2"], paths=[str(venv)])
    runner = build_runner()

    result = CliRunner().invoke(
        cli, [], obj=env.build_context(runner=runner, prompter=prompter)
    )

    assert result.exit_code == 0, result.output
    assert SHELL_SENTINEL not in (env.home / ".bashrc").read_text(encoding="utf-8")
    assert [cmd[0] for cmd in runner.commands if cmd[1:2] == ("install",)] == [
        str(venv / "bin" / "pip")
    ] * 3
    assert "export PATH" not in result.output


def test_clone_failure_aborts_before_install(tmp_path: Path) -> None:
    env = _fresh_env(tmp_path)
    runner = build_runner(
        results={("git", "clone"): CommandResult(returncode=128, stderr="denied")}
    )

    result = CliRunner().invoke(cli, [], obj=env.build_context(runner=runner))

    assert result.exit_code == 1
    assert "Failed to clone ASP" in result.output
    assert not env.config_path.exists()


def test_for_test_context_defaults() -> None:
    ctx = InstallerContext.for_test()

    assert not ctx.prompter.is_interactive()
    assert ctx.default_venv_path == Path("/test/lightcone/.venv")
    assert ctx.repo_dir("ASP") == Path("/test/lightcone/ASP")
