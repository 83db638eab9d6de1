"""Tests for locating and spawning the Claude CLI."""

from __future__ import annotations

import stat
from pathlib import Path

import pytest

from claude_agents._errors import CLIConnectionError, CLINotFoundError
from claude_agents._internal import command as command_module
from claude_agents._internal.command import build_command, build_process_env, find_cli
from claude_agents.claude import claude, get_claude_projects_path
from claude_agents.cli import parse_args


def make_fake_cli(tmp_path: Path, exit_code: int = 0) -> Path:
    script = tmp_path / "claude"
    script.write_text(
        "#!/bin/sh\n"
        'for arg in "$@"; do printf "%s\\n" "$arg"; done > "$FAKE_CLAUDE_OUT"\n'
        f"exit {exit_code}\n"
    )
    script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return script


def test_find_cli_prefers_explicit_path(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("CLAUDE_AGENTS_CLI_PATH", "/env/claude")
    assert find_cli("/explicit/claude") == "/explicit/claude"
    assert find_cli() == "/env/claude"


def test_find_cli_uses_path_lookup(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.delenv("CLAUDE_AGENTS_CLI_PATH", raising=False)
    monkeypatch.setattr(command_module.shutil, "which", lambda name: f"/bin/{name}")
    assert find_cli() == "/bin/claude"


def test_find_cli_not_found(monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
    monkeypatch.delenv("CLAUDE_AGENTS_CLI_PATH", raising=False)
    monkeypatch.setattr(command_module.shutil, "which", lambda name: None)
    monkeypatch.setattr(command_module.Path, "home", lambda: tmp_path)
    monkeypatch.setattr(command_module.Path, "exists", lambda self: False)
    with pytest.raises(CLINotFoundError):
        find_cli()


def test_build_command_places_prompt_last():
    assert build_command("claude", ["--model", "sonnet"], "Review it") == [
        "claude",
        "--model",
        "sonnet",
        "Review it",
    ]
    assert build_command("claude", ["--continue"]) == ["claude", "--continue"]


def test_build_process_env_merges_extra(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("INHERITED", "1")
    env = build_process_env({"EXTRA": "2"})
    assert env["INHERITED"] == "1"
    assert env["EXTRA"] == "2"
    assert "CLAUDE_AGENTS_VERSION" in env


def test_get_claude_projects_path(tmp_path: Path):
    path = get_claude_projects_path("/home/dev/my.project", home=tmp_path)
    assert path == tmp_path / ".claude" / "projects" / "-home-dev-my-project"


def test_get_claude_projects_path_normalizes():
    path = get_claude_projects_path("/srv/app/../repo/", home="/root")
    assert path.name == "-srv-repo"


@pytest.mark.asyncio
async def test_claude_spawns_cli_and_returns_exit_code(tmp_path: Path):
    cli = make_fake_cli(tmp_path, exit_code=3)
    out = tmp_path / "args.txt"
    args = parse_args(["--model", "opus"])

    exit_code = await claude(
        "Summarize",
        {"model": "sonnet", "allowedTools": ["Read", "Grep"]},
        args=args,
        cli_path=cli,
        env={"FAKE_CLAUDE_OUT": str(out)},
    )

    assert exit_code == 3
    assert out.read_text().splitlines() == [
        "--model",
        "opus",
        "--allowedTools",
        "Read Grep",
        "Summarize",
    ]


@pytest.mark.asyncio
async def test_claude_missing_cli_raises(tmp_path: Path):
    with pytest.raises(CLINotFoundError):
        await claude("hi", cli_path=tmp_path / "does-not-exist")


@pytest.mark.asyncio
async def test_claude_missing_cwd_raises_connection_error(tmp_path: Path):
    script = make_fake_cli(tmp_path)
    with pytest.raises(
        CLIConnectionError, match="Working directory does not exist"
    ) as exc:
        await claude("hi", cli_path=script, cwd=tmp_path / "gone")
    assert not isinstance(exc.value, CLINotFoundError)


@pytest.mark.asyncio
async def test_claude_unexecutable_cli_raises_connection_error(tmp_path: Path):
    script = tmp_path / "claude"
    script.write_text("#!/bin/sh\nexit 0\n")
    script.chmod(0o644)
    with pytest.raises(CLIConnectionError, match="Failed to start Claude CLI"):
        await claude("hi", cli_path=script)
