"""Locating the Claude CLI and assembling its command line."""

import os
import shutil
from collections.abc import Mapping
from pathlib import Path

from .._errors import CLINotFoundError
from .._version import __version__
from ..config import cli_path_override


def find_cli(cli_path: str | Path | None = None) -> str:
    """Find the Claude CLI binary."""
    if cli_path is not None:
        return str(cli_path)

    if override := cli_path_override():
        return override

    if cli := shutil.which("claude"):
        return cli

    locations = [
        Path.home() / ".claude/local/claude",
        Path.home() / ".local/bin/claude",
        Path("/usr/local/bin/claude"),
        Path.home() / "node_modules/.bin/claude",
    ]

    for path in locations:
        if path.exists() and path.is_file():
            return str(path)

    raise CLINotFoundError(
        "Claude CLI not found. Install Claude Code and ensure `claude` is on "
        "PATH, or set CLAUDE_AGENTS_CLI_PATH=/path/to/claude."
    )


def build_command(cli: str, flags: list[str], prompt: str = "") -> list[str]:
    """Build the CLI command: executable, flags, then the prompt."""
    cmd = [cli, *flags]
    if prompt:
        cmd.append(prompt)
    return cmd


def build_process_env(extra: Mapping[str, str] | None = None) -> dict[str, str]:
    return {
        **os.environ,
        **(extra or {}),
        "CLAUDE_AGENTS_VERSION": __version__,
    }
