"""Wrapper for spawning Claude CLI commands."""

from __future__ import annotations

import logging
import os
import re
from collections.abc import Mapping
from pathlib import Path

import anyio

from ._errors import CLIConnectionError, CLINotFoundError
from ._internal.command import build_command, build_process_env, find_cli
from .cli import ParsedArgs
from .flags import build_claude_flags
from .types import FlagValue

logger = logging.getLogger(__name__)

_PATH_SEPARATORS = re.compile(r"[/\\.]")


def get_claude_projects_path(
    cwd: str | Path | None = None, home: str | Path | None = None
) -> Path:
    """Return the Claude projects directory for a working directory.

    Claude stores per-project transcripts under ``~/.claude/projects`` using
    the working directory with every separator and dot replaced by ``-``.
    """
    working_dir = os.path.normpath(str(cwd if cwd is not None else os.getcwd()))
    dasherized = _PATH_SEPARATORS.sub("-", working_dir.strip())
    base = Path(home) if home is not None else Path.home()
    return base / ".claude" / "projects" / dasherized


async def claude(
    prompt: str = "",
    default_flags: Mapping[str, FlagValue] | None = None,
    *,
    args: ParsedArgs | None = None,
    cli_path: str | Path | None = None,
    cwd: str | Path | None = None,
    env: Mapping[str, str] | None = None,
) -> int:
    """Spawn Claude with the given default flags and wait for completion.

    User flags left in ``args`` override ``default_flags``. The child process
    inherits stdin, stdout and stderr so Claude talks to the terminal directly.

    Returns:
        The exit code of the Claude process.
    """
    cli = find_cli(cli_path)
    flags = build_claude_flags(default_flags, args)
    cmd = build_command(cli, flags, prompt)
    logger.debug("Spawning Claude: %s", cmd[:-1] if prompt else cmd)

    try:
        process = await anyio.open_process(
            cmd,
            stdin=None,
            stdout=None,
            stderr=None,
            cwd=str(cwd) if cwd is not None else None,
            env=build_process_env(env),
        )
    except FileNotFoundError as e:
        if cwd is not None and not Path(cwd).exists():
            raise CLIConnectionError(f"Working directory does not exist: {cwd}") from e
        raise CLINotFoundError("Claude CLI not found at", cli) from e
    except OSError as e:
        raise CLIConnectionError(f"Failed to start Claude CLI: {e}") from e

    async with process:
        returncode = await process.wait()

    logger.debug("Claude exited with code %s", returncode)
    return returncode
