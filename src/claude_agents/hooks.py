"""Conventional hook discovery and helpers for hook scripts.

An agent ``code_review.py`` picks up hook scripts that sit next to it and are
named after a hook event, e.g. ``code_review.PreToolUse.py``. Each one is
registered as a command hook in the ``settings`` flag passed to Claude.
"""

from __future__ import annotations

import json
import logging
import shlex
import sys
from collections.abc import Mapping
from pathlib import Path
from typing import Any, TextIO

from ._errors import SettingsError
from .settings import HOOK_EVENTS, add_command_hook, dump_settings, load_settings
from .types import ClaudeFlags, FlagValue

logger = logging.getLogger(__name__)

_PREFIX = "[conventional-hooks]"


def hook_script_path(agent_path: Path, event: str) -> Path:
    return agent_path.with_name(f"{agent_path.stem}.{event}{agent_path.suffix}")


def hook_command(script: Path) -> str:
    return f"{shlex.quote(sys.executable)} {shlex.quote(str(script))}"


def apply_conventional_hooks(
    default_flags: Mapping[str, FlagValue],
    agent_path: str | Path | None = None,
) -> ClaudeFlags:
    """Register sibling ``<agent>.<Event>.py`` scripts as command hooks."""
    flags: ClaudeFlags = dict(default_flags)

    if agent_path is None:
        agent_path = sys.argv[0] if sys.argv and sys.argv[0] else None
    if not agent_path:
        logger.error("%s No agent path found", _PREFIX)
        return flags

    absolute_path = Path(agent_path).resolve()
    logger.info("%s Looking for hooks for: %s", _PREFIX, absolute_path)

    raw_settings = flags.get("settings")
    try:
        if isinstance(raw_settings, dict):
            settings = json.loads(json.dumps(raw_settings))
        else:
            settings = load_settings(raw_settings if isinstance(raw_settings, str) else None)
    except SettingsError as e:
        logger.error("%s Error parsing existing settings JSON: %s", _PREFIX, e)
        return flags

    found = 0
    for event in HOOK_EVENTS:
        script = hook_script_path(absolute_path, event)
        if script.is_file():
            logger.info("%s Found hook: %s", _PREFIX, script)
            add_command_hook(settings, event, hook_command(script))
            found += 1

    if found == 0:
        logger.info("%s No conventional hooks found", _PREFIX)
        return flags

    logger.info("%s Applied %d conventional hook(s)", _PREFIX, found)
    flags["settings"] = dump_settings(settings, indent=2)
    return flags


def read_hook_input(stream: TextIO | None = None) -> dict[str, Any]:
    """Read the JSON payload Claude sends to a command hook on stdin."""
    data = json.load(stream or sys.stdin)
    if not isinstance(data, dict):
        raise SettingsError("Hook input must be a JSON object")
    return data


def write_hook_output(output: Mapping[str, Any], stream: TextIO | None = None) -> None:
    target = stream or sys.stdout
    target.write(json.dumps(output, indent=2))
    target.write("\n")
    target.flush()
