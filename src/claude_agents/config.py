"""Environment-driven configuration shared by every agent."""

from __future__ import annotations

import logging
import os
import sys

ENV_CLI_PATH = "CLAUDE_AGENTS_CLI_PATH"
ENV_MODEL = "CLAUDE_AGENTS_MODEL"
ENV_LOG_LEVEL = "CLAUDE_AGENTS_LOG_LEVEL"

DEFAULT_MODEL = "claude-sonnet-4-5-20250929"
LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def _env(name: str) -> str | None:
    value = os.getenv(name, "").strip()
    return value or None


def cli_path_override() -> str | None:
    return _env(ENV_CLI_PATH)


def resolve_model(default: str = DEFAULT_MODEL) -> str:
    """Return the agent's default model unless ``CLAUDE_AGENTS_MODEL`` is set."""
    return _env(ENV_MODEL) or default


def log_level() -> int:
    raw = (_env(ENV_LOG_LEVEL) or "WARNING").upper()
    if raw.isdigit():
        return int(raw)
    level = logging.getLevelName(raw)
    return level if isinstance(level, int) else logging.WARNING


def configure_logging(level: int | None = None) -> None:
    """Send library diagnostics to stderr, keeping stdout for agent output."""
    logging.basicConfig(
        level=log_level() if level is None else level,
        format=LOG_FORMAT,
        stream=sys.stderr,
    )
