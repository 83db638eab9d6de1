"""JSON state files for agents that resume work across runs.

State lives under ``agents/tmp`` in the current working directory unless a
``base_dir`` is given.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from ._errors import StateError

logger = logging.getLogger(__name__)

DEFAULT_STATE_VERSION = "1.0.0"


def default_state_dir() -> Path:
    return Path.cwd() / "agents" / "tmp"


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class StateManager:
    """Persist a single JSON state document for an agent."""

    def __init__(
        self,
        state_name: str,
        sub_dir: str | None = None,
        create_dir: bool = True,
        base_dir: str | Path | None = None,
    ):
        base = Path(base_dir) if base_dir is not None else default_state_dir()
        directory = base / sub_dir if sub_dir else base
        self._path = directory / f"{state_name}.json"
        logger.debug("State manager initialized for %s", self._path)

        if create_dir:
            self._ensure_directory()

    @property
    def path(self) -> Path:
        return self._path

    def _ensure_directory(self) -> None:
        directory = self._path.parent
        if not directory.exists():
            directory.mkdir(parents=True, exist_ok=True)
            logger.info("Created state directory: %s", directory)

    def exists(self) -> bool:
        return self._path.is_file()

    def read(self) -> dict[str, Any] | None:
        """Return the stored state, or ``None`` if missing or unreadable."""
        if not self.exists():
            logger.debug("State file not found: %s", self._path)
            return None
        try:
            state = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.error("Error reading state from %s: %s", self._path, e)
            return None
        if not isinstance(state, dict):
            logger.error("State in %s is not a JSON object", self._path)
            return None
        return state

    def write(self, state: dict[str, Any]) -> None:
        if not state.get("timestamp"):
            state["timestamp"] = _now()
        try:
            self._ensure_directory()
            self._path.write_text(json.dumps(state, indent=2), encoding="utf-8")
        except OSError as e:
            raise StateError(f"Failed to write state to {self._path}: {e}") from e
        logger.debug("Wrote state to %s", self._path)

    def update(self, update: dict[str, Any]) -> dict[str, Any]:
        state = {**(self.read() or {}), **update, "timestamp": _now()}
        self.write(state)
        return state

    def delete(self) -> None:
        try:
            self._path.unlink(missing_ok=True)
        except OSError as e:
            raise StateError(f"Failed to delete state {self._path}: {e}") from e
        logger.debug("Deleted state file: %s", self._path)

    def initialize(self, default_state: dict[str, Any]) -> dict[str, Any]:
        """Return the existing state, writing ``default_state`` if there is none."""
        existing = self.read()
        if existing is not None:
            return existing
        self.write(default_state)
        return default_state


def cleanup_all_states(base_dir: str | Path | None = None) -> int:
    """Remove every JSON state file below the state directory."""
    base = Path(base_dir) if base_dir is not None else default_state_dir()
    if not base.is_dir():
        return 0

    removed = 0
    for path in sorted(base.rglob("*.json")):
        try:
            path.unlink()
        except OSError as e:
            raise StateError(f"Failed to delete state {path}: {e}") from e
        removed += 1

    logger.info("Removed %d state file(s) from %s", removed, base)
    return removed
