"""Isolated output styles injected into Claude's output-styles directory."""

from __future__ import annotations

import atexit
import logging
import os
import secrets
import shutil
import signal
import tempfile
import time
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from ._errors import OutputStyleError

logger = logging.getLogger(__name__)


def default_styles_dir() -> Path:
    return Path.home() / ".claude" / "output-styles"


def _unique_suffix() -> str:
    return f"{os.getpid()}-{int(time.time() * 1000)}-{secrets.token_hex(4)}"


class OutputStyleManager:
    """Copy a prompt file into place as a temporary output style.

    The style file and a lock file holding the pid are removed on cleanup.
    """

    def __init__(
        self, source_prompt_path: str | Path, styles_dir: str | Path | None = None
    ):
        self.source_prompt_path = Path(source_prompt_path)
        self.styles_dir = Path(styles_dir) if styles_dir else default_styles_dir()
        self.temp_style_name = f"temp-{_unique_suffix()}"
        self.temp_style_path = self.styles_dir / f"{self.temp_style_name}.md"
        self.lock_file = self.styles_dir / f"{self.temp_style_name}.lock"
        self._is_setup = False

    @property
    def is_setup(self) -> bool:
        return self._is_setup

    @property
    def style_name(self) -> str:
        if not self._is_setup:
            raise OutputStyleError("Must call setup() before getting style name")
        return self.temp_style_name

    def setup(self) -> str:
        """Install the temporary style and return its name."""
        if self._is_setup:
            raise OutputStyleError("OutputStyleManager has already been set up")

        self.styles_dir.mkdir(parents=True, exist_ok=True)
        self.lock_file.write_text(str(os.getpid()), encoding="utf-8")
        try:
            shutil.copyfile(self.source_prompt_path, self.temp_style_path)
        except OSError as e:
            self.lock_file.unlink(missing_ok=True)
            raise OutputStyleError(
                f"Failed to copy output style {self.source_prompt_path}: {e}"
            ) from e
        logger.debug("Installed output style %s", self.temp_style_path)

        self._is_setup = True
        return self.temp_style_name

    def cleanup(self) -> None:
        for path in (self.temp_style_path, self.lock_file):
            try:
                path.unlink(missing_ok=True)
            except OSError as e:
                logger.error("Error during output style cleanup of %s: %s", path, e)
        self._is_setup = False

    def generate_settings(self, base_settings: dict[str, Any] | None = None) -> dict[str, Any]:
        if not self._is_setup:
            self.setup()
        return {**(base_settings or {}), "outputStyle": self.temp_style_name}

    def __enter__(self) -> OutputStyleManager:
        if not self._is_setup:
            self.setup()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.cleanup()


def register_cleanup_handlers(manager: OutputStyleManager) -> None:
    """Clean up the style at interpreter exit and on SIGTERM."""
    atexit.register(manager.cleanup)

    previous = signal.getsignal(signal.SIGTERM)

    def _on_sigterm(signum: int, frame: Any) -> None:
        manager.cleanup()
        if callable(previous):
            previous(signum, frame)
        else:
            raise SystemExit(128 + signum)

    signal.signal(signal.SIGTERM, _on_sigterm)


def combine_prompts(prompt_paths: Iterable[str | Path], separator: str = "\n\n") -> str:
    """Join several prompt files, trimming surrounding whitespace from each."""
    return separator.join(
        Path(path).read_text(encoding="utf-8").strip() for path in prompt_paths
    )


def create_temp_prompt_file(content: str, temp_dir: str | Path | None = None) -> Path:
    directory = Path(temp_dir) if temp_dir else Path(tempfile.gettempdir())
    path = directory / f"temp-prompt-{int(time.time() * 1000)}-{secrets.token_hex(4)}.md"
    path.write_text(content, encoding="utf-8")
    return path
