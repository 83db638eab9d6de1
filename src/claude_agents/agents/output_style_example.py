"""Output style example: a chat session with a temporary custom output style.

The style file is copied into Claude's output-styles directory for the length
of the session and removed again afterwards, even on SIGTERM.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import NoReturn

from ..claude import claude
from ..cli import parse_args, run_main
from ..config import resolve_model
from ..output_style import OutputStyleManager, register_cleanup_handlers
from ..settings import dump_settings
from ..types import ClaudeFlags, OptionSpec
from ._common import HELP_FLAGS, print_banner, usage_error

USAGE = """
🎭 Output Style Example

Usage:
  output-style-example "<your prompt>" [--style FILE]

Options:
  --style FILE    Markdown output style to apply (default: bundled socrates.md)
  --help, -h      Show this help
"""

OPTIONS = {"style": OptionSpec(type="string")}
AGENT_FLAGS = (*OPTIONS, *HELP_FLAGS)

DEFAULT_STYLE = Path(__file__).with_name("styles") / "socrates.md"


def default_flags(manager: OutputStyleManager) -> ClaudeFlags:
    return {
        "settings": dump_settings(manager.generate_settings()),
        "model": resolve_model("sonnet"),
    }


async def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv, OPTIONS)
    if args.help_requested:
        print(USAGE)
        return 0
    if not args.positionals:
        return usage_error("A prompt is required", USAGE)

    style = Path(args.read_string_flag("style") or DEFAULT_STYLE)
    if not style.is_file():
        return usage_error(f"Output style not found: {style}", USAGE)

    args.remove_agent_flags(AGENT_FLAGS)

    manager = OutputStyleManager(style)
    register_cleanup_handlers(manager)
    try:
        flags = default_flags(manager)
        print_banner("🎭 Output Style Example", [f"Style: {style.stem}"])
        return await claude(args.positionals[0], flags, args=args)
    finally:
        manager.cleanup()


def cli() -> NoReturn:
    run_main(main)


if __name__ == "__main__":
    cli()
