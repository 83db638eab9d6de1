"""Hooks example: a tool-less chat session with conventional hooks attached.

The ``hooks_example.UserPromptSubmit.py`` script next to this module is picked
up automatically and registered as a ``UserPromptSubmit`` command hook.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import NoReturn

from ..claude import claude
from ..cli import parse_args, run_main
from ..config import resolve_model
from ..hooks import apply_conventional_hooks
from ..settings import Settings, dump_settings
from ..types import ClaudeFlags
from ._common import HELP_FLAGS, usage_error

USAGE = """
🪝 Hooks Example

Usage:
  hooks-example "<your prompt>"
"""

DISALLOWED_TOOLS = [
    "Task",
    "Bash",
    "Glob",
    "Grep",
    "ExitPlanMode",
    "Read",
    "Edit",
    "Write",
    "NotebookEdit",
    "WebFetch",
    "TodoWrite",
    "WebSearch",
    "BashOutput",
    "KillShell",
    "SlashCommand",
]


def default_flags() -> ClaudeFlags:
    settings: Settings = {}
    return {
        "allowedTools": [],
        "disallowedTools": DISALLOWED_TOOLS,
        "settings": dump_settings(settings),
        "strict-mcp-config": True,
        "model": resolve_model("sonnet"),
    }


async def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    if args.help_requested:
        print(USAGE)
        return 0
    if not args.positionals:
        return usage_error("A prompt is required", USAGE)

    args.remove_agent_flags(HELP_FLAGS)
    flags = apply_conventional_hooks(default_flags(), agent_path=__file__)
    return await claude(args.positionals[0], flags, args=args)


def cli() -> NoReturn:
    run_main(main)


if __name__ == "__main__":
    cli()
