"""Dispatch ``python -m claude_agents <agent> [args]`` to a bundled agent."""

from __future__ import annotations

import sys
from collections.abc import Sequence
from typing import NoReturn

from .agents import AGENTS, DESCRIPTIONS
from .cli import run_main

USAGE = "Usage: claude-agents <agent> [args...]\n       claude-agents list"


def list_agents() -> None:
    width = max(len(name) for name in AGENTS)
    for name in sorted(AGENTS):
        print(f"  {name.ljust(width)}  {DESCRIPTIONS[name]}")


async def dispatch(argv: Sequence[str]) -> int:
    if not argv or argv[0] in {"-h", "--help"}:
        print(USAGE)
        return 0 if argv else 1
    if argv[0] == "list":
        list_agents()
        return 0

    name, *rest = argv
    agent_main = AGENTS.get(name)
    if agent_main is None:
        print(f"❌ Error: unknown agent {name!r}", file=sys.stderr)
        print("Available agents:")
        list_agents()
        return 1
    return await agent_main(rest)


def main() -> NoReturn:
    run_main(dispatch, sys.argv[1:])


if __name__ == "__main__":
    main()
