"""Shared helpers for the bundled agents."""

from __future__ import annotations

import sys
from collections.abc import Iterable

HELP_FLAGS = ("help", "h")


def print_banner(title: str, details: Iterable[str] = ()) -> None:
    print(f"{title}\n")
    lines = list(details)
    for line in lines:
        print(line)
    if lines:
        print()


def usage_error(message: str, usage: str) -> int:
    """Report a usage problem on stderr and return the exit status."""
    print(f"❌ Error: {message}", file=sys.stderr)
    print(usage)
    return 1


def yes_no(value: bool) -> str:
    return "YES" if value else "NO"
