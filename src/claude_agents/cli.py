"""Command-line parsing shared by all agent scripts.

Every agent reads its own flags (``--report``, ``--days`` ...) from the same
``ParsedArgs`` that later supplies user overrides for Claude CLI flags, so
agents must call ``remove_agent_flags`` before handing the arguments on.
"""

from __future__ import annotations

import math
import sys
from collections.abc import Awaitable, Callable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, NoReturn

import anyio
from claude_agent_sdk import ClaudeSDKError

from ._errors import AgentError, FlagError
from .config import configure_logging
from .flags import claude_option_specs
from .types import OptionSpec

HELP_OPTIONS: dict[str, OptionSpec] = {"help": OptionSpec(short="h")}


@dataclass
class ParsedArgs:
    """Positionals and named flags parsed from argv."""

    values: dict[str, Any] = field(default_factory=dict)
    positionals: list[str] = field(default_factory=list)
    argv: list[str] = field(default_factory=list)

    @property
    def help_requested(self) -> bool:
        return self.values.get("help") is True or self.values.get("h") is True

    def get_positionals(self) -> list[str]:
        return list(self.positionals)

    def read_string_flag(self, name: str) -> str | None:
        """Read a string flag given as ``--name value`` or ``--name=value``."""
        raw = self.values.get(name)
        if isinstance(raw, str) and raw:
            return raw

        for i, arg in enumerate(self.argv):
            if arg == f"--{name}":
                if i + 1 < len(self.argv):
                    following = self.argv[i + 1]
                    if following and not following.startswith("--"):
                        return following
            if arg.startswith(f"--{name}="):
                value = arg.split("=", 1)[1]
                if value:
                    return value

        return None

    def read_number_flag(self, name: str, default: int) -> int:
        """Read a positive integer flag, flooring fractional values."""
        raw = self.read_string_flag(name)
        if not raw:
            return default

        try:
            parsed = float(raw)
        except ValueError:
            parsed = math.nan
        if not math.isfinite(parsed) or parsed < 1:
            raise FlagError(f"--{name} must be a positive integer", name)

        return math.floor(parsed)

    def read_boolean_flag(self, name: str, default: bool) -> bool:
        raw = self.values.get(name)
        if raw is True:
            return True
        if raw is False:
            return False
        return True if f"--{name}" in self.argv else default

    def collect_repeated_flag(self, name: str) -> list[str]:
        """Collect every value of a flag that may be given several times."""
        collected: list[str] = []

        for arg in self.argv:
            if arg.startswith(f"--{name}="):
                value = arg.split("=", 1)[1]
                if value:
                    collected.append(value)

        for i, arg in enumerate(self.argv):
            if arg == f"--{name}" and i + 1 < len(self.argv):
                following = self.argv[i + 1]
                if following and not following.startswith("--"):
                    collected.append(following)

        raw = self.values.get(name)
        parsed_values = [raw] if isinstance(raw, str) else raw
        if isinstance(parsed_values, list):
            # Values already picked up from argv are not counted twice.
            remaining = list(collected)
            for item in parsed_values:
                if not isinstance(item, str):
                    continue
                if item in remaining:
                    remaining.remove(item)
                else:
                    collected.append(item)

        return collected

    def remove_agent_flags(self, keys: Sequence[str]) -> None:
        """Drop agent-only flags so they are not forwarded to Claude."""
        for key in keys:
            self.values.pop(key, None)


def _store(
    values: dict[str, Any], name: str, value: Any, spec: OptionSpec | None
) -> None:
    if spec is not None and spec.multiple:
        existing = values.get(name)
        if isinstance(existing, list):
            existing.append(value)
        else:
            values[name] = [value]
        return
    values[name] = value


def _is_negative_number(arg: str) -> bool:
    try:
        float(arg)
    except ValueError:
        return False
    return True


def parse_args(
    argv: Sequence[str] | None = None,
    options: Mapping[str, OptionSpec] | None = None,
) -> ParsedArgs:
    """Parse argv into flag values and positionals.

    Known Claude CLI flags are always declared so that user overrides such as
    ``--model opus`` keep their value. Undeclared ``--flag`` tokens are
    boolean; ``--flag=value`` is always a string.
    """
    args = list(sys.argv[1:] if argv is None else argv)

    specs = claude_option_specs()
    specs.update(HELP_OPTIONS)
    specs.update(options or {})
    shorts = {spec.short: name for name, spec in specs.items() if spec.short}

    values: dict[str, Any] = {}
    positionals: list[str] = []

    i = 0
    while i < len(args):
        arg = args[i]

        if arg == "--":
            positionals.extend(args[i + 1 :])
            break

        if arg.startswith("--") and len(arg) > 2:
            body = arg[2:]
            if "=" in body:
                name, value = body.split("=", 1)
                _store(values, name, value, specs.get(name))
            else:
                spec = specs.get(body)
                if spec is not None and spec.type == "string":
                    if i + 1 >= len(args) or args[i + 1].startswith("--"):
                        raise FlagError(f"--{body} requires a value", body)
                    _store(values, body, args[i + 1], spec)
                    i += 1
                else:
                    _store(values, body, True, spec)
            i += 1
            continue

        if arg.startswith("-") and len(arg) > 1 and not _is_negative_number(arg):
            letters = arg[1:]
            if len(letters) == 1 and letters in shorts:
                name = shorts[letters]
                spec = specs[name]
                if spec.type == "string":
                    if i + 1 >= len(args):
                        raise FlagError(f"-{letters} requires a value", name)
                    _store(values, name, args[i + 1], spec)
                    i += 1
                else:
                    _store(values, name, True, spec)
            else:
                for letter in letters:
                    name = shorts.get(letter, letter)
                    _store(values, name, True, specs.get(name))
            i += 1
            continue

        positionals.append(arg)
        i += 1

    return ParsedArgs(values=values, positionals=positionals, argv=args)


def run_main(main: Callable[..., Awaitable[int | None]], *args: Any) -> NoReturn:
    """Run an async agent entry point and exit with its status code."""
    configure_logging()
    try:
        code = anyio.run(main, *args)
    except KeyboardInterrupt:
        code = 130
    except AgentError as e:
        print(f"❌ Error: {e}", file=sys.stderr)
        code = 1
    except ClaudeSDKError as e:
        print(f"❌ Fatal error: {e}", file=sys.stderr)
        code = 1
    sys.exit(code or 0)
