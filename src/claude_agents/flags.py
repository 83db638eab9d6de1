"""Claude CLI flag table, merging and serialization."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from ._errors import FlagError
from .types import PERMISSION_MODES, ClaudeFlags, FlagValue, OptionSpec

if TYPE_CHECKING:
    from claude_agent_sdk import ClaudeAgentOptions

    from .cli import ParsedArgs

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ClaudeFlagSpec:
    """A flag understood by the Claude CLI."""

    type: str = "string"
    aliases: tuple[str, ...] = ()
    multiple: bool = False
    tool_list: bool = False


CLAUDE_FLAGS: dict[str, ClaudeFlagSpec] = {
    "model": ClaudeFlagSpec(),
    "fallback-model": ClaudeFlagSpec(),
    "settings": ClaudeFlagSpec(),
    "setting-sources": ClaudeFlagSpec(),
    "mcp-config": ClaudeFlagSpec(multiple=True),
    "strict-mcp-config": ClaudeFlagSpec(type="boolean"),
    "allowedTools": ClaudeFlagSpec(aliases=("allowed-tools",), tool_list=True),
    "disallowedTools": ClaudeFlagSpec(
        aliases=("disallowed-tools",), tool_list=True
    ),
    "permission-mode": ClaudeFlagSpec(aliases=("permissionMode",)),
    "dangerously-skip-permissions": ClaudeFlagSpec(type="boolean"),
    "system-prompt": ClaudeFlagSpec(aliases=("systemPrompt",)),
    "append-system-prompt": ClaudeFlagSpec(aliases=("appendSystemPrompt",)),
    "max-turns": ClaudeFlagSpec(aliases=("maxTurns",)),
    "add-dir": ClaudeFlagSpec(multiple=True),
    "plugin-dir": ClaudeFlagSpec(multiple=True),
    "agents": ClaudeFlagSpec(),
    "output-format": ClaudeFlagSpec(),
    "input-format": ClaudeFlagSpec(),
    "session-id": ClaudeFlagSpec(),
    "resume": ClaudeFlagSpec(),
    "continue": ClaudeFlagSpec(type="boolean"),
    "print": ClaudeFlagSpec(type="boolean"),
    "verbose": ClaudeFlagSpec(type="boolean"),
    "debug": ClaudeFlagSpec(type="boolean"),
    "ide": ClaudeFlagSpec(type="boolean"),
}

_ALIASES: dict[str, str] = {
    alias: name for name, spec in CLAUDE_FLAGS.items() for alias in spec.aliases
}

_SHORT_FLAGS = {"r": "resume", "c": "continue", "p": "print"}


def canonical_flag_name(name: str) -> str:
    """Resolve a flag alias (``allowed-tools``) to its canonical name."""
    name = name.lstrip("-")
    return _ALIASES.get(name, name)


def claude_option_specs() -> dict[str, OptionSpec]:
    """Option specs for parsing user-supplied Claude flags."""
    specs: dict[str, OptionSpec] = {}
    for name, spec in CLAUDE_FLAGS.items():
        short = next((s for s, full in _SHORT_FLAGS.items() if full == name), None)
        option = OptionSpec(
            type="boolean" if spec.type == "boolean" else "string",
            short=short,
            multiple=spec.multiple,
        )
        specs[name] = option
        for alias in spec.aliases:
            specs[alias] = OptionSpec(type=option.type, multiple=spec.multiple)
    return specs


def _split_tool_rules(value: str) -> list[str]:
    # Separators inside a rule's parentheses, e.g. Bash(git log:*), are kept.
    tools: list[str] = []
    current: list[str] = []
    depth = 0
    for char in value:
        if char == "(":
            depth += 1
        elif char == ")" and depth:
            depth -= 1
        elif depth == 0 and (char.isspace() or char == ","):
            if current:
                tools.append("".join(current))
                current = []
            continue
        current.append(char)
    if current:
        tools.append("".join(current))
    return tools


def parse_tool_list(value: FlagValue) -> list[str]:
    """Split a tool list given as a list or a space/comma separated string.

    List items are taken whole, so scoped rules such as ``Bash(git log:*)``
    survive either form.
    """
    if value is None or value is False or value is True:
        return []
    if isinstance(value, str):
        return _split_tool_rules(value)
    if isinstance(value, list):
        return [item.strip() for item in value if isinstance(item, str) and item.strip()]
    raise FlagError(f"Invalid tool list: {value!r}")


def format_tool_list(tools: Iterable[str]) -> str:
    return " ".join(tools)


def merge_flags(
    defaults: Mapping[str, FlagValue] | None,
    user: Mapping[str, FlagValue] | None = None,
) -> ClaudeFlags:
    """Merge user flags over defaults, canonicalizing names on both sides."""
    merged: ClaudeFlags = {}
    for source in (defaults or {}, user or {}):
        for key, value in source.items():
            merged[canonical_flag_name(key)] = value
    return merged


def _encode_value(value: Any) -> str:
    if isinstance(value, dict):
        return json.dumps(value)
    return str(value)


def serialize_flags(flags: Mapping[str, FlagValue]) -> list[str]:
    """Serialize a flags mapping into Claude CLI arguments."""
    cmd: list[str] = []
    for key, value in flags.items():
        name = canonical_flag_name(key)
        spec = CLAUDE_FLAGS.get(name)
        if value is None or value is False:
            continue
        if value is True:
            cmd.append(f"--{name}")
            continue
        if spec is not None and spec.tool_list:
            # An empty allow-list is still meaningful: it disables every tool.
            cmd.extend([f"--{name}", format_tool_list(parse_tool_list(value))])
            continue
        if isinstance(value, list):
            for item in value:
                cmd.extend([f"--{name}", _encode_value(item)])
            continue
        cmd.extend([f"--{name}", _encode_value(value)])
    return cmd


def user_flags(args: ParsedArgs | None) -> ClaudeFlags:
    """Flags left in ``args`` that can be forwarded to Claude.

    Unknown single-letter flags (``-v``) have no long form the CLI accepts,
    so they are dropped with a warning.
    """
    if args is None:
        return {}
    flags: ClaudeFlags = {}
    for name, value in args.values.items():
        if len(name) == 1:
            logger.warning("Ignoring unknown short flag -%s", name)
            continue
        flags[name] = value
    return flags


def build_claude_flags(
    defaults: Mapping[str, FlagValue] | None = None,
    args: ParsedArgs | None = None,
) -> list[str]:
    """Merge agent defaults with flags left on the command line and serialize.

    Agents remove their own flags from ``args`` first (see
    ``ParsedArgs.remove_agent_flags``); whatever remains is treated as a
    Claude flag supplied by the user and overrides the matching default.
    """
    return serialize_flags(merge_flags(defaults, user_flags(args)))


def _load_mcp_servers(value: FlagValue) -> dict[str, Any] | str:
    if isinstance(value, list):
        servers: dict[str, Any] = {}
        for item in value:
            loaded = _load_mcp_servers(item)
            if isinstance(loaded, str):
                raise FlagError(
                    "Multiple --mcp-config values must be inline JSON", "mcp-config"
                )
            servers.update(loaded)
        return servers
    if isinstance(value, dict):
        config = value
    elif isinstance(value, str):
        stripped = value.strip()
        if not stripped.startswith("{"):
            # A path to an MCP config file; the SDK loads it.
            return stripped
        try:
            config = json.loads(stripped)
        except json.JSONDecodeError as e:
            raise FlagError(f"--mcp-config is not valid JSON: {e}", "mcp-config") from e
    else:
        raise FlagError(f"Invalid --mcp-config value: {value!r}", "mcp-config")

    servers_block = config.get("mcpServers", config)
    if not isinstance(servers_block, dict):
        raise FlagError("--mcp-config must contain an mcpServers object", "mcp-config")
    return dict(servers_block)


def to_agent_options(
    flags: Mapping[str, FlagValue], **overrides: Any
) -> ClaudeAgentOptions:
    """Translate Claude CLI flags into ``ClaudeAgentOptions`` for the SDK."""
    from claude_agent_sdk import ClaudeAgentOptions

    merged = merge_flags(flags)
    kwargs: dict[str, Any] = {}
    extra_args: dict[str, str | None] = {}
    system_prompt: str | None = None
    append_prompt: str | None = None

    for name, value in merged.items():
        if value is None or value is False:
            continue

        if name == "model":
            kwargs["model"] = str(value)
        elif name == "allowedTools":
            kwargs["allowed_tools"] = parse_tool_list(value)
        elif name == "disallowedTools":
            kwargs["disallowed_tools"] = parse_tool_list(value)
        elif name == "permission-mode":
            if value not in PERMISSION_MODES:
                raise FlagError(
                    f"--permission-mode must be one of {', '.join(PERMISSION_MODES)}",
                    "permission-mode",
                )
            kwargs["permission_mode"] = value
        elif name == "settings":
            kwargs["settings"] = value if isinstance(value, str) else json.dumps(value)
        elif name == "mcp-config":
            kwargs["mcp_servers"] = _load_mcp_servers(value)
        elif name == "system-prompt":
            system_prompt = str(value)
        elif name == "append-system-prompt":
            append_prompt = str(value)
        elif name == "max-turns":
            try:
                kwargs["max_turns"] = int(value)  # type: ignore[arg-type]
            except (TypeError, ValueError) as e:
                raise FlagError("--max-turns must be an integer", "max-turns") from e
        elif name == "add-dir":
            kwargs["add_dirs"] = value if isinstance(value, list) else [str(value)]
        elif name == "continue":
            kwargs["continue_conversation"] = True
        elif name == "resume":
            kwargs["resume"] = str(value)
        elif value is True:
            extra_args[name] = None
        elif isinstance(value, list):
            # extra_args holds one value per flag; keep the last one.
            extra_args[name] = _encode_value(value[-1]) if value else None
        else:
            extra_args[name] = _encode_value(value)

    if system_prompt is not None:
        if append_prompt is not None:
            system_prompt = f"{system_prompt}\n\n{append_prompt}"
        kwargs["system_prompt"] = system_prompt
    elif append_prompt is not None:
        kwargs["system_prompt"] = {
            "type": "preset",
            "preset": "claude_code",
            "append": append_prompt,
        }

    if extra_args:
        kwargs["extra_args"] = extra_args
    kwargs.update(overrides)
    return ClaudeAgentOptions(**kwargs)


__all__ = [
    "CLAUDE_FLAGS",
    "ClaudeFlagSpec",
    "build_claude_flags",
    "canonical_flag_name",
    "claude_option_specs",
    "format_tool_list",
    "merge_flags",
    "parse_tool_list",
    "serialize_flags",
    "to_agent_options",
    "user_flags",
]
