"""Claude settings documents (the JSON passed through ``--settings``)."""

from __future__ import annotations

import json
from typing import Literal, TypedDict

from ._errors import SettingsError
from .types import PermissionMode

HookEvent = Literal[
    "PreToolUse",
    "PostToolUse",
    "Notification",
    "UserPromptSubmit",
    "Stop",
    "SubagentStop",
    "PreCompact",
    "SessionStart",
    "SessionEnd",
]

HOOK_EVENTS: tuple[str, ...] = (
    "UserPromptSubmit",
    "PostToolUse",
    "PreToolUse",
    "SessionStart",
    "SessionEnd",
    "Stop",
    "SubagentStop",
    "Notification",
    "PreCompact",
)


class _HookCommandBase(TypedDict):
    type: Literal["command"]
    command: str


class HookCommand(_HookCommandBase, total=False):
    timeout: int


class _HookMatcherBase(TypedDict):
    hooks: list[HookCommand]


class HookMatcher(_HookMatcherBase, total=False):
    matcher: str


HooksConfig = dict[str, list[HookMatcher]]


class PermissionsConfig(TypedDict, total=False):
    allow: list[str]
    ask: list[str]
    deny: list[str]
    defaultMode: PermissionMode
    disableBypassPermissionsMode: Literal["disable"]
    additionalDirectories: list[str]


class StatusLineConfig(TypedDict, total=False):
    type: Literal["command"]
    command: str
    padding: int


class Settings(TypedDict, total=False):
    apiKeyHelper: str
    cleanupPeriodDays: int
    env: dict[str, str]
    includeCoAuthoredBy: bool
    model: str
    permissions: PermissionsConfig
    enableAllProjectMcpServers: bool
    enabledMcpjsonServers: list[str]
    disabledMcpjsonServers: list[str]
    hooks: HooksConfig
    forceLoginMethod: Literal["claudeai", "console"]
    disableAllHooks: bool
    spinnerTipsEnabled: bool
    alwaysThinkingEnabled: bool
    statusLine: StatusLineConfig
    outputStyle: str
    forceLoginOrgUUID: str
    awsAuthRefresh: str
    awsCredentialExport: str


def dump_settings(settings: Settings | dict, indent: int | None = None) -> str:
    return json.dumps(settings, indent=indent)


def load_settings(raw: str | None) -> Settings:
    """Parse a settings JSON string; empty input gives empty settings."""
    if raw is None or not raw.strip():
        return Settings()
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise SettingsError(f"Invalid settings JSON: {e}") from e
    if not isinstance(data, dict):
        raise SettingsError(
            f"Settings must be a JSON object, got {type(data).__name__}"
        )
    return data  # type: ignore[return-value]


def add_command_hook(
    settings: Settings,
    event: str,
    command: str,
    matcher: str = "*",
    timeout: int | None = None,
) -> Settings:
    """Append a command hook for ``event`` to ``settings`` in place."""
    if event not in HOOK_EVENTS:
        raise SettingsError(f"Unknown hook event: {event}")

    hook = HookCommand(type="command", command=command)
    if timeout is not None:
        hook["timeout"] = timeout

    hooks = settings.setdefault("hooks", {})
    hooks.setdefault(event, []).append(HookMatcher(matcher=matcher, hooks=[hook]))
    return settings
