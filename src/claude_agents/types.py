"""Type definitions for claude-agents."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Any, Literal

PermissionMode = Literal["default", "acceptEdits", "plan", "bypassPermissions"]
PERMISSION_MODES: tuple[str, ...] = (
    "default",
    "acceptEdits",
    "plan",
    "bypassPermissions",
)

OptionType = Literal["string", "boolean"]
MessageKind = Literal["assistant", "user", "system", "result", "stream", "unknown"]

FlagValue = str | bool | int | list[str] | dict[str, Any] | None
# Keyed by Claude CLI flag name, e.g. {"model": ..., "permission-mode": ...}.
ClaudeFlags = dict[str, FlagValue]


@dataclass(frozen=True)
class OptionSpec:
    """Declaration of a named command-line flag."""

    type: OptionType = "boolean"
    short: str | None = None
    multiple: bool = False


@dataclass
class RunResult:
    """Summary of a single agent run through the SDK."""

    subtype: str = "incomplete"
    duration_ms: int = 0
    total_cost_usd: float | None = None
    num_turns: int = 0
    is_error: bool = False
    session_id: str | None = None
    result: str | None = None
    texts: list[str] = field(default_factory=list)
    aborted: bool = False

    @property
    def succeeded(self) -> bool:
        return self.subtype == "success" and not self.is_error


EventHook = Callable[[Any], Awaitable[None] | None]
EventHooks = dict[str, list[EventHook]]
