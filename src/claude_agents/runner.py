"""Agent invocation through the hosted Claude Agent SDK."""

from __future__ import annotations

import inspect
import logging
from collections.abc import AsyncIterator, Callable
from typing import Any

from claude_agent_sdk import (
    AssistantMessage,
    ClaudeAgentOptions,
    ResultMessage,
    SystemMessage,
    TextBlock,
    ToolUseBlock,
    UserMessage,
)
from claude_agent_sdk import query as sdk_query

from ._errors import AgentRunError, HookAbort
from .types import EventHook, EventHooks, MessageKind, RunResult

logger = logging.getLogger(__name__)

QueryFn = Callable[..., AsyncIterator[Any]]


def message_kind(message: Any) -> MessageKind:
    if isinstance(message, AssistantMessage):
        return "assistant"
    if isinstance(message, UserMessage):
        return "user"
    if isinstance(message, SystemMessage):
        return "system"
    if isinstance(message, ResultMessage):
        return "result"
    if type(message).__name__ == "StreamEvent":
        return "stream"
    return "unknown"


def message_text(message: Any) -> str:
    """Join the text blocks of an assistant message."""
    if not isinstance(message, AssistantMessage):
        return ""
    return "".join(
        block.text for block in message.content if isinstance(block, TextBlock)
    )


async def _run_hooks(hooks: list[EventHook], message: Any) -> None:
    for hook in hooks:
        result = hook(message)
        if inspect.isawaitable(result):
            await result


def _record_result(result: RunResult, message: ResultMessage) -> None:
    result.subtype = message.subtype
    result.duration_ms = message.duration_ms
    result.total_cost_usd = message.total_cost_usd
    result.num_turns = message.num_turns
    result.is_error = message.is_error
    result.session_id = message.session_id
    result.result = message.result


async def run_agent(
    prompt: str,
    options: ClaudeAgentOptions | None = None,
    *,
    hooks: EventHooks | None = None,
    echo: Callable[[str], Any] | None = print,
    query_fn: QueryFn | None = None,
) -> RunResult:
    """Run a prompt through the SDK, echoing assistant text as it streams.

    Args:
        prompt: Task description for the hosted agent.
        options: SDK options (allowed tools, permission mode, model ...).
        hooks: Per-kind event hooks; ``"*"`` sees every message.
        echo: Called with each text block; ``None`` keeps the run silent.
        query_fn: Alternative to ``claude_agent_sdk.query``.

    Returns:
        The run summary taken from the final result message.
    """
    run = query_fn or sdk_query
    hooks = hooks or {}
    result = RunResult()

    stream = run(prompt=prompt, options=options or ClaudeAgentOptions())
    try:
        async for message in stream:
            kind = message_kind(message)

            hook_list = hooks.get("*", [])
            if hook_list:
                await _run_hooks(hook_list, message)
            typed_hooks = hooks.get(kind, [])
            if typed_hooks:
                await _run_hooks(typed_hooks, message)

            if isinstance(message, AssistantMessage):
                for block in message.content:
                    if isinstance(block, TextBlock):
                        result.texts.append(block.text)
                        if echo is not None:
                            echo(block.text)
                    elif isinstance(block, ToolUseBlock):
                        logger.debug("Tool use: %s %s", block.name, block.input)
            elif isinstance(message, ResultMessage):
                _record_result(result, message)
    except HookAbort as e:
        logger.info("Run stopped by hook: %s", e)
        result.aborted = True
    finally:
        aclose = getattr(stream, "aclose", None)
        if callable(aclose):
            await aclose()

    return result


def format_stats(result: RunResult) -> str:
    cost = (
        f"${result.total_cost_usd:.4f}"
        if result.total_cost_usd is not None
        else "N/A"
    )
    return "\n".join(
        [
            "Statistics:",
            f"  - Duration: {result.duration_ms / 1000:.2f}s",
            f"  - Cost: {cost}",
            f"  - Turns: {result.num_turns}",
        ]
    )


def raise_for_result(result: RunResult) -> None:
    """Raise ``AgentRunError`` unless the run finished successfully."""
    if result.succeeded or result.aborted:
        return
    if result.subtype == "error_max_turns":
        raise AgentRunError("Maximum turns reached", subtype=result.subtype)
    raise AgentRunError("Error during execution", subtype=result.subtype)
