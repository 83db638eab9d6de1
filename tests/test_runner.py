"""Tests for running agents through the SDK query stream."""

from __future__ import annotations

from collections.abc import AsyncIterator
from typing import Any

import pytest
from claude_agent_sdk import (
    AssistantMessage,
    ClaudeAgentOptions,
    ResultMessage,
    TextBlock,
    ToolUseBlock,
)

import claude_agents.runner as runner_module
from claude_agents._errors import AgentRunError, HookAbort
from claude_agents.runner import (
    format_stats,
    message_kind,
    message_text,
    raise_for_result,
    run_agent,
)
from claude_agents.types import RunResult


def make_result(subtype: str = "success", **overrides: Any) -> ResultMessage:
    fields: dict[str, Any] = {
        "subtype": subtype,
        "duration_ms": 12345,
        "duration_api_ms": 10000,
        "is_error": subtype != "success",
        "num_turns": 4,
        "session_id": "session-1",
        "total_cost_usd": 0.01234,
        "result": "All done",
    }
    fields.update(overrides)
    return ResultMessage(**fields)


def make_assistant(*texts: str) -> AssistantMessage:
    return AssistantMessage(
        content=[TextBlock(text=text) for text in texts], model="claude-sonnet"
    )


def fake_query_of(messages: list[Any], captured: dict[str, Any] | None = None):
    async def fake_query(
        *, prompt: str, options: ClaudeAgentOptions | None = None, transport: Any = None
    ) -> AsyncIterator[Any]:
        if captured is not None:
            captured["prompt"] = prompt
            captured["options"] = options
        for message in messages:
            yield message

    return fake_query


@pytest.mark.asyncio
async def test_run_agent_echoes_text_and_records_result():
    captured: dict[str, Any] = {}
    echoed: list[str] = []
    messages = [
        make_assistant("Looking at branches", "..."),
        AssistantMessage(
            content=[ToolUseBlock(id="tool-1", name="Bash", input={"command": "git branch"})],
            model="claude-sonnet",
        ),
        make_result(),
    ]
    options = ClaudeAgentOptions(allowed_tools=["Bash"])

    result = await run_agent(
        "Clean up",
        options,
        echo=echoed.append,
        query_fn=fake_query_of(messages, captured),
    )

    assert captured == {"prompt": "Clean up", "options": options}
    assert echoed == ["Looking at branches", "..."]
    assert result.texts == echoed
    assert result.succeeded
    assert result.num_turns == 4
    assert result.total_cost_usd == pytest.approx(0.01234)
    assert result.session_id == "session-1"
    assert result.result == "All done"


@pytest.mark.asyncio
async def test_run_agent_uses_sdk_query_by_default(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setattr(runner_module, "sdk_query", fake_query_of([make_result()]))
    result = await run_agent("ping", echo=None)
    assert result.subtype == "success"


@pytest.mark.asyncio
async def test_run_agent_without_result_is_incomplete():
    result = await run_agent(
        "ping", echo=None, query_fn=fake_query_of([make_assistant("partial")])
    )
    assert result.subtype == "incomplete"
    assert not result.succeeded


@pytest.mark.asyncio
async def test_run_agent_hooks_by_kind():
    seen: list[str] = []

    def on_any(message: Any) -> None:
        seen.append(f"*:{message_kind(message)}")

    async def on_result(message: Any) -> None:
        seen.append("result")

    await run_agent(
        "ping",
        echo=None,
        hooks={"*": [on_any], "result": [on_result]},
        query_fn=fake_query_of([make_assistant("hi"), make_result()]),
    )

    assert seen == ["*:assistant", "*:result", "result"]


@pytest.mark.asyncio
async def test_run_agent_hook_abort_stops_stream():
    class Budget:
        def __init__(self, limit: int):
            self.limit = limit
            self.seen = 0

        def __call__(self, message: Any) -> None:
            self.seen += 1
            if self.seen > self.limit:
                raise HookAbort("budget exceeded")

    echoed: list[str] = []
    result = await run_agent(
        "ping",
        echo=echoed.append,
        hooks={"assistant": [Budget(limit=1)]},
        query_fn=fake_query_of(
            [make_assistant("one"), make_assistant("two"), make_result()]
        ),
    )

    assert result.aborted
    assert echoed == ["one"]
    raise_for_result(result)


def test_message_text_joins_text_blocks():
    assert message_text(make_assistant("a", "b")) == "ab"
    assert message_text(make_result()) == ""


def test_format_stats():
    result = RunResult(
        subtype="success", duration_ms=12346, total_cost_usd=0.5, num_turns=3
    )
    assert format_stats(result) == (
        "Statistics:\n  - Duration: 12.35s\n  - Cost: $0.5000\n  - Turns: 3"
    )
    assert "Cost: N/A" in format_stats(RunResult())


def test_raise_for_result():
    raise_for_result(RunResult(subtype="success"))

    with pytest.raises(AgentRunError, match="Maximum turns reached") as exc:
        raise_for_result(RunResult(subtype="error_max_turns", is_error=True))
    assert exc.value.subtype == "error_max_turns"

    with pytest.raises(AgentRunError, match="Error during execution"):
        raise_for_result(RunResult(subtype="error_during_execution", is_error=True))
