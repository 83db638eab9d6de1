"""MCP server presets and tool-name helpers for browser-automation agents."""

from collections.abc import Iterable, Mapping
from typing import Any

CHROME_DEVTOOLS: dict[str, dict[str, Any]] = {
    "chrome-devtools": {
        "command": "npx",
        "args": ["chrome-devtools-mcp@latest", "--isolated"],
    }
}

PLAYWRIGHT: dict[str, dict[str, Any]] = {
    "playwright": {
        "command": "npx",
        "args": ["@playwright/mcp@latest", "--isolated"],
    }
}


def mcp_config(*servers: Mapping[str, Any]) -> dict[str, Any]:
    """Build an ``--mcp-config`` document from one or more server presets."""
    merged: dict[str, Any] = {}
    for server in servers:
        merged.update(server)
    return {"mcpServers": merged}


def mcp_tool_name(server: str, tool: str) -> str:
    return f"mcp__{server}__{tool}"


def mcp_tool_names(server: str, tools: Iterable[str]) -> list[str]:
    return [mcp_tool_name(server, tool) for tool in tools]
