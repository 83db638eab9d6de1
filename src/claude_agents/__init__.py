"""Claude-powered command-line agents and the helpers they share."""

from ._errors import (
    AgentError,
    AgentRunError,
    CLIConnectionError,
    CLINotFoundError,
    FlagError,
    HookAbort,
    OutputStyleError,
    SettingsError,
    StateError,
)
from ._version import __version__
from .claude import claude, get_claude_projects_path
from .cli import ParsedArgs, parse_args, run_main
from .flags import (
    build_claude_flags,
    format_tool_list,
    merge_flags,
    parse_tool_list,
    to_agent_options,
)
from .hooks import apply_conventional_hooks, read_hook_input, write_hook_output
from .mcp import mcp_config, mcp_tool_name, mcp_tool_names
from .output_style import (
    OutputStyleManager,
    combine_prompts,
    create_temp_prompt_file,
    register_cleanup_handlers,
)
from .runner import format_stats, message_text, raise_for_result, run_agent
from .settings import Settings, add_command_hook, dump_settings, load_settings
from .state import StateManager, cleanup_all_states
from .types import ClaudeFlags, OptionSpec, PermissionMode, RunResult

__all__ = [
    "__version__",
    "claude",
    "get_claude_projects_path",
    "ParsedArgs",
    "parse_args",
    "run_main",
    "build_claude_flags",
    "format_tool_list",
    "merge_flags",
    "parse_tool_list",
    "to_agent_options",
    "apply_conventional_hooks",
    "read_hook_input",
    "write_hook_output",
    "mcp_config",
    "mcp_tool_name",
    "mcp_tool_names",
    "OutputStyleManager",
    "combine_prompts",
    "create_temp_prompt_file",
    "register_cleanup_handlers",
    "run_agent",
    "format_stats",
    "message_text",
    "raise_for_result",
    "Settings",
    "add_command_hook",
    "dump_settings",
    "load_settings",
    "StateManager",
    "cleanup_all_states",
    "ClaudeFlags",
    "OptionSpec",
    "PermissionMode",
    "RunResult",
    "AgentError",
    "AgentRunError",
    "CLIConnectionError",
    "CLINotFoundError",
    "FlagError",
    "HookAbort",
    "OutputStyleError",
    "SettingsError",
    "StateError",
]
