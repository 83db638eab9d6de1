"""Error types for claude-agents."""


class AgentError(Exception):
    """Base exception for all claude-agents errors."""


class FlagError(AgentError):
    """Raised when a command-line flag is missing or has an invalid value."""

    def __init__(self, message: str, flag: str | None = None):
        super().__init__(message)
        self.flag = flag


class SettingsError(AgentError):
    """Raised when a Claude settings document cannot be parsed or updated."""


class StateError(AgentError):
    """Raised when an agent state file cannot be written."""


class OutputStyleError(AgentError):
    """Raised when an isolated output style is used out of order."""


class CLIConnectionError(AgentError):
    """Raised when the Claude CLI cannot be started."""


class CLINotFoundError(CLIConnectionError):
    """Raised when Claude CLI is not found or not installed."""

    def __init__(
        self, message: str = "Claude CLI not found", cli_path: str | None = None
    ):
        if cli_path:
            message = f"{message}: {cli_path}"
        super().__init__(message)
        self.cli_path = cli_path


class AgentRunError(AgentError):
    """Raised when an agent run finishes without success."""

    def __init__(
        self,
        message: str,
        subtype: str | None = None,
        exit_code: int | None = None,
    ):
        self.subtype = subtype
        self.exit_code = exit_code

        if subtype is not None:
            message = f"{message} (subtype: {subtype})"
        if exit_code is not None:
            message = f"{message} (exit code: {exit_code})"

        super().__init__(message)


class HookAbort(AgentError):
    """Raised by event hooks to stop streaming early."""

    def __init__(self, reason: str = "Hook aborted streaming"):
        super().__init__(reason)
