"""Version information for claude-agents."""

__version__ = "0.3.0"
