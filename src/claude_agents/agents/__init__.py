"""Bundled agents, addressable by their command name."""

from collections.abc import Awaitable, Callable, Sequence
from types import ModuleType

from . import (
    chrome_seo_analyzer,
    code_review_automator,
    coverage_booster,
    git_branch_janitor,
    hooks_example,
    output_style_example,
)

AgentMain = Callable[[Sequence[str] | None], Awaitable[int]]

_MODULES: dict[str, ModuleType] = {
    "chrome-seo-analyzer": chrome_seo_analyzer,
    "code-review-automator": code_review_automator,
    "git-branch-janitor": git_branch_janitor,
    "hooks-example": hooks_example,
    "output-style-example": output_style_example,
    "test-coverage-booster": coverage_booster,
}

AGENTS: dict[str, AgentMain] = {name: module.main for name, module in _MODULES.items()}

DESCRIPTIONS: dict[str, str] = {
    name: (module.__doc__ or name).strip().splitlines()[0]
    for name, module in _MODULES.items()
}

__all__ = ["AGENTS", "DESCRIPTIONS", "AgentMain"]
