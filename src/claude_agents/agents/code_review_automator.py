"""Code Review Automator: reviews staged changes, a branch diff or a file."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Literal, NoReturn

from ..claude import claude
from ..cli import ParsedArgs, parse_args, run_main
from ..config import resolve_model
from ..settings import Settings, dump_settings
from ..types import ClaudeFlags, OptionSpec
from ._common import HELP_FLAGS, print_banner

USAGE = """
🔍 Code Review Automator

Usage:
  code-review-automator [target] [options]

Arguments:
  target                  File path to review (default: staged changes)

Options:
  --branch <name>         Review changes vs branch
  --help, -h              Show this help

Examples:
  code-review-automator                   # Review staged
  code-review-automator --branch main     # Review vs main
  code-review-automator src/file.py       # Review file
"""

OPTIONS = {"branch": OptionSpec(type="string")}
AGENT_FLAGS = (*OPTIONS, *HELP_FLAGS)

ALLOWED_TOOLS = ["Bash", "Glob", "Grep", "Read", "TodoWrite"]

TargetType = Literal["staged", "branch", "file"]


@dataclass
class ReviewOptions:
    target: str = "staged"
    target_type: TargetType = "staged"

    @property
    def description(self) -> str:
        if self.target_type == "branch":
            return f"changes compared to {self.target} branch"
        if self.target_type == "file":
            return f"file {self.target}"
        return "staged changes"


def parse_options(args: ParsedArgs) -> ReviewOptions | None:
    if args.help_requested:
        print(USAGE)
        return None

    branch = args.read_string_flag("branch")
    if branch:
        return ReviewOptions(target=branch, target_type="branch")
    if args.positionals:
        return ReviewOptions(target=args.positionals[0], target_type="file")
    return ReviewOptions()


def build_prompt(options: ReviewOptions) -> str:
    return (
        f"You are an automated code reviewer. Review {options.description}. "
        "Identify files to review using git diff. Analyze for: code quality issues, "
        "anti-patterns, security vulnerabilities, performance concerns, "
        "maintainability issues, best practices violations. Provide constructive "
        "feedback with severity levels (critical, warning, suggestion). Include "
        "specific examples and recommendations for each issue found. Generate "
        "comprehensive code review report."
    )


def default_flags() -> ClaudeFlags:
    settings: Settings = {}
    return {
        "model": resolve_model(),
        "settings": dump_settings(settings),
        "allowedTools": ALLOWED_TOOLS,
        "permission-mode": "default",
    }


async def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv, OPTIONS)
    options = parse_options(args)
    if options is None:
        return 0

    print_banner("🔍 Code Review Automator", [f"Reviewing: {options.description}"])

    args.remove_agent_flags(AGENT_FLAGS)

    exit_code = await claude(build_prompt(options), default_flags(), args=args)
    if exit_code == 0:
        print("\n✅ Code review complete!")
    return exit_code


def cli() -> NoReturn:
    run_main(main)


if __name__ == "__main__":
    cli()
