"""Git Branch Janitor.

Identifies stale local and remote branches and helps clean them up safely.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import NoReturn

from ..cli import ParsedArgs, parse_args, run_main
from ..flags import merge_flags, to_agent_options, user_flags
from ..runner import format_stats, raise_for_result, run_agent
from ..state import DEFAULT_STATE_VERSION, StateManager
from ..types import ClaudeFlags, OptionSpec, RunResult
from ._common import HELP_FLAGS, print_banner, yes_no

USAGE = """
🧹 Git Branch Janitor

Usage:
  git-branch-janitor [--dry-run] [--days=30] [--include-remote]

Options:
  --dry-run         Show what would be deleted without actually deleting
  --days N          Consider branches stale after N days (default: 30)
  --include-remote  Also analyze and suggest remote branch cleanup
  --help, -h        Show this help
"""

OPTIONS = {
    "dry-run": OptionSpec(),
    "days": OptionSpec(type="string"),
    "include-remote": OptionSpec(),
}
AGENT_FLAGS = (*OPTIONS, *HELP_FLAGS)

ALLOWED_TOOLS = ["Bash", "Read", "Write", "TodoWrite"]
MAX_TURNS = 20


@dataclass
class JanitorOptions:
    dry_run: bool = False
    stale_days: int = 30
    include_remote: bool = False


def parse_options(args: ParsedArgs) -> JanitorOptions | None:
    if args.help_requested:
        print(USAGE)
        return None
    return JanitorOptions(
        dry_run=args.read_boolean_flag("dry-run", False),
        stale_days=args.read_number_flag("days", 30),
        include_remote=args.read_boolean_flag("include-remote", False),
    )


def build_prompt(options: JanitorOptions) -> str:
    days = options.stale_days
    remote_step = (
        "6. **Analyze remote branches**: Check for remote branches that no longer "
        "exist locally or are stale"
        if options.include_remote
        else ""
    )
    dry_run_note = " (DRY RUN - no actual deletion)" if options.dry_run else ""
    mode = (
        "## DRY RUN MODE\nYou are in dry-run mode. Show what WOULD be deleted but "
        "DO NOT execute any deletion commands."
        if options.dry_run
        else "## CLEANUP MODE\nYou can execute branch deletion commands after user "
        "confirmation for branches classified as 'safe to delete'."
    )
    confirm_rule = (
        "" if options.dry_run else "\n- Ask for explicit confirmation before deleting branches"
    )

    return f"""You are a Git Branch Janitor - a specialized agent that helps keep git repositories clean and organized.

Your task is to analyze the git repository in the current directory and identify stale branches that can be safely cleaned up.

## Analysis Steps:

1. **Get current branch**: Identify the current branch to avoid deleting it
2. **List all local branches**: Get all local branches with their last commit info
3. **Check merged branches**: Identify which branches have been merged into main/master
4. **Check branch activity**: Find branches with no commits in the last {days} days
5. **Identify default branch**: Determine if the repo uses 'main' or 'master' as default
{remote_step}

## Branch Classification:

Classify each branch as:
- **Safe to delete**: Merged branches (excluding current and default branches)
- **Possibly stale**: Unmerged but inactive for {days}+ days
- **Active**: Recent activity or is the current/default branch
- **Remote only**: Branches that exist remotely but not locally (if --include-remote)
- **Local only**: Branches that exist locally but not remotely

## Output Format:

Generate a clear report with:
1. Summary statistics (total branches, safe to delete, stale, active)
2. List of branches in each category with:
   - Branch name
   - Last commit date
   - Last author
   - Whether it's merged
   - Whether it exists remotely
3. Suggested cleanup commands{dry_run_note}

{mode}

## Important Safety Rules:
- NEVER delete the current branch
- NEVER delete the default branch (main/master)
- NEVER delete branches with recent activity (< {days} days) unless merged
- Always show what will be deleted before executing{confirm_rule}

Start by analyzing the git repository and generating the cleanup report."""


def default_flags(options: JanitorOptions) -> ClaudeFlags:
    return {
        "permission-mode": "acceptEdits" if options.dry_run else "default",
        "allowedTools": ALLOWED_TOOLS,
        "max-turns": MAX_TURNS,
    }


def last_run_state() -> StateManager:
    return StateManager("last-run", sub_dir="git-branch-janitor", create_dir=False)


def record_run(state: StateManager, options: JanitorOptions, result: RunResult) -> None:
    state.write(
        {
            "version": DEFAULT_STATE_VERSION,
            "dryRun": options.dry_run,
            "staleDays": options.stale_days,
            "includeRemote": options.include_remote,
            "subtype": result.subtype,
            "sessionId": result.session_id,
            "totalCostUsd": result.total_cost_usd,
        }
    )


async def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv, OPTIONS)
    options = parse_options(args)
    if options is None:
        return 0

    state = last_run_state()
    previous = state.read()
    details = [
        "Configuration:",
        f"  - Stale threshold: {options.stale_days} days",
        f"  - Dry run mode: {yes_no(options.dry_run)}",
        f"  - Include remote analysis: {yes_no(options.include_remote)}",
    ]
    if previous is not None:
        details.append(
            f"  - Last run: {previous.get('timestamp')} ({previous.get('subtype')})"
        )
    print_banner("🧹 Git Branch Janitor starting...", details)

    args.remove_agent_flags(AGENT_FLAGS)
    flags = merge_flags(default_flags(options), user_flags(args))
    agent_options = to_agent_options(flags)

    result = await run_agent(build_prompt(options), agent_options)
    record_run(state, options, result)
    raise_for_result(result)

    if result.succeeded:
        print("\n✅ Branch analysis complete!\n")
        print(format_stats(result))
    return 0


def cli() -> NoReturn:
    run_main(main)


if __name__ == "__main__":
    cli()
