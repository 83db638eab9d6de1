"""Chrome SEO Analyzer: on-page SEO audit through Chrome DevTools MCP."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import NoReturn
from urllib.parse import urlparse

from ..claude import claude
from ..cli import ParsedArgs, parse_args, run_main
from ..config import resolve_model
from ..mcp import CHROME_DEVTOOLS, mcp_config, mcp_tool_names
from ..settings import Settings, dump_settings
from ..types import ClaudeFlags, OptionSpec
from ._common import HELP_FLAGS, print_banner, usage_error

USAGE = """
🔍 Chrome SEO Analyzer

Usage:
  chrome-seo-analyzer <url> [options]

Arguments:
  url                     Website URL to analyze

Options:
  --keyword <keyword>     Target keyword to optimize for
  --report <file>         Output file (default: seo-analysis.md)
  --no-performance        Skip performance metrics
  --help, -h              Show this help
"""

OPTIONS = {
    "keyword": OptionSpec(type="string"),
    "report": OptionSpec(type="string"),
    "no-performance": OptionSpec(),
}
AGENT_FLAGS = (*OPTIONS, *HELP_FLAGS)

PAGE_TOOLS = mcp_tool_names(
    "chrome-devtools",
    [
        "navigate_page",
        "new_page",
        "take_snapshot",
        "evaluate_script",
        "list_network_requests",
    ],
)
PERFORMANCE_TOOLS = mcp_tool_names(
    "chrome-devtools",
    [
        "performance_start_trace",
        "performance_stop_trace",
        "performance_analyze_insight",
    ],
)


@dataclass
class SEOAnalyzerOptions:
    url: str
    keyword: str | None = None
    report_file: str = "seo-analysis.md"
    check_performance: bool = True


def is_valid_url(url: str) -> bool:
    parsed = urlparse(url)
    return bool(parsed.scheme and parsed.netloc)


def parse_options(args: ParsedArgs) -> SEOAnalyzerOptions | None:
    """Parse options; ``None`` means help was shown.

    Raises ``ValueError`` with a user-facing message for a missing or
    malformed URL.
    """
    if args.help_requested:
        print(USAGE)
        return None

    if not args.positionals:
        raise ValueError("URL is required")
    url = args.positionals[0]
    if not is_valid_url(url):
        raise ValueError("Invalid URL")

    return SEOAnalyzerOptions(
        url=url,
        keyword=args.read_string_flag("keyword"),
        report_file=args.read_string_flag("report") or "seo-analysis.md",
        check_performance=not args.read_boolean_flag("no-performance", False),
    )


def build_prompt(options: SEOAnalyzerOptions) -> str:
    keyword_target = f'. Target Keyword: "{options.keyword}"' if options.keyword else ""
    performance = (
        ", run performance trace for Core Web Vitals"
        if options.check_performance
        else ""
    )
    keyword_analysis = (
        "Analyze keyword optimization: presence in title, description, H1, "
        "content density, image alt text. "
        if options.keyword
        else ""
    )
    return (
        "You are an SEO expert using Chrome DevTools MCP to analyze on-page SEO. "
        f"Target URL: {options.url}{keyword_target}. Open page, extract SEO "
        "metadata (title, meta tags, headings, images, links, structured data, "
        "canonical, Open Graph, etc.), analyze content quality, check "
        f"mobile-friendliness{performance}. {keyword_analysis}Generate "
        f'comprehensive SEO report and save to "{options.report_file}" with '
        "scores, issues, warnings, passed checks, and prioritized recommendations."
    )


def allowed_tools(options: SEOAnalyzerOptions) -> list[str]:
    performance = PERFORMANCE_TOOLS if options.check_performance else []
    return [*PAGE_TOOLS, *performance, "Write", "TodoWrite"]


def default_flags(options: SEOAnalyzerOptions) -> ClaudeFlags:
    settings: Settings = {}
    return {
        "model": resolve_model(),
        "settings": dump_settings(settings),
        "mcp-config": mcp_config(CHROME_DEVTOOLS),
        "allowedTools": allowed_tools(options),
        "permission-mode": "bypassPermissions",
        "strict-mcp-config": True,
    }


async def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv, OPTIONS)
    try:
        options = parse_options(args)
    except ValueError as e:
        return usage_error(str(e), USAGE)
    if options is None:
        return 0

    details = [f"URL: {options.url}"]
    if options.keyword:
        details.append(f'Target Keyword: "{options.keyword}"')
    print_banner("🔍 Chrome SEO Analyzer", details)

    args.remove_agent_flags(AGENT_FLAGS)

    exit_code = await claude(build_prompt(options), default_flags(options), args=args)
    if exit_code == 0:
        print("\n✨ SEO analysis complete!")
        print(f"📄 Report: {options.report_file}")
    return exit_code


def cli() -> NoReturn:
    run_main(main)


if __name__ == "__main__":
    cli()
