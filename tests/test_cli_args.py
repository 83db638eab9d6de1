"""Tests for command-line parsing shared by agents."""

from __future__ import annotations

import logging
import sys

import pytest
from claude_agent_sdk import ClaudeSDKError

from claude_agents._errors import FlagError
from claude_agents.cli import parse_args, run_main
from claude_agents.config import configure_logging, log_level, resolve_model
from claude_agents.types import OptionSpec

OPTIONS = {
    "report": OptionSpec(type="string"),
    "file": OptionSpec(type="string", multiple=True),
    "dry-run": OptionSpec(),
    "days": OptionSpec(type="string"),
}


def test_parse_positionals_and_flags():
    args = parse_args(
        ["https://example.com", "--report", "out.md", "--dry-run", "extra"], OPTIONS
    )

    assert args.positionals == ["https://example.com", "extra"]
    assert args.values["report"] == "out.md"
    assert args.values["dry-run"] is True


def test_parse_equals_form_is_string():
    args = parse_args(["--days=14", "--undeclared=yes"], OPTIONS)
    assert args.values["days"] == "14"
    assert args.values["undeclared"] == "yes"


def test_parse_undeclared_flag_is_boolean():
    args = parse_args(["--include-remote", "main"], OPTIONS)
    assert args.values["include-remote"] is True
    assert args.positionals == ["main"]


def test_parse_known_claude_flags_take_values():
    args = parse_args(["--model", "opus", "--permission-mode", "plan", "task"])
    assert args.values["model"] == "opus"
    assert args.values["permission-mode"] == "plan"
    assert args.positionals == ["task"]


def test_parse_string_flag_without_value_raises():
    with pytest.raises(FlagError):
        parse_args(["--report"], OPTIONS)
    with pytest.raises(FlagError):
        parse_args(["--report", "--dry-run"], OPTIONS)


def test_parse_short_help_and_double_dash():
    args = parse_args(["-h", "--", "--not-a-flag", "-x"], OPTIONS)
    assert args.help_requested
    assert args.positionals == ["--not-a-flag", "-x"]


def test_parse_negative_number_is_positional():
    args = parse_args(["-5"], OPTIONS)
    assert args.positionals == ["-5"]


def test_parse_multiple_flag_accumulates():
    args = parse_args(["--file", "a.py", "--file=b.py"], OPTIONS)
    assert args.values["file"] == ["a.py", "b.py"]


def test_read_string_flag_falls_back_to_argv_scan():
    args = parse_args(["--target", "src/app.py"])
    # Undeclared, so parsed as boolean; the raw argv still carries the value.
    assert args.values["target"] is True
    assert args.read_string_flag("target") == "src/app.py"
    assert args.read_string_flag("missing") is None


def test_read_string_flag_ignores_empty_values():
    args = parse_args(["--report="], OPTIONS)
    assert args.read_string_flag("report") is None


def test_read_number_flag():
    assert parse_args(["--days", "14"], OPTIONS).read_number_flag("days", 30) == 14
    assert parse_args(["--days=7.9"], OPTIONS).read_number_flag("days", 30) == 7
    assert parse_args([], OPTIONS).read_number_flag("days", 30) == 30


@pytest.mark.parametrize("raw", ["0", "-3", "abc", "inf", "nan"])
def test_read_number_flag_rejects_invalid(raw: str):
    args = parse_args([f"--days={raw}"], OPTIONS)
    with pytest.raises(FlagError, match="--days must be a positive integer"):
        args.read_number_flag("days", 30)


def test_read_boolean_flag():
    args = parse_args(["--dry-run"], OPTIONS)
    assert args.read_boolean_flag("dry-run", False) is True
    assert args.read_boolean_flag("verbose-report", False) is False
    assert args.read_boolean_flag("verbose-report", True) is True

    args.values["dry-run"] = False
    assert args.read_boolean_flag("dry-run", True) is False


def test_collect_repeated_flag():
    args = parse_args(["--tag", "a", "--tag=b", "--tag", "c", "--tag=d"])
    assert args.collect_repeated_flag("tag") == ["b", "d", "a", "c"]


def test_collect_repeated_flag_does_not_duplicate_parsed_values():
    args = parse_args(["--file", "a.py", "--file=b.py"], OPTIONS)
    assert sorted(args.collect_repeated_flag("file")) == ["a.py", "b.py"]


def test_remove_agent_flags():
    args = parse_args(["--report", "x.md", "--model", "haiku"], OPTIONS)
    args.remove_agent_flags(["report", "help", "h"])
    assert args.values == {"model": "haiku"}


def test_run_main_exit_codes(capsys: pytest.CaptureFixture[str]):
    async def ok() -> int:
        return 0

    async def failing() -> int:
        raise FlagError("--days must be a positive integer", "days")

    async def passthrough() -> int:
        return 7

    with pytest.raises(SystemExit) as exc:
        run_main(ok)
    assert exc.value.code == 0

    with pytest.raises(SystemExit) as exc:
        run_main(passthrough)
    assert exc.value.code == 7

    with pytest.raises(SystemExit) as exc:
        run_main(failing)
    assert exc.value.code == 1
    assert "--days must be a positive integer" in capsys.readouterr().err


def test_run_main_interrupt_and_sdk_errors(capsys: pytest.CaptureFixture[str]):
    async def interrupted() -> int:
        raise KeyboardInterrupt

    async def sdk_failure() -> int:
        raise ClaudeSDKError("transport closed")

    with pytest.raises(SystemExit) as exc:
        run_main(interrupted)
    assert exc.value.code == 130

    with pytest.raises(SystemExit) as exc:
        run_main(sdk_failure)
    assert exc.value.code == 1
    assert "Fatal error: transport closed" in capsys.readouterr().err


def test_read_string_flag_keeps_equals_in_value():
    args = parse_args(["--query=a=b"])
    assert args.values["query"] == "a=b"
    assert args.read_string_flag("query") == "a=b"

    args = parse_args(["--target=x=y", "--target"])
    assert args.values["target"] is True
    assert args.read_string_flag("target") == "x=y"


def test_log_level_from_env(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.delenv("CLAUDE_AGENTS_LOG_LEVEL", raising=False)
    assert log_level() == logging.WARNING
    monkeypatch.setenv("CLAUDE_AGENTS_LOG_LEVEL", "debug")
    assert log_level() == logging.DEBUG
    monkeypatch.setenv("CLAUDE_AGENTS_LOG_LEVEL", "15")
    assert log_level() == 15
    monkeypatch.setenv("CLAUDE_AGENTS_LOG_LEVEL", "chatty")
    assert log_level() == logging.WARNING


def test_configure_logging_uses_stderr(monkeypatch: pytest.MonkeyPatch):
    captured: dict[str, object] = {}
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: captured.update(kwargs))
    configure_logging(logging.INFO)
    assert captured["level"] == logging.INFO
    assert captured["stream"] is sys.stderr


def test_resolve_model(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.delenv("CLAUDE_AGENTS_MODEL", raising=False)
    assert resolve_model("sonnet") == "sonnet"
    monkeypatch.setenv("CLAUDE_AGENTS_MODEL", "opus")
    assert resolve_model("sonnet") == "opus"
