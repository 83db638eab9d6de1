#!/usr/bin/env python3
"""UserPromptSubmit hook for hooks_example: blocks prompts asking to stop."""

import sys

from claude_agents.hooks import read_hook_input, write_hook_output


def main() -> int:
    payload = read_hook_input()
    prompt = str(payload.get("prompt", ""))
    print(f"[UserPromptSubmit Hook] Received prompt: {prompt}", file=sys.stderr)

    if "stop" in prompt:
        write_hook_output(
            {"decision": "block", "reason": "User requested to stop the session"}
        )
    return 0


if __name__ == "__main__":
    sys.exit(main())
