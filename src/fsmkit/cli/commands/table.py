"""
fsmkit table command.

SUMMARY: Show the merged transition and bypass tables
"""

from __future__ import annotations

import argparse

from fsmkit.cli import OutputFormatter, add_standard_flags, load_machine
from fsmkit.core.exceptions import FsmError
from fsmkit.core.state.describe import bypasses_markdown, describe_machine, transitions_markdown

SUMMARY = "Show the merged transition and bypass tables"


def register_args(parser: argparse.ArgumentParser) -> None:
    add_standard_flags(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))
    try:
        handlers = load_machine(args)
    except FsmError as e:
        formatter.error(e, error_code="config_error")
        return 1

    if formatter.json_mode:
        formatter.json_output(describe_machine(list(handlers)))
        return 0

    formatter.text("## Transitions\n")
    formatter.text(transitions_markdown(list(handlers)))
    formatter.text("\n## Bypasses\n")
    formatter.text(bypasses_markdown(list(handlers)))
    return 0
