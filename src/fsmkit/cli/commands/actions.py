"""
fsmkit actions command.

SUMMARY: List the actions available from a state
"""

from __future__ import annotations

import argparse

from fsmkit.cli import OutputFormatter, add_standard_flags, add_state_arg, load_machine
from fsmkit.core.exceptions import FsmError
from fsmkit.core.state import MachineState, available_actions

SUMMARY = "List the actions available from a state"


def register_args(parser: argparse.ArgumentParser) -> None:
    add_state_arg(parser)
    add_standard_flags(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))
    try:
        handlers = load_machine(args)
    except FsmError as e:
        formatter.error(e, error_code="config_error")
        return 1

    actions = available_actions(MachineState(handlers, args.state))
    formatter.success(
        {"state": args.state, "actions": [str(a) for a in actions]},
        "\n".join(str(a) for a in actions) if actions else f"No actions available from {args.state!r}",
    )
    return 0
