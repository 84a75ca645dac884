"""
fsmkit info command.

SUMMARY: Show the documentation of an action from a state
"""

from __future__ import annotations

import argparse

from fsmkit.cli import OutputFormatter, add_standard_flags, add_state_arg, load_machine
from fsmkit.core.exceptions import FsmError
from fsmkit.core.state import KnownTransitionInfo, MachineState, find_info

SUMMARY = "Show the documentation of an action from a state"


def register_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("action", help="Action name")
    add_state_arg(parser)
    add_standard_flags(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))
    try:
        handlers = load_machine(args)
    except FsmError as e:
        formatter.error(e, error_code="config_error")
        return 1

    info = find_info(MachineState(handlers, args.state), args.action)
    if info is None:
        formatter.error(
            LookupError(args.action),
            f"No documentation for {args.action!r} from state {args.state!r}",
            error_code="not_found",
        )
        return 1

    kind = "known_transition" if isinstance(info, KnownTransitionInfo) else "bypass"
    formatter.success(
        {"state": args.state, "action": args.action, "kind": kind, "doc": info.doc},
        f"[{kind}] {info.doc}",
    )
    return 0
