"""
fsmkit dispatch command.

SUMMARY: Dispatch one action and print the resulting state

The state is built as a plain MachineState from --state (and --data), so this
is mostly useful for exercising handlers that only rename states.
"""

from __future__ import annotations

import argparse

from fsmkit.cli import OutputFormatter, add_standard_flags, add_state_arg, load_machine, parse_params
from fsmkit.core.exceptions import ConfigError, FsmError
from fsmkit.core.state import DispatchError, MachineState, NextStateWithTimeout, dispatch

SUMMARY = "Dispatch one action and print the resulting state"


def register_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("action", help="Action name")
    add_state_arg(parser)
    parser.add_argument("--params", help="Action parameters as JSON")
    parser.add_argument("--data", help="Initial state data as a JSON object")
    add_standard_flags(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))
    try:
        handlers = load_machine(args)
        params = parse_params(args.params)
        data = parse_params(args.data) or {}
        if not isinstance(data, dict):
            raise ConfigError("--data must be a JSON object")
        result = dispatch(MachineState(handlers, args.state, data), args.action, params)
    except FsmError as e:
        formatter.error(e, error_code=e.__class__.__name__)
        return 1

    if isinstance(result, DispatchError):
        formatter.error(
            LookupError(str(result.reason)),
            f"{args.action!r} rejected in state {args.state!r}: {result.reason}",
            error_code=str(result.reason),
        )
        return 1

    new_state = result.state
    payload = {
        "from": args.state,
        "action": args.action,
        "state": new_state.state_name(),
        "data": dict(new_state.data),
    }
    message = f"{args.state} --{args.action}--> {new_state.state_name()}"
    if isinstance(result, NextStateWithTimeout):
        payload["timeout"] = result.timeout
        message += f" (timeout {result.timeout})"
    formatter.success(payload, message)
    return 0
