"""A handler written as a plain module instead of an FsmHandler class."""
import sys

from fsmkit.core.exceptions import UnmatchedClause

_self = sys.modules[__name__]

transitions = {("idle", "ring"): (_self, ["ringing"])}
bypasses = {"silence": _self}
docs = {("transition_doc", "idle", "ring"): "ring the bell"}


def dispatch_state(state_name, event, state):
    action, params = event
    if (state_name, action) == ("idle", "ring"):
        return ("next_state", "ringing", state, int(params or 0))
    raise UnmatchedClause(f"no clause for {action!r} in {state_name!r}")


def dispatch_action(action, params, state):
    if action == "silence":
        return ("next_state", "idle", state)
    raise UnmatchedClause(f"no bypass for {action!r}")
