"""Table-only handlers for exercising merge and dispatch edge cases."""
from __future__ import annotations

from typing import Any, Dict


def make_handler(
    name: str,
    *,
    transitions: Dict[Any, Any] | None = None,
    bypasses: Dict[Any, Any] | None = None,
    docs: Dict[Any, str] | None = None,
    state_reply: Any = None,
    action_reply: Any = None,
) -> type:
    """Build a handler class whose entry points return fixed replies.

    Table values may use the placeholder ``"self"`` for the handler itself.
    A reply given as an exception instance is raised instead of returned.
    """
    calls: list = []

    def _dispatch_state(cls, state_name, event, state):
        calls.append(("state", state_name, event, state))
        reply = state_reply(state) if callable(state_reply) else state_reply
        if isinstance(reply, BaseException):
            raise reply
        return reply

    def _dispatch_action(cls, action, params, state):
        calls.append(("action", action, params, state))
        reply = action_reply(state) if callable(action_reply) else action_reply
        if isinstance(reply, BaseException):
            raise reply
        return reply

    cls = type(
        name,
        (),
        {
            "dispatch_state": classmethod(_dispatch_state),
            "dispatch_action": classmethod(_dispatch_action),
            "calls": calls,
        },
    )
    cls.transitions = {
        key: (cls if owner == "self" else owner, targets)
        for key, (owner, targets) in (transitions or {}).items()
    }
    cls.bypasses = {action: (cls if owner == "self" else owner) for action, owner in (bypasses or {}).items()}
    cls.docs = dict(docs or {})
    return cls
