from __future__ import annotations

from typing import Any, List

from .protocols import ActionName
from .specs import build_bypasses, build_transitions


def available_actions(state: Any) -> List[ActionName]:
    """Return the actions legal from the current state.

    Transition actions from this state come first, then every bypass action,
    with duplicates removed (first occurrence kept).
    """
    current = state.state_name()
    fsm_actions = [action for (from_state, action) in build_transitions(state) if from_state == current]
    bypass_actions = list(build_bypasses(state))
    return list(dict.fromkeys(fsm_actions + bypass_actions))


def action_available(state: Any, action: ActionName) -> bool:
    """Return True if ``action`` is available from the current state."""
    return action in available_actions(state)


__all__ = ["available_actions", "action_available"]
