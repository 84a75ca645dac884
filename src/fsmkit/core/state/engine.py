"""Event dispatch: resolve the owning handler, invoke it, normalize its reply."""
from __future__ import annotations

import logging
from typing import Any, List, Optional

from ..exceptions import HandlerContractError, UnmatchedClause
from .availability import action_available, available_actions
from .protocols import ActionName
from .replies import (
    ERROR,
    ILLEGAL_ACTION,
    KEEP_STATE,
    NEXT_STATE,
    DispatchError,
    DispatchResult,
    DocResult,
    NextState,
    NextStateWithTimeout,
)
from .resolver import find_bypass, find_info, find_state_handler

logger = logging.getLogger(__name__)


def _is_timeout(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0


def _normalize(reply: Any, *, bypass: bool) -> Optional[DispatchResult]:
    """Map a handler reply onto a DispatchResult, or None if unrecognized.

    Transition replies must carry a non-negative int timeout; bypass replies
    pass any timeout value through untouched.
    """
    if not isinstance(reply, tuple) or not reply:
        return None
    tag = reply[0]
    if tag == NEXT_STATE and len(reply) == 4 and (bypass or _is_timeout(reply[3])):
        _, name, new_state, timeout = reply
        return NextStateWithTimeout(new_state.set_state_name(name), timeout)
    if tag == NEXT_STATE and len(reply) == 3:
        _, name, new_state = reply
        return NextState(new_state.set_state_name(name))
    if tag == ERROR and len(reply) == 2:
        return DispatchError(reply[1])
    if bypass and tag == KEEP_STATE and len(reply) == 2:
        return NextState(reply[1])
    return None


def _contract_violation(handler: Any, state_name: Any, action: ActionName, reply: Any) -> HandlerContractError:
    logger.error(
        "Handler %r returned invalid reply %r (state=%r action=%r)",
        handler,
        reply,
        state_name,
        action,
    )
    return HandlerContractError(handler=handler, state_name=state_name, action=action, reply=reply)


def _apply_event(handler: Any, state: Any, action: ActionName, params: Any) -> DispatchResult:
    orig = state.state_name()
    try:
        reply = handler.dispatch_state(orig, (action, params), state)
    except UnmatchedClause:
        logger.debug("Handler %r has no clause for %r in state %r", handler, action, orig)
        return DispatchError(ILLEGAL_ACTION)

    result = _normalize(reply, bypass=False)
    if result is None:
        raise _contract_violation(handler, orig, action, reply)
    return result


def _apply_bypass(handler: Any, state: Any, action: ActionName, params: Any) -> DispatchResult:
    try:
        reply = handler.dispatch_action(action, params, state)
    except UnmatchedClause:
        logger.debug("Bypass handler %r declined %r", handler, action)
        return DispatchError(ILLEGAL_ACTION)

    result = _normalize(reply, bypass=True)
    if result is None:
        raise _contract_violation(handler, state.state_name(), action, reply)
    return result


def dispatch(state: Any, action: ActionName, params: Any = None) -> DispatchResult:
    """Apply ``action`` to ``state`` using the handler that owns the rule.

    A state-scoped transition takes precedence; otherwise a bypass for the
    action is tried. With neither, the result is ``DispatchError("illegal_action")``.

    Raises:
        HandlerContractError: the owning handler replied with an unknown shape.
    """
    handler = find_state_handler(state, action)
    if handler is not None:
        logger.debug("Dispatching %r from %r to %r", action, state.state_name(), handler)
        return _apply_event(handler, state, action, params)

    bypass = find_bypass(state, action)
    if bypass is None:
        logger.debug("Illegal action %r in state %r", action, state.state_name())
        return DispatchError(ILLEGAL_ACTION)

    logger.debug("Dispatching %r to bypass handler %r", action, bypass)
    return _apply_bypass(bypass, state, action, params)


class Machine:
    """Method-style facade over the module functions; holds no state."""

    def dispatch(self, state: Any, action: ActionName, params: Any = None) -> DispatchResult:
        return dispatch(state, action, params)

    def available_actions(self, state: Any) -> List[ActionName]:
        return available_actions(state)

    def action_available(self, state: Any, action: ActionName) -> bool:
        return action_available(state, action)

    def find_info(self, state: Any, action: ActionName) -> Optional[DocResult]:
        return find_info(state, action)


__all__ = ["dispatch", "Machine"]
