"""Reply shapes returned by handlers and canonical results returned by the engine.

Handlers answer with plain tuples:

    ("next_state", name, state)
    ("next_state", name, state, timeout)
    ("keep_state", state)            # bypass entry points only
    ("error", reason)

The helpers below build those tuples. The engine normalizes them into one of
``NextState``, ``NextStateWithTimeout`` or ``DispatchError``.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union

NEXT_STATE = "next_state"
KEEP_STATE = "keep_state"
ERROR = "error"

ILLEGAL_ACTION = "illegal_action"


def next_state(name: Any, state: Any, timeout: Any = None) -> tuple:
    if timeout is None:
        return (NEXT_STATE, name, state)
    return (NEXT_STATE, name, state, timeout)


def keep_state(state: Any) -> tuple:
    return (KEEP_STATE, state)


def error(reason: Any) -> tuple:
    return (ERROR, reason)


@dataclass(frozen=True)
class NextState:
    state: Any


@dataclass(frozen=True)
class NextStateWithTimeout:
    state: Any
    timeout: Any


@dataclass(frozen=True)
class DispatchError:
    reason: Any

    @property
    def is_illegal_action(self) -> bool:
        return self.reason == ILLEGAL_ACTION


DispatchResult = Union[NextState, NextStateWithTimeout, DispatchError]


@dataclass(frozen=True)
class KnownTransitionInfo:
    """Documentation of a state-scoped transition."""

    doc: str


@dataclass(frozen=True)
class BypassInfo:
    """Documentation of a bypass valid from any state."""

    doc: str


DocResult = Union[KnownTransitionInfo, BypassInfo]


__all__ = [
    "NEXT_STATE",
    "KEEP_STATE",
    "ERROR",
    "ILLEGAL_ACTION",
    "next_state",
    "keep_state",
    "error",
    "NextState",
    "NextStateWithTimeout",
    "DispatchError",
    "DispatchResult",
    "KnownTransitionInfo",
    "BypassInfo",
    "DocResult",
]
