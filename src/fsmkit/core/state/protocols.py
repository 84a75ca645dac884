"""Capability interfaces consumed by the state machine core.

The engine depends only on these protocols, never on a concrete state type.
Callers may supply any record they like as long as it answers the three
State Capability operations. ``MachineState`` is a ready-made implementation.
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any, Hashable, Mapping, Protocol, Sequence, Tuple, runtime_checkable

StateName = Hashable
ActionName = Hashable
ActionKey = Tuple[Hashable, Hashable]

TRANSITION_DOC = "transition_doc"
EVENT_DOC = "event_doc"


def transition_doc_key(state_name: StateName, action: ActionName) -> tuple:
    return (TRANSITION_DOC, state_name, action)


def event_doc_key(action: ActionName) -> tuple:
    return (EVENT_DOC, action)


@runtime_checkable
class StateCapability(Protocol):
    """Read access to a machine state plus a pure rename operation."""

    def handlers(self) -> Sequence[Any]:
        """Return the ordered handler sequence driving this state."""
        ...

    def state_name(self) -> StateName:
        """Return the current state name."""
        ...

    def set_state_name(self, name: StateName) -> "StateCapability":
        """Return a new state value carrying ``name``; never mutate self."""
        ...


@runtime_checkable
class FsmHandlerProtocol(Protocol):
    """Static tables and entry points every handler contributes.

    Both entry points raise ``UnmatchedClause`` when no clause serves the call.
    """

    transitions: Mapping[ActionKey, Tuple[Any, Sequence[StateName]]]
    bypasses: Mapping[ActionName, Any]
    docs: Mapping[tuple, str]

    def dispatch_state(self, state_name: StateName, event: Tuple[ActionName, Any], state: Any) -> Any:
        ...

    def dispatch_action(self, action: ActionName, params: Any, state: Any) -> Any:
        ...


@dataclass(frozen=True)
class MachineState:
    """Immutable state container holding a handler list, a name, and data."""

    machine_handlers: Tuple[Any, ...] = ()
    state: StateName | None = None
    data: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "machine_handlers", tuple(self.machine_handlers))
        object.__setattr__(self, "data", MappingProxyType(dict(self.data)))

    def handlers(self) -> Tuple[Any, ...]:
        return self.machine_handlers

    def state_name(self) -> StateName | None:
        return self.state

    def set_state_name(self, name: StateName) -> "MachineState":
        return replace(self, state=name)

    def with_data(self, **updates: Any) -> "MachineState":
        """Return a copy with ``updates`` merged into ``data``."""
        merged = dict(self.data)
        merged.update(updates)
        return replace(self, data=merged)


__all__ = [
    "StateName",
    "ActionName",
    "ActionKey",
    "TRANSITION_DOC",
    "EVENT_DOC",
    "transition_doc_key",
    "event_doc_key",
    "StateCapability",
    "FsmHandlerProtocol",
    "MachineState",
]
