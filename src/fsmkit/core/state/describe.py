"""Render merged machine tables for humans and tooling.

The next-state lists in the transition table are informational only; this
module is where they are surfaced.
"""
from __future__ import annotations

from types import ModuleType
from typing import Any, Dict, List

from .protocols import event_doc_key, transition_doc_key
from .specs import build_bypasses, build_docs, build_transitions


def handler_name(handler: Any) -> str:
    """Return a dotted display name for a handler."""
    if isinstance(handler, ModuleType):
        return handler.__name__
    module = getattr(handler, "__module__", None)
    qualname = getattr(handler, "__qualname__", None) or type(handler).__qualname__
    return f"{module}.{qualname}" if module else str(qualname)


def _cell(value: Any) -> str:
    return str(value).replace("|", "\\|").replace("\n", " ")


def transitions_markdown(handlers_or_state: Any) -> str:
    """Return the merged transitions as a markdown table."""
    docs = build_docs(handlers_or_state)
    header = "| From State | Action | To States | Handler | Description |"
    separator = "|------------|--------|-----------|---------|-------------|"
    rows = [header, separator]
    for (from_state, action), (handler, targets) in build_transitions(handlers_or_state).items():
        to_states = ", ".join(str(t) for t in targets)
        description = docs.get(transition_doc_key(from_state, action), "")
        rows.append(
            f"| {_cell(from_state)} | {_cell(action)} | {_cell(to_states)} "
            f"| {_cell(handler_name(handler))} | {_cell(description)} |"
        )
    return "\n".join(rows)


def bypasses_markdown(handlers_or_state: Any) -> str:
    """Return the merged bypasses as a markdown table."""
    docs = build_docs(handlers_or_state)
    rows = ["| Action | Handler | Description |", "|--------|---------|-------------|"]
    for action, handler in build_bypasses(handlers_or_state).items():
        description = docs.get(event_doc_key(action), "")
        rows.append(f"| {_cell(action)} | {_cell(handler_name(handler))} | {_cell(description)} |")
    return "\n".join(rows)


def describe_machine(handlers_or_state: Any) -> Dict[str, Any]:
    """Return a JSON-serializable summary of the merged machine."""
    docs = build_docs(handlers_or_state)
    transitions: List[Dict[str, Any]] = []
    states: List[str] = []
    for (from_state, action), (handler, targets) in build_transitions(handlers_or_state).items():
        transitions.append(
            {
                "from": str(from_state),
                "action": str(action),
                "to": [str(t) for t in targets],
                "handler": handler_name(handler),
                "doc": docs.get(transition_doc_key(from_state, action)),
            }
        )
        for name in (from_state, *targets):
            if str(name) not in states:
                states.append(str(name))
    bypasses = [
        {
            "action": str(action),
            "handler": handler_name(handler),
            "doc": docs.get(event_doc_key(action)),
        }
        for action, handler in build_bypasses(handlers_or_state).items()
    ]
    return {"states": states, "transitions": transitions, "bypasses": bypasses}


__all__ = [
    "handler_name",
    "transitions_markdown",
    "bypasses_markdown",
    "describe_machine",
]
