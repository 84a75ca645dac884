"""Look up the handler owning a transition, a bypass, or a documentation entry."""
from __future__ import annotations

from typing import Any, Optional, Sequence

from .protocols import ActionName, StateName, event_doc_key, transition_doc_key
from .replies import BypassInfo, DocResult, KnownTransitionInfo
from .specs import DocTable, build_bypasses, build_docs, build_transitions


def find_handler(state_name: StateName, action: ActionName, handlers: Sequence[Any]) -> Optional[Any]:
    """Return the handler owning ``(state_name, action)``, if any."""
    entry = build_transitions(handlers).get((state_name, action))
    if entry is None:
        return None
    handler, _targets = entry
    return handler


def find_state_handler(state: Any, action: ActionName) -> Optional[Any]:
    """Same as ``find_handler`` but reading name and handlers from ``state``."""
    return find_handler(state.state_name(), action, tuple(state.handlers()))


def find_bypass(handlers_or_state: Any, action: ActionName) -> Optional[Any]:
    """Return the handler owning the bypass for ``action``, if any."""
    return build_bypasses(handlers_or_state).get(action)


def infos(handlers_or_state: Any) -> DocTable:
    """Return the merged documentation table."""
    return build_docs(handlers_or_state)


def find_info(state: Any, action: ActionName) -> Optional[DocResult]:
    """Return the documentation for ``action`` from the current state.

    A transition doc for the current state takes precedence over a bypass doc.
    """
    docs = infos(state)
    doc = docs.get(transition_doc_key(state.state_name(), action))
    if doc is not None:
        return KnownTransitionInfo(doc)
    doc = docs.get(event_doc_key(action))
    if doc is not None:
        return BypassInfo(doc)
    return None


__all__ = [
    "find_handler",
    "find_state_handler",
    "find_bypass",
    "infos",
    "find_info",
]
