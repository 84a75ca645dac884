"""Merge per-handler tables into the global machine tables.

Every operation accepts either an ordered handler sequence or a state value
implementing ``StateCapability``. Contributions are folded in handler order;
when two handlers share a key the later handler wins.
"""
from __future__ import annotations

from collections.abc import Sequence
from functools import lru_cache
from typing import Any, Callable, Dict, Iterable, Mapping, Tuple

from .protocols import ActionKey, ActionName

TransitionTable = Dict[ActionKey, Tuple[Any, Tuple[Any, ...]]]
BypassTable = Dict[ActionName, Any]
DocTable = Dict[tuple, str]


def handlers_of(handlers_or_state: Any) -> Tuple[Any, ...]:
    """Return the handler tuple for a sequence or a state value.

    Any non-string ``Sequence`` is taken as the handlers themselves; anything
    else must answer ``handlers()``.
    """
    if isinstance(handlers_or_state, Sequence) and not isinstance(handlers_or_state, (str, bytes)):
        return tuple(handlers_or_state)
    return tuple(handlers_or_state.handlers())


def _merge(tables: Iterable[Mapping[Any, Any] | None]) -> Dict[Any, Any]:
    merged: Dict[Any, Any] = {}
    for table in tables:
        merged.update(table or {})
    return merged


def _fold_transitions(handlers: Tuple[Any, ...]) -> TransitionTable:
    merged = _merge(getattr(h, "transitions", None) for h in handlers)
    return {key: (owner, tuple(targets or ())) for key, (owner, targets) in merged.items()}


def _fold_bypasses(handlers: Tuple[Any, ...]) -> BypassTable:
    return _merge(getattr(h, "bypasses", None) for h in handlers)


def _fold_docs(handlers: Tuple[Any, ...]) -> DocTable:
    return _merge(getattr(h, "docs", None) for h in handlers)


_transitions_for = lru_cache(maxsize=128)(_fold_transitions)
_bypasses_for = lru_cache(maxsize=128)(_fold_bypasses)
_docs_for = lru_cache(maxsize=128)(_fold_docs)


Fold = Callable[[Tuple[Any, ...]], Dict[Any, Any]]


def _lookup(cached: Fold, fold: Fold, handlers: Tuple[Any, ...]) -> Dict[Any, Any]:
    # Handlers without a usable hash are merged on every call.
    try:
        hash(handlers)
    except TypeError:
        return fold(handlers)
    return dict(cached(handlers))


def build_transitions(handlers_or_state: Any) -> TransitionTable:
    """Return the merged transition table ``{(state, action): (handler, next_states)}``."""
    return _lookup(_transitions_for, _fold_transitions, handlers_of(handlers_or_state))


def build_bypasses(handlers_or_state: Any) -> BypassTable:
    """Return the merged bypass table ``{action: handler}``."""
    return _lookup(_bypasses_for, _fold_bypasses, handlers_of(handlers_or_state))


def build_docs(handlers_or_state: Any) -> DocTable:
    """Return the merged documentation table."""
    return _lookup(_docs_for, _fold_docs, handlers_of(handlers_or_state))


def clear_spec_cache() -> None:
    """Drop cached tables (after reloading or redefining handlers)."""
    _transitions_for.cache_clear()
    _bypasses_for.cache_clear()
    _docs_for.cache_clear()


__all__ = [
    "TransitionTable",
    "BypassTable",
    "DocTable",
    "handlers_of",
    "build_transitions",
    "build_bypasses",
    "build_docs",
    "clear_spec_cache",
]
