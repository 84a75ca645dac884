"""Declarative authoring of state machine handlers.

A handler is a class deriving from ``FsmHandler``. Clauses are plain functions
decorated with ``transition`` or ``bypass``; the class collects them into the
static tables the engine consumes.

Example:
    class Door(FsmHandler):
        @transition("closed", "open_door", to="opened", doc="open the door")
        def open_door(params, state):
            return next_state("opened", state)

        @bypass("close_door")
        def close_door(params, state):
            \"\"\"allow multiple closes\"\"\"
            return keep_state(state.with_data(doubleclosed=True))

The class itself is the handler identity stored in the merged tables. Clause
bodies may raise ``UnmatchedClause`` to decline a particular params value.
"""
from __future__ import annotations

import inspect
from typing import Any, Callable, ClassVar, Dict, Iterable, List, Mapping, Optional, Tuple

from ..exceptions import UnmatchedClause
from .protocols import ActionKey, ActionName, StateName, event_doc_key, transition_doc_key

Clause = Callable[[Any, Any], Any]

_TRANSITIONS_ATTR = "_fsm_transitions"
_BYPASSES_ATTR = "_fsm_bypasses"


def _as_targets(to: Any) -> Tuple[StateName, ...]:
    if to is None:
        return ()
    if isinstance(to, (list, tuple, set, frozenset)):
        return tuple(to)
    return (to,)


def _unwrap(value: Any) -> Any:
    if isinstance(value, (staticmethod, classmethod)):
        return value.__func__
    return value


def transition(from_state: StateName, action: ActionName, *, to: Any = None, doc: Optional[str] = None):
    """Decorator declaring a clause for ``action`` while in ``from_state``.

    Args:
        from_state: State name the clause applies to
        action: Action name the clause answers
        to: Possible next state(s); informational, not enforced
        doc: Description; defaults to the function docstring
    """

    def decorator(fn):
        entries = list(getattr(_unwrap(fn), _TRANSITIONS_ATTR, ()))
        entries.append((from_state, action, _as_targets(to), doc))
        setattr(_unwrap(fn), _TRANSITIONS_ATTR, entries)
        return fn

    return decorator


def bypass(action: ActionName, *, doc: Optional[str] = None):
    """Decorator declaring a clause for ``action`` valid from any state."""

    def decorator(fn):
        entries = list(getattr(_unwrap(fn), _BYPASSES_ATTR, ()))
        entries.append((action, doc))
        setattr(_unwrap(fn), _BYPASSES_ATTR, entries)
        return fn

    return decorator


class FsmHandler:
    """Base class for declaratively authored handlers."""

    transitions: ClassVar[Mapping[ActionKey, Tuple[Any, Tuple[StateName, ...]]]] = {}
    bypasses: ClassVar[Mapping[ActionName, Any]] = {}
    docs: ClassVar[Mapping[tuple, str]] = {}

    _state_clauses: ClassVar[Dict[ActionKey, Clause]] = {}
    _action_clauses: ClassVar[Dict[ActionName, Clause]] = {}

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)

        targets: Dict[ActionKey, Tuple[StateName, ...]] = {}
        state_clauses: Dict[ActionKey, Clause] = {}
        action_clauses: Dict[ActionName, Clause] = {}
        docs: Dict[tuple, str] = {}

        # Parents first so subclass clauses override inherited ones.
        for base in reversed(cls.__mro__[1:]):
            if issubclass(base, FsmHandler) and base is not FsmHandler:
                for key, (_owner, to) in base.transitions.items():
                    targets[key] = to
                state_clauses.update(base._state_clauses)
                action_clauses.update(base._action_clauses)
                docs.update(base.docs)

        for name, value in list(cls.__dict__.items()):
            fn = _unwrap(value)
            if not callable(fn):
                continue
            declared_transitions = getattr(fn, _TRANSITIONS_ATTR, ())
            declared_bypasses = getattr(fn, _BYPASSES_ATTR, ())
            if not declared_transitions and not declared_bypasses:
                continue
            setattr(cls, name, staticmethod(fn))
            default_doc = inspect.getdoc(fn)
            for from_state, action, to, doc in declared_transitions:
                key = (from_state, action)
                targets[key] = to
                state_clauses[key] = fn
                text = doc if doc is not None else default_doc
                if text:
                    docs[transition_doc_key(from_state, action)] = text
                else:
                    docs.pop(transition_doc_key(from_state, action), None)
            for action, doc in declared_bypasses:
                action_clauses[action] = fn
                text = doc if doc is not None else default_doc
                if text:
                    docs[event_doc_key(action)] = text
                else:
                    docs.pop(event_doc_key(action), None)

        cls.transitions = {key: (cls, to) for key, to in targets.items()}
        cls.bypasses = {action: cls for action in action_clauses}
        cls.docs = docs
        cls._state_clauses = state_clauses
        cls._action_clauses = action_clauses

    @classmethod
    def dispatch_state(cls, state_name: StateName, event: Tuple[ActionName, Any], state: Any) -> Any:
        """Run the clause declared for ``state_name`` and the event's action."""
        action, params = event
        clause = cls._state_clauses.get((state_name, action))
        if clause is None:
            raise UnmatchedClause(
                f"{cls.__name__} has no clause for {action!r} in state {state_name!r}",
                context={"handler": cls.__qualname__, "state_name": state_name, "action": action},
            )
        return clause(params, state)

    @classmethod
    def dispatch_action(cls, action: ActionName, params: Any, state: Any) -> Any:
        """Run the bypass clause declared for ``action``."""
        clause = cls._action_clauses.get(action)
        if clause is None:
            raise UnmatchedClause(
                f"{cls.__name__} has no bypass for {action!r}",
                context={"handler": cls.__qualname__, "action": action},
            )
        return clause(params, state)

    @classmethod
    def states(cls) -> List[StateName]:
        """Return the states this handler declares transitions from."""
        return list(dict.fromkeys(from_state for (from_state, _action) in cls.transitions))


def is_handler_class(obj: Any) -> bool:
    return isinstance(obj, type) and issubclass(obj, FsmHandler) and obj is not FsmHandler


def declared_handlers(objects: Iterable[Any]) -> List[type]:
    """Filter ``objects`` down to concrete handler classes, keeping order."""
    return [obj for obj in objects if is_handler_class(obj)]


__all__ = [
    "FsmHandler",
    "transition",
    "bypass",
    "is_handler_class",
    "declared_handlers",
]
