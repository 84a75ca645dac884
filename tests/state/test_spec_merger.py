from collections.abc import Sequence

import pytest

from fsmkit.core.state import (
    KnownTransitionInfo,
    MachineState,
    NextState,
    available_actions,
    build_bypasses,
    build_docs,
    build_transitions,
    dispatch,
    event_doc_key,
    find_info,
    keep_state,
    next_state,
    transition_doc_key,
)
from fsmkit.core.state.specs import handlers_of

from helpers.doors import Door1, Door2, DoorState
from helpers.stubs import make_handler


def test_door_tables_merge():
    assert build_transitions([Door1, Door2]) == {
        ("closed", "open_door"): (Door1, ("opened",)),
        ("opened", "close_door"): (Door2, ("closed",)),
    }
    assert build_bypasses([Door1, Door2]) == {"close_door": Door2}


def test_docs_merge_keeps_transition_and_event_keys():
    docs = build_docs([Door1, Door2])
    assert docs == {
        event_doc_key("close_door"): "allow multiple closes",
        transition_doc_key("opened", "close_door"): "standard door open",
    }


def test_later_handler_wins_for_transitions():
    a = make_handler("A", transitions={("s", "go"): ("self", ["a"])})
    b = make_handler("B", transitions={("s", "go"): ("self", ["b"])})

    assert build_transitions([a, b])[("s", "go")] == (b, ("b",))
    assert build_transitions([b, a])[("s", "go")] == (a, ("a",))


def test_later_handler_wins_for_bypasses_and_docs():
    a = make_handler("A", bypasses={"reset": "self"}, docs={event_doc_key("reset"): "from a"})
    b = make_handler("B", bypasses={"reset": "self"}, docs={event_doc_key("reset"): "from b"})

    assert build_bypasses([a, b]) == {"reset": b}
    assert build_docs([a, b]) == {event_doc_key("reset"): "from b"}
    assert build_bypasses([b, a]) == {"reset": a}
    assert build_docs([b, a]) == {event_doc_key("reset"): "from a"}


def test_non_colliding_entries_are_all_kept():
    a = make_handler("A", transitions={("s", "x"): ("self", [])})
    b = make_handler("B", transitions={("s", "y"): ("self", [])})

    merged = build_transitions([a, b])
    assert set(merged) == {("s", "x"), ("s", "y")}
    assert merged[("s", "x")][0] is a
    assert merged[("s", "y")][0] is b


def test_state_container_is_accepted_in_place_of_handlers():
    state = DoorState(state="closed")
    assert build_transitions(state) == build_transitions([Door1, Door2])
    assert build_bypasses(state) == build_bypasses((Door1, Door2))
    assert build_docs(MachineState((Door1, Door2), "closed")) == build_docs([Door1, Door2])


def test_empty_handler_sequence_yields_empty_tables():
    assert build_transitions([]) == {}
    assert build_bypasses([]) == {}
    assert build_docs([]) == {}


def test_returned_tables_are_copies():
    table = build_transitions([Door1, Door2])
    table.clear()
    assert build_transitions([Door1, Door2])


class ValueHandler:
    """Instance handler compared by label; defining __eq__ leaves it unhashable."""

    def __init__(self, label):
        self.label = label
        self.transitions = {("idle", "go"): (self, ["busy"])}
        self.bypasses = {"reset": self}
        self.docs = {transition_doc_key("idle", "go"): f"start {label}"}

    def __eq__(self, other):
        return isinstance(other, ValueHandler) and other.label == self.label

    def dispatch_state(self, state_name, event, state):
        return next_state("busy", state)

    def dispatch_action(self, action, params, state):
        return keep_state(state)


def test_unhashable_handlers_are_merged_without_cache():
    handler = ValueHandler("work")
    mixed = [Door1, handler]

    assert build_transitions(mixed)[("idle", "go")] == (handler, ("busy",))
    assert build_transitions(mixed)[("closed", "open_door")] == (Door1, ("opened",))
    assert build_bypasses(mixed) == {"reset": handler}
    assert build_docs([handler]) == {transition_doc_key("idle", "go"): "start work"}


def test_unhashable_handler_drives_the_machine():
    handler = ValueHandler("work")
    state = MachineState((handler,), "idle")

    assert dispatch(state, "go").state.state_name() == "busy"
    assert dispatch(state, "reset") == NextState(state)
    assert available_actions(state) == ["go", "reset"]
    assert find_info(state, "go") == KnownTransitionInfo("start work")


class HandlerChain(Sequence):
    def __init__(self, *handlers):
        self._handlers = handlers

    def __getitem__(self, index):
        return self._handlers[index]

    def __len__(self):
        return len(self._handlers)


def test_any_sequence_of_handlers_is_accepted():
    chain = HandlerChain(Door1, Door2)

    assert handlers_of(chain) == (Door1, Door2)
    assert build_bypasses(chain) == {"close_door": Door2}


def test_string_is_not_a_handler_sequence():
    with pytest.raises(AttributeError):
        handlers_of("Door1")
