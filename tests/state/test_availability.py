from fsmkit.core.state import MachineState, action_available, available_actions

from helpers.doors import DoorState
from helpers.stubs import make_handler


def test_available_actions_from_closed():
    assert available_actions(DoorState(state="closed")) == ["open_door", "close_door"]


def test_available_actions_are_deduplicated():
    # close_door is both a transition from "opened" and a bypass.
    assert available_actions(DoorState(state="opened")) == ["close_door"]


def test_transition_actions_come_before_bypass_actions():
    h = make_handler(
        "H",
        transitions={("s", "b"): ("self", []), ("s", "a"): ("self", []), ("t", "c"): ("self", [])},
        bypasses={"z": "self", "a": "self", "y": "self"},
    )
    assert available_actions(MachineState((h,), "s")) == ["b", "a", "z", "y"]
    assert available_actions(MachineState((h,), "t")) == ["c", "z", "a", "y"]


def test_unknown_state_only_gets_bypasses():
    assert available_actions(DoorState(state="broken")) == ["close_door"]


def test_action_available():
    state = DoorState(state="closed")
    assert action_available(state, "open_door") is True
    assert action_available(state, "close_door") is True
    assert action_available(DoorState(state="opened"), "open_door") is False
