"""Two handlers composing a door machine, plus a state record for them."""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Tuple

from fsmkit.core.state import FsmHandler, bypass, keep_state, next_state, transition


class Door1(FsmHandler):
    @transition("closed", "open_door", to="opened")
    def open_door(params, state):
        return next_state("opened", state)


class Door2(FsmHandler):
    @bypass("close_door")
    def close_again(params, state):
        """allow multiple closes"""
        return keep_state(replace(state, doubleclosed=True))

    @transition("opened", "close_door", to="closed", doc="standard door open")
    def close_door(params, state):
        return next_state("closed", state)


@dataclass(frozen=True)
class DoorState:
    door_handlers: Tuple[Any, ...] = field(default=(Door1, Door2))
    state: str | None = None
    doubleclosed: bool = False

    def handlers(self):
        return self.door_handlers

    def state_name(self):
        return self.state

    def set_state_name(self, name):
        return replace(self, state=name)
