import sys
import textwrap

import pytest

from fsmkit.core.exceptions import HandlerLoadError
from fsmkit.core.state import MachineState, build_transitions, dispatch
from fsmkit.core.state.loader import (
    handlers_from_module,
    import_handler,
    load_handlers,
    load_handlers_from_dirs,
)
from fsmkit.core.utils.loader import load_module_from_path

from helpers import bell, doors


def _write_handler(directory, filename, body):
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / filename
    path.write_text(textwrap.dedent(body), encoding="utf-8")
    return path


LAMP = """
    from fsmkit.core.state import FsmHandler, next_state, transition


    class Lamp(FsmHandler):
        @transition("off", "switch", to="on")
        def switch_on(params, state):
            return next_state("on", state)


    class Dimmer(FsmHandler):
        @transition("on", "switch", to="off")
        def switch_off(params, state):
            return next_state("off", state)
"""

LAMP_OVERRIDE = """
    from fsmkit.core.state import FsmHandler, next_state, transition


    class LoudLamp(FsmHandler):
        @transition("off", "switch", to="blinding")
        def switch_on(params, state):
            return next_state("blinding", state)
"""


def test_import_handler_class_and_module():
    assert import_handler("helpers.doors:Door1") is doors.Door1
    assert import_handler("helpers.bell") is bell


def test_import_handler_nested_attribute():
    assert import_handler("helpers.doors:Door2.close_door") is doors.Door2.close_door


@pytest.mark.parametrize("ref", ["", ":Door1", "helpers.no_such_module:X", "helpers.doors:Missing"])
def test_import_handler_errors(ref):
    with pytest.raises(HandlerLoadError):
        import_handler(ref)


def test_handlers_from_module_keeps_definition_order(tmp_path):
    path = _write_handler(tmp_path, "lamp.py", LAMP)
    module = load_module_from_path(path, "fsmkit.handlers")

    assert [h.__name__ for h in handlers_from_module(module)] == ["Lamp", "Dimmer"]


def test_imported_handlers_are_not_collected():
    # helpers.doors imports FsmHandler but only defines Door1 and Door2.
    assert handlers_from_module(doors) == [doors.Door1, doors.Door2]


COUNTER = """
    from __future__ import annotations

    from dataclasses import dataclass

    from fsmkit.core.state import FsmHandler, next_state, transition


    @dataclass(frozen=True)
    class Step:
        size: int = 1


    class Counter(FsmHandler):
        @transition("zero", "tick", to="one")
        def tick(params, state):
            return next_state("one", state.with_data(step=Step()))
"""


def test_handler_file_with_postponed_annotations_and_dataclass(tmp_path):
    _write_handler(tmp_path / "counters", "counter.py", COUNTER)

    (counter,) = load_handlers_from_dirs([tmp_path / "counters"])
    result = dispatch(MachineState((counter,), "zero"), "tick")

    assert result.state.state_name() == "one"
    assert result.state.data["step"].size == 1


def test_failed_module_is_not_left_registered(tmp_path):
    _write_handler(tmp_path / "bad", "exploding.py", "raise RuntimeError('boom')\n")
    with pytest.raises(HandlerLoadError):
        load_handlers_from_dirs([tmp_path / "bad"])
    assert "fsmkit.handlers.exploding" not in sys.modules


def test_later_layer_overrides_earlier(tmp_path):
    _write_handler(tmp_path / "core", "lamp.py", LAMP)
    _write_handler(tmp_path / "project", "lamp.py", LAMP_OVERRIDE)

    handlers = load_handlers_from_dirs([tmp_path / "core", tmp_path / "project"])
    assert [h.__name__ for h in handlers] == ["Lamp", "Dimmer", "LoudLamp"]

    owner, targets = build_transitions(handlers)[("off", "switch")]
    assert owner.__name__ == "LoudLamp"
    assert targets == ("blinding",)


def test_missing_directories_are_skipped(tmp_path):
    assert load_handlers_from_dirs([tmp_path / "nope"]) == []


def test_broken_handler_file_raises(tmp_path):
    _write_handler(tmp_path / "bad", "broken.py", "raise RuntimeError('boom')\n")
    with pytest.raises(HandlerLoadError):
        load_handlers_from_dirs([tmp_path / "bad"])


def test_load_handlers_from_config_mapping(tmp_path):
    _write_handler(tmp_path / "handlers", "lamp.py", LAMP)
    config = {
        "machine": {
            "handlers": ["helpers.doors:Door1", "helpers.bell"],
            "handler_dirs": ["handlers"],
        }
    }
    handlers = load_handlers(config, root=tmp_path)

    assert handlers[:2] == (doors.Door1, bell)
    assert [h.__name__ for h in handlers[2:]] == ["Lamp", "Dimmer"]

    result = dispatch(MachineState(handlers, "off"), "switch")
    assert result.state.state_name() == "on"


def test_load_handlers_reads_project_config(tmp_path, monkeypatch):
    _write_handler(tmp_path / "handlers", "lamp.py", LAMP)
    (tmp_path / "fsmkit.yaml").write_text(
        "machine:\n  handlers: ['helpers.doors:Door2']\n  handler_dirs: [handlers]\n",
        encoding="utf-8",
    )
    monkeypatch.chdir(tmp_path)

    handlers = load_handlers()
    assert handlers[0] is doors.Door2
    assert len(handlers) == 3


def test_load_handlers_with_empty_config():
    assert load_handlers({}) == ()
