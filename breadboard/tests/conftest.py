"""
Shared test fixtures for the breadboard test suite.

All fixtures build pure-Python model objects. Battery terminal 0 is minus
and terminal 1 is plus; bulbs and potentiometers have terminals 0 and 1.
"""

import sys
from pathlib import Path

# Ensure the repository root is on sys.path so `breadboard` imports work when
# running individual test files without installing the package.
_root_dir = str(Path(__file__).resolve().parent.parent.parent)
if _root_dir not in sys.path:
    sys.path.insert(0, _root_dir)

import pytest
from breadboard.models.circuit import CircuitModel, CircuitSnapshot
from breadboard.models.component import ComponentData
from breadboard.models.terminal import TerminalData
from breadboard.models.wire import WireData

MINUS = 0
PLUS = 1


def make_component(component_type, component_id, resistance=None, position=(0.0, 0.0)):
    """Helper to create a ComponentData with minimal boilerplate."""
    return ComponentData(
        component_id=component_id,
        component_type=component_type,
        position=position,
        resistance=resistance,
    )


def make_terminal(terminal_id, component_id, role=None):
    """Helper to create a TerminalData."""
    return TerminalData(terminal_id=terminal_id, component_id=component_id, role=role)


def make_wire(start_id, start_term, end_id, end_term):
    """Helper to create a WireData between two `<component>:<index>` terminals."""
    return WireData(
        from_terminal_id=f"{start_id}:{start_term}",
        to_terminal_id=f"{end_id}:{end_term}",
    )


def build_model(components, wires=()):
    """
    Build a CircuitModel from (type, id[, resistance]) tuples and
    (start_id, start_term, end_id, end_term) wire tuples.
    """
    model = CircuitModel()
    for entry in components:
        model.add_component(make_component(*entry))
    for wire in wires:
        model.add_wire(make_wire(*wire))
    return model


def build_snapshot(components, wires=()):
    return build_model(components, wires).snapshot()


def series_batteries(count, bulbs=1):
    """
    `count` batteries in series driving `bulbs` bulbs in series.

    B1- is the ground; B(k)+ feeds B(k+1)-; the last plus feeds L1, the
    last bulb returns to B1-.
    """
    components = [("battery", f"B{i}") for i in range(1, count + 1)]
    components += [("bulb", f"L{i}") for i in range(1, bulbs + 1)]
    wires = [(f"B{i}", PLUS, f"B{i + 1}", MINUS) for i in range(1, count)]
    wires.append((f"B{count}", PLUS, "L1", 0))
    wires += [(f"L{i}", 1, f"L{i + 1}", 0) for i in range(1, bulbs)]
    wires.append((f"L{bulbs}", 1, "B1", MINUS))
    return build_snapshot(components, wires)


@pytest.fixture
def single_loop():
    """
    B1+ -- L1 -- B1-

    One 9V battery lighting one bulb at its normal current.
    """
    return build_snapshot(
        [("battery", "B1"), ("bulb", "L1")],
        [("B1", PLUS, "L1", 0), ("L1", 1, "B1", MINUS)],
    )


@pytest.fixture
def pot_loop():
    """
    B1+ -- P1 -- L1 -- B1-

    Battery, potentiometer (default 500 ohm) and bulb in series.
    """
    return build_snapshot(
        [("battery", "B1"), ("potentiometer", "P1"), ("bulb", "L1")],
        [("B1", PLUS, "P1", 0), ("P1", 1, "L1", 0), ("L1", 1, "B1", MINUS)],
    )


@pytest.fixture
def self_shorted_battery():
    """B1+ wired straight to B1-; the bulb is left dangling."""
    return build_snapshot(
        [("battery", "B1"), ("bulb", "L1")],
        [("B1", PLUS, "B1", MINUS)],
    )


@pytest.fixture
def opposed_batteries():
    """
    B1+ -- B2-, B2+ -- B1-

    Two batteries shorted against each other with no load.
    """
    return build_snapshot(
        [("battery", "B1"), ("battery", "B2")],
        [("B1", PLUS, "B2", MINUS), ("B2", PLUS, "B1", MINUS)],
    )


@pytest.fixture
def circuit_dict(single_loop):
    """Editor-format dictionary for the single loop circuit."""
    return single_loop.to_dict()


@pytest.fixture
def events():
    """Fixture that returns a list and a callback that appends events to it."""
    recorded = []

    def callback(event, data):
        recorded.append((event, data))

    return recorded, callback


@pytest.fixture
def loose_snapshot():
    """Snapshot built directly from terminals, bypassing the model's checks."""

    def _build(components, terminals, wires=()):
        return CircuitSnapshot.build(components, terminals, wires)

    return _build

