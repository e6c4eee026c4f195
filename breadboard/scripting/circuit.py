"""
Circuit - high-level scripting API for building and simulating breadboards.

No rendering dependency. Wraps the model/controller/simulation layers
behind a small interface.
"""

from pathlib import Path
from typing import Optional, Union

from breadboard.controllers.circuit_controller import CircuitController
from breadboard.controllers.file_controller import load_circuit_file, save_circuit_file
from breadboard.controllers.simulation_controller import SimulationController
from breadboard.models.circuit import CircuitModel
from breadboard.models.component import ComponentData
from breadboard.simulation.constants import DEFAULT_CONSTANTS, CircuitConstants
from breadboard.simulation.results import SimulationResult
from breadboard.simulation.status_report import StatusReport
from breadboard.simulation.sweep import SweepPoint

# Terminal names accepted by wire(), per component type
_TERMINAL_ALIASES = {
    "battery": {"-": 0, "minus": 0, "+": 1, "plus": 1},
    "bulb": {"a": 0, "b": 1},
    "potentiometer": {"a": 0, "b": 1},
}


class Circuit:
    """A scriptable breadboard that can be built, simulated, and saved.

    Terminals are addressed as ``(component_id, terminal)`` where terminal
    is an index (0 or 1) or a name: ``"+"``/``"-"`` on batteries and
    ``"a"``/``"b"`` on bulbs and potentiometers.

    Example::

        circuit = Circuit()
        b = circuit.add_battery()
        l = circuit.add_bulb()
        circuit.wire((b, "+"), (l, "a"))
        circuit.wire((l, "b"), (b, "-"))
        circuit.simulate().bulbs_on_count  # 1

    Args:
        model: breadboard to wrap; an empty one is created when omitted.
        constants: Electrical parameters for simulation.
    """

    def __init__(self, model: Optional[CircuitModel] = None,
                 constants: CircuitConstants = DEFAULT_CONSTANTS):
        self._model = model if model is not None else CircuitModel()
        self._controller = CircuitController(self._model)
        self._sim = SimulationController(self._model, self._controller, constants=constants)

    @classmethod
    def load(cls, path: Union[str, Path], constants: CircuitConstants = DEFAULT_CONSTANTS) -> "Circuit":
        """Open a breadboard saved with save() or by the editor."""
        return cls(load_circuit_file(path), constants)

    # Parts

    def add_battery(self, position: tuple[float, float] = (0.0, 0.0)) -> str:
        """Add a 9 V battery. Returns its ID (B1, B2, ...)."""
        return self._controller.add_component("battery", position).component_id

    def add_bulb(self, position: tuple[float, float] = (0.0, 0.0)) -> str:
        """Add a bulb. Returns its ID (L1, L2, ...)."""
        return self._controller.add_component("bulb", position).component_id

    def add_potentiometer(self, resistance: Optional[float] = None,
                          position: tuple[float, float] = (0.0, 0.0)) -> str:
        """Add a potentiometer, optionally with a starting resistance (ohms)."""
        comp = self._controller.add_component("potentiometer", position)
        if resistance is not None:
            self._controller.set_resistance(comp.component_id, resistance)
        return comp.component_id

    def remove(self, component_id: str) -> None:
        """Remove a component and its wires."""
        self._controller.remove_component(component_id)

    def adjust(self, component_id: str) -> float:
        """Step a potentiometer to its next preset. Returns the new resistance."""
        return self._controller.adjust_resistance(component_id).resistance

    def set_resistance(self, component_id: str, resistance: float) -> None:
        self._controller.set_resistance(component_id, resistance)

    # Wires

    def _terminal_index(self, component_id: str, terminal: Union[int, str]) -> int:
        if isinstance(terminal, int):
            return terminal
        component = self._model.components.get(component_id)
        if component is None:
            raise KeyError(component_id)
        aliases = _TERMINAL_ALIASES[component.component_type]
        if terminal not in aliases:
            raise ValueError(
                f"Unknown terminal '{terminal}' for {component.get_display_name().lower()}; "
                f"use one of {sorted(aliases)}"
            )
        return aliases[terminal]

    def wire(self, start: tuple[str, Union[int, str]], end: tuple[str, Union[int, str]]) -> None:
        """Connect two terminals with a wire.

        Args:
            start: (component_id, terminal) of one end.
            end: (component_id, terminal) of the other end.
        """
        start_id, start_term = start
        end_id, end_term = end
        self._controller.add_wire(
            start_id, self._terminal_index(start_id, start_term),
            end_id, self._terminal_index(end_id, end_term),
        )

    def remove_wire(self, wire_index: int) -> None:
        self._controller.remove_wire(wire_index)

    def clear(self) -> None:
        self._controller.clear_circuit()

    # Analysis

    def simulate(self) -> SimulationResult:
        """Run the DC analysis. Never raises; faults are reported in the result."""
        return self._sim.run_simulation()

    def status(self) -> StatusReport:
        """Student-facing status for the latest simulation."""
        return self._sim.status()

    def validate(self) -> tuple[bool, list[str], list[str]]:
        """Pre-simulation checks: (is_valid, errors, warnings)."""
        return self._sim.validate_circuit()

    def sweep(self, component_id: str, values=None) -> list[SweepPoint]:
        """Re-simulate across potentiometer resistances (default: the preset ladder)."""
        return self._sim.sweep(component_id, values)

    def to_netlist(self) -> str:
        """SPICE rendering of the circuit, or "" if it has no ground."""
        return self._sim.generate_netlist()

    # Files

    def save(self, path: Union[str, Path]) -> None:
        """Write the board as editor-compatible JSON."""
        save_circuit_file(self._model, path)

    @property
    def components(self) -> dict[str, ComponentData]:
        """Parts on the board by id, in placement order."""
        return self._model.components

    @property
    def wires(self) -> list:
        return self._model.wires

    @property
    def model(self) -> CircuitModel:
        return self._model

    @property
    def controller(self) -> CircuitController:
        return self._controller
