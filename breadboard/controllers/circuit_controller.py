"""
Editing operations on a breadboard: placing parts, re-valuing knobs and
running wires between terminals.

Views subscribe with add_observer() and are called back as
``callback(event, data)`` after every change to the CircuitModel.
"""

import logging
from typing import Any, Callable, Optional

from breadboard.models.circuit import CircuitModel
from breadboard.models.component import ID_PREFIXES, ComponentData, next_preset
from breadboard.models.wire import WireData

logger = logging.getLogger(__name__)

Observer = Callable[[str, Any], None]


class CircuitController:
    """
    Owns a CircuitModel and broadcasts edits to registered views.

    Events and their payloads:
        component_added       ComponentData
        component_removed     component id
        component_moved       ComponentData
        resistance_changed    ComponentData (potentiometer)
        wire_added            WireData
        wire_removed          index the wire had
        circuit_cleared       None
        simulation_started    None (sent by SimulationController)
        simulation_completed  SimulationResult (sent by SimulationController)
    """

    def __init__(self, model: Optional[CircuitModel] = None):
        self.model = model if model is not None else CircuitModel()
        self._observers: list[Observer] = []

    def add_observer(self, callback: Observer) -> None:
        if callback in self._observers:
            return
        self._observers.append(callback)

    def remove_observer(self, callback: Observer) -> None:
        try:
            self._observers.remove(callback)
        except ValueError:
            pass

    def _notify(self, event: str, data: Any) -> None:
        # A broken view must not keep the others from hearing about the edit.
        for callback in list(self._observers):
            try:
                callback(event, data)
            except (TypeError, AttributeError, RuntimeError) as e:
                logger.error("Error notifying observer of %s: %s", event, e)

    # Parts

    def add_component(self, component_type: str,
                      position: tuple[float, float] = (0.0, 0.0)) -> ComponentData:
        """
        Place a battery, bulb or potentiometer on the board.

        Ids count up per kind (B1, B2, L1, P1, ...) and are never reused
        within a model, even after a part is removed.

        Raises:
            ValueError: for a kind of part the board does not know.
        """
        prefix = ID_PREFIXES.get(component_type)
        if prefix is None:
            raise ValueError(f"Unknown component type: {component_type!r}")
        number = self.model.component_counter.get(prefix, 0) + 1
        self.model.component_counter[prefix] = number

        part = ComponentData(
            component_id=f"{prefix}{number}",
            component_type=component_type,
            position=position,
        )
        self.model.add_component(part)
        self._notify('component_added', part)
        return part

    def remove_component(self, component_id: str) -> None:
        """Take a part off the board along with every wire touching it."""
        if component_id not in self.model.components:
            return
        attached = self.model.remove_component(component_id)
        # Highest index first so the remaining indices stay valid.
        for index in sorted(attached, reverse=True):
            self.model.remove_wire(index)
            self._notify('wire_removed', index)
        self._notify('component_removed', component_id)

    def move_component(self, component_id: str,
                       position: tuple[float, float]) -> None:
        part = self.model.components.get(component_id)
        if part is None:
            return
        part.position = position
        self._notify('component_moved', part)

    def adjust_resistance(self, component_id: str) -> ComponentData:
        """Turn a potentiometer's knob one click (next preset, wrapping)."""
        part = self.model.components.get(component_id)
        if part is None:
            raise KeyError(component_id)
        return self.set_resistance(component_id, next_preset(part.resistance))

    def set_resistance(self, component_id: str, resistance: float) -> ComponentData:
        part = self.model.set_resistance(component_id, resistance)
        logger.debug("%s resistance set to %s", component_id, resistance)
        self._notify('resistance_changed', part)
        return part

    # Wires

    def add_wire(self, start_comp_id: str, start_term: int,
                 end_comp_id: str, end_term: int) -> WireData:
        """
        Run a wire from one part's terminal to another's.

        Terminals are addressed by index: 0 is a battery's minus side, 1 its
        plus side; bulbs and potentiometers have ends 0 and 1.

        Raises:
            KeyError: when a part or terminal index does not exist.
            ValueError: when both ends are the same terminal.
        """
        start = self.model.get_terminal(start_comp_id, start_term)
        end = self.model.get_terminal(end_comp_id, end_term)
        wire = WireData(from_terminal_id=start.terminal_id, to_terminal_id=end.terminal_id)
        self.model.add_wire(wire)
        self._notify('wire_added', wire)
        return wire

    def remove_wire(self, wire_index: int) -> None:
        if not 0 <= wire_index < len(self.model.wires):
            return
        self.model.remove_wire(wire_index)
        self._notify('wire_removed', wire_index)

    def clear_circuit(self) -> None:
        """Empty the board."""
        self.model.clear()
        self._notify('circuit_cleared', None)
