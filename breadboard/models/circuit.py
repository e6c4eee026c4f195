"""
CircuitModel - Central data store for breadboard state.

This module contains no rendering dependencies. It holds the three
collections the editor works with (components, terminals, wires) and
hands immutable snapshots to the simulation pipeline.
"""

from dataclasses import dataclass, field, replace
from typing import Iterable, Optional

from .component import ComponentData
from .terminal import TerminalData
from .wire import WireData


@dataclass(frozen=True)
class CircuitSnapshot:
    """
    Immutable view of a circuit at one instant.

    Collections keep the editor's order; battery positions reported by the
    simulator (1-based) follow the order of batteries in ``components``.
    """

    components: tuple[ComponentData, ...] = ()
    terminals: tuple[TerminalData, ...] = ()
    wires: tuple[WireData, ...] = ()

    @classmethod
    def build(
        cls,
        components: Iterable[ComponentData],
        terminals: Iterable[TerminalData],
        wires: Iterable[WireData] = (),
    ) -> "CircuitSnapshot":
        """Freeze arbitrary iterables into a snapshot, copying components."""
        return cls(
            components=tuple(replace(c) for c in components),
            terminals=tuple(terminals),
            wires=tuple(wires),
        )

    def is_empty(self) -> bool:
        return not self.components or not self.terminals

    def components_of_type(self, component_type: str) -> list[ComponentData]:
        return [c for c in self.components if c.component_type == component_type]

    def batteries(self) -> list[ComponentData]:
        return self.components_of_type("battery")

    def bulbs(self) -> list[ComponentData]:
        return self.components_of_type("bulb")

    def potentiometers(self) -> list[ComponentData]:
        return self.components_of_type("potentiometer")

    def terminals_of(self, component_id: str) -> list[TerminalData]:
        """Terminals owned by a component, in terminal order."""
        return [t for t in self.terminals if t.component_id == component_id]

    def get_component(self, component_id: str) -> Optional[ComponentData]:
        for component in self.components:
            if component.component_id == component_id:
                return component
        return None

    def with_resistance(self, component_id: str, resistance: float) -> "CircuitSnapshot":
        """Return a copy of this snapshot with one potentiometer re-valued."""
        components = tuple(
            replace(c, resistance=resistance) if c.component_id == component_id else c
            for c in self.components
        )
        return replace(self, components=components)

    def to_dict(self) -> dict:
        """Serialize to the editor's three-collection format."""
        return {
            "components": [c.to_dict() for c in self.components],
            "nodes": [t.to_dict() for t in self.terminals],
            "connections": [w.to_dict() for w in self.wires],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "CircuitSnapshot":
        return cls(
            components=tuple(ComponentData.from_dict(c) for c in data.get("components", [])),
            terminals=tuple(TerminalData.from_dict(n) for n in data.get("nodes", [])),
            wires=tuple(WireData.from_dict(w) for w in data.get("connections", [])),
        )


@dataclass
class CircuitModel:
    """
    Central data store holding all breadboard state.

    Components are created together with their two role-tagged terminals,
    so a component added through the model always has a well-formed
    terminal set.
    """

    components: dict[str, ComponentData] = field(default_factory=dict)
    terminals: dict[str, TerminalData] = field(default_factory=dict)
    wires: list[WireData] = field(default_factory=list)
    component_counter: dict[str, int] = field(default_factory=dict)

    # --- Component operations ---

    def add_component(self, component: ComponentData) -> list[TerminalData]:
        """
        Add a component and create its terminals.

        Terminal ids are ``<component_id>:<index>``. Returns the new terminals.
        """
        if component.component_id in self.components:
            raise ValueError(f"Duplicate component id: {component.component_id}")
        self.components[component.component_id] = component

        created = []
        x, y = component.position
        for index, role in enumerate(component.get_terminal_roles()):
            terminal = TerminalData(
                terminal_id=f"{component.component_id}:{index}",
                component_id=component.component_id,
                role=role,
                position=(x + (index * 2 - 1) * 10.0, y),
            )
            self.terminals[terminal.terminal_id] = terminal
            created.append(terminal)
        return created

    def remove_component(self, component_id: str) -> list[int]:
        """
        Remove a component and its terminals.

        Returns indices of wires that touched the component; the caller is
        responsible for calling remove_wire() for each returned index (in
        reverse order to avoid index shifts).
        """
        if component_id not in self.components:
            return []

        owned = {tid for tid, t in self.terminals.items() if t.component_id == component_id}
        wire_indices = [
            i for i, wire in enumerate(self.wires)
            if wire.from_terminal_id in owned or wire.to_terminal_id in owned
        ]

        del self.components[component_id]
        for tid in owned:
            del self.terminals[tid]
        return wire_indices

    def set_resistance(self, component_id: str, resistance: float) -> ComponentData:
        """Set a potentiometer's resistance (ohms)."""
        component = self.components.get(component_id)
        if component is None:
            raise KeyError(component_id)
        if not component.is_potentiometer:
            raise ValueError(f"{component_id} is not a potentiometer")
        if resistance <= 0:
            raise ValueError(f"Resistance must be positive, got {resistance}")
        component.resistance = resistance
        return component

    def get_terminal(self, component_id: str, index: int) -> TerminalData:
        return self.terminals[f"{component_id}:{index}"]

    # --- Wire operations ---

    def add_wire(self, wire: WireData) -> None:
        """Add a wire between two existing terminals."""
        for terminal_id in wire.get_terminals():
            if terminal_id not in self.terminals:
                raise ValueError(f"Wire references unknown terminal: {terminal_id}")
        if wire.from_terminal_id == wire.to_terminal_id:
            raise ValueError("A wire must join two different terminals")
        self.wires.append(wire)

    def remove_wire(self, wire_index: int) -> None:
        """Remove a wire by index."""
        if 0 <= wire_index < len(self.wires):
            del self.wires[wire_index]

    # --- Circuit operations ---

    def clear(self) -> None:
        """Clear all circuit data."""
        self.components.clear()
        self.terminals.clear()
        self.wires.clear()
        self.component_counter.clear()

    def snapshot(self) -> CircuitSnapshot:
        """Freeze the current state for one simulation pass."""
        return CircuitSnapshot.build(self.components.values(), self.terminals.values(), self.wires)

    # --- Serialization ---

    def to_dict(self) -> dict:
        """Serialize circuit to dictionary (editor format plus id counters)."""
        data = self.snapshot().to_dict()
        data["counters"] = self.component_counter.copy()
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "CircuitModel":
        """
        Deserialize circuit from dictionary.

        Terminals are taken as given, so a dictionary describing a malformed
        component still loads; the simulator skips such components.
        """
        model = cls()
        model.component_counter = dict(data.get("counters", {}))
        snapshot = CircuitSnapshot.from_dict(data)
        for component in snapshot.components:
            model.components[component.component_id] = component
        for terminal in snapshot.terminals:
            model.terminals[terminal.terminal_id] = terminal
        model.wires.extend(snapshot.wires)
        return model
