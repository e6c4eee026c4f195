"""
simulation/netlist.py

Abstract netlist handed to the DC solver.

Nets are small integer handles (NetId) minted while the netlist is built;
display names live in an arena indexed by NetId and are only used for
reporting. Ground is the fixed handle GROUND.
"""

from dataclasses import dataclass, field
from typing import Union

from .constants import GROUND_NET_NAME

NetId = int

GROUND: NetId = -1


@dataclass(frozen=True)
class VoltageSource:
    """Ideal DC voltage source; ``positive`` sits ``voltage`` volts above ``negative``."""

    name: str
    positive: NetId
    negative: NetId
    voltage: float


@dataclass(frozen=True)
class Resistor:
    name: str
    n1: NetId
    n2: NetId
    resistance: float


Element = Union[VoltageSource, Resistor]


@dataclass(frozen=True)
class Netlist:
    """
    Value-type netlist: net arena plus elements.

    Attributes:
        net_names: display name per NetId (index into the tuple)
        initial_voltages: starting guess per NetId, in volts
        elements: voltage sources and resistors, in insertion order
    """

    net_names: tuple[str, ...] = ()
    initial_voltages: tuple[float, ...] = ()
    elements: tuple[Element, ...] = ()

    @property
    def net_count(self) -> int:
        return len(self.net_names)

    @property
    def voltage_sources(self) -> list[VoltageSource]:
        return [e for e in self.elements if isinstance(e, VoltageSource)]

    @property
    def resistors(self) -> list[Resistor]:
        return [e for e in self.elements if isinstance(e, Resistor)]

    def net_name(self, net: NetId) -> str:
        if net == GROUND:
            return GROUND_NET_NAME
        return self.net_names[net]

    def to_spice(self, title: str = "Breadboard circuit") -> str:
        """Render the netlist as a SPICE deck for inspection."""

        def node(net: NetId) -> str:
            return "0" if net == GROUND else self.net_names[net]

        lines = [title, "* Generated netlist", ""]
        for element in self.elements:
            if isinstance(element, VoltageSource):
                lines.append(
                    f"V{element.name} {node(element.positive)} {node(element.negative)} DC {element.voltage:g}"
                )
            else:
                lines.append(f"R{element.name} {node(element.n1)} {node(element.n2)} {element.resistance:g}")

        lines.append("")
        lines.append("* Analysis Command")
        lines.append(".op")
        lines.append("")
        lines.append(".end")
        return "\n".join(lines)


@dataclass
class NetlistBuilder:
    """Mints NetIds and collects elements, then freezes into a Netlist."""

    _names: list[str] = field(default_factory=list)
    _initial: list[float] = field(default_factory=list)
    _elements: list[Element] = field(default_factory=list)

    def node(self, name: str, initial_voltage: float = 0.0) -> NetId:
        """Create a new non-ground net and return its handle."""
        self._names.append(name)
        self._initial.append(initial_voltage)
        return len(self._names) - 1

    def voltage_source(self, positive: NetId, negative: NetId, voltage: float, name: str) -> VoltageSource:
        source = VoltageSource(name=name, positive=positive, negative=negative, voltage=voltage)
        self._elements.append(source)
        return source

    def resistor(self, n1: NetId, n2: NetId, resistance: float, name: str) -> Resistor:
        resistor = Resistor(name=name, n1=n1, n2=n2, resistance=resistance)
        self._elements.append(resistor)
        return resistor

    def build(self) -> Netlist:
        return Netlist(
            net_names=tuple(self._names),
            initial_voltages=tuple(self._initial),
            elements=tuple(self._elements),
        )
