"""
simulation/translator.py

Translates a breadboard snapshot into an abstract netlist for the DC solver.

Batteries become an ideal source in series with their internal resistance,
bulbs and potentiometers become resistors. Batteries whose two terminals
sit on the same net are shorted at their own terminals; they are reported
and left out of the netlist.
"""

import logging
from dataclasses import dataclass, field
from typing import Hashable, Optional

from breadboard.models.circuit import CircuitSnapshot
from breadboard.models.terminal import TerminalData, TerminalRole

from .constants import DEFAULT_CONSTANTS, CircuitConstants
from .net_namer import NetNames, assign_net_names, build_nets
from .netlist import GROUND, NetId, Netlist, NetlistBuilder

logger = logging.getLogger(__name__)


@dataclass
class Translation:
    """
    Output of one translation pass.

    Attributes:
        netlist: elements for the solver
        net_names: display names and the disjoint set behind them
        net_ids: net root -> NetId (ground maps to GROUND)
        shorted_battery_indices: 1-based positions of self-shorted batteries
        source_names: battery component id -> voltage source name
    """

    netlist: Netlist
    net_names: NetNames
    net_ids: dict[Hashable, NetId]
    shorted_battery_indices: list[int] = field(default_factory=list)
    source_names: dict[str, str] = field(default_factory=dict)

    def net_id(self, terminal_id: str) -> NetId:
        return self.net_ids[self.net_names.nets.find(terminal_id)]


def group_terminals(snapshot: CircuitSnapshot) -> dict[str, list[TerminalData]]:
    """Map component id -> its terminals, in terminal order."""
    grouped: dict[str, list[TerminalData]] = {}
    for terminal in snapshot.terminals:
        grouped.setdefault(terminal.component_id, []).append(terminal)
    return grouped


def find_battery_terminals(
    terminals: list[TerminalData],
) -> tuple[Optional[TerminalData], Optional[TerminalData]]:
    """Return the (plus, minus) terminals of a battery; either may be None."""
    plus = next((t for t in terminals if t.role is TerminalRole.BATTERY_PLUS), None)
    minus = next((t for t in terminals if t.role is TerminalRole.BATTERY_MINUS), None)
    return plus, minus


def translate_circuit(
    snapshot: CircuitSnapshot,
    constants: CircuitConstants = DEFAULT_CONSTANTS,
) -> Optional[Translation]:
    """
    Build the netlist for a snapshot.

    Returns None when the circuit is incomplete: no components, no
    terminals, or no battery minus terminal to use as ground.
    """
    if snapshot.is_empty():
        logger.debug("Incomplete circuit - terminals or components missing")
        return None

    nets = build_nets(snapshot.terminals, snapshot.wires)
    net_names = assign_net_names(nets, snapshot.terminals)
    if not net_names.has_ground:
        logger.debug("No battery minus terminal; skipping analysis")
        return None

    builder = NetlistBuilder()
    net_ids: dict[Hashable, NetId] = {}
    for root, name in net_names.names.items():
        if root == net_names.ground_root:
            net_ids[root] = GROUND
        else:
            net_ids[root] = builder.node(name)

    def net_of(terminal: TerminalData) -> NetId:
        return net_ids[nets.find(terminal.terminal_id)]

    grouped = group_terminals(snapshot)
    translation = Translation(netlist=Netlist(), net_names=net_names, net_ids=net_ids)

    for position, battery in enumerate(snapshot.batteries(), start=1):
        plus, minus = find_battery_terminals(grouped.get(battery.component_id, []))
        if plus is None or minus is None:
            logger.debug("Battery %s is missing a terminal; skipped", battery.component_id)
            continue

        if nets.connected(plus.terminal_id, minus.terminal_id):
            logger.debug("Battery %s is shorted across its own terminals", battery.component_id)
            translation.shorted_battery_indices.append(position)
            continue

        internal = builder.node(f"{battery.component_id}:internal")
        source = builder.voltage_source(
            internal, net_of(minus), constants.battery_voltage, battery.component_id
        )
        builder.resistor(
            net_of(plus), internal, constants.battery_internal_resistance, f"{battery.component_id}_Rint"
        )
        translation.source_names[battery.component_id] = source.name

    for bulb in snapshot.bulbs():
        terminals = grouped.get(bulb.component_id, [])
        if len(terminals) != 2:
            logger.debug("Bulb %s has %d terminals; skipped", bulb.component_id, len(terminals))
            continue
        builder.resistor(net_of(terminals[0]), net_of(terminals[1]), constants.bulb_resistance, bulb.component_id)

    for pot in snapshot.potentiometers():
        terminals = grouped.get(pot.component_id, [])
        if len(terminals) != 2:
            logger.debug("Potentiometer %s has %d terminals; skipped", pot.component_id, len(terminals))
            continue
        resistance = pot.resistance or constants.default_potentiometer_resistance
        builder.resistor(net_of(terminals[0]), net_of(terminals[1]), resistance, pot.component_id)

    translation.netlist = builder.build()
    logger.debug(
        "Translated circuit: %d nets, %d elements, shorted batteries %s",
        translation.netlist.net_count,
        len(translation.netlist.elements),
        translation.shorted_battery_indices,
    )
    return translation
