"""
simulation/net_namer.py

Turns merged terminal groups into named electrical nets and picks ground.
"""

import logging
from dataclasses import dataclass
from typing import Hashable, Iterable, Optional

from breadboard.models.terminal import TerminalData, TerminalRole

from .constants import GROUND_NET_NAME
from .union_find import DisjointSet

logger = logging.getLogger(__name__)


@dataclass
class NetNames:
    """
    Display names for the nets of one simulation pass.

    Attributes:
        names: root -> display name ("gnd" or "net<k>")
        ground_root: root of the ground net, or None when the circuit has
            no battery minus terminal to anchor it
        nets: the disjoint set the roots came from
    """

    names: dict[Hashable, str]
    ground_root: Optional[Hashable]
    nets: DisjointSet

    @property
    def has_ground(self) -> bool:
        return self.ground_root is not None

    def get_net_name(self, terminal_id: str) -> str:
        """Display name of the net a terminal belongs to."""
        root = self.nets.find(terminal_id)
        return self.names.get(root, str(root))

    def is_ground(self, terminal_id: str) -> bool:
        return self.has_ground and self.nets.find(terminal_id) == self.ground_root


def find_ground_terminal(terminals: Iterable[TerminalData]) -> Optional[TerminalData]:
    """First terminal tagged as a battery minus, if any."""
    for terminal in terminals:
        if terminal.role is TerminalRole.BATTERY_MINUS:
            return terminal
    return None


def assign_net_names(nets: DisjointSet, terminals: Iterable[TerminalData]) -> NetNames:
    """
    Name every net and designate ground.

    The ground net is the one holding the first battery minus terminal.
    Other nets are numbered net1, net2, ... in root order.
    """
    ground_root = None
    ground_terminal = find_ground_terminal(terminals)
    if ground_terminal is not None:
        ground_root = nets.find(ground_terminal.terminal_id)

    names: dict[Hashable, str] = {}
    counter = 1
    for root in nets.get_roots():
        if root == ground_root:
            names[root] = GROUND_NET_NAME
        else:
            names[root] = f"net{counter}"
            counter += 1

    logger.debug("Assigned %d net names (ground root: %s)", len(names), ground_root)
    return NetNames(names=names, ground_root=ground_root, nets=nets)


def build_nets(terminals: Iterable[TerminalData], wires) -> DisjointSet:
    """Register every terminal and union the ends of every wire."""
    nets = DisjointSet()
    for terminal in terminals:
        nets.make_set(terminal.terminal_id)
    for wire in wires:
        nets.union(wire.from_terminal_id, wire.to_terminal_id)
    return nets
