"""
TerminalData - Pure Python data model for component terminals.

A terminal is one electrical connection point on a component. Wires join
terminals; terminals joined by wires (directly or transitively) form a net.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class TerminalRole(Enum):
    """Closed set of terminal role tags used by the editor."""

    BATTERY_PLUS = "battery_plus"
    BATTERY_MINUS = "battery_minus"
    BULB = "bulb"
    POTENTIOMETER = "potentiometer"

    @classmethod
    def parse(cls, value) -> Optional["TerminalRole"]:
        """Convert a raw role tag (string, enum or None) into a TerminalRole.

        Unknown tags are treated as untagged terminals.
        """
        if value is None or isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return None


@dataclass(frozen=True)
class TerminalData:
    """
    One connection point on a component.

    Terminals are immutable; the position is kept for the editor only and
    plays no part in electrical analysis.
    """

    terminal_id: str
    component_id: str
    role: Optional[TerminalRole] = None
    position: tuple[float, float] = (0.0, 0.0)

    def to_dict(self) -> dict:
        """Serialize to the editor's node format."""
        return {
            "id": self.terminal_id,
            "componentId": self.component_id,
            "role": self.role.value if self.role else None,
            "x": self.position[0],
            "y": self.position[1],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "TerminalData":
        return cls(
            terminal_id=data["id"],
            component_id=data["componentId"],
            role=TerminalRole.parse(data.get("role")),
            position=(float(data.get("x", 0.0)), float(data.get("y", 0.0))),
        )

    def __repr__(self) -> str:
        role = self.role.value if self.role else "-"
        return f"TerminalData({self.terminal_id}, {self.component_id}, {role})"
