"""
ComponentData - Pure Python data model for breadboard components.

Component types use lowercase identifiers as canonical names:
'battery', 'bulb', 'potentiometer'. Every type is a two-terminal part.
"""

from dataclasses import dataclass
from typing import Optional

from .terminal import TerminalRole

# Component type definitions (canonical identifiers)
COMPONENT_TYPES = [
    "battery",
    "bulb",
    "potentiometer",
]

# Prefix used when generating component ids (B1, L1, P1, ...)
ID_PREFIXES = {
    "battery": "B",
    "bulb": "L",
    "potentiometer": "P",
}

# Role of each terminal, by terminal index. Batteries are laid out
# minus-left / plus-right on the board.
TERMINAL_ROLES = {
    "battery": (TerminalRole.BATTERY_MINUS, TerminalRole.BATTERY_PLUS),
    "bulb": (TerminalRole.BULB, TerminalRole.BULB),
    "potentiometer": (TerminalRole.POTENTIOMETER, TerminalRole.POTENTIOMETER),
}

# Potentiometer resistance ladder (ohms), in knob order
POTENTIOMETER_PRESETS = [100, 250, 500, 1000, 2000, 5000, 10000]

DEFAULT_POTENTIOMETER_RESISTANCE = 500

# Display labels per component type
DISPLAY_NAMES = {
    "battery": "Battery",
    "bulb": "Bulb",
    "potentiometer": "Potentiometer",
}


def next_preset(resistance: Optional[float]) -> int:
    """
    Return the preset that follows *resistance* on the potentiometer ladder.

    Wraps from the last preset back to the first. A value that is not on
    the ladder jumps to the first preset.
    """
    try:
        index = POTENTIOMETER_PRESETS.index(resistance)
    except ValueError:
        return POTENTIOMETER_PRESETS[0]
    return POTENTIOMETER_PRESETS[(index + 1) % len(POTENTIOMETER_PRESETS)]


@dataclass
class ComponentData:
    """
    Pure Python data class representing a breadboard component.

    Only potentiometers carry a resistance; batteries and bulbs use the
    fixed electrical parameters of the simulator.
    """

    component_id: str
    component_type: str
    position: tuple[float, float] = (0.0, 0.0)
    resistance: Optional[float] = None

    def __post_init__(self):
        if self.component_type not in COMPONENT_TYPES:
            raise ValueError(f"Unknown component type: {self.component_type!r}")
        if self.component_type == "potentiometer" and self.resistance is None:
            self.resistance = DEFAULT_POTENTIOMETER_RESISTANCE

    @property
    def is_battery(self) -> bool:
        return self.component_type == "battery"

    @property
    def is_bulb(self) -> bool:
        return self.component_type == "bulb"

    @property
    def is_potentiometer(self) -> bool:
        return self.component_type == "potentiometer"

    def get_terminal_roles(self) -> tuple[TerminalRole, TerminalRole]:
        """Roles of this component's two terminals, by terminal index."""
        return TERMINAL_ROLES[self.component_type]

    def get_display_name(self) -> str:
        return DISPLAY_NAMES[self.component_type]

    def to_dict(self) -> dict:
        """Serialize component to the editor's component format."""
        data = {
            "id": self.component_id,
            "type": self.component_type,
            "x": self.position[0],
            "y": self.position[1],
        }
        if self.resistance is not None:
            data["resistance"] = self.resistance
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "ComponentData":
        """
        Deserialize component from dictionary.

        Resistance may be given as a number or an SI string such as "1k".
        """
        from breadboard.format_utils import parse_value

        resistance = data.get("resistance")
        if resistance is not None:
            resistance = parse_value(resistance)
        return cls(
            component_id=data["id"],
            component_type=data["type"],
            position=(float(data.get("x", 0.0)), float(data.get("y", 0.0))),
            resistance=resistance,
        )

    def __repr__(self) -> str:
        if self.resistance is not None:
            return f"ComponentData({self.component_id}, {self.component_type}, {self.resistance}Ω)"
        return f"ComponentData({self.component_id}, {self.component_type})"
