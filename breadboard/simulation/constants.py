"""
simulation/constants.py

Electrical parameters of the breadboard model.

The module-level values are the defaults; a CircuitConstants instance
groups them so a caller can run the pipeline with different parameters
(for example from a JSON file passed to the CLI).
"""

import json
import logging
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Union

from breadboard.models.component import DEFAULT_POTENTIOMETER_RESISTANCE

logger = logging.getLogger(__name__)

BATTERY_VOLTAGE = 9.0  # Volts
BATTERY_INTERNAL_RESISTANCE = 0.1  # Ohms, keeps parallel battery packs solvable
BULB_RESISTANCE = 500.0  # Ohms
CURRENT_THRESHOLD = 0.001  # 1mA, minimum current for a bulb to be "on"
NORMAL_CURRENT = 0.018  # 18mA, 9V across one bulb
BURNOUT_CURRENT = 0.05  # 50mA
SHORT_CIRCUIT_CURRENT = 0.1  # 100mA with no lit bulb means the batteries are shorted
MAX_BRIGHTNESS = 2.0

# Name of the ground net in solver input and results
GROUND_NET_NAME = "gnd"


@dataclass(frozen=True)
class CircuitConstants:
    """Electrical parameters used by the translator and the interpreter."""

    battery_voltage: float = BATTERY_VOLTAGE
    battery_internal_resistance: float = BATTERY_INTERNAL_RESISTANCE
    bulb_resistance: float = BULB_RESISTANCE
    current_threshold: float = CURRENT_THRESHOLD
    normal_current: float = NORMAL_CURRENT
    burnout_current: float = BURNOUT_CURRENT
    short_circuit_current: float = SHORT_CIRCUIT_CURRENT
    max_brightness: float = MAX_BRIGHTNESS
    default_potentiometer_resistance: float = DEFAULT_POTENTIOMETER_RESISTANCE

    def __post_init__(self):
        for f in fields(self):
            value = getattr(self, f.name)
            if not isinstance(value, (int, float)) or value <= 0:
                raise ValueError(f"{f.name} must be a positive number, got {value!r}")
        if self.normal_current <= self.current_threshold:
            raise ValueError("normal_current must be greater than current_threshold")

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "CircuitConstants":
        """Build constants from a partial dictionary; missing keys keep their defaults."""
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown circuit constant(s): {', '.join(sorted(unknown))}")
        return cls(**data)


DEFAULT_CONSTANTS = CircuitConstants()


def load_constants(path: Union[str, Path]) -> CircuitConstants:
    """
    Load a constants override file.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the file is not a JSON object of known constants.
    """
    path = Path(path)
    with open(path, "r") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"invalid JSON in {path}: {e}") from e
    if not isinstance(data, dict):
        raise ValueError(f"{path} does not contain a JSON object")
    constants = CircuitConstants.from_dict(data)
    logger.debug("Loaded circuit constants from %s: %s", path, constants)
    return constants
