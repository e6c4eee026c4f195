"""
simulation/results.py

Result records produced by one simulation pass.
"""

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class BulbState:
    """
    Electrical and visual state of one bulb.

    A bulb that has not been analysed (incomplete circuit, solver failure)
    keeps the off defaults and leaves is_burned_out, brightness and the
    terminal voltages unset.
    """

    is_on: bool = False
    current: float = 0.0
    voltage: float = 0.0
    power: float = 0.0
    is_burned_out: Optional[bool] = None
    brightness: Optional[float] = None
    voltage_node1: Optional[float] = None
    voltage_node2: Optional[float] = None

    @property
    def is_analysed(self) -> bool:
        return self.is_burned_out is not None

    def to_dict(self) -> dict:
        data = {
            "isOn": self.is_on,
            "current": self.current,
            "voltage": self.voltage,
            "power": self.power,
        }
        if self.is_analysed:
            data.update(
                {
                    "isBurnedOut": self.is_burned_out,
                    "brightness": self.brightness,
                    "voltageNode1": self.voltage_node1,
                    "voltageNode2": self.voltage_node2,
                }
            )
        return data


@dataclass
class SimulationResult:
    """Aggregate output of the simulation pipeline."""

    has_closed_loop: bool = False
    bulbs_on_count: int = 0
    bulb_states: dict[str, BulbState] = field(default_factory=dict)
    node_voltages: dict[str, float] = field(default_factory=dict)
    total_current: float = 0.0
    battery_indices: list[int] = field(default_factory=list)

    @property
    def has_battery_fault(self) -> bool:
        return bool(self.battery_indices)

    def to_dict(self) -> dict:
        """Serialize for the status layer (camelCase keys)."""
        return {
            "hasClosedLoop": self.has_closed_loop,
            "bulbsOnCount": self.bulbs_on_count,
            "bulbStates": {cid: state.to_dict() for cid, state in self.bulb_states.items()},
            "nodeVoltages": dict(self.node_voltages),
            "totalCurrent": self.total_current,
            "batteryIndices": list(self.battery_indices),
        }
