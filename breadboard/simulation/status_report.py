"""
simulation/status_report.py

Builds the one-line circuit status shown to the student, plus per-bulb
detail lines.
"""

from dataclasses import dataclass, field
from enum import Enum

from breadboard.format_utils import format_milliamps

from .results import SimulationResult


class StatusLevel(Enum):
    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


EMPTY_MESSAGE = "Place a battery and a bulb, then use wires to connect them."
SUCCESS_MESSAGE = "Nice! You built a complete circuit and lit the bulb."
LOOP_WITHOUT_BULB_MESSAGE = "You have a loop, but no bulb in the current path yet. Try wiring through a bulb."
OPEN_CIRCUIT_MESSAGE = "Circuit is open. Make sure both sides of the battery are connected."


@dataclass
class StatusReport:
    """Status message, its severity and optional detail lines."""

    message: str
    level: StatusLevel
    details: list[str] = field(default_factory=list)
    total_current: str = ""

    def to_dict(self) -> dict:
        data = {"message": self.message, "level": self.level.value, "details": list(self.details)}
        if self.total_current:
            data["totalCurrent"] = self.total_current
        return data


def format_battery_fault(battery_indices: list[int]) -> str:
    """'Battery 2 connected incorrectly...' or 'Batteries 1 and 2 connected incorrectly...'."""
    if len(battery_indices) == 1:
        batteries = f"Battery {battery_indices[0]}"
    else:
        batteries = "Batteries " + " and ".join(str(i) for i in battery_indices)
    return f"{batteries} connected incorrectly. Check wiring."


def describe_bulbs(result: SimulationResult) -> list[str]:
    """Detail lines for bulbs that are lit or burned out."""
    lines = []
    for bulb_id, state in result.bulb_states.items():
        if not (state.is_on or state.is_burned_out):
            continue
        status = "BURNED OUT" if state.is_burned_out else "ON"
        lines.append(
            f"Bulb {bulb_id}: {state.voltage:.2f}V, {format_milliamps(state.current)}, "
            f"brightness:{(state.brightness or 0.0):.2f} [{status}]"
        )
    return lines


def describe_status(result: SimulationResult, has_components: bool = True) -> StatusReport:
    """
    Summarise a simulation result.

    Priority: battery faults, then lit bulbs, then a loop without a lit
    bulb, then an open circuit. With no components on the board at all
    the placement hint is shown instead.
    """
    details = describe_bulbs(result)

    if result.battery_indices:
        return StatusReport(format_battery_fault(result.battery_indices), StatusLevel.ERROR, details)

    total = format_milliamps(result.total_current) if result.total_current > 0 else ""

    if result.bulbs_on_count > 0 and result.has_closed_loop:
        return StatusReport(SUCCESS_MESSAGE, StatusLevel.SUCCESS, details, total)
    if result.has_closed_loop:
        return StatusReport(LOOP_WITHOUT_BULB_MESSAGE, StatusLevel.WARNING, details, total)
    if not has_components:
        return StatusReport(EMPTY_MESSAGE, StatusLevel.INFO, details, total)
    return StatusReport(OPEN_CIRCUIT_MESSAGE, StatusLevel.INFO, details, total)
