"""
Potentiometer sweep.

Re-simulates a circuit once per resistance value of one potentiometer and
collects total current and bulb brightness at each step.
"""

import logging
from dataclasses import dataclass, field
from typing import Iterable, Optional

import numpy as np

from breadboard.models.circuit import CircuitSnapshot
from breadboard.models.component import POTENTIOMETER_PRESETS

from .constants import DEFAULT_CONSTANTS, CircuitConstants
from .results import SimulationResult
from .simulator import simulate_circuit
from .solver import DCSolver

logger = logging.getLogger(__name__)


@dataclass
class SweepPoint:
    """Simulation outcome at one potentiometer setting."""

    resistance: float
    total_current: float
    bulb_brightness: dict[str, float] = field(default_factory=dict)
    result: Optional[SimulationResult] = None


def sweep_potentiometer(
    snapshot: CircuitSnapshot,
    component_id: str,
    values: Optional[Iterable[float]] = None,
    solver: Optional[DCSolver] = None,
    constants: CircuitConstants = DEFAULT_CONSTANTS,
) -> list[SweepPoint]:
    """
    Sweep a potentiometer across resistance values.

    Args:
        snapshot: circuit to sweep; it is not modified
        component_id: id of the potentiometer
        values: resistances in ohms (default: the preset ladder)

    Returns:
        One SweepPoint per value, in the order given.

    Raises:
        ValueError: If component_id is not a potentiometer in the snapshot.
    """
    component = snapshot.get_component(component_id)
    if component is None or not component.is_potentiometer:
        raise ValueError(f"{component_id} is not a potentiometer in this circuit")

    values = list(values) if values is not None else list(POTENTIOMETER_PRESETS)
    points = []
    for resistance in values:
        result = simulate_circuit(snapshot.with_resistance(component_id, resistance), solver, constants)
        points.append(
            SweepPoint(
                resistance=resistance,
                total_current=result.total_current,
                bulb_brightness={cid: state.brightness or 0.0 for cid, state in result.bulb_states.items()},
                result=result,
            )
        )
    logger.debug("Swept %s over %d values", component_id, len(points))
    return points


def sweep_statistics(points: list[SweepPoint]) -> dict:
    """
    Summary statistics of total current across a sweep.

    Returns:
        dict with mean, min, max (amps) and count
    """
    if not points:
        return {"mean": 0.0, "min": 0.0, "max": 0.0, "count": 0}
    arr = np.array([p.total_current for p in points])
    return {
        "mean": float(np.mean(arr)),
        "min": float(np.min(arr)),
        "max": float(np.max(arr)),
        "count": len(arr),
    }
