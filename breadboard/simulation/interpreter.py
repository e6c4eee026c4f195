"""
simulation/interpreter.py

Turns a solved operating point into bulb and battery state.

Bulbs follow a simple current-band model: below the on threshold they are
dark, between the threshold and the burnout current they glow with a
brightness that is linear in current (1 at the normal operating current),
and above the burnout current they are burned out.
"""

import logging

from breadboard.models.circuit import CircuitSnapshot

from .constants import DEFAULT_CONSTANTS, GROUND_NET_NAME, CircuitConstants
from .results import BulbState, SimulationResult
from .solver import DCSolution
from .translator import Translation, group_terminals

logger = logging.getLogger(__name__)


def all_battery_indices(snapshot: CircuitSnapshot) -> list[int]:
    """1-based positions of every battery, in appearance order."""
    return list(range(1, len(snapshot.batteries()) + 1))


def default_bulb_states(snapshot: CircuitSnapshot) -> dict[str, BulbState]:
    return {bulb.component_id: BulbState() for bulb in snapshot.bulbs()}


def failed_result(snapshot: CircuitSnapshot) -> SimulationResult:
    """Result for a circuit the solver could not handle: every battery is flagged."""
    return SimulationResult(
        bulb_states=default_bulb_states(snapshot),
        battery_indices=all_battery_indices(snapshot),
    )


def compute_brightness(current: float, constants: CircuitConstants = DEFAULT_CONSTANTS) -> float:
    """
    Brightness for a lit bulb.

    0 at the on threshold, 1 at the normal current, linear beyond and
    capped at the brightness ceiling.
    """
    brightness = (current - constants.current_threshold) / (
        constants.normal_current - constants.current_threshold
    )
    return max(0.0, min(brightness, constants.max_brightness))


def compute_bulb_state(v1: float, v2: float, constants: CircuitConstants = DEFAULT_CONSTANTS) -> BulbState:
    """State of a bulb whose terminals sit at v1 and v2 volts."""
    voltage_drop = abs(v1 - v2)
    current = voltage_drop / constants.bulb_resistance
    power = voltage_drop * current

    is_burned_out = current > constants.burnout_current
    is_on = not is_burned_out and current > constants.current_threshold
    brightness = compute_brightness(current, constants) if is_on else 0.0

    return BulbState(
        is_on=is_on,
        current=current,
        voltage=voltage_drop,
        power=power,
        is_burned_out=is_burned_out,
        brightness=brightness,
        voltage_node1=v1,
        voltage_node2=v2,
    )


def interpret_solution(
    snapshot: CircuitSnapshot,
    translation: Translation,
    solution: DCSolution,
    constants: CircuitConstants = DEFAULT_CONSTANTS,
) -> SimulationResult:
    """Build the SimulationResult for a successfully solved circuit."""
    result = SimulationResult(
        bulb_states=default_bulb_states(snapshot),
        node_voltages=dict(solution.voltages),
        battery_indices=list(translation.shorted_battery_indices),
    )

    # Total current: the first battery with a solved branch current
    for battery in snapshot.batteries():
        source_name = translation.source_names.get(battery.component_id)
        if source_name is not None and source_name in solution.branch_currents:
            result.total_current = abs(solution.branch_currents[source_name])
            break

    def voltage_at(terminal_id: str) -> float:
        net = translation.net_names.get_net_name(terminal_id)
        if net == GROUND_NET_NAME:
            return 0.0
        return solution.voltages.get(net, 0.0)

    grouped = group_terminals(snapshot)
    for bulb in snapshot.bulbs():
        terminals = grouped.get(bulb.component_id, [])
        if len(terminals) != 2:
            continue

        state = compute_bulb_state(
            voltage_at(terminals[0].terminal_id),
            voltage_at(terminals[1].terminal_id),
            constants,
        )
        result.bulb_states[bulb.component_id] = state
        logger.debug(
            "Bulb %s: %.2fV, %.2fmA, brightness %.2f",
            bulb.component_id,
            state.voltage,
            state.current * 1000,
            state.brightness,
        )

        if state.is_on:
            result.bulbs_on_count += 1
            result.has_closed_loop = True

    # Current flowing with no lit bulb still means the loop is closed
    if not result.has_closed_loop and result.total_current > constants.current_threshold:
        result.has_closed_loop = True

    # Heavy current with nothing lit: the batteries are shorted against each other
    batteries = snapshot.batteries()
    if (
        result.total_current > constants.short_circuit_current
        and result.bulbs_on_count == 0
        and batteries
    ):
        logger.debug("No-load short detected (%.3fA); flagging all batteries", result.total_current)
        result.battery_indices = all_battery_indices(snapshot)

    return result
