"""
simulation/circuit_validator.py

Pre-simulation checks that explain why a breadboard will not light up.
The simulator itself tolerates all of these; the validator only reports.
"""

from breadboard.models.circuit import CircuitSnapshot
from breadboard.models.terminal import TerminalRole
from breadboard.simulation.translator import find_battery_terminals


def is_skipped_by_simulator(comp, terminals) -> bool:
    """
    True when translation leaves this component out of the netlist.

    Batteries need both a plus and a minus terminal; bulbs and
    potentiometers need exactly two terminals, whatever their roles.
    """
    if comp.is_battery:
        plus, minus = find_battery_terminals(terminals)
        return plus is None or minus is None
    return len(terminals) != 2


def validate_circuit(snapshot: CircuitSnapshot):
    """
    Validate a circuit before simulation.

    Args:
        snapshot: CircuitSnapshot to check

    Returns:
        (is_valid, errors, warnings) where:
            is_valid: bool - False if any errors found
            errors: list[str] - problems that stop analysis entirely
            warnings: list[str] - issues the simulator works around
    """
    errors = []
    warnings = []

    # 1. Circuit must have components
    if not snapshot.components:
        errors.append("Circuit has no components. Place a battery and a bulb to start.")
        return False, errors, warnings

    # 2. Must have a battery minus terminal to use as ground
    if not snapshot.batteries():
        errors.append("Circuit has no battery. Add a battery to power the circuit.")
    elif not any(t.role is TerminalRole.BATTERY_MINUS for t in snapshot.terminals):
        errors.append("No battery has a minus terminal, so there is no voltage reference.")

    # 3. Wires must join known terminals
    known_terminals = {t.terminal_id for t in snapshot.terminals}
    connected_terminals = set()
    for i, wire in enumerate(snapshot.wires):
        for terminal_id in wire.get_terminals():
            if terminal_id not in known_terminals:
                warnings.append(f"Wire #{i + 1} references unknown terminal '{terminal_id}'.")
            connected_terminals.add(terminal_id)

    # 4. Terminal sets and connections per component
    for comp in snapshot.components:
        terminals = snapshot.terminals_of(comp.component_id)
        if is_skipped_by_simulator(comp, terminals):
            warnings.append(
                f"{comp.component_id} ({comp.get_display_name()}) has a malformed terminal set "
                f"and will be ignored."
            )
            continue

        expected_roles = sorted(role.value for role in comp.get_terminal_roles())
        actual_roles = sorted(t.role.value if t.role else "" for t in terminals)
        if actual_roles != expected_roles:
            warnings.append(
                f"{comp.component_id} ({comp.get_display_name()}) has unexpected terminal roles "
                f"{actual_roles}; it is still simulated."
            )

        unconnected = [t.terminal_id for t in terminals if t.terminal_id not in connected_terminals]
        if len(unconnected) == len(terminals):
            warnings.append(
                f"{comp.component_id} ({comp.get_display_name()}) has no connections. "
                f"Wire its terminals into the circuit."
            )
        elif unconnected:
            warnings.append(
                f"{comp.component_id} ({comp.get_display_name()}) has unconnected "
                f"terminal(s): {unconnected}."
            )

    # 5. Nothing to light
    if not snapshot.bulbs():
        warnings.append("Circuit has no bulb. Add a bulb to see the circuit light up.")

    is_valid = len(errors) == 0
    return is_valid, errors, warnings
