"""
simulation/simulator.py

Entry point of the simulation pipeline:
snapshot -> nets -> netlist -> DC solve -> bulb/battery state.

simulate_circuit() never raises. Incomplete circuits give an empty result,
solver failures and unexpected errors flag every battery so the user is
told to check the wiring.
"""

import logging
from typing import Optional

from breadboard.models.circuit import CircuitSnapshot

from .constants import DEFAULT_CONSTANTS, CircuitConstants
from .interpreter import failed_result, interpret_solution
from .results import SimulationResult
from .solver import DCSolver, MnaSolver, SolverError
from .translator import translate_circuit

logger = logging.getLogger(__name__)


def simulate_circuit(
    snapshot: CircuitSnapshot,
    solver: Optional[DCSolver] = None,
    constants: CircuitConstants = DEFAULT_CONSTANTS,
) -> SimulationResult:
    """
    Simulate a breadboard snapshot.

    Args:
        snapshot: components, terminals and wires to analyse
        solver: DC backend; defaults to the numpy MNA solver
        constants: electrical parameters

    Returns:
        A fresh SimulationResult.
    """
    logger.debug(
        "simulate_circuit: %d components, %d terminals, %d wires",
        len(snapshot.components),
        len(snapshot.terminals),
        len(snapshot.wires),
    )
    solver = solver or MnaSolver()

    try:
        translation = translate_circuit(snapshot, constants)
        if translation is None:
            return SimulationResult()

        try:
            solution = solver.solve(translation.netlist)
        except SolverError as e:
            logger.warning("DC analysis failed (%s): %s", e.category.value, e)
            return failed_result(snapshot)

        return interpret_solution(snapshot, translation, solution, constants)
    except Exception:
        logger.exception("Simulation error")
        return failed_result(snapshot)
