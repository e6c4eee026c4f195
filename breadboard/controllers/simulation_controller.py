"""
SimulationController - Orchestrates the simulation pipeline.

This module has no rendering dependencies. It coordinates circuit
validation, netlist generation, DC analysis and status reporting for
the current CircuitModel.
"""

import logging
from typing import Optional

from breadboard.models.circuit import CircuitModel
from breadboard.simulation.circuit_validator import validate_circuit
from breadboard.simulation.constants import DEFAULT_CONSTANTS, CircuitConstants
from breadboard.simulation.convergence import diagnose_error, format_user_message
from breadboard.simulation.results import SimulationResult
from breadboard.simulation.simulator import simulate_circuit
from breadboard.simulation.solver import DCSolver, MnaSolver, SolverError
from breadboard.simulation.status_report import StatusReport, describe_status
from breadboard.simulation.sweep import SweepPoint, sweep_potentiometer
from breadboard.simulation.translator import translate_circuit

logger = logging.getLogger(__name__)

EDIT_EVENTS = frozenset({
    "component_added",
    "component_removed",
    "resistance_changed",
    "wire_added",
    "wire_removed",
    "circuit_cleared",
})


class SimulationController:
    """
    Controller for the simulation pipeline.

    Coordinates: snapshot -> simulate -> status report
    """

    def __init__(
        self,
        model: Optional[CircuitModel] = None,
        circuit_ctrl=None,
        solver: Optional[DCSolver] = None,
        constants: CircuitConstants = DEFAULT_CONSTANTS,
    ):
        self.model = model or CircuitModel()
        self.circuit_ctrl = circuit_ctrl
        self.solver = solver or MnaSolver()
        self.constants = constants
        self.last_result: Optional[SimulationResult] = None
        if circuit_ctrl is not None:
            circuit_ctrl.add_observer(self._on_model_changed)

    def _on_model_changed(self, event: str, data) -> None:
        # Any edit makes the kept result describe a different circuit
        if event in EDIT_EVENTS:
            self.last_result = None

    def _notify(self, event: str, data) -> None:
        if self.circuit_ctrl:
            self.circuit_ctrl._notify(event, data)

    def validate_circuit(self) -> tuple[bool, list[str], list[str]]:
        """Run the pre-simulation checks on the current circuit."""
        return validate_circuit(self.model.snapshot())

    def generate_netlist(self, title: str = "Breadboard circuit") -> str:
        """
        Render the current circuit as a SPICE deck.

        Returns an empty string if the circuit has no ground reference.
        """
        translation = translate_circuit(self.model.snapshot(), self.constants)
        if translation is None:
            return ""
        return translation.netlist.to_spice(title)

    def run_simulation(self) -> SimulationResult:
        """
        Simulate the current circuit and keep the result.

        Never raises; failures are reported through the result.
        """
        self._notify("simulation_started", None)
        result = simulate_circuit(self.model.snapshot(), self.solver, self.constants)
        self.last_result = result
        self._notify("simulation_completed", result)
        return result

    def status(self) -> StatusReport:
        """
        Status report for the current circuit.

        Reuses the last result unless the circuit was edited through
        circuit_ctrl since then; otherwise simulates first.
        """
        result = self.last_result if self.last_result is not None else self.run_simulation()
        report = describe_status(result, has_components=bool(self.model.components))
        if result.has_battery_fault:
            failure = self.explain_failure()
            if failure:
                report.details.append(failure)
        return report

    def explain_failure(self) -> str:
        """
        Explain why the DC analysis of the current circuit fails.

        Returns an empty string when the circuit is incomplete or solves.
        """
        translation = translate_circuit(self.model.snapshot(), self.constants)
        if translation is None:
            return ""
        try:
            self.solver.solve(translation.netlist)
        except SolverError as e:
            return format_user_message(diagnose_error(e))
        return ""

    def sweep(self, component_id: str, values=None) -> list[SweepPoint]:
        """Sweep a potentiometer of the current circuit across resistance values."""
        return sweep_potentiometer(self.model.snapshot(), component_id, values, self.solver, self.constants)
