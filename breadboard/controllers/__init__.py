"""
Controllers - Business logic layer with no rendering dependencies.
"""

from .circuit_controller import CircuitController
from .file_controller import load_circuit_file, save_circuit_file, validate_circuit_data
from .simulation_controller import SimulationController

__all__ = [
    "CircuitController",
    "SimulationController",
    "load_circuit_file",
    "save_circuit_file",
    "validate_circuit_data",
]
