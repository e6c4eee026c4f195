from .circuit_validator import validate_circuit
from .constants import DEFAULT_CONSTANTS, CircuitConstants, load_constants
from .results import BulbState, SimulationResult
from .simulator import simulate_circuit
from .solver import DCSolution, DCSolver, MnaSolver, SolverError
from .status_report import StatusLevel, StatusReport, describe_status
from .translator import translate_circuit
from .union_find import DisjointSet

__all__ = [
    'BulbState', 'CircuitConstants', 'DCSolution', 'DCSolver', 'DEFAULT_CONSTANTS',
    'DisjointSet', 'MnaSolver', 'SimulationResult', 'SolverError', 'StatusLevel',
    'StatusReport', 'describe_status', 'load_constants', 'simulate_circuit',
    'translate_circuit', 'validate_circuit',
]
