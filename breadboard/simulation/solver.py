"""
simulation/solver.py

DC solver interface and the default Modified Nodal Analysis backend.

The simulation pipeline only talks to the DCSolver interface: it hands
over a Netlist and gets back node voltages and source branch currents, or
a SolverError when the system cannot be solved.
"""

import logging
import math
from abc import ABC, abstractmethod
from dataclasses import dataclass, field

import numpy as np

from .convergence import ErrorCategory
from .netlist import GROUND, Netlist

logger = logging.getLogger(__name__)

# Conductance from every node to ground, as SPICE does, so nets left
# floating by an unfinished layout still have a defined voltage.
DEFAULT_GMIN = 1e-12


class SolverError(Exception):
    """Raised when the DC system has no usable solution."""

    def __init__(self, message: str, category: ErrorCategory = ErrorCategory.UNKNOWN):
        super().__init__(message)
        self.category = category


@dataclass(frozen=True)
class DCSolution:
    """
    Solved operating point.

    Attributes:
        voltages: net display name -> volts, for every non-ground net
        branch_currents: voltage source name -> amps through the source
    """

    voltages: dict[str, float] = field(default_factory=dict)
    branch_currents: dict[str, float] = field(default_factory=dict)


class DCSolver(ABC):
    """Pluggable DC operating-point solver."""

    @abstractmethod
    def solve(self, netlist: Netlist) -> DCSolution:
        """Solve the netlist or raise SolverError."""
        pass


class MnaSolver(DCSolver):
    """
    Dense Modified Nodal Analysis solver built on numpy.

    Unknowns are the non-ground net voltages followed by one branch current
    per voltage source. Branch currents use the SPICE sign convention
    (positive current flows into the positive terminal).
    """

    def __init__(self, gmin: float = DEFAULT_GMIN):
        self.gmin = gmin

    def solve(self, netlist: Netlist) -> DCSolution:
        n = netlist.net_count
        sources = netlist.voltage_sources
        m = len(sources)
        size = n + m

        if size == 0:
            return DCSolution()

        A = np.zeros((size, size), dtype=float)
        z = np.zeros(size, dtype=float)

        # Stamp resistors
        for resistor in netlist.resistors:
            r = resistor.resistance
            if not math.isfinite(r) or r <= 0:
                raise SolverError(
                    f"Resistance of {resistor.name} must be positive, got {r}",
                    ErrorCategory.INVALID_VALUE,
                )
            g = 1.0 / r
            i, j = resistor.n1, resistor.n2
            if i != GROUND:
                A[i, i] += g
            if j != GROUND:
                A[j, j] += g
            if i != GROUND and j != GROUND:
                A[i, j] -= g
                A[j, i] -= g

        for i in range(n):
            A[i, i] += self.gmin

        # Stamp voltage sources
        for k, source in enumerate(sources):
            row = n + k
            if source.positive != GROUND:
                A[source.positive, row] = 1.0
                A[row, source.positive] = 1.0
            if source.negative != GROUND:
                A[source.negative, row] = -1.0
                A[row, source.negative] = -1.0
            z[row] = source.voltage

        try:
            x = np.linalg.solve(A, z)
        except np.linalg.LinAlgError as e:
            raise SolverError(f"Singular circuit matrix: {e}", ErrorCategory.SINGULAR_MATRIX) from e

        if not np.all(np.isfinite(x)):
            raise SolverError("Solver produced non-finite values", ErrorCategory.NON_FINITE)

        voltages = {netlist.net_names[i]: float(x[i]) for i in range(n)}
        branch_currents = {source.name: float(x[n + k]) for k, source in enumerate(sources)}
        logger.debug("Solved %d nets and %d sources", n, m)
        return DCSolution(voltages=voltages, branch_currents=branch_currents)
