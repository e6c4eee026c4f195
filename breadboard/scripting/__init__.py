"""
Breadboard scripting API - programmatic circuit creation and simulation.

Usage::

    from breadboard.scripting import Circuit

    circuit = Circuit()
    battery = circuit.add_battery()
    bulb = circuit.add_bulb()
    circuit.wire((battery, "+"), (bulb, "a"))
    circuit.wire((bulb, "b"), (battery, "-"))

    result = circuit.simulate()
    print(circuit.status().message)

    circuit.save("my_circuit.json")
"""

from breadboard.scripting.circuit import Circuit
from breadboard.simulation.results import SimulationResult

__all__ = ["Circuit", "SimulationResult"]
