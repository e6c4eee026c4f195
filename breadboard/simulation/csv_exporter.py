"""
simulation/csv_exporter.py

Export simulation results to CSV format.
"""

import csv
import io
from datetime import datetime


def _write_header(writer, title, circuit_name):
    writer.writerow(["# Report", title])
    writer.writerow(["# Date", datetime.now().strftime("%Y-%m-%d %H:%M:%S")])
    if circuit_name:
        writer.writerow(["# Circuit", circuit_name])
    writer.writerow([])


def export_node_voltages(result, circuit_name=""):
    """
    Export solved net voltages to CSV string.

    Args:
        result: SimulationResult
        circuit_name: optional circuit filename

    Returns:
        str: CSV content
    """
    output = io.StringIO()
    writer = csv.writer(output)
    _write_header(writer, "Net Voltages", circuit_name)

    writer.writerow(["Net", "Voltage (V)"])
    for net, voltage in sorted(result.node_voltages.items()):
        writer.writerow([net, voltage])

    return output.getvalue()


def export_bulb_states(result, circuit_name=""):
    """
    Export per-bulb state to CSV string.

    Args:
        result: SimulationResult
        circuit_name: optional circuit filename

    Returns:
        str: CSV content
    """
    output = io.StringIO()
    writer = csv.writer(output)
    _write_header(writer, "Bulb States", circuit_name)

    writer.writerow(["Bulb", "On", "Burned Out", "Brightness", "Current (A)", "Voltage (V)", "Power (W)"])
    for bulb_id, state in result.bulb_states.items():
        writer.writerow(
            [
                bulb_id,
                state.is_on,
                bool(state.is_burned_out),
                state.brightness or 0.0,
                state.current,
                state.voltage,
                state.power,
            ]
        )

    writer.writerow([])
    writer.writerow(["Closed Loop", result.has_closed_loop])
    writer.writerow(["Total Current (A)", result.total_current])
    writer.writerow(["Faulty Batteries", " ".join(str(i) for i in result.battery_indices)])

    return output.getvalue()


def export_sweep(points, component_id="", circuit_name=""):
    """
    Export a potentiometer sweep to CSV string.

    Args:
        points: list of SweepPoint
        component_id: swept potentiometer id, used in the header
        circuit_name: optional circuit filename

    Returns:
        str: CSV content
    """
    output = io.StringIO()
    writer = csv.writer(output)
    _write_header(writer, f"Potentiometer Sweep {component_id}".strip(), circuit_name)

    bulb_ids = sorted({bulb_id for p in points for bulb_id in p.bulb_brightness})
    writer.writerow(["Resistance (ohm)", "Total Current (A)"] + [f"{b} brightness" for b in bulb_ids])
    for p in points:
        writer.writerow([p.resistance, p.total_current] + [p.bulb_brightness.get(b, 0.0) for b in bulb_ids])

    return output.getvalue()
