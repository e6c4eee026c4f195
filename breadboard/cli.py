"""
breadboard-cli: work with saved breadboard circuits from a shell.

Examples::

    breadboard-cli simulate lamp.json
    breadboard-cli simulate lamp.json --format csv -o lamp.csv
    breadboard-cli simulate lamp.json --constants weak_battery.json
    breadboard-cli validate lamp.json
    breadboard-cli export lamp.json -f cir -o lamp.cir
    breadboard-cli sweep dimmer.json -c P1 --format text
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from breadboard import __version__
from breadboard.controllers.circuit_controller import CircuitController
from breadboard.controllers.file_controller import validate_circuit_data
from breadboard.controllers.simulation_controller import SimulationController
from breadboard.format_utils import format_milliamps, format_resistance
from breadboard.models.circuit import CircuitModel
from breadboard.simulation.constants import DEFAULT_CONSTANTS, load_constants
from breadboard.simulation.csv_exporter import export_bulb_states, export_node_voltages, export_sweep
from breadboard.simulation.sweep import sweep_statistics


def try_load_circuit(filepath: str) -> tuple[CircuitModel | None, str]:
    """Read a circuit file, returning ``(model, "")`` or ``(None, reason)``."""
    path = Path(filepath)
    if not path.is_file():
        return None, f"file not found: {filepath}"

    try:
        data = json.loads(path.read_text())
    except json.JSONDecodeError as e:
        return None, f"invalid JSON in {filepath}: {e}"

    try:
        validate_circuit_data(data)
        return CircuitModel.from_dict(data), ""
    except ValueError as e:
        return None, f"invalid circuit file: {e}"


def load_circuit(filepath: str) -> CircuitModel:
    """Like try_load_circuit(), but reports the problem and exits with status 1."""
    model, reason = try_load_circuit(filepath)
    if model is None:
        print(f"Error: {reason}", file=sys.stderr)
        sys.exit(1)
    return model


def _make_controller(args: argparse.Namespace, model: CircuitModel) -> SimulationController | None:
    constants = DEFAULT_CONSTANTS
    if getattr(args, "constants", None):
        try:
            constants = load_constants(args.constants)
        except (OSError, ValueError) as e:
            print(f"Error: invalid constants file {args.constants}: {e}", file=sys.stderr)
            return None
    return SimulationController(model, CircuitController(model), constants=constants)


def _write_output(text: str, output: str | None, what: str) -> None:
    if output:
        Path(output).write_text(text)
        print(f"{what} written to {output}", file=sys.stderr)
    else:
        print(text)


def cmd_simulate(args: argparse.Namespace) -> int:
    """Solve the circuit and print what the status bar would show."""
    model = load_circuit(args.circuit)
    sim = _make_controller(args, model)
    if sim is None:
        return 1

    result = sim.run_simulation()
    report = sim.status()
    name = Path(args.circuit).stem

    if args.format == "csv":
        output_text = export_bulb_states(result, name) + "\n" + export_node_voltages(result, name)
    elif args.format == "text":
        lines = [report.message] + [f"  {line}" for line in report.details]
        if report.total_current:
            lines.append(f"Total current: {report.total_current}")
        for net, voltage in result.node_voltages.items():
            lines.append(f"  {net}: {voltage:.4f} V")
        output_text = "\n".join(lines)
    else:
        output_text = json.dumps({"result": result.to_dict(), "status": report.to_dict()}, indent=2)

    _write_output(output_text, args.output, "Results")
    return 0


def cmd_validate(args: argparse.Namespace) -> int:
    """Exit 0 when the circuit can be simulated, 1 when it cannot."""
    model = load_circuit(args.circuit)
    is_valid, errors, warnings = SimulationController(model).validate_circuit()

    if is_valid:
        print(f"Circuit is valid: {args.circuit}")
        for warning in warnings:
            print(f"  warning: {warning}")
        return 0
    print(f"Circuit has errors: {args.circuit}", file=sys.stderr)
    for err in errors:
        print(f"  error: {err}", file=sys.stderr)
    return 1


def cmd_export(args: argparse.Namespace) -> int:
    """Write the circuit as a SPICE deck (cir) or re-serialised JSON."""
    model = load_circuit(args.circuit)

    if args.format == "cir":
        netlist = SimulationController(model).generate_netlist(title=Path(args.circuit).stem)
        if not netlist:
            print("Error: circuit has no battery minus terminal to use as ground", file=sys.stderr)
            return 1
        _write_output(netlist, args.output, "Netlist")
        return 0

    _write_output(json.dumps(model.to_dict(), indent=2), args.output, "JSON")
    return 0


def cmd_sweep(args: argparse.Namespace) -> int:
    """Sweep a potentiometer across its presets (or given values)."""
    model = load_circuit(args.circuit)
    sim = _make_controller(args, model)
    if sim is None:
        return 1

    try:
        points = sim.sweep(args.component, args.values)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.format == "csv":
        output_text = export_sweep(points, args.component, Path(args.circuit).stem)
    elif args.format == "text":
        lines = [
            f"{format_resistance(p.resistance):>6}  {format_milliamps(p.total_current):>10}  "
            + "  ".join(f"{bulb}={b:.2f}" for bulb, b in sorted(p.bulb_brightness.items()))
            for p in points
        ]
        stats = sweep_statistics(points)
        lines.append(
            f"current mean {format_milliamps(stats['mean'])}, "
            f"min {format_milliamps(stats['min'])}, max {format_milliamps(stats['max'])}"
        )
        output_text = "\n".join(lines)
    else:
        output_text = json.dumps(
            {
                "component": args.component,
                "points": [
                    {
                        "resistance": p.resistance,
                        "totalCurrent": p.total_current,
                        "bulbBrightness": p.bulb_brightness,
                    }
                    for p in points
                ],
                "statistics": sweep_statistics(points),
            },
            indent=2,
        )

    _write_output(output_text, args.output, "Sweep")
    return 0


def _add_common(sub: argparse.ArgumentParser, formats: list[str], default: str,
                constants: bool = True) -> None:
    sub.add_argument("circuit", help="circuit JSON saved by the editor")
    sub.add_argument("--format", "-f", choices=formats, default=default,
                     help=f"output format (default: {default})")
    sub.add_argument("--output", "-o", help="write to this file rather than stdout")
    if constants:
        sub.add_argument("--constants", help="JSON file overriding battery/bulb constants")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="breadboard-cli",
        description="Simulate, check, sweep and export breadboard circuits.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--verbose", "-v", action="store_true", help="log pipeline details to stderr")
    commands = parser.add_subparsers(dest="command", required=True)

    simulate = commands.add_parser("simulate", help="solve the circuit and report bulbs and batteries")
    _add_common(simulate, ["json", "csv", "text"], "json")

    check = commands.add_parser("validate", help="look for wiring problems without solving")
    check.add_argument("circuit", help="circuit JSON saved by the editor")

    export = commands.add_parser("export", help="write the circuit as a SPICE deck or JSON")
    _add_common(export, ["cir", "json"], "cir", constants=False)

    sweep = commands.add_parser("sweep", help="re-solve across potentiometer resistances")
    _add_common(sweep, ["json", "csv", "text"], "json")
    sweep.add_argument("--component", "-c", required=True, help="potentiometer id, e.g. P1")
    sweep.add_argument("--values", type=float, nargs="+",
                       help="resistances in ohms (default: the knob presets)")

    return parser


COMMANDS = {
    "simulate": cmd_simulate,
    "validate": cmd_validate,
    "export": cmd_export,
    "sweep": cmd_sweep,
}


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    return COMMANDS[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
