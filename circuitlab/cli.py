"""
Command-line interface for circuitlab batch operations.

Solve, validate, and export circuits without the GUI.

Usage::

    python -m cli solve circuit.json
    python -m cli solve circuit.json --format json --output results.json
    python -m cli validate circuit.json
    python -m cli export circuit.json --output normalized.json
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from controllers.circuit_controller import CircuitController
from controllers.file_controller import validate_circuit_data
from models.errors import CircuitError
from models.topology import TopologyModel
from simulation.circuit_validator import validate_circuit


def try_load_circuit(filepath: str) -> tuple[TopologyModel | None, str]:
    """Load and validate a circuit JSON file without exiting.

    Args:
        filepath: Path to the circuit JSON file.

    Returns:
        (model, "") on success, or (None, error_message) on failure.
    """
    path = Path(filepath)
    if not path.exists():
        return None, f"file not found: {filepath}"

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        return None, f"invalid JSON in {filepath}: {e}"

    try:
        validate_circuit_data(data)
    except ValueError as e:
        return None, f"invalid circuit file: {e}"

    return TopologyModel.from_dict(data), ""


def load_circuit(filepath: str) -> TopologyModel:
    """Load and validate a circuit JSON file.

    Raises:
        SystemExit: On file read or validation errors.
    """
    model, error = try_load_circuit(filepath)
    if model is None:
        print(f"Error: {error}", file=sys.stderr)
        sys.exit(1)
    return model


def cmd_solve(args: argparse.Namespace) -> int:
    """Solve the circuit and print per-component results."""
    model = load_circuit(args.circuit)
    controller = CircuitController(model)
    solution = controller.recompute()

    if args.format == "json":
        output_text = _solution_to_json(controller, solution)
    else:
        output_text = _solution_to_text(controller, solution)

    if args.output:
        Path(args.output).write_text(output_text, encoding="utf-8")
        print(f"Results written to {args.output}", file=sys.stderr)
    else:
        print(output_text)
    return 0


def cmd_validate(args: argparse.Namespace) -> int:
    """Check a circuit for structural problems without solving it."""
    model = load_circuit(args.circuit)
    is_valid, errors, warnings = validate_circuit(model.components, model.wires.values())

    if is_valid:
        print(f"Circuit is valid: {args.circuit}")
        for warning in warnings:
            print(f"  Warning: {warning}")
        return 0

    print(f"Circuit has errors: {args.circuit}", file=sys.stderr)
    for err in errors:
        print(f"  - {err}", file=sys.stderr)
    return 1


def cmd_export(args: argparse.Namespace) -> int:
    """Write the circuit back out as normalized JSON."""
    model = load_circuit(args.circuit)
    output_text = json.dumps(model.to_dict(), indent=2)
    if args.output:
        Path(args.output).write_text(output_text, encoding="utf-8")
        print(f"JSON written to {args.output}", file=sys.stderr)
    else:
        print(output_text)
    return 0


def _component_rows(controller):
    for component_id, component in controller.model.components.items():
        state = controller.get_render_state(component_id)
        yield component, state


def _solution_to_json(controller, solution) -> str:
    components = {}
    for component, state in _component_rows(controller):
        entry = {
            "kind": component.kind.value,
            "current": component.current,
            "voltage_drop": component.voltage_drop,
            "powered": component.powered,
        }
        if component.reading is not None:
            entry["reading"] = component.reading
        if state.glow:
            entry["glow"] = state.glow
        if state.switch_state:
            entry["switch"] = state.switch_state
        components[component.component_id] = entry

    output = {
        "loops": solution.loops,
        "components": components,
    }
    return json.dumps(output, indent=2)


def _solution_to_text(controller, solution) -> str:
    lines = [f"Loops found: {solution.loop_count}"]
    for loop, current in zip(solution.solved_loops, solution.loop_currents):
        lines.append(f"  {' -> '.join(loop)}: {current:.6g} A")
    lines.append("")
    lines.append(f"{'ID':<8}{'Kind':<11}{'Current (A)':>14}{'Drop (V)':>12}  State")
    for component, state in _component_rows(controller):
        details = ["on" if component.powered else "off"]
        if state.reading_text:
            details.append(state.reading_text)
        if state.switch_state:
            details.append(state.switch_state)
        if state.glow:
            details.append(f"glow {state.glow:.0%}")
        lines.append(
            f"{component.component_id:<8}{component.kind.value:<11}"
            f"{component.current:>14.6g}{component.voltage_drop:>12.6g}  {', '.join(details)}"
        )
    return "\n".join(lines)


def build_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="circuitlab-cli",
        description="circuitlab batch operations: solve, validate, and export circuits from the command line.",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Log solver detail to stderr")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # solve
    solve_parser = subparsers.add_parser("solve", help="Solve the circuit and print currents and voltages")
    solve_parser.add_argument("circuit", help="Path to circuit JSON file")
    solve_parser.add_argument("--format", choices=["text", "json"], default="text", help="Output format (default: text)")
    solve_parser.add_argument("--output", "-o", help="Write results to file instead of stdout")

    # validate
    val_parser = subparsers.add_parser("validate", help="Check circuit for errors without solving")
    val_parser.add_argument("circuit", help="Path to circuit JSON file")

    # export
    exp_parser = subparsers.add_parser("export", help="Export circuit as normalized JSON")
    exp_parser.add_argument("circuit", help="Path to circuit JSON file")
    exp_parser.add_argument("--output", "-o", help="Write output to file instead of stdout")

    return parser


def main(argv=None) -> int:
    """CLI entry point. Returns exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    handlers = {
        "solve": cmd_solve,
        "validate": cmd_validate,
        "export": cmd_export,
    }

    handler = handlers.get(args.command)
    if handler is None:
        parser.print_help()
        return 1

    try:
        return handler(args)
    except (CircuitError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
