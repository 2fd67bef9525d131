"""
simulation/circuit_validator.py

Structural circuit checks with no Qt dependencies. None of these block the
solver (it handles open circuits on its own); they explain to the user why a
circuit sits at rest.
"""

from models.component import ComponentKind

from .adjacency import build_adjacency
from .loop_finder import find_loops


def validate_circuit(components, wires):
    """
    Validate a circuit before solving.

    Args:
        components: Dict[str, ComponentData] keyed by component ID
        wires: Iterable[WireData]

    Returns:
        (is_valid, errors, warnings) where:
            is_valid: bool, False if any errors found
            errors: list[str], problems with the circuit data itself
            warnings: list[str], reasons the circuit may carry no current
    """
    errors = []
    warnings = []
    wires = list(wires)

    # 1. Circuit must have components
    if not components:
        errors.append("Circuit has no components. Place at least a battery and a load.")
        return False, errors, warnings

    # 2. Wires must reference existing, distinct components
    for wire in wires:
        for component_id in (wire.start_component_id, wire.end_component_id):
            if component_id not in components:
                errors.append(f"Wire {wire.wire_id} references unknown component '{component_id}'.")
        if wire.start_component_id == wire.end_component_id:
            errors.append(f"Wire {wire.wire_id} connects {wire.start_component_id} to itself.")

    # 3. Unconnected components
    connected = set()
    for wire in wires:
        connected.add(wire.start_component_id)
        connected.add(wire.end_component_id)
    for comp in components.values():
        if comp.component_id not in connected:
            warnings.append(f"{comp.component_id} ({comp.kind.value}) has no connections.")

    # 4. Sources and closed loops
    batteries = [c for c in components.values() if c.kind is ComponentKind.BATTERY]
    if not batteries:
        warnings.append("Circuit has no battery. No current will flow.")
    elif not errors:
        adjacency = build_adjacency(components, wires)
        for battery in batteries:
            if not find_loops(adjacency, battery.component_id):
                warnings.append(f"{battery.component_id} is not part of any closed loop.")

    # 5. Open switches
    for comp in components.values():
        if comp.is_open_switch:
            warnings.append(f"{comp.component_id} is open.")

    is_valid = len(errors) == 0
    return is_valid, errors, warnings
