"""
simulation/lumped_solver.py

Lumped DC solver: applies Ohm's law to each loop found around each battery.

Every loop is solved independently as a series circuit. When a component
sits on more than one loop, the loop solved last decides its values. This is
a known approximation of the pedagogical model, not mesh analysis.
"""

import logging
from dataclasses import dataclass, field

from models.component import METER_KINDS, POWERED_EPSILON, ComponentKind

from .adjacency import build_adjacency
from .loop_finder import find_loops

logger = logging.getLogger(__name__)

# Floor for a loop's total resistance so that a bare short does not divide by zero
MIN_LOOP_RESISTANCE = 0.01

_RESISTIVE_KINDS = frozenset(
    {
        ComponentKind.RESISTOR,
        ComponentKind.CAPACITOR,
        ComponentKind.INDUCTOR,
        ComponentKind.GROUND,
        ComponentKind.DIODE,
        ComponentKind.LED,
        ComponentKind.SWITCH,
        ComponentKind.BULB,
    }
)


@dataclass
class CircuitSolution:
    """Result of one full recompute."""

    loops: dict[str, list[list[str]]] = field(default_factory=dict)  # battery_id -> loops found
    solved_loops: list[list[str]] = field(default_factory=list)  # in solve order
    loop_currents: list[float] = field(default_factory=list)  # parallel to solved_loops
    active_edges: set[frozenset] = field(default_factory=set)

    @property
    def loop_count(self) -> int:
        return sum(len(loops) for loops in self.loops.values())

    def all_loops(self) -> list[list[str]]:
        return [loop for loops in self.loops.values() for loop in loops]

    def loops_containing(self, component_id: str) -> list[list[str]]:
        return [loop for loop in self.all_loops() if component_id in loop]

    def is_edge_active(self, a: str, b: str) -> bool:
        return frozenset((a, b)) in self.active_edges


def solve_circuit(components, wires) -> CircuitSolution:
    """
    Recompute every component's current, voltage drop, reading and powered flag.

    Args:
        components: dict mapping component_id -> ComponentData (mutated in place)
        wires: iterable of WireData

    Returns:
        CircuitSolution describing the loops that were found and solved.
        A circuit without a battery, or without a closed loop, is simply left
        at rest; that is not an error.
    """
    for component in components.values():
        component.reset_outputs()

    solution = CircuitSolution()
    batteries = [c for c in components.values() if c.kind is ComponentKind.BATTERY]
    if not batteries:
        logger.debug("No batteries in circuit; everything at rest")
        return solution

    adjacency = build_adjacency(components, wires)

    for battery in batteries:
        loops = find_loops(adjacency, battery.component_id)
        solution.loops[battery.component_id] = loops
        if not loops:
            logger.debug("No closed loop through %s", battery.component_id)
        for loop in loops:
            solve_loop(loop, components, adjacency, solution)

    logger.info("Solved %d loop(s) across %d battery(ies)", solution.loop_count, len(batteries))
    return solution


def solve_loop(loop, components, adjacency, solution=None) -> float:
    """
    Solve a single loop as a series circuit and write the results onto its members.

    Returns:
        The loop current in amps.
    """
    members = [components[component_id] for component_id in loop]

    total_voltage = sum(c.source_voltage for c in members if c.is_source)
    total_resistance = sum(c.resistance for c in members if not c.is_meter)

    total_resistance = max(total_resistance, MIN_LOOP_RESISTANCE)
    current = total_voltage / total_resistance
    logger.debug("Loop %s: V=%.4g R=%.4g I=%.4g", loop, total_voltage, total_resistance, current)

    for component in members:
        _apply_loop_current(component, current)

    # Meters go last: a voltmeter reads the drop its neighbour just received
    in_loop = set(loop)
    for component in members:
        if component.is_meter:
            _apply_meter_reading(component, current, total_voltage, components, adjacency, in_loop)

    if solution is not None:
        solution.solved_loops.append(list(loop))
        solution.loop_currents.append(current)
        if current > POWERED_EPSILON:
            for a, b in zip(loop, loop[1:] + loop[:1]):
                solution.active_edges.add(frozenset((a, b)))

    return current


def _apply_loop_current(component, current: float) -> None:
    kind = component.kind
    if kind is ComponentKind.BATTERY:
        component.current = current
        component.powered = True
    elif kind in _RESISTIVE_KINDS:
        component.current = current
        component.voltage_drop = current * component.resistance
        component.powered = current > POWERED_EPSILON
    elif kind in METER_KINDS:
        component.current = current
        component.powered = current > POWERED_EPSILON
    else:
        raise ValueError(f"Unhandled component kind: {kind!r}")


def _apply_meter_reading(meter, current, total_voltage, components, adjacency, in_loop) -> None:
    if meter.kind is ComponentKind.AMMETER:
        meter.reading = current
    elif meter.kind is ComponentKind.VOLTMETER:
        meter.reading = total_voltage
        for neighbour_id in adjacency.get(meter.component_id, ()):
            neighbour = components[neighbour_id]
            if neighbour_id in in_loop and neighbour.kind in _RESISTIVE_KINDS and neighbour.kind is not ComponentKind.GROUND:
                meter.reading = neighbour.voltage_drop
                break
    else:
        raise ValueError(f"Not a meter: {meter.kind!r}")
