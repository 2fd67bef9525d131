from .adjacency import build_adjacency
from .circuit_validator import validate_circuit
from .loop_finder import find_loops
from .lumped_solver import MIN_LOOP_RESISTANCE, CircuitSolution, solve_circuit, solve_loop
from .render_state import LED_REFERENCE_CURRENT, RenderAttributes, WireRenderAttributes, project, project_wire

__all__ = [
    'build_adjacency',
    'find_loops',
    'solve_circuit',
    'solve_loop',
    'CircuitSolution',
    'MIN_LOOP_RESISTANCE',
    'project',
    'project_wire',
    'RenderAttributes',
    'WireRenderAttributes',
    'LED_REFERENCE_CURRENT',
    'validate_circuit',
]
