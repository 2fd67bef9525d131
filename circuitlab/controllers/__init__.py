"""
Controllers for circuitlab.

This package contains Qt-free controller classes that turn user actions
into model mutations and notify views through an observer pattern.
"""

from .circuit_controller import CircuitController, InteractionState
from .file_controller import FileController, validate_circuit_data

__all__ = [
    "CircuitController",
    "InteractionState",
    "FileController",
    "validate_circuit_data",
]
