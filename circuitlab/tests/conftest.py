"""
Shared test fixtures for the circuitlab test suite.

All fixtures build pure-Python model objects (no Qt dependencies).
"""

import os
import sys
from pathlib import Path

# Ensure circuitlab/ is on sys.path so bare imports (models, simulation, GUI, controllers)
# work when running individual test files (e.g., python -m pytest circuitlab/tests/unit/test_foo.py).
_app_dir = str(Path(__file__).resolve().parent.parent)
if _app_dir not in sys.path:
    sys.path.insert(0, _app_dir)

# GUI tests run without a display
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest
from controllers.circuit_controller import CircuitController
from models.topology import TopologyModel


def build_series_loop(model, *kinds):
    """
    Place a battery followed by ``kinds`` and wire them into one series loop.

    B1.right -> first.left, first.right -> second.left, ..., last.right -> B1.left

    Returns:
        List of component IDs in loop order, battery first.
    """
    ids = [model.add_component("battery", (0.0, 0.0))]
    for i, kind in enumerate(kinds, start=1):
        ids.append(model.add_component(kind, (100.0 * i, 0.0)))
    for a, b in zip(ids, ids[1:] + ids[:1]):
        model.add_wire(a, "right", b, "left")
    return ids


@pytest.fixture
def model():
    return TopologyModel()


@pytest.fixture
def series_circuit(model):
    """Builder that wires a battery and the given kinds into one loop on ``model``."""

    def build(*kinds):
        return build_series_loop(model, *kinds)

    return build


@pytest.fixture
def controller():
    return CircuitController()


@pytest.fixture
def events():
    """Fixture that returns a list and a callback that appends events to it."""
    recorded = []

    def callback(event, data):
        recorded.append((event, data))

    return recorded, callback


@pytest.fixture
def battery_resistor(model):
    """
    B1 (9V, 0.01 ohm) -- R1 (100 ohm), closed by two wires.
    """
    build_series_loop(model, "resistor")
    return model


@pytest.fixture
def battery_switch_bulb(model):
    """
    B1 -- SW1 -- LAMP1 -- back to B1
    """
    build_series_loop(model, "switch", "bulb")
    return model
