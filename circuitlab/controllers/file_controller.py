"""
FileController - Handles circuit file I/O.

File dialog interaction is the responsibility of the view layer. Only the
editable circuit state is written; currents and voltages are recomputed
after loading.
"""

import json
import logging
from pathlib import Path
from typing import Optional

from models.component import ComponentKind, Terminal
from models.errors import MissingEndpointError
from models.topology import TopologyModel

logger = logging.getLogger(__name__)

_KINDS = {kind.value for kind in ComponentKind}
_TERMINALS = {terminal.value for terminal in Terminal}
_NUMERIC_FIELDS = ("resistance", "source_voltage", "forward_drop_voltage", "rated_current")


def _is_count(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0


def validate_circuit_data(data) -> None:
    """
    Validate JSON structure before loading.

    Raises:
        ValueError: With a descriptive message if anything is wrong.
        MissingEndpointError: If a wire names a component that is not in the file.
    """
    if not isinstance(data, dict):
        raise ValueError("File does not contain a valid circuit object.")

    if "components" not in data or not isinstance(data["components"], list):
        raise ValueError("Missing or invalid 'components' list.")
    if "wires" not in data or not isinstance(data["wires"], list):
        raise ValueError("Missing or invalid 'wires' list.")

    counters = data.get("counters", {})
    if not isinstance(counters, dict):
        raise ValueError("Invalid 'counters': expected an object of prefix -> count.")
    for prefix, count in counters.items():
        if not _is_count(count):
            raise ValueError(f"Counter '{prefix}' must be a non-negative integer.")
    if not _is_count(data.get("wire_counter", 0)):
        raise ValueError("Invalid 'wire_counter': expected a non-negative integer.")

    comp_ids = set()
    for i, comp in enumerate(data["components"]):
        if not isinstance(comp, dict):
            raise ValueError(f"Component #{i + 1} is not an object.")
        for key in ("id", "kind", "pos"):
            if key not in comp:
                raise ValueError(f"Component #{i + 1} is missing required field '{key}'.")
        if comp["kind"] not in _KINDS:
            raise ValueError(f"Component '{comp['id']}' has unknown kind '{comp['kind']}'.")
        if comp["id"] in comp_ids:
            raise ValueError(f"Duplicate component id '{comp['id']}'.")
        pos = comp["pos"]
        if not isinstance(pos, dict) or "x" not in pos or "y" not in pos:
            raise ValueError(f"Component '{comp['id']}' has invalid position data.")
        if not isinstance(pos["x"], (int, float)) or not isinstance(pos["y"], (int, float)):
            raise ValueError(f"Component '{comp['id']}' position values must be numeric.")
        for key in _NUMERIC_FIELDS:
            if key in comp and (not isinstance(comp[key], (int, float)) or comp[key] < 0):
                raise ValueError(f"Component '{comp['id']}' field '{key}' must be a non-negative number.")
        comp_ids.add(comp["id"])

    wire_ids = set()
    for i, wire in enumerate(data["wires"]):
        if not isinstance(wire, dict):
            raise ValueError(f"Wire #{i + 1} is not an object.")
        for key in ("id", "start_comp", "end_comp", "start_term", "end_term"):
            if key not in wire:
                raise ValueError(f"Wire #{i + 1} is missing required field '{key}'.")
        if wire["id"] in wire_ids:
            raise ValueError(f"Duplicate wire id '{wire['id']}'.")
        for key in ("start_term", "end_term"):
            if wire[key] not in _TERMINALS:
                raise ValueError(f"Wire '{wire['id']}' has unknown terminal '{wire[key]}'.")
        for key in ("start_comp", "end_comp"):
            if wire[key] not in comp_ids:
                raise MissingEndpointError(wire["id"], wire[key])
        if wire["start_comp"] == wire["end_comp"]:
            raise ValueError(f"Wire '{wire['id']}' connects '{wire['start_comp']}' to itself.")
        wire_ids.add(wire["id"])


class FileController:
    """
    Manages circuit file I/O.

    Handles saving/loading circuit data as JSON and tracking
    the current file path for quick-save.
    """

    def __init__(self, model: Optional[TopologyModel] = None, circuit_ctrl=None):
        self.circuit_ctrl = circuit_ctrl  # For observer notifications and recompute on load
        if model is None:
            model = circuit_ctrl.model if circuit_ctrl is not None else TopologyModel()
        self.model = model
        self.current_file: Optional[Path] = None

    def new_circuit(self) -> None:
        """Clear the circuit and reset file state."""
        if self.circuit_ctrl:
            self.circuit_ctrl.clear_circuit()
        else:
            self.model.clear()
        self.current_file = None

    def save_circuit(self, filepath) -> None:
        """
        Save circuit to JSON file.

        Raises:
            OSError: If the file cannot be written.
        """
        filepath = Path(filepath)
        data = self.model.to_dict()
        with open(filepath, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)
        self.current_file = filepath
        logger.info("Saved circuit to %s", filepath)

        if self.circuit_ctrl:
            self.circuit_ctrl._notify("model_saved", None)

    def load_circuit(self, filepath) -> None:
        """
        Load circuit from JSON file.

        Validates JSON structure before loading. Updates the model
        in place (preserving the reference so views stay connected).

        Raises:
            json.JSONDecodeError: If file is not valid JSON.
            ValueError: If file structure is invalid.
            OSError: If the file cannot be read.
        """
        filepath = Path(filepath)
        with open(filepath, "r", encoding="utf-8") as f:
            data = json.load(f)

        validate_circuit_data(data)

        if self.circuit_ctrl:
            self.circuit_ctrl.load_model(data)
        else:
            loaded = TopologyModel.from_dict(data)
            self.model.clear()
            self.model.components.update(loaded.components)
            self.model.wires.update(loaded.wires)
            self.model.component_counter.update(loaded.component_counter)
            self.model.wire_counter = loaded.wire_counter

        self.current_file = filepath
        logger.info("Loaded circuit from %s (%d components, %d wires)", filepath, len(self.model.components), len(self.model.wires))

    def has_file(self) -> bool:
        """Return whether a current file is set."""
        return self.current_file is not None

    def get_window_title(self, base_title: str = "circuitlab") -> str:
        """Generate window title including current filename."""
        if self.current_file:
            return f"{base_title} - {self.current_file.name}"
        return base_title
