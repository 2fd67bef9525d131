"""
TopologyModel - Central data store for circuit state.

This module contains no Qt dependencies. It holds the components and wires
of the circuit, keyed by ID, and is the only place they are created or
destroyed. The adjacency map is never stored here; the simulation package
derives it from the wires on every recompute.
"""

from dataclasses import dataclass, field
from typing import Optional

from .component import ComponentData, ComponentKind, ID_PREFIXES
from .errors import SelfConnectionError
from .wire import WireData

WIRE_PREFIX = "W"

# Fields update_component() accepts; solver outputs are not among them
_PATCHABLE_FIELDS = frozenset(
    {"position", "resistance", "source_voltage", "closed", "forward_drop_voltage", "rated_current"}
)


@dataclass
class TopologyModel:
    """
    Central data store holding all circuit state.

    Components and wires live in insertion-ordered dicts so that every
    derived structure (adjacency, loop order) is deterministic.
    """

    components: dict[str, ComponentData] = field(default_factory=dict)
    wires: dict[str, WireData] = field(default_factory=dict)
    component_counter: dict[str, int] = field(default_factory=dict)
    wire_counter: int = 0

    # --- Component operations ---

    def _next_component_id(self, kind: ComponentKind) -> str:
        prefix = ID_PREFIXES[kind]
        count = self.component_counter.get(prefix, 0) + 1
        self.component_counter[prefix] = count
        return f"{prefix}{count}"

    def add_component(self, kind, position: tuple[float, float]) -> str:
        """
        Create a component with default properties and return its ID.

        Raises:
            ValueError: If kind is not a known component kind.
        """
        kind = ComponentKind(kind)
        component_id = self._next_component_id(kind)
        self.components[component_id] = ComponentData.create(component_id, kind, position)
        return component_id

    def insert_component(self, component: ComponentData) -> None:
        """Add an already-built component (used when loading saved circuits)."""
        self.components[component.component_id] = component

    def remove_component(self, component_id: str) -> list[str]:
        """
        Remove a component and every wire attached to it.

        Removing an unknown ID is a no-op.

        Returns:
            IDs of the wires removed along with the component.
        """
        if component_id not in self.components:
            return []

        wire_ids = [wire_id for wire_id, wire in self.wires.items() if wire.connects_component(component_id)]
        for wire_id in wire_ids:
            del self.wires[wire_id]

        del self.components[component_id]
        return wire_ids

    def update_component(self, component_id: str, patch: dict) -> Optional[ComponentData]:
        """
        Apply a dict of field changes to a component.

        Values are assumed to be validated by the caller.

        Returns:
            The updated component, or None if the ID is unknown.

        Raises:
            ValueError: If the patch names a field that cannot be changed.
        """
        component = self.components.get(component_id)
        if component is None:
            return None

        unknown = set(patch) - _PATCHABLE_FIELDS
        if unknown:
            raise ValueError(f"Cannot update field(s) {sorted(unknown)} on '{component_id}'.")

        for key, value in patch.items():
            setattr(component, key, value)
        if component.kind is ComponentKind.GROUND:
            component.resistance = 0.0
        return component

    def get_component(self, component_id: str) -> Optional[ComponentData]:
        return self.components.get(component_id)

    def batteries(self) -> list[ComponentData]:
        """Return every voltage source, in placement order."""
        return [c for c in self.components.values() if c.kind is ComponentKind.BATTERY]

    # --- Wire operations ---

    def add_wire(self, comp_a: str, terminal_a, comp_b: str, terminal_b) -> str:
        """
        Connect two component terminals and return the new wire ID.

        Terminal collisions are allowed; several wires on one terminal form a junction.

        Raises:
            SelfConnectionError: If both ends name the same component.
        """
        if comp_a == comp_b:
            raise SelfConnectionError(comp_a)

        self.wire_counter += 1
        wire_id = f"{WIRE_PREFIX}{self.wire_counter}"
        self.wires[wire_id] = WireData(
            wire_id=wire_id,
            start_component_id=comp_a,
            start_terminal=terminal_a,
            end_component_id=comp_b,
            end_terminal=terminal_b,
        )
        return wire_id

    def insert_wire(self, wire: WireData) -> None:
        """Add an already-built wire (used when loading saved circuits)."""
        if wire.start_component_id == wire.end_component_id:
            raise SelfConnectionError(wire.start_component_id)
        self.wires[wire.wire_id] = wire

    def remove_wire(self, wire_id: str) -> bool:
        """Remove a wire by ID. Returns False if it did not exist."""
        return self.wires.pop(wire_id, None) is not None

    def get_wire(self, wire_id: str) -> Optional[WireData]:
        return self.wires.get(wire_id)

    def wires_for_component(self, component_id: str) -> list[WireData]:
        return [wire for wire in self.wires.values() if wire.connects_component(component_id)]

    # --- Circuit operations ---

    def clear(self) -> None:
        """Clear all circuit data."""
        self.components.clear()
        self.wires.clear()
        self.component_counter.clear()
        self.wire_counter = 0

    # --- Serialization ---

    def to_dict(self) -> dict:
        """Serialize circuit to dictionary (editable state only)."""
        return {
            "components": [c.to_dict() for c in self.components.values()],
            "wires": [w.to_dict() for w in self.wires.values()],
            "counters": self.component_counter.copy(),
            "wire_counter": self.wire_counter,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "TopologyModel":
        """
        Deserialize circuit from dictionary.

        Counters are restored so that new IDs never collide with loaded ones.
        """
        model = cls()
        model.component_counter = dict(data.get("counters", {}))
        model.wire_counter = int(data.get("wire_counter", 0))

        for comp_data in data.get("components", []):
            model.insert_component(ComponentData.from_dict(comp_data))

        for wire_data in data.get("wires", []):
            model.insert_wire(WireData.from_dict(wire_data))

        model._sync_counters()
        return model

    def _sync_counters(self) -> None:
        """Raise counters to cover IDs already present (files written by hand may omit them)."""
        for component_id, component in self.components.items():
            prefix = ID_PREFIXES[component.kind]
            suffix = component_id[len(prefix):]
            if component_id.startswith(prefix) and suffix.isdigit():
                self.component_counter[prefix] = max(self.component_counter.get(prefix, 0), int(suffix))
        for wire_id in self.wires:
            suffix = wire_id[len(WIRE_PREFIX):]
            if wire_id.startswith(WIRE_PREFIX) and suffix.isdigit():
                self.wire_counter = max(self.wire_counter, int(suffix))
