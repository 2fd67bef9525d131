"""
ComponentData - Pure Python data model for circuit components.

This module contains no Qt dependencies. All positions are represented as
tuples (x, y) rather than QPointF.

Component kinds form a closed set (ComponentKind). Every component has up
to four named terminals (top, bottom, left, right) where wires attach.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

# Current (amps) above which a component counts as powered
POWERED_EPSILON = 1e-6


class ComponentKind(str, Enum):
    RESISTOR = "resistor"
    CAPACITOR = "capacitor"
    INDUCTOR = "inductor"
    BATTERY = "battery"
    GROUND = "ground"
    DIODE = "diode"
    LED = "led"
    SWITCH = "switch"
    BULB = "bulb"
    VOLTMETER = "voltmeter"
    AMMETER = "ammeter"


class Terminal(str, Enum):
    TOP = "top"
    BOTTOM = "bottom"
    LEFT = "left"
    RIGHT = "right"


METER_KINDS = frozenset({ComponentKind.VOLTMETER, ComponentKind.AMMETER})
SEMICONDUCTOR_KINDS = frozenset({ComponentKind.DIODE, ComponentKind.LED})

# Prefixes for generated component IDs (B1, R1, SW1, ...)
ID_PREFIXES = {
    ComponentKind.RESISTOR: "R",
    ComponentKind.CAPACITOR: "C",
    ComponentKind.INDUCTOR: "L",
    ComponentKind.BATTERY: "B",
    ComponentKind.GROUND: "GND",
    ComponentKind.DIODE: "D",
    ComponentKind.LED: "LED",
    ComponentKind.SWITCH: "SW",
    ComponentKind.BULB: "LAMP",
    ComponentKind.VOLTMETER: "VM",
    ComponentKind.AMMETER: "AM",
}

# Default electrical properties per kind.
# Capacitors and inductors are lumped as fixed nominal resistances.
# Meter resistances are kept for display only; the solver skips them.
DEFAULT_PROPERTIES = {
    ComponentKind.RESISTOR: {"resistance": 100.0},
    ComponentKind.CAPACITOR: {"resistance": 1000.0},
    ComponentKind.INDUCTOR: {"resistance": 1.0},
    ComponentKind.BATTERY: {"resistance": 0.01, "source_voltage": 9.0},
    ComponentKind.GROUND: {"resistance": 0.0},
    ComponentKind.DIODE: {"resistance": 1.0, "forward_drop_voltage": 0.7},
    ComponentKind.LED: {"resistance": 50.0, "forward_drop_voltage": 2.0},
    ComponentKind.SWITCH: {"resistance": 0.0, "closed": True},
    ComponentKind.BULB: {"resistance": 10.0, "rated_current": 0.25},
    ComponentKind.VOLTMETER: {"resistance": 1e6, "reading": 0.0},
    ComponentKind.AMMETER: {"resistance": 0.01, "reading": 0.0},
}

# Component colors (hex strings)
COMPONENT_COLORS = {
    ComponentKind.RESISTOR: "#2196F3",
    ComponentKind.CAPACITOR: "#4CAF50",
    ComponentKind.INDUCTOR: "#FF9800",
    ComponentKind.BATTERY: "#F44336",
    ComponentKind.GROUND: "#000000",
    ComponentKind.DIODE: "#607D8B",
    ComponentKind.LED: "#E74C3C",
    ComponentKind.SWITCH: "#795548",
    ComponentKind.BULB: "#FFC107",
    ComponentKind.VOLTMETER: "#2C3E50",
    ComponentKind.AMMETER: "#2C3E50",
}

# Fields a user may change after placement, and the kinds they apply to
EDITABLE_FIELDS = {
    "resistance": frozenset(k for k in ComponentKind if k is not ComponentKind.GROUND),
    "source_voltage": frozenset({ComponentKind.BATTERY}),
    "forward_drop_voltage": SEMICONDUCTOR_KINDS,
    "rated_current": frozenset({ComponentKind.BULB}),
}


@dataclass
class ComponentData:
    """
    Pure Python data class representing a circuit component.

    Electrical inputs (resistance, source_voltage, kind-specific extras) are
    edited by the user. current, voltage_drop, powered and reading are solver
    outputs and are reset before every recompute.
    """

    component_id: str
    kind: ComponentKind
    position: tuple[float, float]  # (x, y) in scene coordinates
    resistance: float = 0.0
    source_voltage: float = 0.0

    # Solver outputs
    current: float = 0.0
    voltage_drop: float = 0.0
    powered: bool = False

    # Kind-specific extras (None when the kind does not carry them)
    closed: Optional[bool] = None
    forward_drop_voltage: Optional[float] = None
    rated_current: Optional[float] = None
    reading: Optional[float] = None

    def __post_init__(self):
        self.kind = ComponentKind(self.kind)

    @classmethod
    def create(cls, component_id: str, kind, position: tuple[float, float]) -> "ComponentData":
        """Build a component of the given kind with its default properties."""
        kind = ComponentKind(kind)
        return cls(component_id=component_id, kind=kind, position=position, **DEFAULT_PROPERTIES[kind])

    @property
    def is_meter(self) -> bool:
        return self.kind in METER_KINDS

    @property
    def is_source(self) -> bool:
        return self.kind is ComponentKind.BATTERY

    @property
    def is_open_switch(self) -> bool:
        """True for a switch whose contact is open (an infinite resistance when solving)."""
        return self.kind is ComponentKind.SWITCH and not self.closed

    def reset_outputs(self) -> None:
        """Clear everything the solver computed on a previous pass."""
        self.current = 0.0
        self.voltage_drop = 0.0
        self.powered = False
        if self.is_meter:
            self.reading = 0.0

    def get_color(self) -> str:
        return COMPONENT_COLORS[self.kind]

    def to_dict(self) -> dict:
        """
        Serialize component to dictionary.

        Only user-editable state is written; solver outputs are recomputed on load.
        """
        data = {
            "id": self.component_id,
            "kind": self.kind.value,
            "pos": {"x": self.position[0], "y": self.position[1]},
            "resistance": self.resistance,
        }
        if self.kind is ComponentKind.BATTERY:
            data["source_voltage"] = self.source_voltage
        if self.closed is not None:
            data["closed"] = self.closed
        if self.forward_drop_voltage is not None:
            data["forward_drop_voltage"] = self.forward_drop_voltage
        if self.rated_current is not None:
            data["rated_current"] = self.rated_current
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "ComponentData":
        """
        Deserialize component from dictionary.

        Missing properties fall back to the defaults for the kind.
        """
        component = cls.create(data["id"], data["kind"], (data["pos"]["x"], data["pos"]["y"]))
        for key in ("resistance", "source_voltage", "forward_drop_voltage", "rated_current"):
            if key in data:
                setattr(component, key, float(data[key]))
        if "closed" in data and component.kind is ComponentKind.SWITCH:
            component.closed = bool(data["closed"])
        if component.kind is ComponentKind.GROUND:
            component.resistance = 0.0
        return component

    def __repr__(self) -> str:
        return (
            f"ComponentData(id={self.component_id!r}, kind={self.kind.value!r}, "
            f"R={self.resistance}, I={self.current:.4g}, pos={self.position})"
        )
