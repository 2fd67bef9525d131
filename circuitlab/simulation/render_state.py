"""
simulation/render_state.py

Maps solved component and wire state onto the attributes the rendering
layer draws (glow, switch icon, meter readout, value label). Nothing here
mutates the circuit.
"""

from dataclasses import dataclass
from typing import Optional

from GUI.format_utils import format_value
from models.component import ComponentKind

# Current at which an LED reaches full brightness
LED_REFERENCE_CURRENT = 0.02

# Wire stroke styles
ACTIVE_WIRE_STROKE = "#4caf50"
IDLE_WIRE_STROKE = "#2c3e50"
ACTIVE_WIRE_WIDTH = 4
IDLE_WIRE_WIDTH = 3


@dataclass(frozen=True)
class RenderAttributes:
    """Everything the canvas needs to draw one component."""

    component_id: str
    kind: ComponentKind
    powered: bool
    color: str
    glow: float = 0.0
    switch_state: Optional[str] = None  # "open" / "closed" for switches
    reading: Optional[float] = None
    reading_text: Optional[str] = None
    value_label: Optional[str] = None


@dataclass(frozen=True)
class WireRenderAttributes:
    wire_id: str
    active: bool
    stroke: str
    stroke_width: int


def project(component) -> RenderAttributes:
    """Translate a solved component into render attributes."""
    kind = component.kind
    glow = 0.0
    switch_state = None
    reading = None
    reading_text = None
    value_label = None

    if kind is ComponentKind.BULB:
        glow = bulb_glow(component)
    elif kind is ComponentKind.LED:
        glow = led_glow(component)
    elif kind is ComponentKind.SWITCH:
        switch_state = "closed" if component.closed else "open"
    elif kind is ComponentKind.AMMETER:
        reading = component.reading or 0.0
        reading_text = f"{reading:.2f}A"
    elif kind is ComponentKind.VOLTMETER:
        reading = component.reading or 0.0
        reading_text = f"{reading:.1f}V"
    elif kind is ComponentKind.RESISTOR:
        value_label = format_value(component.resistance, "Ω")
    elif kind is ComponentKind.BATTERY:
        value_label = format_value(component.source_voltage, "V")
    elif kind in (
        ComponentKind.CAPACITOR,
        ComponentKind.INDUCTOR,
        ComponentKind.GROUND,
        ComponentKind.DIODE,
    ):
        pass
    else:
        raise ValueError(f"Unhandled component kind: {kind!r}")

    return RenderAttributes(
        component_id=component.component_id,
        kind=kind,
        powered=component.powered,
        color=component.get_color(),
        glow=glow,
        switch_state=switch_state,
        reading=reading,
        reading_text=reading_text,
        value_label=value_label,
    )


def bulb_glow(component) -> float:
    """Brightness in [0, 1]: the voltage drop relative to the drop at rated current."""
    if not component.powered:
        return 0.0
    full_drop = component.resistance * (component.rated_current or 0.0)
    if full_drop <= 0:
        return 1.0
    return max(0.0, min(component.voltage_drop / full_drop, 1.0))


def led_glow(component) -> float:
    if not component.powered:
        return 0.0
    return max(0.0, min(component.current / LED_REFERENCE_CURRENT, 1.0))


def project_wire(wire, solution=None) -> WireRenderAttributes:
    """Highlight a wire when a conducting loop runs through it."""
    active = solution is not None and solution.is_edge_active(wire.start_component_id, wire.end_component_id)
    return WireRenderAttributes(
        wire_id=wire.wire_id,
        active=active,
        stroke=ACTIVE_WIRE_STROKE if active else IDLE_WIRE_STROKE,
        stroke_width=ACTIVE_WIRE_WIDTH if active else IDLE_WIRE_WIDTH,
    )
