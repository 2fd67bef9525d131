"""Tests for ComponentData and WireData."""

import pytest
from models.component import (
    DEFAULT_PROPERTIES,
    ID_PREFIXES,
    ComponentData,
    ComponentKind,
    Terminal,
)
from models.wire import WireData


class TestComponentDefaults:
    @pytest.mark.parametrize("kind", list(ComponentKind))
    def test_every_kind_has_defaults_and_prefix(self, kind):
        assert kind in DEFAULT_PROPERTIES
        assert kind in ID_PREFIXES

    def test_resistor_defaults(self):
        comp = ComponentData.create("R1", "resistor", (10.0, 20.0))
        assert comp.kind is ComponentKind.RESISTOR
        assert comp.resistance == 100.0
        assert comp.source_voltage == 0.0
        assert comp.position == (10.0, 20.0)
        assert comp.closed is None
        assert comp.reading is None

    def test_battery_defaults(self):
        comp = ComponentData.create("B1", ComponentKind.BATTERY, (0, 0))
        assert comp.source_voltage == 9.0
        assert comp.resistance == 0.01
        assert comp.is_source

    def test_switch_starts_closed(self):
        comp = ComponentData.create("SW1", "switch", (0, 0))
        assert comp.closed is True
        assert not comp.is_open_switch
        comp.closed = False
        assert comp.is_open_switch

    def test_meters_carry_reading(self):
        vm = ComponentData.create("VM1", "voltmeter", (0, 0))
        am = ComponentData.create("AM1", "ammeter", (0, 0))
        assert vm.is_meter and am.is_meter
        assert vm.reading == 0.0
        assert am.reading == 0.0

    def test_ground_has_zero_resistance(self):
        assert ComponentData.create("GND1", "ground", (0, 0)).resistance == 0.0

    def test_unknown_kind_rejected(self):
        with pytest.raises(ValueError):
            ComponentData.create("X1", "transistor", (0, 0))


class TestComponentOutputs:
    def test_reset_outputs(self):
        comp = ComponentData.create("AM1", "ammeter", (0, 0))
        comp.current = 1.5
        comp.voltage_drop = 2.0
        comp.powered = True
        comp.reading = 1.5
        comp.reset_outputs()
        assert comp.current == 0.0
        assert comp.voltage_drop == 0.0
        assert comp.powered is False
        assert comp.reading == 0.0

    def test_reset_keeps_reading_none_for_non_meters(self):
        comp = ComponentData.create("R1", "resistor", (0, 0))
        comp.reset_outputs()
        assert comp.reading is None


class TestComponentSerialization:
    def test_to_dict_contains_editable_state_only(self):
        comp = ComponentData.create("B1", "battery", (5.0, 6.0))
        comp.current = 3.0
        data = comp.to_dict()
        assert data == {
            "id": "B1",
            "kind": "battery",
            "pos": {"x": 5.0, "y": 6.0},
            "resistance": 0.01,
            "source_voltage": 9.0,
        }

    def test_from_dict_restores_switch_state(self):
        comp = ComponentData.from_dict(
            {"id": "SW2", "kind": "switch", "pos": {"x": 0, "y": 0}, "resistance": 0.0, "closed": False}
        )
        assert comp.closed is False
        assert comp.is_open_switch

    def test_from_dict_fills_missing_defaults(self):
        comp = ComponentData.from_dict({"id": "LED1", "kind": "led", "pos": {"x": 0, "y": 0}})
        assert comp.resistance == 50.0
        assert comp.forward_drop_voltage == 2.0

    def test_from_dict_forces_ground_to_zero(self):
        comp = ComponentData.from_dict({"id": "GND1", "kind": "ground", "pos": {"x": 0, "y": 0}, "resistance": 5})
        assert comp.resistance == 0.0


class TestWireData:
    def test_terminals_are_coerced(self):
        wire = WireData("W1", "B1", "right", "R1", "left")
        assert wire.start_terminal is Terminal.RIGHT
        assert wire.end_terminal is Terminal.LEFT

    def test_unknown_terminal_rejected(self):
        with pytest.raises(ValueError):
            WireData("W1", "B1", "middle", "R1", "left")

    def test_connects_and_other_end(self):
        wire = WireData("W1", "B1", "right", "R1", "left")
        assert wire.connects_component("B1")
        assert wire.connects_terminal("R1", "left")
        assert not wire.connects_terminal("R1", "right")
        assert wire.other_end("B1") == "R1"
        assert wire.other_end("R1") == "B1"
        assert wire.other_end("X9") is None

    def test_dict_round_trip(self):
        wire = WireData("W3", "SW1", "top", "LAMP1", "bottom")
        restored = WireData.from_dict(wire.to_dict())
        assert restored == wire
