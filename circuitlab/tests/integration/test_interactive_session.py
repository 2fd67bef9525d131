"""Integration tests: a full editing session driven through the controllers.

Covers:
- Building a circuit with terminal clicks and watching it come alive
- Switch, edit and delete actions propagating to render state
- Save/load round-trip through FileController with recompute on load
"""

import pytest
from controllers.circuit_controller import CircuitController, InteractionState
from controllers.file_controller import FileController
from models.errors import InvalidEditError, SelfConnectionError


class EventLog:
    """Simple observer that records (event, data) tuples."""

    def __init__(self):
        self.events = []

    def __call__(self, event, data):
        self.events.append((event, data))

    def count(self, event_name):
        return sum(1 for e, _ in self.events if e == event_name)


@pytest.fixture
def session():
    ctrl = CircuitController()
    log = EventLog()
    ctrl.add_observer(log)
    return ctrl, log


def click_wire(ctrl, a, ta, b, tb):
    ctrl.begin_or_complete_wire(a, ta)
    return ctrl.begin_or_complete_wire(b, tb)


class TestLampCircuit:
    def test_build_toggle_and_edit(self, session):
        ctrl, log = session
        battery = ctrl.place_component("battery", (0, 0))
        switch = ctrl.place_component("switch", (100, 0))
        lamp = ctrl.place_component("bulb", (200, 0))

        click_wire(ctrl, battery, "right", switch, "left")
        click_wire(ctrl, switch, "right", lamp, "left")
        assert not ctrl.get_render_state(lamp).powered

        click_wire(ctrl, lamp, "right", battery, "left")
        state = ctrl.get_render_state(lamp)
        assert state.powered
        assert state.glow == 1.0
        assert all(ctrl.get_wire_render_state(w).active for w in ctrl.model.wires)

        ctrl.toggle_switch(switch)
        state = ctrl.get_render_state(lamp)
        assert not state.powered
        assert state.glow == 0.0
        assert ctrl.get_render_state(switch).switch_state == "open"
        assert not any(ctrl.get_wire_render_state(w).active for w in ctrl.model.wires)

        ctrl.toggle_switch(switch)
        # A 1k filament stays far below its rated drop
        ctrl.edit_component(lamp, "resistance", "1k")
        lamp_data = ctrl.model.components[lamp]
        assert lamp_data.current == pytest.approx(9.0 / 1000.01)
        assert 0 < ctrl.get_render_state(lamp).glow <= 1.0

        assert log.count("circuit_solved") == 3 + 3 + 2 + 1

    def test_rejections_keep_state(self, session):
        ctrl, log = session
        battery = ctrl.place_component("battery", (0, 0))
        resistor = ctrl.place_component("resistor", (100, 0))
        click_wire(ctrl, battery, "right", resistor, "left")
        click_wire(ctrl, resistor, "right", battery, "left")
        current = ctrl.model.components[resistor].current

        with pytest.raises(InvalidEditError):
            ctrl.edit_component(resistor, "resistance", "-100")
        ctrl.begin_or_complete_wire(resistor, "top")
        with pytest.raises(SelfConnectionError):
            ctrl.begin_or_complete_wire(resistor, "bottom")

        assert ctrl.state is InteractionState.IDLE
        assert ctrl.model.components[resistor].current == current
        assert log.count("edit_rejected") == 1
        assert log.count("wire_rejected") == 1

    def test_delete_brings_circuit_to_rest(self, session):
        ctrl, log = session
        battery = ctrl.place_component("battery", (0, 0))
        resistor = ctrl.place_component("resistor", (100, 0))
        meter = ctrl.place_component("ammeter", (200, 0))
        click_wire(ctrl, battery, "right", resistor, "left")
        click_wire(ctrl, resistor, "right", meter, "left")
        click_wire(ctrl, meter, "right", battery, "left")
        assert ctrl.get_render_state(meter).reading_text == "0.09A"

        ctrl.delete_component(resistor)
        assert ctrl.get_render_state(meter).reading_text == "0.00A"
        assert not ctrl.get_render_state(battery).powered
        assert set(ctrl.model.wires) == {"W3"}


class TestSaveLoadRoundTrip:
    def test_round_trip_recomputes(self, session, tmp_path):
        ctrl, log = session
        battery = ctrl.place_component("battery", (0, 0))
        led = ctrl.place_component("led", (100, 0))
        click_wire(ctrl, battery, "right", led, "left")
        click_wire(ctrl, led, "right", battery, "left")
        ctrl.edit_component(battery, "source_voltage", "1.5")
        assert ctrl.model.components[led].current == pytest.approx(1.5 / 50.01)

        files = FileController(circuit_ctrl=ctrl)
        path = tmp_path / "led.json"
        files.save_circuit(path)

        other = CircuitController()
        FileController(circuit_ctrl=other).load_circuit(path)
        assert other.model.components["B1"].source_voltage == 1.5
        assert other.last_solution.loops == {"B1": [["B1", "LED1"]]}
        assert other.model.components["LED1"].current == pytest.approx(1.5 / 50.01)
        assert other.place_component("led", (0, 0)) == "LED2"
        assert other.place_component("resistor", (0, 0)) == "R1"
