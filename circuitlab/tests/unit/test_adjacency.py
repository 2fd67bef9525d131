"""Tests for simulation.adjacency."""

from models.wire import WireData
from simulation.adjacency import build_adjacency


class TestBuildAdjacency:
    def test_every_component_has_entry(self, model):
        model.add_component("battery", (0, 0))
        model.add_component("resistor", (0, 0))
        adjacency = build_adjacency(model.components, model.wires.values())
        assert adjacency == {"B1": [], "R1": []}

    def test_one_entry_per_wire_per_direction(self, battery_resistor):
        adjacency = build_adjacency(battery_resistor.components, battery_resistor.wires.values())
        assert adjacency["B1"] == ["R1", "R1"]
        assert adjacency["R1"] == ["B1", "B1"]

    def test_open_switch_breaks_edges(self, battery_switch_bulb):
        battery_switch_bulb.update_component("SW1", {"closed": False})
        adjacency = build_adjacency(battery_switch_bulb.components, battery_switch_bulb.wires.values())
        assert adjacency["SW1"] == []
        assert "SW1" not in adjacency["B1"]
        assert adjacency["LAMP1"] == ["B1"]

    def test_closed_switch_conducts(self, battery_switch_bulb):
        adjacency = build_adjacency(battery_switch_bulb.components, battery_switch_bulb.wires.values())
        assert sorted(adjacency["SW1"]) == ["B1", "LAMP1"]

    def test_wire_with_missing_endpoint_dropped(self, battery_resistor):
        wires = list(battery_resistor.wires.values()) + [WireData("W9", "R1", "top", "GHOST", "left")]
        adjacency = build_adjacency(battery_resistor.components, wires)
        assert "GHOST" not in adjacency
        assert adjacency["R1"] == ["B1", "B1"]

    def test_symmetric(self, battery_switch_bulb):
        adjacency = build_adjacency(battery_switch_bulb.components, battery_switch_bulb.wires.values())
        for node, neighbours in adjacency.items():
            for neighbour in neighbours:
                assert adjacency[neighbour].count(node) == neighbours.count(neighbour)
