"""Tests for the CLI batch operations (circuitlab/cli.py)."""

import json

import pytest
from cli import build_parser, load_circuit, main, try_load_circuit
from models.topology import TopologyModel


@pytest.fixture
def series_file(tmp_path):
    """Create a valid battery + resistor circuit file."""
    circuit = {
        "components": [
            {"id": "B1", "kind": "battery", "pos": {"x": 0, "y": 0}, "resistance": 0.01, "source_voltage": 9.0},
            {"id": "R1", "kind": "resistor", "pos": {"x": 100, "y": 0}, "resistance": 100.0},
            {"id": "AM1", "kind": "ammeter", "pos": {"x": 200, "y": 0}, "resistance": 0.01},
        ],
        "wires": [
            {"id": "W1", "start_comp": "B1", "start_term": "right", "end_comp": "R1", "end_term": "left"},
            {"id": "W2", "start_comp": "R1", "start_term": "right", "end_comp": "AM1", "end_term": "left"},
            {"id": "W3", "start_comp": "AM1", "start_term": "right", "end_comp": "B1", "end_term": "left"},
        ],
        "counters": {"B": 1, "R": 1, "AM": 1},
    }
    filepath = tmp_path / "series.json"
    filepath.write_text(json.dumps(circuit))
    return str(filepath)


@pytest.fixture
def empty_file(tmp_path):
    filepath = tmp_path / "empty.json"
    filepath.write_text(json.dumps({"components": [], "wires": []}))
    return str(filepath)


class TestLoadCircuit:
    def test_load_valid(self, series_file):
        model = load_circuit(series_file)
        assert isinstance(model, TopologyModel)
        assert set(model.components) == {"B1", "R1", "AM1"}

    def test_missing_file_exits(self, tmp_path):
        with pytest.raises(SystemExit) as exc_info:
            load_circuit(str(tmp_path / "missing.json"))
        assert exc_info.value.code == 1

    def test_try_load_reports_bad_json(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("{")
        model, error = try_load_circuit(str(path))
        assert model is None
        assert "invalid JSON" in error

    def test_try_load_reports_bad_structure(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"components": "nope", "wires": []}))
        model, error = try_load_circuit(str(path))
        assert model is None
        assert error.startswith("invalid circuit file")


class TestSolveCommand:
    def test_text_output(self, series_file, capsys):
        assert main(["solve", series_file]) == 0
        out = capsys.readouterr().out
        assert "Loops found: 1" in out
        assert "B1 -> R1 -> AM1" in out
        assert "0.09A" in out

    def test_json_output(self, series_file, capsys):
        assert main(["solve", series_file, "--format", "json"]) == 0
        result = json.loads(capsys.readouterr().out)
        assert result["loops"] == {"B1": [["B1", "R1", "AM1"]]}
        r1 = result["components"]["R1"]
        assert r1["current"] == pytest.approx(9.0 / 100.01)
        assert r1["powered"] is True
        assert result["components"]["AM1"]["reading"] == pytest.approx(9.0 / 100.01)

    def test_output_file(self, series_file, tmp_path):
        out_path = tmp_path / "results.json"
        assert main(["solve", series_file, "--format", "json", "-o", str(out_path)]) == 0
        assert json.loads(out_path.read_text())["components"]["B1"]["powered"] is True

    def test_missing_file_exit_code(self, tmp_path):
        with pytest.raises(SystemExit) as exc_info:
            main(["solve", str(tmp_path / "missing.json")])
        assert exc_info.value.code == 1

    def test_malformed_counters_exit_code(self, series_file, capsys):
        with open(series_file, encoding="utf-8") as f:
            circuit = json.load(f)
        circuit["counters"] = 5
        with open(series_file, "w", encoding="utf-8") as f:
            json.dump(circuit, f)

        with pytest.raises(SystemExit) as exc_info:
            main(["solve", series_file])
        assert exc_info.value.code == 1
        assert "counters" in capsys.readouterr().err


class TestValidateCommand:
    def test_valid_circuit(self, series_file, capsys):
        assert main(["validate", series_file]) == 0
        assert "Circuit is valid" in capsys.readouterr().out

    def test_empty_circuit_fails(self, empty_file, capsys):
        assert main(["validate", empty_file]) == 1
        assert "no components" in capsys.readouterr().err


class TestExportCommand:
    def test_export_normalizes(self, series_file, capsys):
        assert main(["export", series_file]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["wire_counter"] == 3
        assert data["components"][2]["kind"] == "ammeter"


class TestParser:
    def test_command_required(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args([])

    def test_verbose_flag(self):
        args = build_parser().parse_args(["--verbose", "validate", "x.json"])
        assert args.verbose is True
        assert args.command == "validate"
