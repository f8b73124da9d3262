import json
from pathlib import Path

import pytest

from schedsim.cli import main
from schedsim.config import DEFAULT_QUANTUM, coerce_quantum
from schedsim.gantt import render_gantt
from schedsim.metrics import coalesce_timeline
from schedsim.models import Algorithm


@pytest.fixture(autouse=True)
def wide_console(monkeypatch):
    # keep rich from wrapping table cells in captured output
    monkeypatch.setenv("COLUMNS", "200")


def test_coerce_quantum():
    assert coerce_quantum("3") == 3
    assert coerce_quantum(" 4 ") == 4
    assert coerce_quantum("0") == DEFAULT_QUANTUM
    assert coerce_quantum("-1") == DEFAULT_QUANTUM
    assert coerce_quantum("abc") == DEFAULT_QUANTUM
    assert coerce_quantum(None) == DEFAULT_QUANTUM


def test_algorithm_names():
    assert Algorithm.from_name("fcfs") is Algorithm.FCFS
    assert Algorithm.from_name("SJF") is Algorithm.SJF
    assert Algorithm.from_name("round-robin") is Algorithm.ROUND_ROBIN
    assert Algorithm.from_name("First-Come") is Algorithm.FCFS
    assert Algorithm.from_name("Shortest Job First") is Algorithm.SJF
    assert Algorithm.from_name(Algorithm.SJF) is Algorithm.SJF


def test_render_gantt_marks_idle():
    text = render_gantt(coalesce_timeline([None, "P1", "P1", "P1"]))
    assert text.startswith("Gantt Chart:")
    assert "..." in text
    assert "P1" in text
    assert render_gantt([]) == "(no execution)"


def test_preview_command_with_sample(capsys):
    assert main(["preview", "-a", "rr", "-q", "0"]) == 0
    out = capsys.readouterr().out
    assert "Round Robin" in out
    assert f"Quantum: {DEFAULT_QUANTUM}" in out
    assert "Process6" in out


def test_run_command_with_workload(tmp_path: Path, capsys):
    p = tmp_path / "w.json"
    p.write_text(json.dumps([{"arrival_time": 1, "burst_time": 2}]))
    assert main(["run", "-a", "fcfs", "-w", str(p), "--step-delay", "0"]) == 0
    out = capsys.readouterr().out
    assert "idle" in out
    assert "Process1" in out
    assert "Avg waiting" in out


def test_compare_command(capsys):
    assert main(["compare"]) == 0
    out = capsys.readouterr().out
    assert "First-Come-First-Served" in out
    assert "Shortest Job First" in out


def test_invalid_input_returns_error(tmp_path: Path, capsys):
    assert main(["preview", "-a", "lottery"]) == 1
    assert "Unknown algorithm" in capsys.readouterr().out

    assert main(["preview", "-w", str(tmp_path / "missing.json")]) == 1


def test_plain_gantt_output(tmp_path: Path, capsys):
    p = tmp_path / "w.json"
    p.write_text(json.dumps([{"arrival_time": 1, "burst_time": 3}]))
    assert main(["preview", "-w", str(p), "--plain"]) == 0
    out = capsys.readouterr().out
    assert "Gantt Chart:" in out
    assert "|...===|" in out
