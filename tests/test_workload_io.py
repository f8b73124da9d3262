from pathlib import Path

import pytest

from schedsim.workload_io import load_workload


def test_load_json(tmp_path: Path):
    p = tmp_path / "w.json"
    p.write_text('[{"pid":"A","arrival_time":0,"burst_time":3},'
                 '{"arrival_time":1,"burst_time":2}]')
    assert load_workload(p) == [(0, 3), (1, 2)]


def test_load_csv(tmp_path: Path):
    p = tmp_path / "w.csv"
    p.write_text("arrival_time,burst_time\n0,3\n4,1\n")
    assert load_workload(p) == [(0, 3), (4, 1)]


def test_rejects_bad_entries(tmp_path: Path):
    p = tmp_path / "w.csv"
    p.write_text("arrival_time,burst_time\n0,0\n")
    with pytest.raises(ValueError, match="Burst time"):
        load_workload(p)

    p = tmp_path / "w.json"
    p.write_text('[{"arrival_time":"soon","burst_time":2}]')
    with pytest.raises(ValueError, match="Invalid process entry"):
        load_workload(p)

    p.write_text('{"arrival_time":0,"burst_time":2}')
    with pytest.raises(ValueError, match="must be a list"):
        load_workload(p)


def test_rejects_unknown_suffix(tmp_path: Path):
    p = tmp_path / "w.yaml"
    p.write_text("")
    with pytest.raises(ValueError, match="Unsupported workload format"):
        load_workload(p)
