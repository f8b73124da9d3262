from __future__ import annotations

import csv
import json
from pathlib import Path
from typing import List, Tuple

Definition = Tuple[int, int]


def load_workload(path: str | Path) -> List[Definition]:
    """
    Load (arrival_time, burst_time) definitions from a JSON or CSV file.
    Process ids are assigned by the simulator, so any id column is ignored.
    """
    path = Path(path)
    suffix = path.suffix.lower()

    if suffix == ".json":
        return _load_json(path)
    if suffix == ".csv":
        return _load_csv(path)

    raise ValueError(f"Unsupported workload format: {suffix} (use .json or .csv)")


def _load_json(path: Path) -> List[Definition]:
    with path.open("r", encoding="utf-8") as f:
        raw = json.load(f)

    if not isinstance(raw, list):
        raise ValueError("JSON workload must be a list of process objects")

    return [_definition_from_mapping(entry) for entry in raw]


def _load_csv(path: Path) -> List[Definition]:
    definitions: List[Definition] = []
    with path.open("r", encoding="utf-8", newline="") as f:
        reader = csv.DictReader(f)
        for row in reader:
            definitions.append(_definition_from_mapping(row))
    return definitions


def _definition_from_mapping(mapping) -> Definition:
    try:
        arrival_time = int(mapping["arrival_time"])
        burst_time = int(mapping["burst_time"])
    except (KeyError, TypeError, ValueError) as exc:
        raise ValueError(f"Invalid process entry: {mapping!r}") from exc

    if arrival_time < 0:
        raise ValueError(f"Arrival time must be non-negative: {mapping!r}")
    if burst_time <= 0:
        raise ValueError(f"Burst time must be positive: {mapping!r}")

    return arrival_time, burst_time
