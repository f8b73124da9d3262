# Simulator defaults shared by the engine boundary and the CLI.

from __future__ import annotations

from typing import Optional, Tuple

DEFAULT_QUANTUM = 2         # Round Robin time slice when none (or an invalid one) is given
DEFAULT_STEP_DELAY = 0.06   # seconds between live ticks in `schedsim run`
ID_PREFIX = "Process"       # ids are Process1, Process2, ...

# Teaching workload: (arrival, burst) pairs covering idle-free overlap,
# a short job arriving late and a long job in the middle.
SAMPLE_WORKLOAD: Tuple[Tuple[int, int], ...] = (
    (0, 5),
    (1, 3),
    (2, 8),
    (3, 2),
    (5, 4),
    (6, 6),
)


def coerce_quantum(value: Optional[object], default: int = DEFAULT_QUANTUM) -> int:
    """
    Turn user input into a usable quantum: anything that is not a positive
    integer falls back to the default.
    """
    if value is None:
        return default
    try:
        quantum = int(str(value).strip())
    except ValueError:
        return default
    return quantum if quantum > 0 else default
