from collections import deque

from schedsim.engine import TickEngine
from schedsim.models import Algorithm, Process
from schedsim.policies import select_fcfs, select_round_robin, select_sjf


def _procs(*definitions):
    return [
        Process(f"P{i}", arrival_time=arrival, burst_time=burst, creation_order=i)
        for i, (arrival, burst) in enumerate(definitions, start=1)
    ]


def _run(algorithm, *definitions, quantum=2):
    engine = TickEngine(_procs(*definitions), algorithm=algorithm, quantum=quantum)
    engine.run_to_completion()
    return engine


def test_fcfs_scenario():
    engine = _run(Algorithm.FCFS, (0, 5), (1, 3))
    assert engine.timeline == ("P1",) * 5 + ("P2",) * 3

    p1, p2 = engine.get("P1"), engine.get("P2")
    assert (p1.start_time, p1.finish_time) == (0, 5)
    assert p1.waiting_time == 0
    assert p1.turnaround_time == 5
    assert (p2.start_time, p2.finish_time) == (5, 8)
    assert p2.turnaround_time == 7
    assert p2.waiting_time == 4


def test_fcfs_same_arrival_uses_creation_order():
    engine = _run(Algorithm.FCFS, (0, 4), (0, 1), (0, 2))
    assert engine.timeline == ("P1",) * 4 + ("P2",) + ("P3",) * 2


def test_sjf_is_non_preemptive():
    engine = _run(Algorithm.SJF, (0, 5), (1, 3), (2, 1))
    assert engine.timeline == ("P1",) * 5 + ("P3",) + ("P2",) * 3
    assert engine.get("P1").finish_time == 5
    assert engine.get("P3").start_time == 5
    assert engine.get("P2").finish_time == 9


def test_sjf_tie_breaks_on_arrival_then_creation():
    # P2 and P3 share a burst; P3 arrived earlier so it goes first
    engine = _run(Algorithm.SJF, (0, 4), (2, 2), (1, 2))
    assert engine.timeline == ("P1",) * 4 + ("P3",) * 2 + ("P2",) * 2

    # identical burst and arrival: creation order decides, not the id text
    procs = [
        Process("Z", arrival_time=0, burst_time=3, creation_order=1),
        Process("B", arrival_time=1, burst_time=2, creation_order=2),
        Process("A", arrival_time=1, burst_time=2, creation_order=3),
    ]
    engine = TickEngine(procs, algorithm=Algorithm.SJF)
    engine.run_to_completion()
    assert engine.timeline == ("Z", "Z", "Z", "B", "B", "A", "A")


def test_round_robin_scenario():
    engine = _run(Algorithm.ROUND_ROBIN, (0, 4), (1, 3), quantum=2)
    assert engine.timeline == ("P1", "P1", "P2", "P2", "P1", "P1", "P2")
    assert engine.get("P1").finish_time == 6
    assert engine.get("P2").finish_time == 7


def test_round_robin_requeues_preempted_at_tail():
    engine = TickEngine(_procs((0, 4), (1, 3)), algorithm=Algorithm.ROUND_ROBIN, quantum=2)
    engine.advance()
    engine.advance()
    # P1 used its quantum on the second tick; P2 arrived earlier in the queue
    assert engine.running is None
    assert engine.ready_pids == ["P2", "P1"]


def test_round_robin_preempted_process_precedes_next_arrival():
    engine = _run(Algorithm.ROUND_ROBIN, (0, 3), (1, 2), quantum=1)
    assert engine.timeline == ("P1", "P1", "P2", "P1", "P2")


def test_round_robin_slice_never_exceeds_quantum():
    quantum = 2
    engine = TickEngine(
        _procs((0, 5), (1, 3), (2, 8), (3, 2), (5, 4), (6, 6)),
        algorithm=Algorithm.ROUND_ROBIN,
        quantum=quantum,
    )
    while engine.advance():
        assert engine.running is None or engine.running.slice_used < quantum


def test_idle_ticks_until_first_arrival():
    engine = _run(Algorithm.FCFS, (2, 2))
    assert engine.timeline == (None, None, "P1", "P1")
    assert engine.get("P1").start_time == 2
    assert engine.get("P1").finish_time == 4


def test_arrival_at_completion_tick_is_visible():
    # P2 arrives exactly when P1 finishes; no idle tick in between
    engine = _run(Algorithm.FCFS, (0, 2), (2, 1))
    assert engine.timeline == ("P1", "P1", "P2")


def test_advance_without_processes_is_noop():
    engine = TickEngine()
    assert engine.advance() is False
    assert engine.current_time == 0
    assert engine.timeline == ()
    assert engine.run_to_completion() == 0


def test_advance_after_completion_is_noop():
    engine = _run(Algorithm.FCFS, (0, 2))
    assert engine.is_complete
    before = (engine.current_time, engine.timeline)
    assert engine.advance() is False
    assert (engine.current_time, engine.timeline) == before


def test_reset_restores_runtime_state():
    engine = _run(Algorithm.ROUND_ROBIN, (0, 4), (1, 3))
    engine.reset()
    assert engine.current_time == 0
    assert engine.timeline == ()
    assert engine.running is None
    assert engine.ready_pids == []
    for p in engine.processes:
        assert p.remaining_time == p.burst_time
        assert (p.start_time, p.finish_time) == (-1, -1)
        assert not p.enqueued and not p.completed


def test_completed_processes_satisfy_time_identities():
    definitions = [(0, 5), (1, 3), (2, 8), (3, 2), (5, 4), (6, 6)]
    for algorithm in Algorithm:
        engine = _run(algorithm, *definitions, quantum=3)
        assert len(engine.timeline) == sum(b for _, b in definitions)
        for p in engine.processes:
            assert p.completed and p.remaining_time == 0
            assert p.turnaround_time == p.finish_time - p.arrival_time
            assert p.waiting_time == p.turnaround_time - p.burst_time
            assert p.waiting_time >= 0
            assert engine.timeline.count(p.pid) == p.burst_time


def test_remove_running_process_frees_cpu():
    engine = TickEngine(_procs((0, 3), (0, 2)), algorithm=Algorithm.FCFS)
    engine.advance()
    assert engine.running.pid == "P1"
    engine.remove_process("P1")
    assert engine.running is None
    engine.run_to_completion()
    assert engine.timeline == ("P1", "P2", "P2")


def test_policies_pick_from_ready_queue():
    p1, p2, p3 = _procs((0, 5), (1, 2), (1, 2))

    ready = deque([p1, p2, p3])
    assert select_fcfs(ready) is p1
    assert list(ready) == [p2, p3]

    ready = deque([p1, p3, p2])
    assert select_sjf(ready) is p2
    assert list(ready) == [p1, p3]

    ready = deque([p3, p1])
    assert select_round_robin(ready) is p3

    assert select_fcfs(deque()) is None
    assert select_sjf(deque()) is None
    assert select_round_robin(deque()) is None
