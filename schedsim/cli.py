from __future__ import annotations

import argparse
import logging
import time
from typing import List, Optional

from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from .config import DEFAULT_QUANTUM, DEFAULT_STEP_DELAY, coerce_quantum
from .gantt import build_rich_gantt, render_gantt
from .models import Algorithm, ScheduleResult
from .simulator import Simulator
from .workload_io import load_workload

logger = logging.getLogger(__name__)

ALGORITHM_CHOICES = ["fcfs", "sjf", "rr"]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="schedsim",
        description="Tick-driven CPU scheduling simulator (FCFS, SJF, Round Robin).",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log scheduling events (arrivals, dispatches, preemptions, completions).",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    def add_plain_arg(sub: argparse.ArgumentParser) -> None:
        sub.add_argument(
            "--plain",
            action="store_true",
            help="Draw the Gantt chart as plain text instead of colored blocks.",
        )

    def add_workload_args(sub: argparse.ArgumentParser) -> None:
        sub.add_argument(
            "--workload",
            "-w",
            default=None,
            help="Path to JSON or CSV workload file (default: built-in sample workload).",
        )
        sub.add_argument(
            "--quantum",
            "-q",
            default=str(DEFAULT_QUANTUM),
            help=f"Round Robin time quantum; invalid values fall back to {DEFAULT_QUANTUM}.",
        )

    run_parser = subparsers.add_parser("run", help="Run a live, tick-by-tick simulation.")
    run_parser.add_argument(
        "--algorithm",
        "-a",
        default="fcfs",
        help="Algorithm to use (fcfs, sjf, rr).",
    )
    add_workload_args(run_parser)
    add_plain_arg(run_parser)
    run_parser.add_argument(
        "--step-delay",
        type=float,
        default=DEFAULT_STEP_DELAY,
        help=f"Seconds to wait between ticks (default: {DEFAULT_STEP_DELAY}).",
    )

    preview_parser = subparsers.add_parser(
        "preview",
        help="Compute the full schedule instantly without running the live simulation.",
    )
    preview_parser.add_argument(
        "--algorithm",
        "-a",
        default="fcfs",
        help="Algorithm to use (fcfs, sjf, rr).",
    )
    add_workload_args(preview_parser)
    add_plain_arg(preview_parser)

    compare_parser = subparsers.add_parser(
        "compare",
        help="Preview several algorithms on the same workload and compare average metrics.",
    )
    compare_parser.add_argument(
        "--algorithms",
        "-a",
        nargs="+",
        default=list(ALGORITHM_CHOICES),
        help="Algorithms to compare (default: fcfs sjf rr).",
    )
    add_workload_args(compare_parser)

    return parser


def _configure_logging(verbose: bool, console: Console) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def _build_simulator(args: argparse.Namespace, algorithm: str) -> Simulator:
    sim = Simulator(algorithm=Algorithm.from_name(algorithm), quantum=coerce_quantum(args.quantum))
    if args.workload is None:
        sim.load_sample()
        return sim
    for arrival, burst in load_workload(args.workload):
        sim.add_process(arrival, burst)
    return sim


def _fmt(value: int) -> str:
    return "-" if value < 0 else str(value)


def _print_result(result: ScheduleResult, console: Console, plain: bool = False) -> None:
    console.print(f"[bold]Algorithm:[/bold] {result.algorithm.label}")
    if result.quantum is not None:
        console.print(f"[bold]Quantum:[/bold] {result.quantum}")

    console.print()

    if plain:
        console.print(render_gantt(result.segments), markup=False, highlight=False)
    else:
        panel, time_marks = build_rich_gantt(result.segments)
        console.print(panel)
        if time_marks:
            console.print(time_marks)

    console.print()

    headers = [
        "Process",
        "Arrival",
        "Burst",
        "Remaining",
        "Start",
        "Finish",
        "Waiting",
        "Turnaround",
    ]

    proc_table = Table(title="Per-process statistics", box=box.SIMPLE_HEAVY)
    for h in headers:
        justify = "left" if h == "Process" else "right"
        proc_table.add_column(h, justify=justify)

    for p in result.processes:
        proc_table.add_row(
            p.pid,
            str(p.arrival_time),
            str(p.burst_time),
            str(p.remaining_time),
            _fmt(p.start_time),
            _fmt(p.finish_time),
            _fmt(p.waiting_time),
            _fmt(p.turnaround_time),
        )

    console.print(proc_table)
    console.print()

    if result.system:
        sys = result.system
        sys_table = Table(title="System metrics", box=box.SIMPLE_HEAVY)
        sys_table.add_column("Metric")
        sys_table.add_column("Value", justify="right")

        if sys.avg_waiting is not None:
            sys_table.add_row("Avg waiting", f"{sys.avg_waiting:.2f}")
            sys_table.add_row("Avg turnaround", f"{sys.avg_turnaround:.2f}")
        sys_table.add_row("Makespan", str(sys.makespan))
        sys_table.add_row("Throughput (proc/time)", f"{sys.throughput:.3f}")
        sys_table.add_row("CPU utilization", f"{sys.cpu_utilization*100:.1f}%")

        console.print(sys_table)


def _run_live(sim: Simulator, delay: float, console: Console) -> None:
    """
    Drive the simulator the way a periodic timer would, one tick per delay.
    """
    if not sim.processes:
        console.print("[red]No processes to simulate.[/red]")
        return

    console.print(f"[bold]Simulating {sim.algorithm.label}[/bold]")
    console.print("[dim]Press Ctrl+C to skip animation.[/dim]")

    sim.start()
    try:
        while sim.is_running:
            t = sim.current_time
            sim.tick()
            ran = sim.timeline[-1]
            queue = ", ".join(sim.ready_queue) or "-"
            msg = f"t={t:2d}: " + (f"[green]{ran}[/green]" if ran else "[dim]idle[/dim]")
            console.print(f"{msg}  [dim]ready: {queue}[/dim]")
            time.sleep(delay)
    except KeyboardInterrupt:
        sim.pause()
        console.print("[yellow]Animation skipped.[/yellow]")
        while sim.step():
            pass

    console.print()


def _print_comparison(sim: Simulator, algorithms: List[str], console: Console) -> None:
    summary_table = Table(title="Algorithm comparison", box=box.SIMPLE_HEAVY)
    summary_table.add_column("Algorithm")
    summary_table.add_column("Quantum", justify="right")
    summary_table.add_column("Avg waiting", justify="right")
    summary_table.add_column("Avg turnaround", justify="right")
    summary_table.add_column("Makespan", justify="right")

    for name in algorithms:
        algorithm = Algorithm.from_name(name)
        sim.set_algorithm(algorithm)
        result = sim.preview()
        sys = result.system
        summary_table.add_row(
            algorithm.label,
            "" if result.quantum is None else str(result.quantum),
            "-" if sys.avg_waiting is None else f"{sys.avg_waiting:.2f}",
            "-" if sys.avg_turnaround is None else f"{sys.avg_turnaround:.2f}",
            str(sys.makespan),
        )

    console.print(summary_table)


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    console = Console()
    _configure_logging(args.verbose, console)

    try:
        if args.command == "run":
            sim = _build_simulator(args, args.algorithm)
            _run_live(sim, args.step_delay, console)
            _print_result(sim.result(), console, plain=args.plain)
            return 0

        if args.command == "preview":
            sim = _build_simulator(args, args.algorithm)
            _print_result(sim.preview(), console, plain=args.plain)
            return 0

        if args.command == "compare":
            sim = _build_simulator(args, "fcfs")
            _print_comparison(sim, args.algorithms, console)
            return 0
    except (OSError, ValueError) as exc:
        logger.debug("Command failed", exc_info=True)
        console.print(f"[red]Error: {exc}[/red]")
        return 1

    parser.error(f"Unknown command: {args.command}")
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
