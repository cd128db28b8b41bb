from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import List, Optional, Sequence

from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from .algorithms import run_algorithm
from .config import SchedulerConfig
from .errors import SchedulerError
from .gantt import build_rich_gantt
from .metrics import summarize
from .models import MultilevelResult, Process, ScheduleResult
from .multilevel import POLICY_NAMES, run_multilevel
from .workload import generate_batch, load_batch, save_batch

logger = logging.getLogger(__name__)

ALGORITHM_CHOICES = ["fcfs", "sjf", "priority", "rr", "mlq"]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sched-metrics",
        description="CPU scheduling metrics (FCFS, SJF, Priority, Round Robin, Multilevel Queue).",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log scheduling decisions at DEBUG level.")

    # Batch and tuning options shared by every subcommand.
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--workload", "-w", default=None, help="Load the batch from a JSON or CSV file.")
    common.add_argument("--count", "-n", type=int, default=10, help="Processes to generate (default: 10).")
    common.add_argument("--burst-min", type=int, default=1, help="Minimum generated burst time (default: 1).")
    common.add_argument("--burst-max", type=int, default=20, help="Maximum generated burst time (default: 20).")
    common.add_argument("--priority-min", type=int, default=1, help="Minimum generated priority (default: 1).")
    common.add_argument("--priority-max", type=int, default=3, help="Maximum generated priority (default: 3).")
    common.add_argument("--quantum", "-q", type=int, default=4, help="Round Robin time quantum (default: 4).")
    common.add_argument("--queues", type=int, default=3, help="Number of multilevel queues (default: 3).")
    common.add_argument("--seed", type=int, default=None, help="Seed for generation and queue assignment.")

    subparsers = parser.add_subparsers(dest="command", required=True)

    run_parser = subparsers.add_parser("run", parents=[common], help="Run one scheduling algorithm.")
    run_parser.add_argument(
        "--algorithm",
        "-a",
        required=True,
        choices=ALGORITHM_CHOICES,
        help="Algorithm to use (fcfs, sjf, priority, rr, mlq).",
    )

    subparsers.add_parser(
        "compare",
        parents=[common],
        help="Run every algorithm on the same batch and compare average metrics.",
    )

    gen_parser = subparsers.add_parser("generate", parents=[common], help="Write a generated batch to a file.")
    gen_parser.add_argument("--output", "-o", required=True, help="Destination .json or .csv file.")

    subparsers.add_parser("menu", parents=[common], help="Interactive menu over a generated batch.")

    return parser


def config_from_args(args: argparse.Namespace) -> SchedulerConfig:
    return SchedulerConfig(
        quantum=args.quantum,
        process_count=args.count,
        burst_range=(args.burst_min, args.burst_max),
        priority_range=(args.priority_min, args.priority_max),
        num_queues=args.queues,
        seed=args.seed,
    ).validate()


def setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(show_path=False)],
        force=True,
    )


def _new_batch(config: SchedulerConfig, rng) -> List[Process]:
    return generate_batch(config.process_count, config.burst_range, config.priority_range, rng=rng)


def _print_processes(batch: Sequence[Process], console: Console) -> None:
    table = Table(title=f"Process list ({len(batch)} processes)", box=box.SIMPLE_HEAVY)
    table.add_column("PID", justify="center")
    table.add_column("Burst", justify="right")
    table.add_column("Priority", justify="center")
    for p in batch:
        table.add_row(str(p.pid), str(p.burst_time), str(p.priority))
    console.print(table)


def _print_result(result: ScheduleResult, console: Console, gantt: bool = True) -> None:
    title = result.algorithm
    if result.quantum is not None:
        title += f" (quantum = {result.quantum})"
    console.print(f"[bold]{title}[/bold]")

    if result.is_empty:
        console.print("[dim]No processes.[/dim]")
        return

    if gantt:
        panel, time_marks = build_rich_gantt(result.timeline)
        console.print(panel)
        if time_marks:
            console.print(time_marks)

    headers = ["PID", "Burst", "Priority", "Start", "Complete", "Wait", "Turnaround"]
    proc_table = Table(title="Per-process metrics", box=box.SIMPLE_HEAVY)
    for h in headers:
        justify = "center" if h in {"PID", "Priority"} else "right"
        proc_table.add_column(h, justify=justify)

    for p in result.processes:
        proc_table.add_row(
            str(p.pid),
            str(p.burst_time),
            str(p.priority),
            str(p.start_time),
            str(p.completion_time),
            str(p.waiting_time),
            str(p.turnaround_time),
        )
    console.print(proc_table)

    summary = summarize(result)
    console.print(f"Average waiting time: {summary['avg_waiting']:.2f}")
    console.print(f"Average turnaround time: {summary['avg_turnaround']:.2f}")


def _print_multilevel(result: MultilevelResult, console: Console) -> None:
    console.print("[bold]Multilevel Queue Scheduling[/bold]")

    for q in result.queues:
        name = POLICY_NAMES[q.policy]
        console.print()
        console.rule(f"Queue {q.index}: {name}")
        if q.result is None:
            console.print(f"[dim]No processes in queue {q.index}.[/dim]")
            continue
        _print_result(q.result, console, gantt=False)
        if q.offset:
            console.print(f"Average waiting time (including earlier queues): {q.avg_waiting_time:.2f}")

    summary_table = Table(title="Multilevel queue summary", box=box.SIMPLE_HEAVY)
    summary_table.add_column("Queue", justify="center")
    summary_table.add_column("Policy")
    summary_table.add_column("Processes", justify="right")
    summary_table.add_column("Offset", justify="right")
    summary_table.add_column("Avg waiting", justify="right")
    for q in result.queues:
        summary_table.add_row(
            str(q.index),
            POLICY_NAMES[q.policy],
            str(q.size),
            str(q.offset),
            "-" if q.result is None else f"{q.avg_waiting_time:.2f}",
        )
    console.print()
    console.print(summary_table)
    console.print(f"[bold]Overall average waiting time:[/bold] {result.avg_waiting_time:.2f}")


def _run_one(name: str, batch: Sequence[Process], config: SchedulerConfig, rng, console: Console) -> None:
    if name == "mlq":
        _print_multilevel(run_multilevel(batch, config.num_queues, config.quantum, rng=rng), console)
    else:
        _print_result(run_algorithm(name, batch, quantum=config.quantum), console)


def _run_compare(batch: Sequence[Process], config: SchedulerConfig, rng, console: Console) -> None:
    summary_table = Table(title="Algorithm comparison", box=box.SIMPLE_HEAVY)
    summary_table.add_column("Algorithm")
    summary_table.add_column("Quantum", justify="right")
    summary_table.add_column("Avg waiting", justify="right")
    summary_table.add_column("Avg turnaround", justify="right")

    for alg in ("fcfs", "sjf", "priority", "rr"):
        result = run_algorithm(alg, batch, quantum=config.quantum)
        summary = summarize(result)
        summary_table.add_row(
            result.algorithm,
            "" if result.quantum is None else str(result.quantum),
            f"{summary['avg_waiting']:.2f}",
            f"{summary['avg_turnaround']:.2f}",
        )

    mlq = run_multilevel(batch, config.num_queues, config.quantum, rng=rng)
    summary_table.add_row("Multilevel Queue", str(mlq.quantum), f"{mlq.avg_waiting_time:.2f}", "")

    console.print(summary_table)


MENU = [
    ("1", "First Come First Served (FCFS)", "fcfs"),
    ("2", "Shortest Job First (SJF)", "sjf"),
    ("3", "Priority Scheduling", "priority"),
    ("4", "Round Robin (RR)", "rr"),
    ("5", "Multilevel Queue Scheduling", "mlq"),
]


def _interactive_menu(batch: List[Process], config: SchedulerConfig, rng, console: Console, input_fn=input) -> None:
    actions = {key: alg for key, _, alg in MENU}

    while True:
        console.print("\n[bold cyan]Scheduling algorithms[/bold cyan]")
        for key, label, _ in MENU:
            console.print(f"  [yellow]{key}[/yellow]. {label}")
        console.print("  [yellow]8[/yellow]. Display current processes")
        console.print("  [yellow]9[/yellow]. Generate new processes")
        console.print("  [yellow]0[/yellow]. Exit")

        try:
            choice = input_fn("Choice [0-9]: ").strip()
        except EOFError:
            return

        if choice == "0":
            console.print("Goodbye!")
            return
        if choice == "8":
            _print_processes(batch, console)
        elif choice == "9":
            batch = _new_batch(config, rng)
            console.print(f"Generated {len(batch)} new processes.")
        elif choice in actions:
            _run_one(actions[choice], batch, config, rng, console)
        else:
            console.print("[red]Invalid option! Please enter a valid choice (0-9).[/red]")


def main(argv: Optional[List[str]] = None, console: Optional[Console] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.verbose)

    console = console or Console()

    try:
        config = config_from_args(args)
        rng = config.make_rng()
        if args.workload:
            batch = load_batch(Path(args.workload))
        else:
            batch = _new_batch(config, rng)
        logger.debug("Batch of %d processes ready", len(batch))

        if args.command == "run":
            _print_processes(batch, console)
            _run_one(args.algorithm, batch, config, rng, console)
            return 0

        if args.command == "compare":
            _run_compare(batch, config, rng, console)
            return 0

        if args.command == "generate":
            path = save_batch(batch, args.output)
            console.print(f"Wrote {len(batch)} processes to {path}")
            return 0

        if args.command == "menu":
            _interactive_menu(batch, config, rng, console)
            return 0
    except SchedulerError as exc:
        console.print(f"[red]Error:[/red] {escape(str(exc))}")
        return 2

    parser.error(f"Unknown command: {args.command}")
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
