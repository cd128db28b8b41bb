from __future__ import annotations

import logging
from collections import deque
from typing import Deque, List, Optional, Sequence

from .config import DEFAULT_QUANTUM, validate_quantum
from .errors import InvalidConfiguration
from .metrics import check_result, compute
from .models import Process, ProcessMetrics, ScheduleResult, ScheduledSlice

logger = logging.getLogger(__name__)


def run_fcfs(batch: Sequence[Process], quantum: Optional[int] = None) -> ScheduleResult:
    """
    First-Come First-Serve (non-preemptive).

    Every process arrives at time 0, so the arrival order is the execution
    order and no reordering happens.
    """
    return compute(list(batch), algorithm="FCFS")


def run_sjf(batch: Sequence[Process], quantum: Optional[int] = None) -> ScheduleResult:
    """
    Shortest Job First (non-preemptive).

    ``sorted`` is stable, so equal bursts keep their arrival order.
    """
    ordered = sorted(batch, key=lambda p: p.burst_time)
    logger.debug("SJF order: %s", [p.pid for p in ordered])
    return compute(ordered, algorithm="SJF")


def run_priority(batch: Sequence[Process], quantum: Optional[int] = None) -> ScheduleResult:
    """
    Static Priority scheduling (non-preemptive).

    Lower numeric priority value runs earlier; ties keep arrival order.
    """
    ordered = sorted(batch, key=lambda p: p.priority)
    logger.debug("Priority order: %s", [p.pid for p in ordered])
    return compute(ordered, algorithm="Priority")


def run_round_robin(batch: Sequence[Process], quantum: Optional[int] = DEFAULT_QUANTUM) -> ScheduleResult:
    """
    Round Robin with a fixed time quantum, as repeated sweeps in arrival order.

    A process that finishes is skipped on later sweeps; one that does not
    finish yields to the next process in arrival order. Waiting time is the
    clock at completion minus the process's full burst.
    """
    validate_quantum(quantum)
    processes = list(batch)

    # Remaining burst per arrival index; the Process records stay untouched.
    remaining = [p.burst_time for p in processes]
    start_times: List[Optional[int]] = [None] * len(processes)
    completion_times = [0] * len(processes)
    timeline: List[ScheduledSlice] = []

    time = 0
    sweeps = 0
    while True:
        done = True
        for i, p in enumerate(processes):
            if remaining[i] == 0:
                continue
            done = False

            if start_times[i] is None:
                start_times[i] = time

            run_time = quantum if remaining[i] > quantum else remaining[i]
            timeline.append(ScheduledSlice(pid=p.pid, start_time=time, end_time=time + run_time))
            time += run_time
            remaining[i] -= run_time

            if remaining[i] == 0:
                completion_times[i] = time

        if done:
            break
        sweeps += 1

    logger.debug("Round Robin (q=%d): %d sweeps, clock ended at %d", quantum, sweeps, time)
    result = ScheduleResult(
        algorithm="Round Robin",
        quantum=quantum,
        processes=_round_robin_metrics(processes, start_times, completion_times),
        timeline=timeline,
    )
    check_result(result)
    return result


def run_round_robin_queue(batch: Sequence[Process], quantum: Optional[int] = DEFAULT_QUANTUM) -> ScheduleResult:
    """
    Round Robin over an explicit ready queue of arrival indices.

    Costs one step per quantum instead of one per sweep slot, and yields the
    same metrics and timeline as :func:`run_round_robin`.
    """
    validate_quantum(quantum)
    processes = list(batch)

    remaining = [p.burst_time for p in processes]
    start_times: List[Optional[int]] = [None] * len(processes)
    completion_times = [0] * len(processes)
    timeline: List[ScheduledSlice] = []

    ready: Deque[int] = deque(range(len(processes)))
    time = 0
    while ready:
        i = ready.popleft()
        if start_times[i] is None:
            start_times[i] = time

        run_time = min(quantum, remaining[i])
        timeline.append(ScheduledSlice(pid=processes[i].pid, start_time=time, end_time=time + run_time))
        time += run_time
        remaining[i] -= run_time

        if remaining[i] > 0:
            ready.append(i)
        else:
            completion_times[i] = time

    result = ScheduleResult(
        algorithm="Round Robin",
        quantum=quantum,
        processes=_round_robin_metrics(processes, start_times, completion_times),
        timeline=timeline,
    )
    check_result(result)
    return result


def _round_robin_metrics(
    processes: List[Process],
    start_times: List[Optional[int]],
    completion_times: List[int],
) -> List[ProcessMetrics]:
    metrics: List[ProcessMetrics] = []
    for p, start_time, completion_time in zip(processes, start_times, completion_times):
        # Total waiting = clock at completion - burst (all arrivals are at 0)
        waiting_time = completion_time - p.burst_time
        metrics.append(
            ProcessMetrics(
                pid=p.pid,
                burst_time=p.burst_time,
                priority=p.priority,
                start_time=start_time if start_time is not None else 0,
                completion_time=completion_time,
                waiting_time=waiting_time,
                turnaround_time=waiting_time + p.burst_time,
            )
        )
    return metrics


ALGORITHMS = {
    "fcfs": run_fcfs,
    "sjf": run_sjf,
    "priority": run_priority,
    "rr": run_round_robin,
}


def run_algorithm(name: str, batch: Sequence[Process], quantum: Optional[int] = DEFAULT_QUANTUM) -> ScheduleResult:
    """
    Dispatch to a single-queue strategy by name. Quantum is only used by
    round-robin.
    """
    name = name.lower()
    if name not in ALGORITHMS:
        raise InvalidConfiguration("algorithm", f"unknown algorithm '{name}' (choose from {', '.join(ALGORITHMS)})")

    func = ALGORITHMS[name]
    return func(batch, quantum=quantum)
