from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Sequence

from .models import Process, ProcessMetrics, ScheduleResult, ScheduledSlice

logger = logging.getLogger(__name__)


def compute(ordered: Sequence[Process], algorithm: str = "", quantum: Optional[int] = None) -> ScheduleResult:
    """
    Derive waiting/turnaround times for a non-preemptive, gap-free schedule.

    ``ordered`` must already be in execution order: each process waits for
    the sum of the bursts of everyone scheduled before it.
    """
    time = 0
    timeline: List[ScheduledSlice] = []
    metrics: List[ProcessMetrics] = []

    for p in ordered:
        start_time = time
        end_time = start_time + p.burst_time

        timeline.append(ScheduledSlice(pid=p.pid, start_time=start_time, end_time=end_time))
        metrics.append(
            ProcessMetrics(
                pid=p.pid,
                burst_time=p.burst_time,
                priority=p.priority,
                start_time=start_time,
                completion_time=end_time,
                waiting_time=start_time,
                turnaround_time=start_time + p.burst_time,
            )
        )
        time = end_time

    result = ScheduleResult(algorithm=algorithm, quantum=quantum, processes=metrics, timeline=timeline)
    check_result(result)
    return result


def check_result(result: ScheduleResult) -> None:
    """
    Assert turnaround = waiting + burst for every row.

    A violation means a strategy is broken, so this raises AssertionError
    instead of a configuration error.
    """
    for m in result.processes:
        if m.turnaround_time != m.waiting_time + m.burst_time:
            raise AssertionError(
                f"{result.algorithm}: process {m.pid} has turnaround {m.turnaround_time} "
                f"!= waiting {m.waiting_time} + burst {m.burst_time}"
            )
    logger.debug(
        "%s: %d processes, avg waiting %.2f, avg turnaround %.2f",
        result.algorithm or "schedule",
        len(result.processes),
        result.avg_waiting_time,
        result.avg_turnaround_time,
    )


def mean(values: Iterable[float]) -> float:
    values = list(values)
    if not values:
        return 0.0
    return sum(values) / len(values)


def total_burst_time(processes: Iterable[Process]) -> int:
    return sum(p.burst_time for p in processes)


def summarize(result: ScheduleResult) -> dict:
    """
    Return averages of the key per-process metrics for quick comparison.
    """
    return {
        "avg_waiting": result.avg_waiting_time,
        "avg_turnaround": result.avg_turnaround_time,
        "makespan": max((p.completion_time for p in result.processes), default=0),
    }
