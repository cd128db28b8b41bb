"""
Multilevel queue scheduling.

Processes are dealt into ``num_queues`` queues by an independent uniform
draw each. Queue ``i`` runs under ``QUEUE_POLICIES[i % 3]`` and cannot
start until every earlier queue has drained, so its average waiting time
is offset by the total burst of the queues ahead of it. The overall
figure is the plain mean of the per-queue averages, not weighted by queue
size; empty queues contribute 0.
"""

from __future__ import annotations

import logging
import random
from typing import List, Optional, Sequence

from .algorithms import run_fcfs, run_round_robin, run_sjf
from .config import DEFAULT_NUM_QUEUES, DEFAULT_QUANTUM, validate_num_queues, validate_quantum
from .errors import InvalidConfiguration
from .metrics import mean, total_burst_time
from .models import MultilevelResult, Process, QueueReport

logger = logging.getLogger(__name__)

QUEUE_POLICIES = ("rr", "fcfs", "sjf")

POLICY_NAMES = {
    "rr": "Round Robin",
    "fcfs": "FCFS",
    "sjf": "SJF",
}


def partition(
    batch: Sequence[Process],
    num_queues: int = DEFAULT_NUM_QUEUES,
    rng: Optional[random.Random] = None,
) -> List[List[Process]]:
    """
    Assign each process to one queue with a uniform random draw.

    Arrival order is preserved inside each queue. Pass a seeded ``rng``
    for a reproducible split.
    """
    validate_num_queues(num_queues)
    rng = rng if rng is not None else random.Random()

    queues: List[List[Process]] = [[] for _ in range(num_queues)]
    for p in batch:
        queues[rng.randrange(num_queues)].append(p)

    logger.debug("Multilevel partition sizes: %s", [len(q) for q in queues])
    return queues


def run_multilevel(
    batch: Sequence[Process],
    num_queues: int = DEFAULT_NUM_QUEUES,
    quantum: int = DEFAULT_QUANTUM,
    seed: Optional[int] = None,
    rng: Optional[random.Random] = None,
) -> MultilevelResult:
    """
    Partition ``batch`` and run each queue under its policy.

    The partition draws from ``rng`` when given, otherwise from
    ``random.Random(seed)``; passing both is rejected. With neither, the
    split differs from run to run.
    """
    validate_num_queues(num_queues)
    validate_quantum(quantum)
    if rng is not None and seed is not None:
        raise InvalidConfiguration("seed", "pass either seed or rng, not both")
    if rng is None:
        rng = random.Random(seed)

    queues = partition(batch, num_queues, rng)

    reports: List[QueueReport] = []
    offset = 0
    for index, members in enumerate(queues):
        policy = QUEUE_POLICIES[index % len(QUEUE_POLICIES)]
        report = QueueReport(index=index, policy=policy, members=members, offset=offset)

        if members:
            if policy == "rr":
                report.result = run_round_robin(members, quantum=quantum)
            elif policy == "fcfs":
                report.result = run_fcfs(members)
            else:
                report.result = run_sjf(members)
            report.avg_waiting_time = report.result.avg_waiting_time + offset
            logger.debug(
                "Queue %d (%s): %d processes, offset %d, avg waiting %.2f",
                index,
                policy,
                len(members),
                offset,
                report.avg_waiting_time,
            )
        else:
            logger.debug("Queue %d (%s) is empty", index, policy)

        reports.append(report)
        offset += total_burst_time(members)

    overall = mean(r.avg_waiting_time for r in reports)
    return MultilevelResult(quantum=quantum, queues=reports, avg_waiting_time=overall)
