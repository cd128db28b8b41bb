from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Optional, Tuple

from .errors import InvalidConfiguration

DEFAULT_QUANTUM = 4
DEFAULT_PROCESS_COUNT = 10
DEFAULT_BURST_RANGE = (1, 20)
DEFAULT_PRIORITY_RANGE = (1, 3)
DEFAULT_NUM_QUEUES = 3


@dataclass
class SchedulerConfig:
    """
    Tunables for generating a batch and running the strategies over it.

    Lower priority values run earlier. ``seed=None`` draws from an unseeded
    generator, so generated batches and multilevel partitions differ run to run.
    """

    quantum: int = DEFAULT_QUANTUM
    process_count: int = DEFAULT_PROCESS_COUNT
    burst_range: Tuple[int, int] = DEFAULT_BURST_RANGE
    priority_range: Tuple[int, int] = DEFAULT_PRIORITY_RANGE
    num_queues: int = DEFAULT_NUM_QUEUES
    seed: Optional[int] = None

    def validate(self) -> "SchedulerConfig":
        validate_quantum(self.quantum)
        validate_num_queues(self.num_queues)
        if self.process_count < 0:
            raise InvalidConfiguration("process_count", f"must be >= 0, got {self.process_count}")
        validate_range("burst_range", self.burst_range)
        if self.burst_range[0] < 1:
            raise InvalidConfiguration("burst_range", f"minimum burst must be >= 1, got {self.burst_range[0]}")
        validate_range("priority_range", self.priority_range)
        return self

    def make_rng(self) -> random.Random:
        return random.Random(self.seed)


def validate_quantum(quantum: int) -> None:
    if not isinstance(quantum, int) or isinstance(quantum, bool) or quantum < 1:
        raise InvalidConfiguration("quantum", f"must be a positive integer, got {quantum!r}")


def validate_num_queues(num_queues: int) -> None:
    if num_queues is None or num_queues < 1:
        raise InvalidConfiguration("num_queues", f"must be a positive integer, got {num_queues}")


def validate_range(name: str, bounds: Tuple[int, int]) -> None:
    try:
        low, high = bounds
    except (TypeError, ValueError) as exc:
        raise InvalidConfiguration(name, f"expected a (min, max) pair, got {bounds!r}") from exc
    if low > high:
        raise InvalidConfiguration(name, f"min {low} is greater than max {high}")
