from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from .errors import InvalidConfiguration


@dataclass(frozen=True)
class Process:
    pid: int
    burst_time: int
    priority: int

    def __post_init__(self) -> None:
        if self.burst_time < 1:
            raise InvalidConfiguration("burst_time", f"must be >= 1 (process {self.pid} has {self.burst_time})")


@dataclass
class ScheduledSlice:
    """
    One contiguous slice of execution for a process in the Gantt chart.
    """

    pid: int
    start_time: int
    end_time: int


@dataclass
class ProcessMetrics:
    pid: int
    burst_time: int
    priority: int
    start_time: int
    completion_time: int
    waiting_time: int
    turnaround_time: int


@dataclass
class ScheduleResult:
    """
    Outcome of running one strategy over a batch.

    ``processes`` is in execution order for the non-preemptive strategies
    and in arrival order for Round Robin.
    """

    algorithm: str
    quantum: Optional[int] = None
    processes: List[ProcessMetrics] = field(default_factory=list)
    timeline: List[ScheduledSlice] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.processes

    @property
    def order(self) -> List[int]:
        return [p.pid for p in self.processes]

    @property
    def waiting_times(self) -> List[int]:
        return [p.waiting_time for p in self.processes]

    @property
    def turnaround_times(self) -> List[int]:
        return [p.turnaround_time for p in self.processes]

    @property
    def avg_waiting_time(self) -> float:
        # Empty batches average to 0.0 rather than dividing by zero.
        if not self.processes:
            return 0.0
        return sum(self.waiting_times) / len(self.processes)

    @property
    def avg_turnaround_time(self) -> float:
        if not self.processes:
            return 0.0
        return sum(self.turnaround_times) / len(self.processes)


@dataclass
class QueueReport:
    """
    One level of the multilevel queue scheme.

    ``result`` is None when no process was assigned to the queue.
    ``avg_waiting_time`` already includes ``offset``.
    """

    index: int
    policy: str
    members: List[Process] = field(default_factory=list)
    result: Optional[ScheduleResult] = None
    offset: int = 0
    avg_waiting_time: float = 0.0

    @property
    def size(self) -> int:
        return len(self.members)


@dataclass
class MultilevelResult:
    quantum: int
    queues: List[QueueReport] = field(default_factory=list)
    avg_waiting_time: float = 0.0

    @property
    def sizes(self) -> List[int]:
        return [q.size for q in self.queues]

    @property
    def total(self) -> int:
        return sum(self.sizes)
