"""
Scheduling metrics package.

Computes waiting and turnaround times for FCFS, SJF, Priority, Round Robin
and Multilevel Queue scheduling over a batch of processes that all arrive
at time 0.
"""

from .algorithms import run_fcfs, run_priority, run_round_robin, run_sjf
from .config import SchedulerConfig
from .errors import InvalidConfiguration, SchedulerError, WorkloadError
from .models import MultilevelResult, Process, ScheduleResult
from .multilevel import run_multilevel
from .workload import generate_batch

__all__ = [
    "InvalidConfiguration",
    "MultilevelResult",
    "Process",
    "ScheduleResult",
    "SchedulerConfig",
    "SchedulerError",
    "WorkloadError",
    "generate_batch",
    "run_fcfs",
    "run_multilevel",
    "run_priority",
    "run_round_robin",
    "run_sjf",
]
