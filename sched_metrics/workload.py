from __future__ import annotations

import csv
import json
import logging
import random
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Tuple

from .config import DEFAULT_BURST_RANGE, DEFAULT_PRIORITY_RANGE, validate_range
from .errors import InvalidConfiguration, WorkloadError
from .models import Process

logger = logging.getLogger(__name__)

FIELDS = ("pid", "burst_time", "priority")


def generate_batch(
    count: int,
    burst_range: Tuple[int, int] = DEFAULT_BURST_RANGE,
    priority_range: Tuple[int, int] = DEFAULT_PRIORITY_RANGE,
    rng: Optional[random.Random] = None,
) -> List[Process]:
    """
    Generate ``count`` processes with pids 0..count-1.

    Bursts and priorities are drawn uniformly from the inclusive ranges.
    """
    if count < 0:
        raise InvalidConfiguration("process_count", f"must be >= 0, got {count}")
    validate_range("burst_range", burst_range)
    validate_range("priority_range", priority_range)
    if burst_range[0] < 1:
        raise InvalidConfiguration("burst_range", f"minimum burst must be >= 1, got {burst_range[0]}")

    rng = rng if rng is not None else random.Random()
    batch = [
        Process(
            pid=i,
            burst_time=rng.randint(*burst_range),
            priority=rng.randint(*priority_range),
        )
        for i in range(count)
    ]
    logger.debug("Generated %d processes", len(batch))
    return batch


def load_batch(path: str | Path) -> List[Process]:
    """
    Load a batch from a JSON or CSV file into a list of Process objects.
    """
    path = Path(path)
    suffix = path.suffix.lower()
    if not path.is_file():
        raise WorkloadError(f"Workload not found: {path}")

    if suffix == ".json":
        processes = _load_json(path)
    elif suffix == ".csv":
        processes = _load_csv(path)
    else:
        raise WorkloadError(f"Unsupported workload format: {suffix} (use .json or .csv)")

    _check_unique_pids(processes)
    return processes


def save_batch(batch: Sequence[Process], path: str | Path) -> Path:
    path = Path(path)
    suffix = path.suffix.lower()
    rows = [{"pid": p.pid, "burst_time": p.burst_time, "priority": p.priority} for p in batch]

    if suffix == ".json":
        with path.open("w", encoding="utf-8") as f:
            json.dump(rows, f, indent=2)
    elif suffix == ".csv":
        with path.open("w", encoding="utf-8", newline="") as f:
            writer = csv.DictWriter(f, fieldnames=FIELDS)
            writer.writeheader()
            writer.writerows(rows)
    else:
        raise WorkloadError(f"Unsupported workload format: {suffix} (use .json or .csv)")

    logger.debug("Wrote %d processes to %s", len(rows), path)
    return path


def _load_json(path: Path) -> List[Process]:
    try:
        with path.open("r", encoding="utf-8") as f:
            raw = json.load(f)
    except json.JSONDecodeError as exc:
        raise WorkloadError(f"{path}: invalid JSON ({exc})") from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise WorkloadError(f"{path}: cannot read workload ({exc})") from exc

    if not isinstance(raw, list):
        raise WorkloadError("JSON workload must be a list of process objects")

    for entry in raw:
        # JSON carries real types; 2.9 or true must not be coerced into an int
        if not isinstance(entry, dict) or not all(_is_int(entry.get(name)) for name in FIELDS):
            raise WorkloadError(f"Invalid process entry: {entry!r}")

    return [_process_from_mapping(entry) for entry in raw]


def _load_csv(path: Path) -> List[Process]:
    try:
        with path.open("r", encoding="utf-8", newline="") as f:
            rows = list(csv.DictReader(f))
    except (OSError, UnicodeDecodeError, csv.Error) as exc:
        raise WorkloadError(f"{path}: cannot read workload ({exc})") from exc

    return [_process_from_mapping(row) for row in rows]


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _process_from_mapping(mapping) -> Process:
    try:
        return Process(
            pid=int(mapping["pid"]),
            burst_time=int(mapping["burst_time"]),
            priority=int(mapping["priority"]),
        )
    except (KeyError, TypeError, ValueError) as exc:
        raise WorkloadError(f"Invalid process entry: {mapping!r}") from exc


def _check_unique_pids(processes: Iterable[Process]) -> None:
    seen = set()
    for p in processes:
        if p.pid in seen:
            raise WorkloadError(f"Duplicate pid {p.pid} in workload")
        seen.add(p.pid)
