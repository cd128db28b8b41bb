import random
from pathlib import Path

import pytest

from sched_metrics.errors import InvalidConfiguration, WorkloadError
from sched_metrics.models import Process
from sched_metrics.workload import generate_batch, load_batch, save_batch


def test_generate_batch_ids_and_ranges():
    batch = generate_batch(50, burst_range=(2, 6), priority_range=(1, 3), rng=random.Random(0))
    assert [p.pid for p in batch] == list(range(50))
    assert all(2 <= p.burst_time <= 6 for p in batch)
    assert all(1 <= p.priority <= 3 for p in batch)


def test_generate_batch_seeded():
    assert generate_batch(10, rng=random.Random(8)) == generate_batch(10, rng=random.Random(8))


def test_generate_batch_rejects_bad_ranges():
    with pytest.raises(InvalidConfiguration):
        generate_batch(3, burst_range=(9, 1))
    with pytest.raises(InvalidConfiguration):
        generate_batch(-1)


def test_load_json(tmp_path: Path):
    p = tmp_path / "w.json"
    p.write_text('[{"pid":0,"burst_time":3,"priority":1},{"pid":1,"burst_time":2,"priority":2}]')
    procs = load_batch(p)
    assert procs == [Process(0, 3, 1), Process(1, 2, 2)]


def test_load_csv(tmp_path: Path):
    p = tmp_path / "w.csv"
    p.write_text("pid,burst_time,priority\n0,3,1\n1,2,2\n")
    procs = load_batch(p)
    assert procs[1].burst_time == 2


@pytest.mark.parametrize("suffix", [".json", ".csv"])
def test_save_then_load(tmp_path: Path, suffix):
    batch = generate_batch(5, rng=random.Random(4))
    path = save_batch(batch, tmp_path / f"batch{suffix}")
    assert load_batch(path) == batch


def test_bad_entries(tmp_path: Path):
    missing = tmp_path / "missing.json"
    missing.write_text('[{"pid":0,"burst_time":3}]')
    with pytest.raises(WorkloadError):
        load_batch(missing)

    zero = tmp_path / "zero.csv"
    zero.write_text("pid,burst_time,priority\n0,0,1\n")
    with pytest.raises(WorkloadError):
        load_batch(zero)

    dup = tmp_path / "dup.csv"
    dup.write_text("pid,burst_time,priority\n0,1,1\n0,2,1\n")
    with pytest.raises(WorkloadError, match="Duplicate pid 0"):
        load_batch(dup)


def test_unsupported_or_missing_file(tmp_path: Path):
    txt = tmp_path / "w.txt"
    txt.write_text("")
    with pytest.raises(WorkloadError):
        load_batch(txt)
    with pytest.raises(WorkloadError):
        load_batch(tmp_path / "nope.json")


@pytest.mark.parametrize(
    "name, data",
    [
        ("w.json", b'[{"pid":0,"burst_time":3,"priority":1}]\xff\xfe'),
        ("w.csv", b"pid,burst_time,priority\n0,\xff3,1\n"),
    ],
)
def test_undecodable_file_is_workload_error(tmp_path: Path, name, data):
    p = tmp_path / name
    p.write_bytes(data)
    with pytest.raises(WorkloadError):
        load_batch(p)


@pytest.mark.parametrize(
    "entry",
    [
        '{"pid":0,"burst_time":2.9,"priority":1}',
        '{"pid":0,"burst_time":3,"priority":true}',
        '{"pid":"0","burst_time":3,"priority":1}',
        "[0, 3, 1]",
    ],
)
def test_json_values_must_be_integers(tmp_path: Path, entry):
    p = tmp_path / "w.json"
    p.write_text(f"[{entry}]")
    with pytest.raises(WorkloadError, match="Invalid process entry"):
        load_batch(p)


def test_csv_rejects_fractional_burst(tmp_path: Path):
    p = tmp_path / "w.csv"
    p.write_text("pid,burst_time,priority\n0,2.9,1\n")
    with pytest.raises(WorkloadError):
        load_batch(p)
