import io

from rich.console import Console

from sched_metrics.cli import _interactive_menu, main
from sched_metrics.config import SchedulerConfig
from sched_metrics.models import Process


def _console(width=140):
    return Console(file=io.StringIO(), width=width)


def _output(console):
    return console.file.getvalue()


def test_run_fcfs():
    console = _console()
    assert main(["run", "-a", "fcfs", "-n", "4", "--seed", "1"], console=console) == 0
    out = _output(console)
    assert "FCFS" in out
    assert "Average waiting time" in out


def test_run_multilevel():
    console = _console()
    assert main(["run", "-a", "mlq", "-n", "8", "--seed", "2"], console=console) == 0
    out = _output(console)
    assert "Multilevel queue summary" in out
    assert "Overall average waiting time" in out


def test_compare():
    console = _console()
    assert main(["compare", "--seed", "3"], console=console) == 0
    out = _output(console)
    for name in ("FCFS", "SJF", "Priority", "Round Robin", "Multilevel Queue"):
        assert name in out


def test_invalid_quantum_reports_error():
    console = _console()
    assert main(["run", "-a", "rr", "--quantum", "0"], console=console) == 2
    assert "quantum" in _output(console)


def test_generate_writes_file(tmp_path):
    out_file = tmp_path / "batch.json"
    console = _console()
    assert main(["generate", "-n", "3", "--seed", "5", "-o", str(out_file)], console=console) == 0

    console = _console()
    assert main(["run", "-a", "sjf", "-w", str(out_file)], console=console) == 0
    assert "SJF" in _output(console)


def test_menu_runs_choices_then_exits():
    console = _console()
    answers = iter(["1", "8", "7", "9", "0"])
    batch = [Process(0, 5, 1), Process(1, 3, 2)]
    config = SchedulerConfig(process_count=2, seed=0)

    _interactive_menu(batch, config, config.make_rng(), console, input_fn=lambda prompt: next(answers))

    out = _output(console)
    assert "FCFS" in out
    assert "Process list (2 processes)" in out
    assert "Invalid option" in out
    assert "Generated 2 new processes" in out
    assert "Goodbye!" in out


def test_undecodable_workload_exits_with_error(tmp_path):
    p = tmp_path / "w.csv"
    p.write_bytes(b"pid,burst_time,priority\n0,\xff3,1\n")
    console = _console(width=500)
    assert main(["run", "-a", "fcfs", "-w", str(p)], console=console) == 2
    assert "cannot read workload" in _output(console)
