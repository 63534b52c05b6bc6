from pathlib import Path

from schedsim.cli import main


def _workload(tmp_path: Path) -> Path:
    p = tmp_path / "input.txt"
    p.write_text("1 0 5\n2 1 3\n3 2 8\n")
    return p


def test_run_command(tmp_path: Path, capsys):
    assert main(["run", "-a", "srtf", "-w", str(_workload(tmp_path)), "--trace"]) == 0
    out = capsys.readouterr().out
    assert "Time 1: Task 2 starts" in out
    assert "SRTF" in out


def test_compare_command(tmp_path: Path, capsys):
    assert main(["compare", "-w", str(_workload(tmp_path)), "-q", "2"]) == 0
    out = capsys.readouterr().out
    assert "FCFS" in out
    assert "Round Robin" in out
    assert "3.33" in out


def test_invalid_quantum(tmp_path: Path, capsys):
    assert main(["run", "-a", "rr", "-w", str(_workload(tmp_path)), "-q", "0"]) == 1
    assert "positive quantum" in capsys.readouterr().out


def test_missing_workload(tmp_path: Path, capsys):
    assert main(["run", "-a", "fcfs", "-w", str(tmp_path / "missing.txt")]) == 1
    assert "Failed to read tasks" in capsys.readouterr().out


def test_run_skips_undecodable_lines(tmp_path: Path, capsys):
    p = tmp_path / "input.txt"
    p.write_bytes(b"1 0 5\n\xff\xfe garbage\n3 2 8\n")
    assert main(["run", "-a", "fcfs", "-w", str(p)]) == 0
    assert "FCFS" in capsys.readouterr().out


def test_invalid_json_workload(tmp_path: Path, capsys):
    p = tmp_path / "w.json"
    p.write_text("[{")
    assert main(["run", "-a", "fcfs", "-w", str(p)]) == 1
    assert "Error:" in capsys.readouterr().out


def test_run_prints_system_metrics(tmp_path: Path, capsys):
    assert main(["run", "-a", "rr", "-w", str(_workload(tmp_path)), "-q", "2"]) == 0
    out = capsys.readouterr().out
    assert "CPU utilization" in out
    assert "100.0%" in out
