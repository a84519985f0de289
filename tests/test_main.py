from main import main

from datesheet.io_utils import load_ledger

DEMAND = "course_id,semester,gap_days\nA,1,2\nB,1,2\nX,3,0\n"


def _write(tmp_path, name, text):
    path = tmp_path / name
    path.write_text(text)
    return str(path)


def test_generate_then_move(tmp_path, capsys):
    demand = _write(tmp_path, "demand.csv", DEMAND)
    holidays = _write(tmp_path, "holidays.csv", "date,name,recurring\n2025-01-07,Closed,false\n")
    out = str(tmp_path / "ledger.csv")

    code = main(["generate", "--demand", demand, "--start", "2025-01-06", "--end", "2025-01-17",
                 "--holidays", holidays, "--out-ledger", out, "--strict"])
    assert code == 0
    assert "Status: complete" in capsys.readouterr().out
    ledger = load_ledger(out)
    assert ledger.get("S1:B").date.isoformat() == "2025-01-08"

    # B one day after A breaks its gap
    assert main(["move", "--ledger", out, "S1:B", "2025-01-07"]) == 1
    assert load_ledger(out).get("S1:B").date.isoformat() == "2025-01-08"

    assert main(["move", "--ledger", out, "S1:B", "2025-01-07", "--override"]) == 0
    assert "GapViolation" in capsys.readouterr().out
    assert load_ledger(out).get("S1:B").date.isoformat() == "2025-01-07"


def test_strict_generate_fails_on_shortfall(tmp_path, capsys):
    demand = _write(tmp_path, "demand.csv", DEMAND)
    code = main(["generate", "--demand", demand, "--start", "2025-01-06", "--end", "2025-01-07",
                 "--out-ledger", str(tmp_path / "l.csv"), "--out-unplaced", str(tmp_path / "u.csv"),
                 "--strict"])
    assert code == 1
    assert (tmp_path / "u.csv").exists()
    assert "could not be placed" in capsys.readouterr().err


def test_bad_range_is_reported(tmp_path, capsys):
    demand = _write(tmp_path, "demand.csv", DEMAND)
    code = main(["generate", "--demand", demand, "--start", "2025-01-10", "--end", "2025-01-06",
                 "--out-ledger", str(tmp_path / "l.csv")])
    assert code == 1
    assert "before start" in capsys.readouterr().err


def test_bad_demand_rows_are_reported_without_traceback(tmp_path, capsys):
    negative = _write(tmp_path, "neg.csv", "course_id,semester,gap_days\nA,1,-2\n")
    code = main(["generate", "--demand", negative, "--start", "2025-01-06", "--end", "2025-01-17",
                 "--out-ledger", str(tmp_path / "l.csv")])
    assert code == 1
    assert "gap_days must be non-negative" in capsys.readouterr().err

    no_semester = _write(tmp_path, "nosem.csv", "course_id,gap_days\nA,2\n")
    code = main(["generate", "--demand", no_semester, "--start", "2025-01-06", "--end", "2025-01-17",
                 "--out-ledger", str(tmp_path / "l.csv")])
    assert code == 1
    assert "missing column 'semester'" in capsys.readouterr().err
