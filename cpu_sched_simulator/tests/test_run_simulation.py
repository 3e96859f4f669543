import json

from cpu_sched_simulator.scripts.run_simulation import main, parse_args


def write_workload(tmp_path):
    path = tmp_path / "procs.csv"
    path.write_text(
        "pid,arrival_time,burst_time,priority\n"
        "P1,0,5,2\nP2,1,3,1\nP3,2,8,4\nP4,3,2,3\n"
    )
    return str(path)


def test_run_single_policy(tmp_path, capsys):
    log = tmp_path / "events.json"
    out = tmp_path / "gantt.png"
    code = main(["--input", write_workload(tmp_path), "--policy", "fcfs", "--steps",
                 "--log-json", str(log), "--out", str(out)])
    assert code == 0
    text = capsys.readouterr().out
    assert "[  0 -   5] P1" in text
    assert "Avg waiting: 5.750, Avg turnaround: 10.250" in text
    assert "t= 18  running=idle" in text
    assert json.loads(log.read_text())["timeline"][0]["pid"] == "P1"
    assert out.exists()


def test_compare_mode(tmp_path, capsys):
    assert main(["--input", write_workload(tmp_path), "--compare"]) == 0
    text = capsys.readouterr().out
    assert "priority-np" in text and "Priority (P)" in text


def test_config_file_supplies_defaults(tmp_path, capsys):
    config = tmp_path / "sim.json"
    config.write_text(json.dumps({"policy": "sjf"}))
    assert main(["--input", write_workload(tmp_path), "--config", str(config)]) == 0
    assert "Avg waiting: 4.000" in capsys.readouterr().out


def test_random_workload_is_seeded(capsys):
    assert main(["--n", "5", "--seed", "11"]) == 0
    first = capsys.readouterr().out
    assert main(["--n", "5", "--seed", "11"]) == 0
    assert capsys.readouterr().out == first


def test_bad_input_returns_error(tmp_path, capsys):
    bad = tmp_path / "bad.csv"
    bad.write_text("pid,burst_time\nA,0\n")
    assert main(["--input", str(bad)]) == 1
    assert main(["--input", str(tmp_path / "missing.csv")]) == 1
    assert "Error:" in capsys.readouterr().err


def test_parse_args_defaults():
    args = parse_args([])
    assert args.policy is None and args.quantum is None and not args.compare
