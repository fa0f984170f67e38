"""Command line harness tests."""

import json
import subprocess
import sys
from pathlib import Path

import pytest

from benchrand import RandContext, RandOptions
from scripts import run_rand


def test_run_collects_samples_from_every_worker():
    report = run_rand.run(RandOptions(rand_type="uniform", rand_seed=31), low=1, high=10, count=500, threads=4)

    assert report["threads"] == 4
    assert report["summary"]["count"] == 2000
    assert report["summary"]["out_of_range"] == 0
    assert sum(report["histogram"].values()) == 2000
    assert set(report["histogram"]) == {str(value) for value in range(1, 11)}


def test_run_skips_histogram_for_wide_ranges():
    report = run_rand.run(RandOptions(rand_seed=31), low=1, high=100000, count=50, threads=1)

    assert "histogram" not in report


def test_run_includes_unique_ids_and_strings():
    report = run_rand.run(
        RandOptions(rand_seed=31),
        low=0,
        high=99,
        count=10,
        threads=1,
        unique=3,
        template="@@-##",
        strings=4,
    )

    assert report["unique"] == [(2147483647 * k) % 100 for k in range(1, 4)]
    assert len(report["strings"]) == 4
    assert all(len(value) == 5 and value[2] == "-" for value in report["strings"])


def test_run_rejects_inverted_range():
    with pytest.raises(ValueError):
        run_rand.run(RandOptions(rand_seed=1), low=10, high=1, count=1, threads=1)


def test_cli_log_flag_writes_json(tmp_path, monkeypatch, capsys):
    log_path = tmp_path / "reports" / "out.json"
    monkeypatch.setattr(
        sys,
        "argv",
        [
            "run_rand.py",
            "--rand-type",
            "gaussian",
            "--rand-seed",
            "0x2A",
            "--count",
            "100",
            "--log",
            str(log_path),
        ],
    )

    run_rand.main()
    captured = capsys.readouterr()

    assert log_path.exists()
    payload = json.loads(log_path.read_text())
    assert payload["config"]["dist"] == "gaussian"
    assert payload["config"]["seed"] == 42

    stdout_payload = json.loads(captured.out)
    assert stdout_payload["summary"] == payload["summary"]


def test_cli_log_flag_without_value_uses_default(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    default_log = run_rand.DEFAULT_LOG_PATH
    monkeypatch.setattr(sys, "argv", ["run_rand.py", "--count", "10", "--rand-seed", "1", "--log"])

    try:
        run_rand.main()
        captured = capsys.readouterr()

        assert default_log.exists()
        payload = json.loads(default_log.read_text())
        assert payload["summary"]["count"] == 10

        stdout_payload = json.loads(captured.out)
        assert stdout_payload["summary"] == payload["summary"]
    finally:
        if default_log.exists():
            default_log.unlink()


def test_cli_log_relative_path_resolves_against_repo_root(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    relative_target = Path("reports/test_relative.json")
    expected = run_rand.PROJECT_ROOT / relative_target
    monkeypatch.setattr(
        sys,
        "argv",
        ["run_rand.py", "--count", "10", "--rand-seed", "1", "--log", str(relative_target)],
    )

    try:
        run_rand.main()
        capsys.readouterr()  # drain stdout/stderr

        assert expected.exists()
        payload = json.loads(expected.read_text())
        assert payload["summary"]["count"] == 10
    finally:
        if expected.exists():
            expected.unlink()


def test_cli_invalid_distribution_exits_with_failure(monkeypatch, capsys):
    monkeypatch.setattr(sys, "argv", ["run_rand.py", "--rand-type", "zipf"])

    with pytest.raises(SystemExit) as excinfo:
        run_rand.main()

    assert excinfo.value.code == 1
    assert capsys.readouterr().out == ""


def test_cli_inverted_range_is_a_usage_error(monkeypatch, capsys):
    monkeypatch.setattr(sys, "argv", ["run_rand.py", "--min", "10", "--max", "1"])

    with pytest.raises(SystemExit) as excinfo:
        run_rand.main()

    assert excinfo.value.code == 2
    assert "--min" in capsys.readouterr().err


def test_help_lists_option_table(monkeypatch, capsys):
    monkeypatch.setattr(sys, "argv", ["run_rand.py", "--help"])

    with pytest.raises(SystemExit):
        run_rand.main()

    out = capsys.readouterr().out
    for flag in ("--rand-type", "--rand-spec-iter", "--rand-spec-pct", "--rand-spec-res",
                 "--rand-seed", "--rand-pareto-h"):
        assert flag in out


def test_script_executes_without_pythonpath_requirement():
    repo_root = Path(__file__).resolve().parents[1]
    script_path = repo_root / "scripts" / "run_rand.py"
    result = subprocess.run(
        [sys.executable, str(script_path), "--count", "50", "--threads", "2", "--rand-seed", "9"],
        cwd=repo_root,
        check=False,
        capture_output=True,
        text=True,
    )

    assert result.returncode == 0, result.stderr
    assert json.loads(result.stdout)["summary"]["count"] == 100


def test_worker_failure_is_raised_and_context_shut_down(monkeypatch):
    contexts = []
    real_init = run_rand.init

    def _tracking_init(options):
        ctx = real_init(options)
        contexts.append(ctx)
        return ctx

    def _broken_sample(self, rng, a, b):
        raise ArithmeticError("sampler broke")

    monkeypatch.setattr(run_rand, "init", _tracking_init)
    monkeypatch.setattr(RandContext, "sample_default", _broken_sample)

    with pytest.raises(RuntimeError, match="worker") as excinfo:
        run_rand.run(RandOptions(rand_seed=1), low=1, high=10, count=5, threads=3)

    assert isinstance(excinfo.value.__cause__, ArithmeticError)
    assert contexts[0].counter.closed


def test_failure_after_sampling_still_shuts_down(monkeypatch):
    contexts = []
    real_init = run_rand.init

    def _tracking_init(options):
        ctx = real_init(options)
        contexts.append(ctx)
        return ctx

    def _broken_fill(self, rng, template, buf=None):
        raise ValueError("template broke")

    monkeypatch.setattr(run_rand, "init", _tracking_init)
    monkeypatch.setattr(RandContext, "fill_string", _broken_fill)

    with pytest.raises(ValueError, match="template broke"):
        run_rand.run(RandOptions(rand_seed=1), low=1, high=10, count=5, threads=1, strings=1)

    assert contexts[0].counter.closed


@pytest.mark.parametrize("flag", ["--unique", "--strings"])
def test_negative_counts_are_usage_errors(monkeypatch, capsys, flag):
    monkeypatch.setattr(sys, "argv", ["run_rand.py", flag, "-1"])

    with pytest.raises(SystemExit) as excinfo:
        run_rand.main()

    assert excinfo.value.code == 2
    assert "must not be negative" in capsys.readouterr().err
