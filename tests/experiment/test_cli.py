import pytest

from swarmtune.cli import main, parse_args
from swarmtune.foundation.core.settings import ExperimentConfig


def test_defaults_come_from_config(monkeypatch):
    monkeypatch.setenv("SWARMTUNE_OUTPUT_ROOT", "elsewhere")
    args = parse_args(ExperimentConfig(), [])
    assert args.optimizer == "de"
    assert args.problems is None
    assert args.output_root == "elsewhere"
    assert args.eval_backend == "serial"


def test_rejects_unknown_optimizer():
    with pytest.raises(SystemExit):
        parse_args(ExperimentConfig(), ["--optimizer", "cmaes"])


def test_rejects_non_positive_runs():
    with pytest.raises(SystemExit):
        parse_args(ExperimentConfig(), ["--runs", "0"])


def test_main_writes_reports(tmp_path):
    code = main(
        [
            "--optimizer", "lus",
            "--problem", "sphere",
            "--problem", "ackley",
            "--dimensionality", "2",
            "--max-iterations", "500",
            "--runs", "2",
            "--trace-intervals", "5",
            "--output-root", str(tmp_path),
        ]
    )
    assert code == 0
    summary = (tmp_path / "LUS" / "ResultSummary.txt").read_text(encoding="utf-8").splitlines()
    assert [line.split()[0] for line in summary[1:]] == ["Sphere", "Ackley"]
    assert (tmp_path / "LUS" / "Ackley-trace.txt").exists()
