import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from kata_scorer import __version__, pipeline
from kata_scorer.aggregator import aggregate
from kata_scorer.cli import app
from kata_scorer.models import MetricName, RawMetric
from kata_scorer.pipeline import BaselineMetrics

runner = CliRunner()


@pytest.fixture
def scored(monkeypatch, make_metrics):
    """Replaces the scoring run with a canned report and records its arguments."""
    calls = []

    def fake_run_scoring(project_dir, scoring, timeout):
        calls.append((Path(project_dir), timeout))
        return aggregate(make_metrics(offenses=5, gate_passed=False))

    monkeypatch.setattr(pipeline, "run_scoring", fake_run_scoring)
    return calls


def test_score_json_output(tmp_path: Path, scored):
    result = runner.invoke(app, ["score", "--json", "-p", str(tmp_path)])

    assert result.exit_code == 0
    data = json.loads(result.stdout)
    assert set(data) == {"total_score", "max_score", "grade", "scores", "details", "timestamp"}
    assert data["max_score"] == 100
    assert data["scores"]["correctness"] == 0.0
    assert data["details"]["offense_count"] == 5
    assert data["details"]["correctness"] == "FAIL ✗"


def test_score_renders_report(tmp_path: Path, scored):
    result = runner.invoke(app, ["score", "--project", str(tmp_path)])

    assert result.exit_code == 0
    assert "TOTAL SCORE:" in result.stdout
    assert "GATE FAILED" in result.stdout


def test_project_and_timeout_from_environment(tmp_path: Path, scored):
    result = runner.invoke(
        app,
        ["score", "--json"],
        env={"KATA_SCORE_PROJECT": str(tmp_path), "KATA_SCORE_TIMEOUT": "30"},
    )

    assert result.exit_code == 0
    assert scored == [(tmp_path, 30.0)]


def test_missing_project_exits_with_error(tmp_path: Path):
    result = runner.invoke(app, ["score", "-p", str(tmp_path / "missing")])

    assert result.exit_code == 2
    assert "Project directory not found" in result.output


def test_non_positive_timeout_is_rejected(tmp_path: Path, scored):
    result = runner.invoke(app, ["score", "-p", str(tmp_path), "--timeout", "0"])

    assert result.exit_code == 2
    assert scored == []


def test_baseline_prints_measured_values(tmp_path: Path, monkeypatch):
    measured = BaselineMetrics(
        offense_count=RawMetric(MetricName.OFFENSE_COUNT, 41, "StyleCollector"),
        complexity_total=RawMetric(MetricName.COMPLEXITY_TOTAL, 110.2, "ComplexityCollector"),
        duplication_total=RawMetric(MetricName.DUPLICATION_TOTAL, 88, "DuplicationCollector"),
    )
    monkeypatch.setattr(pipeline, "run_baseline", lambda project_dir, scoring, timeout: measured)

    result = runner.invoke(app, ["baseline", "-p", str(tmp_path)])

    assert result.exit_code == 0
    assert "Calculating Baseline Values" in result.stdout
    assert "110.2" in result.stdout
    assert "BASELINE_*" in result.stdout


@pytest.mark.parametrize("command, target", [("test", "run_tests"), ("lint", "run_lint")])
def test_passthrough_commands_propagate_exit_code(tmp_path: Path, monkeypatch, command, target):
    monkeypatch.setattr(pipeline, target, lambda project_dir, timeout: 3)

    result = runner.invoke(app, [command, "-p", str(tmp_path)])

    assert result.exit_code == 3


def test_version():
    result = runner.invoke(app, ["version"])

    assert result.exit_code == 0
    assert __version__ in result.stdout
