"""
One scoring run: scan, collect, normalize, aggregate.

Collectors run sequentially and each finishes before the next begins. Nothing
survives the run; calling `run_scoring` twice on an unchanged project with
unchanged tool output yields the same report apart from its timestamp.
"""

import logging
from dataclasses import dataclass
from pathlib import Path

from . import config
from .aggregator import aggregate
from .collectors import (
    AgentUsageCollector,
    ComplexityCollector,
    DuplicationCollector,
    GateCollector,
    StyleCollector,
    collect_suite,
    discover_team_specs,
    find_gate_spec,
)
from .config import DEFAULT_SCORING_CONFIG, ScoringConfig
from .errors import ProjectNotFoundError
from .models import CollectedMetrics, RawMetric, ScoreReport
from .scanner import scan_targets
from .services.files import ProjectFiles
from .services.shell import CommandExecutor

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Workspace:
    """The scored project and the means to run tools inside it."""

    files: ProjectFiles
    executor: CommandExecutor


def open_workspace(project_dir: Path | str, timeout: float | None = None) -> Workspace:
    """Resolves the project directory, failing loudly if it is unusable."""
    path = Path(project_dir).expanduser().resolve()
    if not path.is_dir():
        raise ProjectNotFoundError(path)
    return Workspace(files=ProjectFiles(path), executor=CommandExecutor(path, timeout=timeout))


@dataclass(frozen=True)
class BaselineMetrics:
    """Raw code quality metrics, unscored."""

    offense_count: RawMetric
    complexity_total: RawMetric
    duplication_total: RawMetric


def collect_code_quality(
    workspace: Workspace, scoring: ScoringConfig = DEFAULT_SCORING_CONFIG
) -> BaselineMetrics:
    targets = scan_targets(workspace.files)
    logger.info("scanning %s", ", ".join(targets))
    args = (workspace.executor, workspace.files, scoring)
    return BaselineMetrics(
        offense_count=StyleCollector(*args).collect(targets),
        complexity_total=ComplexityCollector(*args).collect(targets),
        duplication_total=DuplicationCollector(*args).collect(targets),
    )


def collect_metrics(
    workspace: Workspace, scoring: ScoringConfig = DEFAULT_SCORING_CONFIG
) -> CollectedMetrics:
    quality = collect_code_quality(workspace, scoring)
    return CollectedMetrics(
        offense_count=quality.offense_count,
        complexity_total=quality.complexity_total,
        duplication_total=quality.duplication_total,
        tests=collect_suite(workspace.executor, workspace.files),
        gate=GateCollector(workspace.executor, workspace.files).collect(),
        agents=AgentUsageCollector(workspace.files).collect(),
    )


def run_scoring(
    project_dir: Path | str,
    scoring: ScoringConfig = DEFAULT_SCORING_CONFIG,
    timeout: float | None = None,
) -> ScoreReport:
    """Scores the project at `project_dir`."""
    workspace = open_workspace(project_dir, timeout)
    return aggregate(collect_metrics(workspace, scoring), scoring)


def run_baseline(
    project_dir: Path | str,
    scoring: ScoringConfig = DEFAULT_SCORING_CONFIG,
    timeout: float | None = None,
) -> BaselineMetrics:
    """Measures the raw code quality metrics used to calibrate the baselines."""
    return collect_code_quality(open_workspace(project_dir, timeout), scoring)


def run_tests(project_dir: Path | str, timeout: float | None = None) -> int:
    """Runs the team's specs plus the gate spec on the terminal; returns the exit code."""
    workspace = open_workspace(project_dir, timeout)
    specs = discover_team_specs(workspace.files)
    gate_spec = find_gate_spec(workspace.files)
    if gate_spec is not None:
        specs.append(gate_spec)
    return workspace.executor.stream([*config.TEST_RUNNER_COMMAND, *specs])


def run_lint(project_dir: Path | str, timeout: float | None = None) -> int:
    """Runs the linter in plain mode over the scan targets; returns the exit code."""
    workspace = open_workspace(project_dir, timeout)
    return workspace.executor.stream([*config.LINTER_TEXT_COMMAND, *scan_targets(workspace.files)])
