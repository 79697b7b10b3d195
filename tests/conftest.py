from collections.abc import Callable, Sequence
from pathlib import Path

import pytest
from returns.result import Failure, Result, Success

from kata_scorer.models import (
    AgentUsage,
    CollectedMetrics,
    CommandOutput,
    GateOutcome,
    MetricName,
    RawMetric,
    SuiteMetrics,
)
from kata_scorer.services.files import ProjectFiles

Handler = Callable[[list[str]], Result[CommandOutput, str]]


class FakeExecutor:
    """Stands in for CommandExecutor; answers by tool name or through a handler."""

    def __init__(self, outputs: dict[str, CommandOutput] | None = None, handler: Handler | None = None):
        self.outputs = outputs or {}
        self.handler = handler
        self.calls: list[list[str]] = []

    def run(self, command: Sequence[str]) -> Result[CommandOutput, str]:
        argv = list(command)
        self.calls.append(argv)
        if self.handler is not None:
            return self.handler(argv)
        if argv[0] in self.outputs:
            return Success(self.outputs[argv[0]])
        return Failure(f"Command not found: {argv[0]}")

    def stream(self, command: Sequence[str]) -> int:
        self.calls.append(list(command))
        return 0


def output(stdout: str = "", exit_code: int = 0) -> CommandOutput:
    return CommandOutput(stdout=stdout, stderr="", exit_code=exit_code)


@pytest.fixture
def project(tmp_path: Path) -> ProjectFiles:
    return ProjectFiles(tmp_path)


@pytest.fixture
def write_file(tmp_path: Path) -> Callable[..., Path]:
    def _write(relative: str, content: str = "") -> Path:
        path = tmp_path / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def make_metrics() -> Callable[..., CollectedMetrics]:
    """Builds CollectedMetrics for a perfect submission, with keyword overrides."""

    def _make(
        offenses: int = 0,
        complexity: float = 20.0,
        duplication: int = 0,
        spec_files: tuple[str, ...] = ("spec/item_spec.rb",),
        test_count: int = 20,
        failure_count: int = 0,
        coverage: float = 100.0,
        tests_fallback: bool = False,
        gate_passed: bool = True,
        agent_files: int = 1,
        words: int = 90,
    ) -> CollectedMetrics:
        def metric(name: MetricName, value, is_fallback: bool = False) -> RawMetric:
            return RawMetric(name, value, "test", is_fallback)

        return CollectedMetrics(
            offense_count=metric(MetricName.OFFENSE_COUNT, offenses),
            complexity_total=metric(MetricName.COMPLEXITY_TOTAL, complexity),
            duplication_total=metric(MetricName.DUPLICATION_TOTAL, duplication),
            tests=SuiteMetrics(
                spec_files=spec_files,
                test_count=metric(MetricName.TEST_COUNT, test_count, tests_fallback),
                failure_count=metric(MetricName.FAILURE_COUNT, failure_count, tests_fallback),
                coverage_pct=metric(MetricName.COVERAGE_PCT, coverage),
            ),
            gate=GateOutcome(
                passed=metric(MetricName.GATE_PASSED, gate_passed),
                spec_path="golden_master_spec.rb",
                status="PASS ✓" if gate_passed else "FAIL ✗",
            ),
            agents=AgentUsage(
                files_found=metric(MetricName.AGENT_FILES_FOUND, agent_files),
                word_count=metric(MetricName.INSTRUCTION_WORD_COUNT, words),
                found_agents={"Claude Code": ["CLAUDE.md"]} if agent_files else {},
                best_file="CLAUDE.md" if words else None,
            ),
        )

    return _make


@pytest.fixture
def fake_executor() -> type[FakeExecutor]:
    return FakeExecutor


@pytest.fixture
def tool_output() -> Callable[..., CommandOutput]:
    return output
