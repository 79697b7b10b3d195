"""
Collectors for the team's own test suite: discovery, results and coverage.

Protected specs (paths containing "golden" or "original") belong to the
correctness gate and are never counted as the team's tests.
"""

import logging
from collections.abc import Sequence

from returns.result import Failure, Result, Success

from .. import config
from ..models import MetricName, RawMetric, SuiteMetrics
from ..parsing import JsonPathParser, dig
from ..services.files import ProjectFiles
from ..services.shell import CommandExecutor

logger = logging.getLogger(__name__)


def _is_protected(path: str) -> bool:
    return any(marker in path for marker in config.PROTECTED_TEST_MARKERS)


def discover_team_specs(files: ProjectFiles) -> list[str]:
    """Finds the team's spec files under either supported layout."""
    found: list[str] = []
    for pattern in config.TEST_GLOBS:
        for path in files.glob(pattern):
            if path not in found and files.is_file(path) and not _is_protected(path):
                found.append(path)
    return found


class SpecRunCollector:
    """Runs the team's specs once with structured output to count examples and failures."""

    example_parser = JsonPathParser(config.EXAMPLE_COUNT_JSON_PATH, int)
    failure_parser = JsonPathParser(config.FAILURE_COUNT_JSON_PATH, int)

    def __init__(self, executor: CommandExecutor):
        self.executor = executor

    @property
    def source(self) -> str:
        return type(self).__name__

    def collect(self, spec_files: Sequence[str]) -> tuple[RawMetric, RawMetric]:
        command = [*config.TEST_RUNNER_COMMAND, *config.TEST_RUNNER_JSON_ARGS, *spec_files]
        result = self.executor.run(command).bind(
            lambda out: self.example_parser.parse(out.stdout).bind(
                lambda examples: self.failure_parser.parse(out.stdout).map(
                    lambda failures: (examples, failures)
                )
            )
        )
        if isinstance(result, Success):
            examples, failures = result.unwrap()
            return (
                RawMetric(MetricName.TEST_COUNT, examples, self.source),
                RawMetric(MetricName.FAILURE_COUNT, failures, self.source),
            )

        logger.warning("%s: test results unreadable (%s)", self.source, result.failure())
        return (
            RawMetric(MetricName.TEST_COUNT, 0, self.source, is_fallback=True),
            RawMetric(MetricName.FAILURE_COUNT, 0, self.source, is_fallback=True),
        )


class CoverageCollector:
    """Re-runs the specs under coverage instrumentation and reads the line coverage.

    The instrumentation helper exists only for the duration of that run.
    A missing or unreadable coverage artifact yields 0.0, and so does a run
    that never happened: an artifact left over from an earlier run is not read.
    """

    def __init__(self, executor: CommandExecutor, files: ProjectFiles):
        self.executor = executor
        self.files = files

    @property
    def source(self) -> str:
        return type(self).__name__

    def _run_instrumented(self, spec_files: Sequence[str]) -> Result[None, str]:
        helper = config.COVERAGE_HELPER_FILENAME
        try:
            with self.files.transient_file(helper, config.COVERAGE_HELPER_SOURCE):
                outcome = self.executor.run(
                    [*config.TEST_RUNNER_COMMAND, "--require", f"./{helper}", *spec_files]
                )
        except (OSError, ValueError) as e:
            return Failure(f"coverage helper {helper} unusable: {e}")
        return outcome.map(lambda _: None)

    def _read_line_coverage(self) -> Result[float, str]:
        return (
            self.files.read_json(config.COVERAGE_RESULT_FILE)
            .bind(lambda data: dig(data, config.COVERAGE_LINE_JSON_PATH))
            .bind(_as_percentage)
        )

    def collect(self, spec_files: Sequence[str]) -> RawMetric:
        result = self._run_instrumented(spec_files).bind(lambda _: self._read_line_coverage())
        if isinstance(result, Success):
            return RawMetric(MetricName.COVERAGE_PCT, result.unwrap(), self.source)

        logger.warning("%s: coverage unreadable (%s), using 0.0", self.source, result.failure())
        return RawMetric(MetricName.COVERAGE_PCT, 0.0, self.source, is_fallback=True)


def _as_percentage(raw: object) -> Result[float, str]:
    if isinstance(raw, bool) or not isinstance(raw, int | float | str):
        return Failure(f"Expected a number for coverage, got {raw!r}")
    try:
        return Success(float(raw))
    except ValueError as e:
        return Failure(f"Could not convert coverage: {e}")


def collect_suite(executor: CommandExecutor, files: ProjectFiles) -> SuiteMetrics:
    """
    Gathers every test-related metric.

    With no team specs no tool is invoked and every metric is zero.
    """
    spec_files = discover_team_specs(files)
    if not spec_files:
        logger.info("no team specs found")
        zero = "discover_team_specs"
        return SuiteMetrics(
            spec_files=(),
            test_count=RawMetric(MetricName.TEST_COUNT, 0, zero),
            failure_count=RawMetric(MetricName.FAILURE_COUNT, 0, zero),
            coverage_pct=RawMetric(MetricName.COVERAGE_PCT, 0.0, zero),
        )

    test_count, failure_count = SpecRunCollector(executor).collect(spec_files)
    coverage_pct = CoverageCollector(executor, files).collect(spec_files)
    return SuiteMetrics(
        spec_files=tuple(spec_files),
        test_count=test_count,
        failure_count=failure_count,
        coverage_pct=coverage_pct,
    )
