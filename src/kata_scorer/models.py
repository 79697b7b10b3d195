"""
Data models shared by the collectors, normalizer, aggregator and report.
"""

from __future__ import annotations

import enum
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


class MetricName(str, enum.Enum):
    """Raw measurements produced by the collectors."""

    OFFENSE_COUNT = "offense_count"
    COMPLEXITY_TOTAL = "complexity_total"
    DUPLICATION_TOTAL = "duplication_total"
    TEST_COUNT = "test_count"
    FAILURE_COUNT = "failure_count"
    COVERAGE_PCT = "coverage_pct"
    GATE_PASSED = "gate_passed"
    AGENT_FILES_FOUND = "agent_files_found"
    INSTRUCTION_WORD_COUNT = "instruction_word_count"


class Category(str, enum.Enum):
    """Scored categories, in report order."""

    STYLE = "style"
    COMPLEXITY = "complexity"
    DUPLICATION = "duplication"
    TEST_PASSING = "test_passing"
    TEST_COVERAGE = "test_coverage"
    TEST_RICHNESS = "test_richness"
    CORRECTNESS = "correctness"
    AI_USAGE = "ai_usage"

    @property
    def max_points(self) -> float:
        return CATEGORY_MAX_POINTS[self]


CATEGORY_MAX_POINTS: Mapping[Category, float] = {
    Category.STYLE: 15.0,
    Category.COMPLEXITY: 15.0,
    Category.DUPLICATION: 10.0,
    Category.TEST_PASSING: 10.0,
    Category.TEST_COVERAGE: 10.0,
    Category.TEST_RICHNESS: 10.0,
    Category.CORRECTNESS: 20.0,
    Category.AI_USAGE: 10.0,
}


@dataclass(frozen=True, slots=True)
class CommandOutput:
    """Captured result of a completed external tool process."""

    stdout: str
    stderr: str
    exit_code: int

    @property
    def succeeded(self) -> bool:
        return self.exit_code == 0


@dataclass(frozen=True, slots=True)
class RawMetric:
    """One collected measurement.

    Attributes:
        name: Which measurement this is.
        value: The numeric or boolean value.
        source: Name of the collector that produced it.
        is_fallback: True when the tool output could not be parsed and a
            default was substituted.
    """

    name: MetricName
    value: float | int | bool
    source: str
    is_fallback: bool = False


@dataclass(frozen=True, slots=True)
class SuiteMetrics:
    """Everything the test collectors learned about the team's own specs."""

    spec_files: tuple[str, ...]
    test_count: RawMetric
    failure_count: RawMetric
    coverage_pct: RawMetric

    @property
    def has_tests(self) -> bool:
        return bool(self.spec_files)

    @property
    def all_passed(self) -> bool:
        return (
            self.has_tests
            and not self.test_count.is_fallback
            and self.test_count.value > 0
            and self.failure_count.value == 0
        )


@dataclass(frozen=True, slots=True)
class GateOutcome:
    """Result of running the protected correctness spec."""

    passed: RawMetric
    spec_path: str | None
    status: str


@dataclass(frozen=True, slots=True)
class AgentUsage:
    """Detected agent configuration and the richest instruction file."""

    files_found: RawMetric
    word_count: RawMetric
    found_agents: Mapping[str, Sequence[str]] = field(default_factory=dict)
    best_file: str | None = None


@dataclass(frozen=True, slots=True)
class CollectedMetrics:
    """All raw measurements of one run, before normalization."""

    offense_count: RawMetric
    complexity_total: RawMetric
    duplication_total: RawMetric
    tests: SuiteMetrics
    gate: GateOutcome
    agents: AgentUsage

    def by_name(self) -> dict[MetricName, RawMetric]:
        metrics = (
            self.offense_count,
            self.complexity_total,
            self.duplication_total,
            self.tests.test_count,
            self.tests.failure_count,
            self.tests.coverage_pct,
            self.gate.passed,
            self.agents.files_found,
            self.agents.word_count,
        )
        return {metric.name: metric for metric in metrics}


class CategoryScore(BaseModel):
    """A category's points, always within [0, max]."""

    model_config = ConfigDict(frozen=True)

    category: Category
    points: float = Field(ge=0.0)

    @property
    def max(self) -> float:
        return self.category.max_points

    @model_validator(mode="after")
    def _check_ceiling(self) -> CategoryScore:
        if self.points > self.category.max_points:
            raise ValueError(
                f"{self.category.value} scored {self.points}, above its maximum "
                f"{self.category.max_points}"
            )
        return self


@dataclass(frozen=True)
class ScoreReport:
    """The aggregate of one scoring run.

    `total` is the plain sum of all eight category scores; no category
    suppresses another, including a failed correctness gate.
    """

    category_scores: tuple[CategoryScore, ...]
    total: float
    grade: str
    grade_label: str
    metrics: Mapping[MetricName, RawMetric]
    notes: Mapping[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=lambda: datetime.now().astimezone())

    def __post_init__(self) -> None:
        if not 0.0 <= self.total <= 100.0:
            raise ValueError(f"total score {self.total} outside [0, 100]")

    def points(self, category: Category) -> float:
        return next(s.points for s in self.category_scores if s.category is category)

    def section_total(self, *categories: Category) -> float:
        return round(sum(self.points(c) for c in categories), 1)


__all__ = [
    "CATEGORY_MAX_POINTS",
    "AgentUsage",
    "Category",
    "CategoryScore",
    "CollectedMetrics",
    "CommandOutput",
    "GateOutcome",
    "MetricName",
    "RawMetric",
    "ScoreReport",
    "SuiteMetrics",
]
