"""
Combines normalized category scores into the final report.
"""

from typing import Any

from . import config, normalizer
from .config import DEFAULT_SCORING_CONFIG, ScoringConfig
from .models import Category, CategoryScore, CollectedMetrics, ScoreReport


def grade(total: float) -> tuple[str, str]:
    """Letter and label of the first tier whose minimum the total reaches."""
    for minimum, letter, label in config.GRADE_TIERS:
        if total >= minimum:
            return letter, label
    return config.GRADE_FLOOR


def score_categories(
    metrics: CollectedMetrics, scoring: ScoringConfig = DEFAULT_SCORING_CONFIG
) -> tuple[CategoryScore, ...]:
    """Normalizes every raw metric; all eight categories are always present."""
    tests = metrics.tests
    points = {
        Category.STYLE: normalizer.score_style(int(metrics.offense_count.value), scoring),
        Category.COMPLEXITY: normalizer.score_complexity(float(metrics.complexity_total.value), scoring),
        Category.DUPLICATION: normalizer.score_duplication(int(metrics.duplication_total.value), scoring),
        Category.TEST_PASSING: normalizer.score_test_passing(tests.has_tests, tests.all_passed),
        Category.TEST_COVERAGE: (
            normalizer.score_coverage(float(tests.coverage_pct.value), scoring) if tests.has_tests else 0.0
        ),
        Category.TEST_RICHNESS: (
            normalizer.score_richness(int(tests.test_count.value), scoring) if tests.has_tests else 0.0
        ),
        Category.CORRECTNESS: normalizer.score_correctness(bool(metrics.gate.passed.value)),
        Category.AI_USAGE: normalizer.score_ai_usage(
            int(metrics.agents.files_found.value), int(metrics.agents.word_count.value)
        ),
    }
    return tuple(CategoryScore(category=category, points=points[category]) for category in Category)


def _ai_usage_notes(metrics: CollectedMetrics) -> list[str]:
    agents = metrics.agents
    lines = [f"{agent}: {', '.join(entries)}" for agent, entries in agents.found_agents.items()]
    words = int(agents.word_count.value)
    tier = normalizer.instruction_tier(words)
    if agents.best_file is not None and tier is not None:
        lines.append(f"{agents.best_file}: {words} words ({tier[1]})")
    return lines


def build_notes(metrics: CollectedMetrics) -> dict[str, Any]:
    """Display details that are not plain metric values."""
    tests = metrics.tests
    return {
        "has_tests": tests.has_tests,
        "spec_files": list(tests.spec_files),
        "tests_all_passed": tests.all_passed,
        "correctness": metrics.gate.status,
        "gate_spec": metrics.gate.spec_path,
        "ai_usage": _ai_usage_notes(metrics),
        "fallbacks": sorted(m.name.value for m in metrics.by_name().values() if m.is_fallback),
    }


def aggregate(metrics: CollectedMetrics, scoring: ScoringConfig = DEFAULT_SCORING_CONFIG) -> ScoreReport:
    """
    Builds the report for one run.

    The total is the plain sum of the category points. A failed correctness
    gate contributes zero but leaves every other category untouched.
    """
    category_scores = score_categories(metrics, scoring)
    total = normalizer.round_points(sum(score.points for score in category_scores))
    letter, label = grade(total)
    return ScoreReport(
        category_scores=category_scores,
        total=total,
        grade=letter,
        grade_label=label,
        metrics=metrics.by_name(),
        notes=build_notes(metrics),
    )
