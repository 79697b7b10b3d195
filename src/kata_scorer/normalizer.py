"""
Pure mappings from raw metrics to category points.

Every function clamps to its category's range and rounds to one decimal place;
callers never re-clamp. The baseline and target anchors come from an explicit
`ScoringConfig` so the functions stay free of module state.
"""

from decimal import ROUND_HALF_UP, Decimal

from . import config
from .config import DEFAULT_SCORING_CONFIG, ScoringConfig
from .models import Category


def round_points(value: float) -> float:
    """Rounds half away from zero to one decimal place."""
    return float(Decimal(str(value)).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def _clamp(value: float, category: Category) -> float:
    return round_points(min(max(value, 0.0), category.max_points))


def score_style(offenses: int, scoring: ScoringConfig = DEFAULT_SCORING_CONFIG) -> float:
    """Ratio of offenses removed relative to the baseline."""
    ceiling = Category.STYLE.max_points
    baseline = max(scoring.baseline_style_offenses, 1)
    improvement = max((baseline - offenses) / baseline, 0.0)
    return _clamp(improvement * ceiling, Category.STYLE)


def score_complexity(total: float, scoring: ScoringConfig = DEFAULT_SCORING_CONFIG) -> float:
    """Full points at or below the target, none at or above the baseline, linear between."""
    ceiling = Category.COMPLEXITY.max_points
    baseline = scoring.baseline_complexity_total
    target = scoring.target_complexity_total
    if total <= target:
        return ceiling
    if total >= baseline:
        return 0.0
    points = _clamp((baseline - total) / (baseline - target) * ceiling, Category.COMPLEXITY)
    # strictly inside the range for any total strictly between target and baseline
    return min(max(points, 0.1), ceiling - 0.1)


def score_duplication(total: int, scoring: ScoringConfig = DEFAULT_SCORING_CONFIG) -> float:
    """Full points with no duplication, none at or above the ceiling, linear between."""
    ceiling = Category.DUPLICATION.max_points
    limit = scoring.duplication_ceiling
    if total <= 0:
        return ceiling
    if total >= limit:
        return 0.0
    return _clamp((limit - total) / limit * ceiling, Category.DUPLICATION)


def score_test_passing(has_tests: bool, all_passed: bool) -> float:
    """
    Binary with partial credit.

    Args:
        has_tests: Whether the team wrote any specs at all.
        all_passed: Whether the runner reported a positive example count and
            no failures.

    Returns:
        10.0 when every test passes, 3.0 when tests exist but fail or their
        results are inconclusive, 0.0 without tests.
    """
    if not has_tests:
        return 0.0
    return Category.TEST_PASSING.max_points if all_passed else 3.0


def _ratio_capped(ratio: float, category: Category) -> float:
    return _clamp(ratio * category.max_points, category)


def score_coverage(coverage_pct: float, scoring: ScoringConfig = DEFAULT_SCORING_CONFIG) -> float:
    return _ratio_capped(coverage_pct / scoring.target_coverage_pct, Category.TEST_COVERAGE)


def score_richness(test_count: int, scoring: ScoringConfig = DEFAULT_SCORING_CONFIG) -> float:
    return _ratio_capped(test_count / scoring.target_test_count, Category.TEST_RICHNESS)


def score_correctness(gate_passed: bool) -> float:
    """The gate: all or nothing, never interpolated."""
    return Category.CORRECTNESS.max_points if gate_passed else 0.0


def instruction_tier(words: int) -> tuple[float, str] | None:
    """Points and label for the richest instruction file, None when there is none."""
    for minimum, points, label in config.INSTRUCTION_TIERS:
        if words >= minimum:
            return points, label
    return None


def score_ai_usage(agent_files_found: int, instruction_words: int) -> float:
    """Flat credit for any agent configuration plus tiered credit for instruction richness."""
    points = config.AGENT_PRESENCE_POINTS if agent_files_found > 0 else 0.0
    tier = instruction_tier(instruction_words)
    if tier is not None:
        points += tier[0]
    return _clamp(points, Category.AI_USAGE)


__all__ = [
    "instruction_tier",
    "round_points",
    "score_ai_usage",
    "score_complexity",
    "score_correctness",
    "score_coverage",
    "score_duplication",
    "score_richness",
    "score_style",
    "score_test_passing",
]
