import pytest

from kata_scorer import normalizer
from kata_scorer.config import ScoringConfig


def test_style_full_points_without_offenses():
    assert normalizer.score_style(0) == 15.0


def test_style_zero_at_and_beyond_baseline():
    assert normalizer.score_style(37) == 0.0
    assert normalizer.score_style(80) == 0.0


def test_style_is_monotonic_non_increasing():
    scores = [normalizer.score_style(raw) for raw in range(0, 38)]
    assert all(a >= b for a, b in zip(scores, scores[1:]))
    assert normalizer.score_style(10) == 10.9


def test_style_guards_zero_baseline():
    config = ScoringConfig(baseline_style_offenses=0)
    assert normalizer.score_style(0, config) == 15.0
    assert normalizer.score_style(3, config) == 0.0


def test_complexity_endpoints():
    assert normalizer.score_complexity(30.0) == 15.0
    assert normalizer.score_complexity(12.5) == 15.0
    assert normalizer.score_complexity(104.4) == 0.0
    assert normalizer.score_complexity(250.0) == 0.0


def test_complexity_interpolates_strictly_inside_range():
    totals = [30.0 + step * 0.5 for step in range(1, 149)]  # 30.5 .. 104.0
    scores = [normalizer.score_complexity(total) for total in totals]
    assert all(0.0 < score < 15.0 for score in scores)
    assert all(a >= b for a, b in zip(scores, scores[1:]))
    assert normalizer.score_complexity(50.0) == 11.0


def test_complexity_near_anchors_stays_inside_range():
    assert normalizer.score_complexity(30.001) == 14.9
    assert normalizer.score_complexity(104.399) == 0.1


def test_duplication_tiers():
    assert normalizer.score_duplication(0) == 10.0
    assert normalizer.score_duplication(100) == 0.0
    assert normalizer.score_duplication(240) == 0.0
    assert normalizer.score_duplication(50) == 5.0
    assert normalizer.score_duplication(96) == 0.4


@pytest.mark.parametrize(
    ("has_tests", "all_passed", "expected"),
    [(False, False, 0.0), (True, True, 10.0), (True, False, 3.0)],
)
def test_test_passing(has_tests, all_passed, expected):
    assert normalizer.score_test_passing(has_tests, all_passed) == expected


def test_coverage_and_richness_are_capped_ratios():
    assert normalizer.score_coverage(100.0) == 10.0
    assert normalizer.score_coverage(55.0) == 5.5
    assert normalizer.score_coverage(0.0) == 0.0
    assert normalizer.score_richness(20) == 10.0
    assert normalizer.score_richness(10) == 5.0
    assert normalizer.score_richness(45) == 10.0


def test_correctness_is_all_or_nothing():
    assert normalizer.score_correctness(True) == 20.0
    assert normalizer.score_correctness(False) == 0.0


@pytest.mark.parametrize(
    ("agent_files", "words", "expected"),
    [
        (0, 0, 0.0),
        (1, 90, 10.0),
        (3, 0, 4.0),
        (0, 80, 6.0),
        (0, 79, 4.0),
        (0, 50, 4.0),
        (0, 20, 2.0),
        (0, 19, 1.0),
        (0, 1, 1.0),
    ],
)
def test_ai_usage_tiers(agent_files, words, expected):
    assert normalizer.score_ai_usage(agent_files, words) == expected


def test_instruction_tier_labels():
    assert normalizer.instruction_tier(0) is None
    assert normalizer.instruction_tier(5) == (1.0, "minimal")
    assert normalizer.instruction_tier(120) == (6.0, "comprehensive")


def test_round_points_rounds_half_up():
    assert normalizer.round_points(0.25) == 0.3
    assert normalizer.round_points(10.949) == 10.9
