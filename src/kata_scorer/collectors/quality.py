"""
Collectors for the code quality tools: style linter, complexity and duplication.
"""

from collections.abc import Sequence

from .. import config
from ..models import MetricName
from ..parsing import JsonPathParser, RegexParser
from .base import Attempt, MetricCollector


def _to_int(raw: object) -> int:
    return int(float(raw))  # type: ignore[arg-type]


class StyleCollector(MetricCollector):
    """Counts linter offenses: JSON report first, then the plain-text summary.

    A JSON report without `summary.offense_count` is a parse failure rather
    than zero offenses, so the plain-text run decides. Falls back to the
    baseline offense count, i.e. no improvement.
    """

    metric = MetricName.OFFENSE_COUNT
    json_parser = JsonPathParser(config.OFFENSE_COUNT_JSON_PATH, _to_int)
    text_parser = RegexParser(config.OFFENSE_COUNT_PATTERN, int)

    def fallback_value(self) -> int:
        return self.scoring.baseline_style_offenses

    def attempts(self, targets: Sequence[str]) -> Sequence[Attempt]:
        return (
            lambda: self.executor.run([*config.LINTER_JSON_COMMAND, *targets]).bind(
                lambda out: self.json_parser.parse(out.stdout)
            ),
            lambda: self.executor.run([*config.LINTER_TEXT_COMMAND, *targets]).bind(
                lambda out: self.text_parser.parse(out.stdout)
            ),
        )


class ComplexityCollector(MetricCollector):
    """Reads the total from the complexity analyzer's summary mode.

    Falls back to the baseline complexity total.
    """

    metric = MetricName.COMPLEXITY_TOTAL
    parser = RegexParser(config.COMPLEXITY_TOTAL_PATTERN, float)

    def fallback_value(self) -> float:
        return self.scoring.baseline_complexity_total

    def attempts(self, targets: Sequence[str]) -> Sequence[Attempt]:
        return (
            lambda: self.executor.run([*config.COMPLEXITY_COMMAND, *targets]).bind(
                lambda out: self.parser.parse(out.stdout)
            ),
        )


class DuplicationCollector(MetricCollector):
    """Reads the duplication analyzer's "Total score".

    Unparsable output counts as no duplication detected, unlike the style and
    complexity collectors which fall back to their baselines.
    """

    metric = MetricName.DUPLICATION_TOTAL
    fallback = 0
    parser = RegexParser(config.DUPLICATION_TOTAL_PATTERN, int)

    def attempts(self, targets: Sequence[str]) -> Sequence[Attempt]:
        return (
            lambda: self.executor.run([*config.DUPLICATION_COMMAND, *targets]).bind(
                lambda out: self.parser.parse(out.stdout)
            ),
        )
