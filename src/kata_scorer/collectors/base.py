import logging
from abc import ABC, abstractmethod
from collections.abc import Callable, Sequence

from returns.result import Result, Success

from ..config import DEFAULT_SCORING_CONFIG, ScoringConfig
from ..models import MetricName, RawMetric
from ..parsing import first_success
from ..services.files import ProjectFiles
from ..services.shell import CommandExecutor

logger = logging.getLogger(__name__)

Attempt = Callable[[], Result[float | int, str]]


class MetricCollector(ABC):
    """Invokes one external tool and reduces its output to a single metric.

    Subclasses supply the ordered parse attempts and the fallback value.
    `collect` never raises for tool or parse failures: exhausting every
    attempt yields the fallback, flagged with `is_fallback=True`.
    """

    metric: MetricName
    fallback: float | int

    def __init__(
        self,
        executor: CommandExecutor,
        files: ProjectFiles,
        scoring: ScoringConfig = DEFAULT_SCORING_CONFIG,
    ):
        self.executor = executor
        self.files = files
        self.scoring = scoring

    @property
    def source(self) -> str:
        return type(self).__name__

    @abstractmethod
    def attempts(self, targets: Sequence[str]) -> Sequence[Attempt]:
        """Ordered parse strategies; the first success wins."""

    def fallback_value(self) -> float | int:
        return self.fallback

    def collect(self, targets: Sequence[str]) -> RawMetric:
        result = first_success(self.attempts(targets))
        if isinstance(result, Success):
            return RawMetric(self.metric, result.unwrap(), self.source)

        fallback = self.fallback_value()
        logger.warning(
            "%s: could not read %s (%s), using fallback %s",
            self.source,
            self.metric.value,
            result.failure(),
            fallback,
        )
        return RawMetric(self.metric, fallback, self.source, is_fallback=True)
