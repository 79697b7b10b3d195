import logging

from returns.result import Success

from .. import config
from ..models import GateOutcome, MetricName, RawMetric
from ..services.files import ProjectFiles
from ..services.shell import CommandExecutor

logger = logging.getLogger(__name__)

GATE_PASS = "PASS ✓"
GATE_FAIL = "FAIL ✗"
GATE_MISSING = "⚠ original spec not found"


def find_gate_spec(files: ProjectFiles) -> str | None:
    """Returns the first protected correctness spec that exists, in priority order."""
    return next((path for path in config.GATE_SPEC_CANDIDATES if files.is_file(path)), None)


class GateCollector:
    """Runs the protected correctness spec and judges it by exit status alone."""

    def __init__(self, executor: CommandExecutor, files: ProjectFiles):
        self.executor = executor
        self.files = files

    @property
    def source(self) -> str:
        return type(self).__name__

    def collect(self) -> GateOutcome:
        spec_path = find_gate_spec(self.files)
        if spec_path is None:
            logger.warning("%s: no gate spec at %s", self.source, ", ".join(config.GATE_SPEC_CANDIDATES))
            return GateOutcome(
                passed=RawMetric(MetricName.GATE_PASSED, False, self.source),
                spec_path=None,
                status=GATE_MISSING,
            )

        result = self.executor.run([*config.TEST_RUNNER_COMMAND, spec_path, *config.GATE_RUNNER_ARGS])
        passed = isinstance(result, Success) and result.unwrap().succeeded
        if not isinstance(result, Success):
            logger.warning("%s: could not run %s (%s)", self.source, spec_path, result.failure())

        return GateOutcome(
            passed=RawMetric(MetricName.GATE_PASSED, passed, self.source),
            spec_path=spec_path,
            status=GATE_PASS if passed else GATE_FAIL,
        )
