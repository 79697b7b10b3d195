"""
Detects AI agent configuration in the scored project.

Two independent, read-only checks: which agent configuration files or
collections exist, and how many words the richest instruction file holds.
"""

import logging
import re

from returns.result import Success

from .. import config
from ..models import AgentUsage, MetricName, RawMetric
from ..services.files import ProjectFiles

logger = logging.getLogger(__name__)

_CLAUDE_COLLECTION = re.compile(
    rf"^{re.escape(config.CLAUDE_CONFIG_DIR)}/({'|'.join(config.CLAUDE_COLLECTION_DIRS)})/"
)


def _collection_matches(files: ProjectFiles, globs: tuple[str, ...]) -> list[str]:
    matches: list[str] = []
    for pattern in globs:
        matches.extend(path for path in files.glob(pattern) if path not in matches)
    return matches


def word_count(text: str) -> int:
    """Whitespace-separated token count."""
    return len(text.split())


class AgentUsageCollector:
    """Finds agent configuration and measures instruction richness."""

    def __init__(self, files: ProjectFiles):
        self.files = files

    @property
    def source(self) -> str:
        return type(self).__name__

    def _detect_configuration(self) -> dict[str, list[str]]:
        found: dict[str, list[str]] = {}
        for path, agent in config.AGENT_CONFIG_FILES.items():
            if self.files.exists(path):
                found.setdefault(agent, []).append(path)

        for agent, label, globs in config.AGENT_COLLECTIONS:
            matches = _collection_matches(self.files, globs)
            if matches:
                found.setdefault(agent, []).append(f"{label} ({len(matches)})")

        extras = [
            path
            for path in self.files.files_under(config.CLAUDE_CONFIG_DIR)
            if path not in config.AGENT_CONFIG_FILES and not _CLAUDE_COLLECTION.match(path)
        ]
        if extras:
            found.setdefault("Claude Code", []).append(f"other config ({len(extras)} files)")
        return found

    def _instruction_candidates(self) -> list[str]:
        candidates = list(config.INSTRUCTION_FILES)
        for _agent, _label, globs in config.AGENT_COLLECTIONS:
            candidates.extend(_collection_matches(self.files, globs))
        return candidates

    def _richest_instructions(self) -> tuple[str | None, int]:
        best_file: str | None = None
        best_count = 0
        for path in self._instruction_candidates():
            if not self.files.is_file(path):
                continue
            result = self.files.read_text(path)
            if not isinstance(result, Success):
                logger.warning("%s: could not read %s (%s)", self.source, path, result.failure())
                continue
            count = word_count(result.unwrap())
            if count > best_count:
                best_file, best_count = path, count
        return best_file, best_count

    def collect(self) -> AgentUsage:
        found = self._detect_configuration()
        best_file, best_count = self._richest_instructions()
        detected = sum(len(entries) for entries in found.values())
        logger.debug("%s: %d agent entries, richest file %s", self.source, detected, best_file)
        return AgentUsage(
            files_found=RawMetric(MetricName.AGENT_FILES_FOUND, detected, self.source),
            word_count=RawMetric(MetricName.INSTRUCTION_WORD_COUNT, best_count, self.source),
            found_agents=found,
            best_file=best_file,
        )
