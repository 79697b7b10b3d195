"""
Configuration for the kata scorer.

Baseline values were measured on the unmodified kata. Run `kata-score baseline`
against the original code to recalculate them.
"""

from pathlib import Path
from typing import Final

from pydantic import BaseModel, ConfigDict, Field, model_validator

# --- Scoring ---
TOTAL_POINTS: Final[int] = 100

BASELINE_STYLE_OFFENSES: Final[int] = 37
BASELINE_COMPLEXITY_TOTAL: Final[float] = 104.4
BASELINE_DUPLICATION_TOTAL: Final[int] = 96

TARGET_STYLE_OFFENSES: Final[int] = 0
TARGET_COMPLEXITY_TOTAL: Final[float] = 30.0
TARGET_DUPLICATION_TOTAL: Final[int] = 0
TARGET_COVERAGE_PCT: Final[float] = 100.0
TARGET_TEST_COUNT: Final[int] = 20

DUPLICATION_CEILING: Final[int] = 100

# (minimum total, letter, label), highest first
GRADE_TIERS: Final[tuple[tuple[float, str, str], ...]] = (
    (90.0, "S", "Amazing!"),
    (80.0, "A", "Excellent"),
    (70.0, "B", "Great"),
    (60.0, "C", "Good"),
    (50.0, "D", "Fair"),
)
GRADE_FLOOR: Final[tuple[str, str]] = ("E", "Needs Work")

# --- Scan Targets ---
SCAN_PATHS: Final[tuple[str, ...]] = ("lib", "src")
SCAN_GLOB: Final[str] = "*.rb"
SCAN_EXCLUDES: Final[frozenset[str]] = frozenset(
    {"score.rb", "texttest_fixture.rb", "Gemfile", "Rakefile"}
)
SCAN_EXCLUDE_SUFFIXES: Final[tuple[str, ...]] = ("_spec.rb", "_test.rb")
SCAN_FALLBACK_TARGET: Final[str] = "."

# --- Test Discovery ---
TEST_GLOBS: Final[tuple[str, ...]] = ("spec/**/*_spec.rb", "test/**/*_test.rb", "*_spec.rb")
PROTECTED_TEST_MARKERS: Final[tuple[str, ...]] = ("golden", "original")
GATE_SPEC_CANDIDATES: Final[tuple[str, ...]] = (
    "golden_master_spec.rb",
    "spec/golden_master_spec.rb",
    "spec/original_spec.rb",
)

# --- Coverage ---
COVERAGE_HELPER_FILENAME: Final[str] = ".simplecov_contest.rb"
COVERAGE_RESULT_FILE: Final[Path] = Path("coverage") / ".last_run.json"
COVERAGE_HELPER_SOURCE: Final[str] = """\
require 'simplecov'
SimpleCov.start do
  add_filter '/spec/'
  add_filter '/test/'
  add_filter 'score.rb'
  add_filter 'golden_master_spec.rb'
  add_filter 'texttest_fixture.rb'
  add_filter '.simplecov_contest.rb'
end
"""

# --- Tool Commands ---
LINTER_JSON_COMMAND: Final[tuple[str, ...]] = ("rubocop", "--format", "json", "--force-exclusion")
LINTER_TEXT_COMMAND: Final[tuple[str, ...]] = ("rubocop",)
COMPLEXITY_COMMAND: Final[tuple[str, ...]] = ("flog", "-s")
DUPLICATION_COMMAND: Final[tuple[str, ...]] = ("flay",)
TEST_RUNNER_COMMAND: Final[tuple[str, ...]] = ("rspec",)
TEST_RUNNER_JSON_ARGS: Final[tuple[str, ...]] = ("--format", "json")
GATE_RUNNER_ARGS: Final[tuple[str, ...]] = ("--format", "progress")

# --- Output Patterns ---
OFFENSE_COUNT_JSON_PATH: Final[tuple[str, ...]] = ("summary", "offense_count")
OFFENSE_COUNT_PATTERN: Final[str] = r"(\d+)\s+offense"
COMPLEXITY_TOTAL_PATTERN: Final[str] = r"([\d.]+):\s+flog total"
DUPLICATION_TOTAL_PATTERN: Final[str] = r"Total score.*?=\s*(\d+)"
EXAMPLE_COUNT_JSON_PATH: Final[tuple[str, ...]] = ("summary", "example_count")
FAILURE_COUNT_JSON_PATH: Final[tuple[str, ...]] = ("summary", "failure_count")
COVERAGE_LINE_JSON_PATH: Final[tuple[str, ...]] = ("result", "line")

# --- AI Agent Usage ---
AGENT_CONFIG_FILES: Final[dict[str, str]] = {
    "CLAUDE.md": "Claude Code",
    ".claude/CLAUDE.md": "Claude Code",
    ".claude/settings.json": "Claude Code",
    ".cursorrules": "Cursor",
    ".cursor/rules": "Cursor",
    ".github/copilot-instructions.md": "GitHub Copilot",
    ".windsurfrules": "Windsurf",
    ".aider.conf.yml": "Aider",
    "AGENTS.md": "Generic",
}
# (agent, label, globs); each matched collection contributes "label (N)"
AGENT_COLLECTIONS: Final[tuple[tuple[str, str, tuple[str, ...]], ...]] = (
    ("Claude Code", "skills", (".claude/skills/*/SKILL.md",)),
    ("Claude Code", "subagents", (".claude/agents/*.md",)),
    ("Claude Code", "commands", (".claude/commands/*.md",)),
    ("GitHub Copilot", "skills", (".github/skills/*/SKILL.md",)),
    ("GitHub Copilot", "agents", (".github/agents/*.md", ".github/agents/**/*.agent.md")),
    ("GitHub Copilot", "prompts", (".github/prompts/*.md",)),
)
INSTRUCTION_FILES: Final[tuple[str, ...]] = (
    "CLAUDE.md",
    ".claude/CLAUDE.md",
    ".cursorrules",
    ".cursor/rules",
    ".github/copilot-instructions.md",
    ".windsurfrules",
    ".aider.conf.yml",
    "AGENTS.md",
)
CLAUDE_CONFIG_DIR: Final[str] = ".claude"
CLAUDE_COLLECTION_DIRS: Final[tuple[str, ...]] = ("skills", "agents", "commands")

AGENT_PRESENCE_POINTS: Final[float] = 4.0
# (minimum words, points, label), highest first; any non-empty file earns the last tier
INSTRUCTION_TIERS: Final[tuple[tuple[int, float, str], ...]] = (
    (80, 6.0, "comprehensive"),
    (50, 4.0, "substantial"),
    (20, 2.0, "basic"),
    (1, 1.0, "minimal"),
)

# --- Environment ---
PROJECT_DIR_ENVVAR: Final[str] = "KATA_SCORE_PROJECT"
TIMEOUT_ENVVAR: Final[str] = "KATA_SCORE_TIMEOUT"


class ImmutableModel(BaseModel):
    """Base class for immutable Pydantic models."""

    model_config = ConfigDict(frozen=True, validate_default=True)


class ScoringConfig(ImmutableModel):
    """Baseline and target anchors used by the normalizer."""

    baseline_style_offenses: int = Field(default=BASELINE_STYLE_OFFENSES, ge=0)
    baseline_complexity_total: float = Field(default=BASELINE_COMPLEXITY_TOTAL, ge=0.0)
    baseline_duplication_total: int = Field(default=BASELINE_DUPLICATION_TOTAL, ge=0)
    target_complexity_total: float = Field(default=TARGET_COMPLEXITY_TOTAL, ge=0.0)
    target_coverage_pct: float = Field(default=TARGET_COVERAGE_PCT, gt=0.0)
    target_test_count: int = Field(default=TARGET_TEST_COUNT, gt=0)
    duplication_ceiling: int = Field(default=DUPLICATION_CEILING, gt=0)

    @model_validator(mode="after")
    def _check_complexity_anchors(self) -> "ScoringConfig":
        if self.target_complexity_total >= self.baseline_complexity_total:
            raise ValueError("target_complexity_total must be below baseline_complexity_total")
        return self


DEFAULT_SCORING_CONFIG: Final[ScoringConfig] = ScoringConfig()

# --- SSoT Enforcement ---
__all__ = [
    "AGENT_COLLECTIONS",
    "AGENT_CONFIG_FILES",
    "AGENT_PRESENCE_POINTS",
    "BASELINE_COMPLEXITY_TOTAL",
    "BASELINE_DUPLICATION_TOTAL",
    "BASELINE_STYLE_OFFENSES",
    "CLAUDE_COLLECTION_DIRS",
    "CLAUDE_CONFIG_DIR",
    "COMPLEXITY_COMMAND",
    "COMPLEXITY_TOTAL_PATTERN",
    "COVERAGE_HELPER_FILENAME",
    "COVERAGE_HELPER_SOURCE",
    "COVERAGE_LINE_JSON_PATH",
    "COVERAGE_RESULT_FILE",
    "DEFAULT_SCORING_CONFIG",
    "DUPLICATION_CEILING",
    "DUPLICATION_COMMAND",
    "DUPLICATION_TOTAL_PATTERN",
    "EXAMPLE_COUNT_JSON_PATH",
    "FAILURE_COUNT_JSON_PATH",
    "GATE_RUNNER_ARGS",
    "GATE_SPEC_CANDIDATES",
    "GRADE_FLOOR",
    "GRADE_TIERS",
    "INSTRUCTION_FILES",
    "INSTRUCTION_TIERS",
    "ImmutableModel",
    "LINTER_JSON_COMMAND",
    "LINTER_TEXT_COMMAND",
    "OFFENSE_COUNT_JSON_PATH",
    "OFFENSE_COUNT_PATTERN",
    "PROJECT_DIR_ENVVAR",
    "PROTECTED_TEST_MARKERS",
    "SCAN_EXCLUDES",
    "SCAN_EXCLUDE_SUFFIXES",
    "SCAN_FALLBACK_TARGET",
    "SCAN_GLOB",
    "SCAN_PATHS",
    "ScoringConfig",
    "TARGET_COMPLEXITY_TOTAL",
    "TARGET_COVERAGE_PCT",
    "TARGET_DUPLICATION_TOTAL",
    "TARGET_STYLE_OFFENSES",
    "TARGET_TEST_COUNT",
    "TEST_GLOBS",
    "TEST_RUNNER_COMMAND",
    "TEST_RUNNER_JSON_ARGS",
    "TIMEOUT_ENVVAR",
    "TOTAL_POINTS",
]
