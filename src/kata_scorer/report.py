"""
Renders a ScoreReport as structured data or as a rich terminal summary.
"""

from typing import Any

from rich.console import Console, Group
from rich.panel import Panel
from rich.rule import Rule
from rich.table import Table
from rich.text import Text

from . import config
from .config import DEFAULT_SCORING_CONFIG, ScoringConfig
from .models import Category, MetricName, ScoreReport
from .pipeline import BaselineMetrics

BAR_WIDTH = 10
GRADE_MEDALS = {"S": "🥇", "A": "🥈", "B": "🥉"}


def report_to_dict(report: ScoreReport) -> dict[str, Any]:
    """The machine-readable report shape."""
    details: dict[str, Any] = {name.value: metric.value for name, metric in report.metrics.items()}
    details.update(report.notes)
    return {
        "total_score": report.total,
        "max_score": config.TOTAL_POINTS,
        "grade": report.grade,
        "scores": {score.category.value: score.points for score in report.category_scores},
        "details": details,
        "timestamp": report.timestamp.isoformat(timespec="seconds"),
    }


def bar(points: float, max_points: float) -> str:
    if max_points <= 0:
        return " " * BAR_WIDTH
    filled = min(max(round(points / max_points * BAR_WIDTH), 0), BAR_WIDTH)
    return "█" * filled + "░" * (BAR_WIDTH - filled)


def _fmt(points: float) -> str:
    return f"{points:5.1f}"


def _score_table(report: ScoreReport, rows: list[tuple[str, Category, str]]) -> Table:
    table = Table(show_header=False, box=None, padding=(0, 1))
    table.add_column(style="bold")
    table.add_column(style="green")
    table.add_column(justify="right")
    table.add_column(style="dim")
    for label, category, detail in rows:
        points = report.points(category)
        table.add_row(
            label,
            bar(points, category.max_points),
            f"{_fmt(points)}/{category.max_points:.0f}",
            detail,
        )
    return table


def _section(title: str, total: float, max_points: int, body: Table | Text | Group) -> Panel:
    return Panel(
        body,
        title=f"[bold]{title}[/bold]",
        subtitle=f"{total:.1f} / {max_points}",
        title_align="left",
        subtitle_align="right",
        border_style="blue",
    )


def _value(report: ScoreReport, name: MetricName) -> Any:
    return report.metrics[name].value


def _code_quality(report: ScoreReport) -> Panel:
    rows = [
        ("Style", Category.STYLE, f"({_value(report, MetricName.OFFENSE_COUNT)} offenses)"),
        ("Complexity", Category.COMPLEXITY, f"(complexity: {_value(report, MetricName.COMPLEXITY_TOTAL)})"),
        ("Duplication", Category.DUPLICATION, f"(duplication: {_value(report, MetricName.DUPLICATION_TOTAL)})"),
    ]
    total = report.section_total(Category.STYLE, Category.COMPLEXITY, Category.DUPLICATION)
    return _section("📊 A. Code Quality", total, 40, _score_table(report, rows))


def _tests(report: ScoreReport) -> Panel:
    count = _value(report, MetricName.TEST_COUNT)
    passed = "✓" if report.notes.get("tests_all_passed") else "✗"
    rows = [
        ("Passing", Category.TEST_PASSING, f"({count} tests, pass: {passed})"),
        ("Coverage", Category.TEST_COVERAGE, f"({_value(report, MetricName.COVERAGE_PCT)}%)"),
        ("Richness", Category.TEST_RICHNESS, f"({count} cases)"),
    ]
    total = report.section_total(Category.TEST_PASSING, Category.TEST_COVERAGE, Category.TEST_RICHNESS)
    return _section("🧪 B. Tests", total, 30, _score_table(report, rows))


def _correctness(report: ScoreReport) -> Panel:
    points = report.points(Category.CORRECTNESS)
    status = Text(f"Original spec: {report.notes.get('correctness', '')}")
    if points == 0:
        banner = Text("⚠  GATE FAILED — behavior broken!", style="bold red")
    else:
        banner = Text("All original behaviors preserved", style="green")
    return _section("✅ C. Correctness", points, 20, Group(status, banner))


def _ai_usage(report: ScoreReport) -> Panel:
    points = report.points(Category.AI_USAGE)
    lines = report.notes.get("ai_usage") or []
    body = Text("\n".join(f"• {line}" for line in lines)) if lines else Text("(none detected)", style="dim")
    return _section("🤖 D. AI Agent Usage", points, 10, body)


def render_report(console: Console, report: ScoreReport) -> None:
    """Prints the four report sections and the total."""
    console.print(Rule("[bold magenta]🏆 Refactoring Kata - SCORE REPORT[/bold magenta]"))
    console.print(_code_quality(report))
    console.print(_tests(report))
    console.print(_correctness(report))
    console.print(_ai_usage(report))

    medal = GRADE_MEDALS.get(report.grade, "  ")
    console.print(
        Panel(
            f"[bold]TOTAL SCORE:[/bold]  {report.total} / {config.TOTAL_POINTS}    "
            f"{medal} {report.grade} — {report.grade_label}",
            border_style="magenta",
        )
    )
    fallbacks = report.notes.get("fallbacks") or []
    if fallbacks:
        console.print(f"[yellow]Fallback values used for: {', '.join(fallbacks)}[/yellow]")


def render_baseline(
    console: Console, baseline: BaselineMetrics, scoring: ScoringConfig = DEFAULT_SCORING_CONFIG
) -> None:
    """Prints raw code quality metrics next to the configured baselines."""
    console.print(Rule("[bold yellow]Calculating Baseline Values[/bold yellow]"))
    table = Table(show_header=True, box=None, padding=(0, 2))
    table.add_column("Metric")
    table.add_column("Measured", style="bold magenta", justify="right")
    table.add_column("Configured baseline", style="dim", justify="right")
    table.add_row(
        "Style offenses", str(baseline.offense_count.value), str(scoring.baseline_style_offenses)
    )
    table.add_row(
        "Complexity total",
        str(baseline.complexity_total.value),
        str(scoring.baseline_complexity_total),
    )
    table.add_row(
        "Duplication total",
        str(baseline.duplication_total.value),
        str(scoring.baseline_duplication_total),
    )
    console.print(table)
    console.print("\nUpdate the BASELINE_* constants in kata_scorer/config.py with these values.")
