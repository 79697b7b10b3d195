"""
Command-line interface for the kata scorer.

Scores a refactoring kata submission by running the style linter, complexity
and duplication analyzers, the team's own specs under coverage, the protected
correctness spec, and an AI agent configuration check.
"""

import json
import logging
import sys
from pathlib import Path
from typing import Annotated

import typer
from pydantic import ValidationError
from rich import print as rprint
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel

from . import __version__, config, pipeline
from .config import ScoringConfig
from .errors import ScorerError
from .report import render_baseline, render_report, report_to_dict

console = Console()
err_console = Console(stderr=True)

app = typer.Typer(
    name="kata-score",
    help="🏆 Automatic scoring for refactoring kata submissions",
    add_completion=False,
    rich_markup_mode="rich",
    pretty_exceptions_show_locals=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)

ProjectOption = Annotated[
    Path,
    typer.Option(
        "--project",
        "-p",
        help="Directory of the submission to score",
        envvar=config.PROJECT_DIR_ENVVAR,
        file_okay=False,
        dir_okay=True,
    ),
]
TimeoutOption = Annotated[
    float | None,
    typer.Option(
        "--timeout",
        min=0.1,
        help="Seconds before an external tool is abandoned (default: no limit)",
        envvar=config.TIMEOUT_ENVVAR,
    ),
]
VerboseOption = Annotated[
    bool,
    typer.Option("--verbose", "-v", help="Log every tool invocation and fallback"),
]


def configure_logging(verbose: bool) -> None:
    """Sends log records to stderr so stdout stays clean for JSON output."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=verbose, rich_tracebacks=True)],
        force=True,
    )


def _format_validation_errors(validation_error: ValidationError) -> str:
    """Format Pydantic validation errors into user-friendly CLI messages."""
    error_lines = []
    for error in validation_error.errors():
        field = " -> ".join(str(loc) for loc in error["loc"]) or "config"
        error_lines.append(f"  • {field}: {error['msg']}")
    return "\n".join(error_lines)


def load_scoring_config() -> ScoringConfig:
    try:
        return ScoringConfig()
    except ValidationError as e:
        raise typer.BadParameter(
            f"Invalid scoring configuration:\n{_format_validation_errors(e)}"
        ) from e


def _fail(error: ScorerError) -> typer.Exit:
    err_console.print(
        Panel(f"[bold red]Fatal:[/bold red] {error}", title="Scoring aborted", border_style="red")
    )
    return typer.Exit(code=2)


@app.command()
def score(
    project: ProjectOption = Path("."),
    json_output: Annotated[
        bool, typer.Option("--json", help="Print the report as JSON")
    ] = False,
    timeout: TimeoutOption = None,
    verbose: VerboseOption = False,
) -> None:
    """
    Score the submission and print the report.

    Examples:

        kata-score score

        kata-score score --json -p ./submission
    """
    configure_logging(verbose)
    scoring = load_scoring_config()
    try:
        report = pipeline.run_scoring(project, scoring, timeout)
    except ScorerError as e:
        raise _fail(e) from None

    if json_output:
        typer.echo(json.dumps(report_to_dict(report), indent=2, ensure_ascii=False))
    else:
        render_report(console, report)


@app.command()
def baseline(
    project: ProjectOption = Path("."),
    timeout: TimeoutOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Measure raw code quality metrics without scoring, to recalibrate the baselines."""
    configure_logging(verbose)
    scoring = load_scoring_config()
    try:
        metrics = pipeline.run_baseline(project, scoring, timeout)
    except ScorerError as e:
        raise _fail(e) from None
    render_baseline(console, metrics, scoring)


@app.command()
def test(
    project: ProjectOption = Path("."),
    timeout: TimeoutOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Run the team's specs and the correctness spec."""
    configure_logging(verbose)
    try:
        exit_code = pipeline.run_tests(project, timeout)
    except ScorerError as e:
        raise _fail(e) from None
    raise typer.Exit(code=exit_code)


@app.command()
def lint(
    project: ProjectOption = Path("."),
    timeout: TimeoutOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Run only the style linter."""
    configure_logging(verbose)
    try:
        exit_code = pipeline.run_lint(project, timeout)
    except ScorerError as e:
        raise _fail(e) from None
    raise typer.Exit(code=exit_code)


@app.command()
def version() -> None:
    """Show version information."""
    rprint(
        f"[bold blue]kata-score[/bold blue] version [green]{__version__}[/green] "
        f"(Python [yellow]{sys.version.split()[0]}[/yellow])"
    )


def main() -> None:
    """Main CLI entry point."""
    app()


if __name__ == "__main__":
    main()
