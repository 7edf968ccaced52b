"""Rich output formatting helpers for the InstallGuard CLI.

Provides consistent, severity-colored terminal output for aggregate
evaluations and single-script details.

Severity Color Mapping:
    CRITICAL = bold red, HIGH = yellow, MEDIUM = cyan, LOW = green
"""

from __future__ import annotations

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from installguard.core.evaluator import (
    AggregateEvaluation,
    ReadinessStatus,
    ScriptEvaluation,
    Severity,
)

_SEVERITY_STYLES: dict[Severity, str] = {
    Severity.CRITICAL: "bold red",
    Severity.HIGH: "yellow",
    Severity.MEDIUM: "cyan",
    Severity.LOW: "green",
}

_READINESS_STYLES: dict[ReadinessStatus, str] = {
    ReadinessStatus.READY: "bold green",
    ReadinessStatus.NEEDS_REVIEW: "yellow",
    ReadinessStatus.NOT_READY: "bold red",
}

console = Console()


def severity_style(severity: Severity) -> str:
    """Return the Rich style string for a given severity level."""
    return _SEVERITY_STYLES.get(severity, "white")


def readiness_text(status: ReadinessStatus) -> Text:
    return Text(status.value.upper(), style=_READINESS_STYLES.get(status, "white"))


def _check_text(value: bool) -> Text:
    return Text("yes", style="green") if value else Text("no", style="red")


def print_evaluation_summary(result: AggregateEvaluation) -> None:
    """Print a summary table and recommendations for a script set.

    Args:
        result: Aggregate evaluation to display.
    """
    if not result.script_evaluations:
        console.print("[bold red]No scripts could be evaluated.[/bold red]")
        for script_id in result.scripts_failed:
            console.print(f"  [red]- unreadable: {script_id}[/red]")
        return

    table = Table(title="Production Readiness", show_header=True, header_style="bold")
    table.add_column("Script", style="bold")
    table.add_column("Score", justify="right")
    table.add_column("Status", justify="center")
    table.add_column("Critical", justify="right")
    table.add_column("High", justify="right")
    table.add_column("Error Handling", justify="center")
    table.add_column("Logging", justify="center")

    for script in result.script_evaluations:
        table.add_row(
            script.script_id,
            str(script.overall_score),
            readiness_text(script.readiness),
            str(script.critical_issues),
            str(script.high_issues),
            _check_text(script.compliance.has_error_handling),
            _check_text(script.compliance.has_logging),
        )

    console.print(table)
    _print_summary_line(result)

    if result.global_recommendations:
        console.print("\n[bold]Recommendations[/bold]")
        for rec in result.global_recommendations:
            console.print(f"  - {rec}")


def _print_summary_line(result: AggregateEvaluation) -> None:
    """Print a one-line summary after the results table."""
    parts = [
        f"[bold]{result.scripts_evaluated}[/bold] scripts evaluated",
        f"overall score [bold]{result.overall_score:.1f}[/bold]",
    ]
    if result.critical_issues:
        parts.append(f"[red]{result.critical_issues} critical[/red]")
    if result.high_issues:
        parts.append(f"[yellow]{result.high_issues} high[/yellow]")
    if result.scripts_failed:
        parts.append(f"[red]{len(result.scripts_failed)} unreadable[/red]")
    console.print(" | ".join(parts))
    console.print("Status: ", readiness_text(result.readiness))


def print_script_detail(evaluation: ScriptEvaluation) -> None:
    """Print detailed findings for a single script.

    Args:
        evaluation: Evaluation of one script.
    """
    header = Text.assemble(
        ("Script: ", "bold"), (evaluation.script_id, ""),
        ("  Score: ", "bold"), (str(evaluation.overall_score), ""),
        ("  Status: ", "bold"), readiness_text(evaluation.readiness),
    )
    console.print(Panel(header, title="Script Evaluation"))
    console.print(
        f"  Lines: {evaluation.evaluated_lines} evaluated of {evaluation.total_lines}"
    )
    console.print("  Error handling: ", _check_text(evaluation.compliance.has_error_handling))
    console.print("  Logging:        ", _check_text(evaluation.compliance.has_logging))

    failed = evaluation.failed_findings
    if not failed:
        console.print("[green]No issues found.[/green]")
        return

    findings_table = Table(title="Findings", show_header=True)
    findings_table.add_column("Line", justify="right")
    findings_table.add_column("Severity", justify="center")
    findings_table.add_column("Category")
    findings_table.add_column("Issue")
    findings_table.add_column("Suggestion", style="dim")
    for f in failed:
        findings_table.add_row(
            str(f.line_number),
            Text(f.severity.label.upper(), style=severity_style(f.severity)),
            f.category.value,
            f.issue or "",
            f.suggestion,
        )
    console.print(findings_table)
