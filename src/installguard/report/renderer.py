"""Render an ``AggregateEvaluation`` as a Markdown production-readiness report.

The document has four fixed sections after the title:

- Executive Summary: aggregate score, readiness, script and issue counts.
- Compliance Dashboard: per-script and aggregate compliance checks.
- Detailed Script Analysis: every failed finding of every script.
- Global Recommendations.

Rendering is a pure transformation. The renderer performs no file or
console I/O; the CLI decides where the document goes.
"""

from __future__ import annotations

from datetime import datetime, timezone

from installguard.core.evaluator.models import (
    AggregateEvaluation,
    ComplianceChecks,
    LineEvaluation,
    ScriptEvaluation,
)

_PASS = "PASS"
_FAIL = "FAIL"


def _mark(value: bool) -> str:
    return _PASS if value else _FAIL


def _escape_cell(text: str) -> str:
    """Make ``text`` safe inside a Markdown table cell or inline code span."""
    return text.replace("|", "\\|").replace("`", "'").strip()


class ReportRenderer:
    """Format aggregate evaluations into a Markdown document.

    The renderer is stateless except for a configurable title. It is safe to
    reuse across multiple ``render()`` calls.

    Attributes:
        title: Document title (first-level heading).
    """

    def __init__(self, title: str = "Production Readiness Evaluation Report") -> None:
        self.title = title

    def render(
        self,
        evaluation: AggregateEvaluation,
        generated_at: datetime | None = None,
    ) -> str:
        """Render the complete report.

        Args:
            evaluation: Aggregate result to format.
            generated_at: Timestamp shown in the header; defaults to now (UTC).

        Returns:
            The Markdown document. Never raises on empty evaluations.
        """
        stamp = (generated_at or datetime.now(timezone.utc)).isoformat(timespec="seconds")
        lines: list[str] = [f"# {self.title}", "", f"Generated: {stamp}", ""]
        lines.extend(self._executive_summary(evaluation))
        lines.extend(self._compliance_dashboard(evaluation))
        lines.extend(self._script_details(evaluation))
        lines.extend(self._recommendations(evaluation))
        return "\n".join(lines).rstrip() + "\n"

    # ------------------------------------------------------------------
    # Sections
    # ------------------------------------------------------------------

    def _executive_summary(self, evaluation: AggregateEvaluation) -> list[str]:
        lines = [
            "## Executive Summary",
            "",
            f"- **Overall Score:** {evaluation.overall_score:.1f}/100",
            f"- **Readiness:** {evaluation.readiness.value.upper()}",
            f"- **Scripts Evaluated:** {evaluation.scripts_evaluated}",
            f"- **Critical Issues:** {evaluation.critical_issues}",
            f"- **High Issues:** {evaluation.high_issues}",
        ]
        if evaluation.scripts_failed:
            lines.append(
                f"- **Unreadable Scripts:** {', '.join(evaluation.scripts_failed)}"
            )
        lines.append("")
        return lines

    def _compliance_dashboard(self, evaluation: AggregateEvaluation) -> list[str]:
        lines = [
            "## Compliance Dashboard",
            "",
            "| Script | Score | Error Handling | Logging |",
            "|---|---|---|---|",
        ]
        for script in evaluation.script_evaluations:
            lines.append(self._compliance_row(
                script.script_id, str(script.overall_score), script.compliance,
            ))
        lines.append(self._compliance_row(
            "**All scripts**",
            f"{evaluation.overall_score:.1f}",
            evaluation.compliance_checks,
        ))
        lines.append("")
        return lines

    @staticmethod
    def _compliance_row(name: str, score: str, checks: ComplianceChecks) -> str:
        return (
            f"| {_escape_cell(name)} | {score} | "
            f"{_mark(checks.has_error_handling)} | {_mark(checks.has_logging)} |"
        )

    def _script_details(self, evaluation: AggregateEvaluation) -> list[str]:
        lines = ["## Detailed Script Analysis", ""]
        if not evaluation.script_evaluations:
            lines.extend(["No scripts were evaluated.", ""])
            return lines
        for script in evaluation.script_evaluations:
            lines.extend(self._script_section(script))
        return lines

    def _script_section(self, script: ScriptEvaluation) -> list[str]:
        lines = [
            f"### {script.script_id}",
            "",
            f"- Score: {script.overall_score}/100 ({script.readiness.value})",
            f"- Lines: {script.evaluated_lines} evaluated of {script.total_lines}",
            f"- Critical: {script.critical_issues}, High: {script.high_issues}",
            f"- Good practices observed: {len(script.passed_findings)}",
            "",
        ]
        failed = script.failed_findings
        if not failed:
            lines.extend(["No issues found.", ""])
            return lines

        lines.extend([
            "| Line | Category | Severity | Issue | Suggestion |",
            "|---|---|---|---|---|",
        ])
        for finding in failed:
            lines.append(self._finding_row(finding))
        lines.append("")
        return lines

    @staticmethod
    def _finding_row(finding: LineEvaluation) -> str:
        return (
            f"| {finding.line_number} | {finding.category.value} | "
            f"{finding.severity.label} | {_escape_cell(finding.issue or '')} | "
            f"{_escape_cell(finding.suggestion)} |"
        )

    def _recommendations(self, evaluation: AggregateEvaluation) -> list[str]:
        lines = ["## Global Recommendations", ""]
        if not evaluation.global_recommendations:
            lines.extend(["No recommendations. All scripts meet the readiness bar.", ""])
            return lines
        for index, rec in enumerate(evaluation.global_recommendations, start=1):
            lines.append(f"{index}. {rec}")
        lines.append("")
        return lines
