"""Convert evaluation results to JSON-serializable dictionaries.

All functions are pure transformations. Enums are emitted as their string
values so the output is stable across releases.
"""

from __future__ import annotations

from typing import Any

from installguard.core.evaluator.models import (
    AggregateEvaluation,
    ComplianceChecks,
    LineEvaluation,
    ScriptEvaluation,
)


def compliance_to_dict(checks: ComplianceChecks) -> dict[str, bool]:
    return {
        "has_error_handling": checks.has_error_handling,
        "has_logging": checks.has_logging,
    }


def finding_to_dict(finding: LineEvaluation) -> dict[str, Any]:
    return {
        "line_number": finding.line_number,
        "line": finding.line,
        "rule_id": finding.rule_id,
        "category": finding.category.value,
        "severity": finding.severity.label,
        "passed": finding.passed,
        "issue": finding.issue,
        "suggestion": finding.suggestion,
    }


def script_to_dict(script: ScriptEvaluation) -> dict[str, Any]:
    """Serialize one script evaluation, including every finding."""
    return {
        "script_id": script.script_id,
        "total_lines": script.total_lines,
        "evaluated_lines": script.evaluated_lines,
        "overall_score": script.overall_score,
        "readiness": script.readiness.value,
        "critical_issues": script.critical_issues,
        "high_issues": script.high_issues,
        "compliance": compliance_to_dict(script.compliance),
        "line_evaluations": [finding_to_dict(f) for f in script.line_evaluations],
    }


def aggregate_to_dict(evaluation: AggregateEvaluation) -> dict[str, Any]:
    """Serialize an aggregate evaluation.

    Args:
        evaluation: The aggregate result.

    Returns:
        A dictionary safe to pass to ``json.dumps``.
    """
    return {
        "scripts_evaluated": evaluation.scripts_evaluated,
        "scripts_failed": list(evaluation.scripts_failed),
        "overall_score": evaluation.overall_score,
        "readiness": evaluation.readiness.value,
        "critical_issues": evaluation.critical_issues,
        "high_issues": evaluation.high_issues,
        "compliance_checks": compliance_to_dict(evaluation.compliance_checks),
        "global_recommendations": list(evaluation.global_recommendations),
        "script_evaluations": [script_to_dict(s) for s in evaluation.script_evaluations],
    }
