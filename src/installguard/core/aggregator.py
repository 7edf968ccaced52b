"""Evaluate a configured set of scripts and combine the results.

``ScriptSetAggregator`` is the evaluation entry point. It reads each script
through a ``ScriptProvider``, awaiting the reads one after another in the
declared order so that results always come back in input order. A script
that cannot be read is logged and left out; no provider error escapes.

Aggregate compliance uses a logical AND: the set has error handling (or
logging) only when every evaluated script does. With nothing evaluated,
both checks are False.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from installguard.core.evaluator.engine import ScriptEvaluator
from installguard.core.evaluator.models import (
    AggregateEvaluation,
    Category,
    ComplianceChecks,
    ScriptEvaluation,
    Severity,
)
from installguard.providers.base import ScriptProvider
from installguard.report.renderer import ReportRenderer

logger = logging.getLogger(__name__)


class ScriptSetAggregator:
    """Fetch, evaluate and combine a fixed, ordered set of scripts.

    Args:
        provider: Source of script text.
        script_ids: Identifiers to evaluate, in report order. May be empty.
        evaluator: Evaluator to use; a default ``ScriptEvaluator`` otherwise.
        renderer: Renderer used by ``generate_report``.

    Usage::

        aggregator = ScriptSetAggregator(
            FileScriptProvider("."), ["install.sh", "scripts/setup.sh"]
        )
        result = asyncio.run(aggregator.evaluate())
        report = asyncio.run(aggregator.generate_report())
    """

    def __init__(
        self,
        provider: ScriptProvider,
        script_ids: Sequence[str],
        evaluator: ScriptEvaluator | None = None,
        renderer: ReportRenderer | None = None,
    ) -> None:
        self.provider = provider
        self.script_ids = tuple(script_ids)
        self.evaluator = evaluator or ScriptEvaluator()
        self.renderer = renderer or ReportRenderer()

    async def evaluate(self) -> AggregateEvaluation:
        """Evaluate every configured script and return the aggregate result.

        Never raises for unreadable scripts; they are recorded in
        ``scripts_failed`` instead.
        """
        evaluations: list[ScriptEvaluation] = []
        failed: list[str] = []

        for script_id in self.script_ids:
            try:
                text = await self.provider.read(script_id)
            except Exception:
                logger.warning("Failed to read script: %s", script_id, exc_info=True)
                failed.append(script_id)
                continue
            evaluation = self.evaluator.evaluate(script_id, text)
            logger.debug(
                "Evaluated %s: score=%d critical=%d high=%d",
                script_id,
                evaluation.overall_score,
                evaluation.critical_issues,
                evaluation.high_issues,
            )
            evaluations.append(evaluation)

        return AggregateEvaluation(
            scripts_evaluated=len(evaluations),
            script_evaluations=tuple(evaluations),
            overall_score=_mean_score(evaluations),
            compliance_checks=_aggregate_compliance(evaluations),
            global_recommendations=tuple(build_recommendations(evaluations)),
            scripts_failed=tuple(failed),
        )

    async def generate_report(self) -> str:
        """Evaluate the script set and return the rendered report."""
        return self.renderer.render(await self.evaluate())


def _mean_score(evaluations: Sequence[ScriptEvaluation]) -> float:
    # Nothing evaluated means nothing can be certified as ready.
    if not evaluations:
        return 0.0
    return round(sum(e.overall_score for e in evaluations) / len(evaluations), 1)


def _aggregate_compliance(evaluations: Sequence[ScriptEvaluation]) -> ComplianceChecks:
    if not evaluations:
        return ComplianceChecks(has_error_handling=False, has_logging=False)
    return ComplianceChecks(
        has_error_handling=all(e.compliance.has_error_handling for e in evaluations),
        has_logging=all(e.compliance.has_logging for e in evaluations),
    )


def build_recommendations(evaluations: Sequence[ScriptEvaluation]) -> list[str]:
    """Derive ordered, set-wide recommendations from all findings.

    Args:
        evaluations: Per-script evaluations (may be empty).

    Returns:
        Recommendation strings, most urgent first.
    """
    if not evaluations:
        return [
            "No scripts could be evaluated; verify the script paths and read "
            "permissions before certifying this release"
        ]

    failed = [f for e in evaluations for f in e.failed_findings]
    critical = sum(1 for f in failed if f.severity == Severity.CRITICAL)
    security = sum(1 for f in failed if f.category == Category.SECURITY)
    error_handling = sum(1 for f in failed if f.category == Category.ERROR_HANDLING)
    best_practice = sum(1 for f in failed if f.category == Category.BEST_PRACTICE)

    recommendations: list[str] = []
    if critical:
        recommendations.append(
            f"Resolve {critical} critical issue(s) before production deployment"
        )
    if security:
        recommendations.append(
            f"Address {security} security finding(s): verify downloads before "
            "execution, use HTTPS, and restrict file permissions"
        )

    unguarded = [e.script_id for e in evaluations if not e.compliance.has_error_handling]
    if error_handling or unguarded:
        target = ", ".join(unguarded) if unguarded else "all scripts"
        recommendations.append(
            "Enable strict mode ('set -euo pipefail') or register an ERR trap "
            f"and check the exit status of external commands in: {target}"
        )

    unlogged = [e.script_id for e in evaluations if not e.compliance.has_logging]
    if unlogged:
        recommendations.append(
            "Add structured logging helpers (log_info, log_error, log_success) "
            f"to: {', '.join(unlogged)}"
        )

    if best_practice:
        recommendations.append(
            f"Fix {best_practice} best-practice finding(s): quote variable "
            "expansions and prefer $(...) over backticks"
        )
    return recommendations
