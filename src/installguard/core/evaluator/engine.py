"""Single-script evaluation engine.

``ScriptEvaluator`` walks a script once, top to bottom:

1. Blank and comment lines are counted but never classified.
2. Each remaining line is classified by the ``LineClassifier``. Once a
   strict-mode directive (``set -e`` and friends) has been seen, later lines
   no longer raise guard-sensitive error-handling findings. A directive on a
   line with a critical failure (``set -e; rm -rf /``) does not count, so
   adding a critical line never raises the score.
3. The ``ComplianceChecker`` scans the whole text once.
4. The ``ScoringEngine`` turns the failed findings into a score.

A script with no evaluable lines scores exactly 100: there is no code to
judge. This is a separate branch, not a consequence of having no findings.
"""

from __future__ import annotations

from installguard.core.evaluator.classifier import LineClassifier, is_evaluable, split_lines
from installguard.core.evaluator.compliance import ComplianceChecker
from installguard.core.evaluator.models import LineEvaluation, ScriptEvaluation, Severity
from installguard.core.evaluator.rules import STRICT_MODE_PATTERN
from installguard.core.evaluator.scoring import MAX_SCORE, ScoringEngine


class ScriptEvaluator:
    """Evaluate one script's text into a ``ScriptEvaluation``.

    The evaluator is stateless; evaluating the same text twice yields equal
    results. Work is linear in the script size.

    Usage::

        evaluator = ScriptEvaluator()
        result = evaluator.evaluate("install.sh", Path("install.sh").read_text())
        print(result.overall_score, result.critical_issues)
    """

    def __init__(
        self,
        classifier: LineClassifier | None = None,
        compliance: ComplianceChecker | None = None,
        scoring: ScoringEngine | None = None,
    ) -> None:
        self.classifier = classifier or LineClassifier()
        self.compliance = compliance or ComplianceChecker()
        self.scoring = scoring or ScoringEngine()

    def evaluate(self, script_id: str, text: str) -> ScriptEvaluation:
        """Evaluate ``text`` and return its frozen result.

        Args:
            script_id: Identifier reported with the result.
            text: Full script content.

        Returns:
            A ``ScriptEvaluation`` with findings in line order.
        """
        lines = split_lines(text)
        findings: list[LineEvaluation] = []
        evaluated = 0
        strict_mode = False

        for line_number, line in enumerate(lines, start=1):
            if not is_evaluable(line):
                continue
            evaluated += 1
            line_findings = self.classifier.classify(
                line_number, line, strict_mode=strict_mode
            )
            findings.extend(line_findings)
            if (
                not strict_mode
                and STRICT_MODE_PATTERN.search(line)
                and not _has_critical_failure(line_findings)
            ):
                strict_mode = True

        if evaluated == 0:
            score = MAX_SCORE
        else:
            score = self.scoring.score(findings)

        return ScriptEvaluation(
            script_id=script_id,
            total_lines=len(lines),
            evaluated_lines=evaluated,
            line_evaluations=tuple(findings),
            overall_score=score,
            critical_issues=ScoringEngine.count(findings, Severity.CRITICAL),
            high_issues=ScoringEngine.count(findings, Severity.HIGH),
            compliance=self.compliance.check(text),
        )


def _has_critical_failure(findings: list[LineEvaluation]) -> bool:
    return any(not f.passed and f.severity == Severity.CRITICAL for f in findings)
