"""Severity-weighted readiness scoring.

A script starts at 100 and loses a fixed penalty for every failed finding.
Passed findings are neutral. The score never drops below 0.

Default penalties::

    CRITICAL  25
    HIGH      15
    MEDIUM     5
    LOW        2

With these weights a single critical finding leaves a script at 75, and a
script combining a download-pipe, a world-writable mode and a root removal
falls well below 50.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from installguard.core.evaluator.models import LineEvaluation, ReadinessStatus, Severity

MAX_SCORE = 100
MIN_SCORE = 0

DEFAULT_PENALTIES: Mapping[Severity, int] = {
    Severity.CRITICAL: 25,
    Severity.HIGH: 15,
    Severity.MEDIUM: 5,
    Severity.LOW: 2,
}


class ScoringEngine:
    """Map a set of findings to a 0-100 score.

    Args:
        penalties: Penalty per severity. Must cover every severity and be
            strictly decreasing from CRITICAL to LOW.

    Raises:
        ValueError: If the penalty table is incomplete, negative, or not
            strictly decreasing.
    """

    def __init__(self, penalties: Mapping[Severity, int] | None = None) -> None:
        table = dict(penalties if penalties is not None else DEFAULT_PENALTIES)
        ordered = sorted(Severity, reverse=True)
        if set(table) != set(Severity):
            raise ValueError("Penalty table must define every severity")
        weights = [table[s] for s in ordered]
        if any(w < 0 for w in weights):
            raise ValueError("Penalties must be non-negative")
        if any(a <= b for a, b in zip(weights, weights[1:])):
            raise ValueError("Penalties must strictly decrease from CRITICAL to LOW")
        self.penalties: Mapping[Severity, int] = table

    def score(self, findings: Iterable[LineEvaluation]) -> int:
        """Return the readiness score for ``findings``."""
        total = MAX_SCORE
        for finding in findings:
            if finding.passed:
                continue
            total = max(MIN_SCORE, total - self.penalties[finding.severity])
        return total

    @staticmethod
    def count(findings: Iterable[LineEvaluation], severity: Severity) -> int:
        """Count failed findings at exactly ``severity``."""
        return sum(1 for f in findings if not f.passed and f.severity == severity)

    @staticmethod
    def readiness(score: float, critical_issues: int) -> ReadinessStatus:
        return ReadinessStatus.from_score(score, critical_issues)
