"""Data models for the script evaluator.

Severity, Category, LineEvaluation, ComplianceChecks, ScriptEvaluation and
AggregateEvaluation are the types produced by one evaluation run. They are
kept apart from the rule catalog and the engine so that the report renderer,
the serializer and the CLI can import them without pulling in any of the
pattern tables.

Every result type is a frozen dataclass. Evaluation code accumulates into
local lists and converts them to tuples when the result is built, so nothing
is mutated after construction.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum


# ---------------------------------------------------------------------------
# Severity and Category
# ---------------------------------------------------------------------------


class Severity(IntEnum):
    """Four-level severity scale for findings.

    The integer encoding enables direct comparison: LOW < MEDIUM < HIGH < CRITICAL.
    """

    LOW = 1
    MEDIUM = 2
    HIGH = 3
    CRITICAL = 4

    @property
    def label(self) -> str:
        """Lowercase name used in reports and JSON output."""
        return self.name.lower()


class Category(str, Enum):
    """The domain a finding belongs to. Orthogonal to severity."""

    SECURITY = "security"
    BEST_PRACTICE = "best-practice"
    ERROR_HANDLING = "error-handling"


class ReadinessStatus(str, Enum):
    """Deployment gate verdict derived from a score and its critical count."""

    READY = "ready"
    NEEDS_REVIEW = "needs-review"
    NOT_READY = "not-ready"

    @classmethod
    def from_score(cls, score: float, critical_issues: int) -> ReadinessStatus:
        """Map a 0-100 score plus critical count to a readiness verdict.

        Any critical issue blocks readiness regardless of the score.
        """
        if critical_issues > 0 or score < 50:
            return cls.NOT_READY
        if score < 80:
            return cls.NEEDS_REVIEW
        return cls.READY


# ---------------------------------------------------------------------------
# LineEvaluation: one rule match against one line
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class LineEvaluation:
    """A single finding produced by matching one rule against one line.

    Attributes:
        line_number: 1-based line number in the original script.
        line: Raw line text, unmodified.
        category: Finding domain (security, best-practice, error-handling).
        severity: Finding severity (LOW through CRITICAL).
        passed: True when the line exemplifies good practice rather than a
            violation.
        issue: Human-readable problem description. Non-empty when ``passed``
            is False, ``None`` otherwise.
        suggestion: Recommended fix, or an acknowledgement for passed findings.
        rule_id: Identifier of the rule that produced this finding.
    """

    line_number: int
    line: str
    category: Category
    severity: Severity
    passed: bool
    issue: str | None
    suggestion: str
    rule_id: str = ""


# ---------------------------------------------------------------------------
# ComplianceChecks
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ComplianceChecks:
    """Whole-script structural properties, independent of line findings.

    Attributes:
        has_error_handling: Strict mode is declared or an error/exit trap
            is registered.
        has_logging: At least one recognized logging helper is invoked.
    """

    has_error_handling: bool = False
    has_logging: bool = False

    @property
    def all_passed(self) -> bool:
        return self.has_error_handling and self.has_logging


# ---------------------------------------------------------------------------
# ScriptEvaluation
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ScriptEvaluation:
    """The complete result of evaluating a single script.

    Attributes:
        script_id: Identifier the script was requested under.
        total_lines: Every line of the script, including blank and comment lines.
        evaluated_lines: Lines that were candidates for rule matching.
        line_evaluations: All findings, in line order.
        overall_score: Readiness score between 0 and 100.
        critical_issues: Failed findings at CRITICAL severity.
        high_issues: Failed findings at HIGH severity.
        compliance: Whole-script compliance checks.
    """

    script_id: str
    total_lines: int
    evaluated_lines: int
    line_evaluations: tuple[LineEvaluation, ...]
    overall_score: int
    critical_issues: int
    high_issues: int
    compliance: ComplianceChecks

    @property
    def failed_findings(self) -> tuple[LineEvaluation, ...]:
        return tuple(f for f in self.line_evaluations if not f.passed)

    @property
    def passed_findings(self) -> tuple[LineEvaluation, ...]:
        return tuple(f for f in self.line_evaluations if f.passed)

    @property
    def readiness(self) -> ReadinessStatus:
        return ReadinessStatus.from_score(self.overall_score, self.critical_issues)


# ---------------------------------------------------------------------------
# AggregateEvaluation
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class AggregateEvaluation:
    """The combined result across all successfully read scripts in one run.

    Attributes:
        scripts_evaluated: Number of scripts that were read and scored.
        script_evaluations: One evaluation per readable script, in read order.
        overall_score: Mean of the per-script scores; 0.0 when no script
            could be evaluated.
        compliance_checks: Aggregate compliance. A check holds only when it
            holds for every evaluated script (logical AND); both checks are
            False when nothing was evaluated.
        global_recommendations: Ordered, human-readable recommendations.
        scripts_failed: Identifiers of scripts the provider could not read.
    """

    scripts_evaluated: int
    script_evaluations: tuple[ScriptEvaluation, ...]
    overall_score: float
    compliance_checks: ComplianceChecks
    global_recommendations: tuple[str, ...]
    scripts_failed: tuple[str, ...] = ()

    @property
    def critical_issues(self) -> int:
        return sum(e.critical_issues for e in self.script_evaluations)

    @property
    def high_issues(self) -> int:
        return sum(e.high_issues for e in self.script_evaluations)

    @property
    def readiness(self) -> ReadinessStatus:
        if self.scripts_evaluated == 0:
            return ReadinessStatus.NOT_READY
        return ReadinessStatus.from_score(self.overall_score, self.critical_issues)
