"""Rule-based evaluator for shell installation scripts.

Given a script's text, the ``ScriptEvaluator`` classifies every evaluable
line against a declarative rule catalog, checks whole-script compliance,
and scores the result.

Submodules
----------
- ``models``: Result types (Severity, Category, LineEvaluation, ...).
- ``rules``: The declarative rule catalog.
- ``classifier``: Per-line rule application.
- ``compliance``: Whole-script error-handling and logging checks.
- ``scoring``: Severity-weighted penalty scoring.
- ``engine``: The ScriptEvaluator class.

All public names are re-exported here::

    from installguard.core.evaluator import ScriptEvaluator, Severity, Category
"""

from installguard.core.evaluator.classifier import LineClassifier, is_evaluable, split_lines
from installguard.core.evaluator.compliance import ComplianceChecker
from installguard.core.evaluator.engine import ScriptEvaluator
from installguard.core.evaluator.models import (
    AggregateEvaluation,
    Category,
    ComplianceChecks,
    LineEvaluation,
    ReadinessStatus,
    ScriptEvaluation,
    Severity,
)
from installguard.core.evaluator.rules import DEFAULT_CATALOG, DEFAULT_RULES, Rule, RuleCatalog
from installguard.core.evaluator.scoring import DEFAULT_PENALTIES, ScoringEngine

__all__ = [
    "AggregateEvaluation",
    "Category",
    "ComplianceChecker",
    "ComplianceChecks",
    "DEFAULT_CATALOG",
    "DEFAULT_PENALTIES",
    "DEFAULT_RULES",
    "LineClassifier",
    "LineEvaluation",
    "ReadinessStatus",
    "Rule",
    "RuleCatalog",
    "ScoringEngine",
    "ScriptEvaluation",
    "ScriptEvaluator",
    "Severity",
    "is_evaluable",
    "split_lines",
]
