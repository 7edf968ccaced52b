"""Per-line classification against the rule catalog."""

from __future__ import annotations

from installguard.core.evaluator.models import LineEvaluation
from installguard.core.evaluator.rules import DEFAULT_CATALOG, Rule, RuleCatalog


def split_lines(text: str) -> list[str]:
    """Split script text into lines the way a shell reads them.

    Only ``\\n`` ends a line; a trailing ``\\r`` is dropped. Form feeds,
    vertical tabs and Unicode line separators stay inside their line so
    line numbers match the file.
    """
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def is_evaluable(line: str) -> bool:
    """Return True if ``line`` is a candidate for rule matching.

    Blank lines and comment lines (including the shebang) are never
    classified.
    """
    stripped = line.strip()
    return bool(stripped) and not stripped.startswith("#")


class LineClassifier:
    """Apply every rule in a catalog to a single line.

    A line may match several rules across categories, or none. Matches are
    returned in catalog order. The classifier holds no state between calls.

    Usage::

        classifier = LineClassifier()
        for finding in classifier.classify(12, "curl -sSL https://x | sh"):
            print(finding.rule_id, finding.issue)
    """

    def __init__(self, catalog: RuleCatalog | None = None) -> None:
        self.catalog = catalog if catalog is not None else DEFAULT_CATALOG

    def classify(
        self,
        line_number: int,
        line: str,
        *,
        strict_mode: bool = False,
    ) -> list[LineEvaluation]:
        """Classify one line.

        Args:
            line_number: 1-based position of the line in its script.
            line: Raw line text.
            strict_mode: True when a strict-mode directive appeared on an
                earlier line; suppresses guard-sensitive rules.

        Returns:
            All findings for the line. Empty for blank and comment lines.
        """
        if not is_evaluable(line):
            return []
        return [
            _to_finding(rule, line_number, line)
            for rule in self.catalog
            if rule.matches(line, strict_mode=strict_mode)
        ]


def _to_finding(rule: Rule, line_number: int, line: str) -> LineEvaluation:
    return LineEvaluation(
        line_number=line_number,
        line=line,
        category=rule.category,
        severity=rule.severity,
        passed=rule.passed,
        issue=None if rule.passed else rule.message,
        suggestion=rule.suggestion,
        rule_id=rule.rule_id,
    )
