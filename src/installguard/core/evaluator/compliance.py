"""Whole-script compliance checks.

These checks look at the script as a whole rather than line by line, so they
can disagree with individual findings: a script may have no unguarded
commands and still lack a global error guard, or declare strict mode and
still contain risky lines.
"""

from __future__ import annotations

import re

from installguard.core.evaluator.classifier import is_evaluable, split_lines
from installguard.core.evaluator.models import ComplianceChecks
from installguard.core.evaluator.rules import LOGGING_CALL_PATTERN, STRICT_MODE_PATTERN

# ``trap cleanup EXIT``, ``trap 'handle_error "step"' ERR``
_TRAP_PATTERN: re.Pattern[str] = re.compile(r"^\s*trap\s+.+\b(?:ERR|EXIT)\b")


class ComplianceChecker:
    """Detect global error handling and logging in a script's full text."""

    def check(self, text: str) -> ComplianceChecks:
        """Scan ``text`` once and return its compliance checks.

        Comment lines are ignored, so a commented-out ``set -e`` does not
        count as error handling.
        """
        has_error_handling = False
        has_logging = False
        for line in split_lines(text):
            if not is_evaluable(line):
                continue
            if not has_error_handling and (
                STRICT_MODE_PATTERN.search(line) or _TRAP_PATTERN.search(line)
            ):
                has_error_handling = True
            if not has_logging and LOGGING_CALL_PATTERN.search(line):
                has_logging = True
            if has_error_handling and has_logging:
                break
        return ComplianceChecks(
            has_error_handling=has_error_handling,
            has_logging=has_logging,
        )
