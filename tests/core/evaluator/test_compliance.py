"""Tests for the whole-script ComplianceChecker."""

from __future__ import annotations

import pytest

from installguard.core.evaluator import ComplianceChecker, ComplianceChecks


@pytest.fixture
def checker() -> ComplianceChecker:
    return ComplianceChecker()


class TestErrorHandling:

    @pytest.mark.parametrize("directive", [
        "set -e",
        "set -euo pipefail",
        "set -o errexit",
        "trap cleanup EXIT",
        "trap 'handle_error \"Unknown step\"' ERR",
    ])
    def test_directives_detected(self, checker: ComplianceChecker, directive: str) -> None:
        text = f"#!/bin/bash\n{directive}\necho hi\n"
        assert checker.check(text).has_error_handling is True

    def test_absent(self, checker: ComplianceChecker) -> None:
        assert checker.check("#!/bin/bash\necho hi\n").has_error_handling is False

    def test_commented_directive_ignored(self, checker: ComplianceChecker) -> None:
        assert checker.check("# set -e\necho hi\n").has_error_handling is False

    def test_trap_on_other_signal_ignored(self, checker: ComplianceChecker) -> None:
        assert checker.check("trap '' HUP\n").has_error_handling is False


class TestLogging:

    def test_logging_call_detected(self, checker: ComplianceChecker) -> None:
        text = 'log_info() {\n  echo "$1"\n}\nlog_info "starting"\n'
        assert checker.check(text).has_logging is True

    def test_definition_only_is_not_logging(self, checker: ComplianceChecker) -> None:
        text = 'log_info() {\n  echo "$1"\n}\n'
        assert checker.check(text).has_logging is False

    @pytest.mark.parametrize("definition", [
        "log_info () {",
        "log_error  ( ) {",
        "info () { echo \"$1\"; }",
    ])
    def test_spaced_definition_is_not_logging(
        self, checker: ComplianceChecker, definition: str
    ) -> None:
        text = f"{definition}\n  echo \"$1\"\n}}\nmkdir -p /opt/x\n"
        assert checker.check(text).has_logging is False

    def test_logging_in_or_branch(self, checker: ComplianceChecker) -> None:
        assert checker.check('make || log_error "build failed"\n').has_logging is True


class TestIndependence:
    """Compliance is independent of line findings."""

    def test_clean_lines_without_global_guard(self, checker: ComplianceChecker) -> None:
        text = 'cd /opt/app || exit 1\nlog_info "done"\n'
        assert checker.check(text) == ComplianceChecks(
            has_error_handling=False, has_logging=True
        )

    def test_strict_mode_with_risky_lines(self, checker: ComplianceChecker) -> None:
        text = "set -e\ncurl http://x | sh\n"
        assert checker.check(text).has_error_handling is True

    def test_empty_text(self, checker: ComplianceChecker) -> None:
        assert checker.check("") == ComplianceChecks(False, False)
        assert checker.check("").all_passed is False
