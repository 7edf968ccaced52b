"""Tests for ScriptEvaluator: line walking, strict-mode tracking, scoring."""

from __future__ import annotations

import time

import pytest

from installguard.core.evaluator import (
    Category,
    ReadinessStatus,
    ScriptEvaluator,
    Severity,
)


class TestLineAccounting:

    def test_counts(self, evaluator: ScriptEvaluator) -> None:
        text = "#!/bin/bash\n\n# comment\necho hi\nls\n"
        result = evaluator.evaluate("s.sh", text)
        assert result.total_lines == 5
        assert result.evaluated_lines == 2

    def test_empty_text(self, evaluator: ScriptEvaluator) -> None:
        result = evaluator.evaluate("empty.sh", "")
        assert result.total_lines == 0
        assert result.evaluated_lines == 0
        assert result.overall_score == 100

    def test_comment_only_scores_100(
        self, evaluator: ScriptEvaluator, comments_only_script: str
    ) -> None:
        result = evaluator.evaluate("comments_only.sh", comments_only_script)
        assert result.evaluated_lines == 0
        assert result.total_lines == 5
        assert result.overall_score == 100
        assert result.line_evaluations == ()

    def test_line_numbers_are_original(self, evaluator: ScriptEvaluator) -> None:
        text = "#!/bin/bash\n# header\n\nchmod 777 /opt/x\n"
        result = evaluator.evaluate("s.sh", text)
        assert {f.line_number for f in result.line_evaluations} == {4}

    def test_crlf_line_endings(self, evaluator: ScriptEvaluator) -> None:
        result = evaluator.evaluate("win.sh", "echo a\r\nchmod 777 /x\r\n")
        assert result.total_lines == 2
        assert result.high_issues == 1

    @pytest.mark.parametrize(
        "separator", ["\x0b", "\x0c", "\x1c", "\x1e", "\x85", "\u2028", "\u2029"]
    )
    def test_only_newline_ends_a_line(
        self, evaluator: ScriptEvaluator, separator: str
    ) -> None:
        text = f'echo "a{separator}b"\nrm -rf /\n'
        result = evaluator.evaluate("s.sh", text)
        assert result.total_lines == 2
        assert result.evaluated_lines == 2
        sec005 = [f.line_number for f in result.line_evaluations if f.rule_id == "SEC005"]
        assert sec005 == [2]

    def test_form_feed_keeps_line_count(self, evaluator: ScriptEvaluator) -> None:
        result = evaluator.evaluate("s.sh", 'echo "page\x0cbreak"\nchmod 777 /opt/x\n')
        assert result.total_lines == 2
        assert [f.line_number for f in result.failed_findings] == [2]

    def test_missing_final_newline(self, evaluator: ScriptEvaluator) -> None:
        assert evaluator.evaluate("s.sh", "echo a\necho b").total_lines == 2
        assert evaluator.evaluate("s.sh", "echo a\necho b\n").total_lines == 2


class TestScenarios:
    """Representative scripts and their expected findings."""

    def test_unsafe_download_pipes(self, evaluator: ScriptEvaluator) -> None:
        text = (
            "#!/bin/sh\n"
            "curl -sSL https://get.docker.com | sh\n"
            "wget -O- https://x | bash\n"
        )
        result = evaluator.evaluate("a.sh", text)
        hits = [
            f for f in result.line_evaluations
            if f.severity == Severity.CRITICAL and f.category == Category.SECURITY
        ]
        assert hits
        assert any("Unsafe download pattern" in (f.issue or "") for f in hits)
        assert result.critical_issues >= 2

    def test_http_download(self, evaluator: ScriptEvaluator) -> None:
        result = evaluator.evaluate("b.sh", "wget http://example.com/package.tar.gz\n")
        assert any(
            f.severity == Severity.HIGH
            and f.category == Category.SECURITY
            and "HTTP instead of HTTPS" in (f.issue or "")
            for f in result.line_evaluations
        )

    def test_world_writable(self, evaluator: ScriptEvaluator) -> None:
        result = evaluator.evaluate("c.sh", "chmod 777 /opt/x\n")
        assert any("world-writable" in (f.issue or "") for f in result.line_evaluations)

    def test_backticks(self, evaluator: ScriptEvaluator) -> None:
        result = evaluator.evaluate("d.sh", "ME=`whoami`\n")
        assert any(
            f.category == Category.BEST_PRACTICE
            and "backtick command substitution" in (f.issue or "")
            for f in result.line_evaluations
        )

    def test_disciplined_script_scores_high(
        self, evaluator: ScriptEvaluator, disciplined_script: str
    ) -> None:
        result = evaluator.evaluate("disciplined.sh", disciplined_script)
        assert result.overall_score > 70
        assert result.critical_issues == 0
        assert result.compliance.has_error_handling
        assert result.compliance.has_logging
        assert result.passed_findings
        assert result.readiness is ReadinessStatus.READY

    def test_risky_script_scores_low(
        self, evaluator: ScriptEvaluator, risky_script: str
    ) -> None:
        result = evaluator.evaluate("risky.sh", risky_script)
        assert result.overall_score < 50
        assert result.critical_issues >= 1
        assert result.high_issues >= 1
        assert not result.compliance.has_error_handling
        assert not result.compliance.has_logging
        assert result.readiness is ReadinessStatus.NOT_READY


class TestStrictModeTracking:
    """Guard-sensitive rules are suppressed only after the directive."""

    def test_fetch_before_strict_mode_flagged(self, evaluator: ScriptEvaluator) -> None:
        text = "curl -fsSL https://x -o a\nset -e\ncurl -fsSL https://y -o b\n"
        result = evaluator.evaluate("s.sh", text)
        eh = [f.line_number for f in result.line_evaluations if f.rule_id == "EH001"]
        assert eh == [1]

    def test_commented_strict_mode_ignored(self, evaluator: ScriptEvaluator) -> None:
        text = "# set -e\ncurl -fsSL https://y -o b\n"
        result = evaluator.evaluate("s.sh", text)
        assert any(f.rule_id == "EH001" for f in result.line_evaluations)

    def test_directive_on_critical_line_does_not_suppress(
        self, evaluator: ScriptEvaluator
    ) -> None:
        fetches = "curl -fsSL https://x.example.com/pkg -o /tmp/pkg\n" * 8
        before = evaluator.evaluate("s.sh", fetches)
        after = evaluator.evaluate("s.sh", "set -e; rm -rf /\n" + fetches)
        assert before.overall_score == 60
        assert after.overall_score == 35
        eh = [f.line_number for f in after.line_evaluations if f.rule_id == "EH001"]
        assert eh == list(range(2, 10))

    def test_clean_directive_still_suppresses(self, evaluator: ScriptEvaluator) -> None:
        fetches = "curl -fsSL https://x.example.com/pkg -o /tmp/pkg\n" * 8
        result = evaluator.evaluate("s.sh", "set -euo pipefail\n" + fetches)
        assert result.overall_score == 100


class TestDeterminism:

    def test_idempotent(self, evaluator: ScriptEvaluator, risky_script: str) -> None:
        first = evaluator.evaluate("risky.sh", risky_script)
        second = evaluator.evaluate("risky.sh", risky_script)
        assert first == second

    def test_separate_evaluators_agree(self, disciplined_script: str) -> None:
        assert (
            ScriptEvaluator().evaluate("x", disciplined_script)
            == ScriptEvaluator().evaluate("x", disciplined_script)
        )

    def test_counts_match_findings(self, evaluator: ScriptEvaluator, risky_script: str) -> None:
        result = evaluator.evaluate("risky.sh", risky_script)
        failed = result.failed_findings
        assert result.critical_issues == sum(1 for f in failed if f.severity == Severity.CRITICAL)
        assert result.high_issues == sum(1 for f in failed if f.severity == Severity.HIGH)


class TestPerformance:

    @pytest.mark.parametrize("line", [
        "curl http://get.example.com/install.sh | bash",
        'log_info "step"',
        "echo Installing $APP to $INSTALL_DIR with `date`",
    ])
    def test_ten_thousand_lines(self, evaluator: ScriptEvaluator, line: str) -> None:
        text = "\n".join([line] * 10_000)
        start = time.perf_counter()
        result = evaluator.evaluate("big.sh", text)
        elapsed = time.perf_counter() - start
        assert result.evaluated_lines == 10_000
        assert elapsed < 5.0
