"""Tests for JSON serialization of evaluation results."""

from __future__ import annotations

import json

from installguard.core.evaluator import AggregateEvaluation
from installguard.report import aggregate_to_dict, script_to_dict


class TestAggregateToDict:

    def test_json_serializable(self, aggregate: AggregateEvaluation) -> None:
        data = json.loads(json.dumps(aggregate_to_dict(aggregate)))
        assert data["scripts_evaluated"] == 2
        assert data["scripts_failed"] == ["scripts/missing.sh"]
        assert data["readiness"] == "not-ready"
        assert data["compliance_checks"] == {
            "has_error_handling": False,
            "has_logging": False,
        }

    def test_script_order(self, aggregate: AggregateEvaluation) -> None:
        data = aggregate_to_dict(aggregate)
        assert [s["script_id"] for s in data["script_evaluations"]] == [
            "install.sh", "scripts/quick-install.sh",
        ]


class TestScriptToDict:

    def test_enum_values_as_strings(self, aggregate: AggregateEvaluation) -> None:
        data = script_to_dict(aggregate.script_evaluations[1])
        finding = data["line_evaluations"][0]
        assert finding["category"] in {"security", "best-practice", "error-handling"}
        assert finding["severity"] in {"low", "medium", "high", "critical"}
        assert isinstance(finding["passed"], bool)

    def test_all_findings_included(self, aggregate: AggregateEvaluation) -> None:
        script = aggregate.script_evaluations[0]
        data = script_to_dict(script)
        assert len(data["line_evaluations"]) == len(script.line_evaluations)
        assert data["overall_score"] == script.overall_score
