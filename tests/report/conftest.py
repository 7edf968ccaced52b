"""Fixtures for report tests: a ready-made two-script aggregate."""

from __future__ import annotations

import asyncio

import pytest

from installguard.core.aggregator import ScriptSetAggregator
from installguard.core.evaluator import AggregateEvaluation
from installguard.providers import InMemoryScriptProvider


@pytest.fixture
def aggregate(disciplined_script: str, risky_script: str) -> AggregateEvaluation:
    provider = InMemoryScriptProvider({
        "install.sh": disciplined_script,
        "scripts/quick-install.sh": risky_script,
    })
    aggregator = ScriptSetAggregator(
        provider, ["install.sh", "scripts/quick-install.sh", "scripts/missing.sh"]
    )
    return asyncio.run(aggregator.evaluate())
