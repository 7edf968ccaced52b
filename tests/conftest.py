"""Shared fixtures for installguard tests."""

from __future__ import annotations

import pathlib

import pytest

from installguard.core.evaluator import ScriptEvaluator

SCRIPTS_DIR = pathlib.Path(__file__).parent / "fixtures" / "scripts"


@pytest.fixture
def scripts_dir() -> pathlib.Path:
    """Directory holding the sample installation scripts."""
    return SCRIPTS_DIR


@pytest.fixture
def disciplined_script() -> str:
    """Installer with strict mode, logging helpers and guarded checks."""
    return (SCRIPTS_DIR / "disciplined.sh").read_text(encoding="utf-8")


@pytest.fixture
def risky_script() -> str:
    """Installer piping HTTP into bash, chmod 777 and rm -rf /."""
    return (SCRIPTS_DIR / "risky.sh").read_text(encoding="utf-8")


@pytest.fixture
def comments_only_script() -> str:
    """Installer with nothing but a shebang, comments and blank lines."""
    return (SCRIPTS_DIR / "comments_only.sh").read_text(encoding="utf-8")


@pytest.fixture
def evaluator() -> ScriptEvaluator:
    return ScriptEvaluator()
