"""Shared fixtures for CLI tests."""

from __future__ import annotations

import shutil
from pathlib import Path

import pytest
from click.testing import CliRunner


@pytest.fixture
def runner() -> CliRunner:
    """Create a Click CliRunner for invoking commands."""
    return CliRunner()


@pytest.fixture
def workdir(tmp_path: Path, scripts_dir: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Temporary working directory holding copies of the sample scripts.

    The process cwd is switched to it so default report paths and config
    lookup stay inside the test's sandbox.
    """
    for script in scripts_dir.glob("*.sh"):
        shutil.copy(script, tmp_path / script.name)
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def low_only_script(workdir: Path) -> Path:
    """Script whose only failure is a single LOW finding (score 98)."""
    path = workdir / "low.sh"
    path.write_text("set -e\nlog_info \"start\"\necho $HOME\n", encoding="utf-8")
    return path
