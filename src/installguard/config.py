"""Evaluation configuration loaded from ``installguard.yaml``.

The set of scripts to evaluate belongs to the caller, not to the engine.
The CLI reads it from an optional YAML file and lets command-line options
override individual values::

    scripts:
      - install.sh
      - scripts/enhanced-install.sh
    base_dir: .
    output: production-readiness-report.md
    min_score: 70

Unknown keys are ignored. Values of the wrong type raise ``ConfigError``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from installguard.exceptions import ConfigError

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "installguard.yaml"

DEFAULT_SCRIPTS: tuple[str, ...] = ("install.sh", "scripts/enhanced-install.sh")
DEFAULT_OUTPUT = "production-readiness-report.md"
DEFAULT_MIN_SCORE = 70


@dataclass(frozen=True)
class EvaluationConfig:
    """Settings for one evaluation run.

    Attributes:
        scripts: Script identifiers, in report order.
        base_dir: Directory relative script paths are resolved against.
        output: Path the Markdown report is written to.
        min_score: Lowest aggregate score that still passes the gate.
    """

    scripts: tuple[str, ...] = DEFAULT_SCRIPTS
    base_dir: Path = Path(".")
    output: Path = Path(DEFAULT_OUTPUT)
    min_score: int = DEFAULT_MIN_SCORE


def load_config(path: Path) -> EvaluationConfig:
    """Load an ``EvaluationConfig`` from a YAML file.

    Relative ``base_dir`` and ``output`` values are resolved against the
    directory holding the config file.

    Args:
        path: YAML file to read.

    Returns:
        The parsed configuration, with defaults for missing keys.

    Raises:
        ConfigError: If the file cannot be read, is not valid YAML, or holds
            values of the wrong type.
    """
    try:
        raw = path.read_text(encoding="utf-8")
        data = yaml.safe_load(raw)
    except OSError as exc:
        raise ConfigError(f"Cannot read config file {path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {path}: {exc}") from exc

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a mapping")

    root = path.parent
    config = EvaluationConfig(
        scripts=_scripts(data.get("scripts", list(DEFAULT_SCRIPTS)), path),
        base_dir=root / _string(data, "base_dir", ".", path),
        output=root / _string(data, "output", DEFAULT_OUTPUT, path),
        min_score=_min_score(data.get("min_score", DEFAULT_MIN_SCORE), path),
    )
    logger.debug("Loaded config from %s: %s", path, config)
    return config


def find_config(directory: Path) -> Path | None:
    """Return ``installguard.yaml`` in ``directory`` if it exists."""
    candidate = directory / CONFIG_FILENAME
    return candidate if candidate.is_file() else None


def _scripts(value: Any, path: Path) -> tuple[str, ...]:  # noqa: ANN401
    if not isinstance(value, list) or not all(isinstance(s, str) for s in value):
        raise ConfigError(f"'scripts' in {path} must be a list of strings")
    return tuple(value)


def _string(data: dict[str, Any], key: str, default: str, path: Path) -> str:
    value = data.get(key, default)
    if not isinstance(value, str):
        raise ConfigError(f"'{key}' in {path} must be a string")
    return value


def _min_score(value: Any, path: Path) -> int:  # noqa: ANN401
    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= 100:
        raise ConfigError(f"'min_score' in {path} must be an integer between 0 and 100")
    return value
