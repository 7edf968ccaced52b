"""``installguard evaluate [scripts...]`` — Evaluate a script set.

Reads every script, evaluates it, prints a summary, and writes the Markdown
readiness report to disk. When no scripts are given on the command line the
set comes from ``installguard.yaml`` (``--config`` or the current directory),
falling back to the built-in defaults.

Exit Codes:
    0 — Ready: overall score at or above the minimum and no critical issue.
    1 — Gate failed: score below the minimum or a critical issue exists.
    2 — No script could be evaluated.
"""

from __future__ import annotations

import asyncio
import json
import sys
from dataclasses import replace
from pathlib import Path

import click

from installguard.config import EvaluationConfig, find_config, load_config
from installguard.core.aggregator import ScriptSetAggregator
from installguard.core.evaluator import AggregateEvaluation
from installguard.exceptions import ConfigError
from installguard.providers import FileScriptProvider, ScriptProvider
from installguard.report import ReportRenderer, aggregate_to_dict


def _resolve_config(
    config_path: Path | None,
    scripts: tuple[str, ...],
    base_dir: Path | None,
    output: Path | None,
    min_score: int | None,
) -> EvaluationConfig:
    """Merge the config file (if any) with command-line overrides."""
    path = config_path or find_config(Path.cwd())
    try:
        config = load_config(path) if path is not None else EvaluationConfig()
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc

    overrides: dict[str, object] = {}
    if scripts:
        overrides["scripts"] = scripts
    if base_dir is not None:
        overrides["base_dir"] = base_dir
    if output is not None:
        overrides["output"] = output
    if min_score is not None:
        overrides["min_score"] = min_score
    return replace(config, **overrides)


def _make_provider(config: EvaluationConfig, base_url: str | None) -> ScriptProvider:
    """Pick the HTTP provider for remote script sets, files otherwise."""
    if base_url is not None or (
        config.scripts and all("://" in s for s in config.scripts)
    ):
        from installguard.providers.remote import HttpScriptProvider

        return HttpScriptProvider(base_url or "")
    return FileScriptProvider(config.base_dir)


def _gate_exit_code(result: AggregateEvaluation, min_score: int) -> int:
    if result.scripts_evaluated == 0:
        return 2
    if result.critical_issues > 0 or result.overall_score < min_score:
        return 1
    return 0


def _write_report(report: str, output: Path) -> None:
    try:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(report, encoding="utf-8")
    except OSError as exc:
        raise click.ClickException(f"Cannot write report to {output}: {exc}") from exc


@click.command("evaluate")
@click.argument("scripts", nargs=-1)
@click.option(
    "--config", "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="YAML config file (default: ./installguard.yaml if present).",
)
@click.option(
    "--base-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory relative script paths are resolved against.",
)
@click.option(
    "--base-url",
    default=None,
    help="Fetch scripts over HTTP(S) relative to this URL.",
)
@click.option(
    "--format", "output_format",
    type=click.Choice(["text", "json", "markdown"]),
    default="text",
    help="Console output format (default: text).",
)
@click.option(
    "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Report file path (default: production-readiness-report.md).",
)
@click.option("--no-write", is_flag=True, default=False, help="Do not write the report file.")
@click.option(
    "--min-score",
    type=click.IntRange(0, 100),
    default=None,
    help="Minimum overall score for a passing gate (default: 70).",
)
def evaluate_command(
    scripts: tuple[str, ...],
    config_path: Path | None,
    base_dir: Path | None,
    base_url: str | None,
    output_format: str,
    output: Path | None,
    no_write: bool,
    min_score: int | None,
) -> None:
    """Evaluate installation scripts for production readiness.

    SCRIPTS are evaluated in the order given. Unreadable scripts are
    reported and skipped.
    """
    config = _resolve_config(config_path, scripts, base_dir, output, min_score)
    aggregator = ScriptSetAggregator(_make_provider(config, base_url), config.scripts)
    result = asyncio.run(aggregator.evaluate())
    report = ReportRenderer().render(result)

    if output_format == "json":
        click.echo(json.dumps(aggregate_to_dict(result), indent=2))
    elif output_format == "markdown":
        click.echo(report)
    else:
        from installguard.cli.output import print_evaluation_summary
        print_evaluation_summary(result)

    if not no_write:
        _write_report(report, config.output)
        click.echo(f"Report written to: {config.output}", err=output_format != "text")

    sys.exit(_gate_exit_code(result, config.min_score))
