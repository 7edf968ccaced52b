"""``installguard check <script>`` — Evaluate a single script in detail.

Exit Codes:
    0 — No critical issue.
    1 — One or more critical issues.
    2 — The script could not be read.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click

from installguard.core.evaluator import ScriptEvaluator
from installguard.report.serialize import script_to_dict


@click.command("check")
@click.argument("script", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--format", "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format (default: text).",
)
def check_command(script: Path, output_format: str) -> None:
    """Show every finding for a single installation script."""
    try:
        text = script.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        click.echo(f"Error: cannot read {script}: {exc}", err=True)
        sys.exit(2)

    evaluation = ScriptEvaluator().evaluate(str(script), text)

    if output_format == "json":
        click.echo(json.dumps(script_to_dict(evaluation), indent=2))
    else:
        from installguard.cli.output import print_script_detail
        print_script_detail(evaluation)

    sys.exit(1 if evaluation.critical_issues else 0)
