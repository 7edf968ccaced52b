"""``installguard rules`` — List the detection rule catalog.

Exit Codes:
    0 — Always (informational command, cannot fail).
"""

from __future__ import annotations

import click

from installguard import __version__
from installguard.core.evaluator import DEFAULT_CATALOG, RuleCatalog

# Column widths for alignment
_W_ID = 6
_W_CAT = 14
_W_SEV = 8
_W_POL = 4

_ROW_FMT = "{rid:<{wi}}  {cat:<{wc}}  {sev:<{ws}}  {pol:<{wp}}  {msg}"


def _format_row(rid: str, cat: str, sev: str, pol: str, msg: str) -> str:
    """Render a single table row, right-stripped for clean output."""
    return _ROW_FMT.format(
        rid=rid, cat=cat, sev=sev, pol=pol, msg=msg,
        wi=_W_ID, wc=_W_CAT, ws=_W_SEV, wp=_W_POL,
    ).rstrip()


def format_rules_table(catalog: RuleCatalog = DEFAULT_CATALOG) -> str:
    """Build the rule catalog table as a plain string.

    Returns:
        Multi-line string ready for terminal output. Never raises.
    """
    lines = [f"InstallGuard v{__version__} -- {len(catalog)} detection rules", ""]
    lines.append(_format_row("ID", "Category", "Severity", "Pass", "Message"))
    lines.append(_format_row("-" * _W_ID, "-" * _W_CAT, "-" * _W_SEV, "-" * _W_POL, "-" * 7))
    for rule in catalog:
        lines.append(_format_row(
            rule.rule_id,
            rule.category.value,
            rule.severity.label,
            "yes" if rule.passed else "no",
            rule.message,
        ))
    return "\n".join(lines)


@click.command("rules")
def rules_command() -> None:
    """List every detection rule with its category and severity."""
    click.echo(format_rules_table())
