"""InstallGuard CLI: production-readiness gate for shell installation scripts.

Entry point for the ``installguard`` command-line tool. Registers all
subcommands under a single Click group.

Commands:
    evaluate — Evaluate a script set and write the readiness report.
    check    — Show detailed findings for a single script.
    rules    — List the detection rule catalog.

Usage::

    installguard evaluate                         # scripts from installguard.yaml
    installguard evaluate install.sh setup.sh     # explicit script set
    installguard evaluate --format json --no-write
    installguard check scripts/install.sh
    installguard rules
"""

from __future__ import annotations

import logging

import click

from installguard import __version__
from installguard.cli.check_cmd import check_command
from installguard.cli.evaluate_cmd import evaluate_command
from installguard.cli.rules_cmd import rules_command


@click.group()
@click.version_option(version=__version__)
@click.option("-v", "--verbose", is_flag=True, default=False, help="Enable debug logging.")
def cli(verbose: bool) -> None:
    """InstallGuard: Production-readiness evaluation for installation scripts.

    Scan shell installers for unsafe downloads, insecure transport,
    permissive modes and missing error handling, score them, and render
    a report that gates production rollout.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


# Register all subcommands
cli.add_command(evaluate_command)
cli.add_command(check_command)
cli.add_command(rules_command)
