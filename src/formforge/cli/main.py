"""FormForge CLI entry point."""

import click

from formforge.config import Settings


@click.group()
def cli():
    """FormForge: rule-string form validation CLI."""
    Settings.from_env().configure_logging()


# Register subcommands
from formforge.cli.form_cmd import check, validate  # noqa: E402
from formforge.cli.rules_cmd import rules  # noqa: E402

cli.add_command(check)
cli.add_command(validate)
cli.add_command(rules)
