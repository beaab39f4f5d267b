"""Rules CLI command: list the registered predicates."""

import click

from formforge.validation import file_registry, register_all_validators, standard_registry


@click.command()
@click.option(
    "--kind",
    type=click.Choice(["standard", "file"]),
    default=None,
    help="Only list one registry.",
)
def rules(kind: str | None):
    """List rule names usable in rule strings."""
    register_all_validators()

    registries = [standard_registry, file_registry]
    if kind is not None:
        registries = [r for r in registries if r.name == kind]

    for registry in registries:
        click.echo(click.style(f"{registry.name}:", bold=True))
        for name in registry.list_registered():
            click.echo(f"  {name}")
