"""Form CLI commands: validate definitions and check values."""

import json
from pathlib import Path
from typing import Any

import click
import yaml

from formforge.metadata.loader import FormDefinitionLoader
from formforge.metadata.validator import validate_form_file
from formforge.validation.errors import ConfigurationError


def _load_values(values_path: Path | None) -> dict[str, Any]:
    """Read field values from a YAML or JSON file."""
    if values_path is None:
        return {}
    with values_path.open() as fh:
        if values_path.suffix == ".json":
            data = json.load(fh)
        else:
            data = yaml.safe_load(fh)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise click.BadParameter("values file must contain a mapping", param_hint="--values")
    return data


def _report_issues(issues) -> bool:
    """Print schema issues. Returns True if any are errors."""
    errors = [i for i in issues if i.severity == "error"]
    for issue in issues:
        colour = "red" if issue.severity == "error" else "yellow"
        click.echo(click.style(str(issue), fg=colour))
    return bool(errors)


@click.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--strict",
    is_flag=True,
    default=False,
    help="Treat warnings as errors.",
)
def validate(path: Path, strict: bool):
    """Validate a form definition YAML file."""
    issues = validate_form_file(path, strict=strict)
    if _report_issues(issues):
        errors = [i for i in issues if i.severity == "error"]
        click.echo(click.style(f"\n{len(errors)} schema error(s) found", fg="red", bold=True))
        raise SystemExit(1)

    try:
        definition = FormDefinitionLoader(path).load()
        definition.build_form(on_valid_submit=lambda values: None)
    except ConfigurationError as e:
        click.echo(click.style(f"\nInvalid form definition: {e}", fg="red"), err=True)
        raise SystemExit(1)

    click.echo(f"Form '{definition.name}' ({len(definition.fields)} fields)")
    click.echo(click.style("Form definition is valid.", fg="green", bold=True))


@click.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--values",
    "values_path",
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="YAML or JSON file with field values.",
)
def check(path: Path, values_path: Path | None):
    """Submit values to a form definition and report the outcome."""
    if _report_issues(validate_form_file(path)):
        click.echo(click.style("Invalid form definition", fg="red"), err=True)
        raise SystemExit(1)

    values = _load_values(values_path)
    outcome: dict[str, Any] = {}

    def accept(submitted: dict[str, Any]) -> None:
        outcome["valid"] = True

    def reject(failed_names: list[str], submitted: dict[str, Any]) -> None:
        outcome["valid"] = False
        outcome["failed"] = failed_names

    try:
        definition = FormDefinitionLoader(path).load()
        form = definition.build_form(
            on_valid_submit=accept,
            on_invalid_submit=reject,
            values=values,
        )
        form.submit()
    except ConfigurationError as e:
        click.echo(click.style(f"Invalid form definition: {e}", fg="red"), err=True)
        raise SystemExit(1)

    if outcome["valid"]:
        click.echo(click.style("VALID", fg="green", bold=True))
        return

    click.echo(click.style("INVALID", fg="red", bold=True))
    for name in outcome["failed"]:
        status = form.field_status(name)
        message = status.help or "invalid"
        click.echo(f"  {name}: {message}")
    raise SystemExit(1)
