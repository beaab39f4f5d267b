"""
JSON Schema validation for FormForge form definitions.

Usage:
    from formforge.metadata.validator import validate_form_file

    issues = validate_form_file(Path("forms/signup.yaml"))
    for issue in issues:
        print(issue)
"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml
from jsonschema import Draft202012Validator
from jsonschema.exceptions import ValidationError

logger = logging.getLogger(__name__)

_SCHEMAS_DIR = Path(__file__).parent / "schemas"

FORM_SCHEMA = "form.schema.json"


@dataclass
class ValidationIssue:
    """A single validation finding for a form definition file."""

    file: Path
    message: str
    path: str = ""          # location within the document, e.g. "fields[0]/rules"
    severity: str = "error" # "error" | "warning"

    def __str__(self) -> str:
        loc = f" at {self.path}" if self.path else ""
        return f"[{self.severity.upper()}] {self.file}{loc}: {self.message}"


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _load_schema(name: str) -> dict[str, Any]:
    schema_path = _SCHEMAS_DIR / name
    with schema_path.open() as fh:
        return json.load(fh)


def _json_path(error: ValidationError) -> str:
    """Convert a jsonschema ValidationError path to a readable string."""
    parts = []
    for p in error.absolute_path:
        if isinstance(p, int):
            parts.append(f"[{p}]")
        else:
            parts.append(str(p))
    return "/".join(parts).replace("/[", "[")


def _duplicate_names(doc: dict[str, Any]) -> list[str]:
    seen: set[str] = set()
    duplicates = []
    for field in doc.get("fields") or []:
        name = field.get("name") if isinstance(field, dict) else None
        if name in seen and name not in duplicates:
            duplicates.append(name)
        seen.add(name)
    return duplicates


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def validate_form_data(doc: Any, source: Path) -> list[ValidationIssue]:
    """Validate an already-parsed form definition.

    Duplicate field names are reported as warnings: the form still loads,
    but lookups for those names report the collision.
    """
    schema = _load_schema(FORM_SCHEMA)
    validator = Draft202012Validator(schema)

    issues = [
        ValidationIssue(file=source, message=error.message, path=_json_path(error))
        for error in sorted(validator.iter_errors(doc), key=_json_path)
    ]

    if isinstance(doc, dict):
        for name in _duplicate_names(doc):
            issues.append(
                ValidationIssue(
                    file=source,
                    message=f"Multiple fields use the same name '{name}'",
                    path="fields",
                    severity="warning",
                )
            )

    return issues


def validate_form_file(yaml_path: Path, *, strict: bool = False) -> list[ValidationIssue]:
    """
    Validate a form definition YAML file against the form schema.

    Args:
        yaml_path: Path to the YAML file to validate.
        strict:    If ``True``, warnings are escalated to errors.

    Returns:
        A list of :class:`ValidationIssue` objects (empty on success).
    """
    try:
        with yaml_path.open() as fh:
            raw = yaml.safe_load(fh)
    except yaml.YAMLError as exc:
        return [ValidationIssue(file=yaml_path, message=f"YAML parse error: {exc}")]

    if raw is None:
        return [
            ValidationIssue(file=yaml_path, message="File is empty or contains only whitespace")
        ]

    issues = validate_form_data(raw, yaml_path)
    if strict:
        for issue in issues:
            if issue.severity == "warning":
                issue.severity = "error"

    logger.debug("Validated %s: %d issue(s)", yaml_path, len(issues))
    return issues
