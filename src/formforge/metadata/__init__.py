"""Form definitions loaded from YAML, with JSON Schema validation."""

from formforge.metadata.loader import (
    FieldDefinition,
    FormDefinition,
    FormDefinitionLoader,
)
from formforge.metadata.validator import (
    ValidationIssue,
    validate_form_data,
    validate_form_file,
)

__all__ = [
    "FieldDefinition",
    "FormDefinition",
    "FormDefinitionLoader",
    "ValidationIssue",
    "validate_form_data",
    "validate_form_file",
]
