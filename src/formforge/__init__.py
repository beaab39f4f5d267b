"""FormForge: a rule-string form validation engine."""

from formforge.form import Field, FileHandle, Form, FormConfig
from formforge.validation import (
    AmbiguousFieldError,
    ConfigurationError,
    FieldKind,
    FormForgeError,
    ValidationOutcome,
    register_all_validators,
    validator,
)

__version__ = "0.1.0"

__all__ = [
    "AmbiguousFieldError",
    "ConfigurationError",
    "Field",
    "FieldKind",
    "FileHandle",
    "Form",
    "FormConfig",
    "FormForgeError",
    "ValidationOutcome",
    "register_all_validators",
    "validator",
]
