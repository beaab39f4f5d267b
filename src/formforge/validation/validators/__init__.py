"""Built-in predicates for FormForge rule strings.

This module provides the predicates that rule names resolve to in the
standard and file registries.
"""

from formforge.validation.validators.files import (
    parse_size,
    register_file_validators,
)
from formforge.validation.validators.standard import (
    EMAIL_PATTERN,
    URL_PATTERN,
    register_standard_validators,
)

__all__ = [
    "EMAIL_PATTERN",
    "URL_PATTERN",
    "parse_size",
    "register_file_validators",
    "register_standard_validators",
]
