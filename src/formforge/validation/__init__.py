"""FormForge validation engine.

This module provides the rule machinery shared by every form:
- Rule strings: parse_rules, RuleCompiler, CompiledRules
- Registries: ValidatorRegistry, standard_registry, file_registry
- Errors: ConfigurationError, AmbiguousFieldError

Usage:
    from formforge.validation import RuleCompiler, register_all_validators

    # At application startup
    register_all_validators()
"""

from formforge.validation.errors import (
    AmbiguousFieldError,
    ConfigurationError,
    FormForgeError,
)
from formforge.validation.registry import (
    ValidatorRegistry,
    file_registry,
    register_all_validators,
    registry_for_kind,
    standard_registry,
    validator,
)
from formforge.validation.rules import (
    CompiledRules,
    RuleCompiler,
    evaluate_rule,
    parse_rules,
    resolve_error_message,
)
from formforge.validation.types import (
    CompiledValidator,
    ErrorHelp,
    ErrorValue,
    FieldKind,
    RuleSpec,
    ValidationContext,
    ValidationOutcome,
)

__all__ = [
    # Types
    "CompiledValidator",
    "ErrorHelp",
    "ErrorValue",
    "FieldKind",
    "RuleSpec",
    "ValidationContext",
    "ValidationOutcome",
    # Errors
    "AmbiguousFieldError",
    "ConfigurationError",
    "FormForgeError",
    # Registries
    "ValidatorRegistry",
    "file_registry",
    "registry_for_kind",
    "standard_registry",
    "validator",
    # Rules
    "CompiledRules",
    "RuleCompiler",
    "evaluate_rule",
    "parse_rules",
    "resolve_error_message",
    # Setup
    "register_all_validators",
]
