"""Rule-string parsing and compilation.

A rule string is a compact list of named predicates:

    rule    := ['!'] name (':' param)*
    rules   := rule (',' rule)*

Example: ``"required,!empty,minLength:3,maxLength:20"``

The compiler turns a field's rule string into a single callable
``value -> True | str | False``. Every rule is evaluated in declaration
order; the first failing rule decides the outcome, and its message is
resolved in this order:

1. The field's ``error_help`` mapping entry for the rule name
2. The field's ``error_help`` when it is a plain string
3. The form-level default ``error_help``, resolved the same way
4. ``False`` (failure without a message)
"""

import logging
from collections.abc import Mapping
from typing import Any, Protocol

from formforge.validation.errors import ConfigurationError
from formforge.validation.registry import ValidatorRegistry, registry_for_kind
from formforge.validation.types import (
    ErrorHelp,
    FieldKind,
    RuleResult,
    RuleSpec,
)

logger = logging.getLogger(__name__)

RULE_SEPARATOR = ","
PARAM_SEPARATOR = ":"
INVERSE_PREFIX = "!"


class RuleField(Protocol):
    """What the compiler needs from a field."""

    name: str
    kind: FieldKind
    error_help: ErrorHelp


def parse_rules(rule_string: str) -> list[RuleSpec]:
    """Parse a rule string into RuleSpecs, preserving declaration order.

    Raises:
        ConfigurationError: If any rule has an empty name or parameter
    """
    specs = []
    for token in rule_string.split(RULE_SEPARATOR):
        name, *params = token.split(PARAM_SEPARATOR)
        inverse = name.startswith(INVERSE_PREFIX)
        if inverse:
            name = name[len(INVERSE_PREFIX):]
        if not name:
            raise ConfigurationError(
                f"Empty rule name in rule string '{rule_string}'"
            )
        if "" in params:
            raise ConfigurationError(
                f"Empty parameter for rule '{name}' in rule string '{rule_string}'"
            )
        specs.append(RuleSpec(name=name, inverse=inverse, params=tuple(params)))
    return specs


def resolve_error_message(source: ErrorHelp, rule_name: str) -> str | None:
    """Resolve a message for a failed rule from an error-help source."""
    if isinstance(source, Mapping):
        return source.get(rule_name)
    if isinstance(source, str):
        return source
    return None


def evaluate_rule(rule: RuleSpec, registry: ValidatorRegistry, value: Any) -> RuleResult:
    """Run a single rule against a value.

    Inversion flips the truthiness of the predicate's result; a message
    returned by the predicate is not carried through an inversion.
    """
    predicate = registry.get(rule.name)
    result = predicate(value, *rule.params)
    if rule.inverse:
        result = not result
    return result


class RuleCompiler:
    """Compiles field rule strings into validators.

    Args:
        default_error_help: Form-level message source used when a field's
            own error help yields nothing for the failing rule
    """

    def __init__(self, default_error_help: ErrorHelp = None):
        self.default_error_help = default_error_help

    def compile(self, field: RuleField, rule_string: str) -> "CompiledRules":
        """Compile a rule string for a field.

        The registry is chosen from the field's kind once, here. Rule names
        and parameters are checked against it immediately so a typo or a
        malformed bound fails at registration.

        Raises:
            ConfigurationError: For an empty or unknown rule name, or
                parameters the rule rejects
        """
        rules = parse_rules(rule_string)
        registry = registry_for_kind(field.kind)
        for rule in rules:
            registry.check_params(rule.name, rule.params)

        logger.debug(
            "Compiled %d rule(s) for field '%s' against the %s registry",
            len(rules),
            field.name,
            registry.name,
        )

        return CompiledRules(field=field, rules=tuple(rules), registry=registry, compiler=self)


class CompiledRules:
    """A field's compiled rule chain.

    Calling it with a value returns ``True`` or the failing value. The
    field and compiler are read at call time, so message changes made after
    compilation are honoured.
    """

    def __init__(
        self,
        field: RuleField,
        rules: tuple[RuleSpec, ...],
        registry: ValidatorRegistry,
        compiler: RuleCompiler,
    ):
        self.field = field
        self.rules = rules
        self.registry = registry
        self.compiler = compiler

    def __call__(self, value: Any) -> RuleResult:
        result: RuleResult = True
        for rule in self.rules:
            rule_result = evaluate_rule(rule, self.registry, value)
            # First failure wins; later rules still run but can't overwrite it
            if result is True and rule_result is not True:
                result = (
                    resolve_error_message(self.field.error_help, rule.name)
                    or resolve_error_message(self.compiler.default_error_help, rule.name)
                    or False
                )
        return result

    def __repr__(self) -> str:
        rules = RULE_SEPARATOR.join(str(rule) for rule in self.rules)
        return f"CompiledRules({self.field.name!r}, {rules!r})"
