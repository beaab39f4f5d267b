"""Per-field and whole-form validation.

A single field is checked by the first applicable tier, in order:

1. Form-level ``validate_one(name, value, context)`` override
2. The field's own ``validator(value, context)``
3. The field's compiled rule string
4. Always valid

Only one tier runs; results from different tiers are never merged. A
result other than exactly ``True`` is a failure, and a string result is
its message.
"""

import logging
from collections.abc import Mapping
from typing import Any, Callable, Protocol

from formforge.form.registry import FieldRegistry, FieldSnapshot, RegisteredField
from formforge.form.state import ErrorState
from formforge.validation.errors import AmbiguousFieldError
from formforge.validation.types import RuleResult, ValidationContext, ValidationOutcome

logger = logging.getLogger(__name__)

# (name, value, context) -> result
GlobalFieldValidator = Callable[[str, Any, ValidationContext], RuleResult]

# context -> True | {name: message or flag}
FormValidator = Callable[[ValidationContext], Any]

Check = Callable[[Any, ValidationContext], RuleResult]


# =============================================================================
# Validation Tiers
# =============================================================================


class ValidationTier(Protocol):
    """One source of a field check. Returns None when it doesn't apply."""

    def resolve(self, name: str, entry: RegisteredField) -> Check | None:
        ...


class GlobalOverrideTier:
    """Form-level override applied to every field."""

    def __init__(self, hook: GlobalFieldValidator | None):
        self.hook = hook

    def resolve(self, name: str, entry: RegisteredField) -> Check | None:
        hook = self.hook
        if not callable(hook):
            return None
        return lambda value, context: hook(name, value, context)


class FieldOverrideTier:
    """The field's own validator function."""

    def resolve(self, name: str, entry: RegisteredField) -> Check | None:
        validator = entry.field.validator
        if not callable(validator):
            return None
        return validator


class CompiledRulesTier:
    """The field's compiled rule string."""

    def resolve(self, name: str, entry: RegisteredField) -> Check | None:
        compiled = entry.compiled
        if compiled is None:
            return None
        return lambda value, context: compiled(value)


class AlwaysValidTier:
    """Fallback for fields with nothing configured."""

    def resolve(self, name: str, entry: RegisteredField) -> Check | None:
        return lambda value, context: True


# =============================================================================
# Coordinator
# =============================================================================


class ValidationCoordinator:
    """Runs field and form validation and records results in the error state.

    Args:
        fields: Registry of mounted fields
        errors: Error state updated by every check
        validate_one: Optional form-level per-field override
        validate_all: Optional form-level whole-form override
    """

    def __init__(
        self,
        fields: FieldRegistry,
        errors: ErrorState,
        validate_one: GlobalFieldValidator | None = None,
        validate_all: FormValidator | None = None,
    ):
        self.fields = fields
        self.errors = errors
        self.validate_all_hook = validate_all
        self.tiers: tuple[ValidationTier, ...] = (
            GlobalOverrideTier(validate_one),
            FieldOverrideTier(),
            CompiledRulesTier(),
            AlwaysValidTier(),
        )

    def resolve_check(self, name: str, entry: RegisteredField) -> Check:
        """The check from the first tier that applies to the field."""
        for tier in self.tiers:
            check = tier.resolve(name, entry)
            if check is not None:
                return check
        raise AssertionError("AlwaysValidTier must always apply")

    def validate_one(
        self,
        name: str,
        context: ValidationContext,
        snapshot: FieldSnapshot | None = None,
    ) -> bool:
        """Validate a single field and record the outcome.

        The error state is written on success too, clearing a previous error.
        A name shared by several fields is reported and treated as invalid.
        With a snapshot, the field is looked up there instead of the live
        registry.

        Raises:
            KeyError: If no field is registered under the name
        """
        source = snapshot if snapshot is not None else self.fields
        try:
            entry = source.entry(name)
        except AmbiguousFieldError as e:
            logger.warning("%s; treating it as invalid", e)
            return False

        check = self.resolve_check(name, entry)
        result = check(context.get(name), context)

        is_valid = result is True
        error = result if isinstance(result, str) else None
        self.errors.set_error(name, not is_valid, error)

        return is_valid

    def validate_all(self, context: ValidationContext) -> ValidationOutcome:
        """Validate the whole form.

        Uses the form-level ``validate_all`` override when configured,
        otherwise validates every registered field in registration order.
        """
        snapshot = self.fields.snapshot()

        if callable(self.validate_all_hook):
            return self._apply_form_result(self.validate_all_hook(context), snapshot.names)

        failed = [name for name in snapshot if not self.validate_one(name, context, snapshot)]
        return ValidationOutcome(is_valid=not failed, failed_names=failed)

    def _apply_form_result(self, result: Any, names: tuple[str, ...]) -> ValidationOutcome:
        """Record a whole-form override's result.

        Fields absent from the failure mapping have their errors cleared so
        no stale message survives from an earlier pass.
        """
        if result is True:
            failures: Mapping[str, Any] = {}
        elif isinstance(result, Mapping):
            failures = result
        else:
            logger.warning(
                "Form validator returned %r instead of True or a mapping; "
                "treating the form as invalid",
                result,
            )
            return ValidationOutcome(is_valid=False)

        for name in names:
            if name not in failures:
                self.errors.set_error(name, False)

        failed = []
        for name, detail in failures.items():
            failed.append(name)
            if name not in names:
                logger.warning("Form validator reported unknown field '%s'", name)
                continue
            self.errors.set_error(name, True, detail)

        return ValidationOutcome(is_valid=result is True, failed_names=failed)
