"""The form: field lifecycle, event-driven validation and submission.

Usage:
    form = Form(FormConfig(
        on_valid_submit=save,
        on_invalid_submit=show_errors,
        error_help="invalid",
    ))
    form.register_field(Field(name="username", rules="required"))
    form.register_field(Field(name="password", rules="minLength:6"))

    form.handle_event("username", "onChange")  # validate one field
    form.submit()                               # validate all, then dispatch
"""

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Callable

from formforge.form.coordinator import (
    FormValidator,
    GlobalFieldValidator,
    ValidationCoordinator,
)
from formforge.form.fields import Field, checked_state
from formforge.form.registry import FieldRegistry
from formforge.form.state import ErrorState
from formforge.validation.errors import AmbiguousFieldError, ConfigurationError
from formforge.validation.registry import register_all_validators
from formforge.validation.rules import RuleCompiler
from formforge.validation.types import (
    ErrorHelp,
    ErrorValue,
    FieldKind,
    ValidationContext,
    ValidationOutcome,
)

logger = logging.getLogger(__name__)

DEFAULT_VALIDATE_EVENT = "onChange"

ValidSubmitCallback = Callable[[dict[str, Any]], Any]
InvalidSubmitCallback = Callable[[list[str], dict[str, Any]], Any]


def _ignore_invalid_submit(failed_names: list[str], values: dict[str, Any]) -> None:
    return None


@dataclass
class FormConfig:
    """Form-level options.

    Attributes:
        on_valid_submit: Called with the values when the form is valid (required)
        on_invalid_submit: Called with failed names and values otherwise
        model: Initial values keyed by field name
        validate_one: Override for every per-field check
        validate_all: Override for the whole-form check
        validate_on_event: Field event that triggers validation
        error_help: Default message source for failed rules
    """

    on_valid_submit: ValidSubmitCallback | None = None
    on_invalid_submit: InvalidSubmitCallback = _ignore_invalid_submit
    model: dict[str, Any] = field(default_factory=dict)
    validate_one: GlobalFieldValidator | None = None
    validate_all: FormValidator | None = None
    validate_on_event: str = DEFAULT_VALIDATE_EVENT
    error_help: ErrorHelp = None

    @classmethod
    def from_dict(cls, data: dict[str, Any], **callbacks: Any) -> "FormConfig":
        """Create FormConfig from a YAML/JSON dict plus callables.

        Callables can't come from a data file, so they are passed as
        keyword arguments (on_valid_submit, validate_all, ...).
        """
        config = cls(
            model=dict(data.get("model") or {}),
            validate_on_event=data.get("validateOnEvent", DEFAULT_VALIDATE_EVENT),
            error_help=data.get("errorHelp"),
        )
        for name, value in callbacks.items():
            if value is None:
                continue
            if not hasattr(config, name):
                raise ConfigurationError(f"Unknown form option '{name}'")
            setattr(config, name, value)
        return config


@dataclass
class FieldStatus:
    """What a view needs to render a field's validation state.

    Attributes:
        name: Field name
        initial_value: Value from the form model, if any
        error: Recorded error value (False when valid or never validated)
        help: Message to display, if any
    """

    name: str
    initial_value: Any = None
    error: ErrorValue = False
    help: str | None = None

    @property
    def has_error(self) -> bool:
        return self.error is not False


class Form:
    """Coordinates fields, validation and submission for one form."""

    def __init__(self, config: FormConfig | None = None, **options: Any):
        if config is None:
            config = FormConfig(**options)
        elif options:
            raise ConfigurationError(
                "Pass form options either as a FormConfig or as keyword arguments, "
                f"not both (got {', '.join(sorted(options))})"
            )
        if not callable(config.on_valid_submit):
            raise ConfigurationError("Form requires an on_valid_submit callback")

        register_all_validators()

        self.config = config
        self.compiler = RuleCompiler(config.error_help)
        self.fields = FieldRegistry(self.compiler)
        self.errors = ErrorState()
        self.coordinator = ValidationCoordinator(
            self.fields,
            self.errors,
            validate_one=config.validate_one,
            validate_all=config.validate_all,
        )

    # -------------------------------------------------------------------------
    # Field lifecycle
    # -------------------------------------------------------------------------

    def register_field(self, field: Field) -> Field:
        """Mount a field. Its initial value comes from the model when present."""
        self.fields.register(field)
        if field.name in self.config.model:
            field.set_value(self.config.model[field.name])
        return field

    def unregister_field(self, field: Field) -> None:
        self.fields.unregister(field)

    def initial_value(self, name: str) -> Any:
        """Model value for a field (checked state for checkboxes)."""
        return self.config.model.get(name)

    # -------------------------------------------------------------------------
    # Values
    # -------------------------------------------------------------------------

    def get_values(self) -> dict[str, Any]:
        """Current value of every registered field, in registration order.

        A name shared by several fields is reported and reads as False.
        """
        values: dict[str, Any] = {}
        for name in self.fields.snapshot():
            try:
                values[name] = self.fields.get_value(name)
            except AmbiguousFieldError as e:
                logger.warning("%s", e)
                values[name] = False
        return values

    def context(self) -> ValidationContext:
        """Read-only snapshot of the current values."""
        return MappingProxyType(self.get_values())

    # -------------------------------------------------------------------------
    # Validation
    # -------------------------------------------------------------------------

    def trigger_event(self, name: str) -> str:
        """Event that validates the named field."""
        if name in self.fields and not self.fields.is_ambiguous(name):
            field_event = self.fields.get(name).validate_on_event
            if field_event:
                return field_event
        return self.config.validate_on_event

    def handle_event(self, name: str, event: str) -> bool | None:
        """Dispatch a field event.

        Returns:
            The field's validity if the event triggers validation, else None
        """
        if event != self.trigger_event(name):
            return None
        return self.validate_field(name)

    def validate_field(self, name: str) -> bool:
        return self.coordinator.validate_one(name, self.context())

    def validate(self) -> ValidationOutcome:
        """Validate the whole form without submitting."""
        return self.coordinator.validate_all(self.context())

    def has_error(self, name: str) -> ErrorValue:
        return self.errors.has_error(name)

    def field_status(self, name: str) -> FieldStatus:
        """Validation state for rendering a field.

        The help text is the recorded message, or the field's own plain
        string error help when the error has no message.
        """
        error = self.errors.has_error(name)
        help_text = None
        if isinstance(error, str):
            help_text = error
        elif error and name in self.fields and not self.fields.is_ambiguous(name):
            field_help = self.fields.get(name).error_help
            if isinstance(field_help, str):
                help_text = field_help

        initial = self.initial_value(name)
        if name in self.fields and not self.fields.is_ambiguous(name):
            if self.fields.get(name).kind is FieldKind.CHECKBOX:
                initial = checked_state(initial)

        return FieldStatus(name=name, initial_value=initial, error=error, help=help_text)

    # -------------------------------------------------------------------------
    # Submission
    # -------------------------------------------------------------------------

    def submit(self) -> bool:
        """Validate everything and call exactly one outcome callback.

        Returns:
            True if the form was valid and the accept callback ran
        """
        values = self.get_values()
        outcome = self.coordinator.validate_all(MappingProxyType(dict(values)))

        if outcome.is_valid:
            logger.info("Form submitted with %d valid field(s)", len(values))
            self.config.on_valid_submit(values)
        else:
            logger.info("Form submission rejected: %s", ", ".join(outcome.failed_names))
            self.config.on_invalid_submit(outcome.failed_names, values)

        return outcome.is_valid
