"""FormForge form engine.

Wires mounted fields to the validation engine:
- Field / FileHandle: the capability a view exposes per input
- FieldRegistry: mounted fields by name, with compiled rules
- ErrorState: per-field error map
- ValidationCoordinator: per-field and whole-form validation
- Form / FormConfig: event-driven validation and submission

Usage:
    from formforge.form import Field, Form

    form = Form(on_valid_submit=save)
    form.register_field(Field(name="email", rules="required,isEmail"))
    form.submit()
"""

from formforge.form.coordinator import (
    AlwaysValidTier,
    CompiledRulesTier,
    FieldOverrideTier,
    FormValidator,
    GlobalFieldValidator,
    GlobalOverrideTier,
    ValidationCoordinator,
    ValidationTier,
)
from formforge.form.fields import Field, FieldValidator, FileHandle
from formforge.form.form import (
    DEFAULT_VALIDATE_EVENT,
    FieldStatus,
    Form,
    FormConfig,
)
from formforge.form.registry import FieldRegistry, FieldSnapshot, RegisteredField
from formforge.form.state import ErrorState

__all__ = [
    # Fields
    "Field",
    "FieldValidator",
    "FileHandle",
    # Registry and state
    "ErrorState",
    "FieldRegistry",
    "FieldSnapshot",
    "RegisteredField",
    # Coordination
    "AlwaysValidTier",
    "CompiledRulesTier",
    "FieldOverrideTier",
    "FormValidator",
    "GlobalFieldValidator",
    "GlobalOverrideTier",
    "ValidationCoordinator",
    "ValidationTier",
    # Form
    "DEFAULT_VALIDATE_EVENT",
    "FieldStatus",
    "Form",
    "FormConfig",
]
