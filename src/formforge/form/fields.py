"""Field capability consumed by the form engine.

The view layer creates one :class:`Field` per mounted input and keeps its
value current. The engine only reads from it: the name, the kind, the
optional rules and messages, and the value appropriate to the kind.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Sequence

from formforge.validation.types import ErrorHelp, FieldKind, RuleResult, ValidationContext

# Field-local override: (value, context) -> True | message | False
FieldValidator = Callable[[Any, ValidationContext], RuleResult]

# String values that leave a checkbox unchecked (compared case-insensitively)
UNCHECKED_VALUES = frozenset({"", "false", "0", "off", "no"})


def checked_state(value: Any) -> bool:
    """Checked state for a checkbox value, reading strings like "false" as unchecked."""
    if isinstance(value, str):
        return value.strip().lower() not in UNCHECKED_VALUES
    return bool(value)


@dataclass(frozen=True)
class FileHandle:
    """A selected file, as exposed by a file input.

    Attributes:
        name: File name including extension
        size: Size in bytes
        type: Mime type reported by the client (may be empty)
    """

    name: str
    size: int = 0
    type: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "FileHandle":
        """Create FileHandle from YAML/JSON dict."""
        return cls(
            name=data["name"],
            size=int(data.get("size", 0)),
            type=data.get("type", ""),
        )


@dataclass(eq=False)
class Field:
    """A named input participating in validation.

    Fields compare by identity, so two inputs sharing a name stay distinct
    in the registry.

    Attributes:
        name: Unique field name (required)
        kind: text, checkbox, file or other; selects value and registry
        rules: Optional rule string, e.g. "required,minLength:3"
        validator: Optional override called as validator(value, context)
        error_help: Message, or rule name -> message mapping
        validate_on_event: Event that triggers validation (form default if None)
        value: Current scalar value (text / other)
        checked: Current checked state (checkbox)
        files: Currently selected files (file)
    """

    name: str
    kind: FieldKind = FieldKind.TEXT
    rules: str | None = None
    validator: FieldValidator | None = None
    error_help: ErrorHelp = None
    validate_on_event: str | None = None
    value: Any = None
    checked: bool = False
    files: Sequence[FileHandle] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        self.kind = FieldKind.coerce(self.kind)

    def get_value(self) -> Any:
        """Current value, shaped by kind."""
        if self.kind is FieldKind.CHECKBOX:
            return self.checked
        if self.kind is FieldKind.FILE:
            return self.files
        return self.value

    def set_value(self, value: Any) -> None:
        """Store a value in the slot matching the field's kind.

        Checkbox values from data files may be strings; "false", "0", "off",
        "no" and "" leave the box unchecked.
        """
        if self.kind is FieldKind.CHECKBOX:
            self.checked = checked_state(value)
        elif self.kind is FieldKind.FILE:
            self.files = tuple(value or ())
        else:
            self.value = value
