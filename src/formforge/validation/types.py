"""Core types for the FormForge validation engine."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Mapping, Union


class FieldKind(Enum):
    """How a field exposes its value.

    CHECKBOX: boolean checked state
    FILE: collection of FileHandle objects
    TEXT / OTHER: scalar value
    """

    TEXT = "text"
    CHECKBOX = "checkbox"
    FILE = "file"
    OTHER = "other"

    @classmethod
    def coerce(cls, value: "FieldKind | str | None") -> "FieldKind":
        """Accept an enum member, its string value, or None (text)."""
        if value is None:
            return cls.TEXT
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return cls.OTHER


# false = valid, true = invalid without message, str = invalid with message
ErrorValue = Union[bool, str]

# Predicate result: exactly True passes, anything else fails
RuleResult = Any

# Mapping of field name -> current value, built fresh for every pass
ValidationContext = Mapping[str, Any]

# Error message source: a plain message or a rule name -> message mapping
ErrorHelp = Union[str, Mapping[str, str], None]

CompiledValidator = Callable[[Any], RuleResult]


@dataclass(frozen=True)
class RuleSpec:
    """A single parsed rule from a rule string.

    Attributes:
        name: Registry key of the predicate (leading "!" stripped)
        inverse: True if the rule was written as "!name"
        params: Positional string parameters, in declaration order
    """

    name: str
    inverse: bool = False
    params: tuple[str, ...] = ()

    def __str__(self) -> str:
        prefix = "!" if self.inverse else ""
        return ":".join([prefix + self.name, *self.params])


@dataclass
class ValidationOutcome:
    """Aggregate result of a whole-form validation pass.

    Attributes:
        is_valid: True when no field failed
        failed_names: Names of failing fields, in evaluation order
    """

    is_valid: bool
    failed_names: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "isValid": self.is_valid,
            "errors": list(self.failed_names),
        }
