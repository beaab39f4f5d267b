"""Registry of the fields currently mounted in a form.

Fields are keyed by name in registration order. A name normally maps to
one field; when a second field registers under the same name both are kept
so lookups can report the collision instead of validating the wrong input.
"""

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Iterator, Mapping, Sequence

from formforge.form.fields import Field
from formforge.validation.errors import AmbiguousFieldError, ConfigurationError
from formforge.validation.rules import CompiledRules, RuleCompiler

logger = logging.getLogger(__name__)


@dataclass
class RegisteredField:
    """A mounted field and its compiled rules (None if it has no rule string)."""

    field: Field
    compiled: CompiledRules | None = None


@dataclass(frozen=True)
class FieldSnapshot:
    """Registrations frozen when a validation pass started."""

    buckets: Mapping[str, tuple[RegisteredField, ...]]

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(self.buckets.keys())

    def entry(self, name: str) -> RegisteredField:
        return _single_entry(name, self.buckets.get(name))

    def __iter__(self) -> Iterator[str]:
        return iter(self.names)

    def __len__(self) -> int:
        return len(self.names)

    def __contains__(self, name: object) -> bool:
        return name in self.buckets


class FieldRegistry:
    """Tracks mounted fields and their compiled validators.

    Example:
        registry = FieldRegistry(RuleCompiler())
        registry.register(Field(name="email", rules="required,isEmail"))

        registry.get_value("email")
        registry.unregister(field)
    """

    def __init__(self, compiler: RuleCompiler | None = None):
        self.compiler = compiler if compiler is not None else RuleCompiler()
        self._entries: dict[str, list[RegisteredField]] = {}

    def register(self, field: Field) -> None:
        """Register a field, compiling its rule string if it has one.

        Raises:
            ConfigurationError: If the field has no name, or its rule string
                is malformed or names an unknown rule
        """
        name = getattr(field, "name", None)
        if not name:
            raise ConfigurationError('Can not add input without "name" attribute')

        compiled = None
        if isinstance(field.rules, str):
            compiled = self.compiler.compile(field, field.rules)

        bucket = self._entries.setdefault(name, [])
        bucket.append(RegisteredField(field=field, compiled=compiled))
        if len(bucket) > 1:
            logger.warning(
                'Multiple inputs use the same name "%s" (%d registered)', name, len(bucket)
            )

    def unregister(self, field: Field) -> None:
        """Remove a field and its compiled validator. Unknown fields are ignored."""
        bucket = self._entries.get(field.name)
        if not bucket:
            return
        remaining = [entry for entry in bucket if entry.field is not field]
        if remaining:
            self._entries[field.name] = remaining
        else:
            del self._entries[field.name]

    def entry(self, name: str) -> RegisteredField:
        """Get the single registration for a name.

        Raises:
            KeyError: If no field is registered under the name
            AmbiguousFieldError: If several fields share the name
        """
        return _single_entry(name, self._entries.get(name))

    def get(self, name: str) -> Field:
        return self.entry(name).field

    def compiled_validator(self, name: str) -> CompiledRules | None:
        return self.entry(name).compiled

    def get_value(self, name: str) -> Any:
        """Current value of the named field, shaped by its kind.

        Checkbox fields give their checked state, file fields their file
        handles, everything else its scalar value.

        Raises:
            KeyError: If no field is registered under the name
            AmbiguousFieldError: If several fields share the name
        """
        return self.get(name).get_value()

    def is_ambiguous(self, name: str) -> bool:
        return len(self._entries.get(name, ())) > 1

    def names(self) -> list[str]:
        """Registered names in registration order."""
        return list(self._entries.keys())

    def snapshot(self) -> FieldSnapshot:
        """Freeze the current registrations for a validation pass."""
        return FieldSnapshot(
            buckets=MappingProxyType(
                {name: tuple(bucket) for name, bucket in self._entries.items()}
            )
        )

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __len__(self) -> int:
        return len(self._entries)


def _single_entry(name: str, bucket: Sequence[RegisteredField] | None) -> RegisteredField:
    if not bucket:
        raise KeyError(f"No field registered under the name '{name}'")
    if len(bucket) > 1:
        raise AmbiguousFieldError(name, len(bucket))
    return bucket[0]
