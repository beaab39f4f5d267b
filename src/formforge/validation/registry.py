"""Validator registries for FormForge.

A registry is a string-keyed table of predicate functions. Rule strings
such as ``"required,minLength:3"`` are resolved against one of two named
registries:

- ``standard_registry``: scalar/string predicates, used for every field
  except file inputs
- ``file_registry``: predicates over a collection of uploaded files

Predicates are called as ``fn(value, *params)`` and must return exactly
``True`` to pass. Any other result is a failure. A predicate may be
registered with a parameter check, called as ``check(*params)`` when a rule
string is compiled; it raises ``ValueError`` or ``TypeError`` for
parameters the predicate can't use.
"""

from typing import Any, Callable

from formforge.validation.errors import ConfigurationError
from formforge.validation.types import FieldKind, RuleResult

Predicate = Callable[..., RuleResult]
ParamCheck = Callable[..., Any]


class ValidatorRegistry:
    """A named table of validation predicates.

    Example:
        registry = ValidatorRegistry("standard")
        registry.register("isEven", lambda value: int(value) % 2 == 0)

        predicate = registry.get("isEven")
        predicate("4")  # True
    """

    def __init__(self, name: str):
        self.name = name
        self._predicates: dict[str, Predicate] = {}
        self._param_checks: dict[str, ParamCheck] = {}

    def register(
        self,
        name: str,
        predicate: Predicate,
        check_params: ParamCheck | None = None,
    ) -> None:
        """Register a predicate by name.

        Idempotent - re-registering the same name is a no-op.

        Args:
            name: Rule name as written in rule strings (e.g., "minLength")
            predicate: Callable taking the value followed by string params
            check_params: Optional callable validating the string params
        """
        if name in self._predicates:
            return
        self._predicates[name] = predicate
        if check_params is not None:
            self._param_checks[name] = check_params

    def get(self, name: str) -> Predicate:
        """Get a registered predicate by name.

        Raises:
            ConfigurationError: If no predicate is registered under the name
        """
        if name not in self._predicates:
            raise ConfigurationError(
                f'Invalid input validation rule "{name}" for the {self.name} registry. '
                "Available rules: " + ", ".join(self.list_registered())
            )
        return self._predicates[name]

    def check_params(self, name: str, params: tuple[str, ...]) -> None:
        """Check a rule's parameters against its registered parameter check.

        Raises:
            ConfigurationError: If the rule is unknown or its parameters are
                rejected
        """
        self.get(name)
        check = self._param_checks.get(name)
        if check is None:
            return
        try:
            check(*params)
        except (TypeError, ValueError) as e:
            raise ConfigurationError(
                f'Invalid parameters {list(params)} for validation rule "{name}": {e}'
            ) from e

    def is_registered(self, name: str) -> bool:
        """Check if a predicate is registered."""
        return name in self._predicates

    def list_registered(self) -> list[str]:
        """List all registered rule names."""
        return sorted(self._predicates.keys())

    def clear(self) -> None:
        """Clear all registrations. Primarily for testing."""
        self._predicates.clear()
        self._param_checks.clear()

    def __repr__(self) -> str:
        return f"ValidatorRegistry({self.name!r}, rules={len(self._predicates)})"


standard_registry = ValidatorRegistry("standard")
file_registry = ValidatorRegistry("file")


def registry_for_kind(kind: FieldKind) -> ValidatorRegistry:
    """Select the registry rule names are resolved against for a field kind."""
    if kind is FieldKind.FILE:
        return file_registry
    return standard_registry


def validator(
    name: str,
    registry: ValidatorRegistry | None = None,
    check_params: ParamCheck | None = None,
) -> Callable[[Predicate], Predicate]:
    """Decorator to register a predicate.

    Usage:
        @validator("isPostcode")
        def is_postcode(value: Any) -> bool:
            ...

        @validator("isImage", registry=file_registry)
        def is_image(files: Any) -> bool:
            ...
    """
    target = registry if registry is not None else standard_registry

    def decorator(fn: Predicate) -> Predicate:
        target.register(name, fn, check_params)
        return fn

    return decorator


def register_all_validators() -> None:
    """Register the built-in standard and file predicates."""
    from formforge.validation.validators import (
        register_file_validators,
        register_standard_validators,
    )

    register_standard_validators()
    register_file_validators()
