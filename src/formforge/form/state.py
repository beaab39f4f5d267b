"""Per-field error state.

Maps field name -> error value:
- ``False``: validated and valid
- ``True``: invalid, no message
- ``str``: invalid with a message

A name is absent until its field is validated for the first time; absence
reads as valid. Every update swaps in a new read-only map, so a listener
can detect changes by identity and never sees a half-applied update.
"""

from types import MappingProxyType
from typing import Any, Callable, Mapping

from formforge.validation.types import ErrorValue

ErrorMap = Mapping[str, ErrorValue]
ErrorListener = Callable[[ErrorMap, ErrorMap], None]


class ErrorState:
    """Copy-on-write error map with change listeners."""

    def __init__(self) -> None:
        self._errors: ErrorMap = MappingProxyType({})
        self._listeners: list[ErrorListener] = []

    @property
    def errors(self) -> ErrorMap:
        """The current map. Replaced, never mutated, on update."""
        return self._errors

    def get(self, name: str) -> ErrorValue | None:
        """Recorded error value, or None if the field was never validated."""
        return self._errors.get(name)

    def has_error(self, name: str) -> ErrorValue:
        """The error value if the field is invalid, else False."""
        return self._errors.get(name, False)

    def set_error(self, name: str, is_error: bool, detail: Any = None) -> ErrorValue:
        """Record a field's validation outcome.

        Args:
            name: Field name
            is_error: Whether the field is invalid
            detail: Optional message; non-string, non-boolean details are
                converted to strings

        Returns:
            The stored value
        """
        if is_error and detail and not isinstance(detail, (str, bool)):
            detail = str(detail)

        value: ErrorValue = (detail or True) if is_error else False

        previous = self._errors
        self._errors = MappingProxyType({**previous, name: value})

        for listener in list(self._listeners):
            listener(previous, self._errors)
        return value

    def subscribe(self, listener: ErrorListener) -> Callable[[], None]:
        """Call listener(previous, current) after every update.

        Returns:
            A function that removes the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def __len__(self) -> int:
        return len(self._errors)
