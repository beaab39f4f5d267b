"""Exceptions raised by the FormForge validation engine.

Only programming and configuration problems are exceptions. A value that
fails its rules is never raised; it is recorded in the form's error state.
"""


class FormForgeError(Exception):
    """Base class for all FormForge errors."""


class ConfigurationError(FormForgeError, ValueError):
    """A form or field is configured in a way the engine cannot run.

    Raised for a field without a name, a malformed rule string, or a rule
    name missing from the selected validator registry.
    """


class AmbiguousFieldError(FormForgeError, LookupError):
    """Two or more registered fields share the same name.

    Attributes:
        name: The colliding field name
        count: How many fields are registered under that name
    """

    def __init__(self, name: str, count: int):
        self.name = name
        self.count = count
        super().__init__(f'Multiple inputs use the same name "{name}" ({count} registered)')
