"""Standard validation predicates.

These predicates back the rule names used on every non-file field. Names
follow validator.js so rule strings written for browser forms keep working:

- Presence: required, empty
- Comparison: equals, contains, matches, isIn
- Format: isEmail, isURL, isAlpha, isAlphanumeric, isNumeric, isInt,
  isFloat, isBoolean, isDate, isUppercase, isLowercase
- Length: isLength, minLength, maxLength

Values are stringified before checking (``None`` becomes ``""``), and every
parameter arrives as a string straight from the rule string.
"""

import re
from datetime import date
from typing import Any

from formforge.validation.registry import standard_registry


# =============================================================================
# Format Patterns
# =============================================================================

EMAIL_PATTERN = re.compile(
    r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}"
)

URL_PATTERN = re.compile(
    r"https?://[^\s/$.?#].[^\s]*",
    re.IGNORECASE
)

INT_PATTERN = re.compile(r"[-+]?(0|[1-9][0-9]*)")

FLOAT_PATTERN = re.compile(r"[-+]?([0-9]+)?(\.[0-9]+)?([eE][-+]?[0-9]+)?")

NUMERIC_PATTERN = re.compile(r"[-+]?[0-9]+")

ALPHA_PATTERN = re.compile(r"[a-zA-Z]+")

ALPHANUMERIC_PATTERN = re.compile(r"[a-zA-Z0-9]+")

BOOLEAN_VALUES = frozenset({"true", "false", "1", "0"})


def _to_string(value: Any) -> str:
    """Stringify a value the way validator.js does."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


# -----------------------------------------------------------------------------
# Presence
# -----------------------------------------------------------------------------


def required(value: Any) -> bool:
    """Value is present. A checkbox value must be checked."""
    if isinstance(value, bool):
        return value
    return _to_string(value) != ""


def empty(value: Any) -> bool:
    """Value is empty or whitespace only."""
    return _to_string(value).strip() == ""


# -----------------------------------------------------------------------------
# Comparison
# -----------------------------------------------------------------------------


def equals(value: Any, comparison: str) -> bool:
    return _to_string(value) == comparison


def contains(value: Any, seed: str) -> bool:
    return seed in _to_string(value)


def matches(value: Any, pattern: str, flags: str = "") -> bool:
    """Value matches a regex. Flags use JavaScript letters (i, m, s)."""
    re_flags = 0
    if "i" in flags:
        re_flags |= re.IGNORECASE
    if "m" in flags:
        re_flags |= re.MULTILINE
    if "s" in flags:
        re_flags |= re.DOTALL
    return re.search(pattern, _to_string(value), re_flags) is not None


def is_in(value: Any, *options: str) -> bool:
    return _to_string(value) in options


# -----------------------------------------------------------------------------
# Format
# -----------------------------------------------------------------------------


def is_email(value: Any) -> bool:
    return EMAIL_PATTERN.fullmatch(_to_string(value)) is not None


def is_url(value: Any) -> bool:
    return URL_PATTERN.fullmatch(_to_string(value)) is not None


def is_alpha(value: Any) -> bool:
    return ALPHA_PATTERN.fullmatch(_to_string(value)) is not None


def is_alphanumeric(value: Any) -> bool:
    return ALPHANUMERIC_PATTERN.fullmatch(_to_string(value)) is not None


def is_numeric(value: Any) -> bool:
    return NUMERIC_PATTERN.fullmatch(_to_string(value)) is not None


def is_int(value: Any, min_value: str | None = None, max_value: str | None = None) -> bool:
    """Integer string, optionally within inclusive bounds."""
    text = _to_string(value)
    if not INT_PATTERN.fullmatch(text):
        return False
    number = int(text)
    if min_value is not None and number < int(min_value):
        return False
    if max_value is not None and number > int(max_value):
        return False
    return True


def is_float(value: Any, min_value: str | None = None, max_value: str | None = None) -> bool:
    """Float string, optionally within inclusive bounds."""
    text = _to_string(value)
    if not FLOAT_PATTERN.fullmatch(text):
        return False
    try:
        number = float(text)
    except ValueError:
        return False
    if min_value is not None and number < float(min_value):
        return False
    if max_value is not None and number > float(max_value):
        return False
    return True


def is_boolean(value: Any) -> bool:
    return _to_string(value) in BOOLEAN_VALUES


def is_date(value: Any) -> bool:
    """ISO calendar date (YYYY-MM-DD)."""
    try:
        date.fromisoformat(_to_string(value))
    except ValueError:
        return False
    return True


def is_uppercase(value: Any) -> bool:
    text = _to_string(value)
    return text == text.upper()


def is_lowercase(value: Any) -> bool:
    text = _to_string(value)
    return text == text.lower()


# -----------------------------------------------------------------------------
# Length
# -----------------------------------------------------------------------------


def is_length(value: Any, min_length: str = "0", max_length: str | None = None) -> bool:
    length = len(_to_string(value))
    if length < int(min_length):
        return False
    if max_length is not None and length > int(max_length):
        return False
    return True


def min_length(value: Any, length: str) -> bool:
    return len(_to_string(value)) >= int(length)


def max_length(value: Any, length: str) -> bool:
    return len(_to_string(value)) <= int(length)


# -----------------------------------------------------------------------------
# Parameter checks
# -----------------------------------------------------------------------------


def _no_params() -> None:
    return None


def _one_param(param: str) -> None:
    return None


def _one_int(length: str) -> None:
    int(length)


def _int_bounds(min_value: str | None = None, max_value: str | None = None) -> None:
    for bound in (min_value, max_value):
        if bound is not None:
            int(bound)


def _float_bounds(min_value: str | None = None, max_value: str | None = None) -> None:
    for bound in (min_value, max_value):
        if bound is not None:
            float(bound)


def _pattern(pattern: str, flags: str = "") -> None:
    try:
        re.compile(pattern)
    except re.error as e:
        raise ValueError(f"invalid pattern '{pattern}': {e}") from e


def register_standard_validators() -> None:
    """Register all standard predicates with the standard registry."""
    standard_registry.register("required", required, _no_params)
    standard_registry.register("empty", empty, _no_params)
    standard_registry.register("equals", equals, _one_param)
    standard_registry.register("contains", contains, _one_param)
    standard_registry.register("matches", matches, _pattern)
    standard_registry.register("isIn", is_in)
    standard_registry.register("isEmail", is_email, _no_params)
    standard_registry.register("isURL", is_url, _no_params)
    standard_registry.register("isAlpha", is_alpha, _no_params)
    standard_registry.register("isAlphanumeric", is_alphanumeric, _no_params)
    standard_registry.register("isNumeric", is_numeric, _no_params)
    standard_registry.register("isInt", is_int, _int_bounds)
    standard_registry.register("isFloat", is_float, _float_bounds)
    standard_registry.register("isBoolean", is_boolean, _no_params)
    standard_registry.register("isDate", is_date, _no_params)
    standard_registry.register("isUppercase", is_uppercase, _no_params)
    standard_registry.register("isLowercase", is_lowercase, _no_params)
    standard_registry.register("isLength", is_length, _int_bounds)
    standard_registry.register("minLength", min_length, _one_int)
    standard_registry.register("maxLength", max_length, _one_int)
