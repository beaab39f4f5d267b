"""File validation predicates.

Used for fields of kind ``file``. The value is a sequence of
:class:`~formforge.form.fields.FileHandle` objects (anything with ``name``,
``size`` and ``type`` attributes works).

Size parameters accept plain byte counts or a ``kb``/``mb``/``gb`` suffix,
e.g. ``"isEachFileSize:2mb"``. Type and extension rules take several
allowed values as extra parameters: ``"isEachFileType:image/*:application/pdf"``.
"""

import re
from typing import Any, Sequence

from formforge.validation.registry import file_registry

SIZE_PATTERN = re.compile(r"\s*(\d+(?:\.\d+)?)\s*(b|kb|mb|gb)?\s*", re.IGNORECASE)

SIZE_UNITS = {
    "b": 1,
    "kb": 1024,
    "mb": 1024 ** 2,
    "gb": 1024 ** 3,
}


def parse_size(size: str) -> int:
    """Convert a size parameter to bytes.

    Raises:
        ValueError: If the parameter is not a size
    """
    match = SIZE_PATTERN.fullmatch(size)
    if not match:
        raise ValueError(f"Invalid file size '{size}'")
    number, unit = match.groups()
    return int(float(number) * SIZE_UNITS[(unit or "b").lower()])


def _files(value: Any) -> Sequence[Any]:
    if value is None:
        return ()
    return list(value)


def _mime_matches(mime: str, pattern: str) -> bool:
    """Match a mime type against a pattern such as image/* or */*."""
    mime_major, _, mime_minor = (mime or "").lower().partition("/")
    major, _, minor = pattern.lower().partition("/")
    if major not in ("*", mime_major):
        return False
    return minor in ("", "*") or minor == mime_minor


# -----------------------------------------------------------------------------
# Count
# -----------------------------------------------------------------------------


def required(files: Any) -> bool:
    return len(_files(files)) > 0


def is_empty(files: Any) -> bool:
    return len(_files(files)) == 0


def is_single(files: Any) -> bool:
    return len(_files(files)) == 1


def is_multiple(files: Any) -> bool:
    return len(_files(files)) > 1


def is_files_count(files: Any, count: str) -> bool:
    return len(_files(files)) == int(count)


# -----------------------------------------------------------------------------
# Size
# -----------------------------------------------------------------------------


def is_total_size(files: Any, max_size: str) -> bool:
    """Combined size of all files is at most max_size."""
    return sum(f.size for f in _files(files)) <= parse_size(max_size)


def is_each_file_size(files: Any, max_size: str) -> bool:
    limit = parse_size(max_size)
    return all(f.size <= limit for f in _files(files))


# -----------------------------------------------------------------------------
# Type
# -----------------------------------------------------------------------------


def is_each_file_type(files: Any, *mime_types: str) -> bool:
    return all(
        any(_mime_matches(f.type, pattern) for pattern in mime_types)
        for f in _files(files)
    )


def is_each_file_extension(files: Any, *extensions: str) -> bool:
    allowed = {ext.lower().lstrip(".") for ext in extensions}
    return all(_extension(f.name) in allowed for f in _files(files))


def _extension(filename: str) -> str:
    _, dot, ext = filename.rpartition(".")
    return ext.lower() if dot else ""


# -----------------------------------------------------------------------------
# Parameter checks
# -----------------------------------------------------------------------------


def _no_params() -> None:
    return None


def _one_count(count: str) -> None:
    int(count)


def _one_size(max_size: str) -> None:
    parse_size(max_size)


def _at_least_one(first: str, *rest: str) -> None:
    return None


def register_file_validators() -> None:
    """Register all file predicates with the file registry."""
    file_registry.register("required", required, _no_params)
    file_registry.register("isEmpty", is_empty, _no_params)
    file_registry.register("isSingle", is_single, _no_params)
    file_registry.register("isMultiple", is_multiple, _no_params)
    file_registry.register("isFilesCount", is_files_count, _one_count)
    file_registry.register("isTotalSize", is_total_size, _one_size)
    file_registry.register("isEachFileSize", is_each_file_size, _one_size)
    file_registry.register("isEachFileType", is_each_file_type, _at_least_one)
    file_registry.register("isEachFileExtension", is_each_file_extension, _at_least_one)
