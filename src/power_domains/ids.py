"""Canonical identifier handling for power domains and pin supplies."""

from __future__ import annotations

import re
from enum import Enum
from typing import Hashable

__all__ = ["normalize_id", "normalize_pattern"]

# Characters that become underscores in an identifier
_SEPARATORS = re.compile(r"[?!\-/\\\s().\[\]{}\"']")
_UNDERSCORE_RUNS = re.compile(r"_{2,}")


def normalize_id(value: Hashable) -> str:
    """Convert an identifier to its canonical, symbol-like form.

    The result is lower case, with whitespace and punctuation replaced
    by single underscores. Leading or trailing underscores introduced by
    the replacement are dropped; ones written by the caller are kept.

    Examples:
        >>> normalize_id("VDD Core")
        'vdd_core'
        >>> normalize_id("vdd-io (3v3)")
        'vdd_io_3v3'
        >>> normalize_id("_vss")
        '_vss'

    Raises:
        ValueError: If the identifier is empty after normalization
    """
    if isinstance(value, Enum):
        value = value.value
    text = str(value)

    had_leading = text.startswith("_")
    had_trailing = text.endswith("_")

    result = _SEPARATORS.sub("_", text).lower()
    result = _UNDERSCORE_RUNS.sub("_", result)
    if result.endswith("_") and not had_trailing:
        result = result[:-1]
    if result.startswith("_") and not had_leading:
        result = result[1:]

    if not result:
        raise ValueError(f"Invalid identifier: {value!r}")
    return result


# Separators that are not also glob syntax (``* ? [ ] !`` stay as written)
_PATTERN_SEPARATORS = re.compile(r"[\-/\\\s().{}\"']")


def normalize_pattern(pattern: str) -> str:
    """Normalize a glob pattern the way :func:`normalize_id` treats ids.

    Examples:
        >>> normalize_pattern("VDD-IO*")
        'vdd_io*'
    """
    result = _PATTERN_SEPARATORS.sub("_", pattern).lower()
    return _UNDERSCORE_RUNS.sub("_", result)
