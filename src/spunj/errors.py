# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Error taxonomy and exception helpers."""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    TYPE = "TYPE"
    KEY = "KEY"
    VALUE = "VALUE"
    DECODE = "DECODE"
    NONE = "NONE"


class FilterTypeError(TypeError):
    """Base class for values of the wrong shape reaching a FilterMap."""

    category = ErrorCategory.TYPE

    def __init__(self, message: str, *, key: Any = None, value: Any = None):
        super().__init__(message)
        self.key = key
        self.value = value


class FilterKeyError(FilterTypeError):
    """Filter keys must be strings."""

    category = ErrorCategory.KEY


class FilterValueError(FilterTypeError):
    """Filter values must be str, finite int/float, or the literal True."""

    category = ErrorCategory.VALUE


class FilterDecodeError(ValueError):
    """Raised when serialized filter state cannot be decoded."""

    category = ErrorCategory.DECODE


def error_category_to_reason(category: ErrorCategory | None) -> str:
    """User-facing reason string."""
    mapping = {
        ErrorCategory.TYPE: "Invalid filter input",
        ErrorCategory.KEY: "Filter keys must be strings",
        ErrorCategory.VALUE: "Filter values must be text, numbers or true",
        ErrorCategory.DECODE: "Could not decode filter state",
        ErrorCategory.NONE: "",
        None: "",
    }
    return mapping.get(category, "Invalid filter input")


__all__ = [
    "ErrorCategory",
    "FilterDecodeError",
    "FilterKeyError",
    "FilterTypeError",
    "FilterValueError",
    "error_category_to_reason",
]
