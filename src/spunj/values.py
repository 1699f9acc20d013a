# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Scalar validation and the ordered value list backing each filter key.

Values compare strictly: ``True`` only matches ``True``, strings only match strings,
and numbers match numerically (``1`` and ``1.0`` are the same value). Python's own
equality would treat ``True == 1``, so membership goes through ``value_identity``.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Iterator
from typing import Any, Literal, Union

from .errors import FilterKeyError, FilterValueError

Scalar = Union[str, int, float, Literal[True]]
ValueIdentity = tuple[str, Any]


def validate_key(key: Any) -> str:
    if not isinstance(key, str):
        raise FilterKeyError(f"filter key must be str, got {type(key).__name__}", key=key)
    return key


def is_scalar(value: Any) -> bool:
    if value is True or isinstance(value, str):
        return True
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    if isinstance(value, float):
        return math.isfinite(value)
    return False


def validate_scalar(value: Any, *, key: str | None = None) -> Scalar:
    if not is_scalar(value):
        raise FilterValueError(
            f"filter value for {key!r} must be str, int, float or True, got {value!r}",
            key=key,
            value=value,
        )
    return value


def value_identity(value: Scalar) -> ValueIdentity:
    if value is True:
        return ("bool", True)
    if isinstance(value, str):
        return ("str", value)
    return ("num", value)


def flatten_scalar(value: Scalar) -> str:
    """Render one value the way it appears inside a query parameter."""
    if value is True:
        return "true"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def flatten_values(values: Iterable[Scalar], delimiter: str) -> str:
    return delimiter.join(flatten_scalar(value) for value in values)


class ValueList:
    """Ordered, deduplicated scalar collection."""

    def __init__(self, values: Iterable[Scalar] = ()):
        self._values: list[Scalar] = []
        self._seen: set[ValueIdentity] = set()
        self.add_many(*values)

    def add(self, value: Scalar) -> bool:
        identity = value_identity(value)
        if identity not in self._seen:
            self._seen.add(identity)
            self._values.append(value)
            return True
        return False

    def add_many(self, *values: Scalar) -> int:
        count = 0
        for value in values:
            if self.add(value):
                count += 1
        return count

    def remove(self, value: Scalar) -> bool:
        identity = value_identity(value)
        if identity not in self._seen:
            return False
        self._seen.remove(identity)
        for index, existing in enumerate(self._values):
            if value_identity(existing) == identity:
                del self._values[index]
                break
        return True

    def remove_many(self, *values: Scalar) -> int:
        count = 0
        for value in values:
            if self.remove(value):
                count += 1
        return count

    def contains(self, value: Any) -> bool:
        return is_scalar(value) and value_identity(value) in self._seen

    def __contains__(self, value: Any) -> bool:
        return self.contains(value)

    def __iter__(self) -> Iterator[Scalar]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ValueList):
            other_values: Iterable[Any] = other._values
        elif isinstance(other, (list, tuple)):
            if not all(is_scalar(value) for value in other):
                return False
            other_values = other
        else:
            return NotImplemented
        return [value_identity(v) for v in self._values] == [value_identity(v) for v in other_values]

    def __repr__(self) -> str:  # pragma: no cover - debug helper
        return f"ValueList({self._values!r})"

    def last(self) -> Scalar | None:
        return self._values[-1] if self._values else None

    def to_list(self) -> list[Scalar]:
        return list(self._values)

    def flatten(self, delimiter: str) -> str:
        return flatten_values(self._values, delimiter)


__all__ = [
    "Scalar",
    "ValueList",
    "flatten_scalar",
    "flatten_values",
    "is_scalar",
    "validate_key",
    "validate_scalar",
    "value_identity",
]
