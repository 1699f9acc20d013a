# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
FilterMap: ordered filter state that round-trips to URL query parameters.

Each key maps to an ordered, duplicate-free list of scalar values. The collection
wraps a plain dict (insertion ordered, key unique) and exposes the MutableMapping
API on top of it, plus the append/remove operations that keep two invariants:

- values under one key are unique (see ``values.value_identity``)
- a key present in the map always has at least one value

Flattened values are joined with the delimiter without escaping it, so a value
that itself contains the delimiter (``"a,b"`` with ``","``) reads back from
``from_query_string`` as two values. Pick a delimiter the values never contain.

Instances are not thread-safe. Mutating a FilterMap while iterating over it raises
the same ``RuntimeError`` a dict would; callers must not do that.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Iterator, Mapping, MutableMapping
from typing import Any, Generic, TypeVar, Union

import httpx

from .config import FilterSettings, load_filter_settings
from .errors import FilterDecodeError, FilterTypeError, FilterValueError
from .query import QueryPairs, QueryParamsInput, encode_query, merge_query_pairs, query_pairs
from .values import Scalar, ValueList, validate_key, validate_scalar

logger = logging.getLogger(__name__)

K = TypeVar("K", bound=str)
V = TypeVar("V", bound=Union[str, int, float])

FilterEntries = Union[Mapping[Any, Iterable[Any]], Iterable[tuple[Any, Iterable[Any]]]]


class FilterMap(MutableMapping, Generic[K, V]):
    """Ordered mapping of filter keys to deduplicated value lists."""

    def __init__(
        self,
        entries: FilterEntries | None = None,
        *,
        delimiter: str | None = None,
        settings: FilterSettings | None = None,
    ):
        self.settings = settings or load_filter_settings()
        self.delimiter = delimiter or self.settings.delimiter
        self._data: dict[K, ValueList] = {}
        if entries is not None:
            # Later pairs shadow earlier ones, like dict(pairs).
            for key, values in self._validated_entries(entries):
                self._assign(key, values)

    # -- validation -------------------------------------------------------

    def _clean_values(self, key: str, values: Iterable[Any]) -> list[Scalar]:
        cleaned: list[Scalar] = []
        for value in values:
            if not self.settings.strict_values and (value is None or value is False):
                logger.debug("Skipping %r for filter %r", value, key)
                continue
            cleaned.append(validate_scalar(value, key=key))
        return cleaned

    def _clean_value_list(self, key: str, values: Any) -> list[Scalar]:
        if isinstance(values, (str, bytes, Mapping)) or not isinstance(values, Iterable):
            raise FilterValueError(
                f"values for filter {key!r} must be a list of scalars, got {type(values).__name__}",
                key=key,
                value=values,
            )
        return self._clean_values(key, values)

    def _validated_entries(self, entries: FilterEntries) -> list[tuple[K, list[Scalar]]]:
        """Validate every entry up front so a bad entry leaves the map untouched."""
        items = entries.items() if isinstance(entries, Mapping) else entries
        validated: list[tuple[K, list[Scalar]]] = []
        for entry in items:
            try:
                key, values = entry
            except (TypeError, ValueError) as exc:
                raise FilterTypeError(f"filter entry must be a (key, values) pair, got {entry!r}") from exc
            key = validate_key(key)
            validated.append((key, self._clean_value_list(key, values)))
        return validated

    def _lookup(self, key: Any) -> ValueList | None:
        if not isinstance(key, str):
            return None
        return self._data.get(key)

    def _assign(self, key: K, values: list[Scalar]) -> None:
        value_list = ValueList(values)
        if value_list:
            self._data[key] = value_list
        else:
            self._data.pop(key, None)

    # -- mapping protocol -------------------------------------------------

    def __getitem__(self, key: K) -> list[V]:
        value_list = self._lookup(key)
        if value_list is None:
            raise KeyError(key)
        return value_list.to_list()

    def __setitem__(self, key: K, values: Iterable[V]) -> None:
        key = validate_key(key)
        self._assign(key, self._clean_value_list(key, values))

    def __delitem__(self, key: K) -> None:
        if self._lookup(key) is None:
            raise KeyError(key)
        del self._data[key]

    def __contains__(self, key: object) -> bool:
        return self._lookup(key) is not None

    def __iter__(self) -> Iterator[K]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, FilterMap):
            return self._data.keys() == other._data.keys() and all(
                self._data[key] == other._data[key] for key in self._data
            )
        if isinstance(other, Mapping):
            if self._data.keys() != other.keys():
                return False
            return all(
                isinstance(other[key], (list, tuple)) and self._data[key] == list(other[key]) for key in self._data
            )
        return NotImplemented

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.parse!r})"

    def clear(self) -> None:
        self._data.clear()

    def copy(self) -> FilterMap[K, V]:
        return type(self)(self.parse, delimiter=self.delimiter, settings=self.settings)

    def entries(self):
        return self.items()

    @property
    def size(self) -> int:
        return len(self._data)

    # -- filter operations ------------------------------------------------

    def append(self, key: K, *values: V) -> FilterMap[K, V]:
        """Add ``values`` to ``key`` in order, skipping ones already present."""
        key = validate_key(key)
        cleaned = self._clean_values(key, values)
        if cleaned:
            self._data.setdefault(key, ValueList()).add_many(*cleaned)
        return self

    def append_bulk(self, entries: FilterEntries) -> FilterMap[K, V]:
        for key, values in self._validated_entries(entries):
            if values:
                self._data.setdefault(key, ValueList()).add_many(*values)
        return self

    def remove(self, key: K, *values: V) -> FilterMap[K, V]:
        """Drop ``values`` from ``key``; the key goes away with its last value."""
        key = validate_key(key)
        cleaned = self._clean_values(key, values)
        self._remove_values(key, cleaned)
        return self

    def remove_bulk(self, entries: FilterEntries) -> FilterMap[K, V]:
        for key, values in self._validated_entries(entries):
            self._remove_values(key, values)
        return self

    def _remove_values(self, key: K, values: list[Scalar]) -> None:
        value_list = self._data.get(key)
        if value_list is None:
            return
        value_list.remove_many(*values)
        if not value_list:
            del self._data[key]

    def get_last_value(self, key: K) -> V | None:
        value_list = self._lookup(key)
        if not value_list:
            return None
        return value_list.last()

    def has_some_value(self, key: K, *values: V) -> bool:
        value_list = self._lookup(key)
        if value_list is None:
            return False
        return any(value in value_list for value in values)

    def has_each_value(self, key: K, *values: V) -> bool:
        """True when ``key`` holds every value; vacuously true for no values."""
        value_list = self._lookup(key)
        if value_list is None:
            return False
        return all(value in value_list for value in values)

    # -- query string -----------------------------------------------------

    def flattened_items(self) -> Iterator[tuple[K, str]]:
        for key, value_list in self._data.items():
            yield key, value_list.flatten(self.delimiter)

    def merged_query_pairs(self, params: QueryParamsInput = None) -> QueryPairs:
        return merge_query_pairs(params, self.flattened_items())

    def get_query_string(self, params: QueryParamsInput = None) -> str:
        """
        Reconcile this map against external query params and serialize the result.

        External parameters keep their order; keys present here take this map's
        values; keys only present here are appended. Returns "" when nothing remains.
        """
        return encode_query(self.merged_query_pairs(params))

    # -- derived views ----------------------------------------------------

    @property
    def parse(self) -> dict[K, list[V]]:
        return {key: value_list.to_list() for key, value_list in self._data.items()}

    @property
    def serialize(self) -> str:
        return json.dumps(self.parse)

    @property
    def url_search_params(self) -> httpx.QueryParams:
        return httpx.QueryParams(list(self.flattened_items()))

    @property
    def total(self) -> int:
        return sum(len(value_list) for value_list in self._data.values())

    # -- decoders ---------------------------------------------------------

    @classmethod
    def from_json(
        cls,
        text: str | bytes,
        *,
        delimiter: str | None = None,
        settings: FilterSettings | None = None,
    ) -> FilterMap:
        """Inverse of ``serialize``."""
        try:
            data = json.loads(text)
        except ValueError as exc:
            raise FilterDecodeError(f"invalid filter JSON: {exc}") from exc
        if not isinstance(data, dict):
            raise FilterDecodeError(f"filter JSON must be an object, got {type(data).__name__}")
        for key, values in data.items():
            if not isinstance(values, list):
                raise FilterDecodeError(f"filter {key!r} must map to a list, got {type(values).__name__}")
        try:
            return cls(data, delimiter=delimiter, settings=settings)
        except FilterTypeError as exc:
            raise FilterDecodeError(str(exc)) from exc

    @classmethod
    def from_query_string(
        cls,
        params: QueryParamsInput,
        *,
        keys: Iterable[str] | None = None,
        delimiter: str | None = None,
        settings: FilterSettings | None = None,
    ) -> FilterMap:
        """
        Hydrate a map from query parameters, splitting each value on the delimiter.

        Values come back as strings. Repeated parameters accumulate; empty pieces are
        dropped. When ``keys`` is given only those parameters are read.
        """
        filters = cls(delimiter=delimiter, settings=settings)
        allowed = set(keys) if keys is not None else None
        for key, raw in query_pairs(params):
            if allowed is not None and key not in allowed:
                continue
            pieces = [piece for piece in raw.split(filters.delimiter) if piece]
            filters.append(key, *pieces)
        return filters

    # Names used by the JavaScript API this mirrors.
    appendBulk = append_bulk
    removeBulk = remove_bulk
    getLastValue = get_last_value
    hasSomeValue = has_some_value
    hasEachValue = has_each_value
    getQueryString = get_query_string
    urlSearchParams = url_search_params


__all__ = ["FilterEntries", "FilterMap"]
