# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Query parameter helpers built on ``httpx``.

External parameters are handled as an ordered list of ``(key, value)`` pairs rather
than ``httpx.QueryParams``, which groups repeated keys under their first occurrence
and would reorder parameters the filter map does not own.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from typing import TYPE_CHECKING, Any, Union
from urllib.parse import parse_qsl, urlencode

import httpx

from .errors import FilterDecodeError

if TYPE_CHECKING:
    from .collection import FilterMap

logger = logging.getLogger(__name__)

QueryParamsInput = Union[httpx.QueryParams, str, bytes, Mapping[str, Any], Sequence[tuple[str, Any]], None]
QueryPairs = list[tuple[str, str]]


def query_pairs(params: QueryParamsInput = None) -> QueryPairs:
    """
    Normalize caller-supplied parameters into ordered ``(key, value)`` string pairs.

    Accepts an ``httpx.QueryParams``, a raw query string (a leading ``?`` is ignored),
    a mapping, or a sequence of ``(key, value)`` pairs. Values are stringified the
    way ``httpx.QueryParams`` does it (``True`` -> ``"true"``, ``None`` -> ``""``).
    """
    if params is None:
        return []
    if isinstance(params, httpx.QueryParams):
        return params.multi_items()
    if isinstance(params, bytes):
        params = params.decode("utf-8")
    if isinstance(params, str):
        raw = params[1:] if params.startswith("?") else params
        return parse_qsl(raw, keep_blank_values=True)
    if isinstance(params, Mapping):
        return httpx.QueryParams(params).multi_items()
    pairs: QueryPairs = []
    for key, value in params:
        pairs.extend(httpx.QueryParams([(key, value)]).multi_items())
    return pairs


def merge_query_pairs(params: QueryParamsInput, overrides: Iterable[tuple[str, str]]) -> QueryPairs:
    """
    Layer ``overrides`` onto ``params`` keeping the external order.

    An overridden key takes the override value at its first occurrence and loses its
    later occurrences; every other external pair passes through untouched. Override
    keys not present externally are appended in order.
    """
    external = query_pairs(params)
    pending = dict(overrides)
    merged: QueryPairs = []
    emitted: set[str] = set()
    for key, value in external:
        if key not in pending:
            merged.append((key, value))
        elif key not in emitted:
            merged.append((key, pending[key]))
            emitted.add(key)
    merged.extend((key, value) for key, value in pending.items() if key not in emitted)
    logger.debug("Merged %d filter keys into %d external params", len(pending), len(external))
    return merged


def encode_query(pairs: Iterable[tuple[str, str]]) -> str:
    """Serialize pairs with the same escaping as ``str(httpx.QueryParams)``."""
    return urlencode(list(pairs))


def apply_to_url(url: httpx.URL | str, filters: FilterMap) -> str:
    """Return ``url`` with its query string reconciled against ``filters``."""
    try:
        parsed = httpx.URL(str(url))
        query = filters.get_query_string(parsed.query.decode("ascii"))
        return str(parsed.copy_with(query=query.encode("ascii") if query else None))
    except httpx.InvalidURL as exc:
        raise FilterDecodeError(f"invalid URL {str(url)!r}: {exc}") from exc


__all__ = ["QueryPairs", "QueryParamsInput", "apply_to_url", "encode_query", "merge_query_pairs", "query_pairs"]
