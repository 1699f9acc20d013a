# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
spunj package entrypoint.

FilterMap keeps search/filter panel state as an ordered mapping of keys to
deduplicated value lists, and reconciles that state with URL query parameters
(``httpx.QueryParams``) without disturbing the order of parameters it does not own.
"""

from .collection import FilterMap
from .config import FilterSettings, load_filter_settings
from .errors import (
    ErrorCategory,
    FilterDecodeError,
    FilterKeyError,
    FilterTypeError,
    FilterValueError,
)
from .log import setup_logging
from .query import apply_to_url, encode_query, merge_query_pairs, query_pairs
from .values import Scalar, ValueList
from .version import __version__

__all__ = [
    "ErrorCategory",
    "FilterDecodeError",
    "FilterKeyError",
    "FilterMap",
    "FilterSettings",
    "FilterTypeError",
    "FilterValueError",
    "Scalar",
    "ValueList",
    "apply_to_url",
    "encode_query",
    "load_filter_settings",
    "merge_query_pairs",
    "query_pairs",
    "setup_logging",
    "__version__",
]
