# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""spunj CLI."""

from __future__ import annotations

import argparse
import json
import sys

from ..collection import FilterMap
from ..config import FilterSettings, load_filter_settings
from ..errors import FilterDecodeError, FilterTypeError, error_category_to_reason
from ..log import setup_logging
from ..query import apply_to_url


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Reconcile filter state with URL query strings")
    parser.add_argument(
        "--delimiter",
        default=None,
        help="Separator used when flattening value lists (default: SPUNJ_DELIMITER or ',')",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    merge_parser = subparsers.add_parser("merge", help="Merge filters into a query string")
    merge_parser.add_argument("filters", help="Filter state as a JSON object of key -> list")
    merge_parser.add_argument("query", nargs="?", default="", help="Existing query string")

    url_parser = subparsers.add_parser("url", help="Apply filters to a URL's query string")
    url_parser.add_argument("filters", help="Filter state as a JSON object of key -> list")
    url_parser.add_argument("url", help="URL to rewrite")

    parse_parser = subparsers.add_parser("parse", help="Decode filters from a query string")
    parse_parser.add_argument("query", help="Query string to decode")
    parse_parser.add_argument(
        "--key",
        dest="keys",
        action="append",
        default=None,
        help="Only treat this parameter as a filter (repeatable)",
    )
    return parser


def _run(args: argparse.Namespace, settings: FilterSettings) -> str:
    if args.command == "parse":
        filters = FilterMap.from_query_string(args.query, keys=args.keys, settings=settings)
        return json.dumps(filters.parse, indent=2)

    filters = FilterMap.from_json(args.filters, settings=settings)
    if args.command == "url":
        return apply_to_url(args.url, filters)
    return filters.get_query_string(args.query)


def main(argv: list[str] | None = None) -> int:
    setup_logging()
    parser = build_parser()
    args = parser.parse_args(argv)

    settings = load_filter_settings()
    if args.delimiter:
        settings.delimiter = args.delimiter

    try:
        output = _run(args, settings)
    except (FilterTypeError, FilterDecodeError) as exc:
        reason = error_category_to_reason(exc.category)
        sys.stderr.write(f"[spunj] {reason}: {exc}\n")
        return 2

    sys.stdout.write(output + "\n")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
