# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Configuration helpers for spunj."""

import os
from dataclasses import dataclass

DEFAULT_DELIMITER = ","


def _str_env(name: str, default: str) -> str:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return value


def _bool_env(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


@dataclass
class FilterSettings:
    """Filter collection defaults."""

    delimiter: str = DEFAULT_DELIMITER
    strict_values: bool = True

    @classmethod
    def from_env(cls) -> "FilterSettings":
        """Create settings from environment variables (evaluated at call time)."""
        return cls(
            delimiter=_str_env("SPUNJ_DELIMITER", cls.delimiter),
            strict_values=_bool_env("SPUNJ_STRICT_VALUES", cls.strict_values),
        )


def load_filter_settings() -> FilterSettings:
    """Load filter settings from environment with sensible defaults."""
    return FilterSettings.from_env()
