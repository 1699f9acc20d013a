# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import importlib
import io
import logging

from spunj import FilterMap, config, log
from spunj.config import DEFAULT_DELIMITER
from spunj.errors import (
    ErrorCategory,
    FilterDecodeError,
    FilterKeyError,
    FilterTypeError,
    FilterValueError,
    error_category_to_reason,
)


def test_filter_settings_env_overrides(monkeypatch):
    monkeypatch.setenv("SPUNJ_DELIMITER", ";")
    monkeypatch.setenv("SPUNJ_STRICT_VALUES", "off")

    settings = config.load_filter_settings()

    assert settings.delimiter == ";"
    assert settings.strict_values is False


def test_filter_settings_defaults_and_empty_values(monkeypatch):
    monkeypatch.delenv("SPUNJ_STRICT_VALUES", raising=False)
    monkeypatch.setenv("SPUNJ_DELIMITER", "")

    settings = config.load_filter_settings()

    assert settings.delimiter == DEFAULT_DELIMITER
    assert settings.strict_values is True


def test_load_filter_settings_reads_env_at_call_time(monkeypatch):
    monkeypatch.setenv("SPUNJ_DELIMITER", "|")
    assert FilterMap({"k": ["a", "b"]}).get_query_string() == "k=a%7Cb"
    monkeypatch.setenv("SPUNJ_DELIMITER", "~")
    assert config.load_filter_settings().delimiter == "~"
    assert FilterMap({"k": ["a", "b"]}, delimiter=",").get_query_string() == "k=a%2Cb"


def test_setup_logging_uses_env_level(monkeypatch):
    monkeypatch.setenv("SPUNJ_LOG_LEVEL", "debug")
    importlib.reload(log)
    assert log.DEFAULT_LOG_LEVEL == "DEBUG"

    package_logger = logging.getLogger("spunj")
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)

    stream = io.StringIO()
    logger = log.setup_logging(stream=stream)
    assert logger.name == "spunj"
    assert logger.level == logging.DEBUG
    logging.getLogger("spunj.query").debug("hello")
    assert stream.getvalue() == "DEBUG spunj.query: hello\n"

    log.setup_logging("bogus")
    assert logger.level == logging.WARNING
    assert len([h for h in logger.handlers if getattr(h, "_spunj_handler", False)]) == 1
    assert not any(getattr(h, "_spunj_handler", False) for h in logging.getLogger().handlers)

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
    monkeypatch.delenv("SPUNJ_LOG_LEVEL")
    importlib.reload(log)


def test_error_hierarchy_and_categories():
    assert issubclass(FilterKeyError, FilterTypeError)
    assert issubclass(FilterValueError, TypeError)
    assert issubclass(FilterDecodeError, ValueError)
    assert FilterTypeError("x").category is ErrorCategory.TYPE
    assert FilterKeyError("x").category is ErrorCategory.KEY
    assert FilterValueError("x").category is ErrorCategory.VALUE
    assert FilterDecodeError("x").category is ErrorCategory.DECODE


def test_error_category_to_reason():
    assert error_category_to_reason(ErrorCategory.KEY) == "Filter keys must be strings"
    assert error_category_to_reason(ErrorCategory.DECODE) == "Could not decode filter state"
    assert error_category_to_reason(ErrorCategory.TYPE) == "Invalid filter input"
    assert error_category_to_reason(FilterTypeError("x").category) != ""
    assert error_category_to_reason(ErrorCategory.NONE) == ""
    assert error_category_to_reason(None) == ""
