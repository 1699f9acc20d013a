# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Logging helpers for spunj.

spunj is mostly used as a library, so ``setup_logging`` configures the ``spunj``
logger only and leaves the root logger to the host application.
"""

from __future__ import annotations

import logging
import os
from typing import TextIO

DEFAULT_LOG_LEVEL = os.getenv("SPUNJ_LOG_LEVEL", "WARNING").upper()
LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"
PACKAGE_LOGGER = "spunj"


def setup_logging(level: str | None = None, *, stream: TextIO | None = None) -> logging.Logger:
    """Attach a stream handler to the package logger; repeated calls only adjust the level."""
    effective_level = (level or DEFAULT_LOG_LEVEL).upper()
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(getattr(logging, effective_level, logging.WARNING))
    if not any(getattr(handler, "_spunj_handler", False) for handler in logger.handlers):
        handler = logging.StreamHandler(stream)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._spunj_handler = True  # type: ignore[attr-defined]
        logger.addHandler(handler)
    return logger


__all__ = ["setup_logging"]
