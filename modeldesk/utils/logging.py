# -*- coding: utf-8 -*-
"""Package logger setup shared by the CLI and the app."""
from __future__ import annotations

import logging
import os
import sys
from typing import Optional, Union

from ..constant import LOG_LEVEL_ENV

LOG_FORMAT = "%(asctime)s | %(levelname)-7s | %(name)s: %(message)s"
LOG_NAME = "modeldesk"


def resolve_log_level(level: Optional[Union[str, int]] = None) -> int:
    """Level from the argument, else ``MODELDESK_LOG_LEVEL``, else WARNING."""
    if level is None:
        level = os.environ.get(LOG_LEVEL_ENV, "warning")
    if isinstance(level, int):
        return level
    value = logging.getLevelName(str(level).strip().upper())
    return value if isinstance(value, int) else logging.WARNING


def setup_logger(level: Optional[Union[str, int]] = None) -> logging.Logger:
    """Configure the package logger once; later calls only set the level."""
    logger = logging.getLogger(LOG_NAME)
    logger.setLevel(resolve_log_level(level))
    if not any(getattr(h, "_modeldesk", False) for h in logger.handlers):
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._modeldesk = True  # type: ignore[attr-defined]
        logger.addHandler(handler)
    return logger
