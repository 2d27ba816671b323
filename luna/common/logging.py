# luna/common/logging.py
from __future__ import annotations

import logging
from typing import Optional

from luna.common.settings import get_settings


def get_logger(name: str = "uvicorn.error", level: Optional[int | str] = None) -> logging.Logger:
    """
    Logger shared with Uvicorn when running under it. The level defaults to
    LOG_LEVEL from settings; basicConfig is applied once if nothing is
    configured yet.
    """
    if level is None:
        level = get_settings().log_level.upper()
    logger = logging.getLogger(name)
    if not logging.getLogger().handlers and not logger.handlers:
        logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    logger.setLevel(level)
    return logger
