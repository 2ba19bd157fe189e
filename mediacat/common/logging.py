# mediacat/common/logging.py
from __future__ import annotations

import logging
from typing import Optional


def get_logger(name: str = "mediacat", level: Optional[int | str] = None) -> logging.Logger:
    """
    Return a named logger for the catalog layer.
    If no handlers are set anywhere, we add a basicConfig once.
    Without `level` the logger inherits from its parents, so setting the
    level on "mediacat" (see Catalog.from_settings) covers every module.
    """
    logger = logging.getLogger(name)
    if not logging.getLogger().handlers and not logger.handlers:
        logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    if level is not None:
        logger.setLevel(level)
    return logger
