# audioprobe/common/logging.py
from __future__ import annotations

import logging


def get_logger(name: str = "uvicorn.error", level: int | str = logging.INFO) -> logging.Logger:
    """
    Logger shared by the probe adapter, the analyze service and the API.
    Defaults to Uvicorn's error logger so probe failures land next to the
    server's own output; outside Uvicorn (tests, scripts) a single basicConfig
    is installed. `level` takes a number or a name such as Settings.log_level.
    """
    if isinstance(level, str):
        level = level.upper()
    logger = logging.getLogger(name)
    if not logging.getLogger().handlers and not logger.handlers:
        logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    logger.setLevel(level)
    return logger
