# cemco2/logger.py
"""
Logging setup for the comparison tool.

Library modules only create ``logging.getLogger(__name__)`` loggers; the
entry points (console, Streamlit page) call :func:`setup_logger` once to
attach a handler to the ``cemco2`` logger tree.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logger(
    name: str = "cemco2",
    log_file: Optional[str] = None,
    level: int = logging.INFO,
) -> logging.Logger:
    """
    Configure a logger with a single handler.

    Args:
        name: Logger name (the package root by default)
        log_file: Optional file path; console output when omitted
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)

    Returns:
        The configured logger
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Streamlit reruns the script on every interaction; never stack handlers
    while logger.handlers:
        logger.removeHandler(logger.handlers[0])

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handler: logging.Handler = logging.FileHandler(log_path, encoding="utf-8")
    else:
        handler = logging.StreamHandler()
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
    logger.addHandler(handler)

    return logger
