"""Logging setup for the extractor service.

Two named loggers, ``figma_extractor`` (domain code) and ``api`` (HTTP layer),
each write to their own file under LOG_DIR and echo to the console. Module
loggers such as ``figma_extractor.project`` propagate into them.
"""
from __future__ import annotations

import logging
import os
from pathlib import Path

LOG_DIR = Path(os.getenv("LOG_DIR", str(Path.cwd() / "logs")))

FILE_FORMAT = "%(asctime)s [%(name)s] [%(levelname)s] %(message)s"
CONSOLE_FORMAT = "%(asctime)s [%(name)s] %(message)s"

_configured_loggers: set[str] = set()


def _handler(handler: logging.Handler, fmt: str) -> logging.Handler:
    handler.setLevel(logging.INFO)
    handler.setFormatter(logging.Formatter(fmt))
    return handler


def setup_logger(name: str, filename: str) -> logging.Logger:
    """Attach file + console handlers to ``name`` once.

    Args:
        name: Logger name ('figma_extractor' or 'api')
        filename: File under LOG_DIR (e.g. 'api.log')
    """
    logger = logging.getLogger(name)
    if name in _configured_loggers:
        return logger

    LOG_DIR.mkdir(parents=True, exist_ok=True)
    logger.setLevel(logging.INFO)
    logger.propagate = False
    logger.addHandler(_handler(logging.FileHandler(LOG_DIR / filename, encoding="utf-8"), FILE_FORMAT))
    logger.addHandler(_handler(logging.StreamHandler(), CONSOLE_FORMAT))

    _configured_loggers.add(name)
    return logger


def get_extractor_logger() -> logging.Logger:
    return setup_logger("figma_extractor", "extractor.log")


def get_api_logger() -> logging.Logger:
    return setup_logger("api", "api.log")
