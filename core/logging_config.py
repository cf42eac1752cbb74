"""Logging setup shared by the CLI and embedding services."""

import logging
from logging import Logger
from typing import Union

DEFAULT_FORMAT = "[%(asctime)s] %(levelname)s %(name)s: %(message)s"
DEFAULT_DATEFMT = "%H:%M:%S"
PROJECT_LOGGER = "formats"


def parse_level(level: Union[int, str]) -> int:
    """Accept ``logging`` constants as well as names such as ``"debug"``."""

    if isinstance(level, int):
        return level
    value = logging.getLevelName(level.strip().upper())
    if not isinstance(value, int):
        raise ValueError(f"Unknown log level: {level!r}")
    return value


def setup_logging(level: Union[int, str] = logging.INFO) -> Logger:
    logging.basicConfig(level=parse_level(level), format=DEFAULT_FORMAT, datefmt=DEFAULT_DATEFMT)
    logger = logging.getLogger(PROJECT_LOGGER)
    logger.debug("Logging initialized.")
    return logger
