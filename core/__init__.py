"""Shared helpers for the format validation packages."""

from .errors import ConfigurationError, ErrorDetails
from .logging_config import parse_level, setup_logging

__all__ = [
    "ConfigurationError",
    "ErrorDetails",
    "parse_level",
    "setup_logging",
]
