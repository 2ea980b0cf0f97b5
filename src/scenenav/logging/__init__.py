"""Logging module for scenenav."""

from .logger import NavigationLogger, get_logger, setup_logging

__all__ = [
    "setup_logging",
    "get_logger",
    "NavigationLogger",
]
