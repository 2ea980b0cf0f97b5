"""Structured logging configuration for scenenav using structlog.

Transition and hook events are logged as structured records so that a
navigation session can be replayed from the log.
"""

import logging
import os
import sys
from datetime import datetime
from pathlib import Path
from typing import Any, cast

import structlog

from ..config import get_settings


def setup_logging(
    level: str = "INFO",
    log_file: Path | None = None,
    structured: bool = True,
    console: bool = True,
    add_timestamp: bool = True,
    colorize: bool = True,
) -> None:
    """Configure structured logging for scenenav.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional path to log file
        structured: Use JSON structured output
        console: Enable console output (overridden by SCENENAV_DISABLE_CONSOLE_LOGGING env var)
        add_timestamp: Add timestamps to logs
        colorize: Colorize console output (only for non-structured)
    """
    if os.getenv("SCENENAV_DISABLE_CONSOLE_LOGGING") == "1":
        console = False
        log_file = None

    processors: list[Any] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
    ]

    if add_timestamp:
        processors.append(structlog.processors.TimeStamper(fmt="iso"))

    processors.extend(
        [
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
        ]
    )

    if structured:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=colorize and console))

    structlog.configure(
        processors=processors,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    handlers: list[logging.Handler] = []

    if console:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(logging.Formatter("%(message)s"))
        handlers.append(console_handler)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter("%(message)s"))
        handlers.append(file_handler)

    if not handlers:
        handlers.append(logging.NullHandler())
        level = "CRITICAL"

    logging.basicConfig(
        format="%(message)s",
        level=getattr(logging, level.upper()),
        handlers=handlers,
        force=True,
    )


_logging_initialized = False


def _ensure_logging_initialized() -> None:
    """Ensure logging is initialized (called lazily, not at import time)."""
    global _logging_initialized

    if _logging_initialized:
        return

    if os.getenv("SCENENAV_DISABLE_CONSOLE_LOGGING") == "1":
        logging.disable(logging.CRITICAL)
        _logging_initialized = True
        return

    try:
        settings = get_settings()
        log_file = None
        if settings.log_path is not None:
            log_file = settings.log_path / f"scenenav_{datetime.now().strftime('%Y%m%d')}.log"
        setup_logging(
            level="DEBUG" if settings.debug_mode else settings.log_level,
            log_file=log_file,
            structured=settings.structured_logging and not settings.debug_mode,
            colorize=settings.debug_mode,
        )
    except (AttributeError, OSError, ValueError):
        # Invalid settings or log path, fall back to plain console logging
        setup_logging(level="INFO", structured=False)

    _logging_initialized = True


def get_logger(name: str) -> structlog.BoundLogger:
    """Get a structured logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Structured logger instance
    """
    _ensure_logging_initialized()
    return cast(structlog.BoundLogger, structlog.get_logger(name))


class NavigationLogger:
    """Specialized logger for scene transitions and lifecycle hooks."""

    def __init__(self, base_logger: structlog.BoundLogger | None = None) -> None:
        """Initialize navigation logger.

        Args:
            base_logger: Base logger to use
        """
        self.logger = base_logger or get_logger(__name__)

    def log_transition(
        self,
        from_scene: str,
        to_scene: str,
        verb: str | None = None,
        **kwargs,
    ) -> None:
        """Log a committed scene transition.

        Args:
            from_scene: Scene active before the commit
            to_scene: Scene active after the commit
            verb: Navigation verb that produced the commit
            **kwargs: Additional context
        """
        log_data = {"from_scene": from_scene, "to_scene": to_scene, **kwargs}
        if verb:
            log_data["verb"] = verb

        self.logger.info("scene_transition", **log_data)

    def log_hook(
        self,
        scene: str,
        hook: str,
        outcome: str,
        error: BaseException | None = None,
        **kwargs,
    ) -> None:
        """Log the outcome of a lifecycle hook.

        Args:
            scene: Scene owning the hook
            hook: Hook name (on_enter / on_exit)
            outcome: succeeded, failed or skipped
            error: Optional error raised by the hook
            **kwargs: Additional context
        """
        log_data: dict[str, Any] = {"scene": scene, "hook": hook, "outcome": outcome, **kwargs}

        if error is not None:
            log_data["error"] = str(error)
            log_data["error_type"] = type(error).__name__
            self.logger.error("scene_hook", **log_data)
        else:
            self.logger.debug("scene_hook", **log_data)
