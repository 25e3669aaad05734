"""
Logging configuration and utilities for page-digest.

Provides centralized logging setup with support for:
- Console output on stderr and an optional rotating log file
- A command-line level override (--verbose)
- Per-module loggers under one application root
- Context adapters that tag messages with the page URL
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from page_digest.config.settings import LoggingSettings


# Root logger name for the application
ROOT_LOGGER_NAME = "page_digest"

# Used when setup_logging is called without settings
DEFAULT_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Track whether logging has been configured
_logging_configured = False


def setup_logging(
    settings: "LoggingSettings | None" = None,
    level: str | None = None,
) -> logging.Logger:
    """
    Configure the application logging system.

    Sets up handlers for console and/or file output based on settings.
    Should be called once at application startup; later calls return the
    already configured logger until reset_logging() is called.

    Args:
        settings: Logging configuration. If None, uses sensible defaults.
        level: Level name overriding the configured one (e.g. "DEBUG").

    Returns:
        The configured root logger for the application.
    """
    global _logging_configured

    logger = logging.getLogger(ROOT_LOGGER_NAME)

    # Avoid duplicate handlers if called multiple times
    if _logging_configured:
        return logger

    # Drop handlers left over from a previous configuration
    logger.handlers.clear()

    if settings is None:
        level_name = "INFO"
        log_format = DEFAULT_FORMAT
        date_format = DEFAULT_DATE_FORMAT
        log_to_console = True
        file_path = None
        max_file_size_mb = 10
        backup_count = 3
    else:
        level_name = settings.level
        log_format = settings.format
        date_format = settings.date_format
        log_to_console = settings.log_to_console
        file_path = settings.file_path
        max_file_size_mb = settings.max_file_size_mb
        backup_count = settings.backup_count

    # Explicit override wins; unknown names degrade to INFO
    resolved_level = getattr(logging, (level or level_name).upper(), logging.INFO)
    logger.setLevel(resolved_level)

    formatter = logging.Formatter(fmt=log_format, datefmt=date_format)

    if log_to_console:
        # stderr keeps stdout clean for --json output
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(resolved_level)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    # File output only when a path is configured
    if file_path is not None:
        file_handler = _create_file_handler(
            file_path=file_path,
            max_bytes=max_file_size_mb * 1024 * 1024,
            backup_count=backup_count,
            level=resolved_level,
            formatter=formatter,
        )
        logger.addHandler(file_handler)

    # Prevent propagation to root logger to avoid duplicate logs
    logger.propagate = False

    _logging_configured = True

    return logger


def _create_file_handler(
    file_path: Path,
    max_bytes: int,
    backup_count: int,
    level: int,
    formatter: logging.Formatter,
) -> RotatingFileHandler:
    """
    Create a rotating file handler for logging.

    Args:
        file_path: Path to the log file
        max_bytes: Maximum file size before rotation
        backup_count: Number of backup files to keep
        level: Logging level for the handler
        formatter: Formatter for log messages

    Returns:
        Configured RotatingFileHandler
    """
    # Log directory may not exist yet on first run
    file_path.parent.mkdir(parents=True, exist_ok=True)

    handler = RotatingFileHandler(
        filename=str(file_path),
        maxBytes=max_bytes,
        backupCount=backup_count,
        encoding="utf-8",
    )
    handler.setLevel(level)
    handler.setFormatter(formatter)

    return handler


def get_logger(name: str | None = None) -> logging.Logger:
    """
    Get a logger instance for the specified module.

    Every logger hangs off the page_digest root, so one call to
    setup_logging configures the traversal, the finishing stages and
    the CLI alike.

    Args:
        name: Module name for the logger. If None, returns the root logger.
              Typically pass __name__.

    Returns:
        Logger instance configured as child of application root.

    Example:
        >>> logger = get_logger(__name__)
        >>> logger.info("Extraction started")
    """
    if name is None:
        return logging.getLogger(ROOT_LOGGER_NAME)

    # Package modules already live under the root
    if name.startswith(ROOT_LOGGER_NAME):
        return logging.getLogger(name)

    # Anything else (scripts, tests) is attached beneath it
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def reset_logging() -> None:
    """
    Reset the logging configuration.

    Removes all handlers, restores propagation and clears the configured
    flag, so tests can capture records and reconfigure freely.
    """
    global _logging_configured

    logger = logging.getLogger(ROOT_LOGGER_NAME)

    # Close handlers so rotating files are released
    for handler in logger.handlers[:]:
        handler.close()
        logger.removeHandler(handler)

    # Let records reach pytest's caplog handler on the root logger
    logger.propagate = True
    _logging_configured = False


class LoggerAdapter(logging.LoggerAdapter):
    """
    Logger adapter that appends contextual fields to log messages.

    The extractor uses it to tag every message of one extraction call
    with the page URL.

    Example:
        >>> base_logger = get_logger(__name__)
        >>> logger = LoggerAdapter(base_logger, {"url": "https://example.com"})
        >>> logger.info("Traversal done")  # "Traversal done [url=https://example.com]"
    """

    def process(
        self, msg: str, kwargs: dict
    ) -> tuple[str, dict]:
        """
        Append the adapter's fields to the message.

        Args:
            msg: Original log message
            kwargs: Keyword arguments passed to the logging call

        Returns:
            Tuple of (message with context, kwargs)
        """
        if self.extra:
            context_str = " ".join(f"[{k}={v}]" for k, v in self.extra.items())
            msg = f"{msg} {context_str}"
        return msg, kwargs


def get_logger_with_context(
    name: str | None = None,
    **context: str,
) -> LoggerAdapter:
    """
    Get a logger with additional context that appears in all messages.

    Args:
        name: Module name for the logger
        **context: Key-value pairs to include in all log messages

    Returns:
        LoggerAdapter with context attached

    Example:
        >>> log = get_logger_with_context(__name__, url="https://example.com/post")
        >>> log.warning("Falling back")  # "Falling back [url=https://example.com/post]"
    """
    base_logger = get_logger(name)
    return LoggerAdapter(base_logger, context)
