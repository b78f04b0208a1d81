"""
Logging utilities for the resource map builder.

Provides file-based logging that:
- Writes to logs/resource_map.log under the data directory
  (~/.resource_map, or RESOURCE_MAP_HOME)
- Wipes the log on each program restart
- Also logs to the console
- Captures uncaught exceptions
- Logs key events (navigation, persistence, export)
"""

import logging
import sys
from pathlib import Path
from typing import Optional

from .config import APP_NAME, APP_VERSION, DATA_DIR


# Log directory and file
LOG_DIR = DATA_DIR / "logs"
LOG_FILE = LOG_DIR / "resource_map.log"

# Module-level logger
_logger: Optional[logging.Logger] = None
_initialized = False


def _ensure_log_dir() -> bool:
    """Ensure the log directory exists."""
    try:
        LOG_DIR.mkdir(parents=True, exist_ok=True)
        return True
    except OSError as e:
        print(f"[WARN] Could not create log directory: {e}")
        return False


def setup_logging() -> logging.Logger:
    """
    Initialize the logging system.

    Call this once at application startup. The log file is wiped on each restart.

    Returns:
        The configured logger instance.
    """
    global _logger, _initialized

    if _initialized and _logger:
        return _logger

    _logger = logging.getLogger("resource_map")
    _logger.setLevel(logging.DEBUG)
    _logger.handlers.clear()

    # File handler - 'w' mode wipes the file on each restart
    if _ensure_log_dir():
        try:
            file_handler = logging.FileHandler(
                LOG_FILE,
                mode='w',
                encoding='utf-8',
            )
            file_handler.setLevel(logging.DEBUG)
            formatter = logging.Formatter(
                '%(asctime)s - %(levelname)s - %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            )
            file_handler.setFormatter(formatter)
            _logger.addHandler(file_handler)
        except OSError as e:
            print(f"[WARN] Could not set up file logging: {e}")

    # Also log to console
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.INFO)
    console_handler.setFormatter(logging.Formatter('%(levelname)s - %(message)s'))
    _logger.addHandler(console_handler)

    _logger.info("=" * 60)
    _logger.info(f"{APP_NAME} v{APP_VERSION} started")
    _logger.info(f"Log file: {LOG_FILE}")
    _logger.info(f"Python version: {sys.version}")
    _logger.info("=" * 60)

    _setup_exception_handler()

    _initialized = True
    return _logger


def _setup_exception_handler() -> None:
    """Set up global exception handler to log uncaught exceptions."""
    original_excepthook = sys.excepthook

    def exception_handler(exc_type, exc_value, exc_traceback):
        if issubclass(exc_type, KeyboardInterrupt):
            original_excepthook(exc_type, exc_value, exc_traceback)
            return

        if _logger:
            _logger.critical("Uncaught exception:", exc_info=(exc_type, exc_value, exc_traceback))

        original_excepthook(exc_type, exc_value, exc_traceback)

    sys.excepthook = exception_handler


def get_logger() -> logging.Logger:
    """
    Get the logger instance.

    Before setup_logging() runs (library use, tests) this returns the bare
    package logger without touching the log file.
    """
    if _initialized and _logger:
        return _logger
    return logging.getLogger("resource_map")


# Convenience functions for direct logging
def log_debug(message: str) -> None:
    """Log a debug message."""
    get_logger().debug(message)


def log_info(message: str) -> None:
    """Log an info message."""
    get_logger().info(message)


def log_warning(message: str) -> None:
    """Log a warning message."""
    get_logger().warning(message)


def log_error(message: str, detail: str = "", exc_info: bool = False) -> None:
    """
    Log an error message.

    Args:
        message: The error message (or context label if detail is provided)
        detail: Optional detail string appended after ": "
        exc_info: If True, include exception traceback
    """
    if detail:
        message = f"{message}: {detail}"
    get_logger().error(message, exc_info=exc_info)


def log_exception(message: str) -> None:
    """Log an error with full exception traceback."""
    get_logger().exception(message)


def log_export(target: str, success: bool, details: str = "") -> None:
    """
    Log the outcome of an image export.

    Args:
        target: File name being exported
        success: Whether the export succeeded
        details: Additional details (path, error message)
    """
    status = "SUCCESS" if success else "FAILED"
    msg = f"EXPORT [{status}] {target}"
    if details:
        msg += f" - {details}"

    if success:
        get_logger().info(msg)
    else:
        get_logger().error(msg)


def get_log_file_path() -> Path:
    """Get the path to the log file."""
    return LOG_FILE
