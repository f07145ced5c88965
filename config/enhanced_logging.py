"""
Enhanced Logging Utility Module
Provides colored console logging with file/line tracking for the card
builders, an optional dated log file, and long-message truncation.
"""

import datetime
import logging
import os
import sys
import time
from functools import wraps
from pathlib import Path

# ======== Color Configuration ========
COLORS = {
    # Log levels
    "DEBUG": "\033[38;5;39m",  # Blue
    "INFO": "\033[38;5;34m",  # Green
    "WARNING": "\033[38;5;214m",  # Orange
    "ERROR": "\033[38;5;196m",  # Red
    "CRITICAL": "\033[48;5;196;38;5;231m",  # White on Red
    # Components
    "TIMESTAMP": "\033[38;5;246m",  # Dark Gray
    "PATH": "\033[1;38;5;93m",  # Bold Purple
    "FILE": "\033[1;38;5;63m",  # Bold Blue
    "LINE": "\033[38;5;69m",  # Light Blue
    "MSG_CONTENT": "\033[38;5;255m",  # White
    "RESET": "\033[0m",
}

# Card payloads get logged at DEBUG; keep them readable
MAX_MSG_LENGTH = 2000

CONSOLE_FORMAT = (
    "%(color_timestamp)s%(asctime)s%(color_reset)s "
    "%(color_path)s%(directory)s/%(color_reset)s"
    "%(color_file)s%(filename)s:%(lineno)d%(color_reset)s "
    "%(color_level)s[%(levelname).1s]%(color_reset)s "
    "%(color_msg_content)s%(message)s%(color_reset)s"
)
FILE_FORMAT = "%(asctime)s %(directory)s/%(filename)s:%(lineno)d [%(levelname).1s] %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_root_logger_initialized = False


def get_log_directory(log_path=None):
    """
    Resolve the directory for log files.

    Returns None when neither ``log_path`` nor the LOG_PATH environment
    variable is set, which keeps logging console-only.
    """
    log_path = log_path or os.getenv("LOG_PATH")
    if not log_path:
        return None
    return Path(log_path)


class ColoredLogRecord(logging.LogRecord):
    """LogRecord with color attributes and a cwd-relative path."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)

        cwd = os.getcwd()
        if self.pathname.startswith(cwd):
            self.rel_pathname = self.pathname[len(cwd) + 1 :]
        else:
            self.rel_pathname = self.pathname

        self.directory = os.path.dirname(self.rel_pathname)
        self.filename = os.path.basename(self.pathname)

        for color_name, color_code in COLORS.items():
            setattr(self, f"color_{color_name.lower()}", color_code)
        self.color_level = COLORS.get(self.levelname, COLORS["INFO"])

        if isinstance(self.msg, str) and len(self.msg) > MAX_MSG_LENGTH:
            self.msg = self.msg[: MAX_MSG_LENGTH - 3] + "..."


class ColoredFormatter(logging.Formatter):
    """Formatter that applies colors, or strips them when not on a tty."""

    def __init__(self, fmt=None, datefmt=None, use_colors=True):
        super().__init__(fmt, datefmt)
        self.use_colors = use_colors and self._should_use_colors()

    @staticmethod
    def _should_use_colors():
        return hasattr(sys.stdout, "isatty") and sys.stdout.isatty()

    def format(self, record):
        # Records created before setup_logger() lack the color attributes
        if not hasattr(record, "color_reset"):
            for color_name, color_code in COLORS.items():
                setattr(record, f"color_{color_name.lower()}", color_code)
            record.color_level = COLORS.get(record.levelname, COLORS["INFO"])
        if not hasattr(record, "directory"):
            record.directory = os.path.dirname(record.pathname)

        result = super().format(record)

        if not self.use_colors:
            for color_code in COLORS.values():
                result = result.replace(color_code, "")

        return result


def _create_log_file(log_dir: Path):
    """Create ``<log_dir>/<date>/gchat_cards_<time>.log``, or None if not writable."""
    try:
        daily_log_dir = log_dir / datetime.datetime.now().strftime("%Y-%m-%d")
        daily_log_dir.mkdir(parents=True, exist_ok=True)
        timestamp = datetime.datetime.now().strftime("%H-%M-%S")
        return daily_log_dir / f"gchat_cards_{timestamp}.log"
    except (OSError, PermissionError) as e:
        print(
            f"Warning: Cannot create log files ({e}). Using console logging only.",
            file=sys.stderr,
        )
        return None


def setup_logger(level=None, log_path=None):
    """
    Set up colored console logging (plus an optional log file) on the root logger.

    Only the first call configures handlers; later calls return the root logger.

    Args:
        level: Logging level (defaults to LOG_LEVEL env var or INFO)
        log_path: Directory for log files (defaults to LOG_PATH env var)

    Returns:
        logging.Logger: The root logger instance
    """
    global _root_logger_initialized

    if _root_logger_initialized:
        return logging.getLogger()

    if level is None:
        log_level_str = os.getenv("LOG_LEVEL", "INFO").upper()
        level = getattr(logging, log_level_str, logging.INFO)

    logging.setLogRecordFactory(ColoredLogRecord)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    log_dir = get_log_directory(log_path)
    log_file = _create_log_file(log_dir) if log_dir else None
    if log_file:
        try:
            file_handler = logging.FileHandler(log_file)
            file_handler.setLevel(level)
            file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt=DATE_FORMAT))
            root_logger.addHandler(file_handler)
        except (OSError, PermissionError):
            print(
                "Warning: Cannot create file handler. Using console logging only.",
                file=sys.stderr,
            )

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(ColoredFormatter(CONSOLE_FORMAT, datefmt=DATE_FORMAT))
    root_logger.addHandler(console_handler)

    _root_logger_initialized = True

    root_logger.debug("Enhanced logger initialized")
    return root_logger


def get_logger(name=None):
    """
    Get a named logger, setting up the root logger first if needed.

    Args:
        name (str, optional): Name for the logger. Defaults to None.

    Returns:
        logging.Logger: Named logger instance
    """
    if not _root_logger_initialized:
        setup_logger()

    return logging.getLogger(name)


def log_execution_time(func):
    """
    Decorator that logs function execution time.
    """

    @wraps(func)
    def wrapper(*args, **kwargs):
        logger = get_logger(func.__module__)
        start_time = time.time()

        logger.debug(f"Starting {func.__name__}")

        try:
            result = func(*args, **kwargs)
            execution_time = time.time() - start_time
            logger.debug(f"Completed {func.__name__} in {execution_time:.3f}s")
            return result
        except Exception as e:
            execution_time = time.time() - start_time
            logger.error(
                f"Failed {func.__name__} after {execution_time:.3f}s: {str(e)}"
            )
            raise

    return wrapper
