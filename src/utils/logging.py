import logging
import sys
import os
from typing import Optional

from src.core.configs import settings


LOG_FORMAT = "%(asctime)s | %(levelname)s | %(filename)s:%(lineno)d | %(message)s"
DATE_FORMAT = "%d-%m-%Y %H:%M:%S"


class ColoredFormatter(logging.Formatter):
    """Formatter that colours the whole line by log level"""

    COLORS = {
        "DEBUG": "\033[36m",  # Cyan
        "WARNING": "\033[33m",  # Yellow
        "ERROR": "\033[31m",  # Red
        "CRITICAL": "\033[35m",  # Magenta
        "RESET": "\033[0m",
    }

    def format(self, record):
        log_message = super().format(record)
        color = self.COLORS.get(record.levelname, self.COLORS["RESET"])
        return f"{color}{log_message}{self.COLORS['RESET']}"


def supports_color() -> bool:
    """
    Check if the terminal supports color output.

    Returns:
        True if colors are supported, False otherwise
    """
    if os.getenv("FORCE_COLOR"):
        return True

    if os.getenv("NO_COLOR") or os.getenv("CI"):
        return False

    if not hasattr(sys.stdout, "isatty") or not sys.stdout.isatty():
        return False

    term = os.getenv("TERM", "").lower()
    if term in ["dumb", "unknown"]:
        return False

    return True


def setup_logging(level: str = "INFO", use_colors: Optional[bool] = None) -> None:
    """
    Setup centralized logging configuration for the entire application.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        use_colors: Whether to use colored output (auto-detected if None)
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    if use_colors is None:
        use_colors = supports_color()

    console_handler = logging.StreamHandler(sys.stdout)
    formatter_class = ColoredFormatter if use_colors else logging.Formatter
    console_handler.setFormatter(formatter_class(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    # Clear any existing handlers to avoid duplicates
    root_logger.handlers.clear()
    root_logger.addHandler(console_handler)

    # Filter out external library logs
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("passlib").setLevel(logging.ERROR)
    logging.getLogger("multipart").setLevel(logging.WARNING)
    logging.getLogger("python_multipart").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Get a logger instance with the configured format.

    Args:
        name: Logger name (optional, defaults to module name)

    Returns:
        Configured logger instance
    """
    return logging.getLogger(name)


# Initialize logging when module is imported
setup_logging(settings.log_level)
