### Description ###
# CMIS Admin Console - Cooperative Registration Administration
# - Custom Logger Setup -
# Author: Bailey Dixon
# Date: 10/19/2026
# Python: 3.11
####################

# Standard Imports
import logging
from datetime import datetime
from pathlib import Path


class CustomFormatter(logging.Formatter):
    """Custom formatter for console logging with a 12-hour time format"""

    def format(self, record):
        """
        Format log record with custom time format: HH:MM:SS AM/PM - name - LEVEL:

        Args:
            record: LogRecord instance

        Returns:
            Formatted log string
        """
        # Get timestamp in 12-hour format
        timestamp = datetime.fromtimestamp(record.created).strftime("%I:%M:%S %p")

        # Build the formatted message
        formatted_msg = f"{timestamp} - {record.name} - {record.levelname}: {record.getMessage()}"

        # Handle exceptions if present
        if record.exc_info:
            formatted_msg += "\n" + self.formatException(record.exc_info)

        return formatted_msg


def setup_logger(
    name: str, level: int = logging.INFO, log_to_file: bool = True, log_to_console: bool = True
) -> logging.Logger:
    """
    Set up a custom logger for the admin console

    Args:
        name: Logger name (typically __name__)
        level: Logging level (default: INFO)
        log_to_file: Whether to log to file (default: True)
        log_to_console: Whether to log to console (default: True)

    Returns:
        Configured logger instance

    Example:
        logger = setup_logger(__name__)
        logger.info("This is an info message")
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Prevent duplicate handlers if logger already exists
    if logger.handlers:
        return logger

    formatter = CustomFormatter()

    if log_to_file:
        logs_dir = Path("logs")
        logs_dir.mkdir(exist_ok=True)

        # One file per day
        log_filename = f"cmis_console_{datetime.now().strftime('%Y-%m-%d')}.log"
        log_filepath = logs_dir / log_filename

        file_handler = logging.FileHandler(log_filepath, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    if log_to_console:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    return logger


def configure_service_logging(level: str = "INFO", log_to_file: bool = True, log_to_console: bool = True):
    """
    Attach the console handlers to the ``cmis_api`` logger tree.

    Service modules log through ``logging.getLogger(__name__)``; configuring
    the package logger once at startup routes all of them.
    """
    return setup_logger(
        "cmis_api",
        level=getattr(logging, level.upper(), logging.INFO),
        log_to_file=log_to_file,
        log_to_console=log_to_console,
    )
