"""
Logging setup for applications built on pagedom.
"""

import logging
import os
import sys
import time
from typing import Dict, Optional

LOG_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL
}

ROOT_LOGGER = "pagedom"


class LogFormatter(logging.Formatter):
    """Log formatter that colors the level name on terminals."""

    COLORS = {
        'RESET': '\033[0m',
        'RED': '\033[31m',
        'GREEN': '\033[32m',
        'YELLOW': '\033[33m',
        'BLUE': '\033[34m',
        'BOLD': '\033[1m'
    }

    LEVEL_COLORS = {
        'DEBUG': COLORS['BLUE'],
        'INFO': COLORS['GREEN'],
        'WARNING': COLORS['YELLOW'],
        'ERROR': COLORS['RED'],
        'CRITICAL': COLORS['RED'] + COLORS['BOLD']
    }

    def __init__(self, colored: bool = True, *args, **kwargs):
        """
        Initialize formatter.

        Args:
            colored: Whether to use colored output
            *args: Additional formatter args
            **kwargs: Additional formatter kwargs
        """
        self.colored = colored and sys.platform != 'win32'
        super().__init__(*args, **kwargs)

    def format(self, record: logging.LogRecord) -> str:
        formatted_msg = super().format(record)

        if self.colored:
            level_name = record.levelname
            if level_name in self.LEVEL_COLORS:
                colored_level = f"{self.LEVEL_COLORS[level_name]}{level_name}{self.COLORS['RESET']}"
                formatted_msg = formatted_msg.replace(level_name, colored_level, 1)

        return formatted_msg


def setup_logging(log_file: Optional[str] = None,
                  console_level: str = "WARNING",
                  file_level: str = "DEBUG",
                  colored: bool = True,
                  stream=None) -> logging.Logger:
    """
    Attach console and optional file handlers to the ``pagedom`` logger.

    Args:
        log_file: Path to log file (None for no file logging)
        console_level: Console logging level name
        file_level: File logging level name
        colored: Whether console output uses colors
        stream: Stream for the console handler (defaults to stderr)

    Returns:
        logging.Logger: Configured logger
    """
    logger = logging.getLogger(ROOT_LOGGER)

    # Already configured
    if any(not isinstance(handler, logging.NullHandler) for handler in logger.handlers):
        return logger

    console = LOG_LEVELS.get(console_level.upper(), logging.WARNING)
    file = LOG_LEVELS.get(file_level.upper(), logging.DEBUG)
    logger.setLevel(min(console, file) if log_file else console)

    console_handler = logging.StreamHandler(stream)
    console_handler.setLevel(console)
    console_format = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
    console_handler.setFormatter(LogFormatter(colored=colored, fmt=console_format, datefmt='%H:%M:%S'))
    logger.addHandler(console_handler)

    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)

        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(file)
        file_format = ("%(asctime)s [%(levelname)s] %(name)s "
                       "(%(filename)s:%(lineno)d): %(message)s")
        file_handler.setFormatter(logging.Formatter(file_format, datefmt='%Y-%m-%d %H:%M:%S'))
        logger.addHandler(file_handler)

    return logger


def log_exception(logger: logging.Logger, exception: Exception,
                  message: str = "An exception occurred") -> None:
    """
    Log an exception together with its traceback.

    Args:
        logger: Logger to use
        exception: Exception to log
        message: Message to log with the exception
    """
    exc_info = (type(exception), exception, exception.__traceback__)
    logger.error(f"{message}: {exception}", exc_info=exc_info)


class PerformanceLogger:
    """Times named steps and logs how long each took."""

    def __init__(self, logger: logging.Logger, component: str):
        self.logger = logger
        self.component = component
        self.start_times: Dict[str, float] = {}

    def start(self, name: str) -> None:
        self.start_times[name] = time.perf_counter()

    def end(self, name: str, level: str = "DEBUG") -> float:
        """
        Stop timing a step and log the duration.

        Args:
            name: Step name
            level: Log level name

        Returns:
            float: Duration in seconds, 0 if the step was never started
        """
        if name not in self.start_times:
            self.logger.warning(f"No start time found for {name}")
            return 0.0

        duration = time.perf_counter() - self.start_times.pop(name)
        self.logger.log(LOG_LEVELS.get(level.upper(), logging.DEBUG),
                        f"{self.component} {name} took {duration:.4f} seconds")
        return duration
