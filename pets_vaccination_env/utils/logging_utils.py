# pets_vaccination_env/utils/logging_utils.py

import logging
import sys

LOG_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "critical": logging.CRITICAL,
}

DEFAULT_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DEFAULT_LEVEL = logging.INFO
PLAIN_FORMAT = '%(message)s'  # Used by the console driver, which prints report lines


def _attach(logger: logging.Logger, handler: logging.Handler, level: int, log_format: str) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(log_format))
    logger.addHandler(handler)
    return handler


def setup_logger(name: str, level: int = DEFAULT_LEVEL, log_file: str = None,
                 log_format: str = DEFAULT_FORMAT, stream=None) -> logging.Logger:
    """
    Returns the named logger with a fresh console handler and, if log_file is given, a file handler.

    Calling it again for the same name replaces the handlers, so module reloads and
    repeated env construction never duplicate output. A log file that cannot be opened
    is reported on the console and the logger keeps working without it.

    Args:
        name (str): Logger name, usually __name__.
        level (int): Level for the logger and its handlers.
        log_file (str, optional): File that receives a copy of every record (appended).
        log_format (str, optional): Record format. PLAIN_FORMAT gives bare report lines.
        stream (optional): Console stream. Defaults to sys.stdout.
    """
    logger = logging.getLogger(name)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(level)

    _attach(logger, logging.StreamHandler(stream or sys.stdout), level, log_format)
    if not log_file:
        return logger

    try:
        _attach(logger, logging.FileHandler(log_file, mode='a', encoding='utf-8'), level, log_format)
    except OSError as e:
        logger.error(f"Log file {log_file} unavailable, console only: {e}")
    return logger


def get_level_from_string(level_str: str) -> int:
    """Converts a log level string (any case) to a logging level constant."""
    if not isinstance(level_str, str):
        return DEFAULT_LEVEL
    return LOG_LEVELS.get(level_str.lower(), DEFAULT_LEVEL)


def apply_log_level(logger: logging.Logger, level_str: str) -> int:
    """Sets a logger and all of its handlers to the level named by level_str."""
    level = get_level_from_string(level_str)
    logger.setLevel(level)
    for h in logger.handlers:
        h.setLevel(level)
    return level
