"""
Logging setup for the timebar hosts.

Both entry points call setup_logging() once before building the UI. Records
go to a rotating log file; the console only shows what passes consoleLevel,
which defaults to CRITICAL so neither the Qt window's terminal nor the
Textual screen fills with engine chatter.
"""

import logging
import logging.handlers
import sys
from pathlib import Path

from config_manager import ConfigManager, config

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


class ErrorRaisingHandler(logging.Handler):
    """Handler that raises an exception on ERROR or CRITICAL logs."""

    def emit(self, record):
        if record.levelno >= logging.ERROR:
            raise RuntimeError(f"Logger error: {record.getMessage()}")


def _level(name: str, fallback: int) -> int:
    return getattr(logging, str(name).upper(), fallback)


def setup_logging(raise_on_error: bool | None = None, level: str | None = None,
                  settings: ConfigManager = config) -> logging.Logger:
    """
    Configure the root logger from the 'logging' section of config.json.

    Keys: level, file, maxBytes, backupCount, console, consoleLevel and
    raiseOnError. A file that cannot be opened is reported on stderr and
    logging continues without it.

    Args:
        raise_on_error: Overrides raiseOnError when given
        level: Overrides the configured level when given (e.g. "DEBUG")
        settings: Configuration to read, the global config by default

    Returns:
        The configured root logger
    """
    log_level = _level(level or settings.get_logging_setting("level", "INFO"), logging.INFO)
    if raise_on_error is None:
        raise_on_error = settings.get_logging_setting("raiseOnError", False)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers.clear()
    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    if settings.get_logging_setting("console", True):
        console_handler = logging.StreamHandler()
        console_handler.setLevel(_level(settings.get_logging_setting("consoleLevel", "CRITICAL"), logging.CRITICAL))
        console_handler.setFormatter(formatter)
        root_logger.addHandler(console_handler)

    log_file = Path(settings.get_logging_setting("file", "logs/timebar.log"))
    try:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=settings.get_logging_setting("maxBytes", 10485760),
            backupCount=settings.get_logging_setting("backupCount", 3),
            encoding='utf-8'
        )
    except OSError as e:
        print(f"Warning: Could not open log file {log_file}: {e}", file=sys.stderr)
    else:
        file_handler.setLevel(log_level)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    if raise_on_error:
        root_logger.addHandler(ErrorRaisingHandler())

    root_logger.debug("Logging to %s at %s", log_file, logging.getLevelName(log_level))
    return root_logger
