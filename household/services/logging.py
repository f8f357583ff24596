"""Logging setup for the household API server.

Records go to stdout and to a log file. The level comes from the LOG_LEVEL
env var, falling back to the configured ``log_level`` setting. Ledger writes
log at INFO, validation failures at WARNING and settlement figures at DEBUG.
"""

import logging
import os
import sys
from pathlib import Path

LOG_FORMAT = "[%(asctime)s] %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Chatty third-party loggers held at WARNING unless DEBUG is requested
QUIET_LOGGERS = ("sqlalchemy.engine", "uvicorn.access", "httpx")


def get_log_level(default: str = "INFO") -> int:
    """Resolve LOG_LEVEL (case-insensitive) to a logging constant.

    Args:
        default: Level name used when LOG_LEVEL is not set

    Returns:
        Logging level constant; unknown names give INFO
    """
    name = os.getenv("LOG_LEVEL", default).upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.INFO


def _build_handlers(log_path: Path) -> list[logging.Handler]:
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATE_FORMAT)
    handlers: list[logging.Handler] = [
        logging.StreamHandler(sys.stdout),
        logging.FileHandler(log_path, encoding="utf-8"),
    ]
    for handler in handlers:
        handler.setFormatter(formatter)
    return handlers


def setup_server_logging(log_file: str = "logs/server.log", default_level: str = "INFO") -> None:
    """
    Configure the root logger for the API server.

    Args:
        log_file: Path to log file; parent directories are created
        default_level: Level name used when LOG_LEVEL is not set

    Previously installed root handlers are replaced, so calling this twice
    does not duplicate output.
    """
    log_path = Path(log_file)
    log_path.parent.mkdir(parents=True, exist_ok=True)
    level = get_log_level(default_level)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(level)
    for handler in _build_handlers(log_path):
        handler.setLevel(level)
        root_logger.addHandler(handler)

    quiet_level = level if level == logging.DEBUG else max(level, logging.WARNING)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(quiet_level)

    logging.getLogger(__name__).debug(
        "Logging to %s at %s", log_path, logging.getLevelName(level)
    )


__all__ = ["LOG_FORMAT", "get_log_level", "setup_server_logging"]
