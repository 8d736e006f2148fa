"""
Centralized logging setup.
Writes to the console and, unless LOG_TO_FILE is off, to a rotating log file
in <DATA_DIR>/logs/.

Usage:
    from rag_cli.core.logger import get_logger
    logger = get_logger(__name__)
    logger.info("Hello!")
"""

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional, Union

from rag_cli.core.config import settings

# Will be initialized on first call
_initialized = False


def setup_logging(log_dir: Optional[str] = None,
                  level: Union[int, str, None] = None,
                  log_to_file: Optional[bool] = None):
    """Configure root logger with console + file handlers."""
    global _initialized
    if _initialized:
        return

    level = level or settings.LOG_LEVEL
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
    log_to_file = settings.LOG_TO_FILE if log_to_file is None else log_to_file

    # Root logger
    root = logging.getLogger()
    root.setLevel(level)

    # Format
    fmt = logging.Formatter(
        "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )

    # Console handler
    console = logging.StreamHandler()
    console.setLevel(level)
    console.setFormatter(fmt)
    root.addHandler(console)

    # File handler (rotating, 5MB max, keep 3 backups)
    if log_to_file:
        log_path = Path(log_dir) if log_dir else settings.logs_dir
        log_path.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_path / "rag_cli.log",
            maxBytes=5 * 1024 * 1024,
            backupCount=3,
            encoding="utf-8"
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(fmt)
        root.addHandler(file_handler)

    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)

    _initialized = True
    logging.getLogger(__name__).debug("Logging initialized (level=%s)",
                                      logging.getLevelName(level))


def set_level(level: Union[int, str]):
    """Change the level of the root logger and all of its handlers."""
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
    root = logging.getLogger()
    root.setLevel(level)
    for handler in root.handlers:
        handler.setLevel(level)


def get_logger(name: str) -> logging.Logger:
    """Get a named logger. Auto-initializes logging on first call."""
    setup_logging()
    return logging.getLogger(name)
