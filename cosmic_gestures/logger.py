"""
Logging setup for the gesture-controlled visualizer.

Logs go to the console and, optionally, to a rotating file in
~/.cosmic_gestures/logs/. Modules log through logging.getLogger(__name__),
so everything lands under the "cosmic_gestures" logger configured here.
"""
import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

from .config import LoggingConfig

ROOT_LOGGER_NAME = "cosmic_gestures"
LOG_DIR_ENV_VAR = "COSMIC_GESTURES_LOG_DIR"


def get_log_directory() -> Path:
    """
    Get the log directory, created if it doesn't exist.

    Returns:
        $COSMIC_GESTURES_LOG_DIR if set, else ~/.cosmic_gestures/logs
    """
    override = os.environ.get(LOG_DIR_ENV_VAR)
    if override:
        log_dir = Path(override)
    else:
        log_dir = Path.home() / ".cosmic_gestures" / "logs"

    log_dir.mkdir(parents=True, exist_ok=True)
    return log_dir


def setup_logging(cfg: LoggingConfig, debug: bool = False) -> logging.Logger:
    """
    Configure and return the application logger.

    Args:
        cfg: Logging section of the configuration
        debug: Force debug-level logging

    Returns:
        Configured logger instance
    """
    level = logging.DEBUG if debug else getattr(logging, cfg.level.upper(), logging.INFO)

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(level)

    # Clear any existing handlers
    logger.handlers.clear()

    detailed_format = logging.Formatter(
        "%(asctime)s | %(levelname)-8s | %(name)s.%(funcName)s:%(lineno)d | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )
    simple_format = logging.Formatter(
        "%(asctime)s | %(levelname)-8s | %(message)s",
        datefmt="%H:%M:%S"
    )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(simple_format)
    logger.addHandler(console_handler)

    if cfg.log_to_file:
        log_path = get_log_directory() / cfg.filename
        file_handler = RotatingFileHandler(
            log_path,
            maxBytes=cfg.max_bytes,
            backupCount=cfg.backup_count,
            encoding="utf-8"
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(detailed_format)
        logger.addHandler(file_handler)

        logger.debug(f"Logging to file: {log_path}")

    return logger

