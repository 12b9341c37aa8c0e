# utils/logger.py
import logging
import logging.handlers
import os
import sys
from pathlib import Path
from typing import Optional

DEFAULT_LOG_PATH = "~/.ec2it/logs"

# Console level shared by every ec2it logger; raised to DEBUG by --verbose
_console_level = logging.WARNING


def get_log_dir() -> Path:
    """Resolve the log directory, honouring the LOG_PATH override."""
    return Path(os.environ.get("LOG_PATH", DEFAULT_LOG_PATH)).expanduser()


def setup_logger(
    name: str,
    log_file: Optional[str] = None,
    level: Optional[str] = "INFO",
    max_bytes: int = 10 * 1024 * 1024,  # 10MB
    backup_count: int = 5,
) -> logging.Logger:
    """Setup logger with a stderr console handler and a rotating log file"""
    logger = logging.getLogger(name)
    if _console_level == logging.DEBUG:
        logger.setLevel(logging.DEBUG)
    else:
        level_name = str(os.environ.get("LOG_LEVEL") or level or "INFO").upper()
        level_value = logging.getLevelName(level_name)
        logger.setLevel(level_value if isinstance(level_value, int) else logging.INFO)

    # Prevent duplicate handlers
    if not logger.handlers:
        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

        # stdout carries command output, so diagnostics go to stderr
        stream_handler = logging.StreamHandler(sys.stderr)
        stream_handler.setFormatter(formatter)
        stream_handler.setLevel(_console_level)
        logger.addHandler(stream_handler)

        if log_file:
            log_path = get_log_dir() / log_file

            try:
                log_path.parent.mkdir(parents=True, exist_ok=True)
                file_handler = logging.handlers.RotatingFileHandler(
                    log_path,
                    maxBytes=max_bytes,
                    backupCount=backup_count,
                    encoding="utf-8",
                )

                file_handler.setFormatter(formatter)
                file_handler.setLevel(logging.DEBUG)  # All levels to file
                logger.addHandler(file_handler)

            except OSError as e:
                logger.warning(
                    f"Failed to create log file {log_path}: {e}. Logging to console only."
                )

        # Prevent propagation to root logger to avoid duplicate messages
        logger.propagate = False

    return logger


def set_console_level(verbose: bool = False) -> None:
    """Switch the console verbosity of all ec2it loggers, existing and future."""
    global _console_level
    _console_level = logging.DEBUG if verbose else logging.WARNING

    for name, logger in logging.Logger.manager.loggerDict.items():
        if not name.startswith("ec2it") or not isinstance(logger, logging.Logger):
            continue
        if verbose:
            logger.setLevel(logging.DEBUG)
        for handler in logger.handlers:
            if isinstance(handler, logging.StreamHandler) and not isinstance(
                handler, logging.FileHandler
            ):
                handler.setLevel(_console_level)
