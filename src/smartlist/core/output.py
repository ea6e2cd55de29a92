"""
Unified output system using Loguru.
Writes user-facing messages to the log file and the terminal in one call.
"""

import sys
from pathlib import Path
from typing import Optional

from loguru import logger

from .config import LoggingConfig, get_data_dir


def get_log_file_path() -> Path:
    """Get the default path to the log file."""
    return get_data_dir() / "smartlist.log"


def setup_loguru(
    log_file: Optional[Path] = None,
    level: str = "INFO",
    console_output: bool = False,
) -> None:
    """
    Configure loguru for file logging with optional stderr output.

    Args:
        log_file: Path to log file (default: ~/.local/share/smartlist/smartlist.log)
        level: Minimum level for file logging (DEBUG, INFO, WARNING, ERROR)
        console_output: Also emit log records on stderr
    """
    log_path = log_file if log_file else get_log_file_path()
    log_path.parent.mkdir(parents=True, exist_ok=True)

    logger.remove()

    logger.add(
        log_path,
        rotation="10 MB",
        retention=5,
        level=level,
        format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{line} | {message}",
        enqueue=False,
    )

    if console_output:
        logger.add(sys.stderr, level=level, format="{level}: {message}")

    logger.info(f"Loguru initialized: {log_path} (level={level})")


def setup_from_config(logging_config: LoggingConfig, verbose: bool = False) -> None:
    """Configure loguru from the [logging] config section."""
    log_file = Path(logging_config.log_file) if logging_config.log_file else None
    level = "DEBUG" if verbose else logging_config.level
    setup_loguru(
        log_file=log_file,
        level=level,
        console_output=verbose or logging_config.console_output,
    )


def log(message: str, level: str = "info") -> None:
    """
    Unified logging: writes to file AND prints for the user.

    Use this instead of print() for user-facing messages that should also be logged.

    Args:
        message: User-facing message
        level: Log level (debug, info, warning, error)
    """
    log_func = getattr(logger, level)
    log_func(message)

    stream = sys.stderr if level in ("warning", "error") else sys.stdout
    print(message, file=stream)
