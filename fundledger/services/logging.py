"""Logging configuration and utilities for the ledger server and CLI.

Provides dual output (stdout + file) with configurable level via LOG_LEVEL env var.
Default: INFO. Set LOG_LEVEL=WARNING for production, DEBUG for verbose output.
Allocation writes and clamped balances are logged here as an audit trail.
"""

import logging
import os
import sys
from pathlib import Path

# Map string level names to logging constants
LOG_LEVEL_MAP = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def get_log_level(default: str = "INFO") -> int:
    """Get logging level from LOG_LEVEL environment variable.

    Args:
        default: Level name used when LOG_LEVEL is unset

    Returns:
        Logging level constant (unknown names fall back to INFO)
    """
    level_str = os.getenv("LOG_LEVEL", default).upper()
    return LOG_LEVEL_MAP.get(level_str, logging.INFO)


def setup_server_logging(log_file: str = "logs/server.log", level: str = "INFO") -> None:
    """
    Configure root logger for the ledger server.

    Args:
        log_file: Path to log file (default: logs/server.log)
        level: Level name used when LOG_LEVEL is not set in the environment

    Behavior:
        - Sets up all loggers to output to both stdout and file
        - ISO format timestamps for consistency
    """
    log_path = Path(log_file)
    log_path.parent.mkdir(parents=True, exist_ok=True)

    # ISO format: [YYYY-MM-DD HH:MM:SS]
    formatter = logging.Formatter(
        fmt="[%(asctime)s] %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    log_level = get_log_level(level)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    # Remove any existing handlers to avoid duplicates
    root_logger.handlers.clear()

    stdout_handler = logging.StreamHandler(sys.stdout)
    stdout_handler.setLevel(log_level)
    stdout_handler.setFormatter(formatter)
    root_logger.addHandler(stdout_handler)

    file_handler = logging.FileHandler(log_path)
    file_handler.setLevel(log_level)
    file_handler.setFormatter(formatter)
    root_logger.addHandler(file_handler)
