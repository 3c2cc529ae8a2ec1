"""
Centralized logging configuration for the npcgen package.

Log levels:
    DEBUG: Per-item scaling decisions, formula parse fallbacks
    INFO: Generation, rescale and merge progress
    WARNING: Rating table fallbacks, unreadable actor documents
    ERROR: External collaborator failures (template lookup, persistence, AI)

Usage:
    from npcgen.logging_config import setup_logging

    logger = setup_logging(__name__)
    logger.info("Generating NPC")
"""

import logging
import sys
from pathlib import Path
from typing import Optional


def setup_logging(
    name: str,
    level: int = logging.INFO,
    log_file: Optional[Path] = None,
    console_output: bool = True
) -> logging.Logger:
    """
    Configure and return a logger instance.

    Args:
        name: Logger name (typically __name__ from calling module)
        level: Logging level (default: INFO)
        log_file: Optional path to write logs to file
        console_output: Whether to log to stderr (default: True)

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Remove existing handlers to avoid duplicates
    logger.handlers.clear()

    formatter = logging.Formatter(
        fmt='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    if console_output:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, mode='a', encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def level_from_name(level_name: str) -> int:
    """Map a level name like "debug" to its logging constant (INFO if unknown)."""
    level = logging.getLevelName(level_name.upper())
    return level if isinstance(level, int) else logging.INFO
