# Area: Shared
"""
wordleoff._shared.logging_config — Structured logging setup
===========================================================

Configures dual logging: terminal (colored) + file (JSON).
Provides a helper for reporting package errors from entry points.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional, TYPE_CHECKING

from .logging_formatters import JSONFormatter, TerminalFormatter

if TYPE_CHECKING:
    from ..errors import WordleOffError

# Package logger
logger = logging.getLogger("wordleoff")


def setup_logging(
    log_file_path: Optional[str] = "wordleoff.log",
    level: int = logging.INFO,
) -> None:
    """
    Configure logging for the package.

    Parameters
    ----------
    log_file_path : str or None
        Path to the JSON log file. ``None`` disables file logging.
    level : int
        Logging level. Defaults to INFO.
    """
    pkg_logger = logging.getLogger("wordleoff")
    pkg_logger.setLevel(level)

    # Remove existing handlers
    pkg_logger.handlers.clear()

    terminal_handler = logging.StreamHandler(sys.stderr)
    terminal_handler.setLevel(level)
    terminal_handler.setFormatter(TerminalFormatter(
        fmt="%(asctime)s │ %(levelname)s │ %(name)s │ %(message)s",
        datefmt="%H:%M:%S",
    ))
    pkg_logger.addHandler(terminal_handler)

    if log_file_path:
        try:
            log_path = Path(log_file_path)
            log_path.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(log_path, encoding="utf-8")
            file_handler.setLevel(level)
            file_handler.setFormatter(JSONFormatter())
            pkg_logger.addHandler(file_handler)
        except OSError as e:
            pkg_logger.warning(f"Could not create log file: {e}")

    # Prevent propagation to root logger
    pkg_logger.propagate = False


def log_error(error: "WordleOffError") -> None:
    """Log a package error with its class name for the JSON log."""
    logger.error(
        f"{error.__class__.__name__}: {error}",
        extra={"result": error.__class__.__name__},
    )
