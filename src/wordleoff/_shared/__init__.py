# Area: Shared
"""
Shared utilities used across the session and storage layers.

This package contains:
- Logging configuration
- Logging formatters
"""

from .logging_config import setup_logging, log_error
from .logging_formatters import JSONFormatter, TerminalFormatter

__all__ = [
    "setup_logging",
    "log_error",
    "JSONFormatter",
    "TerminalFormatter",
]
