"""Core exprkit utilities.

This module exports the configuration and logging helpers shared by the
engine and the command-line interface.
"""

from exprkit.core.config import Settings, get_settings
from exprkit.core.logging import (
    LoggingContext,
    bind_correlation_id,
    clear_context,
    configure_logging,
    get_logger,
)

__all__ = [
    "Settings",
    "get_settings",
    "configure_logging",
    "get_logger",
    "LoggingContext",
    "bind_correlation_id",
    "clear_context",
]
