"""Core module exports."""

from affected.core.collections import OrderedSet
from affected.core.errors import (
    AffectedError,
    ConfigError,
    ConfigReadError,
    DiffFetchError,
    ErrorCode,
    InternalError,
    MissingRefsError,
    UnsupportedEventError,
)
from affected.core.logging import (
    clear_run_id,
    configure_logging,
    get_logger,
    get_run_id,
    set_run_id,
)
from affected.core.progress import print_report, status

__all__ = [
    # Collections
    "OrderedSet",
    # Errors
    "AffectedError",
    "ConfigError",
    "ConfigReadError",
    "DiffFetchError",
    "ErrorCode",
    "InternalError",
    "MissingRefsError",
    "UnsupportedEventError",
    # Logging
    "clear_run_id",
    "configure_logging",
    "get_logger",
    "get_run_id",
    "set_run_id",
    # Progress
    "print_report",
    "status",
]
