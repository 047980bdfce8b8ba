"""Exception utilities for classmeta."""

from .traced_exceptions import (
    ErrorHandler,
    TracedException,
    default_error_handler,
    format_exception,
    handle_error,
    raise_error,
)

__all__ = [
    "ErrorHandler",
    "TracedException",
    "default_error_handler",
    "format_exception",
    "handle_error",
    "raise_error",
]
