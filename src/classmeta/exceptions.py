"""
Re-export exceptions module for cleaner imports.

This allows: from classmeta.exceptions import ValidationError
Instead of: from classmeta.meta.errors import ValidationError
"""

from .abstract.exceptions.traced_exceptions import (
    ErrorHandler,
    TracedException,
    default_error_handler,
    format_exception,
    handle_error,
    raise_error,
)
from .meta.errors import (
    AbstractInstantiationError,
    AccessDeniedError,
    ClassMetaError,
    DeclarationError,
    DuplicateAttributeError,
    NoSuchAttributeError,
    SealedError,
    UnknownTypeError,
    ValidationError,
)

__all__ = [
    "ErrorHandler",
    "TracedException",
    "default_error_handler",
    "format_exception",
    "handle_error",
    "raise_error",
    "AbstractInstantiationError",
    "AccessDeniedError",
    "ClassMetaError",
    "DeclarationError",
    "DuplicateAttributeError",
    "NoSuchAttributeError",
    "SealedError",
    "UnknownTypeError",
    "ValidationError",
]
