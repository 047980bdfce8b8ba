"""Type registry of classmeta."""

# Import known_types to register built-in types
from . import known_types as _  # noqa: F401

from .checks import (
    ValidationCheck,
    class_check,
    compose_checks,
    kind_check,
    once_check,
    required_check,
    run_checks,
)
from .registry import (
    TypeDescriptor,
    TypeRegistry,
    lookup_type,
    register_type,
    type_registry,
)

__all__ = [
    # Core classes
    "TypeDescriptor",
    "TypeRegistry",
    # Main API functions
    "type_registry",
    "lookup_type",
    "register_type",
    # Checks
    "ValidationCheck",
    "class_check",
    "compose_checks",
    "kind_check",
    "once_check",
    "required_check",
    "run_checks",
]
