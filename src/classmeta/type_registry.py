"""
Re-export type registry module for cleaner imports.

This allows: from classmeta.type_registry import register_type
Instead of: from classmeta.meta.types.registry import register_type
"""

from .meta.types import (
    TypeDescriptor,
    TypeRegistry,
    ValidationCheck,
    class_check,
    kind_check,
    lookup_type,
    register_type,
    type_registry,
)

__all__ = [
    "TypeDescriptor",
    "TypeRegistry",
    "ValidationCheck",
    "class_check",
    "kind_check",
    "lookup_type",
    "register_type",
    "type_registry",
]
