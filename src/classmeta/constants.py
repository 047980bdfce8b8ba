"""
Re-export constants module for cleaner imports.

This allows: from classmeta.constants import Visibility
Instead of: from classmeta.meta.constants import Visibility
"""

from .meta.constants import (
    AccessorMode,
    AccessorStrategy,
    Authorization,
    Context,
    Visibility,
    mode_from_authorization,
)

__all__ = [
    "AccessorMode",
    "AccessorStrategy",
    "Authorization",
    "Context",
    "Visibility",
    "mode_from_authorization",
]
