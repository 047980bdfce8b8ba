"""
classmeta: Runtime class declaration and introspection.

This library provides:
- A type registry mapping type keys to the validation checks of attribute values
- Accessor generation with validation, visibility and default values
- Class descriptors listing the constructors, attributes and methods of a class
- A single configurable error handler every error is routed through
"""

import logging

from .abstract.exceptions import default_error_handler
from .meta.classes import ClassDescriptor, ClassMeta, class_registry
from .meta.constants import (
    AccessorMode,
    AccessorStrategy,
    Authorization,
    Context,
    Visibility,
)
from .meta.types import register_type, type_registry

__version__ = "0.1.0"
__author__ = "Sébastien Gachoud"
__license__ = "MIT"

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Version info
    "__version__",
    "__author__",
    "__license__",
    # Declarations
    "ClassMeta",
    "ClassDescriptor",
    "class_registry",
    "register_type",
    "type_registry",
    "default_error_handler",
    # Constants
    "AccessorMode",
    "AccessorStrategy",
    "Authorization",
    "Context",
    "Visibility",
]
