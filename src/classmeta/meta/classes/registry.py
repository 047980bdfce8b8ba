"""Process-wide registry of class descriptors, indexed by class and by key.

The registry follows a register-then-seal lifecycle: classes are registered during the
definition phase, after which the registry may be sealed to reject any new registration.
It is not synchronized; register classes from a single thread.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import TYPE_CHECKING, Any, Iterator

from ..errors import DeclarationError, SealedError
from ..types import type_registry

if TYPE_CHECKING:
    from .descriptor import ClassDescriptor

logger = logging.getLogger(__name__)


class ClassRegistry:
    """Class descriptors by class identity and by key."""

    __by_class: dict[type, ClassDescriptor]
    __by_key: dict[str, ClassDescriptor]

    def __init__(self) -> None:
        self.__by_class = {}
        self.__by_key = {}
        self.__sealed = False

    @property
    def sealed(self) -> bool:
        return self.__sealed

    def seal(self) -> None:
        """Reject any further registration."""
        self.__sealed = True
        logger.debug("Class registry sealed with %d classes", len(self.__by_class))

    def check(self, descriptor: ClassDescriptor) -> None:
        """Check that a descriptor can be registered, without registering it.

        Raises:
            SealedError: Raised if the registry is sealed.
            DeclarationError: Raised if the class or the key is already registered.
        """
        if self.__sealed:
            descriptor.handle_error(
                SealedError(
                    f"Cannot register class '{descriptor.package_name}': the class registry"
                    " is sealed"
                )
            )
        if descriptor.package in self.__by_class:
            descriptor.handle_error(
                DeclarationError(f"Class object for class '{descriptor.package_name}' already exists")
            )
        if descriptor.key in self.__by_key:
            descriptor.handle_error(
                DeclarationError(f"Class object for key '{descriptor.key}' already exists")
            )

    def register(self, descriptor: ClassDescriptor) -> None:
        """Register a descriptor under its class and its key. See check."""
        self.check(descriptor)
        self.__by_class[descriptor.package] = descriptor
        self.__by_key[descriptor.key] = descriptor
        logger.debug("Registered class %r under key %r", descriptor.package_name, descriptor.key)

    def for_class(self, target: Any) -> ClassDescriptor | None:
        """Descriptor registered for a class, or for the class of an instance."""
        cls = target if isinstance(target, type) else type(target)
        return self.__by_class.get(cls)

    def nearest(self, target: Any) -> ClassDescriptor | None:
        """Descriptor of the class, or of its closest registered ancestor."""
        cls = target if isinstance(target, type) else type(target)
        for ancestor in cls.__mro__:
            descriptor = self.__by_class.get(ancestor)
            if descriptor is not None:
                return descriptor
        return None

    def for_key(self, key: str) -> ClassDescriptor | None:
        return self.__by_key.get(key)

    def clear(self) -> None:
        """Forget every class and unseal the registry. The object types of the classes are
        unregistered too. The classes keep their accessors."""
        types = type_registry()
        for descriptor in self.__by_class.values():
            owned = descriptor.type_descriptor
            if owned is not None and types.get(descriptor.key) is owned:
                types.unregister(descriptor.key)
        self.__by_class.clear()
        self.__by_key.clear()
        self.__sealed = False

    def __contains__(self, target: Any) -> bool:
        return self.for_class(target) is not None

    def __iter__(self) -> Iterator[ClassDescriptor]:
        return iter(tuple(self.__by_class.values()))

    def __len__(self) -> int:
        return len(self.__by_class)


@lru_cache(1)
def class_registry() -> ClassRegistry:
    """Default class registry.

    Returns:
        ClassRegistry: the class registry instance.
    """
    return ClassRegistry()
