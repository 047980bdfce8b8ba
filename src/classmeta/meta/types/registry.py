"""
MIT License

Copyright (c) 2025 Sébastien Gachoud

Permission is hereby granted, free of charge, to any person obtaining a copy
of this software and associated documentation files (the "Software"), to deal
in the Software without restriction, including without limitation the rights
to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
copies of the Software, and to permit persons to whom the Software is
furnished to do so, subject to the following conditions:

The above copyright notice and this permission notice shall be included in all
copies or substantial portions of the Software.

THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
SOFTWARE.

-------------------------------------------------------------------------------

Author: Sébastien Gachoud
Created: 2026-10-19
Description: This module provides the type registry. A type maps a key, used in attribute
            declarations, to the ordered validation checks of its values and to the
            strategy used to name its generated accessors. The registry can be extended
            with custom types. See TypeRegistry.register and TypeRegistry.register_class.
🦙
"""

from __future__ import annotations

__author__ = "Sébastien Gachoud"
__license__ = "MIT"

import logging
from functools import lru_cache
from typing import TYPE_CHECKING, Any, Callable, Iterable

from ...abstract.exceptions.traced_exceptions import ErrorHandler, handle_error
from ..constants import AccessorStrategy
from ..errors import DeclarationError, UnknownTypeError
from ..utilities import coerce_constant
from .checks import ValidationCheck, class_check, run_checks

if TYPE_CHECKING:
    from ..classes.attribute import AttributeDescriptor

logger = logging.getLogger(__name__)

type Converter = Callable[[Any], Any]
type CustomBuilder = Callable[..., dict[str, Callable[..., Any]]]


class TypeDescriptor:
    """Immutable description of a registered type."""

    def __init__(
        self,
        key: str,
        name: str,
        checks: tuple[ValidationCheck, ...] = (),
        description: str = "",
        accessor_strategy: AccessorStrategy = AccessorStrategy.DEFAULT,
        converter: Converter | None = None,
        builder: CustomBuilder | None = None,
        is_boolean: bool = False,
    ) -> None:
        self.__key = key
        self.__name = name
        self.__checks = checks
        self.__description = description
        self.__accessor_strategy = accessor_strategy
        self.__converter = converter
        self.__builder = builder
        self.__is_boolean = is_boolean

    @property
    def key(self) -> str:
        """Registry key of the type."""
        return self.__key

    @property
    def name(self) -> str:
        """Human name of the type."""
        return self.__name

    @property
    def checks(self) -> tuple[ValidationCheck, ...]:
        """Ordered validation checks of the type."""
        return self.__checks

    @property
    def description(self) -> str:
        return self.__description

    @property
    def accessor_strategy(self) -> AccessorStrategy:
        """Strategy used to name accessors of attributes of this type."""
        return self.__accessor_strategy

    @property
    def converter(self) -> Converter | None:
        """Applied to a value after it passed the checks, before it is stored."""
        return self.__converter

    @property
    def builder(self) -> CustomBuilder | None:
        """Accessor builder used by the CUSTOM strategy. Receives the attribute, its getter
        and its setter and returns the methods to install by name."""
        return self.__builder

    @property
    def is_boolean(self) -> bool:
        """Whether affordance-like strategies add the is_/_on/_off convenience methods."""
        return self.__is_boolean

    def validate(
        self, value: Any, storage: Any, attribute: AttributeDescriptor
    ) -> str | None:
        """Shortcut to run the type's checks. Returns the first failure message, if any."""
        return run_checks(self.__checks, value, storage, attribute)

    def __repr__(self) -> str:
        return f"<TypeDescriptor {self.__key!r} ({self.__name})>"


class TypeRegistry:
    """
    A class to hold all the types known to attribute declarations. It allows customization.
    """

    __types: dict[str, TypeDescriptor]

    def __init__(self) -> None:
        self.__types = {}

    def register(
        self,
        key: str,
        name: str,
        checks: ValidationCheck | Iterable[ValidationCheck] = (),
        *,
        description: str = "",
        accessor_strategy: AccessorStrategy | str = AccessorStrategy.DEFAULT,
        converter: Converter | None = None,
        builder: CustomBuilder | None = None,
        is_boolean: bool = False,
        replace: bool = False,
        handler: ErrorHandler | None = None,
    ) -> TypeDescriptor:
        """
        Register a type under a key. Attributes declared with this key are validated with
        the provided checks, in order.

        Args:
            key (str): The key used in attribute declarations.
            name (str): Human name of the type.
            checks (ValidationCheck | Iterable[ValidationCheck]): One check or an ordered
                collection of checks.
            description (str): Free description.
            accessor_strategy (AccessorStrategy | str): How accessors are named.
            converter (Converter | None): Applied to accepted values before storage.
            builder (CustomBuilder | None): Required by the CUSTOM strategy.
            is_boolean (bool): Adds the is_/_on/_off methods to affordance-like accessors.
            replace (bool): Allow replacing an already registered key.
            handler (ErrorHandler | None): The error handler to signal errors with.

        Raises:
            DeclarationError: Raised if the key or name is missing, if the key is already
                registered without replace, or if a check, the converter or the builder
                is not callable.

        Returns:
            TypeDescriptor: The registered type.
        """
        if not key:
            handle_error(DeclarationError("Parameter 'key' is required to register a type"), handler)
        if not name:
            handle_error(
                DeclarationError(f"Parameter 'name' is required to register type '{key}'"), handler
            )
        if key in self.__types and not replace:
            handle_error(DeclarationError(f"Type '{key}' is already registered"), handler)

        checks = (checks,) if callable(checks) else tuple(checks)
        for check in checks:
            if not callable(check):
                handle_error(
                    DeclarationError(f"Check {check!r} of type '{key}' is not callable"), handler
                )
        if converter is not None and not callable(converter):
            handle_error(DeclarationError(f"Converter of type '{key}' is not callable"), handler)
        if builder is not None and not callable(builder):
            handle_error(DeclarationError(f"Builder of type '{key}' is not callable"), handler)

        strategy = coerce_constant(AccessorStrategy, accessor_strategy, "accessor_strategy", handler)
        if strategy is AccessorStrategy.CUSTOM and builder is None:
            handle_error(
                DeclarationError(f"Type '{key}' uses the custom accessor strategy without a builder"),
                handler,
            )

        descriptor = TypeDescriptor(
            key, name, checks, description, strategy, converter, builder, is_boolean
        )
        self.__types[key] = descriptor
        logger.debug("Registered type %r (%s)", key, name)
        return descriptor

    def register_class(
        self,
        cls: type,
        key: str | None = None,
        name: str | None = None,
        *,
        description: str = "",
        accessor_strategy: AccessorStrategy | str = AccessorStrategy.DEFAULT,
        replace: bool = False,
        handler: ErrorHandler | None = None,
    ) -> TypeDescriptor:
        """Register an "object of class X" type. Values must be instances of cls or of one of
        its subclasses.

        Args:
            cls (type): The class values must be instances of.
            key (str | None): Defaults to the qualified name of the class with its module.

        Returns:
            TypeDescriptor: The registered type.
        """
        if not isinstance(cls, type):
            handle_error(DeclarationError(f"{cls!r} is not a class"), handler)
        return self.register(
            key or f"{cls.__module__}.{cls.__qualname__}",
            name or cls.__qualname__,
            class_check(cls),
            description=description or f"{cls.__qualname__} object",
            accessor_strategy=accessor_strategy,
            replace=replace,
            handler=handler,
        )

    def lookup(self, key: str, handler: ErrorHandler | None = None) -> TypeDescriptor:
        """Get the type registered under key.

        Raises:
            UnknownTypeError: Raised if no type is registered under key.
        """
        descriptor = self.__types.get(key)
        if descriptor is None:
            handle_error(UnknownTypeError(f"Type '{key}' does not exist"), handler)
        return descriptor

    def get(self, key: str) -> TypeDescriptor | None:
        """Get the type registered under key, or None."""
        return self.__types.get(key)

    def alias(
        self,
        alias: str,
        key: str,
        *,
        replace: bool = False,
        handler: ErrorHandler | None = None,
    ) -> TypeDescriptor:
        """Make a registered type available under another key as well. The alias resolves to
        the same descriptor, whose key stays the original one.

        Raises:
            UnknownTypeError: Raised if key is not registered.
            DeclarationError: Raised if the alias is already registered without replace.

        Returns:
            TypeDescriptor: The aliased type.
        """
        descriptor = self.lookup(key, handler)
        if not alias:
            handle_error(DeclarationError(f"An alias of type '{key}' cannot be empty"), handler)
        if alias in self.__types and not replace:
            handle_error(DeclarationError(f"Type '{alias}' is already registered"), handler)
        self.__types[alias] = descriptor
        logger.debug("Registered alias %r of type %r", alias, key)
        return descriptor

    def unregister(self, key: str) -> TypeDescriptor | None:
        """Remove a type. Attributes already declared with it keep their descriptor."""
        return self.__types.pop(key, None)

    def has_type(self, key: str) -> bool:
        return key in self.__types

    def keys(self) -> tuple[str, ...]:
        """Get all registered keys for debugging/introspection."""
        return tuple(self.__types)

    def __contains__(self, key: str) -> bool:
        return key in self.__types

    def __len__(self) -> int:
        return len(self.__types)


@lru_cache(1)
def type_registry() -> TypeRegistry:
    """Default type registry. Built-in types are registered on import of
    classmeta.meta.types. See TypeRegistry for more information.

    Returns:
        TypeRegistry: the type registry instance.
    """
    return TypeRegistry()


def lookup_type(key: str, handler: ErrorHandler | None = None) -> TypeDescriptor:
    """This function is a shortcut to `type_registry().lookup()`."""
    return type_registry().lookup(key, handler)


def register_type(key: str, name: str, checks: Any = (), **kwargs: Any) -> TypeDescriptor:
    """This function is a shortcut to `type_registry().register()`."""
    return type_registry().register(key, name, checks, **kwargs)
