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
Description: Declaration front-end. A ClassMeta registers a class, collects its
            constructor, attribute and method declarations and builds it.

            >>> class Person:
            ...     pass
            >>> meta = ClassMeta(Person, key="person")
            >>> meta.add_constructor("new")
            >>> meta.add_attribute("name", "string", required=True, default="nobody")
            >>> meta.add_attribute("age", "integer")
            >>> meta.build()
            >>> person = Person.new(name="Ada", age=36)
            >>> person.age()
            36
🦙
"""

from __future__ import annotations

__author__ = "Sébastien Gachoud"
__license__ = "MIT"

import logging
from typing import Any, Callable, Iterable

from ...abstract.exceptions.traced_exceptions import ErrorHandler, handle_error
from ..constants import AccessorStrategy
from ..errors import DeclarationError
from ..types import type_registry
from ..utilities import coerce_constant
from .attribute import AttributeDescriptor
from .constructor import ConstructorDescriptor
from .descriptor import ClassDescriptor
from .method import MethodDescriptor
from .registry import class_registry

logger = logging.getLogger(__name__)


class ClassMeta:
    """Declares a class: its constructors, its attributes and its methods. Creating a
    ClassMeta registers the class and copies the attributes of its registered ancestors;
    build() generates and installs the members.
    """

    def __init__(
        self,
        package: type,
        *,
        key: str | None = None,
        name: str | None = None,
        description: str = "",
        abstract: bool = False,
        trusted: type | Iterable[type] = (),
        error_handler: ErrorHandler | None = None,
        accessor_strategy: AccessorStrategy | str | None = None,
        class_class: type[ClassDescriptor] = ClassDescriptor,
        constructor_class: type[ConstructorDescriptor] = ConstructorDescriptor,
        attribute_class: type[AttributeDescriptor] = AttributeDescriptor,
        method_class: type[MethodDescriptor] = MethodDescriptor,
    ) -> None:
        """
        Args:
            package (type): The class to declare.
            key (str | None): Registry key of the class, also registered as a type key.
                Defaults to the module and qualified name of the class.
            name (str | None): Human name. Defaults to the qualified name of the class.
            description (str): Free description.
            abstract (bool): Generated constructors refuse to build abstract classes.
            trusted (type | Iterable[type]): Classes whose subclasses may use the
                trusted members.
            error_handler (ErrorHandler | None): Receives every error signaled for this
                class. Defaults to the process-wide handler.
            accessor_strategy (AccessorStrategy | str | None): Accessor naming of all the
                attributes of the class, unless they override it.
            class_class (type[ClassDescriptor]): Describes the class.
            constructor_class (type[ConstructorDescriptor]): Used by add_constructor.
            attribute_class (type[AttributeDescriptor]): Used by add_attribute.
            method_class (type[MethodDescriptor]): Used by add_method.

        Raises:
            DeclarationError: Raised on a bad parameter or if the class or the key is
                already registered.
        """
        if error_handler is not None and not callable(error_handler):
            handle_error(DeclarationError(f"Error handler {error_handler!r} is not callable"))
        if not isinstance(package, type):
            handle_error(DeclarationError(f"{package!r} is not a class"), error_handler)

        trusted = (trusted,) if isinstance(trusted, type) else tuple(trusted)
        for cls in trusted:
            if not isinstance(cls, type):
                handle_error(
                    DeclarationError(f"Trusted {cls!r} of class '{package.__qualname__}' is not a class"),
                    error_handler,
                )
        for parameter, value, base in (
            ("class_class", class_class, ClassDescriptor),
            ("constructor_class", constructor_class, ConstructorDescriptor),
            ("attribute_class", attribute_class, AttributeDescriptor),
            ("method_class", method_class, MethodDescriptor),
        ):
            if not (isinstance(value, type) and issubclass(value, base)):
                handle_error(
                    DeclarationError(f"Parameter '{parameter}' must be a subclass of {base.__name__}"),
                    error_handler,
                )
        strategy = (
            None
            if accessor_strategy is None
            else coerce_constant(AccessorStrategy, accessor_strategy, "accessor_strategy", error_handler)
        )

        descriptor = class_class(
            package,
            key or f"{package.__module__}.{package.__qualname__}",
            name=name,
            description=description,
            abstract=abstract,
            trusted=trusted,
            error_handler=error_handler,
            accessor_strategy=strategy,
        )
        registry = class_registry()
        types = type_registry()
        registry.check(descriptor)
        if types.has_type(descriptor.key):
            descriptor.handle_error(
                DeclarationError(f"Type '{descriptor.key}' is already registered")
            )
        registry.register(descriptor)
        descriptor.type_descriptor = types.register_class(
            package,
            descriptor.key,
            descriptor.name,
            description=description,
            handler=error_handler,
        )
        descriptor.inherit()
        self.__descriptor = descriptor
        self.__constructor_class = constructor_class
        self.__attribute_class = attribute_class
        self.__method_class = method_class
        logger.debug("Declared class %r", descriptor.package_name)

    @property
    def descriptor(self) -> ClassDescriptor:
        """The class descriptor being declared."""
        return self.__descriptor

    def add_constructor(self, name: str = "new", **kwargs: Any) -> ConstructorDescriptor:
        """Declare a constructor. See ConstructorDescriptor for the keyword arguments."""
        self.__descriptor.check_open()
        return self.__descriptor.add_constructor(
            self.__constructor_class(self.__descriptor, name, **kwargs)
        )

    def add_attribute(self, name: str, type_key: str, **kwargs: Any) -> AttributeDescriptor:
        """Declare an attribute. See AttributeDescriptor for the keyword arguments.

        Raises:
            UnknownTypeError: Raised if type_key is not registered.
            DuplicateAttributeError: Raised if the name is taken and override is not set.
        """
        self.__descriptor.check_open()
        return self.__descriptor.add_attribute(
            self.__attribute_class(self.__descriptor, name, type_key, **kwargs)
        )

    def add_method(
        self, name: str, code: Callable[..., Any] | None = None, **kwargs: Any
    ) -> MethodDescriptor:
        """Declare a method, given as code or already defined on the class."""
        self.__descriptor.check_open()
        return self.__descriptor.add_method(
            self.__method_class(self.__descriptor, name, code, **kwargs)
        )

    def build(self) -> ClassMeta:
        """Generate and install the members of the class. No declaration is accepted after.

        Returns:
            ClassMeta: self.
        """
        self.__descriptor.build()
        return self

    @staticmethod
    def for_class(target: Any) -> ClassDescriptor | None:
        """Descriptor of a class, or of the class of an instance, or of their closest
        declared ancestor."""
        return class_registry().nearest(target)

    @staticmethod
    def for_key(key: str) -> ClassDescriptor | None:
        return class_registry().for_key(key)
