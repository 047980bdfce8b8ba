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
Description: The class descriptor: the self-describing metadata of a class. It holds the
            attribute, constructor and method descriptors in declaration order, resolves
            inherited attributes, builds and installs the generated members and exposes
            them for introspection and dispatch.
🦙
"""

from __future__ import annotations

__author__ = "Sébastien Gachoud"
__license__ = "MIT"

import logging
from typing import Any, Callable, Iterable, NoReturn

from ...abstract.exceptions.traced_exceptions import ErrorHandler, handle_error
from ..constants import AccessorStrategy, Context, Visibility
from ..errors import DuplicateAttributeError, NoSuchAttributeError, SealedError
from ..types import TypeDescriptor
from ..visibility import caller_identity
from .attribute import AttributeDescriptor
from .constructor import ConstructorDescriptor
from .method import MethodDescriptor
from .registry import class_registry

logger = logging.getLogger(__name__)

type Member = AttributeDescriptor | ConstructorDescriptor | MethodDescriptor


class ClassDescriptor:
    """Metadata of a class declared with ClassMeta. Obtained with `Class.my_class()` or
    `ClassMeta.for_class(Class)` once the class is built.
    """

    def __init__(
        self,
        package: type,
        key: str,
        *,
        name: str | None = None,
        description: str = "",
        abstract: bool = False,
        trusted: Iterable[type] = (),
        error_handler: ErrorHandler | None = None,
        accessor_strategy: AccessorStrategy | None = None,
    ) -> None:
        self.package = package
        self.key = key
        self.name = name or package.__qualname__
        self.description = description
        self.abstract = bool(abstract)
        self.trusted = tuple(trusted)
        self.error_handler = error_handler
        self.accessor_strategy = accessor_strategy
        self.capabilities: dict[str, Callable[..., Any]] = {}
        self.type_descriptor: TypeDescriptor | None = None
        self.__attributes: dict[str, AttributeDescriptor] = {}
        self.__constructors: dict[str, ConstructorDescriptor] = {}
        self.__methods: dict[str, MethodDescriptor] = {}
        self.__built = False

    @property
    def package_name(self) -> str:
        """Qualified name of the described class."""
        return self.package.__qualname__

    @property
    def built(self) -> bool:
        return self.__built

    @property
    def parents(self) -> tuple[ClassDescriptor, ...]:
        """Descriptors of the registered ancestors, closest first."""
        registry = class_registry()
        found = (registry.for_class(cls) for cls in self.package.__mro__[1:])
        return tuple(descriptor for descriptor in found if descriptor is not None)

    def handle_error(self, error: Exception) -> NoReturn:
        """Signal an error through the class' error handler, or the process-wide one."""
        handle_error(error, self.error_handler)

    def is_a(self, other: Any) -> bool:
        """Whether the class is, or inherits from, other: a class, a key or a descriptor."""
        if isinstance(other, ClassDescriptor):
            other = other.package
        elif isinstance(other, str):
            descriptor = class_registry().for_key(other)
            if descriptor is None:
                return False
            other = descriptor.package
        return isinstance(other, type) and issubclass(self.package, other)

    # Declarations

    def check_open(self) -> None:
        if self.__built:
            self.handle_error(SealedError(f"Class '{self.package_name}' has already been built"))

    def has_member(self, name: str) -> bool:
        """Whether a constructor or a method is already declared under name."""
        return name in self.__constructors or name in self.__methods

    def inherit(self) -> None:
        """Copy the attribute descriptors of the registered ancestors, base first. A closer
        ancestor's descriptor replaces a farther one's without moving it."""
        for parent in reversed(self.parents):
            for attribute in parent.attributes(view=Visibility.PRIVATE):
                self.__attributes[attribute.name] = attribute

    def add_attribute(self, attribute: AttributeDescriptor) -> AttributeDescriptor:
        """Add an attribute descriptor.

        Raises:
            SealedError: Raised if the class is built.
            DuplicateAttributeError: Raised if the name is already used by an inherited or
                own attribute and the descriptor does not override it.
        """
        self.check_open()
        existing = self.__attributes.get(attribute.name)
        if existing is not None and not attribute.override:
            origin = (
                ""
                if existing.owner is self
                else f" (inherited from '{existing.owner.package_name}')"
            )
            self.handle_error(
                DuplicateAttributeError(
                    f"Attribute '{attribute.name}' already exists in class"
                    f" '{self.package_name}'{origin}"
                )
            )
        self.__attributes[attribute.name] = attribute
        return attribute

    def add_constructor(self, constructor: ConstructorDescriptor) -> ConstructorDescriptor:
        self.check_open()
        self.__constructors[constructor.name] = constructor
        return constructor

    def add_method(self, method: MethodDescriptor) -> MethodDescriptor:
        self.check_open()
        self.__methods[method.name] = method
        return method

    # Build

    def _install(
        self,
        name: str,
        function: Callable[..., Any],
        context: Context,
        capability: Callable[..., Any] | None = None,
    ) -> None:
        self.capabilities[name] = capability or function
        installed = classmethod(function) if context is Context.CLASS else function
        setattr(self.package, name, installed)

    def build(self) -> None:
        """Build the own attributes, then the constructors and the methods, install them on
        the class and seal the descriptor.

        Raises:
            SealedError: Raised if the class is already built.
        """
        self.check_open()
        for attribute in self.__attributes.values():
            if attribute.owner is not self:
                continue
            accessors = attribute.build()
            for name, function in accessors.methods.items():
                self._install(name, function, attribute.context)

        for constructor in self.__constructors.values():
            function = constructor.build()
            if function is not None:
                self._install(constructor.name, function, Context.CLASS)
            elif constructor.function is not None:
                self.capabilities[constructor.name] = constructor.function

        for method in self.__methods.values():
            function = method.build()
            if function is not None:
                self._install(method.name, function, method.context, method.function)
            elif method.function is not None:
                self.capabilities[method.name] = method.function

        descriptor = self

        def my_class(_cls: type) -> ClassDescriptor:
            return descriptor

        setattr(self.package, "my_class", classmethod(my_class))
        self.__built = True
        logger.debug(
            "Built class %r: %d attributes, %d constructors, %d methods",
            self.package_name,
            len(self.__attributes),
            len(self.__constructors),
            len(self.__methods),
        )

    # Introspection

    def view_for(self, caller: Any) -> Visibility:
        """Lowest visibility a caller may see: PRIVATE for the class itself, PROTECTED for
        its subclasses, TRUSTED for trusted classes, PUBLIC otherwise."""
        identity = caller_identity(caller)
        if identity is None:
            return Visibility.PUBLIC
        if identity is self.package:
            return Visibility.PRIVATE
        if issubclass(identity, self.package):
            return Visibility.PROTECTED
        if any(issubclass(identity, trusted) for trusted in self.trusted):
            return Visibility.TRUSTED
        return Visibility.PUBLIC

    def __select[M: Member](
        self,
        members: dict[str, M],
        names: tuple[str, ...],
        view: Visibility | None,
        caller: Any,
    ) -> tuple[M, ...]:
        if names:
            return tuple(members[name] for name in names if name in members)
        minimum = view if view is not None else self.view_for(caller)
        return tuple(member for member in members.values() if member.visibility >= minimum)

    def attributes(
        self, *names: str, view: Visibility | None = None, caller: Any = None
    ) -> tuple[AttributeDescriptor, ...]:
        """Attribute descriptors, inherited ones included, in declaration order.

        Args:
            *names (str): When given, the named attributes in this order, whatever their
                visibility. Unknown names are skipped.
            view (Visibility | None): Minimum visibility of the returned attributes.
            caller (Any): When view is not given, it is derived from this caller token.
                Without both, only public attributes are returned.

        Returns:
            tuple[AttributeDescriptor, ...]: The attribute descriptors.
        """
        return self.__select(self.__attributes, names, view, caller)

    def constructors(
        self, *names: str, view: Visibility | None = None, caller: Any = None
    ) -> tuple[ConstructorDescriptor, ...]:
        """Constructor descriptors in declaration order. See attributes."""
        return self.__select(self.__constructors, names, view, caller)

    def methods(
        self, *names: str, view: Visibility | None = None, caller: Any = None
    ) -> tuple[MethodDescriptor, ...]:
        """Method descriptors in declaration order. See attributes."""
        return self.__select(self.__methods, names, view, caller)

    def find_capability(self, name: str) -> Callable[..., Any] | None:
        """Generated callable installed under name by this class or an ancestor."""
        for descriptor in (self, *self.parents):
            function = descriptor.capabilities.get(name)
            if function is not None:
                return function
        return None

    def call(self, name: str, target: Any, *args: Any, caller: Any = None, **kwargs: Any) -> Any:
        """Dispatch to a generated callable by name instead of through the class.

        >>> Person.my_class().call("age", person, 10, caller=Person)

        Raises:
            NoSuchAttributeError: Raised if nothing was installed under name.
        """
        function = self.find_capability(name)
        if function is None:
            self.handle_error(NoSuchAttributeError((name,), self.package_name))
        return function(target, *args, caller=caller, **kwargs)

    def __repr__(self) -> str:
        return f"<ClassDescriptor {self.package_name} key={self.key!r}>"
