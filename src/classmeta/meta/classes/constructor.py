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
Description: Constructor descriptors and the generated constructor. A generated
            constructor takes attribute values by name, as a mapping and/or as keywords,
            and sets them through the guarded setters of the attributes with the caller
            token it was itself called with.
🦙
"""

from __future__ import annotations

__author__ = "Sébastien Gachoud"
__license__ = "MIT"

from typing import TYPE_CHECKING, Any, Callable, Mapping

from ...abstract.exceptions.traced_exceptions import handle_error
from ..constants import Authorization, Context, Visibility
from ..errors import (
    AbstractInstantiationError,
    ClassMetaError,
    DeclarationError,
    NoSuchAttributeError,
)
from ..utilities import coerce_constant, validate_name
from ..visibility import guard
from .registry import class_registry

if TYPE_CHECKING:
    from .descriptor import ClassDescriptor


def _target_class(target: Any) -> type:
    return target if isinstance(target, type) else type(target)


def generated_constructor(owner: ClassDescriptor) -> Callable[..., Any]:
    """Create the body of a generated constructor.

    The body resolves the descriptor of the class it is called on, so that subclasses
    inheriting the constructor build instances with their own attributes.

    Attribute values are given as keywords, as a mapping, or both; keywords win. The
    `caller` keyword is reserved for the caller token, so an attribute named `caller` must
    be given through the mapping. `params` is positional only and stays free as a keyword.
    """

    def constructor(
        target: Any,
        params: Mapping[str, Any] | None = None,
        /,
        *,
        caller: Any = None,
        **values: Any,
    ) -> Any:
        cls = _target_class(target)
        descriptor = class_registry().nearest(cls) or owner
        if descriptor.abstract:
            descriptor.handle_error(
                AbstractInstantiationError(
                    f"Cannot construct objects of abstract class {descriptor.package_name}"
                )
            )

        supplied = dict(params or {})
        supplied.update(values)
        instance = cls.__new__(cls)
        for attribute in descriptor.attributes(view=Visibility.PRIVATE):
            if attribute.context is Context.CLASS:
                continue
            if attribute.name in supplied and attribute.authorization & Authorization.WRITE:
                # The caller token is forwarded, the constructor never stands for the caller.
                attribute.set(instance, supplied.pop(attribute.name), caller=caller)
            else:
                attribute.apply_default(instance)

        if supplied:
            descriptor.handle_error(NoSuchAttributeError(supplied, descriptor.package_name))
        return instance

    return constructor


class ConstructorDescriptor:
    """Describes a constructor of a class. The constructor is generated unless a code
    callable is provided or create is False (the constructor is then written by hand on
    the class)."""

    def __init__(
        self,
        owner: ClassDescriptor,
        name: str,
        *,
        label: str | None = None,
        description: str = "",
        visibility: Visibility | int = Visibility.PUBLIC,
        create: bool = True,
        code: Callable[..., Any] | None = None,
    ) -> None:
        handler = owner.error_handler
        self.owner = owner
        self.name = validate_name(name, "constructor", handler)
        if owner.has_member(name):
            handle_error(
                DeclarationError(f"Method '{name}' already exists in class '{owner.package_name}'"),
                handler,
            )
        self.label = label or name
        self.description = description
        self.visibility = coerce_constant(Visibility, visibility, "visibility", handler)
        if code is not None and not callable(code):
            handle_error(DeclarationError("Parameter code must be callable"), handler)
        self.code = code
        self.create = False if code is not None else bool(create)
        self._function: Callable[..., Any] | None = None

    @property
    def context(self) -> Context:
        """Constructors are always called on the class."""
        return Context.CLASS

    @property
    def function(self) -> Callable[..., Any] | None:
        """Guarded constructor function, once built."""
        return self._function

    def build(self) -> Callable[..., Any] | None:
        """Create the guarded constructor function. Its first argument is the class (or an
        instance standing for it).

        Returns:
            Callable[..., Any] | None: The function to install as a classmethod, or None for
                a constructor written by hand.
        """
        if self.code is not None:
            code = self.code

            def body(target: Any, *args: Any, caller: Any = None, **kwargs: Any) -> Any:
                return code(_target_class(target), *args, **kwargs)

        elif self.create:
            body = generated_constructor(self.owner)
        else:
            existing = getattr(self.owner.package, self.name, None)
            if existing is not None:
                name = self.name

                def body(target: Any, *args: Any, caller: Any = None, **kwargs: Any) -> Any:
                    return getattr(_target_class(target), name)(*args, **kwargs)

                self._function = guard(
                    body,
                    name=self.name,
                    kind="constructor",
                    visibility=self.visibility,
                    owner=self.owner,
                )
            return None

        body.__name__ = self.name
        body.__qualname__ = f"{self.owner.package.__qualname__}.{self.name}"
        self._function = guard(
            body, name=self.name, kind="constructor", visibility=self.visibility, owner=self.owner
        )
        return self._function

    def call(self, *args: Any, caller: Any = None, target: Any = None, **kwargs: Any) -> Any:
        """Call the constructor on target, the owner's class by default.

        Raises:
            ClassMetaError: Raised if the constructor was not built.
        """
        if self._function is None:
            self.owner.handle_error(ClassMetaError(f"Cannot call constructor '{self.name}'"))
        return self._function(
            self.owner.package if target is None else target, *args, caller=caller, **kwargs
        )

    def __repr__(self) -> str:
        return f"<ConstructorDescriptor {self.owner.package_name}.{self.name}>"
