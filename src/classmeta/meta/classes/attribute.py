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
Description: Attribute descriptors. An attribute descriptor records a declaration and,
            once built, holds the generated accessors through which get() and set() go.
🦙
"""

from __future__ import annotations

__author__ = "Sébastien Gachoud"
__license__ = "MIT"

from typing import TYPE_CHECKING, Any, Callable

from ...abstract.exceptions.traced_exceptions import handle_error
from ..accessors.builder import Accessors, Getter, Setter, builder_for
from ..accessors.storage import ClassStorage, InstanceStorage
from ..constants import (
    AccessorMode,
    AccessorStrategy,
    Authorization,
    Context,
    Visibility,
    mode_from_authorization,
)
from ..errors import AccessDeniedError, DeclarationError
from ..types import compose_checks, lookup_type
from ..utilities import coerce_constant, validate_name
from ..visibility import guard

if TYPE_CHECKING:
    from .descriptor import ClassDescriptor


class AttributeDescriptor:
    """Describes an attribute of a class.

    Examples:
        >>> meta.add_attribute("age", "integer", default=0)
        >>> person.age(10)
        >>> person.age()
        10
        >>> Person.my_class().attributes("age")[0].get(person)
        10
    """

    def __init__(
        self,
        owner: ClassDescriptor,
        name: str,
        type_key: str,
        *,
        label: str | None = None,
        description: str = "",
        visibility: Visibility | int = Visibility.PUBLIC,
        authorization: Authorization | int = Authorization.RDWR,
        accessor_mode: AccessorMode | int | None = None,
        context: Context | str = Context.INSTANCE,
        required: bool = False,
        once: bool = False,
        default: Any = None,
        default_factory: Callable[[], Any] | None = None,
        override: bool = False,
        accessor_strategy: AccessorStrategy | str | None = None,
    ) -> None:
        handler = owner.error_handler
        self.owner = owner
        self.name = validate_name(name, "attribute", handler)
        self.type_key = type_key
        # Unknown types fail here, at declaration time.
        self.type_descriptor = lookup_type(type_key, handler)
        self.label = label or name
        self.description = description
        self.visibility = coerce_constant(Visibility, visibility, "visibility", handler)
        self.authorization = coerce_constant(
            Authorization, authorization, "authorization", handler
        )
        if accessor_mode is None:
            self.accessor_mode = mode_from_authorization(self.authorization)
        else:
            self.accessor_mode = coerce_constant(
                AccessorMode, accessor_mode, "accessor_mode", handler
            )
        if int(self.accessor_mode) & ~int(self.authorization):
            handle_error(
                DeclarationError(
                    f"Attribute '{name}' cannot generate {self.accessor_mode.name} accessors"
                    f" with {self.authorization.name} authorization"
                ),
                handler,
            )
        self.context = coerce_constant(Context, context, "context", handler)
        self.required = bool(required)
        self.once = bool(once)
        self.override = bool(override)

        if default is not None and default_factory is not None:
            handle_error(
                DeclarationError(
                    f"Attribute '{name}' cannot have both a default and a default_factory"
                ),
                handler,
            )
        if default_factory is not None and not callable(default_factory):
            handle_error(
                DeclarationError(f"The default_factory of attribute '{name}' is not callable"),
                handler,
            )
        self.default = default
        self.default_factory = default_factory

        self.accessor_strategy = (
            None
            if accessor_strategy is None
            else coerce_constant(AccessorStrategy, accessor_strategy, "accessor_strategy", handler)
        )

        self._accessors: Accessors | None = None
        self._getter: Getter | None = None
        self._setter: Setter | None = None

    @property
    def built(self) -> bool:
        return self._accessors is not None

    @property
    def accessors(self) -> Accessors | None:
        """The generated accessors, once built."""
        return self._accessors

    def resolve_default(self) -> Any:
        """The default value. A default_factory is called each time."""
        if self.default_factory is not None:
            return self.default_factory()
        return self.default

    def resolve_strategy(self) -> AccessorStrategy:
        """The attribute's strategy, else its class', else its type's."""
        return (
            self.accessor_strategy
            or self.owner.accessor_strategy
            or self.type_descriptor.accessor_strategy
        )

    def build(self) -> Accessors:
        """Generate the accessors of the attribute. Called by the owner's build.

        Raises:
            DeclarationError: Raised if the literal default fails the type checks or if the
                CUSTOM strategy is requested for a type without builder.

        Returns:
            Accessors: The generated accessors.
        """
        handler = self.owner.error_handler
        if self.default is not None:
            message = self.type_descriptor.validate(self.default, {}, self)
            if message is not None:
                handle_error(
                    DeclarationError(f"Invalid default for attribute '{self.name}': {message}"),
                    handler,
                )

        strategy = self.resolve_strategy()
        if strategy is AccessorStrategy.CUSTOM and self.type_descriptor.builder is None:
            handle_error(
                DeclarationError(
                    f"Attribute '{self.name}' uses the custom accessor strategy but type"
                    f" '{self.type_key}' has no builder"
                ),
                handler,
            )

        if self.context is Context.CLASS:
            storage: InstanceStorage | ClassStorage = ClassStorage(
                self.name, self.resolve_default()
            )
        else:
            storage = InstanceStorage(self.name)

        builder = builder_for(strategy)
        accessors = builder.build(
            self, self.accessor_mode, compose_checks(self, self.type_descriptor), storage
        )
        self._getter = accessors.getter
        self._setter = accessors.setter
        if self.accessor_mode is AccessorMode.NONE:
            # Accessors written by hand on the class.
            self._getter = self._hand_written(builder.getter_name(self), Authorization.READ)
            self._setter = self._hand_written(builder.setter_name(self), Authorization.WRITE)
        self._accessors = accessors
        return accessors

    def _hand_written(self, method_name: str, needed: Authorization) -> Any:
        if not self.authorization & needed or not hasattr(self.owner.package, method_name):
            return None

        def getter(target: Any, *, caller: Any = None) -> Any:
            return getattr(target, method_name)()

        def setter(target: Any, value: Any, *, caller: Any = None) -> None:
            getattr(target, method_name)(value)

        return guard(
            getter if needed is Authorization.READ else setter,
            name=self.name,
            kind="attribute",
            visibility=self.visibility,
            owner=self.owner,
        )

    def get(self, target: Any, caller: Any = None) -> Any:
        """Read the attribute of target through the same path as the generated accessors.

        Raises:
            AccessDeniedError: Raised if the attribute cannot be read, or not by caller.
        """
        if self._getter is None:
            self.owner.handle_error(AccessDeniedError(f"Cannot get attribute '{self.name}'"))
        return self._getter(target, caller=caller)

    def set(self, target: Any, value: Any, caller: Any = None) -> None:
        """Write the attribute of target through the same path as the generated accessors.

        Raises:
            AccessDeniedError: Raised if the attribute cannot be written, or not by caller.
            ValidationError: Raised if the value is rejected by the checks.
        """
        if self._setter is None:
            self.owner.handle_error(AccessDeniedError(f"Cannot set attribute '{self.name}'"))
        self._setter(target, value, caller=caller)

    def apply_default(self, target: Any) -> None:
        """Store the default on a new instance. Neither checks nor visibility apply."""
        value = self.resolve_default()
        if value is None:
            return
        storage = self._accessors.storage if self._accessors else InstanceStorage(self.name)
        storage.set(target, value)

    def __repr__(self) -> str:
        return (
            f"<AttributeDescriptor {self.owner.package_name}.{self.name}"
            f" ({self.type_key}, {self.visibility.name.lower()})>"
        )
