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
Description: Accessor builders. A builder creates the guarded getter and setter of an
            attribute and names the methods exposing them:
            - DEFAULT: `name()` gets, `name(value)` sets.
            - AFFORDANCE: `get_name()` and `set_name(value)`.
            - SEMI_AFFORDANCE: `name()` and `set_name(value)`.
            - CUSTOM: the type's builder returns the methods.
            Boolean types get `is_name()`, `set_name_on()` and `set_name_off()` as well under
            the affordance-like strategies.
🦙
"""

from __future__ import annotations

__author__ = "Sébastien Gachoud"
__license__ = "MIT"

from typing import TYPE_CHECKING, Any, Callable, Iterable

from ..constants import AccessorMode, AccessorStrategy
from ..errors import ValidationError
from ..types.checks import ValidationCheck, run_checks
from ..visibility import guard
from .storage import Storage

if TYPE_CHECKING:
    from ..classes.attribute import AttributeDescriptor
    from ..types.registry import Converter

type Getter = Callable[..., Any]
type Setter = Callable[..., None]

_UNSET: Any = object()


class Accessors:
    """What was generated for an attribute: its storage, its guarded getter and setter,
    and the methods to install by name."""

    def __init__(
        self,
        storage: Storage,
        getter: Getter | None,
        setter: Setter | None,
        methods: dict[str, Callable[..., Any]],
    ) -> None:
        self.storage = storage
        self.getter = getter
        self.setter = setter
        self.methods = methods


def make_getter(storage: Storage) -> Getter:
    """Unguarded getter reading the storage."""

    def getter(target: Any, *, caller: Any = None) -> Any:
        return storage.get(target)

    return getter


def make_setter(
    attribute: AttributeDescriptor,
    storage: Storage,
    checks: Iterable[ValidationCheck],
    converter: Converter | None = None,
) -> Setter:
    """Unguarded setter. Runs the checks against the current storage, signals the first
    failure through the owner's error handler, and stores the value otherwise.
    """
    checks = tuple(checks)

    def setter(target: Any, value: Any, *, caller: Any = None) -> None:
        message = run_checks(checks, value, storage.view(target), attribute)
        if message is not None:
            attribute.owner.handle_error(ValidationError(attribute.name, value, message))
        if converter is not None and value is not None:
            value = converter(value)
        storage.set(target, value)

    return setter


def _named[F: Callable[..., Any]](func: F, name: str, attribute: AttributeDescriptor) -> F:
    func.__name__ = name
    func.__qualname__ = f"{attribute.owner.package.__qualname__}.{name}"
    return func


class AccessorBuilder:
    """Base class of accessor builders. Sub-classes name the getter and the setter."""

    def build(
        self,
        attribute: AttributeDescriptor,
        mode: AccessorMode,
        checks: Iterable[ValidationCheck],
        storage: Storage,
    ) -> Accessors:
        """Generate the accessors of an attribute.

        Args:
            attribute (AttributeDescriptor): The attribute.
            mode (AccessorMode): Which of the getter and the setter to generate.
            checks (Iterable[ValidationCheck]): Ordered checks run by the setter.
            storage (Storage): Where the values live.

        Returns:
            Accessors: The generated accessors.
        """
        getter: Getter | None = None
        setter: Setter | None = None
        if mode & AccessorMode.GET:
            getter = self.__guard(make_getter(storage), attribute)
        if mode & AccessorMode.SET:
            setter = self.__guard(
                make_setter(attribute, storage, checks, attribute.type_descriptor.converter),
                attribute,
            )
        methods = self.create_methods(attribute, getter, setter) if mode else {}
        return Accessors(storage, getter, setter, methods)

    @staticmethod
    def __guard[F: Callable[..., Any]](func: F, attribute: AttributeDescriptor) -> F:
        return guard(
            func,
            name=attribute.name,
            kind="attribute",
            visibility=attribute.visibility,
            owner=attribute.owner,
        )

    def getter_name(self, attribute: AttributeDescriptor) -> str:
        """Name of the method reading the attribute."""
        return attribute.name

    def setter_name(self, attribute: AttributeDescriptor) -> str:
        """Name of the method writing the attribute."""
        return attribute.name

    def create_methods(
        self,
        attribute: AttributeDescriptor,
        getter: Getter | None,
        setter: Setter | None,
    ) -> dict[str, Callable[..., Any]]:
        """Create the methods to install, by name."""
        del attribute, getter, setter
        return {}


class DefaultAccessorBuilder(AccessorBuilder):
    """One method named after the attribute. Calling the half that was not generated is
    silently ignored: a read-only accessor ignores its argument and a write-only accessor
    called without argument does nothing.
    """

    def create_methods(
        self,
        attribute: AttributeDescriptor,
        getter: Getter | None,
        setter: Setter | None,
    ) -> dict[str, Callable[..., Any]]:
        def accessor(target: Any, value: Any = _UNSET, /, *, caller: Any = None) -> Any:
            if value is not _UNSET and setter is not None:
                setter(target, value, caller=caller)
            return getter(target, caller=caller) if getter is not None else None

        return {attribute.name: _named(accessor, attribute.name, attribute)}


class AffordanceAccessorBuilder(AccessorBuilder):
    """Separate get_ and set_ methods, each created only when the mode grants it."""

    getter_prefix = "get_"

    def getter_name(self, attribute: AttributeDescriptor) -> str:
        return f"{self.getter_prefix}{attribute.name}"

    def setter_name(self, attribute: AttributeDescriptor) -> str:
        return f"set_{attribute.name}"

    def create_methods(
        self,
        attribute: AttributeDescriptor,
        getter: Getter | None,
        setter: Setter | None,
    ) -> dict[str, Callable[..., Any]]:
        methods: dict[str, Callable[..., Any]] = {}
        if getter is not None:

            def get(target: Any, *, caller: Any = None) -> Any:
                return getter(target, caller=caller)

            name = self.getter_name(attribute)
            methods[name] = _named(get, name, attribute)

        if setter is not None:

            def set_(target: Any, value: Any, /, *, caller: Any = None) -> None:
                setter(target, value, caller=caller)

            name = self.setter_name(attribute)
            methods[name] = _named(set_, name, attribute)

        if attribute.type_descriptor.is_boolean:
            methods.update(self.create_toggles(attribute, getter, setter))
        return methods

    @staticmethod
    def create_toggles(
        attribute: AttributeDescriptor,
        getter: Getter | None,
        setter: Setter | None,
    ) -> dict[str, Callable[..., Any]]:
        """is_name, set_name_on and set_name_off methods of boolean attributes."""
        name = attribute.name
        toggles: dict[str, Callable[..., Any]] = {}
        if getter is not None:

            def is_(target: Any, *, caller: Any = None) -> Any:
                return getter(target, caller=caller)

            toggles[f"is_{name}"] = _named(is_, f"is_{name}", attribute)

        if setter is not None:

            def on(target: Any, *, caller: Any = None) -> None:
                setter(target, True, caller=caller)

            def off(target: Any, *, caller: Any = None) -> None:
                setter(target, False, caller=caller)

            toggles[f"set_{name}_on"] = _named(on, f"set_{name}_on", attribute)
            toggles[f"set_{name}_off"] = _named(off, f"set_{name}_off", attribute)
        return toggles


class SemiAffordanceAccessorBuilder(AffordanceAccessorBuilder):
    """Getter named after the attribute, set_ setter."""

    getter_prefix = ""


class CustomAccessorBuilder(AccessorBuilder):
    """Delegates the methods to the builder of the attribute's type. The type builder
    receives the attribute, its guarded getter and its guarded setter (None when not
    generated) and returns the methods to install by name."""

    def create_methods(
        self,
        attribute: AttributeDescriptor,
        getter: Getter | None,
        setter: Setter | None,
    ) -> dict[str, Callable[..., Any]]:
        builder = attribute.type_descriptor.builder
        if builder is None:
            return {}
        return dict(builder(attribute, getter, setter))


_BUILDERS: dict[AccessorStrategy, AccessorBuilder] = {
    AccessorStrategy.DEFAULT: DefaultAccessorBuilder(),
    AccessorStrategy.AFFORDANCE: AffordanceAccessorBuilder(),
    AccessorStrategy.SEMI_AFFORDANCE: SemiAffordanceAccessorBuilder(),
    AccessorStrategy.CUSTOM: CustomAccessorBuilder(),
}


def builder_for(strategy: AccessorStrategy) -> AccessorBuilder:
    """Accessor builder implementing a strategy."""
    return _BUILDERS[strategy]
