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
Description: Validation checks run by generated setters. A check receives the candidate
            value, the current storage of the target and the attribute descriptor. It
            returns None when the value is acceptable, or a failure message.
🦙
"""

from __future__ import annotations

__author__ = "Sébastien Gachoud"
__license__ = "MIT"

from typing import TYPE_CHECKING, Any, Callable, Iterable, Mapping

if TYPE_CHECKING:
    from ..classes.attribute import AttributeDescriptor
    from .registry import TypeDescriptor

type ValidationCheck = Callable[[Any, Mapping[str, Any], AttributeDescriptor], str | None]
type Predicate = Callable[[Any], bool]


def required_check(
    value: Any, _storage: Mapping[str, Any], attribute: AttributeDescriptor
) -> str | None:
    """Reject None for required attributes."""
    if value is None:
        return f"Attribute '{attribute.name}' must be defined"
    return None


def once_check(
    _value: Any, storage: Mapping[str, Any], attribute: AttributeDescriptor
) -> str | None:
    """Reject any value once the storage already holds one for the attribute."""
    if storage.get(attribute.name) is not None:
        return f"Attribute '{attribute.name}' can only be set once"
    return None


def kind_check(kind: str, predicate: Predicate) -> ValidationCheck:
    """Create a check accepting None and any value satisfying the predicate.

    Args:
        kind (str): Human name of the expected kind, used in the failure message.
        predicate (Predicate): Returns True for acceptable values.

    Returns:
        ValidationCheck: The check. Its failure message names the value and the kind,
            e.g. "0.5 is not a valid integer".
    """

    def check(
        value: Any, _storage: Mapping[str, Any], _attribute: AttributeDescriptor
    ) -> str | None:
        if value is None or predicate(value):
            return None
        return f"{value!r} is not a valid {kind}"

    check.__name__ = f"{kind.replace(' ', '_')}_check"
    return check


def class_check(cls: type) -> ValidationCheck:
    """Create a check accepting None and instances of cls or of its subclasses."""

    def check(
        value: Any, _storage: Mapping[str, Any], attribute: AttributeDescriptor
    ) -> str | None:
        if value is None or isinstance(value, cls):
            return None
        return (
            f"Value {value!r} is not a valid {cls.__qualname__} object for attribute"
            f" '{attribute.name}' of '{attribute.owner.package_name}'"
        )

    check.__name__ = f"{cls.__name__}_check"
    return check


def compose_checks(
    attribute: AttributeDescriptor, type_descriptor: TypeDescriptor
) -> tuple[ValidationCheck, ...]:
    """Ordered checks of an attribute: required, then once, then the type's own checks."""
    checks: list[ValidationCheck] = []
    if attribute.required:
        checks.append(required_check)
    if attribute.once:
        checks.append(once_check)
    checks.extend(type_descriptor.checks)
    return tuple(checks)


def run_checks(
    checks: Iterable[ValidationCheck],
    value: Any,
    storage: Mapping[str, Any],
    attribute: AttributeDescriptor,
) -> str | None:
    """Run the checks in order and return the first failure message, if any."""
    for check in checks:
        message = check(value, storage, attribute)
        if message is not None:
            return message
    return None
