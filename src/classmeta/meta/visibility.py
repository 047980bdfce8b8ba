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
Description: Visibility guards of generated members. The caller of a member is identified
            by an explicit token, the `caller` keyword of every generated callable. A
            token is a class, or an object standing for its own class. Callables that
            call other generated members on behalf of their caller, such as generated
            constructors, forward the token they received instead of their own identity.
🦙
"""

from __future__ import annotations

__author__ = "Sébastien Gachoud"
__license__ = "MIT"

from typing import TYPE_CHECKING, Any, Callable

from .constants import Visibility
from .errors import AccessDeniedError

if TYPE_CHECKING:
    from .classes.descriptor import ClassDescriptor


def caller_identity(caller: Any) -> type | None:
    """Class identified by a caller token. None stands for an anonymous caller."""
    if caller is None or isinstance(caller, type):
        return caller
    return type(caller)


def is_permitted(visibility: Visibility, owner: ClassDescriptor, caller: Any) -> bool:
    """Whether a caller may use a member of the given visibility owned by owner.

    Args:
        visibility (Visibility): Visibility of the member.
        owner (ClassDescriptor): Descriptor of the class declaring the member.
        caller (Any): The caller token.

    Returns:
        bool: True if the call is permitted.
    """
    identity = caller_identity(caller)
    match visibility:
        case Visibility.PUBLIC:
            return True
        case Visibility.PROTECTED:
            return identity is not None and issubclass(identity, owner.package)
        case Visibility.PRIVATE:
            return identity is owner.package
        case Visibility.TRUSTED:
            if identity is None:
                return False
            return identity is owner.package or any(
                issubclass(identity, trusted) for trusted in owner.trusted
            )
    return False


def guard[F: Callable[..., Any]](
    func: F, *, name: str, kind: str, visibility: Visibility, owner: ClassDescriptor
) -> F:
    """Wrap a generated callable with the visibility check of its member. Public members
    are not wrapped. The wrapped callable must accept the `caller` keyword, which is
    forwarded to it.

    Args:
        func (F): The callable to guard.
        name (str): Name of the member, for the error message.
        kind (str): Kind of the member (attribute, constructor, method).
        visibility (Visibility): Visibility of the member.
        owner (ClassDescriptor): Descriptor of the class declaring the member.

    Returns:
        F: The guarded callable.
    """
    if visibility is Visibility.PUBLIC:
        return func

    label = visibility.name.lower()

    def guarded(*args: Any, caller: Any = None, **kwargs: Any) -> Any:
        if not is_permitted(visibility, owner, caller):
            owner.handle_error(
                AccessDeniedError(f"{name} is a {label} {kind} of {owner.package_name}")
            )
        return func(*args, caller=caller, **kwargs)

    guarded.__name__ = getattr(func, "__name__", name)
    guarded.__doc__ = getattr(func, "__doc__", None)
    return guarded  # type: ignore[return-value]
