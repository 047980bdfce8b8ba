"""Helpers shared by the declarations: name validation and constant coercion."""

import re
from enum import Enum
from typing import Any

from ..abstract.exceptions.traced_exceptions import ErrorHandler, handle_error
from .errors import DeclarationError

NAME_PATTERN = re.compile(r"\w+", re.ASCII)


def validate_name(name: Any, kind: str, handler: ErrorHandler | None = None) -> str:
    """Check that a member name is present and made of alphanumerics and '_' only.

    Args:
        name (Any): The name to check.
        kind (str): What is named, for the error message (attribute, constructor...).
        handler (ErrorHandler | None): The error handler to signal errors with.

    Raises:
        DeclarationError: Raised if the name is missing or malformed.

    Returns:
        str: The name.
    """
    if not name:
        handle_error(DeclarationError(f"Parameter 'name' is required for a {kind}"), handler)
    if not isinstance(name, str) or not NAME_PATTERN.fullmatch(name):
        handle_error(
            DeclarationError(
                f"{kind.capitalize()} '{name}' is not a valid {kind} name -- only alphanumeric"
                " and '_' characters allowed"
            ),
            handler,
        )
    return name


def coerce_constant[E: Enum](
    enum_type: type[E], value: Any, parameter: str, handler: ErrorHandler | None = None
) -> E:
    """Convert a declared constant to its enum member. Flags combining undeclared bits are
    rejected as well.

    Args:
        enum_type (type[E]): The enum the value must belong to.
        value (Any): The declared value: a member, its raw value or its name.
        parameter (str): Name of the declaration parameter, for the error message.
        handler (ErrorHandler | None): The error handler to signal errors with.

    Raises:
        DeclarationError: Raised if the value is not a member of the enum.

    Returns:
        E: The enum member.
    """
    try:
        member = enum_type(value)
    except (ValueError, TypeError):
        # Names are accepted too: "protected", "semi_affordance"...
        name = value.upper().replace("-", "_") if isinstance(value, str) else None
        member = enum_type.__members__.get(name) if name else None
    if member is None or member not in enum_type.__members__.values():
        handle_error(DeclarationError(f"Not a valid {parameter} parameter: {value!r}"), handler)
    return member
