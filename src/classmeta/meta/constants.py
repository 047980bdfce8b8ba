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
Description: Visibility, authorization, accessor mode, context and accessor strategy
            constants used by the declarations.
🦙
"""

__author__ = "Sébastien Gachoud"
__license__ = "MIT"

from enum import Enum, IntEnum, IntFlag


class Visibility(IntEnum):
    """Who may call a member. Ordered from the most to the least restrictive so that a
    minimum tier can be compared with >=.

    PRIVATE: only the owning class.
    PROTECTED: the owning class and its subclasses.
    TRUSTED: the owning class and the classes it trusts.
    PUBLIC: anyone.
    """

    PRIVATE = 1
    PROTECTED = 2
    TRUSTED = 3
    PUBLIC = 4


class Authorization(IntFlag):
    """Declared read/write permission of an attribute."""

    NONE = 0
    READ = 1
    WRITE = 2
    RDWR = READ | WRITE


class AccessorMode(IntFlag):
    """Which accessors are generated. Shares its bits with Authorization so that
    ``mode & ~authorization`` tells whether a mode exceeds what is authorized.
    """

    NONE = 0
    GET = 1
    SET = 2
    GETSET = GET | SET


class Context(Enum):
    """Where an attribute value lives."""

    INSTANCE = "instance"
    CLASS = "class"


class AccessorStrategy(Enum):
    """How generated accessors are named.

    DEFAULT: a single ``name`` method that gets without argument and sets with one.
    AFFORDANCE: ``get_name`` and ``set_name``.
    SEMI_AFFORDANCE: ``name`` and ``set_name``.
    CUSTOM: the type's own builder decides.
    """

    DEFAULT = "default"
    AFFORDANCE = "affordance"
    SEMI_AFFORDANCE = "semi-affordance"
    CUSTOM = "custom"


def mode_from_authorization(authorization: Authorization) -> AccessorMode:
    """Accessor mode derived from an authorization when none is declared."""
    return AccessorMode(int(authorization))
