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
Description: Built-in types of the type registry: string, boolean, whole, integer, decimal,
            real, float, scalar, sequence, mapping and code, and their aliases.
🦙
"""

__author__ = "Sébastien Gachoud"
__license__ = "MIT"

import math
from collections.abc import Mapping, Sequence
from decimal import Decimal
from numbers import Real
from typing import Any

from .checks import kind_check
from .registry import type_registry


def _is_finite(value: Any) -> bool:
    if isinstance(value, Decimal):
        return value.is_finite()
    if isinstance(value, float):
        return math.isfinite(value)
    return True


def is_integer(value: Any) -> bool:
    """Integers. Booleans and integral floats are not integers."""
    return isinstance(value, int) and not isinstance(value, bool)


def is_whole(value: Any) -> bool:
    """Integers strictly greater than zero."""
    return is_integer(value) and value > 0


def is_decimal(value: Any) -> bool:
    """Finite numbers with a decimal representation: int, float and Decimal."""
    return (
        isinstance(value, (int, float, Decimal))
        and not isinstance(value, bool)
        and _is_finite(value)
    )


def is_real(value: Any) -> bool:
    """Finite real numbers, fractions included."""
    return (
        isinstance(value, (Real, Decimal))
        and not isinstance(value, bool)
        and _is_finite(value)
    )


def is_float(value: Any) -> bool:
    """Any real number, infinities and NaN included."""
    return isinstance(value, (Real, Decimal)) and not isinstance(value, bool)


def is_sequence(value: Any) -> bool:
    """Sequences other than strings and bytes."""
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))


# Register the built-in types

tr = type_registry()

tr.register("string", "String", kind_check("string", lambda v: isinstance(v, str)))

# Any value is accepted and stored as its truth value.
tr.register("boolean", "Boolean", converter=bool, is_boolean=True)

tr.register("whole", "Whole number", kind_check("whole number", is_whole))
tr.register("integer", "Integer", kind_check("integer", is_integer))
tr.register("decimal", "Decimal number", kind_check("decimal number", is_decimal))
tr.register("real", "Real number", kind_check("real number", is_real))
tr.register("float", "Floating point number", kind_check("floating point number", is_float))

tr.register("scalar", "Scalar", description="Opaque value, never checked")
tr.register("sequence", "Sequence", kind_check("sequence", is_sequence))
tr.register("mapping", "Mapping", kind_check("mapping", lambda v: isinstance(v, Mapping)))
tr.register("code", "Code", kind_check("callable", callable))

# Aliases

tr.alias("bool", "boolean")
tr.alias("scalarref", "scalar")
tr.alias("array", "sequence")
tr.alias("arrayref", "sequence")
tr.alias("hash", "mapping")
tr.alias("hashref", "mapping")
tr.alias("coderef", "code")
tr.alias("closure", "code")
