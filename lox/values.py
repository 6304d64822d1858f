"""Runtime values for Lox.

Lox values map onto plain Python objects: a Number is a `float`, Text is a
`str`, a Boolean is a `bool` and the absence of a value is the `NIL`
singleton. Values are never mutated after they are produced. This module
also holds the helpers that name, render and compare values.
"""

from __future__ import annotations

import math
from decimal import Decimal
from typing import Any


class NilVal:
    """Marker type for the Lox `nil` value. Use the `NIL` singleton."""
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return 'nil'


NIL = NilVal()


def is_number(value: Any) -> bool:
    # bool is a subclass of int, never of float
    return isinstance(value, float)


def type_name(value: Any) -> str:
    """Return the Lox type name of a runtime value."""
    if isinstance(value, bool):
        return 'Boolean'
    if isinstance(value, float):
        return 'Number'
    if isinstance(value, str):
        return 'Text'
    if isinstance(value, NilVal):
        return 'Nil'
    return type(value).__name__


def to_string(value: Any) -> str:
    """Render a value the way `print` shows it.

    Numbers use plain positional notation with the shortest digits that
    round-trip: `7.0` prints as `7`, `2.5` stays `2.5` and `1e20` is written
    out in full. Text is shown verbatim without quotes.
    """
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, float):
        if math.isinf(value) or math.isnan(value):
            return repr(value)
        text = format(Decimal(repr(value)), 'f')
        if '.' in text:
            text = text.rstrip('0').rstrip('.')
        return text
    if isinstance(value, str):
        return value
    if isinstance(value, NilVal):
        return 'nil'
    return str(value)


def values_equal(a: Any, b: Any) -> bool:
    """Equality for `==` and `!=`.

    Operands of different types are never equal; that is a normal result,
    not an error.
    """
    if type_name(a) != type_name(b):
        return False
    if isinstance(a, NilVal):
        return True
    return a == b
