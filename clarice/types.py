"""Runtime values and kind helpers for Clarice.

Clarice is dynamically typed: there are no declared types, only the kind
of the value an operation receives. Python's own `bool`, `int`, `float`
and `str` carry the scalar kinds directly; this module adds the marker
and container classes for the rest, plus the helpers the interpreter
uses to name kinds, compare values and format them for printing.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, List


NULL_KIND = 'Null'
BOOL_KIND = 'Bool'
INT_KIND = 'Int'
FLOAT_KIND = 'Float'
STRING_KIND = 'String'
LIST_KIND = 'List'
CLOSURE_KIND = 'Closure'
MODULE_KIND = 'Module'


class NullVal:
    """Marker object for the Clarice `null` value."""
    def __repr__(self) -> str:
        return 'null'

    def __eq__(self, other: object) -> bool:
        return isinstance(other, NullVal)

    def __hash__(self) -> int:
        return hash(NullVal)


NULL = NullVal()


@dataclass
class ErrorVal:
    """Name and message of a Clarice runtime error.

    The name is one of the error kinds of the language (`NameError`,
    `RuntimeTypeError`, `ModuleNotFoundError`, `ControlFlowError`,
    `ArithmeticError`, ...). Scripts never see these as values; they
    travel inside `ClariceError` to whoever runs the script.
    """
    name: str
    message: str

    def __repr__(self) -> str:
        return f"Error(name={self.name!r}, message={self.message!r})"


@dataclass(eq=False)
class ListVal:
    """A Clarice list.

    Lists are heterogeneous and compared structurally with
    `values_equal`. They are the container values the heap tracks.
    """
    items: List[Any] = field(default_factory=list)

    def __repr__(self) -> str:
        return f"List({self.items!r})"


def is_numeric(value: Any) -> bool:
    # bool is a subclass of int in Python but not a number in Clarice
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def type_name(value: Any) -> str:
    """Return the Clarice kind name of a runtime value."""
    from .builtin_function import BuiltinFunction
    from .modules import ModuleObject
    if isinstance(value, NullVal):
        return NULL_KIND
    if isinstance(value, bool):
        return BOOL_KIND
    if isinstance(value, int):
        return INT_KIND
    if isinstance(value, float):
        return FLOAT_KIND
    if isinstance(value, str):
        return STRING_KIND
    if isinstance(value, ListVal):
        return LIST_KIND
    if isinstance(value, BuiltinFunction):
        return CLOSURE_KIND
    if isinstance(value, ModuleObject):
        return MODULE_KIND
    return type(value).__name__


def check_kind(value: Any, kind: str) -> bool:
    """Check that a value has the given kind.

    Returns True on success and raises a Python TypeError otherwise; the
    caller turns that into a Clarice error with its own context.
    """
    actual = type_name(value)
    if actual != kind:
        raise TypeError(f"expected {kind}, got {actual}")
    return True


def format_float(value: float) -> str:
    """Positional decimal text for a Float, always with a fractional part."""
    if not math.isfinite(value):
        return repr(value)
    text = format(Decimal(repr(value)), 'f')
    if '.' not in text:
        text += '.0'
    return text


def to_string(value: Any) -> str:
    """Convert a Clarice value to its display text for `print`."""
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, int):
        try:
            return str(value)
        except ValueError:
            # past sys.get_int_max_str_digits()
            from .errors import ClariceError
            raise ClariceError(ErrorVal('ArithmeticError', 'integer too large to display')) from None
    if isinstance(value, float):
        return format_float(value)
    if isinstance(value, str):
        return value
    if isinstance(value, NullVal):
        return 'null'
    if isinstance(value, ListVal):
        return '[' + ', '.join(repr_value(item) for item in value.items) + ']'
    return repr(value)


def repr_value(value: Any) -> str:
    """Like `to_string` but quotes strings, for display inside lists."""
    if isinstance(value, str):
        escaped = value.replace('\\', '\\\\').replace('"', '\\"')
        return f'"{escaped}"'
    return to_string(value)


def values_equal(a: Any, b: Any) -> bool:
    """Structural equality as used by `=`.

    Ints and Floats compare numerically; any other pair of different
    kinds is unequal. Lists compare element by element. Closures and
    modules compare by identity.
    """
    if is_numeric(a) and is_numeric(b):
        return a == b
    if type_name(a) != type_name(b):
        return False
    if isinstance(a, ListVal):
        if len(a.items) != len(b.items):
            return False
        return all(values_equal(x, y) for x, y in zip(a.items, b.items))
    if isinstance(a, (bool, str, NullVal)):
        return a == b
    return a is b
