"""Bounded index types for the variable, literal and word spaces.

Each index space gets its own ``int`` subclass whose constructor rejects
values outside ``[0, MAX)``. Once a value has been wrapped, the conversions
between spaces cannot leave their target range, so the packed stores never
re-check bounds:

- ``Variable`` ``(row, column, value)`` triples linearized to ``[0, 729)``.
- ``Literal`` a variable plus polarity, ``variable << 1 | polarity``.
- ``Word`` a position in the packed assignment words.

The raw helpers at the bottom of the module operate on plain ints and are
meant for the inner loops of the clause code, after the inputs are known to
be in range.
"""

from __future__ import annotations

import operator
from typing import Iterator, Tuple, Type, TypeVar

from .constants import CRUMBS, N, UNITS, VALUES, VARS
from .exceptions import IndexRangeError

T = TypeVar("T", bound="BoundedIndex")

_CRUMB_SHIFT = CRUMBS.bit_length() - 1
_BIT_SHIFT = _CRUMB_SHIFT + 1


class BoundedIndex(int):
    """An integer guaranteed to lie in ``[0, MAX)``."""

    MAX: int = 0

    def __new__(cls: Type[T], index: int) -> T:
        raw = operator.index(index)
        if not 0 <= raw < cls.MAX:
            raise IndexRangeError(f"{cls.__name__} {raw} outside [0, {cls.MAX})")
        return super().__new__(cls, raw)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({int(self)})"


class Digit(BoundedIndex):
    """Row, column or candidate value in ``[0, 9)``."""

    MAX = N


class Word(BoundedIndex):
    """Position of a 32-bit word in the packed assignment store."""

    MAX = UNITS


class Variable(BoundedIndex):
    """A (row, column, value) triple."""

    MAX = VARS

    @classmethod
    def of(cls, row: int, column: int, value: int) -> "Variable":
        return cls((Digit(row) * N + Digit(column)) * N + Digit(value))

    def decode(self) -> Tuple[int, int, int]:
        cell, value = divmod(int(self), N)
        row, column = divmod(cell, N)
        return row, column, value

    def literal(self, polarity: bool) -> "Literal":
        return Literal(int(self) << 1 | int(polarity))

    def word_crumb(self) -> Tuple[Word, int]:
        return Word(int(self) >> _CRUMB_SHIFT), int(self) & (CRUMBS - 1)


class Literal(BoundedIndex):
    """A variable with polarity; odd literals assert the value holds."""

    MAX = VALUES

    @property
    def polarity(self) -> bool:
        return bool(int(self) & 1)

    def variable(self) -> Variable:
        return Variable(int(self) >> 1)

    def complement(self) -> "Literal":
        return Literal(int(self) ^ 1)

    def word_bit(self) -> Tuple[Word, int]:
        return Word(int(self) >> _BIT_SHIFT), int(self) & (2 * CRUMBS - 1)


def pairs(count: int) -> Iterator[Tuple[int, int]]:
    """Yield ``(high, low)`` index pairs with ``low < high < count``."""

    for high in range(1, count):
        for low in range(high):
            yield high, low


# ----------------------------------------------------------------------
# Raw helpers for in-range ints
# ----------------------------------------------------------------------
def variable_index(row: int, column: int, value: int) -> int:
    return (row * N + column) * N + value


def positive(variable: int) -> int:
    return variable << 1 | 1


def negative(variable: int) -> int:
    return variable << 1

