"""
Numeric capability layer.

A clamped number wraps some primitive numeric type ``T``.  The saturating
engines never reimplement ``T``'s arithmetic; they only require that ``T``
can be ordered, compared with the literals ``0`` and ``1``, and combined
with the four (or five) compound arithmetic operators.  This module names
that contract, the three domain categories that select an engine, and the
runtime checks that stand in for a compile-time type check.
"""

from __future__ import annotations

import numbers
from enum import Enum
from typing import Any, Protocol


class Domain(Enum):
    """Which saturating rule set applies to a clamped type."""

    NATURAL = "natural"   # non-negative integers, adds modulo
    INTEGER = "integer"   # signed integers, adds modulo and negation
    DECIMAL = "decimal"   # reals, adds negation, no modulo

    @property
    def integral(self) -> bool:
        return self is not Domain.DECIMAL

    @property
    def signed(self) -> bool:
        return self is not Domain.NATURAL


class DomainError(ValueError):
    """A value does not belong to the numeric domain of a clamped type."""


class Numeric(Protocol):
    """What a wrapped primitive must support.

    Natural and Integer domains additionally need ``__mod__``; Integer and
    Decimal need ``__neg__``.
    """

    def __lt__(self, other: Any) -> bool: ...
    def __le__(self, other: Any) -> bool: ...
    def __gt__(self, other: Any) -> bool: ...
    def __ge__(self, other: Any) -> bool: ...
    def __add__(self, other: Any) -> Any: ...
    def __sub__(self, other: Any) -> Any: ...
    def __mul__(self, other: Any) -> Any: ...
    def __truediv__(self, other: Any) -> Any: ...


# ---------------------------------------------------------------------------
# Domain membership
# ---------------------------------------------------------------------------

def check_value(domain: Domain, value: Any, role: str = "value") -> None:
    """Raise if ``value`` cannot be stored in or applied to ``domain``.

    ``TypeError`` for the wrong numeric category, ``DomainError`` for a
    value of the right category that the domain still excludes (negative
    naturals, NaN).
    """
    if isinstance(value, bool):
        raise TypeError(f"{role} must be a number, got bool")

    if domain is Domain.DECIMAL:
        if not isinstance(value, numbers.Real):
            raise TypeError(
                f"{role} must be a real number, got {type(value).__name__}"
            )
        if value != value:
            raise DomainError(f"{role} must not be NaN")
        return

    if not isinstance(value, numbers.Integral):
        raise TypeError(
            f"{role} must be an integer, got {type(value).__name__}"
        )
    if domain is Domain.NATURAL and value < 0:
        raise DomainError(f"{role} must be a natural number, got {value}")


# ---------------------------------------------------------------------------
# C-style integer division
# ---------------------------------------------------------------------------

def truncdiv(a: Any, b: Any) -> Any:
    """Integer division truncating toward zero (not floor division).

    Python's ``//`` rounds toward negative infinity.  The fixed-width
    integers a clamped integer stands in for truncate toward zero instead.
    """
    q, r = divmod(a, b)
    # divmod rounds toward -inf; adjust when the result is negative
    # and there is a remainder.
    if r != 0 and (a < 0) != (b < 0):
        q += 1
    return q


def truncmod(a: Any, b: Any) -> Any:
    """Remainder matching :func:`truncdiv`; takes the sign of ``a``."""
    r = a % b
    if r != 0 and (a < 0) != (b < 0):
        r -= b
    return r
