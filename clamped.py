"""
Clamped numbers.

A clamped number carries a value together with an inclusive minimum and
maximum, and every arithmetic operation applied to it saturates to those
bounds instead of overflowing, underflowing or faulting::

    >>> health = ClampedInteger(5, 0, 10)
    >>> health += 10
    >>> health.value
    10

``ClampedNumber`` holds the storage and the accessor contract.  The three
domain classes below it only bind a saturating engine (and the operators
that exist in their domain); the width aliases in :mod:`aliases` only add
default bounds.
"""

from __future__ import annotations

import logging
from typing import Any, ClassVar, Generic, TypeVar

from bounds import UNIT, Bounds, stretch
from engine import (
    DecimalEngine,
    IntegerEngine,
    NaturalEngine,
    Outcome,
    Verdict,
)
from numeric import Domain, Numeric, check_value

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=Numeric)


class ClampedNumber(Generic[T]):
    """A value that never leaves ``[lo, hi]``.

    Construction never fails on an inconsistent range: a requested minimum
    above ``value`` is lowered to ``value`` and a requested maximum below it
    is raised to ``value``.  Bounds omitted by the caller fall back to the
    class's ``default_bounds``.

    Comparison operators look only at the values; the bounds play no part.
    """

    domain: ClassVar[Domain | None] = None
    engine: ClassVar[Any] = None
    representable: ClassVar[Bounds | None] = None
    default_bounds: ClassVar[Bounds | None] = None
    zero: ClassVar[Any] = 0

    def __init__(self, value: T | None = None, lo: T | None = None, hi: T | None = None):
        cls = type(self)
        if cls.engine is None:
            raise TypeError(
                f"{cls.__name__} has no arithmetic engine; use ClampedNatural, "
                "ClampedInteger or ClampedDecimal"
            )
        if value is None:
            value = cls.zero
        if lo is None or hi is None:
            if cls.default_bounds is None:
                raise TypeError(f"{cls.__name__} requires explicit bounds")
            lo = cls.default_bounds.lo if lo is None else lo
            hi = cls.default_bounds.hi if hi is None else hi

        check_value(cls.domain, value)
        check_value(cls.domain, lo, "lo")
        check_value(cls.domain, hi, "hi")

        value = self._representable(value)
        bounds = stretch(value, self._representable(lo), self._representable(hi))
        self._value = value
        self._lo = bounds.lo
        self._hi = bounds.hi

    @classmethod
    def full_range(cls, value: T | None = None) -> ClampedNumber[T]:
        """An instance spanning everything the wrapped primitive can hold."""
        if cls.representable is None:
            raise TypeError(f"{cls.__name__} has no representable range")
        return cls(value, cls.representable.lo, cls.representable.hi)

    # -- accessors ----------------------------------------------------------

    @property
    def value(self) -> T:
        return self._value

    @value.setter
    def value(self, new_value: T) -> None:
        self.set_value(new_value)

    @property
    def lo(self) -> T:
        return self._lo

    @lo.setter
    def lo(self, new_lo: T) -> None:
        self.set_lo(new_lo)

    @property
    def hi(self) -> T:
        return self._hi

    @hi.setter
    def hi(self, new_hi: T) -> None:
        self.set_hi(new_hi)

    @property
    def bounds(self) -> Bounds:
        return Bounds(self._lo, self._hi)

    @property
    def saturated(self) -> bool:
        """True when the value sits on either bound."""
        return self._value == self._lo or self._value == self._hi

    # -- mutators -----------------------------------------------------------

    def set_value(self, new_value: T) -> T:
        """Store ``new_value`` clamped into ``[lo, hi]``; return what was stored."""
        check_value(self.domain, new_value)
        if new_value < self._lo:
            self._value = self._lo
        elif new_value > self._hi:
            self._value = self._hi
        else:
            self._value = new_value
        return self._value

    def set_lo(self, new_lo: T) -> T:
        """Adopt ``new_lo`` unless it exceeds the value, else adopt the value."""
        check_value(self.domain, new_lo, "lo")
        new_lo = self._representable(new_lo)
        self._lo = self._value if new_lo > self._value else new_lo
        return self._lo

    def set_hi(self, new_hi: T) -> T:
        """Adopt ``new_hi`` unless it is below the value, else adopt the value."""
        check_value(self.domain, new_hi, "hi")
        new_hi = self._representable(new_hi)
        self._hi = self._value if new_hi < self._value else new_hi
        return self._hi

    def minimize(self) -> T:
        self._value = self._lo
        return self._value

    def maximize(self) -> T:
        self._value = self._hi
        return self._value

    def copy(self) -> ClampedNumber[T]:
        clone = object.__new__(type(self))
        clone._value = self._value
        clone._lo = self._lo
        clone._hi = self._hi
        return clone

    __copy__ = copy

    # -- arithmetic ---------------------------------------------------------

    def _representable(self, value: T) -> T:
        if self.representable is None:
            return value
        return self.representable.clamp(value)

    def _operand(self, other: Any) -> Any:
        if isinstance(other, ClampedNumber):
            other = other.value
        check_value(self.domain, other, "operand")
        return other

    def _apply(self, op: str, other: Any) -> ClampedNumber[T]:
        other = self._operand(other)
        outcome: Outcome = getattr(self.engine, op)(
            self._value, other, self._lo, self._hi
        )
        if outcome.verdict is not Verdict.UNCHANGED:
            logger.debug(
                "%r %s %r saturated (%s)", self, op, other, outcome.verdict.name
            )
        # Decimal verdicts are always UNCHANGED; the clamp brings
        # infinities and out-of-range results back onto the bounds.
        value = outcome.value
        if value != value:
            # inf - inf on unbounded decimals
            value = self._value
        elif value < self._lo:
            value = self._lo
        elif value > self._hi:
            value = self._hi
        self._value = value
        return self

    def __iadd__(self, other):
        return self._apply("add", other)

    def __isub__(self, other):
        return self._apply("sub", other)

    def __imul__(self, other):
        return self._apply("mul", other)

    def __itruediv__(self, other):
        return self._apply("div", other)

    def __add__(self, other):
        result = self.copy()
        result += other
        return result

    def __sub__(self, other):
        result = self.copy()
        result -= other
        return result

    def __mul__(self, other):
        result = self.copy()
        result *= other
        return result

    def __truediv__(self, other):
        result = self.copy()
        result /= other
        return result

    def increment(self) -> ClampedNumber[T]:
        return self._apply("add", 1)

    def decrement(self) -> ClampedNumber[T]:
        return self._apply("sub", 1)

    def post_increment(self) -> ClampedNumber[T]:
        """Increment, returning a copy of the state before the increment."""
        before = self.copy()
        self.increment()
        return before

    def post_decrement(self) -> ClampedNumber[T]:
        """Decrement, returning a copy of the state before the decrement."""
        before = self.copy()
        self.decrement()
        return before

    # -- comparison ---------------------------------------------------------

    def __eq__(self, other):
        if not isinstance(other, ClampedNumber):
            return NotImplemented
        return self._value == other._value

    def __lt__(self, other):
        if not isinstance(other, ClampedNumber):
            return NotImplemented
        return self._value < other._value

    def __le__(self, other):
        if not isinstance(other, ClampedNumber):
            return NotImplemented
        return self < other or self == other

    def __gt__(self, other):
        if not isinstance(other, ClampedNumber):
            return NotImplemented
        return not self <= other

    def __ge__(self, other):
        if not isinstance(other, ClampedNumber):
            return NotImplemented
        return not self < other

    __hash__ = None  # mutable

    # -- conversion ---------------------------------------------------------

    def __int__(self) -> int:
        return int(self._value)

    def __float__(self) -> float:
        return float(self._value)

    def __bool__(self) -> bool:
        # True for zero, false otherwise; a range excluding zero never converts to True
        return self._value == 0

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._value!r}, {self._lo!r}, {self._hi!r})"


# ---------------------------------------------------------------------------
# Operators that only some domains have
# ---------------------------------------------------------------------------

class _Modular:
    def __imod__(self, other):
        return self._apply("mod", other)

    def __mod__(self, other):
        result = self.copy()
        result %= other
        return result


class _Signed:
    def __neg__(self):
        """Negate the value; the bounds stretch to fit it, as at construction."""
        return type(self)(self.engine.neg(self._value), self._lo, self._hi)


# ---------------------------------------------------------------------------
# Domain classes
# ---------------------------------------------------------------------------

class ClampedNatural(_Modular, ClampedNumber[int]):
    """A clamped non-negative integer (wraps an unsigned primitive)."""

    domain = Domain.NATURAL
    engine = NaturalEngine()


class ClampedInteger(_Signed, _Modular, ClampedNumber[int]):
    """A clamped signed integer."""

    domain = Domain.INTEGER
    engine = IntegerEngine()


class ClampedDecimal(_Signed, ClampedNumber[float]):
    """A clamped real number; ``ClampedDecimal()`` is ``0.0`` in ``[-1, 1]``."""

    domain = Domain.DECIMAL
    engine = DecimalEngine()
    default_bounds = UNIT
    zero = 0.0
