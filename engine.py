"""
Saturating arithmetic engines.

Every operation reads the triple ``(current, bound, operand)`` and
classifies the outcome into a :class:`Verdict` before any arithmetic that
could leave the range of the wrapped primitive is performed.  The
overflow tests are rearranged algebraically so that the test itself
cannot overflow either: ``hi - current >= other`` instead of
``current + other <= hi``, ``hi / current >= other`` instead of
``current * other <= hi``.

There is one engine per :class:`~numeric.Domain`.  The engines are
independent strategies; a clamped type binds exactly one of them at class
level.  All of them assume ``lo <= current <= hi`` on entry and that the
operand already passed the domain check.
"""

from __future__ import annotations

import math
from enum import Enum, auto
from typing import Any, NamedTuple, Protocol

from numeric import Domain, truncdiv, truncmod


class Verdict(Enum):
    """Outcome class of one saturating step."""

    UNCHANGED = auto()      # apply the arithmetic normally
    SATURATE_MAX = auto()
    SATURATE_MIN = auto()


class Outcome(NamedTuple):
    verdict: Verdict
    value: Any


class Engine(Protocol):
    domain: Domain

    def add(self, current: Any, other: Any, lo: Any, hi: Any) -> Outcome: ...
    def sub(self, current: Any, other: Any, lo: Any, hi: Any) -> Outcome: ...
    def mul(self, current: Any, other: Any, lo: Any, hi: Any) -> Outcome: ...
    def div(self, current: Any, other: Any, lo: Any, hi: Any) -> Outcome: ...


def _keep(value: Any) -> Outcome:
    return Outcome(Verdict.UNCHANGED, value)


def _place(raw: Any, lo: Any, hi: Any) -> Outcome:
    """Classify a result that was safe to compute before checking it."""
    if raw > hi:
        return Outcome(Verdict.SATURATE_MAX, hi)
    if raw < lo:
        return Outcome(Verdict.SATURATE_MIN, lo)
    return Outcome(Verdict.UNCHANGED, raw)


# ---------------------------------------------------------------------------
# Natural numbers
# ---------------------------------------------------------------------------

class NaturalEngine:
    """Rules for non-negative integers; ``0 <= lo``, operands ``>= 0``."""

    domain = Domain.NATURAL

    def add(self, current, other, lo, hi) -> Outcome:
        if other == 0 or current == hi:
            return _keep(current)
        if hi - current >= other:
            return _keep(current + other)
        return Outcome(Verdict.SATURATE_MAX, hi)

    def sub(self, current, other, lo, hi) -> Outcome:
        if other == 0 or current == lo:
            return _keep(current)
        if current - lo >= other:
            return _keep(current - other)
        return Outcome(Verdict.SATURATE_MIN, lo)

    def mul(self, current, other, lo, hi) -> Outcome:
        if other == 0:
            return _place(0, lo, hi)
        if current == 0 or other == 1:
            return _keep(current)
        if hi // current >= other:
            return _keep(current * other)
        return Outcome(Verdict.SATURATE_MAX, hi)

    def div(self, current, other, lo, hi) -> Outcome:
        if current == 0 or other == 1:
            return _keep(current)
        if other == 0:
            return Outcome(Verdict.SATURATE_MAX, hi)
        return _place(current // other, lo, hi)

    def mod(self, current, other, lo, hi) -> Outcome:
        if other == 0:
            return _place(0, lo, hi)
        return _place(current % other, lo, hi)


# ---------------------------------------------------------------------------
# Signed integers
# ---------------------------------------------------------------------------

class IntegerEngine:
    """Rules for signed integers, including mixed-sign bound interactions."""

    domain = Domain.INTEGER

    def add(self, current, other, lo, hi) -> Outcome:
        if other == 0:
            return _keep(current)
        if other < 0:
            return self.sub(current, -other, lo, hi)
        if current == hi:
            return _keep(current)

        if hi >= 0 and current < 0:
            # opposite signs: the sum cannot overflow
            fits = other + current <= hi
        else:
            fits = hi - current >= other

        if fits:
            return _keep(current + other)
        return Outcome(Verdict.SATURATE_MAX, hi)

    def sub(self, current, other, lo, hi) -> Outcome:
        if other == 0:
            return _keep(current)
        if other < 0:
            return self.add(current, -other, lo, hi)
        if current == lo:
            return _keep(current)

        if lo <= 0 and current > 0:
            fits = current - other >= lo
        else:
            fits = current - lo >= other

        if fits:
            return _keep(current - other)
        return Outcome(Verdict.SATURATE_MIN, lo)

    def mul(self, current, other, lo, hi) -> Outcome:
        if other == 0:
            return _place(0, lo, hi)
        if current == 0 or other == 1:
            return _keep(current)

        if (current > 0) == (other > 0):
            # positive product, bounded by hi only
            if current > 0:
                fits = truncdiv(hi, current) >= other
            else:
                fits = hi > 0 and truncdiv(hi, current) <= other
            if fits:
                return _keep(current * other)
            return Outcome(Verdict.SATURATE_MAX, hi)

        # negative product, bounded by lo only
        if current > 0:
            fits = lo < 0 and truncdiv(lo, current) <= other
        elif current == -1:
            fits = -other >= lo
        else:
            fits = truncdiv(lo, current) >= other
        if fits:
            return _keep(current * other)
        return Outcome(Verdict.SATURATE_MIN, lo)

    def div(self, current, other, lo, hi) -> Outcome:
        if current == 0 or other == 1:
            return _keep(current)
        if other == -1:
            return self.mul(current, -1, lo, hi)
        if other == 0:
            if current > 0:
                return Outcome(Verdict.SATURATE_MAX, hi)
            return Outcome(Verdict.SATURATE_MIN, lo)
        # |other| > 1: the quotient is smaller in magnitude than current
        return _place(truncdiv(current, other), lo, hi)

    def mod(self, current, other, lo, hi) -> Outcome:
        if other == 0:
            return _place(0, lo, hi)
        return _place(truncmod(current, other), lo, hi)

    def neg(self, current):
        return -current


# ---------------------------------------------------------------------------
# Reals
# ---------------------------------------------------------------------------

class DecimalEngine:
    """Rules for reals.

    Floating-point primitives overflow to infinity instead of trapping, so
    no step is pre-classified: every verdict is ``UNCHANGED`` and the
    clamped number's write-back brings infinities onto the bounds.

    Division by zero departs from IEEE 754: the infinity takes the sign of
    the dividend alone, so ``0.5 / -0.0`` lands on ``hi``, not ``lo``.
    """

    domain = Domain.DECIMAL

    def add(self, current, other, lo, hi) -> Outcome:
        return _keep(current + other)

    def sub(self, current, other, lo, hi) -> Outcome:
        return _keep(current - other)

    def mul(self, current, other, lo, hi) -> Outcome:
        if other == 0:
            return _keep(0.0)
        if abs(other) < 1:
            reciprocal = 1 / other
            # a subnormal factor has no finite reciprocal
            if math.isfinite(reciprocal):
                return self.div(current, reciprocal, lo, hi)
        return _keep(current * other)

    def div(self, current, other, lo, hi) -> Outcome:
        if current == 0 or other == 1:
            return _keep(current)
        if other == 0:
            return _keep(math.copysign(math.inf, current))
        if abs(other) < 1:
            reciprocal = 1 / other
            if math.isfinite(reciprocal):
                return self.mul(current, reciprocal, lo, hi)
        return _keep(current / other)

    def neg(self, current):
        return -current
