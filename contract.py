"""
Contract layer for clamped types.

A Contract is the declarative list of properties one operation of a
clamped type must satisfy over a given range.  It says WHAT must be true,
not HOW: the factory iterates over contracts to decide whether a type may
be handed out, and the property tests reuse the same reference model.

The reference model is the saturated result computed with exact
arithmetic: Python integers never overflow, so ``bounds.clamp(a + b)`` is
the answer the overflow-safe engines must reproduce.
"""

from __future__ import annotations

import math
import operator
from dataclasses import dataclass, field
from typing import Any, Callable

from bounds import Bounds
from numeric import Domain, truncdiv, truncmod


# ---------------------------------------------------------------------------
# Core contract primitives
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Property:
    """A single verifiable property of one operation."""

    name: str
    description: str
    predicate: Callable[..., bool]
    arity: int

    def check(self, *args: Any) -> bool:
        return self.predicate(*args)


@dataclass
class Contract:
    """An ordered collection of properties for one operation."""

    name: str
    properties: list[Property] = field(default_factory=list)

    def add(self, prop: Property) -> None:
        self.properties.append(prop)

    def __iter__(self):
        return iter(self.properties)

    def __len__(self):
        return len(self.properties)


# ---------------------------------------------------------------------------
# Reference model
# ---------------------------------------------------------------------------

BINARY = {
    "add": operator.add,
    "sub": operator.sub,
    "mul": operator.mul,
    "div": operator.truediv,
    "mod": operator.mod,
}


def reference(domain: Domain, op: str, a: Any, b: Any, bounds: Bounds) -> Any:
    """What ``ClampedX(a, bounds) <op> b`` must evaluate to."""
    if op == "div":
        if a == 0:
            return a
        if b == 0:
            return bounds.hi if a > 0 else bounds.lo
        raw = truncdiv(a, b) if domain.integral else a / b
    elif op == "mod":
        raw = 0 if b == 0 else truncmod(a, b)
    elif op == "add":
        raw = a + b
    elif op == "sub":
        raw = a - b
    elif op == "mul":
        raw = a * b
    else:
        raise ValueError(f"unknown operation {op!r}")
    return bounds.clamp(raw)


def agrees(domain: Domain, actual: Any, expected: Any) -> bool:
    """Exact for integral domains, tolerant of rounding for decimals."""
    if domain.integral:
        return actual == expected
    return math.isclose(actual, expected, rel_tol=1e-9, abs_tol=1e-12)


# ---------------------------------------------------------------------------
# Contract builders
# ---------------------------------------------------------------------------

def _binary_contract(kind: type, bounds: Bounds, op: str) -> Contract:
    """Properties shared by every binary operation."""
    lo, hi = bounds.lo, bounds.hi
    apply = BINARY[op]
    domain = kind.domain

    contract = Contract(name=op)

    contract.add(Property(
        name="closure",
        description="Result stays within bounds",
        predicate=lambda a, b: lo <= apply(kind(a, lo, hi), b).value <= hi,
        arity=2,
    ))

    contract.add(Property(
        name="saturation",
        description="Result equals the exact result clamped into bounds",
        predicate=lambda a, b: agrees(
            domain,
            apply(kind(a, lo, hi), b).value,
            reference(domain, op, a, b, bounds),
        ),
        arity=2,
    ))

    def bounds_kept(a, b):
        result = apply(kind(a, lo, hi), b)
        return result.lo == lo and result.hi == hi

    contract.add(Property(
        name="bounds_kept",
        description="Arithmetic never moves the bounds",
        predicate=bounds_kept,
        arity=2,
    ))

    def left_untouched(a, b):
        left = kind(a, lo, hi)
        apply(left, b)
        return left.value == a

    contract.add(Property(
        name="left_untouched",
        description="The binary form does not mutate its left operand",
        predicate=left_untouched,
        arity=2,
    ))

    return contract


def addition_contract(kind: type, bounds: Bounds) -> Contract:
    lo, hi = bounds.lo, bounds.hi
    contract = _binary_contract(kind, bounds, "add")

    contract.add(Property(
        name="identity",
        description="a + 0 == a",
        predicate=lambda a: (kind(a, lo, hi) + 0).value == a,
        arity=1,
    ))

    def idempotent(a):
        full = kind(hi, lo, hi)
        full += abs(a) or 1
        full += abs(a) or 1
        return full.value == hi

    contract.add(Property(
        name="idempotent_saturation",
        description="Once at hi, adding a positive amount stays at hi",
        predicate=idempotent,
        arity=1,
    ))

    return contract


def subtraction_contract(kind: type, bounds: Bounds) -> Contract:
    lo, hi = bounds.lo, bounds.hi
    contract = _binary_contract(kind, bounds, "sub")

    contract.add(Property(
        name="identity",
        description="a - 0 == a",
        predicate=lambda a: (kind(a, lo, hi) - 0).value == a,
        arity=1,
    ))

    def idempotent(a):
        empty = kind(lo, lo, hi)
        empty -= abs(a) or 1
        empty -= abs(a) or 1
        return empty.value == lo

    contract.add(Property(
        name="idempotent_saturation",
        description="Once at lo, subtracting a positive amount stays at lo",
        predicate=idempotent,
        arity=1,
    ))

    return contract


def multiplication_contract(kind: type, bounds: Bounds) -> Contract:
    lo, hi = bounds.lo, bounds.hi
    contract = _binary_contract(kind, bounds, "mul")

    contract.add(Property(
        name="identity",
        description="a * 1 == a",
        predicate=lambda a: (kind(a, lo, hi) * 1).value == a,
        arity=1,
    ))

    contract.add(Property(
        name="zero",
        description="a * 0 == 0, clamped into bounds",
        predicate=lambda a: (kind(a, lo, hi) * 0).value == bounds.clamp(0),
        arity=1,
    ))

    return contract


def division_contract(kind: type, bounds: Bounds) -> Contract:
    lo, hi = bounds.lo, bounds.hi
    contract = _binary_contract(kind, bounds, "div")

    contract.add(Property(
        name="identity",
        description="a / 1 == a",
        predicate=lambda a: (kind(a, lo, hi) / 1).value == a,
        arity=1,
    ))

    def by_zero(a):
        result = (kind(a, lo, hi) / 0).value
        if a > 0:
            return result == hi
        if a < 0:
            return result == lo
        return result == a

    contract.add(Property(
        name="zero_divisor",
        description="a / 0 saturates toward the sign of a; 0 / 0 stays 0",
        predicate=by_zero,
        arity=1,
    ))

    return contract


def modulo_contract(kind: type, bounds: Bounds) -> Contract:
    lo, hi = bounds.lo, bounds.hi
    contract = _binary_contract(kind, bounds, "mod")

    contract.add(Property(
        name="zero_divisor",
        description="a % 0 == 0, clamped into bounds",
        predicate=lambda a: (kind(a, lo, hi) % 0).value == bounds.clamp(0),
        arity=1,
    ))

    return contract


def negation_contract(kind: type, bounds: Bounds) -> Contract:
    lo, hi = bounds.lo, bounds.hi
    representable = kind.representable

    def expected(a):
        v = -a
        return representable.clamp(v) if representable is not None else v

    def negated(a):
        result = -kind(a, lo, hi)
        v = expected(a)
        return (
            result.value == v
            and result.lo == min(lo, v)
            and result.hi == max(hi, v)
        )

    contract = Contract(name="neg")
    contract.add(Property(
        name="stretch",
        description="-x negates the value and stretches the bounds to fit it",
        predicate=negated,
        arity=1,
    ))

    def involution(a):
        if expected(a) != -a:
            return True
        return (-(-kind(a, lo, hi))).value == a

    contract.add(Property(
        name="involution",
        description="-(-x) == x when -x is representable",
        predicate=involution,
        arity=1,
    ))

    return contract


def contracts_for(kind: type, bounds: Bounds) -> list[Contract]:
    """Every contract that applies to the domain of ``kind``."""
    contracts = [
        addition_contract(kind, bounds),
        subtraction_contract(kind, bounds),
        multiplication_contract(kind, bounds),
        division_contract(kind, bounds),
    ]
    if kind.domain.integral:
        contracts.append(modulo_contract(kind, bounds))
    if kind.domain.signed:
        contracts.append(negation_contract(kind, bounds))
    return contracts
