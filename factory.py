"""
The clamped-type factory.

The factory builds the named width/category aliases and *verifies* clamped
types against their contracts before releasing them.

Flow:
  1. Caller asks for a clamped type, optionally with a verification range.
  2. Factory builds every contract that applies to the type's domain.
  3. Factory checks each property over the range: exhaustively when the
     range is small, on edge values plus a seeded random sample otherwise.
  4. If verification passes  -> return the type.
     If verification fails   -> raise, never hand out a broken type.

Run directly to verify every alias::

    python factory.py
"""

from __future__ import annotations

import itertools
import logging
import random
import sys
from dataclasses import dataclass, field
from typing import Any

from bounds import NIBBLE, TINY, UNIT, Bounds
from clamped import ClampedNumber
from contract import Contract, Property, contracts_for
from numeric import Domain, check_value
from settings import VerificationSettings, get_settings

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Type construction
# ---------------------------------------------------------------------------

def define_clamped(
    name: str,
    base: type[ClampedNumber],
    representable: Bounds | None = None,
    default: Bounds | None = None,
    module: str | None = None,
    doc: str | None = None,
) -> type[ClampedNumber]:
    """
    Build a named alias of a domain class.

    The alias carries no logic of its own: it only fixes the representable
    range of the primitive it stands in for and the bounds used when the
    caller gives none (the representable range unless ``default`` says
    otherwise).
    """
    if representable is not None:
        check_value(base.domain, representable.lo, "lo")
        check_value(base.domain, representable.hi, "hi")
    if default is None:
        default = representable if representable is not None else base.default_bounds

    namespace = {
        "__module__": module or base.__module__,
        "__doc__": doc or f"{base.__name__} limited to {representable}.",
        "representable": representable,
        "default_bounds": default,
    }
    return type(name, (base,), namespace)


# ---------------------------------------------------------------------------
# Verification results
# ---------------------------------------------------------------------------

@dataclass
class VerificationResult:
    """Outcome of verifying one property."""

    property_name: str
    passed: bool
    counterexample: tuple | None = None
    error: str | None = None
    tests_run: int = 0

    def __repr__(self) -> str:
        status = "PASS" if self.passed else "FAIL"
        ce = f"  counterexample={self.counterexample}" if self.counterexample else ""
        err = f"  error={self.error}" if self.error else ""
        return f"[{status}] {self.property_name} ({self.tests_run} tests){ce}{err}"


@dataclass
class VerificationReport:
    """Aggregate result of verifying one contract of one type."""

    type_name: str
    contract_name: str
    bounds: Bounds
    results: list[VerificationResult] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return all(r.passed for r in self.results)

    def summary(self) -> str:
        lines = [
            f"--- {self.type_name}.{self.contract_name} "
            f"[{self.bounds.lo}, {self.bounds.hi}] ---"
        ]
        for r in self.results:
            lines.append(f"  {r}")
        status = "ALL PASSED" if self.passed else "FAILED"
        lines.append(f"  => {status}")
        return "\n".join(lines)


class VerificationError(Exception):
    """Raised when a clamped type fails one of its contracts."""

    def __init__(self, report: VerificationReport):
        self.report = report
        super().__init__(f"Verification failed:\n{report.summary()}")


# ---------------------------------------------------------------------------
# The factory
# ---------------------------------------------------------------------------

def verification_bounds(
    kind: type[ClampedNumber], bounds: Bounds | None = None
) -> Bounds:
    """The range a type is verified over, restricted to what it can hold."""
    if bounds is None:
        bounds = {
            Domain.NATURAL: NIBBLE,
            Domain.INTEGER: TINY,
            Domain.DECIMAL: UNIT,
        }[kind.domain]
    if kind.representable is not None:
        bounds = bounds.within(kind.representable)
    return bounds


class ClampedFactory:
    """
    Hands out clamped types that are proven correct over a range.

    For integral ranges no wider than ``exhaustive_threshold`` every input
    combination is checked.  Wider ranges and decimal ranges are sampled.
    """

    @classmethod
    def create(
        cls,
        kind: type[ClampedNumber],
        bounds: Bounds | None = None,
        settings: VerificationSettings | None = None,
    ) -> type[ClampedNumber]:
        """Verify ``kind`` and return it, or raise VerificationError."""
        for report in cls.verify(kind, bounds, settings):
            if not report.passed:
                raise VerificationError(report)
        return kind

    @classmethod
    def verify(
        cls,
        kind: type[ClampedNumber],
        bounds: Bounds | None = None,
        settings: VerificationSettings | None = None,
    ) -> list[VerificationReport]:
        """Verify every contract of ``kind``; stop at the first failure."""
        settings = settings or get_settings()
        bounds = verification_bounds(kind, bounds)
        reports = []
        for contract in contracts_for(kind, bounds):
            report = cls._verify_contract(contract, kind, bounds, settings)
            reports.append(report)
            if not report.passed:
                logger.warning("%s", report.summary())
                break
            logger.info(
                "%s.%s verified over [%s, %s]",
                kind.__name__, contract.name, bounds.lo, bounds.hi,
            )
        return reports

    # -- internal ---------------------------------------------------------

    @classmethod
    def _verify_contract(
        cls,
        contract: Contract,
        kind: type[ClampedNumber],
        bounds: Bounds,
        settings: VerificationSettings,
    ) -> VerificationReport:
        report = VerificationReport(
            type_name=kind.__name__,
            contract_name=contract.name,
            bounds=bounds,
        )
        rng = random.Random(settings.seed)
        for prop in contract:
            report.results.append(
                cls._verify_property(prop, kind.domain, bounds, settings, rng)
            )
        return report

    @classmethod
    def _verify_property(
        cls,
        prop: Property,
        domain: Domain,
        bounds: Bounds,
        settings: VerificationSettings,
        rng: random.Random,
    ) -> VerificationResult:
        exhaustive = (
            domain.integral and bounds.width <= settings.exhaustive_threshold
        )
        if exhaustive:
            inputs = itertools.product(bounds.all_values(), repeat=prop.arity)
        else:
            inputs = _generate_samples(
                domain, bounds, prop.arity, settings.sample_count, rng
            )

        tests_run = 0
        for combo in inputs:
            tests_run += 1
            try:
                held = prop.check(*combo)
            except Exception as exc:
                # Every operation is total; any exception is a violation.
                return VerificationResult(
                    property_name=prop.name,
                    passed=False,
                    counterexample=combo,
                    error=f"{type(exc).__name__}: {exc}",
                    tests_run=tests_run,
                )
            if not held:
                return VerificationResult(
                    property_name=prop.name,
                    passed=False,
                    counterexample=combo,
                    tests_run=tests_run,
                )

        return VerificationResult(
            property_name=prop.name,
            passed=True,
            tests_run=tests_run,
        )


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _generate_samples(
    domain: Domain,
    bounds: Bounds,
    arity: int,
    count: int,
    rng: random.Random,
) -> list[tuple[Any, ...]]:
    """Edge-case combinations first, then random fill up to ``count``."""
    if domain.integral:
        edge_values = [bounds.lo, bounds.lo + 1, -1, 0, 1, bounds.hi - 1, bounds.hi]
        draw = lambda: rng.randint(bounds.lo, bounds.hi)
    else:
        edge_values = [bounds.lo, -1.0, -0.5, -0.0, 0.0, 0.5, 1.0, bounds.hi]
        draw = lambda: rng.uniform(bounds.lo, bounds.hi)
    edge_values = [v for v in dict.fromkeys(edge_values) if bounds.contains(v)]

    samples: list[tuple[Any, ...]] = list(
        itertools.product(edge_values, repeat=arity)
    )
    while len(samples) < count:
        samples.append(tuple(draw() for _ in range(arity)))
    return samples


def main() -> None:
    """Verify every alias on a small range and print the reports."""
    from aliases import ALIASES

    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    all_passed = True
    for kind in ALIASES:
        reports = ClampedFactory.verify(kind, settings=settings)
        for report in reports:
            print(report.summary())
        if not all(r.passed for r in reports):
            all_passed = False

    print("\n" + "=" * 40)
    if all_passed:
        print("ALL TYPES VERIFIED")
    else:
        print("SOME TYPES FAILED VERIFICATION")
        sys.exit(1)


if __name__ == "__main__":
    main()
