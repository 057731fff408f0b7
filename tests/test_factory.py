"""
Factory and contract tests.

These test the factory's end-to-end verification:
  - Correct clamped types pass verification and are handed out.
  - A broken engine is rejected with a counterexample.
  - Small integral ranges are checked exhaustively, others sampled.
"""

import pytest

import aliases
import factory
from aliases import ALIASES, Float, Int8, UInt8
from bounds import INT8, NIBBLE, TINY, UNIT, Bounds
from clamped import ClampedDecimal, ClampedInteger, ClampedNatural
from contract import Property, addition_contract, contracts_for, reference
from engine import IntegerEngine, Outcome, Verdict
from factory import (
    ClampedFactory,
    VerificationError,
    VerificationReport,
    VerificationResult,
    verification_bounds,
)
from numeric import Domain


class WrappingEngine(IntegerEngine):
    """Wraps around like a C unsigned type instead of saturating."""

    def add(self, current, other, lo, hi):
        raw = current + other
        return Outcome(Verdict.UNCHANGED, lo + (raw - lo) % (hi - lo + 1))


class WrappingInteger(ClampedInteger):
    engine = WrappingEngine()


class FaultyEngine(IntegerEngine):
    """Lets division by zero escape."""

    def div(self, current, other, lo, hi):
        return Outcome(Verdict.UNCHANGED, current // other)


class FaultyInteger(ClampedInteger):
    engine = FaultyEngine()


# ---------------------------------------------------------------------------
# Factory hands out verified types
# ---------------------------------------------------------------------------

class TestFactoryProducesVerified:
    def test_integer(self, fast_settings):
        assert ClampedFactory.create(ClampedInteger, settings=fast_settings) is ClampedInteger

    def test_natural(self, fast_settings):
        assert ClampedFactory.create(ClampedNatural, settings=fast_settings) is ClampedNatural

    def test_decimal(self, fast_settings):
        assert ClampedFactory.create(ClampedDecimal, settings=fast_settings) is ClampedDecimal

    @pytest.mark.parametrize("kind", ALIASES, ids=lambda k: k.__name__)
    def test_aliases(self, kind, fast_settings):
        assert ClampedFactory.create(kind, settings=fast_settings) is kind

    def test_custom_bounds(self, fast_settings):
        bounds = Bounds(lo=25, hi=40)
        assert ClampedFactory.create(ClampedInteger, bounds, fast_settings)

    def test_all_negative_bounds(self, fast_settings):
        assert ClampedFactory.create(ClampedInteger, Bounds(-20, -5), fast_settings)

    def test_single_value_bounds(self, fast_settings):
        assert ClampedFactory.create(ClampedInteger, Bounds(0, 0), fast_settings)

    def test_int8_at_its_extremes(self, fast_settings):
        bounds = Bounds(INT8.lo, INT8.lo + 10)
        assert ClampedFactory.create(Int8, bounds, fast_settings) is Int8


# ---------------------------------------------------------------------------
# Factory rejects broken types
# ---------------------------------------------------------------------------

class TestFactoryRejectsBroken:
    def test_wrapping_engine_rejected(self, fast_settings):
        with pytest.raises(VerificationError) as exc_info:
            ClampedFactory.create(WrappingInteger, settings=fast_settings)

        report = exc_info.value.report
        assert report.contract_name == "add"
        assert not report.passed
        failed = [r for r in report.results if not r.passed]
        assert "saturation" in [r.property_name for r in failed]
        a, b = next(r for r in failed if r.property_name == "saturation").counterexample
        assert a + b > TINY.hi or a + b < TINY.lo

    def test_exception_recorded_as_counterexample(self, fast_settings):
        with pytest.raises(VerificationError) as exc_info:
            ClampedFactory.create(FaultyInteger, settings=fast_settings)

        report = exc_info.value.report
        assert report.contract_name == "div"
        errors = [r.error for r in report.results if r.error]
        assert any("ZeroDivisionError" in e for e in errors)

    def test_error_message_contains_summary(self, fast_settings):
        with pytest.raises(VerificationError, match="FAILED"):
            ClampedFactory.create(WrappingInteger, settings=fast_settings)

    def test_verify_stops_at_first_failure(self, fast_settings):
        reports = ClampedFactory.verify(WrappingInteger, settings=fast_settings)
        assert len(reports) == 1
        assert not reports[0].passed

    def test_failure_logged(self, fast_settings, caplog):
        ClampedFactory.verify(WrappingInteger, settings=fast_settings)
        assert "FAILED" in caplog.text


# ---------------------------------------------------------------------------
# Exhaustive vs sampled
# ---------------------------------------------------------------------------

class TestVerificationStrategy:
    def test_small_range_exhaustive(self, fast_settings):
        reports = ClampedFactory.verify(ClampedInteger, TINY, fast_settings)
        add = reports[0]
        closure = next(r for r in add.results if r.property_name == "closure")
        identity = next(r for r in add.results if r.property_name == "identity")
        assert closure.tests_run == TINY.width ** 2
        assert identity.tests_run == TINY.width

    def test_wide_range_sampled(self, fast_settings):
        reports = ClampedFactory.verify(ClampedInteger, Bounds(-100, 100), fast_settings)
        for report in reports:
            assert report.passed
            for result in report.results:
                assert result.tests_run == fast_settings.sample_count

    def test_decimal_always_sampled(self, fast_settings):
        reports = ClampedFactory.verify(ClampedDecimal, settings=fast_settings)
        assert [r.contract_name for r in reports] == ["add", "sub", "mul", "div", "neg"]
        for report in reports:
            for result in report.results:
                assert result.tests_run == fast_settings.sample_count

    def test_contracts_follow_domain(self):
        names = lambda kind, b: [c.name for c in contracts_for(kind, b)]
        assert names(ClampedNatural, NIBBLE) == ["add", "sub", "mul", "div", "mod"]
        assert names(ClampedInteger, TINY) == ["add", "sub", "mul", "div", "mod", "neg"]
        assert names(ClampedDecimal, UNIT) == ["add", "sub", "mul", "div", "neg"]


class TestVerificationBounds:
    def test_defaults_per_domain(self):
        assert verification_bounds(ClampedInteger) == TINY
        assert verification_bounds(UInt8) == NIBBLE
        assert verification_bounds(Float) == UNIT

    def test_restricted_to_representable(self):
        assert verification_bounds(Int8, Bounds(-1000, 1000)) == INT8
        assert verification_bounds(UInt8, Bounds(-5, 5)) == Bounds(0, 5)


# ---------------------------------------------------------------------------
# Contracts and reports
# ---------------------------------------------------------------------------

class TestContract:
    def test_property_check(self):
        prop = Property("positive", "x > 0", lambda x: x > 0, arity=1)
        assert prop.check(1)
        assert not prop.check(-1)

    def test_addition_contract_properties(self):
        contract = addition_contract(ClampedInteger, TINY)
        assert [p.name for p in contract] == [
            "closure", "saturation", "bounds_kept", "left_untouched",
            "identity", "idempotent_saturation",
        ]
        assert len(contract) == 6

    def test_reference_model(self):
        bounds = Bounds(-10, 10)
        assert reference(Domain.INTEGER, "add", 5, 10, bounds) == 10
        assert reference(Domain.INTEGER, "div", -7, 2, bounds) == -3
        assert reference(Domain.INTEGER, "div", 7, 0, bounds) == 10
        assert reference(Domain.INTEGER, "mod", 7, 0, bounds) == 0
        assert reference(Domain.DECIMAL, "div", 1.0, 4.0, bounds) == 0.25
        with pytest.raises(ValueError, match="unknown operation"):
            reference(Domain.INTEGER, "pow", 2, 3, bounds)


class TestReport:
    def test_summary(self):
        report = VerificationReport(
            type_name="Int8", contract_name="add", bounds=TINY,
            results=[
                VerificationResult("closure", True, tests_run=256),
                VerificationResult("saturation", False, counterexample=(7, 7), tests_run=3),
            ],
        )
        summary = report.summary()
        assert "Int8.add [-8, 7]" in summary
        assert "[PASS] closure (256 tests)" in summary
        assert "[FAIL] saturation (3 tests)  counterexample=(7, 7)" in summary
        assert summary.endswith("=> FAILED")
        assert not report.passed


# ---------------------------------------------------------------------------
# Command-line run
# ---------------------------------------------------------------------------

class TestMain:
    def test_all_aliases_verified(self, monkeypatch, capsys, fast_settings):
        monkeypatch.setattr(factory, "get_settings", lambda: fast_settings)
        factory.main()
        out = capsys.readouterr().out
        assert "Int8.add" in out
        assert "Double.neg" in out
        assert "ALL TYPES VERIFIED" in out

    def test_failure_exits_nonzero(self, monkeypatch, capsys, fast_settings):
        monkeypatch.setattr(factory, "get_settings", lambda: fast_settings)
        monkeypatch.setattr(aliases, "ALIASES", (Int8, WrappingInteger))
        with pytest.raises(SystemExit) as exc_info:
            factory.main()
        assert exc_info.value.code == 1
        assert "SOME TYPES FAILED VERIFICATION" in capsys.readouterr().out
