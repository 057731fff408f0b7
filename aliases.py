"""
Width and category aliases.

Each fixed-width alias is the non-wrapping counterpart of a primitive
integer: constructed without bounds it spans the primitive's whole range,
and values or bounds outside that range saturate onto it::

    >>> counter = UInt8(250)
    >>> counter += 10
    >>> counter.value
    255

``Float`` and ``Double`` keep the decimal default of ``0.0`` in ``[-1, 1]``;
``Float.full_range()`` spans the whole representable range.
"""

from __future__ import annotations

from bounds import (
    FLOAT32,
    FLOAT64,
    INT8,
    INT16,
    INT32,
    INT64,
    INTMAX,
    UINT8,
    UINT16,
    UINT32,
    UINT64,
    UINTMAX,
    UNIT,
)
from clamped import ClampedDecimal, ClampedInteger, ClampedNatural
from factory import define_clamped

Int8 = define_clamped("Int8", ClampedInteger, INT8, module=__name__)
Int16 = define_clamped("Int16", ClampedInteger, INT16, module=__name__)
Int32 = define_clamped("Int32", ClampedInteger, INT32, module=__name__)
Int64 = define_clamped("Int64", ClampedInteger, INT64, module=__name__)
IntMax = define_clamped("IntMax", ClampedInteger, INTMAX, module=__name__)

UInt8 = define_clamped("UInt8", ClampedNatural, UINT8, module=__name__)
UInt16 = define_clamped("UInt16", ClampedNatural, UINT16, module=__name__)
UInt32 = define_clamped("UInt32", ClampedNatural, UINT32, module=__name__)
UInt64 = define_clamped("UInt64", ClampedNatural, UINT64, module=__name__)
UIntMax = define_clamped("UIntMax", ClampedNatural, UINTMAX, module=__name__)

Float = define_clamped("Float", ClampedDecimal, FLOAT32, default=UNIT, module=__name__)
Double = define_clamped("Double", ClampedDecimal, FLOAT64, default=UNIT, module=__name__)

# Unbounded categories: the caller always supplies the range
Natural = ClampedNatural
Integer = ClampedInteger

ALIASES = (
    Int8, Int16, Int32, Int64, IntMax,
    UInt8, UInt16, UInt32, UInt64, UIntMax,
    Float, Double,
)
