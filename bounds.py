"""
Bounds layer.

A Bounds is the inclusive range ``[lo, hi]`` a clamped number may never
leave.  Besides containment and clamping it implements *bound-stretching*:
the rule by which a requested range that would exclude the current value
is repaired instead of rejected.

The presets at the bottom name the representable ranges of the primitive
types the width aliases stand in for.
"""

from __future__ import annotations

import struct
import sys
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Bounds:
    """An inclusive interval ``[lo, hi]`` over any ordered numeric type."""

    lo: Any
    hi: Any

    def __post_init__(self):
        if self.lo > self.hi:
            raise ValueError(f"lo ({self.lo}) must be <= hi ({self.hi})")

    @property
    def width(self) -> int:
        """Total number of representable integers."""
        return self.hi - self.lo + 1

    def contains(self, value: Any) -> bool:
        return self.lo <= value <= self.hi

    def clamp(self, value: Any) -> Any:
        if value < self.lo:
            return self.lo
        if value > self.hi:
            return self.hi
        return value

    def all_values(self) -> range:
        return range(self.lo, self.hi + 1)

    def within(self, outer: Bounds) -> Bounds:
        """This range with both ends clamped into ``outer``."""
        return Bounds(outer.clamp(self.lo), outer.clamp(self.hi))


def stretch(value: Any, lo: Any, hi: Any) -> Bounds:
    """Repair a requested ``(lo, hi)`` so that it contains ``value``.

    A minimum above the value is lowered to the value and a maximum below
    it is raised to the value.  ``stretch(0, 1, -1)`` is ``Bounds(0, 0)``.
    """
    return Bounds(lo if lo <= value else value, hi if hi >= value else value)


# ---------------------------------------------------------------------------
# Representable ranges
# ---------------------------------------------------------------------------

def signed_range(bits: int) -> Bounds:
    return Bounds(lo=-(2 ** (bits - 1)), hi=2 ** (bits - 1) - 1)


def unsigned_range(bits: int) -> Bounds:
    return Bounds(lo=0, hi=2 ** bits - 1)


_FLOAT32_MAX = struct.unpack("<f", struct.pack("<I", 0x7F7FFFFF))[0]

INT8 = signed_range(8)
INT16 = signed_range(16)
INT32 = signed_range(32)
INT64 = signed_range(64)
INTMAX = INT64
UINT8 = unsigned_range(8)
UINT16 = unsigned_range(16)
UINT32 = unsigned_range(32)
UINT64 = unsigned_range(64)
UINTMAX = UINT64
FLOAT32 = Bounds(lo=-_FLOAT32_MAX, hi=_FLOAT32_MAX)
FLOAT64 = Bounds(lo=-sys.float_info.max, hi=sys.float_info.max)

# Default range of a decimal: a "normalized" real number
UNIT = Bounds(lo=-1.0, hi=1.0)
PERCENT = Bounds(lo=0, hi=100)

# Small ranges useful for exhaustive verification
TINY = Bounds(lo=-8, hi=7)
NIBBLE = Bounds(lo=0, hi=15)
