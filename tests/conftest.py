"""Shared fixtures for clamped-number tests."""

from __future__ import annotations

import os
import sys

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest

from bounds import NIBBLE, TINY
from settings import VerificationSettings


@pytest.fixture
def fast_settings() -> VerificationSettings:
    """Deterministic settings with a small sample budget."""
    return VerificationSettings(
        exhaustive_threshold=16,
        sample_count=300,
        seed=1234,
        log_level="DEBUG",
    )


@pytest.fixture
def signed_bounds():
    return TINY


@pytest.fixture
def natural_bounds():
    return NIBBLE
