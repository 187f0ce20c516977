"""Shared fixtures and hypothesis strategies."""

from __future__ import annotations

import os
import sys

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest
from hypothesis import strategies as st

from backends import NativeBackend
from calculator import Calculator
from selector import BackendSelector, default_selector
from settings import EngineSettings

# Canonical strings up to ~80 digits, both signs.
BIG = 10**80
ints = st.integers(min_value=-BIG, max_value=BIG)
canonical = ints.map(str)
nonneg = st.integers(min_value=0, max_value=BIG)
nonzero = ints.filter(lambda v: v != 0)


@pytest.fixture(scope="session")
def native() -> NativeBackend:
    return NativeBackend()


@pytest.fixture(scope="session")
def calc(native) -> Calculator:
    return Calculator(native)


@pytest.fixture(scope="session")
def gmp():
    pytest.importorskip("gmpy2")
    from backends import GmpBackend
    return GmpBackend()


@pytest.fixture
def selector() -> BackendSelector:
    """A private selector that never reads the environment."""
    return BackendSelector(EngineSettings(backend="native", verify_samples=20))


@pytest.fixture
def reset_default_selector():
    """Restore the process-wide handle after a test touches it."""
    sel = default_selector()
    saved = sel._backend
    yield sel
    sel.set(saved)
