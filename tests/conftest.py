"""Shared test fixtures for pypiecewise tests."""

from decimal import Decimal

import pytest

from pypiecewise import PiecewiseFunction


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def D(value) -> Decimal:
    """Shorthand for building exact decimals in assertions."""
    return Decimal(str(value))


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def ramp():
    """f(x) = 10 x sampled at 0 and 10 only."""
    return PiecewiseFunction({0: 0, 10: 100})


@pytest.fixture
def field():
    """A field profile on an irregular grid over [0, 4]."""
    return PiecewiseFunction({
        "0": "2",
        "0.5": "2.5",
        "1": "4",
        "2.5": "-1",
        "4": "0.5",
    })


@pytest.fixture
def density():
    """A coarser profile over [1, 6], overlapping ``field`` on [1, 4]."""
    return PiecewiseFunction({1: 5, 3: 1, 6: 4})


@pytest.fixture
def with_zeros():
    """Profile with zero samples at the edges and in the interior."""
    return PiecewiseFunction({0: 0, 1: 5, 2: 0, 3: -2, 4: 0})
