"""Decimal context and value normalization shared by all operations.

All arithmetic runs in :data:`CONTEXT`, which mirrors IEEE 754 decimal128
(34 significant digits, round-half-even). Results are reproducible across
long chains of operations, which native binary floats are not.
"""

from __future__ import annotations

import decimal
from decimal import Decimal

import numpy as np

CONTEXT = decimal.Context(
    prec=34,
    rounding=decimal.ROUND_HALF_EVEN,
    Emin=-6143,
    Emax=6144,
    traps=[decimal.InvalidOperation, decimal.DivisionByZero, decimal.Overflow],
)

ZERO = Decimal(0)
ONE = Decimal(1)


def to_decimal(value) -> Decimal:
    """Coerce *value* to a finite :class:`~decimal.Decimal`.

    Floats are converted through their shortest ``repr`` so that ``0.1``
    becomes ``Decimal("0.1")`` rather than its binary expansion.

    Raises
    ------
    TypeError
        If *value* is not a Decimal, int, float, str or numpy number.
    ValueError
        If *value* cannot be parsed or is NaN / infinite.
    """
    if isinstance(value, (bool, np.bool_)):
        raise TypeError("Expected a number, got bool")
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, (int, np.integer)):
        result = Decimal(int(value))
    elif isinstance(value, (float, np.floating)):
        result = Decimal(repr(float(value)))
    elif isinstance(value, str):
        try:
            result = Decimal(value.strip())
        except decimal.InvalidOperation:
            raise ValueError(f"Cannot parse {value!r} as a decimal number") from None
    else:
        raise TypeError(f"Expected a number, got {type(value).__name__}")

    if not result.is_finite():
        raise ValueError(f"Value must be finite, got {value!r}")
    return result


def exact_context(value: Decimal) -> decimal.Context:
    """Return a copy of :data:`CONTEXT` wide enough to hold *value* unrounded."""
    context = CONTEXT.copy()
    context.prec = max(CONTEXT.prec, len(value.as_tuple().digits))
    return context


def canonicalize(value: Decimal) -> Decimal:
    """Strip trailing zeros so that numerically equal values print identically.

    Every zero, negative zero included, becomes ``Decimal("0")``. No
    significant digit is dropped: a value longer than :data:`CONTEXT`
    precision keeps all of its digits.
    """
    if value.is_zero():
        return ZERO
    return value.normalize(exact_context(value))


def sign(value: Decimal) -> int:
    """Return -1, 0 or 1 according to the sign of *value*."""
    if value.is_zero():
        return 0
    return -1 if value.is_signed() else 1


# Smallest positive binary64 magnitude (2**-1074), rounded into CONTEXT.
MIN_MAGNITUDE = Decimal(5e-324).normalize(CONTEXT)
