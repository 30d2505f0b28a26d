"""Shared helpers for piecewise-function arithmetic operators."""

from __future__ import annotations

from decimal import Decimal

import numpy as np


def _is_scalar(value) -> bool:
    """Return True if *value* is a numeric scalar usable as a multiplier.

    Accepts int, float, Decimal and numpy integer / floating scalars.
    Booleans are rejected even though they are ints.
    """
    if isinstance(value, (bool, np.bool_)):
        return False
    return isinstance(value, (int, float, Decimal, np.integer, np.floating))


def _check_operand(a, b) -> None:
    """Validate that *b* can be combined with the piecewise function *a*.

    The operand must be the same type as the receiver. Unlike grid-based
    interpolants, the two functions may be sampled on different abscissas
    and may cover different domains.
    """
    if type(a) is not type(b):
        raise TypeError(
            f"Cannot combine {type(a).__name__} with {type(b).__name__}; "
            f"operands must be the same type."
        )
