"""Continuous functions of one variable defined by a finite set of samples.

A :class:`PiecewiseFunction` stores ``(abscissa, value)`` samples and
answers point queries between samples by linear interpolation between the
two neighbouring abscissas. Functions sampled on different grids can be
added, subtracted, multiplied and divided: the right operand is
interpolated onto the grid of the left operand.

All arithmetic uses exact :class:`~decimal.Decimal` values under the fixed
decimal128 context of :mod:`pypiecewise._numeric`, so chains of operations
in long simulation pipelines give the same digits on every run.
"""

from __future__ import annotations

from bisect import bisect_left
from collections.abc import Iterable, Mapping
from decimal import Decimal, localcontext
from typing import Dict, Iterator, Tuple

import numpy as np

from pypiecewise._algebra import _check_operand, _is_scalar
from pypiecewise._numeric import (
    CONTEXT,
    MIN_MAGNITUDE,
    ONE,
    canonicalize,
    sign,
    to_decimal,
)
from pypiecewise.exceptions import DivisionError, DomainError


def _collect_samples(pairs: Iterable) -> Tuple[Tuple[Decimal, ...], Tuple[Decimal, ...]]:
    """Coerce, canonicalize and sort ``(abscissa, value)`` pairs.

    The first pair seen for an abscissa wins; later pairs with the same
    (numerically equal) abscissa are dropped.
    """
    samples: Dict[Decimal, Decimal] = {}
    for abscissa, value in pairs:
        key = canonicalize(to_decimal(abscissa))
        if key in samples:
            continue
        samples[key] = canonicalize(to_decimal(value))
    abscissas = tuple(sorted(samples))
    return abscissas, tuple(samples[x] for x in abscissas)


class PiecewiseFunction:
    """Sampled function of one variable with linear interpolation.

    The samples are held in a single sorted container: a tuple of strictly
    ascending abscissas and a parallel tuple of values. Instances are
    immutable; every operation returns a new function.

    Parameters
    ----------
    samples : PiecewiseFunction or mapping, optional
        ``None`` (default) creates an empty function. Another
        ``PiecewiseFunction`` is copied. A mapping of abscissa to value is
        coerced to :class:`~decimal.Decimal` and canonicalized; values are
        expected already in SI units.

    Raises
    ------
    TypeError
        If *samples* is of an unsupported type, or a key or value is not
        a number.
    ValueError
        If a key or value is NaN, infinite or an unparseable string.

    Examples
    --------
    >>> f = PiecewiseFunction({0: 0, 10: 100})
    >>> f.value_at(5)
    Decimal('5E+1')
    >>> str(f)
    '0\\t=> 0\\n1E+1\\t=> 1E+2\\n'
    """

    def __init__(self, samples=None):
        if samples is None:
            abscissas, values = (), ()
        elif isinstance(samples, PiecewiseFunction):
            # Tuples of Decimals are immutable, so sharing them is a copy.
            abscissas, values = samples._abscissas, samples._values
        elif isinstance(samples, Mapping):
            abscissas, values = _collect_samples(samples.items())
        else:
            raise TypeError(
                f"Cannot build a PiecewiseFunction from {type(samples).__name__}; "
                f"expected a mapping or another PiecewiseFunction"
            )
        self._abscissas: Tuple[Decimal, ...] = abscissas
        self._values: Tuple[Decimal, ...] = values

    # ------------------------------------------------------------------
    # Alternative constructors
    # ------------------------------------------------------------------

    @classmethod
    def from_pairs(cls, pairs: Iterable) -> "PiecewiseFunction":
        """Create a function from an iterable of ``(abscissa, value)`` pairs.

        When an abscissa occurs more than once, the first occurrence is kept
        and the later ones are silently discarded.

        Parameters
        ----------
        pairs : iterable of (number, number)
            Samples, in any order.

        Returns
        -------
        PiecewiseFunction
        """
        abscissas, values = _collect_samples(pairs)
        return cls._from_sorted(abscissas, values)

    @classmethod
    def from_arrays(cls, abscissas, values) -> "PiecewiseFunction":
        """Create a function from two 1-D arrays of equal length.

        Float entries go through their shortest decimal representation, so
        ``0.1`` is stored as ``Decimal("0.1")``. Duplicate abscissas keep
        the first occurrence.

        Parameters
        ----------
        abscissas : array_like
            Sample positions.
        values : array_like
            Function values at *abscissas*.

        Returns
        -------
        PiecewiseFunction

        Raises
        ------
        ValueError
            If the inputs are not 1-D, differ in length, or contain NaN or Inf.
        """
        abscissas = np.asarray(abscissas)
        values = np.asarray(values)
        if abscissas.ndim != 1 or values.ndim != 1:
            raise ValueError(
                f"abscissas and values must be 1-D, got shapes "
                f"{abscissas.shape} and {values.shape}"
            )
        if abscissas.shape != values.shape:
            raise ValueError(
                f"abscissas.shape={abscissas.shape} does not match "
                f"values.shape={values.shape}"
            )
        return cls.from_pairs(zip(abscissas.tolist(), values.tolist()))

    @classmethod
    def _from_sorted(cls, abscissas, values):
        """Create an instance from already canonical, sorted, unique samples.

        Internal factory for arithmetic operators; no validation is done.
        """
        obj = object.__new__(cls)
        obj._abscissas = tuple(abscissas)
        obj._values = tuple(values)
        return obj

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def abscissas(self) -> Tuple[Decimal, ...]:
        """Sample positions in ascending order."""
        return self._abscissas

    @property
    def values(self) -> Tuple[Decimal, ...]:
        """Sample values, in the order of :attr:`abscissas`."""
        return self._values

    @property
    def samples(self) -> Dict[Decimal, Decimal]:
        """A new ``{abscissa: value}`` dict; changing it does not affect the function."""
        return dict(zip(self._abscissas, self._values))

    @property
    def domain(self) -> Tuple[Decimal, Decimal]:
        """Closed interval ``(min, max)`` of the abscissas.

        Raises
        ------
        DomainError
            If the function has no samples.
        """
        if not self._abscissas:
            raise DomainError(None)
        return self._abscissas[0], self._abscissas[-1]

    def to_arrays(self) -> Tuple[np.ndarray, np.ndarray]:
        """Return ``(abscissas, values)`` as new float64 arrays.

        Useful for plotting or handing results to numpy code; precision
        beyond binary64 is lost.
        """
        return (
            np.array([float(x) for x in self._abscissas], dtype=float),
            np.array([float(v) for v in self._values], dtype=float),
        )

    def __len__(self) -> int:
        return len(self._abscissas)

    def __iter__(self) -> Iterator[Tuple[Decimal, Decimal]]:
        return iter(zip(self._abscissas, self._values))

    # ------------------------------------------------------------------
    # Evaluation
    # ------------------------------------------------------------------

    def contains(self, position) -> bool:
        """Return True if *position* lies inside the closed domain.

        Also bound to ``in``, so ``x in f`` tests a position, not an
        ``(abscissa, value)`` pair as yielded by iteration; passing a pair
        raises :class:`TypeError`.
        """
        position = to_decimal(position)
        if not self._abscissas:
            return False
        return self._abscissas[0] <= position <= self._abscissas[-1]

    __contains__ = contains

    def value_at(self, position) -> Decimal:
        """Evaluate the function at *position*.

        A position equal to a stored abscissa returns the stored value
        unchanged. Anything else is linearly interpolated between the
        nearest abscissas below (``lo``) and above (``hi``)::

            slope = (v(hi) - v(lo)) / (hi - lo)
            value = v(lo) + slope * (position - lo)

        Parameters
        ----------
        position : number
            Query point (Decimal, int, float, str or numpy scalar).

        Returns
        -------
        Decimal
            Function value at *position*.

        Raises
        ------
        DomainError
            If *position* is outside ``[min(abscissa), max(abscissa)]`` or
            the function is empty.
        """
        position = to_decimal(position)
        abscissas = self._abscissas
        if not abscissas:
            raise DomainError(position)
        if position < abscissas[0] or position > abscissas[-1]:
            raise DomainError(position, (abscissas[0], abscissas[-1]))

        i = bisect_left(abscissas, position)
        if abscissas[i] == position:
            return self._values[i]

        lo, hi = abscissas[i - 1], abscissas[i]
        v_lo, v_hi = self._values[i - 1], self._values[i]
        with localcontext(CONTEXT):
            slope = (v_hi - v_lo) / (hi - lo)
            return canonicalize(v_lo + slope * (position - lo))

    __call__ = value_at

    def eval_batch(self, positions) -> np.ndarray:
        """Evaluate at many positions and return a float64 array.

        Parameters
        ----------
        positions : array_like
            Query points, any shape.

        Returns
        -------
        ndarray
            Values with the same shape as *positions*.

        Raises
        ------
        DomainError
            If any position is outside the domain.
        """
        positions = np.asarray(positions)
        flat = [float(self.value_at(p)) for p in positions.ravel().tolist()]
        return np.asarray(flat, dtype=float).reshape(positions.shape)

    # ------------------------------------------------------------------
    # Algebra
    # ------------------------------------------------------------------

    def _combine(self, other, operation) -> "PiecewiseFunction":
        """Combine each sample with *other* evaluated at the same abscissa.

        Where *other* is not defined, the sample is kept as is.
        """
        combined = []
        with localcontext(CONTEXT):
            for position, value in zip(self._abscissas, self._values):
                try:
                    operand = other.value_at(position)
                except DomainError:
                    combined.append(value)
                    continue
                combined.append(canonicalize(operation(value, operand)))
        return self._from_sorted(self._abscissas, combined)

    def _scale(self, factor: Decimal) -> "PiecewiseFunction":
        with localcontext(CONTEXT):
            scaled = [canonicalize(value * factor) for value in self._values]
        return self._from_sorted(self._abscissas, scaled)

    def add(self, other: "PiecewiseFunction") -> "PiecewiseFunction":
        """Return ``self + other`` on the abscissas of ``self``.

        *other* is interpolated onto this function's grid. At abscissas
        outside the domain of *other* the value of ``self`` passes through.
        """
        _check_operand(self, other)
        return self._combine(other, lambda a, b: a + b)

    def subtract(self, other: "PiecewiseFunction") -> "PiecewiseFunction":
        """Return ``self - other``, i.e. ``self.add(other.negate())``."""
        _check_operand(self, other)
        return self.add(other.negate())

    def multiply(self, other) -> "PiecewiseFunction":
        """Multiply by another function or by a scalar.

        Parameters
        ----------
        other : PiecewiseFunction or number
            A function is interpolated onto this function's grid, and where
            it is undefined the value of ``self`` passes through. A scalar
            multiplies every sample.

        Returns
        -------
        PiecewiseFunction
        """
        if isinstance(other, PiecewiseFunction):
            _check_operand(self, other)
            return self._combine(other, lambda a, b: a * b)
        return self._scale(to_decimal(other))

    def divide(self, other) -> "PiecewiseFunction":
        """Divide by another function or by a scalar.

        Division by a function is ``self.multiply(other.invert())``: the
        divisor is inverted on its own grid, then interpolated. Division by
        a scalar multiplies every sample by ``1 / other``.

        Raises
        ------
        DivisionError
            If the divisor function has an exact-zero sample, or the scalar
            divisor is zero. Use :meth:`avoid_zeros` on the divisor first.
        """
        if isinstance(other, PiecewiseFunction):
            _check_operand(self, other)
            return self.multiply(other.invert())
        divisor = to_decimal(other)
        if divisor.is_zero():
            raise DivisionError()
        with localcontext(CONTEXT):
            reciprocal = ONE / divisor
        return self._scale(reciprocal)

    def negate(self) -> "PiecewiseFunction":
        """Return ``-self``."""
        with localcontext(CONTEXT):
            negated = [canonicalize(-value) for value in self._values]
        return self._from_sorted(self._abscissas, negated)

    def invert(self) -> "PiecewiseFunction":
        """Return ``1 / self`` sample by sample.

        Raises
        ------
        DivisionError
            If any sample is exactly zero.
        """
        inverted = []
        with localcontext(CONTEXT):
            for position, value in zip(self._abscissas, self._values):
                if value.is_zero():
                    raise DivisionError(position)
                inverted.append(canonicalize(ONE / value))
        return self._from_sorted(self._abscissas, inverted)

    def avoid_zeros(self) -> "PiecewiseFunction":
        """Replace every exact-zero sample by a signed minimal magnitude.

        The result can be inverted without :class:`DivisionError`. Samples
        are walked in ascending abscissa order and each zero becomes
        ``sign * MIN_MAGNITUDE`` (about ``4.94e-324``), with the sign taken
        from a neighbour:

        - only sample: positive;
        - last sample: sign of the previous sample, as already replaced;
        - first sample: sign of the next sample;
        - otherwise: if ``|v[i] - v[i+1]| > |v[i] - new[i-1]|`` (strictly
          greater) the sign of the replaced previous sample, else the sign
          of the next sample.

        A neighbour that is itself zero gives a positive replacement.
        Non-zero samples are unchanged.
        """
        values = self._values
        last = len(values) - 1
        processed = []
        with localcontext(CONTEXT):
            for i, value in enumerate(values):
                if not value.is_zero():
                    processed.append(value)
                    continue

                if last == 0:
                    direction = 1
                elif i == last:
                    direction = sign(processed[i - 1])
                elif i == 0:
                    direction = sign(values[i + 1])
                else:
                    following = values[i + 1]
                    previous = processed[i - 1]
                    if abs(value - following) > abs(value - previous):
                        direction = sign(previous)
                    else:
                        direction = sign(following)

                if direction < 0:
                    processed.append(MIN_MAGNITUDE.copy_negate())
                else:
                    processed.append(MIN_MAGNITUDE)
        return self._from_sorted(self._abscissas, processed)

    # ------------------------------------------------------------------
    # Arithmetic operators
    # ------------------------------------------------------------------

    def __add__(self, other):
        if type(self) is not type(other):
            return NotImplemented
        return self.add(other)

    def __sub__(self, other):
        if type(self) is not type(other):
            return NotImplemented
        return self.subtract(other)

    def __mul__(self, other):
        if type(self) is type(other) or _is_scalar(other):
            return self.multiply(other)
        return NotImplemented

    def __rmul__(self, scalar):
        if not _is_scalar(scalar):
            return NotImplemented
        return self.multiply(scalar)

    def __truediv__(self, other):
        if type(self) is type(other) or _is_scalar(other):
            return self.divide(other)
        return NotImplemented

    def __neg__(self):
        return self.negate()

    # ------------------------------------------------------------------
    # Comparison and printing
    # ------------------------------------------------------------------

    def __eq__(self, other):
        if type(self) is not type(other):
            return NotImplemented
        return self._abscissas == other._abscissas and self._values == other._values

    def __hash__(self):
        return hash((self._abscissas, self._values))

    def __repr__(self) -> str:
        if not self._abscissas:
            return "PiecewiseFunction(samples=0)"
        return (
            f"PiecewiseFunction("
            f"samples={len(self._abscissas)}, "
            f"domain=[{self._abscissas[0]}, {self._abscissas[-1]}])"
        )

    def __str__(self) -> str:
        return "".join(
            f"{position}\t=> {value}\n"
            for position, value in zip(self._abscissas, self._values)
        )
