"""Loading sampled functions from delimited text files.

Simulation tools (SCAPS-1D and the like) export profiles as text tables
with one sample per row. A loader reads such a table, keeps the rows whose
first field is a number, converts the selected columns to SI units and
hands the samples to :class:`~pypiecewise.piecewise.PiecewiseFunction`.
"""

from __future__ import annotations

import abc
import decimal
import logging
import os
import re
from typing import Sequence, Tuple

from pypiecewise._numeric import canonicalize, exact_context
from pypiecewise.exceptions import FormatError
from pypiecewise.piecewise import PiecewiseFunction
from pypiecewise.units import UnitPrefix

logger = logging.getLogger(__name__)

NUMBER_PATTERN = re.compile(r"-?\d+(\.\d+(e[+-]\d+)?)?")

VALUE_SCALINGS = ("multiply", "divide")


def _as_prefix(unit) -> UnitPrefix:
    if isinstance(unit, UnitPrefix):
        return unit
    if isinstance(unit, str):
        return UnitPrefix.from_unit(unit)
    raise TypeError(f"Expected a UnitPrefix or unit string, got {type(unit).__name__}")


def _rescale(value: decimal.Decimal, shift: int) -> decimal.Decimal:
    """Multiply *value* by ``10 ** shift`` without rounding its digits."""
    return value.scaleb(shift, exact_context(value))


class FunctionFileLoader(abc.ABC):
    """Interface of objects that build a function from a file."""

    @abc.abstractmethod
    def load_function(
        self,
        path: str | os.PathLike,
        abscissa_unit: UnitPrefix | str,
        value_unit: UnitPrefix | str,
    ) -> PiecewiseFunction:
        """Read *path* and return its samples converted to SI units."""


class DelimitedFileLoader(FunctionFileLoader):
    """Loader for column-delimited text tables.

    Parameters
    ----------
    expected_extension : str
        Required file extension, without the dot (e.g. ``"eb"``).
    n_columns : int
        Number of fields a data row must have. Rows with another field
        count (headers, blank lines, footers) are skipped.
    columns : (int, int), optional
        Zero-based indices of the abscissa and value fields. Default
        ``(0, 1)``.
    separator : str, optional
        Regular expression separating fields. Default ``None`` splits on
        any run of whitespace.
    value_scaling : {"multiply", "divide"}, optional
        Whether the value column is multiplied or divided by the value
        unit multiplier. Abscissas are always multiplied. Default
        ``"multiply"``.

    Raises
    ------
    ValueError
        If the column layout or *value_scaling* is invalid.

    Examples
    --------
    >>> loader = DelimitedFileLoader("eb", n_columns=3, columns=(0, 2))
    >>> field = loader.load_function("profile.eb", "μm", "")  # doctest: +SKIP
    """

    def __init__(
        self,
        expected_extension: str,
        n_columns: int,
        columns: Tuple[int, int] = (0, 1),
        separator: str | None = None,
        value_scaling: str = "multiply",
    ):
        if n_columns < 2:
            raise ValueError(f"n_columns must be >= 2, got {n_columns}")
        if len(columns) != 2:
            raise ValueError(
                f"columns must hold an abscissa and a value index, got {columns}"
            )
        for index in columns:
            if not 0 <= index < n_columns:
                raise ValueError(
                    f"Column index {index} out of range [0, {n_columns - 1}]"
                )
        if value_scaling not in VALUE_SCALINGS:
            raise ValueError(
                f"value_scaling must be one of {VALUE_SCALINGS}, got {value_scaling!r}"
            )

        self.expected_extension = expected_extension.lstrip(".")
        self.n_columns = n_columns
        self.columns = tuple(columns)
        self.separator = separator
        self.value_scaling = value_scaling
        self._split = re.compile(separator).split if separator is not None else None

    def _fields(self, line: str) -> Sequence[str]:
        stripped = line.strip()
        if self._split is None:
            return stripped.split()
        return self._split(stripped)

    def _check_extension(self, path: str) -> None:
        extension = path.rsplit(".", 1)[-1] if "." in os.path.basename(path) else ""
        if extension != self.expected_extension:
            raise FormatError(
                f"Expected a .{self.expected_extension} file, got extension {extension!r}",
                path=path,
            )

    def load_function(self, path, abscissa_unit, value_unit) -> PiecewiseFunction:
        """Read a table and return its samples as a function in SI units.

        Parameters
        ----------
        path : str or path-like
            File to read.
        abscissa_unit : UnitPrefix or str
            Prefix of the abscissa column unit, or a unit string such as
            ``"nm"``.
        value_unit : UnitPrefix or str
            Prefix of the value column unit.

        Returns
        -------
        PiecewiseFunction
            The samples; when an abscissa repeats, the first row wins.

        Raises
        ------
        FormatError
            If the extension does not match or a selected field of a data
            row is not a number.
        FileNotFoundError
            If *path* does not exist.
        OSError
            If the file cannot be read.
        """
        path = os.fspath(path)
        self._check_extension(path)
        abscissa_shift = _as_prefix(abscissa_unit).multiplier.adjusted()
        value_shift = _as_prefix(value_unit).multiplier.adjusted()

        abscissa_col, value_col = self.columns
        samples = {}
        skipped = 0
        duplicates = 0

        with open(path, encoding="utf-8", errors="replace") as f:
            for line_number, line in enumerate(f, start=1):
                fields = self._fields(line)
                if len(fields) != self.n_columns or not NUMBER_PATTERN.fullmatch(fields[0]):
                    logger.debug("Skipping line %d of %s", line_number, path)
                    skipped += 1
                    continue

                try:
                    abscissa = decimal.Decimal(fields[abscissa_col].strip())
                    value = decimal.Decimal(fields[value_col].strip())
                except decimal.InvalidOperation:
                    raise FormatError(
                        f"Cannot parse sample from {line.strip()!r}",
                        path=path,
                        line_number=line_number,
                    ) from None
                if not (abscissa.is_finite() and value.is_finite()):
                    raise FormatError(
                        f"Non-finite sample in {line.strip()!r}",
                        path=path,
                        line_number=line_number,
                    )

                abscissa = canonicalize(_rescale(abscissa, abscissa_shift))
                if abscissa in samples:
                    logger.debug(
                        "Dropping duplicate abscissa %s at line %d of %s",
                        abscissa, line_number, path,
                    )
                    duplicates += 1
                    continue

                if self.value_scaling == "multiply":
                    value = _rescale(value, value_shift)
                else:
                    value = _rescale(value, -value_shift)
                samples[abscissa] = canonicalize(value)

        logger.info(
            "Loaded %d samples from %s (%d rows skipped, %d duplicates dropped)",
            len(samples), path, skipped, duplicates,
        )
        return PiecewiseFunction.from_pairs(samples.items())
