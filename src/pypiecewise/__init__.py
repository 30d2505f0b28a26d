"""pypiecewise: sampled continuous functions with exact decimal algebra.

Provides the :class:`PiecewiseFunction` class, which represents a physical
quantity known only at a finite set of sample points (electric field,
carrier density, bandgap profile, ...) as a continuous function of one
variable by linear interpolation between samples. Functions on different
grids can be added, subtracted, multiplied and divided; all arithmetic is
done in a fixed 34-digit decimal context. The
:class:`DelimitedFileLoader` reads such profiles from simulation output
tables, converting them to SI units with :class:`UnitPrefix`.

Example
-------
>>> from pypiecewise import PiecewiseFunction
>>> f = PiecewiseFunction({0: 0, 10: 100})
>>> g = PiecewiseFunction({0: 1, 5: 1, 10: 1})
>>> (f + g).value_at(5)
Decimal('51')
"""

from pypiecewise._numeric import MIN_MAGNITUDE
from pypiecewise._version import __version__
from pypiecewise.exceptions import DivisionError, DomainError, FormatError
from pypiecewise.loader import DelimitedFileLoader, FunctionFileLoader
from pypiecewise.piecewise import PiecewiseFunction
from pypiecewise.units import UnitPrefix

__all__ = [
    "DelimitedFileLoader",
    "DivisionError",
    "DomainError",
    "FormatError",
    "FunctionFileLoader",
    "MIN_MAGNITUDE",
    "PiecewiseFunction",
    "UnitPrefix",
    "__version__",
]
