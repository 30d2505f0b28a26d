"""SI unit prefixes used to convert sampled data to SI units."""

from __future__ import annotations

from decimal import Decimal
from enum import Enum


class UnitPrefix(Enum):
    """Order-of-magnitude prefix of a unit and its multiplier to SI.

    The multiplier is the number of SI units in one prefixed unit, e.g.
    ``UnitPrefix.NANO.multiplier == Decimal("1e-9")`` metres per nanometre.
    ``UNITY`` stands for an unprefixed SI unit (m, s, V, ...).

    Examples
    --------
    >>> UnitPrefix.from_unit("nm")
    <UnitPrefix.NANO: ('1e-9', 'n')>
    >>> UnitPrefix.from_unit("m")
    <UnitPrefix.UNITY: ('1', '')>
    """

    FEMTO = ("1e-15", "f")
    PICO = ("1e-12", "p")
    NANO = ("1e-9", "n")
    MICRO = ("1e-6", "μ")
    MILLI = ("1e-3", "m")
    CENTI = ("1e-2", "c")
    UNITY = ("1", "")

    def __init__(self, multiplier: str, symbol: str):
        self._multiplier = Decimal(multiplier)
        self.symbol = symbol

    @property
    def multiplier(self) -> Decimal:
        """SI units per prefixed unit."""
        return self._multiplier

    @classmethod
    def from_unit(cls, unit: str) -> "UnitPrefix":
        """Select the prefix of a unit string such as ``"nm"`` or ``"fs"``.

        The first character is read as the prefix only when the unit has
        more than one character, so ``"m"`` (metre) is ``UNITY`` while
        ``"mm"`` is ``MILLI``. Both the Greek mu, the micro sign and ``"u"``
        select ``MICRO``. Unknown prefixes fall back to ``UNITY``.
        """
        if len(unit) < 2:
            return cls.UNITY
        return _PREFIX_BY_SYMBOL.get(unit[0], cls.UNITY)


_PREFIX_BY_SYMBOL = {prefix.symbol: prefix for prefix in UnitPrefix if prefix.symbol}
_PREFIX_BY_SYMBOL["µ"] = UnitPrefix.MICRO
_PREFIX_BY_SYMBOL["u"] = UnitPrefix.MICRO
