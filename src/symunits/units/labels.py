"""Attribute-style unit labels: ``3 * u.m`` or ``9.8 * (u.m / u.s**2)``."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from symunits.core.expression import Expression, Symbol
from symunits.core.units import Units


@dataclass(frozen=True, slots=True)
class UnitLabel:
    """A dimension label waiting for a value; ``value * label`` builds `Units`."""

    dimension: Expression

    def __rmul__(self, value: Any) -> Units:
        return Units(value, self.dimension)

    def __mul__(self, other: object) -> "UnitLabel":
        if not isinstance(other, UnitLabel):
            return NotImplemented
        return UnitLabel(self.dimension * other.dimension)

    def __truediv__(self, other: object) -> "UnitLabel":
        if not isinstance(other, UnitLabel):
            return NotImplemented
        return UnitLabel(self.dimension / other.dimension)

    def __pow__(self, n: int) -> "UnitLabel":
        return UnitLabel(self.dimension ** n)

    def __str__(self) -> str:
        return str(self.dimension)


class UnitNamespace:
    """
    Hands out a `UnitLabel` for any attribute name.

    There is no registry behind it: ``u.furlong`` is as valid as ``u.m``,
    since a dimension here is only a label.
    """
    __slots__ = ()

    def __getattr__(self, name: str) -> UnitLabel:
        if name.startswith("_"):
            raise AttributeError(name)
        return UnitLabel(Symbol(name))

    def unit(self, text: str) -> UnitLabel:
        """Parse a compound label, e.g. ``u.unit("kg*m/s**2")``."""
        from symunits.units.parser import parse_expr

        return UnitLabel(parse_expr(text))


DEFAULT_NAMESPACE = UnitNamespace()

__all__ = ["UnitLabel", "UnitNamespace", "DEFAULT_NAMESPACE"]
