"""
symunits.core.units
===================

Defines `Units`, a value paired with a dimension label.

The dimension is an `Expression` used purely as a label: usually a `Symbol`
such as ``m``, or a product/quotient of labels built when values are
multiplied or divided. It is never evaluated numerically.

- Addition and subtraction require structurally equal dimensions and raise
  `DimensionMismatchError` otherwise.
- Multiplication and division combine the dimensions into a new tree without
  simplifying it, so ``m/m`` stays ``m/m`` until `Units.simplify_dimension`
  is called.
"""

from __future__ import annotations

import logging
from typing import Any

from symunits.core.expression import Expression, Symbol

logger = logging.getLogger(__name__)


class DimensionMismatchError(TypeError):
    """Raised when values with different dimensions are added or subtracted."""

    def __init__(self, left: Expression, right: Expression, operation: str = "add") -> None:
        self.left = left
        self.right = right
        self.operation = operation
        super().__init__(f"Mismatched units in {operation}: {left} vs {right}")


class Units:
    """
    A value with a dimension label.

    Attributes
    ----------
    value : Any
        The payload (int, float, Fraction, an `Expression`, ...). Arithmetic is
        delegated to it.
    dimension : Expression
        The dimension label. A ``str`` passed to the constructor becomes a
        `Symbol`.

    Examples
    --------
    >>> v = (Units(96.0, "m") + Units(2.0, "m")) / Units(10.0, "s")
    >>> str(v)
    '9.8_m/s'
    """
    __slots__ = ["_value", "_dimension"]

    def __init__(self, value: Any, unit: "str | Expression"):
        if isinstance(unit, str):
            unit = Symbol(unit)
        elif not isinstance(unit, Expression):
            raise TypeError(f"unit must be a str or Expression, got {type(unit).__name__}")
        self._value = value
        self._dimension = unit

    @classmethod
    def parse(cls, value: Any, unit: str) -> "Units":
        """Build a value whose dimension is parsed from text, e.g. ``"kg*m/s**2"``."""
        from symunits.units.parser import parse_expr

        return cls(value, parse_expr(unit))

    @property
    def value(self) -> Any:
        return self._value

    @property
    def dimension(self) -> Expression:
        return self._dimension

    def drop_units(self) -> Any:
        """Return the bare value, discarding the dimension."""
        return self._value

    def simplify_dimension(self, fixpoint: bool = False) -> "Units":
        """Return a copy whose dimension has been run through the simplifier."""
        dim = self._dimension.simplify_fixpoint() if fixpoint else self._dimension.simplify()
        return Units(self._value, dim)

    # arithmetic
    def _add(self, other: "Units", operation: str) -> "Units":
        if self._dimension != other._dimension:
            logger.debug(
                "dimension mismatch in %s: %s vs %s", operation, self._dimension, other._dimension
            )
            raise DimensionMismatchError(self._dimension, other._dimension, operation)
        return Units(self._value + other._value, self._dimension)

    def __add__(self, other: object) -> "Units":
        if not isinstance(other, Units):
            return NotImplemented
        return self._add(other, "add")

    def __sub__(self, other: object) -> "Units":
        if not isinstance(other, Units):
            return NotImplemented
        return self._add(-other, "subtract")

    def __neg__(self) -> "Units":
        return Units(-self._value, self._dimension)

    def __mul__(self, other: object) -> "Units":
        if not isinstance(other, Units):
            return NotImplemented
        return Units(self._value * other._value, self._dimension * other._dimension)

    def __truediv__(self, other: object) -> "Units":
        if not isinstance(other, Units):
            return NotImplemented
        return Units(self._value / other._value, self._dimension / other._dimension)

    # comparison
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Units):
            return NotImplemented
        return self._value == other._value and self._dimension == other._dimension

    def __hash__(self) -> int:
        return hash((self._value, self._dimension))

    # display
    def __str__(self) -> str:
        return f"{self._value}_{self._dimension}"

    def __repr__(self) -> str:
        return f"Units({self._value!r}, {self._dimension!r})"

    def __format__(self, spec: str) -> str:
        """
        Supported specifiers
        --------------------
        "" (empty) or "infix"
            ``<value>_<dimension>``, e.g. ``9.8_m/s``.
        "pretty"
            ``<value> <dimension>`` with the pretty dimension, e.g. ``9.8 m/s²``.
        """
        spec = (spec or "").strip().lower()
        if spec in ("", "infix"):
            return str(self)
        if spec == "pretty":
            return f"{self._value} {self._dimension.to_pretty()}"
        raise ValueError("Unknown format spec; use '', 'infix', or 'pretty'")


__all__ = ["Units", "DimensionMismatchError"]
