"""
symunits
========

Symbolic arithmetic expressions over any payload type, plus a `Units`
wrapper that uses those expressions as dimension labels.

>>> from symunits import Symbol, Units
>>> str((Symbol("x") * 1).simplify())
'x'
>>> str((Units(96.0, "m") + Units(2.0, "m")) / Units(10.0, "s"))
'9.8_m/s'
"""

import logging
import tomllib
from importlib import metadata
from pathlib import Path
from typing import TYPE_CHECKING, Any

from symunits.core.expression import (
    BinaryNode,
    Expression,
    Literal,
    Op,
    Symbol,
    UnaryNode,
    as_expr,
    pi,
    sqrt,
)
from symunits.core.simplifier import ExpressionSimplifier, simplify, simplify_fixpoint
from symunits.core.units import DimensionMismatchError, Units
from symunits.units.parser import parse_expr

if TYPE_CHECKING:  # pragma: no cover - typing aid only
    from symunits.units.labels import UnitNamespace

logging.getLogger(__name__).addHandler(logging.NullHandler())


def _read_version() -> str:
    try:
        return metadata.version("symunits")
    except metadata.PackageNotFoundError:
        # running from a source checkout
        pyproject = Path(__file__).resolve().parents[2] / "pyproject.toml"
        with open(pyproject, "rb") as fh:
            return tomllib.load(fh)["project"]["version"]


__version__ = _read_version()

# Lazy access helpers -------------------------------------------------------

def _get_default_namespace() -> "UnitNamespace":
    from symunits.units.labels import DEFAULT_NAMESPACE  # local import
    return DEFAULT_NAMESPACE

def __getattr__(name: str) -> Any:
    """Accessing 'u' returns the default unit-label namespace (``3 * u.m``)."""
    if name == "u":
        return _get_default_namespace()
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")

def __dir__() -> list[str]:
    return sorted(list(globals().keys()) + ["u"])


__all__ = [
    "BinaryNode",
    "DimensionMismatchError",
    "Expression",
    "ExpressionSimplifier",
    "Literal",
    "Op",
    "Symbol",
    "UnaryNode",
    "Units",
    "as_expr",
    "parse_expr",
    "pi",
    "simplify",
    "simplify_fixpoint",
    "sqrt",
    "__version__",
]
