"""
symunits.core.expression
========================

Defines the recursive `Expression` tree used both for symbolic arithmetic and
for the dimension labels carried by `symunits.core.units.Units`.

An expression is exactly one of:
- `Literal`: a single payload value (int, float, Fraction, another Expression...).
- `Symbol`: a named, unresolved quantity such as "x" or a unit label "m".
- `BinaryNode`: an `Op` applied to two child expressions.
- `UnaryNode`: a named operation (open vocabulary, e.g. "sqrt") on one child.

Nodes are frozen dataclasses. Every operator allocates a new root wrapping its
operands, so trees are never mutated and never share structure in a way that
matters. Equality is structural.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import math
import operator
from typing import Any, Callable, Dict, Iterator, Mapping, Optional


class Op(str, Enum):
    """Binary operator tags. The value is the token used by both renderers."""

    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"
    POW = "**"

    def __str__(self) -> str:
        return self.value


def as_expr(value: Any) -> "Expression":
    """Lift a bare payload value into a `Literal`; expressions pass through."""
    if isinstance(value, Expression):
        return value
    return Literal(value)


def _is_units_operand(value: Any) -> bool:
    from symunits.core.units import Units
    from symunits.units.labels import UnitLabel

    return isinstance(value, (Units, UnitLabel))


def _combine(op: "Op", left: Any, right: Any) -> "BinaryNode":
    if _is_units_operand(left) or _is_units_operand(right):
        return NotImplemented
    return BinaryNode(op, as_expr(left), as_expr(right))


class Expression:
    """
    Base class for all expression nodes.

    Arithmetic operators build new trees instead of computing anything:

    >>> x = Symbol("x")
    >>> str((x + 1) * 2)
    '(x+1)*2'

    Non-expression operands on either side are lifted with `as_expr`, so
    ``2 * x`` and ``x * 2`` both work and keep their operand order. `Units`
    values and unit labels are left to their own reflected operators, so
    ``x * u.m`` builds a `Units` with a symbolic value.
    """

    __slots__ = ()

    # --- construction -----------------------------------------------------
    def __add__(self, other: Any) -> "BinaryNode":
        return _combine(Op.ADD, self, other)

    def __radd__(self, other: Any) -> "BinaryNode":
        return _combine(Op.ADD, other, self)

    def __sub__(self, other: Any) -> "BinaryNode":
        return _combine(Op.SUB, self, other)

    def __rsub__(self, other: Any) -> "BinaryNode":
        return _combine(Op.SUB, other, self)

    def __mul__(self, other: Any) -> "BinaryNode":
        return _combine(Op.MUL, self, other)

    def __rmul__(self, other: Any) -> "BinaryNode":
        return _combine(Op.MUL, other, self)

    def __truediv__(self, other: Any) -> "BinaryNode":
        return _combine(Op.DIV, self, other)

    def __rtruediv__(self, other: Any) -> "BinaryNode":
        return _combine(Op.DIV, other, self)

    def __pow__(self, other: Any, modulo: Any | None = None) -> "BinaryNode":
        if modulo is not None:
            raise TypeError("Modulo exponentiation is not supported for Expression.")
        return _combine(Op.POW, self, other)

    def __rpow__(self, other: Any) -> "BinaryNode":
        return _combine(Op.POW, other, self)

    def __neg__(self) -> "BinaryNode":
        # negation is multiplication by the payload's -1
        return BinaryNode(Op.MUL, self, Literal(-1))

    def __abs__(self) -> "UnaryNode":
        return self.unary("abs")

    def pow(self, exponent: Any) -> "BinaryNode":
        return BinaryNode(Op.POW, self, as_expr(exponent))

    def sqrt(self) -> "UnaryNode":
        return self.unary("sqrt")

    def abs(self) -> "UnaryNode":
        return self.unary("abs")

    def unary(self, name: str) -> "UnaryNode":
        """Wrap this expression in a named unary operation, e.g. ``x.unary("cos")``."""
        return UnaryNode(name, self)

    # --- rewriting --------------------------------------------------------
    def simplify(self) -> "Expression":
        """One bottom-up identity-elimination pass; see `ExpressionSimplifier`."""
        from symunits.core.simplifier import DEFAULT_SIMPLIFIER

        return DEFAULT_SIMPLIFIER.simplify(self)

    def simplify_fixpoint(self, max_iterations: int = 32) -> "Expression":
        from symunits.core.simplifier import DEFAULT_SIMPLIFIER

        return DEFAULT_SIMPLIFIER.simplify_fixpoint(self, max_iterations)

    # --- rendering --------------------------------------------------------
    def to_infix(self) -> str:
        from symunits.core.render import to_infix

        return to_infix(self)

    def to_rpn(self) -> str:
        from symunits.core.render import to_rpn

        return to_rpn(self)

    def to_pretty(self) -> str:
        from symunits.core.render import to_pretty

        return to_pretty(self)

    def __str__(self) -> str:
        return self.to_infix()

    def __format__(self, spec: str) -> str:
        """
        Supported specifiers
        --------------------
        "" (empty) or "infix"
            Conventional notation, e.g. ``(2+3)*4``.
        "rpn"
            Postfix notation, e.g. ``2 3 + 4 *``.
        "pretty"
            Infix with ``·`` and superscript integer powers, e.g. ``kg·m/s²``.
        """
        from symunits.core.render import render

        return render(self, spec)

    # --- inspection -------------------------------------------------------
    def walk(self) -> Iterator["Expression"]:
        """Yield every node of the tree in preorder."""
        stack: list[Expression] = [self]
        while stack:
            node = stack.pop()
            yield node
            if isinstance(node, BinaryNode):
                stack.append(node.right)
                stack.append(node.left)
            elif isinstance(node, UnaryNode):
                stack.append(node.operand)

    def node_count(self) -> int:
        return sum(1 for _ in self.walk())

    def symbols(self) -> frozenset[str]:
        return frozenset(node.name for node in self.walk() if isinstance(node, Symbol))

    def evaluate(
        self,
        bindings: Optional[Mapping[str, Any]] = None,
        functions: Optional[Mapping[str, Callable[[Any], Any]]] = None,
    ) -> Any:
        """
        Fold the tree into a single payload value.

        Parameters
        ----------
        bindings : mapping, optional
            Values for symbols. ``pi`` defaults to `math.pi` when unbound.
        functions : mapping, optional
            Extra or overriding unary operations by name. ``sqrt`` and ``abs``
            are always available.

        Raises
        ------
        ValueError
            If a symbol is unbound or a unary operation is unknown.
        """
        env: Dict[str, Any] = {"pi": math.pi}
        if bindings:
            env.update(bindings)
        funcs: Dict[str, Callable[[Any], Any]] = dict(_DEFAULT_FUNCTIONS)
        if functions:
            funcs.update(functions)
        return _evaluate(self, env, funcs)


@dataclass(frozen=True, slots=True)
class Literal(Expression):
    value: Any


@dataclass(frozen=True, slots=True)
class Symbol(Expression):
    name: str


@dataclass(frozen=True, slots=True)
class BinaryNode(Expression):
    op: Op
    left: Expression
    right: Expression


@dataclass(frozen=True, slots=True)
class UnaryNode(Expression):
    name: str
    operand: Expression


def sqrt(value: Any) -> UnaryNode:
    return as_expr(value).sqrt()


def pi() -> Symbol:
    return Symbol("pi")


# --- evaluation -----------------------------------------------------------

def _sqrt(value: Any) -> Any:
    if isinstance(value, Expression):
        return value.sqrt()
    return value ** 0.5


_BINARY_OPERATORS: Dict[Op, Callable[[Any, Any], Any]] = {
    Op.ADD: operator.add,
    Op.SUB: operator.sub,
    Op.MUL: operator.mul,
    Op.DIV: operator.truediv,
    Op.POW: operator.pow,
}

_DEFAULT_FUNCTIONS: Dict[str, Callable[[Any], Any]] = {
    "sqrt": _sqrt,
    "abs": abs,
}


def _evaluate(node: Expression, env: Mapping[str, Any], funcs: Mapping[str, Callable[[Any], Any]]) -> Any:
    if isinstance(node, Literal):
        return node.value
    if isinstance(node, Symbol):
        try:
            return env[node.name]
        except KeyError:
            raise ValueError(f"Unbound symbol '{node.name}'") from None
    if isinstance(node, BinaryNode):
        left = _evaluate(node.left, env, funcs)
        right = _evaluate(node.right, env, funcs)
        return _BINARY_OPERATORS[node.op](left, right)
    if isinstance(node, UnaryNode):
        try:
            func = funcs[node.name]
        except KeyError:
            raise ValueError(f"Unknown unary operation '{node.name}'") from None
        return func(_evaluate(node.operand, env, funcs))
    raise TypeError(f"Invalid expression node: {node!r}")


__all__ = [
    "Op",
    "Expression",
    "Literal",
    "Symbol",
    "BinaryNode",
    "UnaryNode",
    "as_expr",
    "sqrt",
    "pi",
]
