"""Identity-elimination rewrites for expression trees.

The rewrite logic lives in ``ExpressionSimplifier`` so the payload's integer
conversion (used to build the "zero" and "one" literals the rules compare
against) can be swapped without touching ``symunits.core.expression``.
"""

from __future__ import annotations

import logging
from typing import Any, Callable

from symunits.core.expression import BinaryNode, Expression, Literal, Op, UnaryNode

logger = logging.getLogger(__name__)


class ExpressionSimplifier:
    """Applies the local additive and multiplicative identity rules."""

    def __init__(self, from_int: Callable[[int], Any] = int) -> None:
        self._from_int = from_int

    @property
    def zero(self) -> Literal:
        return Literal(self._from_int(0))

    @property
    def one(self) -> Literal:
        return Literal(self._from_int(1))

    def simplify(self, expr: Expression) -> Expression:
        """
        Run a single bottom-up pass over ``expr``.

        Children are simplified first, then the rules are tried at the current
        node only:

        - ``1*x -> x``, ``x*1 -> x``, ``0*x -> 0``, ``x*0 -> 0``
        - ``x/1 -> x``
        - ``0+x -> x``, ``x+0 -> x``
        - ``x-0 -> x``

        The parent only ever sees already-simplified children, so nested
        identities such as ``(x*1)*1`` collapse to ``x`` in one call.
        """
        return self._simplify(expr, self.zero, self.one)

    def _simplify(self, expr: Expression, zero: Literal, one: Literal) -> Expression:
        if isinstance(expr, BinaryNode):
            a = self._simplify(expr.left, zero, one)
            b = self._simplify(expr.right, zero, one)
            op = expr.op
            if op is Op.MUL:
                if a == one:
                    return b
                if b == one:
                    return a
                if a == zero or b == zero:
                    return zero
            elif op is Op.DIV:
                if b == one:
                    return a
            elif op is Op.ADD:
                if a == zero:
                    return b
                if b == zero:
                    return a
            elif op is Op.SUB:
                if b == zero:
                    return a
            return BinaryNode(op, a, b)

        if isinstance(expr, UnaryNode):
            return UnaryNode(expr.name, self._simplify(expr.operand, zero, one))

        # leaves are immutable, no copy needed
        return expr

    def simplify_fixpoint(self, expr: Expression, max_iterations: int = 32) -> Expression:
        """
        Repeat `simplify` until the tree stops changing.

        Stops after ``max_iterations`` passes and returns the latest result if
        the last pass still changed the tree.
        """
        if max_iterations < 1:
            raise ValueError("max_iterations must be at least 1")

        current = expr
        for iteration in range(1, max_iterations + 1):
            simplified = self.simplify(current)
            if simplified == current:
                logger.debug("simplify reached a fixpoint after %d pass(es)", iteration)
                return simplified
            current = simplified

        logger.warning(
            "simplify still changing after %d pass(es); returning last result",
            max_iterations,
        )
        return current


DEFAULT_SIMPLIFIER = ExpressionSimplifier()


def simplify(expr: Expression) -> Expression:
    return DEFAULT_SIMPLIFIER.simplify(expr)


def simplify_fixpoint(expr: Expression, max_iterations: int = 32) -> Expression:
    return DEFAULT_SIMPLIFIER.simplify_fixpoint(expr, max_iterations)


__all__ = ["ExpressionSimplifier", "DEFAULT_SIMPLIFIER", "simplify", "simplify_fixpoint"]
