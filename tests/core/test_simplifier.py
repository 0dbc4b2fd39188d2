import logging
from fractions import Fraction

import pytest

from symunits.core.expression import BinaryNode, Literal, Op, Symbol, UnaryNode
from symunits.core.simplifier import (
    DEFAULT_SIMPLIFIER,
    ExpressionSimplifier,
    simplify,
    simplify_fixpoint,
)


def _samples():
    x, y = Symbol("x"), Symbol("y")
    return [
        x,
        Literal(7),
        x + y,
        (x * 1) + y,
        (x + 0).sqrt(),
        (x - y) / (y ** 2),
    ]


# -------------------------------
# Identity rewrite laws
# -------------------------------

@pytest.mark.parametrize("e", _samples())
def test_multiply_by_one(e, one):
    assert simplify(one * e) == simplify(e)
    assert simplify(e * one) == simplify(e)


@pytest.mark.parametrize("e", _samples())
def test_multiply_by_zero(e, zero):
    assert simplify(zero * e) == zero
    assert simplify(e * zero) == zero


@pytest.mark.parametrize("e", _samples())
def test_divide_by_one(e, one):
    assert simplify(e / one) == simplify(e)


@pytest.mark.parametrize("e", _samples())
def test_add_zero(e, zero):
    assert simplify(zero + e) == simplify(e)
    assert simplify(e + zero) == simplify(e)


@pytest.mark.parametrize("e", _samples())
def test_subtract_zero(e, zero):
    assert simplify(e - zero) == simplify(e)


def test_one_times_zero_is_zero(one, zero):
    assert simplify(one * zero) == zero
    assert simplify(zero * one) == zero


def test_rules_that_do_not_apply(x, one, zero):
    # only the listed identities are rewritten
    assert simplify(one / x) == BinaryNode(Op.DIV, one, x)
    assert simplify(zero - x) == BinaryNode(Op.SUB, zero, x)
    assert simplify(zero / x) == BinaryNode(Op.DIV, zero, x)
    assert simplify(x ** one) == BinaryNode(Op.POW, x, one)
    assert simplify(x / x) == BinaryNode(Op.DIV, x, x)


def test_float_identities(x):
    assert simplify(x * 1.0) == x
    assert simplify(0.0 + x) == x


def test_children_are_simplified_first(x, y):
    expr = (x * 1) + (y - 0)
    assert simplify(expr) == BinaryNode(Op.ADD, x, y)
    # the inner rewrite exposes 0*..., caught at the parent in the same pass
    assert simplify((Literal(0) + Literal(0)) * x) == Literal(0)


def test_unary_keeps_name_and_simplifies_operand(x):
    expr = (x * 1).unary("cos")
    assert simplify(expr) == UnaryNode("cos", x)


def test_leaves_are_returned_unchanged(x):
    assert simplify(x) is x
    lit = Literal(3)
    assert simplify(lit) is lit


def test_method_uses_default_simplifier(x):
    assert (x * 1).simplify() == DEFAULT_SIMPLIFIER.simplify(x * 1) == x


# -------------------------------
# Single pass vs fixpoint
# -------------------------------

def test_nested_identities_collapse_in_one_pass(x):
    # children are simplified before the parent rule is tried
    expr = (x * 1) * 1
    once = simplify(expr)
    assert once == x
    assert str(once) == "x"


def test_single_pass_is_idempotent(x, y):
    for expr in [(x + 0) * (y / 1), ((x * 1) * 1) + 0, (x - 0).sqrt() * (Literal(0) + y)]:
        once = simplify(expr)
        assert simplify(once) == once
        assert str(simplify(once)) == str(once)


def test_fixpoint_agrees_with_single_pass(x, y):
    expr = ((x + 0) * 1) * (y / 1)
    assert simplify_fixpoint(expr) == simplify(expr) == BinaryNode(Op.MUL, x, y)
    assert expr.simplify_fixpoint() == expr.simplify()


def test_fixpoint_logs_passes(x, caplog):
    with caplog.at_level(logging.DEBUG, logger="symunits.core.simplifier"):
        assert simplify_fixpoint((x * 1) * 1) == x
    assert "fixpoint after 2 pass(es)" in caplog.text


def test_fixpoint_bound_returns_last_result(x, caplog):
    with caplog.at_level(logging.WARNING, logger="symunits.core.simplifier"):
        result = simplify_fixpoint(x * 1, max_iterations=1)
    assert result == x
    assert "still changing after 1 pass(es)" in caplog.text



def test_fixpoint_rejects_zero_iterations(x):
    with pytest.raises(ValueError):
        simplify_fixpoint(x, max_iterations=0)


# -------------------------------
# Payload conversion
# -------------------------------

def test_custom_integer_conversion(x):
    frac = ExpressionSimplifier(from_int=Fraction)
    assert frac.one == Literal(Fraction(1))
    assert frac.zero == Literal(Fraction(0))
    assert frac.simplify(Literal(Fraction(1)) * x) == x
    assert frac.simplify(x * Literal(Fraction(0))) == Literal(Fraction(0))


def test_conversion_is_applied_to_results(x):
    calls = []

    def from_int(n):
        calls.append(n)
        return float(n)

    result = ExpressionSimplifier(from_int=from_int).simplify(x * 0)
    assert result == Literal(0.0)
    assert type(result.value) is float
    assert sorted(calls) == [0, 1]
