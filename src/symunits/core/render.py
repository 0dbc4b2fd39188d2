"""
symunits.core.render
====================

Read-only text renderings of an `Expression` tree.

- `to_infix`: conventional notation. Every binary operand is parenthesised,
  whatever the precedence, so ``(2+3)*4`` and ``(2*3)+4`` both keep their
  parentheses. Leaves and unary nodes are never wrapped.
- `to_rpn`: postfix notation, operands first (``2 3 + 4 *``).
- `to_pretty`: infix with ``·`` for multiplication and integer powers of a
  leaf written as superscripts (``kg·m/s²``).

All three walk the tree with an explicit stack, so rendering depth is not
bounded by the interpreter's recursion limit.
"""

from __future__ import annotations

from typing import Callable

from symunits.core.expression import BinaryNode, Expression, Literal, Op, Symbol, UnaryNode

_SUPERSCRIPTS = str.maketrans("0123456789-", "⁰¹²³⁴⁵⁶⁷⁸⁹⁻")


def _sup(n: int) -> str:
    return "" if n == 1 else str(n).translate(_SUPERSCRIPTS)


def _leaf_text(node: Literal | Symbol) -> str:
    if isinstance(node, Literal):
        return str(node.value)
    return node.name


def _fold(
    node: Expression,
    binary: Callable[[BinaryNode, str, str], str],
    unary: Callable[[UnaryNode, str], str],
) -> str:
    """
    Postorder fold of ``node`` into text: leaves become their text, interior
    nodes are combined from their children's already-rendered text.
    """
    results: list[str] = []
    stack: list[tuple[Expression, bool]] = [(node, False)]
    while stack:
        current, expanded = stack.pop()
        if isinstance(current, (Literal, Symbol)):
            results.append(_leaf_text(current))
        elif isinstance(current, BinaryNode):
            if expanded:
                right = results.pop()
                left = results.pop()
                results.append(binary(current, left, right))
            else:
                stack.append((current, True))
                stack.append((current.right, False))
                stack.append((current.left, False))
        elif isinstance(current, UnaryNode):
            if expanded:
                results.append(unary(current, results.pop()))
            else:
                stack.append((current, True))
                stack.append((current.operand, False))
        else:
            raise TypeError(f"Invalid expression node: {current!r}")
    return results.pop()


def _call(node: UnaryNode, operand: str) -> str:
    return f"{node.name}({operand})"


# --- infix ----------------------------------------------------------------

def _paren(child: Expression, text: str) -> str:
    if isinstance(child, BinaryNode):
        return f"({text})"
    return text


def _infix_binary(node: BinaryNode, left: str, right: str) -> str:
    return f"{_paren(node.left, left)}{node.op}{_paren(node.right, right)}"


def to_infix(node: Expression) -> str:
    return _fold(node, _infix_binary, _call)


# --- postfix --------------------------------------------------------------

def _rpn_binary(node: BinaryNode, left: str, right: str) -> str:
    return f"{left} {right} {node.op}"


def _rpn_unary(node: UnaryNode, operand: str) -> str:
    return f"{operand} {node.name}"


def to_rpn(node: Expression) -> str:
    return _fold(node, _rpn_binary, _rpn_unary)


# --- pretty ---------------------------------------------------------------

def _superscript_power(node: Expression) -> str | None:
    """Return e.g. 's²' for ``s ** 2``; None when the node is not a leaf raised to an int."""
    if not (isinstance(node, BinaryNode) and node.op is Op.POW):
        return None
    base, exp = node.left, node.right
    if not isinstance(base, (Literal, Symbol)) or not isinstance(exp, Literal):
        return None
    # bool is an int subclass
    if type(exp.value) is not int:
        return None
    return f"{_leaf_text(base)}{_sup(exp.value)}"


def _paren_pretty(child: Expression, text: str) -> str:
    if isinstance(child, BinaryNode) and _superscript_power(child) is None:
        return f"({text})"
    return text


def _pretty_binary(node: BinaryNode, left: str, right: str) -> str:
    sup = _superscript_power(node)
    if sup is not None:
        return sup
    token = "·" if node.op is Op.MUL else str(node.op)
    return f"{_paren_pretty(node.left, left)}{token}{_paren_pretty(node.right, right)}"


def to_pretty(node: Expression) -> str:
    return _fold(node, _pretty_binary, _call)


# --- format-spec dispatch -------------------------------------------------

_RENDERERS = {
    "": to_infix,
    "infix": to_infix,
    "rpn": to_rpn,
    "pretty": to_pretty,
}


def render(node: Expression, spec: str = "") -> str:
    """Render ``node`` according to a format spec ('', 'infix', 'rpn' or 'pretty')."""
    spec = (spec or "").strip().lower()
    try:
        renderer = _RENDERERS[spec]
    except KeyError:
        raise ValueError("Unknown format spec; use '', 'infix', 'rpn', or 'pretty'") from None
    return renderer(node)


__all__ = ["to_infix", "to_rpn", "to_pretty", "render"]
