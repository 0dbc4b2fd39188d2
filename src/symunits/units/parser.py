from functools import lru_cache
from typing import Tuple, Union

from symunits.core.expression import BinaryNode, Expression, Literal, Op, Symbol, UnaryNode

# --- Plan node types ------------------------------------------------
# ("num", <int|float>)
# ("name", <str>)
# ("call", <str>, <plan>)
# ("neg", <plan>)
# ("bin", <op token>, <plan>, <plan>)
Plan = Tuple[Union[str, int, float, "Plan"], ...]

_OPS = {op.value: op for op in Op}

# ---------------- Parser that builds a PLAN (no Expression objects!) ----------------
class _ExprParser:
    """
    Grammar:
      expr   := term (('+' | '-') term)*
      term   := unary (('*' | '/') unary)*
      unary  := '-' unary | power
      power  := factor ['**' unary]
      factor := NUMBER | NAME '(' expr ')' | NAME | '(' expr ')'
      NAME   := [A-Za-z_][A-Za-z0-9_]*
      NUMBER := digits ['.' digits] [('e'|'E') ['+'|'-'] digits]
    """
    def __init__(self, text: str):
        self.s = text
        self.n = len(text)
        self.i = 0

    def parse(self) -> Plan:
        plan = self._parse_expr()
        self._skip_ws()
        if self.i != self.n:
            raise ValueError(f"Unexpected trailing input at {self.i}: {self.s[self.i:self.i+10]!r}")
        return plan

    # expr := term (('+' | '-') term)*
    def _parse_expr(self) -> Plan:
        left = self._parse_term()
        while True:
            if self._peek('+'):
                self._eat('+')
                left = ("bin", "+", left, self._parse_term())
            elif self._peek('-'):
                self._eat('-')
                left = ("bin", "-", left, self._parse_term())
            else:
                break
        return left

    # term := unary (('*' | '/') unary)*
    def _parse_term(self) -> Plan:
        left = self._parse_unary()
        while True:
            if self._peek('*') and not self._peek('**'):
                self._eat('*')
                left = ("bin", "*", left, self._parse_unary())
            elif self._peek('/'):
                self._eat('/')
                left = ("bin", "/", left, self._parse_unary())
            else:
                break
        return left

    # unary := '-' unary | power
    def _parse_unary(self) -> Plan:
        if self._peek('-'):
            self._eat('-')
            operand = self._parse_unary()
            if operand[0] == "num":
                return ("num", -operand[1])
            return ("neg", operand)
        return self._parse_power()

    # power := factor ['**' unary]
    def _parse_power(self) -> Plan:
        base = self._parse_factor()
        if self._peek('**'):
            self._eat('**')
            base = ("bin", "**", base, self._parse_unary())
        return base

    # factor := NUMBER | NAME '(' expr ')' | NAME | '(' expr ')'
    def _parse_factor(self) -> Plan:
        self._skip_ws()
        if self._peek('('):
            self._eat('(')
            val = self._parse_expr()
            self._eat(')')
            return val
        if self.i < self.n and (self.s[self.i].isdigit() or self.s[self.i] == '.'):
            return ("num", self._parse_number())
        name = self._parse_name()
        if not name:
            ch = self.s[self.i:self.i+1]
            raise ValueError(f"Expected number, name or '(' at {self.i}, got {ch!r}")
        if self._peek('('):
            self._eat('(')
            arg = self._parse_expr()
            self._eat(')')
            return ("call", name, arg)
        return ("name", name)

    # ---- token helpers ----
    def _parse_name(self):
        self._skip_ws()
        i0 = self.i
        if i0 < self.n and (self.s[i0].isalpha() or self.s[i0] == '_'):
            self.i += 1
            while self.i < self.n and (self.s[self.i].isalnum() or self.s[self.i] == '_'):
                self.i += 1
            return self.s[i0:self.i]
        return None

    def _parse_number(self) -> Union[int, float]:
        s, n = self.s, self.n
        i0 = self.i
        is_float = False
        while self.i < n and s[self.i].isdigit():
            self.i += 1
        if self.i < n and s[self.i] == '.':
            is_float = True
            self.i += 1
            while self.i < n and s[self.i].isdigit():
                self.i += 1
        if self.i < n and s[self.i] in 'eE':
            is_float = True
            self.i += 1
            if self.i < n and s[self.i] in '+-':
                self.i += 1
            i1 = self.i
            while self.i < n and s[self.i].isdigit():
                self.i += 1
            if i1 == self.i:
                raise ValueError(f"Expected exponent digits at {self.i}")
        text = s[i0:self.i]
        if text == '.':
            raise ValueError(f"Expected digits at {i0}")
        return float(text) if is_float else int(text)

    def _skip_ws(self):
        s, n, i = self.s, self.n, self.i
        while i < n and s[i].isspace():
            i += 1
        self.i = i

    def _peek(self, tok: str) -> bool:
        self._skip_ws()
        if tok == '**':
            return self.s[self.i:self.i+2] == '**'
        return self.i < self.n and self.s[self.i] == tok

    def _eat(self, tok: str):
        if not self._peek(tok):
            got = self.s[self.i:self.i+len(tok)]
            raise ValueError(f"Expected {tok!r} at {self.i}, got {got!r}")
        self.i += len(tok)

# ---------------- Building an Expression from a plan ----------------
def _eval_plan(plan: Plan) -> Expression:
    kind = plan[0]
    if kind == "num":
        return Literal(plan[1])
    elif kind == "name":
        return Symbol(plan[1])
    elif kind == "call":
        return UnaryNode(plan[1], _eval_plan(plan[2]))
    elif kind == "neg":
        return -_eval_plan(plan[1])
    elif kind == "bin":
        return BinaryNode(_OPS[plan[1]], _eval_plan(plan[2]), _eval_plan(plan[3]))
    else:
        raise RuntimeError(f"Invalid plan node: {plan!r}")

# ---------------- Public API with caching-safe compilation ----------------
# Cache the *compiled plan* only; every call builds a fresh tree from it.
@lru_cache(maxsize=4096)
def _compile_expr(text: str) -> Plan:
    # cheap prefilter to reject disallowed characters early.
    disallowed = set('~!@#$%^&|=,:;?<>\'\"`\\[]{}')
    if any(c in disallowed for c in text):
        raise ValueError("Only +, -, *, /, **, parentheses, numbers, and names are allowed.")
    return _ExprParser(text).parse()

def parse_expr(text: str) -> Expression:
    """
    Parse expressions like 'kg*m/s**2' or 'sqrt(x**2 + 1) / 2' into a tree.

    Parsing rules:
      * '+', '-', '*', '/', '**' with the usual precedence; '**' is right
        associative and binds tighter than a leading '-'.
      * 'name(expr)' builds a unary node with that name.
      * Integer literals become int, anything with '.' or an exponent float.
      * '-' in front of a number literal negates the literal itself;
        anywhere else it is expression negation (multiplication by -1).
      * Anything else raises ValueError.
    """
    plan = _compile_expr(text)
    return _eval_plan(plan)
