"""Safe evaluator for the calculator's final expression (no eval()).

The expression line is flat: numbers joined by + - * / %, with the only
parentheses being the ones introduced by the percent rewrite. Evaluation uses
a tokenizer and a precedence-climbing parser, so * / % bind tighter than + -.
"""

import math
import operator as op
import re
from typing import List, Tuple

OPERATORS = "+-*/%"

# Binary operators: symbol -> (precedence, function)
_allowed_binops = {
    "+": (1, op.add),
    "-": (1, op.sub),
    "*": (2, op.mul),
    "/": (2, op.truediv),
    "%": (2, math.fmod),  # remainder takes the sign of the dividend
}

# Unary operators
_allowed_unaryops = {
    "+": op.pos,
    "-": op.neg,
}

_TOKEN_RE = re.compile(
    r"\s*(?:(?P<number>Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)|(?P<symbol>[-+*/%()]))"
)
_TRAILING_OPERATORS_RE = re.compile(r"[+\-*/%]+$")
_PERCENT_RE = re.compile(r"(\d+(\.\d+)?)%")

Token = Tuple[str, str]


class EvalError(Exception):
    pass


def strip_trailing_operators(expr: str) -> str:
    """Drop a dangling run of operators: "2+3*" -> "2+3"."""
    return _TRAILING_OPERATORS_RE.sub("", expr)


def rewrite_percent(expr: str) -> str:
    """Turn every "N%" into "(N*0.01)": "200+50%" -> "200+(50*0.01)"."""
    return _PERCENT_RE.sub(r"(\1*0.01)", expr)


def tokenize(expr: str) -> List[Token]:
    """Split `expr` into ("number", text) and ("symbol", char) tokens."""
    tokens: List[Token] = []
    pos = 0
    prev_end = -1
    expr = expr.rstrip()
    while pos < len(expr):
        match = _TOKEN_RE.match(expr, pos)
        if match is None:
            raise EvalError(f"Unexpected character {expr[pos]!r} at position {pos}")
        kind = match.lastgroup
        text = match.group(kind)
        start = match.start(kind)
        # "++" and "--" are increment/decrement, not two signs
        if (kind == "symbol" and text in "+-" and tokens and start == prev_end
                and tokens[-1] == ("symbol", text)):
            raise EvalError(f"Invalid operator sequence {text * 2!r}")
        tokens.append((kind, text))
        prev_end = match.end()
        pos = match.end()
    return tokens


class _Parser:
    """Precedence climbing over a token list."""

    def __init__(self, tokens: List[Token]):
        self.tokens = tokens
        self.index = 0

    def peek(self):
        if self.index < len(self.tokens):
            return self.tokens[self.index]
        return None

    def advance(self) -> Token:
        token = self.peek()
        if token is None:
            raise EvalError("Unexpected end of expression")
        self.index += 1
        return token

    def parse(self) -> float:
        value = self.expression(1)
        token = self.peek()
        if token is not None:
            raise EvalError(f"Unexpected token {token[1]!r}")
        return value

    def expression(self, min_prec: int) -> float:
        left = self.unary()
        while True:
            token = self.peek()
            if token is None or token[0] != "symbol" or token[1] not in _allowed_binops:
                return left
            prec, func = _allowed_binops[token[1]]
            if prec < min_prec:
                return left
            self.advance()
            right = self.expression(prec + 1)
            left = _apply(token[1], func, left, right)

    def unary(self) -> float:
        token = self.peek()
        if token is not None and token[0] == "symbol" and token[1] in _allowed_unaryops:
            self.advance()
            return _allowed_unaryops[token[1]](self.unary())
        return self.primary()

    def primary(self) -> float:
        kind, text = self.advance()
        if kind == "number":
            return float(text)
        if text == "(":
            value = self.expression(1)
            if self.advance() != ("symbol", ")"):
                raise EvalError("Expected ')'")
            return value
        raise EvalError(f"Unexpected token {text!r}")


def _apply(symbol, func, left: float, right: float) -> float:
    try:
        return func(left, right)
    except (ZeroDivisionError, ValueError) as e:
        raise EvalError(f"Error in operation {symbol}: {e}") from e


def safe_eval(expr: str) -> float:
    """Evaluate a flat arithmetic expression. Raises EvalError if malformed.

    The result may be non-finite (e.g. overflow); callers decide what to do
    with that.
    """
    tokens = tokenize(expr)
    if not tokens:
        raise EvalError("Expression is empty")
    return _Parser(tokens).parse()
