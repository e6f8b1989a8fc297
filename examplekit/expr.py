"""Arithmetic expressions: parsing, checking, evaluation and formatting."""

from __future__ import annotations

import json
import math
import re
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum, auto
from typing import Callable, Iterator, Mapping, NamedTuple, Optional, Union

Env = Optional[Mapping[str, float]]


class ExprError(ValueError):
    """Raised when an expression cannot be parsed or fails its check."""


_RUNE_ESCAPES = {
    "\a": r"\a", "\b": r"\b", "\f": r"\f", "\n": r"\n",
    "\r": r"\r", "\t": r"\t", "\v": r"\v", "'": r"\'", "\\": r"\\",
}


def _quote_rune(ch: str) -> str:
    if ch in _RUNE_ESCAPES:
        return f"'{_RUNE_ESCAPES[ch]}'"
    if ch.isprintable():
        return f"'{ch}'"
    code = ord(ch)
    if code < 0x80:
        return f"'\\x{code:02x}'"
    if code <= 0xFFFF:
        return f"'\\u{code:04x}'"
    return f"'\\U{code:08x}'"


def _quote_string(text: str) -> str:
    return json.dumps(text, ensure_ascii=False)


def _format_g(value: float) -> str:
    """Format a float with the shortest digits, switching to exponent form like %g."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    if value == 0:
        return "-0" if math.copysign(1.0, value) < 0 else "0"
    parts = Decimal(repr(value)).normalize().as_tuple()
    ndigits = len(parts.digits)
    point = ndigits + parts.exponent
    exponent = point - 1
    if exponent < -4 or exponent >= 6:
        return f"{value:.{ndigits - 1}e}"
    return f"{value:.{max(ndigits - point, 0)}f}"


def _divide(x: float, y: float) -> float:
    try:
        return x / y
    except ZeroDivisionError:
        if x == 0 or math.isnan(x):
            return math.nan
        return math.copysign(math.inf, x) * math.copysign(1.0, y)


def _pow(x: float, y: float) -> float:
    odd_integer = y.is_integer() and int(y) % 2 == 1
    try:
        return math.pow(x, y)
    except OverflowError:
        return -math.inf if x < 0 and odd_integer else math.inf
    except ValueError:
        if x == 0:
            return -math.inf if odd_integer and math.copysign(1.0, x) < 0 else math.inf
        return math.nan


def _sin(x: float) -> float:
    try:
        return math.sin(x)
    except ValueError:
        return math.nan


def _sqrt(x: float) -> float:
    try:
        return math.sqrt(x)
    except ValueError:
        return math.nan


_FUNCTIONS: dict[str, Callable[..., float]] = {"pow": _pow, "sin": _sin, "sqrt": _sqrt}

NUM_PARAMS = {"pow": 2, "sin": 1, "sqrt": 1}


class Var(str):
    """A variable, identified by its name."""

    __slots__ = ()

    def eval(self, env: Env) -> float:
        if not env:
            return 0.0
        return float(env.get(self, 0.0))

    def check(self, vars: set) -> None:
        vars.add(self)


@dataclass(frozen=True)
class Literal:
    """A numeric constant."""

    value: float

    def eval(self, env: Env) -> float:
        return self.value

    def check(self, vars: set) -> None:
        """A literal adds no variables; its value must be a number."""
        if not isinstance(self.value, (int, float)):
            raise ExprError(f"literal {self.value!r} is not a number")


@dataclass(frozen=True)
class Unary:
    """A unary operator expression such as -x."""

    op: str
    x: Expr

    def eval(self, env: Env) -> float:
        if self.op == "+":
            return +self.x.eval(env)
        if self.op == "-":
            return -self.x.eval(env)
        raise ExprError(f"unsupported unary operator: {_quote_rune(self.op)}")

    def check(self, vars: set) -> None:
        if self.op not in ("+", "-"):
            raise ExprError(f"unexpected unary op {_quote_rune(self.op)}")
        self.x.check(vars)


@dataclass(frozen=True)
class Binary:
    """A binary operator expression such as x+y."""

    op: str
    x: Expr
    y: Expr

    def eval(self, env: Env) -> float:
        if self.op == "+":
            return self.x.eval(env) + self.y.eval(env)
        if self.op == "-":
            return self.x.eval(env) - self.y.eval(env)
        if self.op == "*":
            return self.x.eval(env) * self.y.eval(env)
        if self.op == "/":
            return _divide(self.x.eval(env), self.y.eval(env))
        raise ExprError(f"unsupported binary operator: {_quote_rune(self.op)}")

    def check(self, vars: set) -> None:
        if self.op not in ("+", "-", "*", "/"):
            raise ExprError(f"unexpected binary op {_quote_rune(self.op)}")
        self.x.check(vars)
        self.y.check(vars)


@dataclass(frozen=True)
class Call:
    """A function call expression such as sin(x)."""

    fn: str
    args: tuple

    def eval(self, env: Env) -> float:
        function = _FUNCTIONS.get(self.fn)
        if function is None:
            raise ExprError(f"unsupported function call: {self.fn}")
        return function(*(arg.eval(env) for arg in self.args))

    def check(self, vars: set) -> None:
        arity = NUM_PARAMS.get(self.fn)
        if arity is None:
            raise ExprError(f"unknown function {_quote_string(self.fn)}")
        if len(self.args) != arity:
            raise ExprError(f"call to {self.fn} has {len(self.args)} args, want {arity}")
        for arg in self.args:
            arg.check(vars)


Expr = Union[Var, Literal, Unary, Binary, Call]


# ---- lexer ----


class _Kind(Enum):
    EOF = auto()
    IDENT = auto()
    NUMBER = auto()
    CHAR = auto()


class _Token(NamedTuple):
    kind: _Kind
    text: str


_WHITESPACE = re.compile(r"[ \t\r\n]+")
_IDENT = re.compile(r"[^\W\d]\w*")
_NUMBER = re.compile(r"0[xX]\w*|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d*)?")


def _tokens(text: str) -> Iterator[_Token]:
    pos = 0
    while True:
        match = _WHITESPACE.match(text, pos)
        if match:
            pos = match.end()
        if pos >= len(text):
            yield _Token(_Kind.EOF, "")
            return
        for kind, pattern in ((_Kind.IDENT, _IDENT), (_Kind.NUMBER, _NUMBER)):
            match = pattern.match(text, pos)
            if match:
                yield _Token(kind, match.group())
                pos = match.end()
                break
        else:
            yield _Token(_Kind.CHAR, text[pos])
            pos += 1


def _precedence(token: _Token) -> int:
    if token.kind is _Kind.CHAR:
        if token.text in ("*", "/"):
            return 2
        if token.text in ("+", "-"):
            return 1
    return 0


# ---- parser ----


class _Parser:
    def __init__(self, text: str) -> None:
        self._stream = _tokens(text)
        self.token = next(self._stream)

    def next(self) -> None:
        self.token = next(self._stream)

    def at(self, ch: str) -> bool:
        return self.token.kind is _Kind.CHAR and self.token.text == ch

    def describe(self) -> str:
        kind = self.token.kind
        if kind is _Kind.EOF:
            return "end of file"
        if kind is _Kind.IDENT:
            return f"identifier {self.token.text}"
        if kind is _Kind.NUMBER:
            return f"number {self.token.text}"
        return _quote_rune(self.token.text)

    def expect_close(self) -> None:
        if not self.at(")"):
            raise ExprError(f"got {self.describe()}, want ')'")
        self.next()

    def expr(self) -> Expr:
        return self.binary(1)

    def binary(self, min_prec: int) -> Expr:
        lhs = self.unary()
        prec = _precedence(self.token)
        while prec >= min_prec:
            while _precedence(self.token) == prec:
                op = self.token.text
                self.next()
                rhs = self.binary(prec + 1)
                lhs = Binary(op, lhs, rhs)
            prec -= 1
        return lhs

    def unary(self) -> Expr:
        if self.at("+") or self.at("-"):
            op = self.token.text
            self.next()
            return Unary(op, self.unary())
        return self.primary()

    def primary(self) -> Expr:
        token = self.token
        if token.kind is _Kind.IDENT:
            self.next()
            if not self.at("("):
                return Var(token.text)
            self.next()
            args: list[Expr] = []
            if not self.at(")"):
                args.append(self.expr())
                while self.at(","):
                    self.next()
                    args.append(self.expr())
            self.expect_close()
            return Call(token.text, tuple(args))
        if token.kind is _Kind.NUMBER:
            try:
                value = float(token.text)
            except ValueError:
                raise ExprError(f'parsing "{token.text}": invalid syntax') from None
            self.next()
            return Literal(value)
        if self.at("("):
            self.next()
            inner = self.expr()
            self.expect_close()
            return inner
        raise ExprError(f"unexpected {self.describe()}")


def parse(text: str) -> Expr:
    """Parse text as an arithmetic expression."""
    parser = _Parser(text)
    result = parser.expr()
    if parser.token.kind is not _Kind.EOF:
        raise ExprError(f"unexpected {parser.describe()}")
    return result


def _write(parts: list[str], e: Expr) -> None:
    if isinstance(e, Literal):
        parts.append(_format_g(e.value))
    elif isinstance(e, Var):
        parts.append(str(e))
    elif isinstance(e, Unary):
        parts.append(f"({e.op}")
        _write(parts, e.x)
        parts.append(")")
    elif isinstance(e, Binary):
        parts.append("(")
        _write(parts, e.x)
        parts.append(f" {e.op} ")
        _write(parts, e.y)
        parts.append(")")
    elif isinstance(e, Call):
        parts.append(f"{e.fn}(")
        for position, arg in enumerate(e.args):
            if position:
                parts.append(", ")
            _write(parts, arg)
        parts.append(")")
    else:
        raise TypeError(f"unknown Expr: {type(e).__name__}")


def format_expr(expr: Expr) -> str:
    """Format an expression as a string, fully parenthesised."""
    parts: list[str] = []
    _write(parts, expr)
    return "".join(parts)