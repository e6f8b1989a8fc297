"""Celsius and Fahrenheit temperatures and a command-line temperature flag."""

from __future__ import annotations

import argparse
import re

from .expr import _format_g, _quote_string

_NUMBER = re.compile(r"\s*([+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?)")
_UNIT = re.compile(r"\s*(\S+)")


class Celsius(float):
    """A temperature in degrees Celsius."""

    def __str__(self) -> str:
        return f"{_format_g(float(self))}\u00b0C"

    def __repr__(self) -> str:
        return f"Celsius({float(self)!r})"


class Fahrenheit(float):
    """A temperature in degrees Fahrenheit."""

    def __str__(self) -> str:
        return _format_g(float(self))

    def __repr__(self) -> str:
        return f"Fahrenheit({float(self)!r})"


def c_to_f(c: float) -> Fahrenheit:
    """Convert a Celsius temperature to Fahrenheit."""
    return Fahrenheit(c * 9.0 / 5.0 + 32.0)


def f_to_c(f: float) -> Celsius:
    """Convert a Fahrenheit temperature to Celsius."""
    return Celsius((f - 32.0) * 5.0 / 9.0)


def parse_celsius(text: str) -> Celsius:
    """Parse a quantity with a unit, such as "100C" or "212°F", as Celsius."""
    value, unit = 0.0, ""
    number = _NUMBER.match(text)
    if number:
        value = float(number.group(1))
        word = _UNIT.match(text, number.end())
        if word:
            unit = word.group(1)
    if unit in ("C", "\u00b0C"):
        return Celsius(value)
    if unit in ("F", "\u00b0F"):
        return f_to_c(Fahrenheit(value))
    raise ValueError(f"invalid temperature {_quote_string(text)}")


def _celsius_arg(text: str) -> Celsius:
    try:
        return parse_celsius(text)
    except ValueError as err:
        raise argparse.ArgumentTypeError(str(err)) from None


def celsius_flag(parser: argparse.ArgumentParser, name: str, value: float, usage: str) -> str:
    """Add a Celsius option called name to parser; return its namespace attribute."""
    parser.add_argument(
        f"-{name}",
        f"--{name}",
        dest=name,
        type=_celsius_arg,
        default=Celsius(value),
        help=usage,
        metavar="value",
    )
    return name


def main(argv=None) -> int:
    """Print the value of the -temp option."""
    parser = argparse.ArgumentParser(prog="tempflag", description="Print a temperature.")
    dest = celsius_flag(parser, "temp", 20.0, "the temperature")
    args = parser.parse_args(argv)
    print(getattr(args, dest))
    return 0