"""Parsing and formatting of durations such as "1h15m30.5s", and a sleep command."""

from __future__ import annotations

import argparse
import re
import time
from fractions import Fraction

NS_PER_SECOND = 1_000_000_000
_NS_PER_MINUTE = 60 * NS_PER_SECOND

_UNITS = {
    "ns": 1,
    "us": 1_000,
    "\u00b5s": 1_000,
    "\u03bcs": 1_000,
    "ms": 1_000_000,
    "s": NS_PER_SECOND,
    "m": _NS_PER_MINUTE,
    "h": 60 * _NS_PER_MINUTE,
}

_NUMBER = re.compile(r"([0-9]*)(?:\.([0-9]*))?")
_UNIT = re.compile(r"[^0-9.]*")


def _quote(text: str) -> str:
    out = ['"']
    for ch in text:
        if ch in '"\\':
            out.append("\\" + ch)
        elif " " <= ch <= "~":
            out.append(ch)
        else:
            out.extend(f"\\x{byte:02x}" for byte in ch.encode("utf-8"))
    out.append('"')
    return "".join(out)


def parse_duration(text: str) -> float:
    """Parse a signed sequence of decimal numbers with units; return seconds."""
    quoted = _quote(text)
    rest = text
    negative = False
    if rest and rest[0] in "+-":
        negative = rest[0] == "-"
        rest = rest[1:]
    if rest == "0":
        return 0.0
    if not rest:
        raise ValueError(f"time: invalid duration {quoted}")
    limit = (1 << 63) if negative else (1 << 63) - 1
    total = 0
    while rest:
        number = _NUMBER.match(rest)
        whole, frac = number.group(1), number.group(2) or ""
        if not whole and not frac:
            raise ValueError(f"time: invalid duration {quoted}")
        rest = rest[number.end():]
        unit = _UNIT.match(rest).group()
        if not unit:
            raise ValueError(f"time: missing unit in duration {quoted}")
        scale = _UNITS.get(unit)
        if scale is None:
            raise ValueError(f"time: unknown unit {_quote(unit)} in duration {quoted}")
        rest = rest[len(unit):]
        total += int(whole or 0) * scale
        if frac:
            total += int(Fraction(int(frac), 10 ** len(frac)) * scale)
        if total > limit:
            raise ValueError(f"time: invalid duration {quoted}")
    return (-total if negative else total) / NS_PER_SECOND


def _frac(value: int, precision: int) -> str:
    whole, rem = divmod(value, 10**precision)
    digits = f"{rem:0{precision}d}".rstrip("0")
    return f"{whole}.{digits}" if digits else str(whole)


def format_duration(seconds: float) -> str:
    """Format a number of seconds in the form "72h3m0.5s"."""
    ns = round(seconds * NS_PER_SECOND)
    if ns == 0:
        return "0s"
    sign = "-" if ns < 0 else ""
    u = abs(ns)
    if u < NS_PER_SECOND:
        if u < 1_000:
            return f"{sign}{u}ns"
        if u < 1_000_000:
            return f"{sign}{_frac(u, 3)}\u00b5s"
        return f"{sign}{_frac(u, 6)}ms"
    text = _frac(u % _NS_PER_MINUTE, 9) + "s"
    minutes = u // _NS_PER_MINUTE
    if minutes:
        text = f"{minutes % 60}m{text}"
        hours = minutes // 60
        if hours:
            text = f"{hours}h{text}"
    return sign + text


def _duration_arg(text: str) -> float:
    try:
        return parse_duration(text)
    except ValueError as err:
        raise argparse.ArgumentTypeError(str(err)) from None


def main(argv=None) -> int:
    """Sleep for the period given by -period."""
    parser = argparse.ArgumentParser(prog="sleep", description="Sleep for a period of time.")
    parser.add_argument("-period", "--period", type=_duration_arg, default=1.0, help="sleep period")
    args = parser.parse_args(argv)
    print(f"Sleeping for {format_duration(args.period)}...", end="", flush=True)
    time.sleep(max(args.period, 0.0))
    print()
    return 0