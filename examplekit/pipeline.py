"""A three-stage pipeline: counter, squarer and printer."""

from __future__ import annotations

import argparse
import itertools
from typing import Iterable, Iterator, Optional


def counter(limit: Optional[int] = None) -> Iterator[int]:
    """Yield 0, 1, 2, ... up to but not including limit, or forever if limit is None."""
    if limit is None:
        yield from itertools.count()
    else:
        yield from range(limit)


def squarer(values: Iterable[int]) -> Iterator[int]:
    """Yield the square of each value."""
    for v in values:
        yield v * v


def run_pipeline(limit: Optional[int] = 100) -> Iterator[int]:
    """Yield the squares of the naturals below limit (all of them if None)."""
    return squarer(counter(limit))


def main(argv=None) -> int:
    """Print the squares of the naturals below a limit, or forever."""
    parser = argparse.ArgumentParser(prog="pipeline", description="Print square numbers.")
    parser.add_argument("limit", nargs="?", type=int, default=100)
    parser.add_argument("--forever", action="store_true", help="never stop")
    args = parser.parse_args(argv)
    for square in run_pipeline(None if args.forever else args.limit):
        print(square)
    return 0