"""A text spinner shown while a slow Fibonacci number is computed."""

from __future__ import annotations

import argparse
import sys
import threading
from typing import Callable, Optional

Writer = Callable[[str], object]

FRAMES = "-\\|/"


def fib(x: int) -> int:
    """Return the x-th Fibonacci number, computed slowly by plain recursion."""
    if x < 2:
        return x
    return fib(x - 1) + fib(x - 2)


def _stdout_write(text: str) -> None:
    sys.stdout.write(text)
    sys.stdout.flush()


def spinner(delay: float, stop: threading.Event, write: Optional[Writer] = None) -> None:
    """Draw spinner frames every delay seconds until stop is set."""
    out = write or _stdout_write
    while not stop.is_set():
        for frame in FRAMES:
            out(f"\r{frame}")
            if stop.wait(delay):
                return


def main(argv=None) -> int:
    """Compute a Fibonacci number while a spinner turns."""
    parser = argparse.ArgumentParser(prog="spinner", description="Compute a Fibonacci number.")
    parser.add_argument("n", nargs="?", type=int, default=45)
    args = parser.parse_args(argv)
    stop = threading.Event()
    thread = threading.Thread(target=spinner, args=(0.1, stop), daemon=True)
    thread.start()
    try:
        result = fib(args.n)
    finally:
        stop.set()
        thread.join()
    print(f"\rFibonacci({args.n}) = {result}")
    return 0