"""A rocket-launch countdown that can be aborted from standard input."""

from __future__ import annotations

import sys
import threading
import time
from typing import Callable, Optional

Writer = Callable[[str], object]


def launch(write: Optional[Writer] = None) -> None:
    """Announce the launch."""
    (write or sys.stdout.write)("Lift off!\n")


def countdown(
    start: int = 10,
    tick: float = 1.0,
    abort: Optional[threading.Event] = None,
    write: Optional[Writer] = None,
) -> bool:
    """Count down from start, one number per tick, then launch.

    Returns False if abort is set before the countdown ends.
    """
    out = write or sys.stdout.write
    for n in range(start, 0, -1):
        out(f"{n}\n")
        if abort is None:
            time.sleep(tick)
        elif abort.wait(tick):
            out("Launch aborted!\n")
            return False
    launch(out)
    return True


def _watch_stdin(abort: threading.Event) -> None:
    sys.stdin.read(1)
    abort.set()


def main(argv=None) -> int:
    """Count down to a launch; pressing return aborts it."""
    abort = threading.Event()
    threading.Thread(target=_watch_stdin, args=(abort,), daemon=True).start()
    print("Commencing countdown.  Press return to abort.", flush=True)
    countdown(10, 1.0, abort)
    return 0