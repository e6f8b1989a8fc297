"""Disk usage of the files under one or more directories."""

from __future__ import annotations

import argparse
import os
import sys
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, Iterator, Optional

_MAX_OPEN_DIRS = 20
_TICK = 0.5

# Limits how many directories are read at once.
_sema = threading.BoundedSemaphore(_MAX_OPEN_DIRS)


def dirents(directory: str) -> list[os.DirEntry]:
    """Return the entries of directory sorted by name, or [] after reporting an error."""
    with _sema:
        try:
            with os.scandir(directory) as it:
                return sorted(it, key=lambda entry: entry.name)
        except OSError as err:
            print(f"du: {err}", file=sys.stderr)
            return []


def _classify(entry: os.DirEntry) -> tuple[bool, int]:
    """Return whether entry is a directory and, if not, its size."""
    if entry.is_dir(follow_symlinks=False):
        return True, 0
    return False, entry.stat(follow_symlinks=False).st_size


def walk_dir(directory: str, cancel: Optional[threading.Event] = None) -> Iterator[int]:
    """Yield the size of every file in the tree rooted at directory."""
    if cancel is not None and cancel.is_set():
        return
    for entry in dirents(directory):
        try:
            is_dir, size = _classify(entry)
        except OSError as err:
            print(f"du: {err}", file=sys.stderr)
            continue
        if is_dir:
            yield from walk_dir(entry.path, cancel)
        else:
            yield size


def format_usage(nfiles: int, nbytes: int) -> str:
    """Return the totals as "N files  X.Y GB"."""
    return f"{nfiles} files  {nbytes / 1e9:.1f} GB"


class _Traversal:
    """Walks directories in parallel, keeping running totals."""

    def __init__(self, cancel: Optional[threading.Event]) -> None:
        self._cancel = cancel
        self._cond = threading.Condition()
        self._pending = 0
        self._nfiles = 0
        self._nbytes = 0
        self._pool = ThreadPoolExecutor(max_workers=_MAX_OPEN_DIRS)

    @property
    def totals(self) -> tuple[int, int]:
        with self._cond:
            return self._nfiles, self._nbytes

    def start(self, roots: Iterable[str]) -> None:
        for root in roots:
            self._submit(root)

    def _submit(self, directory: str) -> None:
        with self._cond:
            self._pending += 1
        self._pool.submit(self._walk, directory)

    def _cancelled(self) -> bool:
        return self._cancel is not None and self._cancel.is_set()

    def _walk(self, directory: str) -> None:
        try:
            if self._cancelled():
                return
            for entry in dirents(directory):
                try:
                    is_dir, size = _classify(entry)
                except OSError as err:
                    print(f"du: {err}", file=sys.stderr)
                    continue
                if is_dir:
                    self._submit(entry.path)
                else:
                    with self._cond:
                        self._nfiles += 1
                        self._nbytes += size
        finally:
            with self._cond:
                self._pending -= 1
                if self._pending == 0:
                    self._cond.notify_all()

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Wait until every directory has been walked; return whether that happened."""
        with self._cond:
            return self._cond.wait_for(lambda: self._pending == 0, timeout)

    def shutdown(self) -> None:
        self._pool.shutdown(wait=True)


def disk_usage(roots: Iterable[str] = (), cancel: Optional[threading.Event] = None) -> tuple[int, int]:
    """Return the number of files and their total size under roots ("." if none)."""
    roots = list(roots) or ["."]
    traversal = _Traversal(cancel)
    try:
        traversal.start(roots)
        traversal.wait()
    finally:
        traversal.shutdown()
    return traversal.totals


def _cancel_on_input(cancel: threading.Event) -> None:
    sys.stdin.read(1)
    cancel.set()


def main(argv=None) -> int:
    """Print the disk usage of the given directories; return stops it when interactive."""
    parser = argparse.ArgumentParser(prog="du", description="Compute disk usage.")
    parser.add_argument("-v", action="store_true", help="show verbose progress messages")
    parser.add_argument("roots", nargs="*")
    args = parser.parse_args(argv)
    roots = args.roots or ["."]

    cancel = threading.Event()
    if sys.stdin is not None and sys.stdin.isatty():
        threading.Thread(target=_cancel_on_input, args=(cancel,), daemon=True).start()

    traversal = _Traversal(cancel)
    try:
        traversal.start(roots)
        while not traversal.wait(_TICK):
            if cancel.is_set():
                traversal.wait()
                return 0
            if args.v:
                print(format_usage(*traversal.totals), flush=True)
        if cancel.is_set():
            return 0
    finally:
        traversal.shutdown()
    print(format_usage(*traversal.totals))
    return 0