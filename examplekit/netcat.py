"""A simple read/write client for TCP servers."""

from __future__ import annotations

import argparse
import logging
import socket
import sys
import threading
from typing import BinaryIO

log = logging.getLogger(__name__)

_CHUNK = 32 * 1024


def _copy(dst: BinaryIO, src: BinaryIO) -> int:
    read = getattr(src, "read1", None) or src.read
    total = 0
    while True:
        chunk = read(_CHUNK)
        if not chunk:
            return total
        dst.write(chunk)
        flush = getattr(dst, "flush", None)
        if flush is not None:
            flush()
        total += len(chunk)


def must_copy(dst: BinaryIO, src: BinaryIO) -> int:
    """Copy src to dst until end of input; return the bytes copied.

    Exits the program with status 1 on any I/O error.
    """
    try:
        return _copy(dst, src)
    except OSError as err:
        log.critical("%s", err)
        raise SystemExit(1) from err


def main(argv=None) -> int:
    """Connect to a server, copying standard input to it and its output to standard output."""
    parser = argparse.ArgumentParser(prog="netcat", description="A simple TCP client.")
    parser.add_argument("--host", default="localhost")
    parser.add_argument("--port", type=int, default=8000)
    parser.add_argument("--read-only", action="store_true", help="only print what the server sends")
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(message)s", datefmt="%Y/%m/%d %H:%M:%S")

    try:
        conn = socket.create_connection((args.host, args.port))
    except OSError as err:
        log.critical("%s", err)
        return 1

    with conn:
        if args.read_only:
            with conn.makefile("rb") as reader:
                must_copy(sys.stdout.buffer, reader)
            return 0

        def receive() -> None:
            try:
                with conn.makefile("rb") as reader:
                    _copy(sys.stdout.buffer, reader)
            except OSError:
                pass
            log.info("done")

        receiver = threading.Thread(target=receive, daemon=True)
        receiver.start()
        with conn.makefile("wb") as writer:
            must_copy(writer, sys.stdin.buffer)
        try:
            conn.shutdown(socket.SHUT_RDWR)
        except OSError:
            pass
        receiver.join()
    return 0