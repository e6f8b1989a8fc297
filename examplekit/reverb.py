"""A TCP server that echoes each line back like a fading shout."""

from __future__ import annotations

import argparse
import logging
import socket
import threading
import time

log = logging.getLogger(__name__)


def _line_text(line: bytes) -> str:
    return line.rstrip(b"\n").removesuffix(b"\r").decode("utf-8", errors="replace")


def echo(conn, shout: str, delay: float = 1.0) -> None:
    """Send shout in upper case, as given and in lower case, delay apart."""
    try:
        conn.sendall(f"\t {shout.upper()}\n".encode("utf-8"))
        time.sleep(delay)
        conn.sendall(f"\t {shout}\n".encode("utf-8"))
        time.sleep(delay)
        conn.sendall(f"\t {shout.lower()}\n".encode("utf-8"))
    except OSError:
        pass  # the client has gone


def handle_conn(conn: socket.socket, delay: float = 1.0, concurrent: bool = False) -> None:
    """Echo each line from conn, one at a time or overlapping; close conn at end of input."""
    try:
        with conn.makefile("rb") as reader:
            for line in reader:
                shout = _line_text(line)
                if concurrent:
                    threading.Thread(target=echo, args=(conn, shout, delay), daemon=True).start()
                else:
                    echo(conn, shout, delay)
    except OSError:
        pass
    conn.close()


def main(argv=None) -> int:
    """Run the reverb server."""
    parser = argparse.ArgumentParser(prog="reverb", description="A TCP echo server.")
    parser.add_argument("--host", default="localhost")
    parser.add_argument("--port", type=int, default=8000)
    parser.add_argument("--concurrent", action="store_true", help="let echoes of several lines overlap")
    args = parser.parse_args(argv)
    logging.basicConfig(format="%(asctime)s %(message)s", datefmt="%Y/%m/%d %H:%M:%S")
    try:
        listener = socket.create_server((args.host, args.port))
    except OSError as err:
        log.critical("%s", err)
        return 1
    with listener:
        while True:
            try:
                conn, _ = listener.accept()
            except OSError as err:
                log.error("%s", err)  # e.g. connection aborted
                continue
            threading.Thread(
                target=handle_conn, args=(conn, 1.0, args.concurrent), daemon=True
            ).start()