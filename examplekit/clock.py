"""A TCP server that writes the time to each client once a second."""

from __future__ import annotations

import argparse
import logging
import socket
import threading
import time

log = logging.getLogger(__name__)


def handle_conn(conn: socket.socket, interval: float = 1.0) -> None:
    """Write the time as HH:MM:SS every interval until the client goes; close conn."""
    with conn:
        while True:
            try:
                conn.sendall(time.strftime("%H:%M:%S\n").encode("ascii"))
            except OSError:
                return  # e.g. client disconnected
            time.sleep(interval)


def serve(host: str = "localhost", port: int = 8000, concurrent: bool = True) -> None:
    """Accept clients forever, serving them one at a time or concurrently."""
    with socket.create_server((host, port)) as listener:
        while True:
            try:
                conn, _ = listener.accept()
            except OSError as err:
                log.error("%s", err)  # e.g. connection aborted
                continue
            if concurrent:
                threading.Thread(target=handle_conn, args=(conn,), daemon=True).start()
            else:
                handle_conn(conn)


def main(argv=None) -> int:
    """Run the clock server."""
    parser = argparse.ArgumentParser(prog="clock", description="A TCP clock server.")
    parser.add_argument("--host", default="localhost")
    parser.add_argument("--port", type=int, default=8000)
    parser.add_argument("--sequential", action="store_true", help="handle one connection at a time")
    args = parser.parse_args(argv)
    logging.basicConfig(format="%(asctime)s %(message)s", datefmt="%Y/%m/%d %H:%M:%S")
    try:
        serve(args.host, args.port, not args.sequential)
    except OSError as err:
        log.critical("%s", err)
        return 1
    return 0