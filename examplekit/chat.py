"""A chat server that relays each client's lines to every connected client."""

from __future__ import annotations

import argparse
import logging
import queue
import socket
import threading

log = logging.getLogger(__name__)


class Broadcaster:
    """Relays messages to every client queue that has entered and not yet left.

    A client is a queue of outgoing messages; None on the queue means it is closed.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._clients: set[queue.Queue] = set()

    def enter(self, client: queue.Queue) -> None:
        """Start delivering broadcast messages to client."""
        with self._lock:
            self._clients.add(client)

    def leave(self, client: queue.Queue) -> None:
        """Stop delivering to client and close its queue."""
        with self._lock:
            self._clients.discard(client)
        client.put(None)

    def broadcast(self, message: str) -> None:
        """Send message to every client currently connected."""
        with self._lock:
            for client in self._clients:
                client.put(message)


def _line_text(line: bytes) -> str:
    return line.rstrip(b"\n").removesuffix(b"\r").decode("utf-8", errors="replace")


def _address(conn: socket.socket) -> str:
    try:
        peer = conn.getpeername()
    except OSError:
        return "unknown"
    if isinstance(peer, tuple):
        host, port = peer[0], peer[1]
        return f"[{host}]:{port}" if ":" in host else f"{host}:{port}"
    return str(peer) or "unknown"


def _client_writer(conn: socket.socket, outgoing: queue.Queue) -> None:
    for message in iter(outgoing.get, None):
        try:
            conn.sendall(f"{message}\n".encode("utf-8"))
        except OSError:
            pass  # network errors are ignored; keep draining the queue


def handle_conn(conn: socket.socket, broadcaster: Broadcaster) -> None:
    """Serve one chat client until it disconnects, then close conn."""
    outgoing: queue.Queue = queue.Queue()
    writer = threading.Thread(target=_client_writer, args=(conn, outgoing), daemon=True)
    writer.start()

    who = _address(conn)
    outgoing.put("You are " + who)
    broadcaster.broadcast(who + " has arrived")
    broadcaster.enter(outgoing)

    try:
        with conn.makefile("rb") as reader:
            for line in reader:
                broadcaster.broadcast(f"{who}: {_line_text(line)}")
    except OSError:
        pass

    broadcaster.leave(outgoing)
    broadcaster.broadcast(who + " has left")
    writer.join()
    conn.close()


def serve(host: str = "localhost", port: int = 8000) -> None:
    """Accept chat clients on host:port forever."""
    broadcaster = Broadcaster()
    with socket.create_server((host, port)) as listener:
        while True:
            try:
                conn, _ = listener.accept()
            except OSError as err:
                log.error("%s", err)
                continue
            threading.Thread(target=handle_conn, args=(conn, broadcaster), daemon=True).start()


def main(argv=None) -> int:
    """Run the chat server."""
    parser = argparse.ArgumentParser(prog="chat", description="A chat server.")
    parser.add_argument("--host", default="localhost")
    parser.add_argument("--port", type=int, default=8000)
    args = parser.parse_args(argv)
    logging.basicConfig(format="%(asctime)s %(message)s", datefmt="%Y/%m/%d %H:%M:%S")
    try:
        serve(args.host, args.port)
    except OSError as err:
        log.critical("%s", err)
        return 1
    return 0