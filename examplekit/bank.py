"""A concurrency-safe bank with a single account."""

from __future__ import annotations

import queue
import threading
from typing import NamedTuple


class Bank:
    """A single account whose balance is guarded by a lock."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._balance = 0

    def deposit(self, amount: int) -> None:
        """Add amount to the balance."""
        with self._lock:
            self._balance += amount

    def balance(self) -> int:
        """Return the current balance."""
        with self._lock:
            return self._balance


class _Deposit(NamedTuple):
    amount: int


class _Query(NamedTuple):
    reply: queue.Queue


class TellerBank:
    """A single account whose balance is confined to a teller thread."""

    def __init__(self) -> None:
        self._requests: queue.Queue = queue.Queue()
        self._lock = threading.Lock()
        self._closed = False
        self._teller = threading.Thread(target=self._serve, daemon=True)
        self._teller.start()

    def _serve(self) -> None:
        balance = 0
        for request in iter(self._requests.get, None):
            if isinstance(request, _Deposit):
                balance += request.amount
            else:
                request.reply.put(balance)

    def _submit(self, request) -> None:
        with self._lock:
            if self._closed:
                raise RuntimeError("bank is closed")
            self._requests.put(request)

    def deposit(self, amount: int) -> None:
        """Add amount to the balance."""
        self._submit(_Deposit(amount))

    def balance(self) -> int:
        """Return the current balance."""
        reply: queue.Queue = queue.Queue(maxsize=1)
        self._submit(_Query(reply))
        return reply.get()

    def close(self) -> None:
        """Stop the teller thread; later requests raise RuntimeError."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
            self._requests.put(None)
        self._teller.join()

    def __enter__(self) -> TellerBank:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()