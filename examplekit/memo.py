"""Concurrency-safe memoization of a function of a string key."""

from __future__ import annotations

import queue
import threading
import urllib.error
import urllib.request
from typing import Any, Callable, Optional

Func = Callable[[str], Any]


class _Entry:
    """The result of one call of the memoized function, once ready."""

    __slots__ = ("value", "error", "ready")

    def __init__(self) -> None:
        self.value: Any = None
        self.error: Optional[Exception] = None
        self.ready = threading.Event()

    def call(self, f: Func, key: str) -> None:
        try:
            self.value = f(key)
        except Exception as err:
            self.error = err
        finally:
            self.ready.set()

    def deliver(self, response: queue.Queue) -> None:
        self.ready.wait()
        response.put(self)

    def result(self) -> Any:
        if self.error is not None:
            raise self.error
        return self.value


class Memo:
    """Caches the results of f; the first caller for a key computes it, others wait."""

    def __init__(self, f: Func) -> None:
        self._f = f
        self._lock = threading.Lock()
        self._cache: dict[str, _Entry] = {}

    def get(self, key: str) -> Any:
        """Return f(key), computing it at most once; a cached error is raised again."""
        with self._lock:
            entry = self._cache.get(key)
            first = entry is None
            if first:
                entry = self._cache[key] = _Entry()
        if first:
            entry.call(self._f, key)
        else:
            entry.ready.wait()
        return entry.result()


class MonitorMemo:
    """Caches the results of f in a monitor thread; call close when done."""

    def __init__(self, f: Func) -> None:
        self._requests: queue.Queue = queue.Queue()
        self._lock = threading.Lock()
        self._closed = False
        self._server = threading.Thread(target=self._serve, args=(f,), daemon=True)
        self._server.start()

    def _serve(self, f: Func) -> None:
        cache: dict[str, _Entry] = {}
        for key, response in iter(self._requests.get, None):
            entry = cache.get(key)
            if entry is None:
                entry = cache[key] = _Entry()
                threading.Thread(target=entry.call, args=(f, key), daemon=True).start()
            threading.Thread(target=entry.deliver, args=(response,), daemon=True).start()

    def get(self, key: str) -> Any:
        """Return f(key), computing it at most once; a cached error is raised again."""
        response: queue.Queue = queue.Queue(maxsize=1)
        with self._lock:
            if self._closed:
                raise RuntimeError("memo is closed")
            self._requests.put((key, response))
        return response.get().result()

    def close(self) -> None:
        """Stop the monitor thread; later calls to get raise RuntimeError."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
            self._requests.put(None)
        self._server.join()

    def __enter__(self) -> MonitorMemo:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


def http_get_body(url: str) -> bytes:
    """Fetch url and return its body, whatever the response status."""
    try:
        response = urllib.request.urlopen(url)
    except urllib.error.HTTPError as err:
        with err:
            return err.read()
    with response:
        return response.read()