"""A simulation of a concurrent cake shop with bakers, icers and an inscriber."""

from __future__ import annotations

import random
import sys
import threading
import time
from collections import deque
from dataclasses import dataclass
from typing import Any, Iterator


class _ChannelClosed(Exception):
    pass


class _Channel:
    """A queue with a fixed capacity; capacity 0 hands items over synchronously."""

    def __init__(self, capacity: int) -> None:
        self._capacity = capacity
        self._items: deque = deque()
        self._cond = threading.Condition()
        self._closed = False
        self._sent = 0
        self._received = 0

    def send(self, item: Any) -> None:
        with self._cond:
            self._cond.wait_for(lambda: len(self._items) < max(self._capacity, 1))
            self._items.append(item)
            self._sent += 1
            ticket = self._sent
            self._cond.notify_all()
            if self._capacity == 0:
                self._cond.wait_for(lambda: self._received >= ticket)

    def receive(self) -> Any:
        with self._cond:
            self._cond.wait_for(lambda: self._items or self._closed)
            if not self._items:
                raise _ChannelClosed
            item = self._items.popleft()
            self._received += 1
            self._cond.notify_all()
            return item

    def close(self) -> None:
        with self._cond:
            self._closed = True
            self._cond.notify_all()

    def __iter__(self) -> Iterator[Any]:
        while True:
            try:
                yield self.receive()
            except _ChannelClosed:
                return


def _work(duration: float, stddev: float) -> None:
    """Block for a time normally distributed around duration."""
    delay = duration + random.gauss(0.0, 1.0) * stddev
    time.sleep(max(delay, 0.0))


_print_lock = threading.Lock()


@dataclass
class Shop:
    """Parameters of the cake shop; times are in seconds."""

    verbose: bool = False
    cakes: int = 0
    bake_time: float = 0.0
    bake_std_dev: float = 0.0
    bake_buf: int = 0
    num_icers: int = 0
    ice_time: float = 0.0
    ice_std_dev: float = 0.0
    ice_buf: int = 0
    inscribe_time: float = 0.0
    inscribe_std_dev: float = 0.0

    def _say(self, action: str, cake: int) -> None:
        if self.verbose:
            with _print_lock:
                sys.stdout.write(f"{action} {cake}\n")

    def _baker(self, baked: _Channel) -> None:
        for cake in range(self.cakes):
            self._say("baking", cake)
            _work(self.bake_time, self.bake_std_dev)
            baked.send(cake)
        baked.close()

    def _icer(self, iced: _Channel, baked: _Channel) -> None:
        for cake in baked:
            self._say("icing", cake)
            _work(self.ice_time, self.ice_std_dev)
            iced.send(cake)

    def _inscriber(self, iced: _Channel) -> int:
        finished = 0
        for _ in range(self.cakes):
            cake = iced.receive()
            self._say("inscribing", cake)
            _work(self.inscribe_time, self.inscribe_std_dev)
            self._say("finished", cake)
            finished += 1
        return finished

    def work(self, runs: int = 1) -> int:
        """Run the simulation runs times; return the number of cakes finished."""
        if self.cakes > 0 and self.num_icers < 1:
            raise ValueError("a shop with cakes to bake needs at least one icer")
        finished = 0
        for _ in range(runs):
            baked = _Channel(self.bake_buf)
            iced = _Channel(self.ice_buf)
            workers = [threading.Thread(target=self._baker, args=(baked,), daemon=True)]
            workers.extend(
                threading.Thread(target=self._icer, args=(iced, baked), daemon=True)
                for _ in range(self.num_icers)
            )
            for worker in workers:
                worker.start()
            finished += self._inscriber(iced)
            for worker in workers:
                worker.join()
        return finished