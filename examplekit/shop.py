"""A small price-list web shop served over WSGI."""

from __future__ import annotations

from http import HTTPStatus
from typing import Iterable, Mapping, Union
from urllib.parse import parse_qs
from wsgiref.simple_server import make_server

from .expr import _quote_string

_TEXT = [("Content-Type", "text/plain; charset=utf-8")]


class Dollars(float):
    """An amount of money in dollars."""

    def __str__(self) -> str:
        return f"${float(self):.2f}"

    def __repr__(self) -> str:
        return f"Dollars({float(self)!r})"


class Database(dict):
    """Maps item names to their prices."""

    def __init__(
        self,
        items: Union[Mapping[str, float], Iterable[tuple[str, float]]] = (),
        **kwargs: float,
    ) -> None:
        super().__init__()
        for name, price in dict(items, **kwargs).items():
            self[name] = price

    def __setitem__(self, name: str, price: float) -> None:
        super().__setitem__(name, Dollars(price))

    def list_items(self) -> list[str]:
        """Return one "item: $price" line per item."""
        return [f"{name}: {price}" for name, price in self.items()]

    def price(self, item: str) -> Dollars:
        """Return the price of item; raise KeyError if there is no such item."""
        return self[item]


def _status(code: HTTPStatus) -> str:
    return f"{code.value} {code.phrase}"


def make_app(db: Database):
    """Return a WSGI application serving /list and /price?item=name from db."""

    def app(environ, start_response):
        path = environ.get("PATH_INFO", "")
        query = environ.get("QUERY_STRING", "")
        status = HTTPStatus.OK
        if path == "/list":
            body = "".join(f"{line}\n" for line in db.list_items())
        elif path == "/price":
            item = parse_qs(query, keep_blank_values=True).get("item", [""])[0]
            try:
                body = f"{db.price(item)}\n"
            except KeyError:
                status = HTTPStatus.NOT_FOUND
                body = f"no such item: {_quote_string(item)}\n"
        else:
            status = HTTPStatus.NOT_FOUND
            url = f"{path}?{query}" if query else path
            body = f"no such page: {url}\n"
        start_response(_status(status), list(_TEXT))
        return [body.encode("utf-8")]

    return app


def main(argv=None) -> int:
    """Serve the shop on localhost:8000."""
    db = Database({"shoes": 50, "socks": 5})
    with make_server("localhost", 8000, make_app(db)) as server:
        server.serve_forever()
    return 0