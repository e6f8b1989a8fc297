"""Serve SVG plots of the 3-D surface of a user-provided function."""

from __future__ import annotations

import math
from http import HTTPStatus
from typing import Callable
from urllib.parse import parse_qs
from wsgiref.simple_server import make_server

from .expr import Expr, ExprError, _format_g, parse

WIDTH, HEIGHT = 600, 320
CELLS = 100
XYRANGE = 30.0
XYSCALE = WIDTH / 2 / XYRANGE
ZSCALE = HEIGHT * 0.4

_SIN30, _COS30 = 0.5, math.sqrt(3.0 / 4.0)

Surface = Callable[[float, float], float]


def corner(f: Surface, i: int, j: int) -> tuple[float, float]:
    """Project the corner of grid cell (i, j) onto the 2-D canvas."""
    x = XYRANGE * (i / CELLS - 0.5)
    y = XYRANGE * (j / CELLS - 0.5)
    z = f(x, y)
    sx = WIDTH / 2 + (x - y) * _COS30 * XYSCALE
    sy = HEIGHT / 2 + (x + y) * _SIN30 * XYSCALE - z * ZSCALE
    return sx, sy


def surface(f: Surface) -> str:
    """Return an SVG drawing of the surface z = f(x, y)."""
    parts = [
        "<svg xmlns='http://www.w3.org/2000/svg' "
        "style='stroke: grey; fill: white; stroke-width: 0.7' "
        f"width='{WIDTH}' height='{HEIGHT}'>"
    ]
    for i in range(CELLS):
        for j in range(CELLS):
            points = (
                corner(f, i + 1, j),
                corner(f, i, j),
                corner(f, i, j + 1),
                corner(f, i + 1, j + 1),
            )
            coords = " ".join(f"{_format_g(px)},{_format_g(py)}" for px, py in points)
            parts.append(f"<polygon points='{coords}'/>\n")
    parts.append("</svg>\n")
    return "".join(parts)


def parse_and_check(text: str) -> Expr:
    """Parse text and check that it uses only the variables x, y and r."""
    if not text:
        raise ExprError("empty expression")
    expr = parse(text)
    found: set = set()
    expr.check(found)
    for name in sorted(found):
        if name not in ("x", "y", "r"):
            raise ExprError(f"undefined variable: {name}")
    return expr


def _merge(target: dict[str, list[str]], extra: dict[str, list[str]]) -> None:
    for key, values in extra.items():
        target.setdefault(key, []).extend(values)


def _form_values(environ) -> dict[str, list[str]]:
    values: dict[str, list[str]] = {}
    method = environ.get("REQUEST_METHOD", "GET").upper()
    content_type = environ.get("CONTENT_TYPE", "").split(";")[0].strip().lower()
    if method in ("POST", "PUT", "PATCH") and content_type == "application/x-www-form-urlencoded":
        try:
            length = int(environ.get("CONTENT_LENGTH") or 0)
        except ValueError:
            length = 0
        body = environ["wsgi.input"].read(length).decode("utf-8", errors="replace")
        _merge(values, parse_qs(body, keep_blank_values=True))
    _merge(values, parse_qs(environ.get("QUERY_STRING", ""), keep_blank_values=True))
    return values


def _status(code: HTTPStatus) -> str:
    return f"{code.value} {code.phrase}"


def plot_app(environ, start_response):
    """WSGI handler that plots the expression in the expr form value."""
    form = _form_values(environ)
    try:
        expr = parse_and_check(form.get("expr", [""])[0])
    except ExprError as err:
        start_response(
            _status(HTTPStatus.BAD_REQUEST),
            [
                ("Content-Type", "text/plain; charset=utf-8"),
                ("X-Content-Type-Options", "nosniff"),
            ],
        )
        return [f"bad expr: {err}\n".encode("utf-8")]

    def height(x: float, y: float) -> float:
        return expr.eval({"x": x, "y": y, "r": math.hypot(x, y)})

    body = surface(height).encode("utf-8")
    start_response(_status(HTTPStatus.OK), [("Content-Type", "image/svg+xml")])
    return [body]


def _app(environ, start_response):
    if environ.get("PATH_INFO", "") == "/plot":
        return plot_app(environ, start_response)
    start_response(
        _status(HTTPStatus.NOT_FOUND),
        [("Content-Type", "text/plain; charset=utf-8"), ("X-Content-Type-Options", "nosniff")],
    )
    return [b"404 page not found\n"]


def main(argv=None) -> int:
    """Serve /plot on localhost:8000."""
    with make_server("localhost", 8000, _app) as server:
        server.serve_forever()
    return 0