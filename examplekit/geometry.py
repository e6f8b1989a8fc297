"""Points, paths and coloured points in the plane."""

from __future__ import annotations

import math
from dataclasses import dataclass
from itertools import pairwise


def _require_point(q: object) -> None:
    if not isinstance(q, Point):
        raise TypeError(f"cannot use {type(q).__name__} as Point")


@dataclass
class Point:
    """A point in the plane."""

    x: float
    y: float

    def distance(self, q: Point) -> float:
        """Return the straight-line distance from this point to q."""
        _require_point(q)
        return math.hypot(q.x - self.x, q.y - self.y)

    def scale_by(self, factor: float) -> None:
        """Scale both coordinates by factor, in place."""
        self.x *= factor
        self.y *= factor


def distance(p: Point, q: Point) -> float:
    """Return the straight-line distance between p and q."""
    _require_point(p)
    return p.distance(q)


class Path(list):
    """A journey connecting its points with straight lines."""

    def distance(self) -> float:
        """Return the distance travelled along the path."""
        return sum(a.distance(b) for a, b in pairwise(self))


@dataclass(frozen=True)
class RGBA:
    """A colour with red, green, blue and alpha channels of 0 to 255."""

    r: int
    g: int
    b: int
    a: int

    def __post_init__(self) -> None:
        for channel in (self.r, self.g, self.b, self.a):
            if not 0 <= channel <= 255:
                raise ValueError(f"colour channel {channel} out of range 0..255")


@dataclass
class ColoredPoint:
    """A point with a colour; the point may be shared with other values."""

    point: Point
    color: RGBA

    @property
    def x(self) -> float:
        return self.point.x

    @property
    def y(self) -> float:
        return self.point.y

    def distance(self, q: Point) -> float:
        """Return the distance from this point to the plain point q."""
        return self.point.distance(q)

    def scale_by(self, factor: float) -> None:
        """Scale the underlying point by factor, in place."""
        self.point.scale_by(factor)