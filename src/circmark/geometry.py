# src/circmark/geometry.py
"""
Geometry primitives shared by the layout engine, the validator and the diagram
adapter. Coordinates follow the drawing convention: +x right, +y down, origin
at the top-left corner of the document.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class Point:
    """A point (or an offset) in 2D space."""
    x: float
    y: float

    def __add__(self, other: Point) -> Point:
        return Point(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Point) -> Point:
        return Point(self.x - other.x, self.y - other.y)

    def transposed(self) -> Point:
        return Point(self.y, self.x)

    def as_tuple(self) -> Tuple[float, float]:
        return (self.x, self.y)


@dataclass(frozen=True)
class Wire:
    """A straight connecting wire between two absolute points."""
    start: Point
    end: Point

    @property
    def is_horizontal(self) -> bool:
        return self.start.y == self.end.y

    @property
    def is_vertical(self) -> bool:
        return self.start.x == self.end.x

    @property
    def length(self) -> float:
        return abs(self.end.x - self.start.x) + abs(self.end.y - self.start.y)


@dataclass(frozen=True)
class Frame:
    """
    A local coordinate frame placed at ``origin``.

    When ``rotated`` is set the local axes are transposed: local x runs down
    the drawing and local y runs to the right. This is how a subcircuit hangs
    vertically from a twoport signal path, its left port on top.
    """
    origin: Point
    rotated: bool = False

    def offset(self, local: Point) -> Point:
        """Maps a local offset to a drawing-frame offset (no translation)."""
        return local.transposed() if self.rotated else local

    def point(self, local: Point) -> Point:
        """Maps a local point to an absolute drawing point."""
        return self.origin + self.offset(local)

    def wire(self, start: Point, end: Point) -> Wire:
        return Wire(self.point(start), self.point(end))
