# src/circmark/layout/nodes.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Optional, Tuple

from ..geometry import Point, Wire
from ..parser.tree import DocumentNode


@dataclass(frozen=True)
class LayoutNode:
    """
    A topology-tree node together with its final geometry.

    ``origin`` is the absolute top-left corner of the node's bounding box.
    ``width``/``height`` and the port offsets are expressed in the drawing
    frame, so for a ``rotated`` node (one hanging vertically inside a twoport
    shunt) the left port is on the top edge and the right port on the bottom
    edge. ``children`` follow the tree order: series members, parallel
    branches, or twoport link targets. ``wires`` are the connecting wires this
    node owns, in absolute coordinates.

    ``left_bus``/``right_bus`` are set for parallel groups: the coordinate of
    each bus along the signal axis (x, or y when rotated). ``rail`` is set for
    twoport networks: the absolute y of the return rail.
    """
    node: DocumentNode
    origin: Point
    width: float
    height: float
    left_port: Point
    right_port: Point
    rotated: bool = False
    children: Tuple[LayoutNode, ...] = ()
    wires: Tuple[Wire, ...] = ()
    left_bus: Optional[float] = None
    right_bus: Optional[float] = None
    rail: Optional[float] = None

    @property
    def abs_left_port(self) -> Point:
        return self.origin + self.left_port

    @property
    def abs_right_port(self) -> Point:
        return self.origin + self.right_port

    @property
    def bottom_right(self) -> Point:
        return Point(self.origin.x + self.width, self.origin.y + self.height)

    def walk(self) -> Iterator[LayoutNode]:
        """Yields this node and all of its descendants, parents first."""
        stack = [self]
        while stack:
            current = stack.pop()
            yield current
            stack.extend(reversed(current.children))

    def all_wires(self) -> Iterator[Wire]:
        for layout_node in self.walk():
            yield from layout_node.wires
