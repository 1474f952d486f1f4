# src/circmark/layout/engine.py
"""
The layout engine turns a topology tree into absolute 2D geometry.

It runs two passes:

1.  **Sizing (bottom-up):** every node gets a bounding box and left/right port
    offsets in its own, unrotated frame. Series members abut on a shared centre
    line; parallel branches stack with a fixed spacing between shared buses;
    twoport links form a horizontal chain above a return rail.

2.  **Positioning (top-down):** starting from the configured origin, every
    node receives its absolute origin and emits the wires it owns. A shunt
    target of a twoport is placed in a transposed frame so that it hangs from
    the signal line down to the rail.

The engine keeps no state between calls: laying out the same tree twice yields
identical geometry. It has no error conditions of its own; any tree the parser
produces can be laid out.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

from ..config import LayoutConfig
from ..geometry import Frame, Point, Wire
from ..parser.tree import (
    DocumentNode,
    Element,
    LinkKind,
    ParallelGroup,
    SeriesGroup,
    TwoportNetwork,
)
from ..symbols import symbol_for
from .nodes import LayoutNode

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Measure:
    """Result of the sizing pass for one node, in the node's own unrotated frame."""
    node: DocumentNode
    width: float
    height: float
    left_port: Point
    right_port: Point
    children: Tuple[_Measure, ...] = ()


@dataclass(frozen=True)
class _TwoportMetrics:
    signal_y: float
    shunt_top: float
    rail_y: float
    slot_widths: Tuple[float, ...]


class LayoutEngine:
    """Lays out topology trees using the spacing constants of a `LayoutConfig`."""

    def __init__(self, config: Optional[LayoutConfig] = None):
        self.config = config or LayoutConfig()

    def layout(self, root: DocumentNode) -> LayoutNode:
        """
        Computes the positioned layout tree for ``root``.

        Args:
            root: Any node produced by the parser.

        Returns:
            The positioned `LayoutNode` for ``root``, with its top-left corner at
            the configured origin.
        """
        measure = self._measure(root)
        logger.debug("Sizing pass complete: %s is %gx%g.", type(root).__name__, measure.width, measure.height)
        placed = self._place(measure, self.config.origin, rotated=False)
        logger.debug("Positioning pass complete.")
        return placed

    # --- Pass 1: sizing ---

    def _measure(self, node: DocumentNode) -> _Measure:
        if isinstance(node, Element):
            return self._measure_element(node)
        if isinstance(node, SeriesGroup):
            return self._measure_series(node)
        if isinstance(node, ParallelGroup):
            return self._measure_parallel(node)
        if isinstance(node, TwoportNetwork):
            return self._measure_twoport(node)
        raise TypeError(f"Cannot lay out object of type {type(node).__name__}")

    def _measure_element(self, node: Element) -> _Measure:
        symbol = symbol_for(node.kind)
        left, right = symbol.port_offsets()
        return _Measure(node, symbol.width, symbol.height, left, right)

    def _measure_series(self, node: SeriesGroup) -> _Measure:
        members = tuple(self._measure(member) for member in node.members)
        ascent = max(m.left_port.y for m in members)
        descent = max(m.height - m.left_port.y for m in members)
        width = sum(m.width for m in members)
        return _Measure(node, width, ascent + descent, Point(0.0, ascent), Point(width, ascent), members)

    def _measure_parallel(self, node: ParallelGroup) -> _Measure:
        branches = tuple(self._measure(branch) for branch in node.branches)
        width = max(b.width for b in branches)
        height = sum(b.height for b in branches) + self.config.parallel_spacing * (len(branches) - 1)
        return _Measure(node, width, height, Point(0.0, height / 2), Point(width, height / 2), branches)

    def _measure_twoport(self, node: TwoportNetwork) -> _Measure:
        targets = tuple(self._measure(link.target) for link in node.links)
        metrics = self._twoport_metrics(node, targets)
        width = sum(metrics.slot_widths)
        return _Measure(
            node, width, metrics.rail_y,
            Point(0.0, metrics.signal_y), Point(width, metrics.signal_y),
            targets,
        )

    def _twoport_metrics(self, node: TwoportNetwork, targets: Tuple[_Measure, ...]) -> _TwoportMetrics:
        series = [m for link, m in zip(node.links, targets) if link.kind is LinkKind.SERIES]
        shunts = [m for link, m in zip(node.links, targets) if link.kind is LinkKind.SHUNT]

        signal_y = max((m.left_port.y for m in series), default=0.0)
        lowest = signal_y + max((m.height - m.left_port.y for m in series), default=0.0)
        shunt_top = signal_y + self.config.shunt_lead
        if shunts:
            # A shunt target hangs rotated, so its length along the drop is its width.
            lowest = max(lowest, shunt_top + max(m.width for m in shunts))
        rail_y = lowest + self.config.rail_clearance

        slot_widths = tuple(
            m.width if link.kind is LinkKind.SERIES else max(self.config.shunt_stub, m.height)
            for link, m in zip(node.links, targets)
        )
        return _TwoportMetrics(signal_y, shunt_top, rail_y, slot_widths)

    # --- Pass 2: positioning ---

    def _place(self, measure: _Measure, origin: Point, rotated: bool) -> LayoutNode:
        frame = Frame(origin, rotated)
        node = measure.node
        if isinstance(node, Element):
            return self._node(measure, frame)
        if isinstance(node, SeriesGroup):
            return self._place_series(measure, frame)
        if isinstance(node, ParallelGroup):
            return self._place_parallel(measure, frame)
        if isinstance(node, TwoportNetwork):
            return self._place_twoport(measure, frame)
        raise TypeError(f"Cannot lay out object of type {type(node).__name__}")

    def _node(self, measure: _Measure, frame: Frame, **extra) -> LayoutNode:
        size = frame.offset(Point(measure.width, measure.height))
        return LayoutNode(
            node=measure.node,
            origin=frame.origin,
            width=size.x,
            height=size.y,
            left_port=frame.offset(measure.left_port),
            right_port=frame.offset(measure.right_port),
            rotated=frame.rotated,
            **extra,
        )

    def _place_series(self, measure: _Measure, frame: Frame) -> LayoutNode:
        centre_y = measure.left_port.y
        children = []
        x = 0.0
        for member in measure.children:
            child_origin = frame.point(Point(x, centre_y - member.left_port.y))
            children.append(self._place(member, child_origin, frame.rotated))
            x += member.width
        return self._node(measure, frame, children=tuple(children))

    def _place_parallel(self, measure: _Measure, frame: Frame) -> LayoutNode:
        width, spacing = measure.width, self.config.parallel_spacing
        centre_y = measure.left_port.y
        children: List[LayoutNode] = []
        wires: List[Wire] = []
        left_taps = {centre_y}
        right_taps = {centre_y}

        y = 0.0
        for branch in measure.children:
            x = (width - branch.width) / 2 if self.config.branch_alignment == "center" else 0.0
            children.append(self._place(branch, frame.point(Point(x, y)), frame.rotated))

            left_port = Point(x, y + branch.left_port.y)
            right_port = Point(x + branch.width, y + branch.right_port.y)
            _add_wire(wires, frame, Point(0.0, left_port.y), left_port)
            _add_wire(wires, frame, right_port, Point(width, right_port.y))
            left_taps.add(left_port.y)
            right_taps.add(right_port.y)
            y += branch.height + spacing

        # Buses are split at this group's own taps; taps of nested groups on the
        # same bus line are resolved by the connectivity analysis.
        for bus_x, taps in ((0.0, left_taps), (width, right_taps)):
            ordered = sorted(taps)
            for top, bottom in zip(ordered, ordered[1:]):
                _add_wire(wires, frame, Point(bus_x, top), Point(bus_x, bottom))

        left_bus = _along_signal(frame, frame.point(Point(0.0, centre_y)))
        right_bus = _along_signal(frame, frame.point(Point(width, centre_y)))
        return self._node(
            measure, frame,
            children=tuple(children), wires=tuple(wires),
            left_bus=left_bus, right_bus=right_bus,
        )

    def _place_twoport(self, measure: _Measure, frame: Frame) -> LayoutNode:
        node: TwoportNetwork = measure.node
        metrics = self._twoport_metrics(node, measure.children)
        signal_y, rail_y = metrics.signal_y, metrics.rail_y
        last = len(node.links) - 1
        children: List[LayoutNode] = []
        wires: List[Wire] = []

        x = 0.0
        for index, (link, target, slot_width) in enumerate(zip(node.links, measure.children, metrics.slot_widths)):
            end = x + slot_width
            if link.kind is LinkKind.SERIES:
                child_origin = frame.point(Point(x, signal_y - target.left_port.y))
                children.append(self._place(target, child_origin, frame.rotated))
                _add_wire(wires, frame, Point(x, rail_y), Point(end, rail_y))
            else:
                centre_x = x + slot_width / 2
                # The target's left port lands on (centre_x, shunt_top), its right port below it.
                child_origin = frame.point(Point(centre_x - target.left_port.y, metrics.shunt_top))
                children.append(self._place(target, child_origin, not frame.rotated))
                shunt_bottom = metrics.shunt_top + target.width
                _add_wire(wires, frame, Point(centre_x, signal_y), Point(centre_x, metrics.shunt_top))
                _add_wire(wires, frame, Point(centre_x, shunt_bottom), Point(centre_x, rail_y))
                if index > 0:
                    _add_wire(wires, frame, Point(x, signal_y), Point(centre_x, signal_y))
                    _add_wire(wires, frame, Point(x, rail_y), Point(centre_x, rail_y))
                if index < last:
                    _add_wire(wires, frame, Point(centre_x, signal_y), Point(end, signal_y))
                    _add_wire(wires, frame, Point(centre_x, rail_y), Point(end, rail_y))
            x = end

        logger.debug("Placed twoport with %d link(s); rail at y=%g.", len(node.links), rail_y)
        return self._node(
            measure, frame,
            children=tuple(children), wires=tuple(wires),
            rail=frame.point(Point(0.0, rail_y)).y,
        )


def _add_wire(wires: List[Wire], frame: Frame, start: Point, end: Point) -> None:
    if start != end:
        wires.append(frame.wire(start, end))


def _along_signal(frame: Frame, point: Point) -> float:
    return point.y if frame.rotated else point.x


def layout(root: DocumentNode, config: Optional[LayoutConfig] = None) -> LayoutNode:
    """Convenience wrapper around ``LayoutEngine(config).layout``."""
    return LayoutEngine(config).layout(root)
