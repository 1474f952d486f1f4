# src/circmark/analysis/connectivity.py
"""
Connectivity analysis of a positioned layout.

The wires and element ports of a layout form a graph whose vertices are the
points where something terminates. Its connected components are the circuit's
electrical nodes, and any vertex where three or more connections meet is a
junction that the diagram marks with a dot.
"""
import logging
from collections import Counter
from typing import Dict, FrozenSet, List, Optional, Tuple

import networkx as nx

from ..geometry import Point
from ..layout.nodes import LayoutNode
from ..parser.tree import Element

logger = logging.getLogger(__name__)

PointKey = Tuple[float, float]

# Coordinates are rounded before use as graph vertices so that points computed
# along different paths through the tree coincide.
_KEY_DIGITS = 6


def _key(point: Point) -> PointKey:
    return (round(point.x, _KEY_DIGITS), round(point.y, _KEY_DIGITS))


class ConnectivityAnalyzer:
    """
    Builds the wire graph of a layout once and answers connectivity queries.

    Element bodies do not connect their two ports: an electrical node is a set
    of points joined by wires only.
    """

    def __init__(self, layout: LayoutNode):
        self.layout = layout
        self._graph: Optional[nx.Graph] = None
        self._terminals: Counter = Counter()

    @property
    def graph(self) -> nx.Graph:
        if self._graph is None:
            self._build_graph()
        return self._graph

    def _build_graph(self):
        logger.debug("Building wire connectivity graph...")
        graph = nx.Graph()
        terminals: Counter = Counter()
        segments: List[Tuple[PointKey, PointKey]] = []
        for layout_node in self.layout.walk():
            if isinstance(layout_node.node, Element):
                for port in (layout_node.abs_left_port, layout_node.abs_right_port):
                    key = _key(port)
                    graph.add_node(key)
                    terminals[key] += 1
            for wire in layout_node.wires:
                segments.append((_key(wire.start), _key(wire.end)))

        # Nested parallel groups can share a bus line, so a wire may run past a
        # port or another wire's end. Such points become vertices of their own.
        vertices = set(graph.nodes)
        for start, end in segments:
            vertices.update((start, end))
        for start, end in segments:
            stops = sorted({start, end} | {v for v in vertices if _strictly_inside(v, start, end)})
            nx.add_path(graph, stops)
        self._graph = graph
        self._terminals = terminals
        logger.debug(
            "Connectivity graph has %d vertices and %d wire segments.",
            graph.number_of_nodes(), graph.number_of_edges(),
        )

    def connection_count(self, point: Point) -> int:
        """Number of wire ends and element ports meeting at ``point``."""
        key = _key(point)
        graph = self.graph
        if key not in graph:
            return 0
        return graph.degree(key) + self._terminals[key]

    def junctions(self) -> List[Point]:
        """All points where three or more connections meet, sorted by (x, y)."""
        graph = self.graph
        keys = sorted(
            key for key in graph.nodes
            if graph.degree(key) + self._terminals[key] >= 3
        )
        return [Point(x, y) for x, y in keys]

    def electrical_nodes(self) -> List[FrozenSet[PointKey]]:
        """The connected components of the wire graph, ordered by their first point."""
        components = [frozenset(component) for component in nx.connected_components(self.graph)]
        return sorted(components, key=min)

    def node_of(self, point: Point) -> Optional[FrozenSet[PointKey]]:
        """The electrical node containing ``point``, or None if nothing terminates there."""
        key = _key(point)
        if key not in self.graph:
            return None
        return frozenset(nx.node_connected_component(self.graph, key))

    def port_nodes(self) -> Dict[str, Tuple[FrozenSet[PointKey], FrozenSet[PointKey]]]:
        """Maps each labelled element to the electrical nodes of its left and right ports."""
        result = {}
        for layout_node in self.layout.walk():
            if isinstance(layout_node.node, Element) and layout_node.node.label:
                result[layout_node.node.label] = (
                    self.node_of(layout_node.abs_left_port),
                    self.node_of(layout_node.abs_right_port),
                )
        return result


def _strictly_inside(point: PointKey, start: PointKey, end: PointKey) -> bool:
    """True if ``point`` lies on the axis-aligned segment between its two ends, excluding them."""
    (x, y), (x1, y1), (x2, y2) = point, start, end
    if x1 == x2 == x:
        return min(y1, y2) < y < max(y1, y2)
    if y1 == y2 == y:
        return min(x1, x2) < x < max(x1, x2)
    return False
