# src/circmark/draw/svg.py
"""
SVG adapter: serializes a positioned layout tree to SVG markup.

All geometry comes from the layout; this module only decides what each
element kind looks like inside its bounding box. Symbols are drawn centred on
the origin with the signal running left to right, then moved into place with
a ``translate`` (plus ``rotate(90)`` for elements hanging in a twoport shunt).
"""
from __future__ import annotations

import logging
import math
import xml.etree.ElementTree as ET
from typing import Callable, Dict, Optional

import numpy as np

from ..analysis import ConnectivityAnalyzer
from ..config import SvgConfig
from ..layout.nodes import LayoutNode
from ..parser.tree import Element, ElementKind
from ..symbols import symbol_for

logger = logging.getLogger(__name__)

SVG_NS = "http://www.w3.org/2000/svg"
ET.register_namespace("", SVG_NS)


def _q(tag: str) -> str:
    return f"{{{SVG_NS}}}{tag}"


def _fmt(value: float) -> str:
    if math.isclose(value, round(value)):
        return str(int(round(value)))
    return f"{value:.3f}".rstrip("0").rstrip(".")


class SvgRenderer:
    """Renders `LayoutNode` trees as standalone SVG documents."""

    def __init__(self, config: Optional[SvgConfig] = None):
        self.config = config or SvgConfig()
        self._artwork: Dict[ElementKind, Callable[[ET.Element, float, float], None]] = {
            ElementKind.RESISTOR: self._draw_resistor,
            ElementKind.IMPEDANCE: self._draw_impedance,
            ElementKind.CAPACITOR: self._draw_capacitor,
            ElementKind.INDUCTOR: self._draw_inductor,
            ElementKind.VOLTAGE_SOURCE: self._draw_voltage_source,
            ElementKind.CURRENT_SOURCE: self._draw_current_source,
            ElementKind.OPEN_CIRCUIT: self._draw_open_circuit,
        }

    def render(self, layout: LayoutNode) -> str:
        """Returns the SVG document for ``layout`` as a string."""
        root = self.render_tree(layout)
        return ET.tostring(root, encoding="unicode")

    def render_tree(self, layout: LayoutNode) -> ET.Element:
        """Returns the SVG document for ``layout`` as an ElementTree element."""
        min_x, min_y, max_x, max_y = self._bounds(layout)
        margin = self.config.margin
        width = max_x - min_x + 2 * margin
        height = max_y - min_y + 2 * margin

        svg_root = ET.Element(_q("svg"), {
            "width": _fmt(width),
            "height": _fmt(height),
            "viewBox": " ".join(_fmt(v) for v in (min_x - margin, min_y - margin, width, height)),
        })
        wires = ET.SubElement(svg_root, _q("g"), {"class": "wires", **self._stroke_attrs()})
        for wire in layout.all_wires():
            ET.SubElement(wires, _q("path"), {
                "d": f"M {_fmt(wire.start.x)} {_fmt(wire.start.y)} L {_fmt(wire.end.x)} {_fmt(wire.end.y)}",
            })

        elements = ET.SubElement(svg_root, _q("g"), {"class": "elements", **self._stroke_attrs()})
        for layout_node in layout.walk():
            if isinstance(layout_node.node, Element):
                self._draw_element(elements, layout_node)

        junctions = ConnectivityAnalyzer(layout).junctions()
        if junctions:
            dots = ET.SubElement(svg_root, _q("g"), {"class": "junctions", "fill": self.config.stroke})
            for point in junctions:
                ET.SubElement(dots, _q("circle"), {
                    "cx": _fmt(point.x), "cy": _fmt(point.y), "r": _fmt(self.config.junction_radius),
                })
        logger.debug("Rendered SVG with %d junction(s).", len(junctions))
        return svg_root

    def _bounds(self, layout: LayoutNode):
        corners = np.array(
            [(n.origin.x, n.origin.y) for n in layout.walk()]
            + [(n.bottom_right.x, n.bottom_right.y) for n in layout.walk()],
            dtype=float,
        )
        min_x, min_y = corners.min(axis=0)
        max_x, max_y = corners.max(axis=0)
        return float(min_x), float(min_y), float(max_x), float(max_y)

    def _stroke_attrs(self) -> Dict[str, str]:
        return {
            "stroke": self.config.stroke,
            "stroke-width": _fmt(self.config.stroke_width),
            "fill": "none",
        }

    def _draw_element(self, parent: ET.Element, layout_node: LayoutNode) -> None:
        element: Element = layout_node.node
        centre_x = layout_node.origin.x + layout_node.width / 2
        centre_y = layout_node.origin.y + layout_node.height / 2
        transform = f"translate({_fmt(centre_x)},{_fmt(centre_y)})"
        if layout_node.rotated:
            transform += " rotate(90)"
        group = ET.SubElement(parent, _q("g"), {"class": element.kind.name.lower(), "transform": transform})
        ET.SubElement(group, _q("title")).text = f"{symbol_for(element.kind).name} {element.label}".rstrip()

        # Symbol extents in the symbol's own, unrotated frame.
        if layout_node.rotated:
            width, height = layout_node.height, layout_node.width
        else:
            width, height = layout_node.width, layout_node.height
        self._artwork[element.kind](group, width, height)

        if self.config.show_labels and element.label:
            self._draw_label(parent, layout_node, element.label)

    def _draw_label(self, parent: ET.Element, layout_node: LayoutNode, label: str) -> None:
        if layout_node.rotated:
            attrs = {
                "x": _fmt(layout_node.origin.x + layout_node.width + 4),
                "y": _fmt(layout_node.origin.y + layout_node.height / 2),
                "text-anchor": "start",
                "dominant-baseline": "middle",
            }
        else:
            attrs = {
                "x": _fmt(layout_node.origin.x + layout_node.width / 2),
                "y": _fmt(layout_node.origin.y - 2),
                "text-anchor": "middle",
            }
        attrs.update({
            "font-size": _fmt(self.config.font_size),
            "font-family": self.config.font_family,
            "fill": self.config.stroke,
            "stroke": "none",
        })
        text = ET.SubElement(parent, _q("text"), attrs)
        text.text = label

    # --- Artwork (symbol-local coordinates, centred on the origin) ---

    def _lead(self, group: ET.Element, x1: float, x2: float) -> None:
        ET.SubElement(group, _q("path"), {"d": f"M {_fmt(x1)} 0 L {_fmt(x2)} 0"})

    def _leads(self, group: ET.Element, width: float, body_half_width: float) -> None:
        self._lead(group, -width / 2, -body_half_width)
        self._lead(group, body_half_width, width / 2)

    def _draw_resistor(self, group: ET.Element, width: float, height: float) -> None:
        body_w, body_h = min(70.0, width * 0.7), min(20.0, height * 0.7)
        self._leads(group, width, body_w / 2)
        ET.SubElement(group, _q("rect"), {
            "x": _fmt(-body_w / 2), "y": _fmt(-body_h / 2),
            "width": _fmt(body_w), "height": _fmt(body_h),
        })

    def _draw_impedance(self, group: ET.Element, width: float, height: float) -> None:
        self._draw_resistor(group, width, height)
        group[-1].set("fill", "#d0d0d0")

    def _draw_capacitor(self, group: ET.Element, width: float, height: float) -> None:
        gap, plate = 5.0, height * 0.4
        self._leads(group, width, gap)
        for x in (-gap, gap):
            ET.SubElement(group, _q("path"), {"d": f"M {_fmt(x)} {_fmt(-plate)} L {_fmt(x)} {_fmt(plate)}"})

    def _draw_inductor(self, group: ET.Element, width: float, height: float) -> None:
        turns, radius = 3, min(10.0, width / 8)
        half = turns * radius
        self._leads(group, width, half)
        arc = f" a {_fmt(radius)} {_fmt(radius)} 0 0 1 {_fmt(2 * radius)} 0"
        ET.SubElement(group, _q("path"), {"d": f"M {_fmt(-half)} 0" + arc * turns})

    def _source_circle(self, group: ET.Element, width: float, height: float) -> float:
        radius = min(height, width) / 2 - 2
        self._leads(group, width, radius)
        ET.SubElement(group, _q("circle"), {"cx": "0", "cy": "0", "r": _fmt(radius)})
        return radius

    def _draw_voltage_source(self, group: ET.Element, width: float, height: float) -> None:
        radius = self._source_circle(group, width, height)
        mark, offset = radius / 4, radius / 2
        # '+' on the left-port side, '-' on the right-port side.
        ET.SubElement(group, _q("path"), {
            "d": (
                f"M {_fmt(-offset - mark)} 0 L {_fmt(-offset + mark)} 0 "
                f"M {_fmt(-offset)} {_fmt(-mark)} L {_fmt(-offset)} {_fmt(mark)} "
                f"M {_fmt(offset - mark)} 0 L {_fmt(offset + mark)} 0"
            ),
        })

    def _draw_current_source(self, group: ET.Element, width: float, height: float) -> None:
        radius = self._source_circle(group, width, height)
        tip, head = radius * 0.6, radius / 4
        ET.SubElement(group, _q("path"), {
            "d": (
                f"M {_fmt(-tip)} 0 L {_fmt(tip)} 0 "
                f"M {_fmt(tip - head)} {_fmt(-head)} L {_fmt(tip)} 0 L {_fmt(tip - head)} {_fmt(head)}"
            ),
        })

    def _draw_open_circuit(self, group: ET.Element, width: float, height: float) -> None:
        for x in (-width / 2, width / 2):
            ET.SubElement(group, _q("circle"), {
                "cx": _fmt(x), "cy": "0", "r": _fmt(self.config.terminal_radius), "fill": "white",
            })
