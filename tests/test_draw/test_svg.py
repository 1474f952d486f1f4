# tests/test_draw/test_svg.py

import xml.etree.ElementTree as ET

import pytest

from circmark.config import SvgConfig
from circmark.draw import SvgRenderer
from circmark.draw.svg import SVG_NS

NS = {"svg": SVG_NS}


def render(layout, config=None):
    return ET.fromstring(SvgRenderer(config).render(layout))


def group(root, name):
    return root.find(f"svg:g[@class='{name}']", NS)


def test_document_size_includes_margin(layout_of):
    root = render(layout_of("(R1+R2)"))
    assert root.tag == f"{{{SVG_NS}}}svg"
    assert root.get("width") == "260"
    assert root.get("height") == "90"
    assert root.get("viewBox") == "-30 -30 260 90"


def test_one_group_per_element(layout_of):
    root = render(layout_of("(R1+C1||L1)"))
    classes = [g.get("class") for g in group(root, "elements").findall("svg:g", NS)]
    assert classes == ["resistor", "capacitor", "inductor"]


def test_labels(layout_of):
    root = render(layout_of("|O-Zth1|O"))
    assert [t.text for t in root.iter(f"{{{SVG_NS}}}text")] == ["Zth1"]


def test_labels_can_be_hidden(layout_of):
    root = render(layout_of("(R1+R2)"), SvgConfig(show_labels=False))
    assert list(root.iter(f"{{{SVG_NS}}}text")) == []


def test_wires_are_paths(layout_of):
    root = render(layout_of("|V1-R1|R2"))
    paths = group(root, "wires").findall("svg:path", NS)
    assert len(paths) == 9
    assert "M 40 15 L 40 35" in [p.get("d") for p in paths]


def test_shunt_elements_are_rotated(layout_of):
    root = render(layout_of("|V1-R1|R2"))
    transforms = [g.get("transform") for g in group(root, "elements").findall("svg:g", NS)]
    assert transforms[0] == "translate(40,85) rotate(90)"
    assert transforms[1] == "translate(130,15)"


def test_junction_dots(layout_of):
    root = render(layout_of("(R1||R2||R3)"))
    dots = group(root, "junctions").findall("svg:circle", NS)
    assert [(d.get("cx"), d.get("cy")) for d in dots] == [("0", "65"), ("100", "65")]
    assert dots[0].get("r") == "3"


def test_no_junction_group_without_junctions(layout_of):
    assert group(render(layout_of("(R1+R2)")), "junctions") is None


def test_open_circuit_terminals(layout_of):
    root = render(layout_of("O"))
    terminals = group(root, "elements").find("svg:g[@class='open_circuit']", NS).findall("svg:circle", NS)
    assert len(terminals) == 2
    assert all(t.get("fill") == "white" for t in terminals)


@pytest.mark.parametrize("text", ["V1", "I1", "Z1", "C1", "L1", "R1"])
def test_every_element_kind_draws_artwork(layout_of, text):
    root = render(layout_of(text))
    element = group(root, "elements").find("svg:g", NS)
    assert len(element) >= 3


def test_style_is_configurable(layout_of):
    root = render(layout_of("(R1||R2||R3)"), SvgConfig(stroke="navy", stroke_width=1.5, margin=10.0))
    assert group(root, "wires").get("stroke") == "navy"
    assert group(root, "wires").get("stroke-width") == "1.5"
    assert root.get("viewBox") == "-10 -10 120 150"


def test_junction_dot_on_shared_bus_line(layout_of):
    root = render(layout_of("(((R1||R2||R3)+R4)||R5)"))
    dots = group(root, "junctions").findall("svg:circle", NS)
    assert ("0", "115") in [(d.get("cx"), d.get("cy")) for d in dots]
