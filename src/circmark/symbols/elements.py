# src/circmark/symbols/elements.py
"""
Bounding boxes for the element symbols of the circmark notation.

Every two-terminal symbol spans the same width so that series chains line up
on a regular grid; heights follow the symbol's artwork.
"""
from ..parser.tree import ElementKind
from .base import SymbolBase, register_symbol


@register_symbol(ElementKind.RESISTOR)
class Resistor(SymbolBase):
    name = "Resistor"
    height = 30.0


@register_symbol(ElementKind.IMPEDANCE)
class Impedance(SymbolBase):
    name = "Impedance"
    height = 30.0


@register_symbol(ElementKind.CAPACITOR)
class Capacitor(SymbolBase):
    name = "Capacitor"
    height = 40.0


@register_symbol(ElementKind.INDUCTOR)
class Inductor(SymbolBase):
    name = "Inductor"
    height = 30.0


@register_symbol(ElementKind.VOLTAGE_SOURCE)
class VoltageSource(SymbolBase):
    name = "Voltage source"
    height = 50.0


@register_symbol(ElementKind.CURRENT_SOURCE)
class CurrentSource(SymbolBase):
    name = "Current source"
    height = 50.0


@register_symbol(ElementKind.OPEN_CIRCUIT)
class OpenCircuit(SymbolBase):
    """Two unconnected terminals."""
    name = "Open circuit"
    width = 60.0
    height = 20.0
