# src/circmark/symbols/__init__.py
import logging
logger = logging.getLogger(__name__)

# Import base first to define registry and decorator
from .base import SymbolBase, SYMBOL_REGISTRY, register_symbol, symbol_for
# Import concrete symbols to trigger registration
from .elements import (
    Capacitor,
    CurrentSource,
    Impedance,
    Inductor,
    OpenCircuit,
    Resistor,
    VoltageSource,
)

logger.debug(f"Available symbols: {[kind.letter for kind in SYMBOL_REGISTRY]}")

__all__ = [
    "SymbolBase",
    "SYMBOL_REGISTRY",
    "register_symbol",
    "symbol_for",
    "Resistor",
    "Impedance",
    "Capacitor",
    "Inductor",
    "VoltageSource",
    "CurrentSource",
    "OpenCircuit",
]
