# src/circmark/layout/__init__.py
from .nodes import LayoutNode
from .engine import LayoutEngine, layout

__all__ = [
    "LayoutNode",
    "LayoutEngine",
    "layout",
]
