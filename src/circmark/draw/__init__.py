# src/circmark/draw/__init__.py
from .svg import SvgRenderer

__all__ = [
    "SvgRenderer",
]
