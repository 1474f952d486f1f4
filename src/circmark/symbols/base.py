# src/circmark/symbols/base.py

import logging
from typing import ClassVar, Dict, Tuple

from ..geometry import Point
from ..parser.tree import ElementKind

logger = logging.getLogger(__name__)


class SymbolBase:
    """
    The base class for element symbols.

    The layout engine only needs a symbol's bounding box and where its two
    ports sit on that box; how the symbol is drawn inside the box belongs to
    the diagram adapter. Boxes are given in the unrotated frame, with the
    signal running left to right through the vertical centre.
    """
    kind: ClassVar[ElementKind]
    name: ClassVar[str] = "Symbol"
    width: ClassVar[float] = 100.0
    height: ClassVar[float] = 40.0

    @classmethod
    def size(cls) -> Tuple[float, float]:
        return (cls.width, cls.height)

    @classmethod
    def port_offsets(cls) -> Tuple[Point, Point]:
        """Left and right port offsets relative to the symbol's top-left corner."""
        centre_y = cls.height / 2
        return Point(0.0, centre_y), Point(cls.width, centre_y)


SYMBOL_REGISTRY: Dict[ElementKind, type] = {}


def register_symbol(kind: ElementKind):
    """
    A class decorator to register a symbol class for an element kind, making it
    available to the layout engine.
    """
    def decorator(cls):
        if not issubclass(cls, SymbolBase):
            raise TypeError(f"Class {cls.__name__} must inherit from SymbolBase.")
        if cls.width <= 0 or cls.height <= 0:
            raise TypeError(f"Symbol {cls.__name__} must declare a positive width and height.")

        if kind in SYMBOL_REGISTRY:
            logger.warning(f"Symbol for element kind '{kind.name}' is being redefined/overwritten.")
        cls.kind = kind
        SYMBOL_REGISTRY[kind] = cls
        logger.debug(f"Registered symbol '{kind.letter}' -> {cls.__name__}")
        return cls
    return decorator


def symbol_for(kind: ElementKind) -> type:
    """Looks up the registered symbol class for ``kind``. Raises KeyError if none is registered."""
    return SYMBOL_REGISTRY[kind]
