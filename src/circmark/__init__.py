# src/circmark/__init__.py
import logging

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())
logger.debug("circmark package initialized.")

from .config import CircmarkConfig, LayoutConfig, SvgConfig, ConfigError, load_config
from .parser import (
    CircmarkParser, parse, tokenize,
    Element, ElementKind, SeriesGroup, ParallelGroup, LinkKind, TwoportLink, TwoportNetwork,
    CircmarkParseError, LexError, CircmarkSyntaxError,
)
from .layout import LayoutEngine, LayoutNode, layout
from .validation import LayoutValidator, LayoutValidationError
from .analysis import ConnectivityAnalyzer
from .draw import SvgRenderer
from .render import CircmarkRenderer
from .errors import CircmarkError, RenderError, DiagnosableError

__all__ = [
    # Configuration
    "CircmarkConfig", "LayoutConfig", "SvgConfig", "ConfigError", "load_config",
    # Parser
    "CircmarkParser", "parse", "tokenize",
    # Topology Tree
    "Element", "ElementKind", "SeriesGroup", "ParallelGroup", "LinkKind", "TwoportLink", "TwoportNetwork",
    # Layout
    "LayoutEngine", "LayoutNode", "layout",
    # Validation & Analysis
    "LayoutValidator", "LayoutValidationError", "ConnectivityAnalyzer",
    # Rendering
    "SvgRenderer", "CircmarkRenderer",
    # Errors (Actionable Diagnostics)
    "CircmarkError", "RenderError", "DiagnosableError",
    "CircmarkParseError", "LexError", "CircmarkSyntaxError",
]
