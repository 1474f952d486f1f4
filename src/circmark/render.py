# src/circmark/render.py

"""
Defines the CircmarkRenderer, the single entry point that turns circmark text
into a diagram.

It chains the stages text -> tokens -> topology tree -> positioned layout ->
SVG markup and acts as the gatekeeper for errors: any `DiagnosableError` raised
by a stage (lexing, parsing, layout validation) is converted into one
`RenderError` whose message is the stage's diagnostic report. The original,
structured error stays reachable as ``__cause__``.
"""

import logging
from typing import Optional

from .config import CircmarkConfig
from .draw import SvgRenderer
from .errors import DiagnosableError, RenderError
from .layout import LayoutEngine, LayoutNode
from .parser import CircmarkParser, DocumentNode
from .validation import LayoutValidator

logger = logging.getLogger(__name__)


class CircmarkRenderer:
    """
    Renders circmark documents with a fixed configuration. Holds no state
    between calls, so one instance may render any number of documents.
    """

    def __init__(self, config: Optional[CircmarkConfig] = None):
        self.config = config or CircmarkConfig()
        self._parser = CircmarkParser()
        self._engine = LayoutEngine(self.config.layout)
        self._svg = SvgRenderer(self.config.svg)

    def parse(self, text: str) -> DocumentNode:
        """Parses ``text``, raising `RenderError` on any lexical or syntax error."""
        return self._guarded(self._parser.parse, text)

    def layout(self, text: str) -> LayoutNode:
        """Parses and lays out ``text``."""
        return self._guarded(self._layout, text)

    def render_svg(self, text: str) -> str:
        """Parses, lays out and serializes ``text`` as an SVG document."""
        return self._guarded(lambda source: self._svg.render(self._layout(source)), text)

    def _layout(self, text: str) -> LayoutNode:
        logger.info(f"--- Rendering circmark document '{text}' ---")
        document = self._parser.parse(text)
        logger.debug("Parsed document: %s", document)
        layout = self._engine.layout(document)
        logger.info(f"Layout complete: {layout.width:g} x {layout.height:g}.")
        if self.config.layout.validate:
            LayoutValidator().validate_or_raise(layout)
        return layout

    def _guarded(self, stage, text: str):
        try:
            return stage(text)
        except DiagnosableError as e:
            logger.debug("Rendering failed: %s", e)
            raise RenderError(e.get_diagnostic_report()) from e
