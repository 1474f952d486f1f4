# tests/conftest.py
import logging

import pytest

from circmark import CircmarkParser, LayoutConfig, LayoutEngine, parse


# Common fixtures for the parser and the layout engine
@pytest.fixture
def parser():
    return CircmarkParser()


@pytest.fixture
def engine():
    return LayoutEngine(LayoutConfig())


@pytest.fixture(autouse=True)
def restore_root_logging():
    """The CLI installs its own stderr handler on the root logger; drop it after every test."""
    root = logging.getLogger()
    level = root.level
    yield
    for handler in root.handlers[:]:
        if type(handler) is logging.StreamHandler:
            root.removeHandler(handler)
    root.setLevel(level)


# Helper fixture to parse and lay out in one step
@pytest.fixture
def layout_of():
    """Returns a function that parses text and returns its positioned layout tree."""
    def _layout_of(text: str, config: LayoutConfig = None):
        return LayoutEngine(config or LayoutConfig()).layout(parse(text))
    return _layout_of
