# tests/test_render.py

import pytest

from circmark import CircmarkConfig, CircmarkRenderer, LayoutConfig, RenderError
from circmark.parser import EmptyGroupError, LexError, NestingTooDeepError, SeriesGroup


@pytest.fixture
def renderer():
    return CircmarkRenderer()


def test_render_svg(renderer):
    svg = renderer.render_svg("|V1-R1|R2")
    assert svg.startswith("<svg")
    assert "V1" in svg and "R2" in svg


def test_parse_and_layout_stages(renderer):
    assert isinstance(renderer.parse("(R1+R2)"), SeriesGroup)
    assert renderer.layout("(R1+R2)").width == 200.0


def test_validation_can_be_enabled():
    renderer = CircmarkRenderer(CircmarkConfig(layout=LayoutConfig(validate=True)))
    assert renderer.layout("|(R1||R2)-(C1+L1)|(R3+(R4||R5))").rail is not None


@pytest.mark.parametrize("text, cause", [
    ("()", EmptyGroupError),
    ("R 1", LexError),
])
def test_errors_become_render_errors(renderer, text, cause):
    with pytest.raises(RenderError) as excinfo:
        renderer.render_svg(text)
    assert isinstance(excinfo.value.__cause__, cause)
    assert "circmark: Diagnostic Report" in str(excinfo.value)


def test_render_error_report_shows_the_input(renderer):
    with pytest.raises(RenderError) as excinfo:
        renderer.parse("(R1+R2")
    assert "Input:          '(R1+R2'" in str(excinfo.value)


def test_excessive_nesting(renderer):
    text = "(" * 5000 + "R1" + ")" * 5000
    with pytest.raises(RenderError, match="Nesting Too Deep") as excinfo:
        renderer.parse(text)
    assert isinstance(excinfo.value.__cause__, NestingTooDeepError)
