# tests/test_parser/test_parser.py

import pytest

from circmark.parser import (
    CircmarkParser,
    Element,
    ElementKind,
    LinkKind,
    ParallelGroup,
    SeriesGroup,
    Token,
    TokenKind,
    TwoportLink,
    TwoportNetwork,
    parse,
)


def R(identifier):
    return Element(ElementKind.RESISTOR, identifier)


OPEN = Element(ElementKind.OPEN_CIRCUIT)


# --- Elements ---

@pytest.mark.parametrize("text, kind, identifier", [
    ("R1", ElementKind.RESISTOR, "1"),
    ("C27", ElementKind.CAPACITOR, "27"),
    ("Zth1", ElementKind.IMPEDANCE, "th1"),
    ("Lseries", ElementKind.INDUCTOR, "series"),
    ("Vin", ElementKind.VOLTAGE_SOURCE, "in"),
    ("I0", ElementKind.CURRENT_SOURCE, "0"),
])
def test_single_element(parser, text, kind, identifier):
    assert parser.parse(text) == Element(kind, identifier)


def test_element_label_and_notation():
    element = parse("Zth1")
    assert element.label == "Zth1"
    assert str(element) == "Zth1"
    assert OPEN.label == ""
    assert str(OPEN) == "O"


def test_bare_open_circuit_is_a_circuit():
    assert parse("O") == OPEN


# --- Groups and precedence ---

def test_series_group(parser):
    assert parser.parse("(R1+R2+R3)") == SeriesGroup((R("1"), R("2"), R("3")))


def test_parallel_group(parser):
    assert parser.parse("(R1||R2||R3)") == ParallelGroup((R("1"), R("2"), R("3")))


def test_parallel_binds_tighter_than_series(parser):
    tree = parser.parse("(R1+R2||R3)")
    assert tree == SeriesGroup((R("1"), ParallelGroup((R("2"), R("3")))))


def test_parentheses_override_precedence(parser):
    tree = parser.parse("((R4+R5)||R6)")
    assert tree == ParallelGroup((SeriesGroup((R("4"), R("5"))), R("6")))


def test_redundant_parentheses_around_single_element(parser):
    assert parser.parse("(R1)") == R("1")
    assert parser.parse("((C1))") == Element(ElementKind.CAPACITOR, "1")


def test_explicit_nesting_is_preserved(parser):
    tree = parser.parse("((R1+R2)+R3)")
    assert tree == SeriesGroup((SeriesGroup((R("1"), R("2"))), R("3")))


def test_open_circuit_inside_group(parser):
    assert parser.parse("(O||R1)") == ParallelGroup((OPEN, R("1")))


# --- Twoport networks ---

def test_twoport_with_open_ends(parser):
    tree = parser.parse("|O-R1|O")
    assert tree == TwoportNetwork((
        TwoportLink(LinkKind.SHUNT, OPEN),
        TwoportLink(LinkKind.SERIES, R("1")),
        TwoportLink(LinkKind.SHUNT, OPEN),
    ))


def test_voltage_divider_twoport(parser):
    tree = parser.parse("|V1-O|C1")
    assert [link.kind for link in tree.links] == [LinkKind.SHUNT, LinkKind.SERIES, LinkKind.SHUNT]
    assert tree.links[0].target == Element(ElementKind.VOLTAGE_SOURCE, "1")
    assert tree.links[1].target == OPEN
    assert tree.links[2].target == Element(ElementKind.CAPACITOR, "1")


def test_twoport_link_targets_may_be_groups(parser):
    tree = parser.parse("-(R1||R2)|(C1+L1)")
    assert tree.links[0] == TwoportLink(LinkKind.SERIES, ParallelGroup((R("1"), R("2"))))
    assert tree.links[1].target == SeriesGroup((
        Element(ElementKind.CAPACITOR, "1"), Element(ElementKind.INDUCTOR, "1"),
    ))


def test_single_link_twoport(parser):
    assert parser.parse("-R1") == TwoportNetwork((TwoportLink(LinkKind.SERIES, R("1")),))


# --- Token streams and notation round trip ---

def test_parse_tokens_accepts_double_pipe_token(parser):
    tokens = [
        Token(TokenKind.LPAREN, 0),
        Token(TokenKind.ELEMENT_LETTER, 1, "R"), Token(TokenKind.IDENTIFIER, 2, "1"),
        Token(TokenKind.DOUBLE_PIPE, 3),
        Token(TokenKind.ELEMENT_LETTER, 5, "R"), Token(TokenKind.IDENTIFIER, 6, "2"),
        Token(TokenKind.RPAREN, 7),
    ]
    assert parser.parse_tokens(tokens) == ParallelGroup((R("1"), R("2")))


@pytest.mark.parametrize("text", [
    "R1",
    "(R1+R2)",
    "(R1+R2||R3)",
    "((R4+R5)||R6)",
    "((R1||R2)||R3)",
    "|V1-R1|R2",
    "|O-(R1+C1)|O",
])
def test_notation_round_trip(parser, text):
    tree = parser.parse(text)
    assert str(tree) == text
    assert parser.parse(str(tree)) == tree


def test_trees_are_hashable_and_compare_by_value(parser):
    assert hash(parser.parse("(R1+R2||R3)")) == hash(parser.parse("(R1+(R2||R3))"))
    assert parser.parse("(R1+R2)") != parser.parse("(R2+R1)")


def test_parser_is_reusable():
    parser = CircmarkParser()
    first = parser.parse("(R1||R2)")
    parser.parse("|V1-R1|R2")
    assert parser.parse("(R1||R2)") == first


def test_identifier_absorbs_following_letters(parser):
    # Element letters are ordinary identifier characters once an identifier has started.
    assert parser.parse("R1R2") == R("1R2")
