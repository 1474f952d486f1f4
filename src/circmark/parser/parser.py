# src/circmark/parser/parser.py
"""
Recursive-descent parser for the circmark notation.

Grammar (``+`` binds looser than ``||``; both are left-associative and flatten
into a single group per precedence level)::

    document       := twoport | subcircuit
    twoport        := link+
    link           := ('|' | '-') subcircuit
    subcircuit     := element | '(' series_group ')'
    series_group   := parallel_group ('+' parallel_group)*
    parallel_group := subcircuit ('||' subcircuit)*
    element        := 'O' | [RCLVIZ] identifier

The tokenizer emits every ``|`` as its own token. Two adjacent ``|`` tokens
are combined into the parallel operator only inside ``parallel_group``; at the
document and link level a ``|`` always starts a shunt link.
"""
import logging
from typing import Iterable, Iterator, List, Optional

from .exceptions import (
    EmptyGroupError,
    MissingIdentifierError,
    NestingTooDeepError,
    UnexpectedLetterError,
    UnexpectedTokenError,
)
from .lexer import tokenize
from .tokens import Token, TokenKind
from .tree import (
    CircuitNode,
    DocumentNode,
    Element,
    ElementKind,
    LinkKind,
    ParallelGroup,
    SeriesGroup,
    TwoportLink,
    TwoportNetwork,
)

logger = logging.getLogger(__name__)

_LINK_KINDS = {
    TokenKind.PIPE: LinkKind.SHUNT,
    TokenKind.DASH: LinkKind.SERIES,
}

_SUBCIRCUIT_START = "an element (O, R, C, L, V, I, Z) or '('"


class _TokenCursor:
    """One-token lookahead over a lazy token stream."""

    def __init__(self, tokens: Iterable[Token]):
        self._tokens: Iterator[Token] = iter(tokens)
        self._current: Optional[Token] = None
        self._end_position = 0

    @property
    def current(self) -> Token:
        if self._current is None:
            token = next(self._tokens, None)
            if token is None:
                # A hand-built stream may omit END_OF_INPUT.
                token = Token(TokenKind.END_OF_INPUT, self._end_position)
            self._current = token
        return self._current

    @property
    def position(self) -> int:
        """Offset just past the last consumed token."""
        return self._end_position

    def advance(self) -> Token:
        token = self.current
        if token.kind is not TokenKind.END_OF_INPUT:
            self._current = None
            self._end_position = token.position + len(token.value or " ")
        return token


class CircmarkParser:
    """
    Parses circmark text (or a token stream) into a topology tree.
    A parser instance holds no state between calls and may be reused freely.
    """

    def parse(self, text: str) -> DocumentNode:
        """
        Parses a complete circmark document.

        Args:
            text: The circmark notation, e.g. ``(R1+R2||R3)`` or ``|V1-R1|R2``.

        Returns:
            The root node: an ``Element``, ``SeriesGroup``, ``ParallelGroup`` or
            ``TwoportNetwork``.

        Raises:
            LexError: If the text contains a character outside the circmark alphabet.
            CircmarkSyntaxError: If the tokens do not follow the grammar, including
                NestingTooDeepError when groups nest past the recursion limit.
        """
        logger.debug("Parsing circmark document %r", text)
        return self.parse_tokens(tokenize(text), source=text)

    def parse_tokens(self, tokens: Iterable[Token], source: str = "") -> DocumentNode:
        """Parses an already tokenized document. ``source`` is used only for diagnostics."""
        run = _ParseRun(_TokenCursor(tokens), source)
        try:
            return run.document()
        except RecursionError as e:
            raise NestingTooDeepError(position=run.cursor.position, source=source) from e


class _ParseRun:
    """The state of a single parse: the token cursor and the source for diagnostics."""

    def __init__(self, cursor: _TokenCursor, source: str):
        self.cursor = cursor
        self.source = source

    # --- Productions ---

    def document(self) -> DocumentNode:
        if self.cursor.current.kind in _LINK_KINDS:
            root = self.twoport()
        else:
            root = self.subcircuit()
        self.expect(TokenKind.END_OF_INPUT, "end of input")
        return root

    def twoport(self) -> TwoportNetwork:
        links: List[TwoportLink] = []
        while self.cursor.current.kind in _LINK_KINDS:
            operator = self.cursor.advance()
            links.append(TwoportLink(_LINK_KINDS[operator.kind], self.subcircuit()))
        logger.debug("Parsed twoport network with %d link(s).", len(links))
        return TwoportNetwork(tuple(links))

    def subcircuit(self) -> CircuitNode:
        token = self.cursor.current
        if token.kind is TokenKind.LPAREN:
            self.cursor.advance()
            if self.cursor.current.kind is TokenKind.RPAREN:
                raise EmptyGroupError(position=token.position, source=self.source)
            group = self.series_group()
            self.expect(TokenKind.RPAREN, "'+', '||' or ')'")
            return group
        if token.kind in (TokenKind.ELEMENT_LETTER, TokenKind.OPEN_CIRCUIT):
            return self.element()
        raise self.unexpected(token, _SUBCIRCUIT_START)

    def series_group(self) -> CircuitNode:
        members = [self.parallel_group()]
        while self.cursor.current.kind is TokenKind.PLUS:
            self.cursor.advance()
            members.append(self.parallel_group())
        if len(members) == 1:
            return members[0]
        return SeriesGroup(tuple(members))

    def parallel_group(self) -> CircuitNode:
        branches = [self.subcircuit()]
        while self.accept_parallel_operator():
            branches.append(self.subcircuit())
        if len(branches) == 1:
            return branches[0]
        return ParallelGroup(tuple(branches))

    def element(self) -> Element:
        token = self.cursor.advance()
        if token.kind is TokenKind.OPEN_CIRCUIT:
            return Element(ElementKind.OPEN_CIRCUIT)

        try:
            kind = ElementKind.from_letter(token.value)
        except ValueError:
            raise UnexpectedLetterError(position=token.position, letter=str(token.value), source=self.source) from None

        identifier = self.cursor.current
        if kind is ElementKind.OPEN_CIRCUIT:
            # 'O' only ever reaches here as ELEMENT_LETTER when an identifier follows it.
            raise self.unexpected(identifier, "an operator or ')' after open circuit 'O'")
        if identifier.kind is not TokenKind.IDENTIFIER:
            raise MissingIdentifierError(position=token.position, letter=token.value, source=self.source)
        self.cursor.advance()
        return Element(kind, identifier.value)

    # --- Token helpers ---

    def accept_parallel_operator(self) -> bool:
        token = self.cursor.current
        if token.kind is TokenKind.DOUBLE_PIPE:
            self.cursor.advance()
            return True
        if token.kind is not TokenKind.PIPE:
            return False
        self.cursor.advance()
        if self.cursor.current.kind is not TokenKind.PIPE:
            raise UnexpectedTokenError(
                position=token.position,
                found="a single '|'",
                expected="'||' (parallel operator); shunt links are only allowed at the top level",
                source=self.source,
            )
        self.cursor.advance()
        return True

    def expect(self, kind: TokenKind, description: str) -> Token:
        token = self.cursor.current
        if token.kind is not kind:
            raise self.unexpected(token, description)
        return self.cursor.advance()

    def unexpected(self, token: Token, expected: str) -> UnexpectedTokenError:
        return UnexpectedTokenError(
            position=token.position,
            found=token.describe(),
            expected=expected,
            source=self.source,
        )


def parse(text: str) -> DocumentNode:
    """Convenience wrapper around ``CircmarkParser().parse``."""
    return CircmarkParser().parse(text)
