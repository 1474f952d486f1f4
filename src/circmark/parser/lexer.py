# src/circmark/parser/lexer.py
"""
Tokenizer for the circmark notation.

The tokenizer is a generator: tokens are produced on demand while the parser
consumes them, so a lexical error is raised at the moment the parser reaches
the offending character. Restarting means tokenizing the source text again.
"""
import logging
import re
from typing import Iterator

from .exceptions import LexError
from .tokens import Token, TokenKind

logger = logging.getLogger(__name__)

ELEMENT_LETTERS = frozenset("ORCLVIZ")
IDENTIFIER_REGEX = re.compile(r"[A-Za-z0-9]+")

_SINGLE_CHAR_TOKENS = {
    "|": TokenKind.PIPE,
    "-": TokenKind.DASH,
    "+": TokenKind.PLUS,
    "(": TokenKind.LPAREN,
    ")": TokenKind.RPAREN,
}


class Tokenizer:
    """Tokenizer for circmark text."""

    def __init__(self, text: str):
        self.text = text

    def tokens(self) -> Iterator[Token]:
        """Yield tokens from the input text, ending with a single END_OF_INPUT token."""
        text = self.text
        pos = 0
        while pos < len(text):
            char = text[pos]

            kind = _SINGLE_CHAR_TOKENS.get(char)
            if kind is not None:
                yield Token(kind, pos)
                pos += 1
                continue

            if char in ELEMENT_LETTERS:
                match = IDENTIFIER_REGEX.match(text, pos + 1)
                if char == "O" and match is None:
                    yield Token(TokenKind.OPEN_CIRCUIT, pos)
                    pos += 1
                    continue
                yield Token(TokenKind.ELEMENT_LETTER, pos, char)
                pos += 1
                if match is not None:
                    yield Token(TokenKind.IDENTIFIER, pos, match.group())
                    pos = match.end()
                continue

            raise LexError(position=pos, character=char, source=text)

        logger.debug("Tokenized %d characters.", len(text))
        yield Token(TokenKind.END_OF_INPUT, len(text))


def tokenize(text: str) -> Iterator[Token]:
    """
    Lazily tokenizes circmark text.

    Example:
        >>> [t.kind.name for t in tokenize("R1")]
        ['ELEMENT_LETTER', 'IDENTIFIER', 'END_OF_INPUT']
    """
    return Tokenizer(text).tokens()
