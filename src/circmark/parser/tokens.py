# src/circmark/parser/tokens.py
from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional


class TokenKind(Enum):
    """The lexical categories of the circmark notation."""
    PIPE = auto()
    DASH = auto()
    PLUS = auto()
    DOUBLE_PIPE = auto()
    LPAREN = auto()
    RPAREN = auto()
    ELEMENT_LETTER = auto()
    IDENTIFIER = auto()
    OPEN_CIRCUIT = auto()
    END_OF_INPUT = auto()


# Human-readable names used in "expected ..."/"found ..." diagnostics.
_DISPLAY_NAMES = {
    TokenKind.PIPE: "'|'",
    TokenKind.DASH: "'-'",
    TokenKind.PLUS: "'+'",
    TokenKind.DOUBLE_PIPE: "'||'",
    TokenKind.LPAREN: "'('",
    TokenKind.RPAREN: "')'",
    TokenKind.OPEN_CIRCUIT: "open circuit 'O'",
    TokenKind.END_OF_INPUT: "end of input",
}


@dataclass(frozen=True)
class Token:
    """
    A single lexical token. ``position`` is the 0-based character offset of the
    token's first character in the source text.
    """
    kind: TokenKind
    position: int
    value: Optional[str] = None

    def describe(self) -> str:
        if self.kind is TokenKind.ELEMENT_LETTER:
            return f"element letter '{self.value}'"
        if self.kind is TokenKind.IDENTIFIER:
            return f"identifier '{self.value}'"
        return _DISPLAY_NAMES[self.kind]
