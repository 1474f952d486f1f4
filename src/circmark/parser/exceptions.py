# src/circmark/parser/exceptions.py
"""
Defines the diagnosable exceptions for the tokenizing and parsing stage.

Every exception carries the 0-based character position of the offending input
and, when known, the source text itself so that the diagnostic report can put a
caret under the problem. The parser stops at the first error; there is no
recovery and no partial tree.
"""
from dataclasses import dataclass

from ..errors import DiagnosableError, format_diagnostic_report


class CircmarkParseError(DiagnosableError):
    """
    A local base class for all lexical and syntax errors.

    Subclasses are dataclasses with at least ``position`` and ``source`` fields
    and provide ``kind`` (a stable error name) and ``message``.
    """
    kind = "ParseError"
    error_type = "Parse Error"
    suggestion = "Check the circmark notation at the indicated position."

    def __post_init__(self):
        Exception.__init__(self, self.message)

    @property
    def message(self) -> str:
        raise NotImplementedError

    def __str__(self):
        return f"{self.message} (at position {self.position})"

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type=self.error_type,
            details=self.message,
            suggestion=self.suggestion,
            context={'source': self.source, 'position': self.position},
        )


@dataclass(eq=False)
class LexError(CircmarkParseError):
    """Raised for a character outside the circmark alphabet (including whitespace)."""
    position: int
    character: str
    source: str = ""

    kind = "UnexpectedCharacter"
    error_type = "Unexpected Character"
    suggestion = (
        "Only the operators '|', '-', '+', '||', parentheses and the element letters "
        "O, R, C, L, V, I, Z followed by an alphanumeric identifier are allowed. "
        "Whitespace is not permitted anywhere."
    )

    @property
    def message(self) -> str:
        return f"Unexpected character {self.character!r}"


class CircmarkSyntaxError(CircmarkParseError):
    """Base class for all grammar violations detected by the parser."""
    kind = "SyntaxError"
    error_type = "Syntax Error"


@dataclass(eq=False)
class UnexpectedTokenError(CircmarkSyntaxError):
    """Raised when a token appears where the grammar forbids it."""
    position: int
    found: str
    expected: str
    source: str = ""

    kind = "UnexpectedToken"
    error_type = "Unexpected Token"
    suggestion = (
        "A circuit is an element (e.g. R1) or a parenthesized group such as (R1+R2||R3); "
        "a twoport is a chain of '|' (shunt) and '-' (series) links such as |V1-R1|R2."
    )

    @property
    def message(self) -> str:
        return f"Expected {self.expected}, found {self.found}"


@dataclass(eq=False)
class MissingIdentifierError(CircmarkSyntaxError):
    """Raised when an element letter other than 'O' has no identifier after it."""
    position: int
    letter: str
    source: str = ""

    kind = "MissingIdentifier"
    error_type = "Missing Identifier"
    suggestion = "Follow the element letter with an alphanumeric identifier, e.g. R1, Cload or Zth1."

    @property
    def message(self) -> str:
        return f"Element letter '{self.letter}' must be followed by an identifier"


@dataclass(eq=False)
class EmptyGroupError(CircmarkSyntaxError):
    """Raised for parentheses enclosing nothing."""
    position: int
    source: str = ""

    kind = "EmptyGroup"
    error_type = "Empty Group"
    suggestion = "Put at least one element between the parentheses, or remove them."

    @property
    def message(self) -> str:
        return "Parentheses enclose an empty group"


@dataclass(eq=False)
class UnexpectedLetterError(CircmarkSyntaxError):
    """Raised for an element letter that names no known element kind."""
    position: int
    letter: str
    source: str = ""

    kind = "UnexpectedLetter"
    error_type = "Unknown Element Letter"
    suggestion = "Use one of the element letters O, R, C, L, V, I or Z."

    @property
    def message(self) -> str:
        return f"Unknown element letter {self.letter!r}"


@dataclass(eq=False)
class NestingTooDeepError(CircmarkSyntaxError):
    """Raised when groups nest deeper than the interpreter's recursion limit allows."""
    position: int
    source: str = ""

    kind = "NestingTooDeep"
    error_type = "Nesting Too Deep"
    suggestion = "Reduce the nesting depth of parenthesized groups; redundant parentheses can be removed."

    @property
    def message(self) -> str:
        return "Groups are nested too deeply to parse"
