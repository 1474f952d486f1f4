# src/circmark/parser/__init__.py
from .tokens import Token, TokenKind
from .lexer import Tokenizer, tokenize
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
from .parser import CircmarkParser, parse
from .exceptions import (
    CircmarkParseError,
    CircmarkSyntaxError,
    EmptyGroupError,
    LexError,
    MissingIdentifierError,
    NestingTooDeepError,
    UnexpectedLetterError,
    UnexpectedTokenError,
)

__all__ = [
    # Tokens
    "Token",
    "TokenKind",
    "Tokenizer",
    "tokenize",
    # Topology tree
    "CircuitNode",
    "DocumentNode",
    "Element",
    "ElementKind",
    "LinkKind",
    "ParallelGroup",
    "SeriesGroup",
    "TwoportLink",
    "TwoportNetwork",
    # Parser and Exceptions
    "CircmarkParser",
    "parse",
    "CircmarkParseError",
    "CircmarkSyntaxError",
    "EmptyGroupError",
    "LexError",
    "MissingIdentifierError",
    "NestingTooDeepError",
    "UnexpectedLetterError",
    "UnexpectedTokenError",
]
