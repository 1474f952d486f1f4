# src/circmark/parser/tree.py
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple, Union

# The classes in this module define the topology tree produced by the parser.
# Nodes are frozen dataclasses holding tuples, so a parsed tree is immutable,
# hashable and compares by value.


class ElementKind(Enum):
    """Element kinds, keyed by their letter in the notation."""
    RESISTOR = "R"
    CAPACITOR = "C"
    INDUCTOR = "L"
    VOLTAGE_SOURCE = "V"
    CURRENT_SOURCE = "I"
    IMPEDANCE = "Z"
    OPEN_CIRCUIT = "O"

    @property
    def letter(self) -> str:
        return self.value

    @classmethod
    def from_letter(cls, letter: str) -> ElementKind:
        return cls(letter)


class LinkKind(Enum):
    """How a twoport link attaches to the signal path."""
    SHUNT = "|"
    SERIES = "-"


@dataclass(frozen=True)
class Element:
    """A single element, e.g. ``R1``. ``identifier`` is None only for the open circuit."""
    kind: ElementKind
    identifier: Optional[str] = None

    @property
    def label(self) -> str:
        if self.kind is ElementKind.OPEN_CIRCUIT:
            return ""
        return f"{self.kind.letter}{self.identifier}"

    def __str__(self) -> str:
        return self.label or "O"


@dataclass(frozen=True)
class SeriesGroup:
    """Two or more subcircuits connected end to end (``+``)."""
    members: Tuple[CircuitNode, ...]

    def __str__(self) -> str:
        return "(" + "+".join(_operand(m) for m in self.members) + ")"


@dataclass(frozen=True)
class ParallelGroup:
    """Two or more subcircuits connected between shared left/right buses (``||``)."""
    branches: Tuple[CircuitNode, ...]

    def __str__(self) -> str:
        return "(" + "||".join(str(b) for b in self.branches) + ")"


@dataclass(frozen=True)
class TwoportLink:
    kind: LinkKind
    target: CircuitNode

    def __str__(self) -> str:
        return f"{self.kind.value}{self.target}"


@dataclass(frozen=True)
class TwoportNetwork:
    """
    A chain of shunt and series links between an input and an output port pair.

    For example a voltage divider is ``|V1-R1|R2``: a shunt voltage source, a
    series resistance and a shunt resistance.
    """
    links: Tuple[TwoportLink, ...]

    def __str__(self) -> str:
        return "".join(str(link) for link in self.links)


CircuitNode = Union[Element, SeriesGroup, ParallelGroup]
DocumentNode = Union[CircuitNode, TwoportNetwork]


def _operand(node: CircuitNode) -> str:
    # A parallel group inside a series group needs no parentheses of its own,
    # because '||' binds tighter than '+'.
    if isinstance(node, ParallelGroup):
        return "||".join(str(b) for b in node.branches)
    return str(node)
