# src/circmark/errors.py
import logging
from abc import abstractmethod
from typing import Any, Dict, Protocol, runtime_checkable

logger = logging.getLogger(__name__)

# --- User-Facing Exception Hierarchy ---

class CircmarkError(Exception):
    """Base class for all custom, user-facing errors in circmark."""
    pass

class RenderError(CircmarkError):
    """
    Raised when turning circmark text into a diagram fails for any reason, from
    tokenizing to layout validation. The message is a pre-formatted, user-friendly
    diagnostic report; the original structured error is chained as ``__cause__``.
    """
    pass


# --- Diagnostic Protocol & Base Exception ---

@runtime_checkable
class Diagnosable(Protocol):
    """
    A protocol for exceptions that can generate their own rich diagnostic report.
    """
    def get_diagnostic_report(self) -> str:
        """Generates a complete, user-friendly, multi-line report string."""
        ...

class DiagnosableError(Exception, Diagnosable):
    """
    A common, concrete base class for all internal exceptions that are diagnosable.

    It inherits from `Exception`, so it can be used in `except` clauses, and it
    declares `get_diagnostic_report` abstract so that every subclass provides
    its own report.
    """
    @abstractmethod
    def get_diagnostic_report(self) -> str:
        """
        Abstract method to generate the diagnostic report.
        Subclasses MUST implement this.
        """
        raise NotImplementedError


# --- Stateless Formatting Utilities ---

def caret_excerpt(source: str, position: int) -> str:
    """
    Renders the source text with a caret under ``position``.

    A position equal to ``len(source)`` points just past the end of the input,
    which is where "unexpected end of input" errors are located.
    """
    position = max(0, min(position, len(source)))
    return f"{source}\n{' ' * position}^"


def format_diagnostic_report(
    error_type: str,
    details: str,
    suggestion: str,
    context: Dict[str, Any]
) -> str:
    """
    A stateless helper to format the final multi-line report string, ensuring a
    consistent look and feel for all user-facing diagnostics.

    Args:
        error_type: The high-level category of the error (e.g., "Unexpected Character").
        details: A detailed, potentially multi-line description of the problem.
        suggestion: Actionable advice for the user to resolve the issue.
        context: A dictionary of contextual information (source text, position,
                 config file path, node label).

    Returns:
        A formatted, user-friendly diagnostic report string ready for display.
    """
    lines = [
        "",
        "================ circmark: Diagnostic Report ================",
        f"Error Type:     {error_type}",
    ]
    if (position := context.get('position')) is not None:
        lines.append(f"Position:       {position}")
    if source_file := context.get('source_file'):
        lines.append(f"Source File:    {source_file}")
    if node := context.get('node'):
        lines.append(f"Node:           {node}")
    source = context.get('source')
    if source:
        lines.append(f"Input:          '{source}'")

    lines.append("\nDetails:")
    for line in details.splitlines():
        lines.append(f"  {line}")

    if source and position is not None:
        lines.append("")
        for line in caret_excerpt(source, position).splitlines():
            lines.append(f"  {line}")

    if suggestion:
        lines.append("\nSuggestion:")
        for line in suggestion.splitlines():
            lines.append(f"  {line}")

    lines.append("=============================================================")
    return "\n".join(lines)
