# src/circmark/validation/issues.py
import logging
from enum import Enum
from dataclasses import dataclass, field
from typing import Optional, Dict, Any

logger = logging.getLogger(__name__)


class ValidationIssueLevel(Enum):
    """Severity level of a validation issue."""
    ERROR = "ERROR"
    WARNING = "WARNING"

    def __str__(self):
        return self.value


@dataclass
class ValidationIssue:
    """
    Represents a single issue found while checking a layout.
    ``node`` is the notation of the offending subtree, e.g. ``(R1||R2)``.
    """
    level: ValidationIssueLevel
    code: str
    message: str
    node: Optional[str] = None
    details: Dict[str, Any] = field(default_factory=dict)

    def __str__(self) -> str:
        parts = [f"[{self.level.name} - {self.code}]"]
        if self.node:
            parts.append(f"Node: {self.node}")
        parts.append(f"Message: {self.message}")
        if self.details:
            details_str = ", ".join(f"{k}={v}" for k, v in sorted(self.details.items()))
            parts.append(f"Details: ({details_str})")
        return " ".join(parts)
