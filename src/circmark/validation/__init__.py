# src/circmark/validation/__init__.py
import logging
logger = logging.getLogger(__name__)

from .issues import ValidationIssue, ValidationIssueLevel
from .issue_codes import LayoutIssueCode
from .validator import LayoutValidator
from .exceptions import LayoutValidationError

__all__ = [
    "ValidationIssue",
    "ValidationIssueLevel",
    "LayoutIssueCode",
    "LayoutValidator",
    "LayoutValidationError",
]
