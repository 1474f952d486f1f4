# src/circmark/validation/exceptions.py
"""
Defines the diagnosable exception raised when a laid-out diagram breaks the
port-alignment rules.
"""
from typing import List

from .issues import ValidationIssue, ValidationIssueLevel
from ..errors import DiagnosableError, format_diagnostic_report


class LayoutValidationError(DiagnosableError):
    """
    Raised when layout validation detects one or more errors.
    Only ERROR-level issues are kept.
    """
    def __init__(self, issues: List[ValidationIssue]):
        self.issues: List[ValidationIssue] = [
            issue for issue in issues if issue.level == ValidationIssueLevel.ERROR
        ]
        error_lines = [str(issue) for issue in self.issues]
        summary_message = (
            f"Layout validation failed with {len(self.issues)} error(s):\n"
            + "\n".join(f"  - {line}" for line in error_lines)
        )
        super().__init__(summary_message)

    def get_diagnostic_report(self) -> str:
        error_lines = [str(issue) for issue in self.issues]
        details = (
            f"The computed diagram does not keep its ports aligned.\n"
            f"Found {len(self.issues)} error(s). See details below:\n\n"
            + "\n".join(f"  - {line}" for line in error_lines)
        )
        first_issue = self.issues[0] if self.issues else None
        return format_diagnostic_report(
            error_type="Layout Validation Error",
            details=details,
            suggestion="This indicates a bug in the layout engine or a custom symbol with inconsistent port offsets.",
            context={'node': first_issue.node if first_issue else None},
        )
