"""Snapshot validation result models."""

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, Field


class ValidationIssue(BaseModel):
    """A single data-quality issue found in a snapshot."""

    field: str = Field(
        ...,
        description="Collection or field with the issue (e.g. 'payments')"
    )
    issue_type: str = Field(
        ...,
        description="Type of issue (e.g., 'duplicate', 'unknown_account', 'inconsistent')"
    )
    message: str = Field(
        ...,
        description="Human-readable description of the issue"
    )
    severity: str = Field(
        ...,
        pattern="^(error|warning|info)$",
        description="Issue severity"
    )
    record_id: Optional[str] = Field(
        default=None,
        description="Identifier of the offending record, if any"
    )


class ValidationResult(BaseModel):
    """
    Result of validating a snapshot before reporting on it.

    Validation only reports; it never corrects the data.
    """

    validated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc)
    )
    is_valid: bool = Field(
        ...,
        description="True when no error-level issue was found"
    )
    issues: list[ValidationIssue] = Field(default_factory=list)
    warnings: list[str] = Field(
        default_factory=list,
        description="Messages of warning-level issues"
    )

    @property
    def has_errors(self) -> bool:
        """Check if there are any error-level issues."""
        return any(issue.severity == "error" for issue in self.issues)

    @property
    def error_count(self) -> int:
        """Count error-level issues."""
        return sum(1 for issue in self.issues if issue.severity == "error")
