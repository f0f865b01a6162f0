from __future__ import annotations

from enum import StrEnum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class ValidationSeverity(StrEnum):
    FATAL = "fatal"  # blocks acceptance of the submission
    ERROR = "error"  # recorded, submission still accepted


class ValidationCategory(StrEnum):
    TECHNICAL = "technical"
    BUSINESS = "business"


class ValidationIssue(BaseModel):
    model_config = ConfigDict(frozen=True)

    severity: ValidationSeverity
    category: ValidationCategory
    message: str
    context: dict[str, Any] = Field(default_factory=dict)


class ValidationIssues:
    """
    Append-only collector for the findings of one validation run.
    Validators each build their own collector and the caller merges them,
    so issue order is the order in which validators ran.
    """

    def __init__(self) -> None:
        self._issues: list[ValidationIssue] = []

    def add_fatal(
        self,
        category: ValidationCategory,
        message: str,
        context: Optional[dict[str, Any]] = None,
    ) -> "ValidationIssues":
        return self._add(ValidationSeverity.FATAL, category, message, context)

    def add_error(
        self,
        category: ValidationCategory,
        message: str,
        context: Optional[dict[str, Any]] = None,
    ) -> "ValidationIssues":
        return self._add(ValidationSeverity.ERROR, category, message, context)

    def merge(self, other: "ValidationIssues") -> "ValidationIssues":
        self._issues.extend(other.get_all_issues())
        return self

    def is_fatal(self) -> bool:
        return any(issue.severity == ValidationSeverity.FATAL for issue in self._issues)

    def is_valid(self) -> bool:
        return not self._issues

    def has_issues(self) -> bool:
        return bool(self._issues)

    def get_all_issues(self) -> list[ValidationIssue]:
        return list(self._issues)

    def get_issues_by_severity(self, severity: ValidationSeverity) -> list[ValidationIssue]:
        return [issue for issue in self._issues if issue.severity == severity]

    def get_issues_by_category(self, category: ValidationCategory) -> list[ValidationIssue]:
        return [issue for issue in self._issues if issue.category == category]

    def first_fatal(self) -> Optional[ValidationIssue]:
        return next((i for i in self._issues if i.severity == ValidationSeverity.FATAL), None)

    def _add(
        self,
        severity: ValidationSeverity,
        category: ValidationCategory,
        message: str,
        context: Optional[dict[str, Any]],
    ) -> "ValidationIssues":
        self._issues.append(
            ValidationIssue(severity=severity, category=category, message=message, context=context or {})
        )
        return self

    def __len__(self) -> int:
        return len(self._issues)

    def __repr__(self) -> str:
        return f"ValidationIssues(issues={len(self._issues)}, fatal={self.is_fatal()})"
