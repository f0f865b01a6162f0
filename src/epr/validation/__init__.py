from epr.validation.issues import ValidationCategory, ValidationIssue, ValidationIssues, ValidationSeverity

__all__ = [
    "ValidationCategory",
    "ValidationIssue",
    "ValidationIssues",
    "ValidationSeverity",
]
