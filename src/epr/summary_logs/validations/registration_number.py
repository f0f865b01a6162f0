from __future__ import annotations

import logging

from epr.summary_logs.meta_fields import SummaryLogMetaField
from epr.summary_logs.models import ParsedSummaryLog, Registration
from epr.validation.issues import ValidationCategory, ValidationIssues

logger = logging.getLogger(__name__)


def validate_registration_number(
    parsed: ParsedSummaryLog,
    registration: Registration,
    logging_context: str = "",
) -> ValidationIssues:
    """The spreadsheet's REGISTRATION must equal the registration's waste registration number."""
    issues = ValidationIssues()
    expected = registration.waste_registration_number
    field_name = SummaryLogMetaField.REGISTRATION

    if not expected:
        issues.add_fatal(
            ValidationCategory.BUSINESS,
            "Invalid summary log: registration has no waste registration number",
        )
        return issues

    actual = parsed.meta_value(field_name)
    if actual != expected:
        location = parsed.meta_location(field_name)
        issues.add_fatal(
            ValidationCategory.BUSINESS,
            "Summary log's waste registration number does not match this registration",
            {
                "path": f"meta.{field_name}",
                "location": location.model_dump() if location else None,
                "expected": expected,
                "actual": actual,
            },
        )
        return issues

    logger.info(f"Registration number validated: {logging_context}, registrationNumber={expected}")
    return issues
