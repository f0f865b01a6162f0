from __future__ import annotations

import logging
from types import MappingProxyType

from epr.summary_logs.meta_fields import SummaryLogMetaField
from epr.summary_logs.models import ParsedSummaryLog, Registration
from epr.validation.issues import ValidationCategory, ValidationIssues

logger = logging.getLogger(__name__)

# spreadsheet PROCESSING_TYPE -> registration waste processing type
PROCESSING_TYPE_MAP = MappingProxyType(
    {
        "REPROCESSOR": "reprocessor",
        "EXPORTER": "exporter",
    }
)

VALID_REGISTRATION_TYPES = tuple(PROCESSING_TYPE_MAP.values())


def validate_processing_type(
    parsed: ParsedSummaryLog,
    registration: Registration,
    logging_context: str = "",
) -> ValidationIssues:
    issues = ValidationIssues()
    registered_type = registration.waste_processing_type
    field_name = SummaryLogMetaField.PROCESSING_TYPE

    if registered_type not in VALID_REGISTRATION_TYPES:
        # bad registration data, not something the submitter can fix
        issues.add_fatal(
            ValidationCategory.BUSINESS,
            "Invalid summary log: registration has unexpected waste processing type",
            {"expected": list(VALID_REGISTRATION_TYPES), "actual": registered_type},
        )
        return issues

    spreadsheet_type = parsed.meta_value(field_name)
    expected = PROCESSING_TYPE_MAP.get(spreadsheet_type) if isinstance(spreadsheet_type, str) else None
    if expected != registered_type:
        location = parsed.meta_location(field_name)
        issues.add_fatal(
            ValidationCategory.BUSINESS,
            "Summary log processing type does not match registration processing type",
            {
                "path": f"meta.{field_name}",
                "location": location.model_dump() if location else None,
                "expected": expected,
                "actual": registered_type,
            },
        )
        return issues

    logger.info(
        f"Summary log type validated: {logging_context}, "
        f"spreadsheetType={spreadsheet_type}, wasteProcessingType={registered_type}"
    )
    return issues
