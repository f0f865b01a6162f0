from __future__ import annotations

import logging
from types import MappingProxyType

from epr.summary_logs.meta_fields import SummaryLogMetaField
from epr.summary_logs.models import ParsedSummaryLog, Registration
from epr.validation.issues import ValidationCategory, ValidationIssues

logger = logging.getLogger(__name__)

# spreadsheet MATERIAL -> registration material code
MATERIAL_MAP = MappingProxyType(
    {
        "Aluminium": "aluminium",
        "Fibre_based_composite": "fibre",
        "Glass": "glass",
        "Paper_and_board": "paper",
        "Plastic": "plastic",
        "Steel": "steel",
        "Wood": "wood",
    }
)

VALID_REGISTRATION_MATERIALS = tuple(MATERIAL_MAP.values())


def validate_material_type(
    parsed: ParsedSummaryLog,
    registration: Registration,
    logging_context: str = "",
) -> ValidationIssues:
    issues = ValidationIssues()
    registered_material = registration.material
    field_name = SummaryLogMetaField.MATERIAL

    if registered_material not in VALID_REGISTRATION_MATERIALS:
        issues.add_fatal(
            ValidationCategory.BUSINESS,
            "Invalid summary log: registration has unexpected material",
            {"expected": list(VALID_REGISTRATION_MATERIALS), "actual": registered_material},
        )
        return issues

    spreadsheet_material = parsed.meta_value(field_name)
    expected = MATERIAL_MAP.get(spreadsheet_material) if isinstance(spreadsheet_material, str) else None
    if expected != registered_material:
        location = parsed.meta_location(field_name)
        issues.add_fatal(
            ValidationCategory.BUSINESS,
            "Material does not match registration material",
            {
                "path": f"meta.{field_name}",
                "location": location.model_dump() if location else None,
                "expected": expected,
                "actual": registered_material,
            },
        )
        return issues

    logger.info(
        f"Validated material: {logging_context}, "
        f"spreadsheetMaterial={spreadsheet_material}, registrationMaterial={registered_material}"
    )
    return issues
