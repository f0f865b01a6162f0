from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic_core import ErrorDetails, PydanticCustomError

from epr.summary_logs.models import ParsedSummaryLog
from epr.validation.issues import ValidationCategory, ValidationIssues

MAX_PROCESSING_TYPE_LENGTH = 30
MAX_MATERIAL_LENGTH = 50
MIN_TEMPLATE_VERSION = 1

SCREAMING_SNAKE_CASE_MESSAGE = (
    "must be in SCREAMING_SNAKE_CASE format (uppercase letters, numbers, and underscores only)"
)


class MetaFieldsSchema(BaseModel):
    """
    Syntax of the meta section. Checked before any business rule so that
    malformed or hostile values never reach the comparisons against
    registration data. Unknown fields are allowed for newer template versions.
    """

    model_config = ConfigDict(extra="allow")

    PROCESSING_TYPE: str = Field(max_length=MAX_PROCESSING_TYPE_LENGTH, pattern=r"^[A-Z0-9_]+$")
    TEMPLATE_VERSION: float = Field(ge=MIN_TEMPLATE_VERSION)
    MATERIAL: str = Field(max_length=MAX_MATERIAL_LENGTH)
    ACCREDITATION: Optional[str] = None
    REGISTRATION: str

    @field_validator("TEMPLATE_VERSION", mode="before")
    @classmethod
    def _reject_booleans(cls, value: Any) -> Any:
        if isinstance(value, bool):
            raise PydanticCustomError("float_type", "Input should be a valid number")
        return value


def _describe(error: ErrorDetails) -> str:
    ctx = error.get("ctx") or {}
    kind = error["type"]
    if kind == "missing":
        return "is required"
    if kind == "string_type":
        return "must be a string"
    if kind == "string_too_long":
        return f"must be at most {ctx['max_length']} characters"
    if kind == "string_pattern_mismatch":
        return SCREAMING_SNAKE_CASE_MESSAGE
    if kind == "greater_than_equal":
        bound = ctx["ge"]
        return f"must be at least {int(bound) if float(bound).is_integer() else bound}"
    if kind in ("float_type", "float_parsing"):
        return "must be a number"
    return error["msg"]


def validate_meta_syntax(parsed: Optional[ParsedSummaryLog]) -> ValidationIssues:
    issues = ValidationIssues()
    meta = parsed.meta if parsed else {}

    values = {name: entry.value for name, entry in meta.items()}
    locations = {name: entry.location for name, entry in meta.items()}

    try:
        MetaFieldsSchema.model_validate(values)
    except ValidationError as exc:
        # every field error in one pass, never just the first
        for error in exc.errors():
            field_name = str(error["loc"][0])
            location = locations.get(field_name)
            issues.add_fatal(
                ValidationCategory.TECHNICAL,
                f"Invalid meta field '{field_name}': {_describe(error)}",
                {
                    "path": f"meta.{field_name}",
                    "location": location.model_dump() if location else None,
                    "actual": values.get(field_name),
                },
            )

    return issues
