from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from epr.summary_logs.status import SummaryLogStatus
from epr.validation.issues import ValidationIssue


class Location(BaseModel):
    """Source cell of an extracted value, e.g. sheet 'Received', row 7, column 'B'."""

    model_config = ConfigDict(frozen=True)

    sheet: str
    row: int = Field(ge=1)
    column: str


class MetaEntry(BaseModel):
    value: Any = None
    location: Optional[Location] = None


class Table(BaseModel):
    location: Optional[Location] = None  # origin: header row, first header column
    headers: list[Optional[str]] = Field(default_factory=list)  # None = skipped column
    rows: list[list[Any]] = Field(default_factory=list)


class ParsedSummaryLog(BaseModel):
    meta: dict[str, MetaEntry] = Field(default_factory=dict)
    data: dict[str, Table] = Field(default_factory=dict)

    def meta_value(self, field_name: str) -> Any:
        entry = self.meta.get(field_name)
        return entry.value if entry else None

    def meta_location(self, field_name: str) -> Optional[Location]:
        entry = self.meta.get(field_name)
        return entry.location if entry else None


class SummaryLogFile(BaseModel):
    id: str
    name: str
    key: str  # lookup key in the upload store


class ValidationResult(BaseModel):
    issues: list[ValidationIssue] = Field(default_factory=list)


class SummaryLog(BaseModel):
    id: str
    organisation_id: str
    registration_id: str
    status: SummaryLogStatus = SummaryLogStatus.VALIDATING
    file: SummaryLogFile
    validation: Optional[ValidationResult] = None
    failure_reason: Optional[str] = None


class StoredSummaryLog(BaseModel):
    version: int
    summary_log: SummaryLog


class SummaryLogUpdate(BaseModel):
    """Patch written back once a summary log has been validated."""

    status: SummaryLogStatus
    validation: ValidationResult
    failure_reason: Optional[str] = None


class Registration(BaseModel):
    id: str
    waste_registration_number: Optional[str] = None
    waste_processing_type: Optional[str] = None
    material: Optional[str] = None
