from __future__ import annotations

from enum import StrEnum


class SummaryLogMetaField(StrEnum):
    """Meta field names the template declares via `__EPR_META_<NAME>` markers."""

    PROCESSING_TYPE = "PROCESSING_TYPE"
    TEMPLATE_VERSION = "TEMPLATE_VERSION"
    MATERIAL = "MATERIAL"
    ACCREDITATION = "ACCREDITATION"
    REGISTRATION = "REGISTRATION"
