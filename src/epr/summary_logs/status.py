from __future__ import annotations

from enum import StrEnum


class SummaryLogStatus(StrEnum):
    PREPROCESSING = "preprocessing"
    VALIDATING = "validating"
    VALIDATED = "validated"
    INVALID = "invalid"
