"""
Column kinds a data table cell can be checked against.

Each kind exposes `validate(value) -> str | None`: None when the value is
acceptable, otherwise the human readable reason it is not. A cell the row does
not reach at all is passed as MISSING and reported as required. An empty cell
arrives as None and fails the kind's type check.
"""
from __future__ import annotations

import math
import re
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Optional, Union

import pandas as pd

IS_REQUIRED = "is required"
MUST_BE_A_NUMBER = "must be a number"
MUST_BE_A_STRING = "must be a string"
MUST_BE_A_BOOLEAN = "must be a boolean"
MUST_BE_A_VALID_DATE = "must be a valid date"

# stands in for a cell beyond the end of a short row
MISSING: Any = object()


def _format_bound(bound: float) -> str:
    return str(int(bound)) if float(bound).is_integer() else str(bound)


def _as_number(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    return number if math.isfinite(number) else None


@dataclass(frozen=True)
class NumberColumn:
    minimum: Optional[float] = None  # inclusive
    greater_than: Optional[float] = None  # exclusive
    less_than: Optional[float] = None  # exclusive

    def validate(self, value: Any) -> Optional[str]:
        if value is MISSING:
            return IS_REQUIRED
        number = _as_number(value)
        if number is None:
            return MUST_BE_A_NUMBER
        if self.minimum is not None and number < self.minimum:
            return f"must be at least {_format_bound(self.minimum)}"
        if self.greater_than is not None and number <= self.greater_than:
            return f"must be greater than {_format_bound(self.greater_than)}"
        if self.less_than is not None and number >= self.less_than:
            return f"must be less than {_format_bound(self.less_than)}"
        return None


@dataclass(frozen=True)
class DateColumn:
    """
    Accepts date/datetime cells, numeric timestamps and any date text pandas
    can read (ISO 8601, "2025/05/28", "28 May 2025", ...).
    """

    def validate(self, value: Any) -> Optional[str]:
        if value is MISSING:
            return IS_REQUIRED
        if isinstance(value, (datetime, date)):
            return None
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return None if math.isfinite(value) else MUST_BE_A_VALID_DATE
        if isinstance(value, str):
            try:
                parsed = pd.to_datetime(value.strip())
            except (ValueError, TypeError, OverflowError):
                return MUST_BE_A_VALID_DATE
            return MUST_BE_A_VALID_DATE if pd.isna(parsed) else None
        return MUST_BE_A_VALID_DATE


@dataclass(frozen=True)
class PatternColumn:
    pattern: re.Pattern[str]
    pattern_message: str

    def validate(self, value: Any) -> Optional[str]:
        if value is MISSING:
            return IS_REQUIRED
        if not isinstance(value, str):
            return MUST_BE_A_STRING
        if not self.pattern.search(value):
            return self.pattern_message
        return None


@dataclass(frozen=True)
class BooleanColumn:
    def validate(self, value: Any) -> Optional[str]:
        if value is MISSING:
            return IS_REQUIRED
        if isinstance(value, bool):
            return None
        if isinstance(value, str) and value.strip().lower() in ("true", "false"):
            return None
        return MUST_BE_A_BOOLEAN


@dataclass(frozen=True)
class EnumColumn:
    values: tuple[str, ...]

    def validate(self, value: Any) -> Optional[str]:
        if value is MISSING:
            return IS_REQUIRED
        if value not in self.values:
            return f"must be one of {', '.join(self.values)}"
        return None


CellSchema = Union[NumberColumn, DateColumn, PatternColumn, BooleanColumn, EnumColumn]
