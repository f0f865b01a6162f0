"""
Reserved cell tokens of the summary log template.

Every engine-owned cell starts with EPR_PREFIX so it can be told apart from
user data:
- `__EPR_META_<NAME>`: the next cell to the right holds the value of meta field NAME
- `__EPR_DATA_<NAME>`: a data table starts in the next column, headers on this row
- `__EPR_SKIP_COLUMN`: header placeholder for a column that is collected but never validated
"""
from __future__ import annotations

from typing import Any

EPR_PREFIX = "__EPR"
META_PREFIX = f"{EPR_PREFIX}_META_"
DATA_PREFIX = f"{EPR_PREFIX}_DATA_"
SKIP_COLUMN = f"{EPR_PREFIX}_SKIP_COLUMN"


def is_epr_marker(value: Any) -> bool:
    return str(value).startswith(EPR_PREFIX)
