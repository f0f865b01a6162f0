"""
Data table schema registry.

Keys are data section names as they appear after `__EPR_DATA_` in the
template. Each schema lists the headers a table must carry (any order, extra
headers allowed) and the column kind each known header's cells must satisfy.
Tables with no entry here pass through data-syntax validation unexamined.
"""
from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Optional

from epr.summary_logs.validations.cell_schemas import (
    BooleanColumn,
    CellSchema,
    DateColumn,
    EnumColumn,
    NumberColumn,
    PatternColumn,
)

MIN_OUR_REFERENCE = 10000

EWC_CODE_PATTERN = re.compile(r"^\d{2} \d{2} \d{2}$")
UPPERCASE_LETTERS_PATTERN = re.compile(r"^[A-Z]+$")


@dataclass(frozen=True)
class TableSchema:
    required_headers: tuple[str, ...]
    column_validation: Mapping[str, CellSchema]


_OUR_REFERENCE = NumberColumn(minimum=MIN_OUR_REFERENCE)
_POSITIVE_WEIGHT = NumberColumn(greater_than=0)

# Waste received for reprocessing
UPDATE_WASTE_BALANCE = TableSchema(
    required_headers=(
        "OUR_REFERENCE",
        "DATE_RECEIVED",
        "EWC_CODE",
        "GROSS_WEIGHT",
        "TARE_WEIGHT",
        "PALLET_WEIGHT",
        "NET_WEIGHT",
        "BAILING_WIRE",
        "HOW_CALCULATE_RECYCLABLE",
        "WEIGHT_OF_NON_TARGET",
        "RECYCLABLE_PROPORTION",
        "TONNAGE_RECEIVED_FOR_EXPORT",
    ),
    column_validation=MappingProxyType(
        {
            "OUR_REFERENCE": _OUR_REFERENCE,
            "DATE_RECEIVED": DateColumn(),
            "EWC_CODE": PatternColumn(EWC_CODE_PATTERN, 'must be in format "XX XX XX" (e.g., "03 03 08")'),
            "GROSS_WEIGHT": _POSITIVE_WEIGHT,
            "TARE_WEIGHT": _POSITIVE_WEIGHT,
            "PALLET_WEIGHT": _POSITIVE_WEIGHT,
            "NET_WEIGHT": _POSITIVE_WEIGHT,
            "BAILING_WIRE": BooleanColumn(),
            "HOW_CALCULATE_RECYCLABLE": PatternColumn(
                UPPERCASE_LETTERS_PATTERN, "must contain only uppercase letters"
            ),
            "WEIGHT_OF_NON_TARGET": _POSITIVE_WEIGHT,
            "RECYCLABLE_PROPORTION": NumberColumn(greater_than=0, less_than=1),
            "TONNAGE_RECEIVED_FOR_EXPORT": NumberColumn(),
        }
    ),
)

# Waste sent on to another site after receipt
SENT_ON = TableSchema(
    required_headers=(
        "OUR_REFERENCE",
        "DATE_SENT",
        "TONNAGE_SENT_ON",
        "DESTINATION_TYPE",
    ),
    column_validation=MappingProxyType(
        {
            "OUR_REFERENCE": _OUR_REFERENCE,
            "DATE_SENT": DateColumn(),
            "TONNAGE_SENT_ON": _POSITIVE_WEIGHT,
            "DESTINATION_TYPE": EnumColumn(("REPROCESSOR", "EXPORTER", "OTHER")),
        }
    ),
)

TABLE_SCHEMAS: Mapping[str, TableSchema] = MappingProxyType(
    {
        "UPDATE_WASTE_BALANCE": UPDATE_WASTE_BALANCE,
        "SENT_ON": SENT_ON,
    }
)


def get_table_schema(table_name: str, schemas: Mapping[str, TableSchema] = TABLE_SCHEMAS) -> Optional[TableSchema]:
    return schemas.get(table_name)
