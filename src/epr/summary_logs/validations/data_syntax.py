from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, Optional

from epr.spreadsheet.columns import offset_column
from epr.summary_logs.markers import is_epr_marker
from epr.summary_logs.models import Location, ParsedSummaryLog, Table
from epr.summary_logs.validations.cell_schemas import MISSING, CellSchema
from epr.summary_logs.validations.table_schemas import TABLE_SCHEMAS, TableSchema
from epr.validation.issues import ValidationCategory, ValidationIssues


def _validate_headers(
    table_name: str,
    headers: Sequence[Optional[str]],
    required_headers: Sequence[str],
    location: Optional[Location],
    issues: ValidationIssues,
) -> None:
    """
    Missing headers are fatal: without them cells cannot be mapped to their
    columns, so nothing in the table can be trusted.
    """
    actual_headers = [h for h in headers if h is not None and not is_epr_marker(h)]
    for required in required_headers:
        if required in actual_headers:
            continue
        issues.add_fatal(
            ValidationCategory.TECHNICAL,
            f"Missing required header '{required}' in table '{table_name}'",
            {
                "path": f"data.{table_name}.headers",
                "location": location.model_dump() if location else None,
                "field": required,
                "expected": required,
                "actual": actual_headers,
            },
        )


def _cell_location(table_location: Optional[Location], row_index: int, column_index: int) -> Optional[dict]:
    if not table_location or not table_location.column:
        return None
    return {
        "sheet": table_location.sheet,
        # the table origin is its header row, data starts on the row below
        "row": table_location.row + row_index + 1,
        "column": offset_column(table_location.column, column_index),
    }


def _validate_rows(
    table_name: str,
    table: Table,
    column_validation: Mapping[str, CellSchema],
    issues: ValidationIssues,
) -> None:
    header_index: dict[str, int] = {}
    for index, header in enumerate(table.headers):
        if header is not None and header in column_validation:
            header_index[header] = index

    for row_index, row in enumerate(table.rows):
        for header, column_index in header_index.items():
            value: Any = row[column_index] if column_index < len(row) else MISSING
            message = column_validation[header].validate(value)
            if message is None:
                continue
            issues.add_error(
                ValidationCategory.TECHNICAL,
                f"Invalid value in column '{header}': {message}",
                {
                    "path": f"data.{table_name}.rows[{row_index}].{header}",
                    "location": _cell_location(table.location, row_index, column_index),
                    "field": header,
                    "row": row_index + 1,
                    "actual": None if value is MISSING else value,
                },
            )


def validate_data_syntax(
    parsed: Optional[ParsedSummaryLog],
    schemas: Mapping[str, TableSchema] = TABLE_SCHEMAS,
) -> ValidationIssues:
    """
    Check every table that has a registered schema: required headers first
    (fatal), then each cell against its column kind (error, row-level).

    Row checks only run while the run has no fatal issue. The collector is
    shared by all tables, so a missing header in one table also silences cell
    checks for every table after it.
    """
    issues = ValidationIssues()
    data = parsed.data if parsed else {}

    for table_name, table in data.items():
        schema = schemas.get(table_name)
        if schema is None:
            continue
        _validate_headers(table_name, table.headers, schema.required_headers, table.location, issues)
        if not issues.is_fatal():
            _validate_rows(table_name, table, schema.column_validation, issues)

    return issues
