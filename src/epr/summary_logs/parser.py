"""
Summary log extraction: workbook -> ParsedSummaryLog.

The workbook is scanned sheet by sheet, row by row, left to right. Marker
cells (see `markers`) drive what happens to the cells around them:

- a meta marker captures the very next cell as the value of that meta field
- a data marker opens a Collection whose headers are the cells to its right,
  up to the first empty one, and whose rows are the cells under those headers
  until a row where they are all empty

Extraction is written as a fold: `fold_row(state, ...)` takes the state left by
the previous row and returns the state after this one. Several Collections can
be open at once (tables side by side, or a table nested in another's span).
"""
from __future__ import annotations

import logging
import zipfile
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field, replace
from datetime import date, datetime, time
from enum import StrEnum
from io import BytesIO
from typing import Any, Optional

from openpyxl import load_workbook
from openpyxl.utils import get_column_letter
from openpyxl.utils.exceptions import InvalidFileException
from openpyxl.workbook.workbook import Workbook

from epr.exceptions import ExtractionError
from epr.summary_logs.markers import DATA_PREFIX, META_PREFIX, SKIP_COLUMN
from epr.summary_logs.models import Location, MetaEntry, ParsedSummaryLog, Table

logger = logging.getLogger(__name__)

# (row number, cell values starting at column A)
SheetRow = tuple[int, Sequence[Any]]


class CollectionState(StrEnum):
    HEADERS = "HEADERS"
    ROWS = "ROWS"


@dataclass
class Collection:
    """
    A data table being collected. `fold_row` advances a private copy of each
    open Collection, so a state handed to it is never changed.
    """

    section_name: str
    start_column: int
    location: Location
    state: CollectionState = CollectionState.HEADERS
    headers: list[Optional[str]] = field(default_factory=list)
    rows: list[list[Any]] = field(default_factory=list)
    current_row: list[Any] = field(default_factory=list)
    complete: bool = False

    def accept_cell(self, column: int, value: Any, text: str) -> None:
        column_index = column - self.start_column
        if column_index < 0:
            return
        if self.state == CollectionState.HEADERS:
            if text == "":
                self.state = CollectionState.ROWS
            elif text == SKIP_COLUMN:
                self.headers.append(None)
            else:
                self.headers.append(text)
        elif column_index < len(self.headers):
            self.current_row.append(None if value is None or value == "" else value)

    def finish_row(self) -> None:
        if self.state == CollectionState.HEADERS:
            # the header row itself never yields a data row
            self.state = CollectionState.ROWS
            self.current_row = []
        elif self.current_row:
            if all(value is None for value in self.current_row):
                self.complete = True
            else:
                self.rows.append(self.current_row)
                self.current_row = []

    def to_table(self) -> Table:
        return Table(location=self.location, headers=self.headers, rows=self.rows)


@dataclass(frozen=True)
class ExtractionState:
    meta: Mapping[str, MetaEntry] = field(default_factory=dict)
    data: Mapping[str, Table] = field(default_factory=dict)
    collections: tuple[Collection, ...] = ()
    pending_meta: Optional[str] = None  # meta field name waiting for its value cell

    def result(self) -> ParsedSummaryLog:
        return ParsedSummaryLog(meta=dict(self.meta), data=dict(self.data))


def cell_text(value: Any) -> str:
    """String form used to recognise markers and read header names."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    return str(value)


def _capture_meta(
    meta: Mapping[str, MetaEntry],
    pending: Optional[str],
    value: Any,
    text: str,
    location: Location,
) -> tuple[Mapping[str, MetaEntry], Optional[str]]:
    if pending is None:
        if text.startswith(META_PREFIX):
            name = text[len(META_PREFIX):]
            if name in meta:
                raise ExtractionError(f"Duplicate metadata name: {name}")
            return meta, name
        return meta, None

    if text.startswith(META_PREFIX):
        raise ExtractionError("Malformed sheet: metadata marker found in value position")
    return {**meta, pending: MetaEntry(value=value, location=location)}, None


def _emit(data: Mapping[str, Table], collections: Iterable[Collection]) -> Mapping[str, Table]:
    emitted = dict(data)
    for collection in collections:
        if collection.section_name in emitted:
            raise ExtractionError(f"Duplicate data section name: {collection.section_name}")
        emitted[collection.section_name] = collection.to_table()
        logger.debug(
            "data section collected",
            extra={
                "section": collection.section_name,
                "rows": len(collection.rows),
                "sheet": collection.location.sheet,
            },
        )
    return emitted


def fold_row(state: ExtractionState, sheet: str, row_number: int, values: Sequence[Any]) -> ExtractionState:
    meta = state.meta
    pending = state.pending_meta
    collections = [
        replace(c, headers=list(c.headers), rows=list(c.rows), current_row=[]) for c in state.collections
    ]

    for column, value in enumerate(values, start=1):
        text = cell_text(value)
        location = Location(sheet=sheet, row=row_number, column=get_column_letter(column))

        meta, pending = _capture_meta(meta, pending, value, text, location)

        if text.startswith(DATA_PREFIX):
            collections.append(
                Collection(
                    section_name=text[len(DATA_PREFIX):],
                    start_column=column + 1,
                    location=Location(sheet=sheet, row=row_number, column=get_column_letter(column + 1)),
                )
            )

        for collection in collections:
            collection.accept_cell(column, value, text)

    if pending is not None:
        raise ExtractionError(f"Malformed sheet: metadata marker '{pending}' has no value cell")

    still_open: list[Collection] = []
    completed: list[Collection] = []
    for collection in collections:
        collection.finish_row()
        (completed if collection.complete else still_open).append(collection)

    return ExtractionState(
        meta=meta,
        data=_emit(state.data, completed) if completed else state.data,
        collections=tuple(still_open),
        pending_meta=None,
    )


def fold_sheet(state: ExtractionState, sheet: str, rows: Iterable[SheetRow]) -> ExtractionState:
    for row_number, values in rows:
        state = fold_row(state, sheet, row_number, values)
    # end of sheet closes whatever is still open
    return ExtractionState(meta=state.meta, data=_emit(state.data, state.collections))


def parse_rows(sheets: Iterable[tuple[str, Iterable[SheetRow]]]) -> ParsedSummaryLog:
    state = ExtractionState()
    for sheet, rows in sheets:
        state = fold_sheet(state, sheet, rows)
    return state.result()


def _sheet_rows(workbook: Workbook) -> Iterable[tuple[str, Iterable[SheetRow]]]:
    for worksheet in workbook.worksheets:
        # iter_rows starts at A1 and pads every row to the sheet's width
        rows = enumerate(worksheet.iter_rows(values_only=True), start=1)
        yield worksheet.title, rows


def parse_workbook(workbook: Workbook) -> ParsedSummaryLog:
    parsed = parse_rows(_sheet_rows(workbook))
    logger.debug(
        "workbook parsed",
        extra={"sheets": len(workbook.worksheets), "meta": len(parsed.meta), "tables": list(parsed.data)},
    )
    return parsed


def parse(buffer: bytes) -> ParsedSummaryLog:
    """
    Parse an .xlsx byte buffer.
    Formula cells resolve to the result cached in the file, or None when the
    file carries no cached result.
    """
    try:
        workbook = load_workbook(BytesIO(buffer), data_only=True)
    except (InvalidFileException, zipfile.BadZipFile, KeyError, ValueError, OSError) as exc:
        raise ExtractionError(f"Unable to read workbook: {exc}") from exc
    try:
        return parse_workbook(workbook)
    finally:
        workbook.close()
