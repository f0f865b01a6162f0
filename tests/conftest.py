from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime
from io import BytesIO
from typing import Any

import pytest
from openpyxl import Workbook

from epr.summary_logs.models import Registration, SummaryLog, SummaryLogFile

WASTE_BALANCE_HEADERS = [
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
]

VALID_WASTE_BALANCE_ROW = [
    12345,
    datetime(2025, 5, 28),
    "03 03 08",
    10.5,
    1.2,
    0.5,
    8.8,
    True,
    "WEIGHT",
    0.3,
    0.95,
    8.5,
]

VALID_META = {
    "PROCESSING_TYPE": "REPROCESSOR",
    "TEMPLATE_VERSION": 1,
    "MATERIAL": "Paper_and_board",
    "ACCREDITATION": "ACC-001",
    "REGISTRATION": "REG12345",
}


def write_rows(ws, rows: Sequence[Sequence[Any]], start_row: int = 1, start_col: int = 1) -> None:
    for r, row in enumerate(rows):
        for c, value in enumerate(row):
            if value is not None:
                ws.cell(row=start_row + r, column=start_col + c, value=value)


def workbook_bytes(wb: Workbook) -> bytes:
    buffer = BytesIO()
    wb.save(buffer)
    return buffer.getvalue()


def build_summary_log_workbook(
    meta: dict[str, Any] | None = None,
    headers: Sequence[str] | None = None,
    rows: Sequence[Sequence[Any]] | None = None,
) -> Workbook:
    """
    Cover sheet with one meta marker per row, Received sheet with the
    UPDATE_WASTE_BALANCE table anchored at A1 (headers from B1).
    """
    wb = Workbook()
    cover = wb.active
    cover.title = "Cover"
    meta = VALID_META if meta is None else meta
    write_rows(cover, [[f"__EPR_META_{name}", value] for name, value in meta.items()])

    received = wb.create_sheet("Received")
    headers = WASTE_BALANCE_HEADERS if headers is None else headers
    rows = [VALID_WASTE_BALANCE_ROW] if rows is None else rows
    write_rows(received, [["__EPR_DATA_UPDATE_WASTE_BALANCE", *headers]])
    write_rows(received, rows, start_row=2, start_col=2)
    return wb


@pytest.fixture
def summary_log_bytes() -> bytes:
    return workbook_bytes(build_summary_log_workbook())


@pytest.fixture
def registration() -> Registration:
    return Registration(
        id="reg-1",
        waste_registration_number="REG12345",
        waste_processing_type="reprocessor",
        material="paper",
    )


@pytest.fixture
def summary_log() -> SummaryLog:
    return SummaryLog(
        id="log-1",
        organisation_id="org-1",
        registration_id="reg-1",
        file=SummaryLogFile(id="file-1", name="summary-log.xlsx", key="org-1/summary-log.xlsx"),
    )
