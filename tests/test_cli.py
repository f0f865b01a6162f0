from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest
from typer.testing import CliRunner

import epr.main as main
from conftest import build_summary_log_workbook, workbook_bytes
from epr.config import PathSettings, Settings, StorageSettings
from epr.repositories import Database, SqliteOrganisationsRepository, SqliteSummaryLogsRepository

runner = CliRunner()

REGISTRATION_OPTIONS = [
    "--registration-number",
    "REG12345",
    "--processing-type",
    "reprocessor",
    "--material",
    "paper",
]


@pytest.fixture(autouse=True)
def reset_epr_logger():
    yield
    logger = logging.getLogger("epr")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.propagate = True


@pytest.fixture
def workbook_file(tmp_path: Path, summary_log_bytes) -> Path:
    path = tmp_path / "summary-log.xlsx"
    path.write_bytes(summary_log_bytes)
    return path


@pytest.fixture
def local_settings(tmp_path: Path, monkeypatch) -> Settings:
    configured = Settings(
        paths=PathSettings(uploads_dir=tmp_path / "uploads", db_path=tmp_path / "epr.db"),
        storage=StorageSettings(backend="sqlite"),
    )
    monkeypatch.setattr(main, "settings", configured)
    return configured


def test_version():
    result = runner.invoke(main.cli, ["version"])
    assert result.exit_code == 0
    assert main.settings.app.version in result.output


def test_parse_prints_document(workbook_file):
    result = runner.invoke(main.cli, ["parse", str(workbook_file)])

    assert result.exit_code == 0
    document = json.loads(result.stdout)
    assert document["meta"]["MATERIAL"]["value"] == "Paper_and_board"
    assert document["data"]["UPDATE_WASTE_BALANCE"]["location"] == {"sheet": "Received", "row": 1, "column": "B"}


def test_parse_rejects_unreadable_file(tmp_path: Path):
    path = tmp_path / "broken.xlsx"
    path.write_bytes(b"not a workbook")

    result = runner.invoke(main.cli, ["parse", str(path)])

    assert result.exit_code == 1
    assert "Extraction failed" in result.output


def test_check_valid_workbook(workbook_file):
    result = runner.invoke(main.cli, ["check", str(workbook_file), *REGISTRATION_OPTIONS])

    assert result.exit_code == 0
    assert '"status": "validated"' in result.output


def test_check_reports_business_mismatch(tmp_path: Path):
    meta = {"PROCESSING_TYPE": "REPROCESSOR", "TEMPLATE_VERSION": 1, "MATERIAL": "Glass", "REGISTRATION": "REG12345"}
    path = tmp_path / "glass.xlsx"
    path.write_bytes(workbook_bytes(build_summary_log_workbook(meta=meta)))

    result = runner.invoke(main.cli, ["check", str(path), *REGISTRATION_OPTIONS])

    assert result.exit_code == 1
    assert '"status": "invalid"' in result.output
    assert "Material does not match registration material" in result.output


def test_validate_stored_summary_log(local_settings, summary_log, registration, summary_log_bytes):
    upload = local_settings.paths.uploads_dir / summary_log.file.key
    upload.parent.mkdir(parents=True)
    upload.write_bytes(summary_log_bytes)
    db = Database(local_settings.paths.db_path)
    SqliteSummaryLogsRepository(db).insert(summary_log)
    SqliteOrganisationsRepository(db).add_registration(summary_log.organisation_id, registration)

    result = runner.invoke(main.cli, ["validate", summary_log.id])

    assert result.exit_code == 0
    assert "log-1: validated" in result.output
    assert SqliteSummaryLogsRepository(db).find_by_id("log-1").version == 2


def test_validate_unknown_summary_log(local_settings):
    result = runner.invoke(main.cli, ["validate", "missing"])

    assert result.exit_code == 1
    assert "Summary log not found: summaryLogId=missing" in result.output
