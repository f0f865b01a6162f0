from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import typer

from epr.config import settings
from epr.exceptions import EprError, ExtractionError
from epr.log import configure_logging
from epr.repositories.organisations import InMemoryOrganisationsRepository
from epr.repositories.summary_logs import InMemorySummaryLogsRepository
from epr.summary_logs.extractor import SummaryLogExtractor
from epr.summary_logs.models import Registration, SummaryLog, SummaryLogFile
from epr.summary_logs.parser import parse
from epr.summary_logs.status import SummaryLogStatus
from epr.summary_logs.validate import SummaryLogsValidator
from epr.summary_logs.worker import build_validator
from epr.uploads import LocalUploadStore

cli = typer.Typer(help="EPR summary log CLI")

LOCAL_ORGANISATION_ID = "local"
LOCAL_REGISTRATION_ID = "local"


@cli.callback()
def main() -> None:
    configure_logging(settings.logging)


@cli.command()
def version() -> None:
    """Print runtime version."""
    typer.echo(f"{settings.app.name} {settings.app.version}")


@cli.command("parse")
def parse_file(
    file: Path = typer.Argument(..., exists=True, dir_okay=False, help="Summary log .xlsx file"),
) -> None:
    """Extract a summary log workbook and print it as JSON."""
    try:
        parsed = parse(file.read_bytes())
    except ExtractionError as exc:
        typer.echo(f"Extraction failed: {exc}", err=True)
        raise typer.Exit(code=1)
    typer.echo(parsed.model_dump_json(indent=2))


@cli.command()
def check(
    file: Path = typer.Argument(..., exists=True, dir_okay=False, help="Summary log .xlsx file"),
    registration_number: Optional[str] = typer.Option(None, help="Waste registration number on record"),
    processing_type: Optional[str] = typer.Option(None, help="reprocessor | exporter"),
    material: Optional[str] = typer.Option(None, help="Registered material code, e.g. paper"),
) -> None:
    """
    Validate a local workbook against the registration details given on the
    command line. Nothing is persisted.
    """
    file = file.resolve()
    summary_logs = InMemorySummaryLogsRepository()
    organisations = InMemoryOrganisationsRepository()
    organisations.add_registration(
        LOCAL_ORGANISATION_ID,
        Registration(
            id=LOCAL_REGISTRATION_ID,
            waste_registration_number=registration_number,
            waste_processing_type=processing_type,
            material=material,
        ),
    )
    summary_log = SummaryLog(
        id=file.stem,
        organisation_id=LOCAL_ORGANISATION_ID,
        registration_id=LOCAL_REGISTRATION_ID,
        file=SummaryLogFile(id=file.stem, name=file.name, key=file.name),
    )
    summary_logs.insert(summary_log)

    validator = SummaryLogsValidator(
        summary_logs_repository=summary_logs,
        organisations_repository=organisations,
        summary_log_extractor=SummaryLogExtractor(LocalUploadStore(file.parent)),
    )
    update = validator.validate(summary_log.id)
    typer.echo(json.dumps(update.model_dump(mode="json"), indent=2, ensure_ascii=False))
    if update.status == SummaryLogStatus.INVALID:
        raise typer.Exit(code=1)


@cli.command()
def validate(summary_log_id: str = typer.Argument(..., help="Id of a stored summary log")) -> None:
    """Validate a stored summary log and write the outcome back."""
    try:
        update = build_validator(settings).validate(summary_log_id)
    except EprError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=1)
    typer.echo(f"{summary_log_id}: {update.status}")
    if update.failure_reason:
        typer.echo(update.failure_reason)


if __name__ == "__main__":
    cli()
