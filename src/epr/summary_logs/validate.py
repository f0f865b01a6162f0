from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Protocol

from epr.exceptions import SummaryLogNotFoundError
from epr.summary_logs.models import ParsedSummaryLog, SummaryLog, SummaryLogUpdate, ValidationResult
from epr.summary_logs.status import SummaryLogStatus
from epr.summary_logs.validations import (
    validate_data_syntax,
    validate_material_type,
    validate_meta_syntax,
    validate_processing_type,
    validate_registration_number,
)
from epr.validation.issues import ValidationCategory, ValidationIssues

if TYPE_CHECKING:
    from epr.repositories.organisations import OrganisationsRepository
    from epr.repositories.summary_logs import SummaryLogsRepository

logger = logging.getLogger(__name__)

SYNTAX_VALIDATORS = (validate_meta_syntax, validate_data_syntax)
BUSINESS_VALIDATORS = (validate_registration_number, validate_processing_type, validate_material_type)


class Extractor(Protocol):
    def extract(self, summary_log: SummaryLog) -> ParsedSummaryLog:
        ...


def perform_validation_checks(
    summary_log: SummaryLog,
    logging_context: str,
    extractor: Extractor,
    organisations_repository: "OrganisationsRepository",
) -> ValidationIssues:
    """
    Extract, check syntax, then (only when syntax produced nothing fatal)
    check against the registration. Any exception along the way becomes a
    single fatal technical issue instead of escaping.
    """
    issues = ValidationIssues()
    try:
        parsed = extractor.extract(summary_log)
        logger.info(f"Extracted summary log file: {logging_context}")

        for validate in SYNTAX_VALIDATORS:
            issues.merge(validate(parsed))

        if not issues.is_fatal():
            registration = organisations_repository.find_registration_by_id(
                summary_log.organisation_id,
                summary_log.registration_id,
            )
            logger.info(f"Fetched registration: {logging_context}")
            for validate in BUSINESS_VALIDATORS:
                issues.merge(validate(parsed, registration, logging_context))
    except Exception as exc:
        logger.exception(f"Failed to validate summary log file: {logging_context}")
        issues.add_fatal(ValidationCategory.TECHNICAL, str(exc))
    return issues


def build_update(issues: ValidationIssues) -> SummaryLogUpdate:
    first_fatal = issues.first_fatal()
    return SummaryLogUpdate(
        status=SummaryLogStatus.INVALID if first_fatal else SummaryLogStatus.VALIDATED,
        validation=ValidationResult(issues=issues.get_all_issues()),
        failure_reason=first_fatal.message if first_fatal else None,
    )


class SummaryLogsValidator:
    def __init__(
        self,
        summary_logs_repository: "SummaryLogsRepository",
        organisations_repository: "OrganisationsRepository",
        summary_log_extractor: Extractor,
    ):
        self.summary_logs_repository = summary_logs_repository
        self.organisations_repository = organisations_repository
        self.summary_log_extractor = summary_log_extractor

    def validate(self, summary_log_id: str) -> SummaryLogUpdate:
        stored = self.summary_logs_repository.find_by_id(summary_log_id)
        if stored is None:
            raise SummaryLogNotFoundError(f"Summary log not found: summaryLogId={summary_log_id}")

        summary_log = stored.summary_log
        logging_context = (
            f"summaryLogId={summary_log_id}, fileId={summary_log.file.id}, filename={summary_log.file.name}"
        )
        logger.info(f"Summary log validation started: {logging_context}")

        issues = perform_validation_checks(
            summary_log,
            logging_context,
            self.summary_log_extractor,
            self.organisations_repository,
        )
        update = build_update(issues)

        # stale version raises VersionConflictError to the caller
        self.summary_logs_repository.update(summary_log_id, stored.version, update)
        logger.info(
            f"Summary log updated: {logging_context}, status={update.status}",
            extra={"issues": len(issues), "fatal": issues.is_fatal()},
        )
        return update
