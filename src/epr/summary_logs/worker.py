from __future__ import annotations

import logging
from typing import Optional

from epr.config import Settings, settings
from epr.exceptions import ConfigError
from epr.repositories.organisations import SqliteOrganisationsRepository
from epr.repositories.storage import Database
from epr.repositories.summary_logs import SqliteSummaryLogsRepository
from epr.summary_logs.extractor import SummaryLogExtractor
from epr.summary_logs.validate import SummaryLogsValidator
from epr.uploads import LocalUploadStore

logger = logging.getLogger(__name__)


def build_validator(config: Optional[Settings] = None) -> SummaryLogsValidator:
    """
    Wire a validator against persisted summary logs: the configured storage
    backend plus the local upload directory. In-memory repositories hold
    nothing to validate here; `epr check` and the tests build those directly.
    """
    config = config or settings
    extractor = SummaryLogExtractor(LocalUploadStore(config.paths.uploads_dir))

    backend = config.storage.backend
    logger.debug("building summary log validator", extra={"backend": backend})
    if backend == "sqlite":
        db = Database(config.paths.db_path)
        return SummaryLogsValidator(
            summary_logs_repository=SqliteSummaryLogsRepository(db),
            organisations_repository=SqliteOrganisationsRepository(db),
            summary_log_extractor=extractor,
        )

    raise ConfigError(f"Unsupported storage backend: {backend}")
