from __future__ import annotations

import logging

from epr.summary_logs.models import ParsedSummaryLog, SummaryLog
from epr.summary_logs.parser import parse
from epr.uploads import UploadStore

logger = logging.getLogger(__name__)


class SummaryLogExtractor:
    """Fetches the uploaded workbook behind a summary log and parses it."""

    def __init__(self, uploads: UploadStore):
        self.uploads = uploads

    def extract(self, summary_log: SummaryLog) -> ParsedSummaryLog:
        buffer = self.uploads.read(summary_log.file)
        logger.debug("summary log file fetched", extra={"file_id": summary_log.file.id, "size": len(buffer)})
        return parse(buffer)
