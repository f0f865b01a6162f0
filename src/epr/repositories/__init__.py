from epr.repositories.organisations import (
    InMemoryOrganisationsRepository,
    OrganisationsRepository,
    SqliteOrganisationsRepository,
)
from epr.repositories.storage import Database
from epr.repositories.summary_logs import (
    InMemorySummaryLogsRepository,
    SqliteSummaryLogsRepository,
    SummaryLogsRepository,
)

__all__ = [
    "Database",
    "InMemoryOrganisationsRepository",
    "InMemorySummaryLogsRepository",
    "OrganisationsRepository",
    "SqliteOrganisationsRepository",
    "SqliteSummaryLogsRepository",
    "SummaryLogsRepository",
]
