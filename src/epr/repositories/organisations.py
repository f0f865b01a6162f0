from __future__ import annotations

from typing import Protocol

from epr.exceptions import RegistrationNotFoundError
from epr.repositories.storage import Database
from epr.summary_logs.models import Registration


class OrganisationsRepository(Protocol):
    def find_registration_by_id(self, organisation_id: str, registration_id: str) -> Registration:
        ...


def _not_found(organisation_id: str, registration_id: str) -> RegistrationNotFoundError:
    return RegistrationNotFoundError(
        f"Registration with id {registration_id} not found for organisation {organisation_id}"
    )


class InMemoryOrganisationsRepository:
    def __init__(self, registrations: dict[str, list[Registration]] | None = None):
        # organisation id -> registrations
        self._registrations: dict[str, list[Registration]] = {
            org_id: list(regs) for org_id, regs in (registrations or {}).items()
        }

    def add_registration(self, organisation_id: str, registration: Registration) -> None:
        self._registrations.setdefault(organisation_id, []).append(registration)

    def find_registration_by_id(self, organisation_id: str, registration_id: str) -> Registration:
        for registration in self._registrations.get(organisation_id, []):
            if registration.id == registration_id:
                return registration.model_copy()
        raise _not_found(organisation_id, registration_id)


class SqliteOrganisationsRepository:
    def __init__(self, db: Database):
        self.db = db

    def add_registration(self, organisation_id: str, registration: Registration) -> None:
        with self.db._connect() as conn:
            conn.execute(
                """
                INSERT OR REPLACE INTO registrations (organisation_id, registration_id, payload_json)
                VALUES (?, ?, ?)
                """,
                (organisation_id, registration.id, registration.model_dump_json()),
            )
            conn.commit()

    def find_registration_by_id(self, organisation_id: str, registration_id: str) -> Registration:
        with self.db._connect() as conn:
            row = conn.execute(
                "SELECT payload_json FROM registrations WHERE organisation_id = ? AND registration_id = ?",
                (organisation_id, registration_id),
            ).fetchone()
        if not row:
            raise _not_found(organisation_id, registration_id)
        return Registration.model_validate_json(row[0])
