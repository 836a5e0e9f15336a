from __future__ import annotations

from decimal import Decimal

from herdbook.application.errors import NotFound
from herdbook.application.interfaces.record_store import MEDICAL_OBSERVATIONS, Document
from herdbook.application.interfaces.repositories.medical_observations import (
    MedicalObservationsRepository,
)
from herdbook.domain.models.medical_observation import MedicalObservation
from herdbook.infrastructure.repos.document_repository import DocumentRepository
from herdbook.utils.datetime_tz import format_timestamp, parse_timestamp

_TEXT_FIELDS = (
    "symptoms",
    "diagnosis",
    "treatment",
    "medication",
    "dosage",
    "frequency",
    "duration",
    "veterinarian",
    "notes",
)


class MedicalObservationsDocumentRepository(
    DocumentRepository[MedicalObservation], MedicalObservationsRepository
):
    collection = MEDICAL_OBSERVATIONS
    order_by = "observed_at"
    direction = "desc"

    def _to_document(self, obs: MedicalObservation) -> Document:
        doc: Document = {
            "id": obs.id,
            "owner_id": obs.owner_id,
            "animal_id": obs.animal_id,
            "animal_name": obs.animal_name,
            "observed_at": format_timestamp(obs.observed_at),
            "type": obs.type,
            "severity": obs.severity,
            "status": obs.status,
            "next_checkup": format_timestamp(obs.next_checkup),
            "cost": str(obs.cost),
        }
        for name in _TEXT_FIELDS:
            doc[name] = getattr(obs, name)
        return doc

    def _to_domain(self, doc: Document) -> MedicalObservation:
        return MedicalObservation(
            id=doc["id"],
            animal_id=doc.get("animal_id") or "",
            animal_name=doc.get("animal_name") or "",
            observed_at=parse_timestamp(doc.get("observed_at")),
            type=doc.get("type") or "other",
            severity=doc.get("severity") or "mild",
            status=doc.get("status") or "active",
            next_checkup=parse_timestamp(doc.get("next_checkup")),
            cost=Decimal(str(doc.get("cost") or "0")),
            owner_id=doc.get("owner_id"),
            **{name: doc.get(name) or "" for name in _TEXT_FIELDS},
        )

    async def add(self, observation: MedicalObservation) -> MedicalObservation:
        await self.store.create(self.collection, self._to_document(observation))
        return observation

    async def get(
        self, observation_id: str, *, owner_id: str | None = None
    ) -> MedicalObservation | None:
        return await self._get(observation_id, owner_id)

    async def list(
        self, owner_id: str | None = None, *, animal_id: str | None = None
    ) -> list[MedicalObservation]:
        if animal_id:
            return await self._list(owner_id, animal_id=animal_id)
        return await self._list(owner_id)

    async def update(
        self, observation: MedicalObservation, *, owner_id: str | None = None
    ) -> MedicalObservation:
        try:
            await self.store.update(
                self.collection, observation.id, self._to_document(observation), owner_id=owner_id
            )
        except NotFound as exc:
            raise NotFound("Medical observation not found") from exc
        return observation
