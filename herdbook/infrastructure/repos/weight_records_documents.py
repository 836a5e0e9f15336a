from __future__ import annotations

from herdbook.application.errors import NotFound
from herdbook.application.interfaces.record_store import WEIGHT_RECORDS, Document
from herdbook.application.interfaces.repositories.weight_records import WeightRecordsRepository
from herdbook.domain.models.weight_record import WeightRecord
from herdbook.infrastructure.repos.document_repository import DocumentRepository
from herdbook.utils.datetime_tz import format_ymd, parse_ymd


def _optional_float(value) -> float | None:
    return float(value) if value is not None else None


class WeightRecordsDocumentRepository(DocumentRepository[WeightRecord], WeightRecordsRepository):
    collection = WEIGHT_RECORDS
    order_by = "weight_date"
    direction = "desc"

    def _to_document(self, record: WeightRecord) -> Document:
        return {
            "id": record.id,
            "owner_id": record.owner_id,
            "animal_id": record.animal_id,
            "animal_name": record.animal_name,
            "animal_breed": record.animal_breed,
            "weight_date": format_ymd(record.weight_date),
            "weight_kg": record.weight_kg,
            "previous_weight": record.previous_weight,
            "weight_change": record.weight_change,
            "notes": record.notes,
        }

    def _to_domain(self, doc: Document) -> WeightRecord:
        return WeightRecord(
            id=doc["id"],
            animal_id=doc.get("animal_id") or "",
            animal_name=doc.get("animal_name") or "",
            animal_breed=doc.get("animal_breed") or "",
            weight_date=parse_ymd(doc.get("weight_date")),
            weight_kg=float(doc.get("weight_kg") or 0.0),
            previous_weight=_optional_float(doc.get("previous_weight")),
            weight_change=_optional_float(doc.get("weight_change")),
            notes=doc.get("notes"),
            owner_id=doc.get("owner_id"),
        )

    async def add(self, record: WeightRecord) -> WeightRecord:
        await self.store.create(self.collection, self._to_document(record))
        return record

    async def get(self, record_id: str, *, owner_id: str | None = None) -> WeightRecord | None:
        return await self._get(record_id, owner_id)

    async def list(
        self, owner_id: str | None = None, *, animal_id: str | None = None
    ) -> list[WeightRecord]:
        if animal_id:
            return await self._list(owner_id, animal_id=animal_id)
        return await self._list(owner_id)

    async def update(self, record: WeightRecord, *, owner_id: str | None = None) -> WeightRecord:
        try:
            await self.store.update(
                self.collection, record.id, self._to_document(record), owner_id=owner_id
            )
        except NotFound as exc:
            raise NotFound("Weight record not found") from exc
        return record
