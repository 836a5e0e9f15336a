from __future__ import annotations

from collections.abc import Callable

from herdbook.application.errors import NotFound
from herdbook.application.interfaces.record_store import MILK_RECORDS, Document
from herdbook.application.interfaces.repositories.milk_records import MilkRecordsRepository
from herdbook.domain.models.milk_record import MilkRecord
from herdbook.infrastructure.repos.document_repository import DocumentRepository
from herdbook.utils.datetime_tz import format_ymd, parse_ymd


class MilkRecordsDocumentRepository(DocumentRepository[MilkRecord], MilkRecordsRepository):
    collection = MILK_RECORDS
    order_by = "production_date"
    direction = "desc"

    def _to_document(self, record: MilkRecord) -> Document:
        return {
            "id": record.id,
            "owner_id": record.owner_id,
            "animal_id": record.animal_id,
            "animal_name": record.animal_name,
            "animal_breed": record.animal_breed,
            "production_date": format_ymd(record.production_date),
            "morning_liters": record.morning_liters,
            "afternoon_liters": record.afternoon_liters,
            "evening_liters": record.evening_liters,
            "total_liters": record.total_liters,
            "notes": record.notes,
        }

    def _to_domain(self, doc: Document) -> MilkRecord:
        return MilkRecord(
            id=doc["id"],
            animal_id=doc.get("animal_id") or "",
            animal_name=doc.get("animal_name") or "",
            animal_breed=doc.get("animal_breed") or "",
            production_date=parse_ymd(doc.get("production_date")),
            morning_liters=float(doc.get("morning_liters") or 0.0),
            afternoon_liters=float(doc.get("afternoon_liters") or 0.0),
            evening_liters=float(doc.get("evening_liters") or 0.0),
            total_liters=float(doc.get("total_liters") or 0.0),
            notes=doc.get("notes"),
            owner_id=doc.get("owner_id"),
        )

    async def add_or_merge(
        self,
        record: MilkRecord,
        merge: Callable[[MilkRecord], MilkRecord],
    ) -> tuple[MilkRecord, bool]:
        """Insert `record` or fold it into the stored one for the same animal and day."""

        def _merge(existing: Document) -> Document:
            return self._to_document(merge(self._to_domain(existing)))

        result = await self.store.merge_or_create(
            self.collection,
            natural_key=record.natural_key,
            create=self._to_document(record),
            merge=_merge,
            owner_id=record.owner_id,
        )
        return self._to_domain({**result.document, "id": result.id}), result.merged

    async def get(self, record_id: str, *, owner_id: str | None = None) -> MilkRecord | None:
        return await self._get(record_id, owner_id)

    async def list(
        self, owner_id: str | None = None, *, animal_id: str | None = None
    ) -> list[MilkRecord]:
        if animal_id:
            return await self._list(owner_id, animal_id=animal_id)
        return await self._list(owner_id)

    async def update(self, record: MilkRecord, *, owner_id: str | None = None) -> MilkRecord:
        record.recompute_total()
        try:
            await self.store.update(
                self.collection,
                record.id,
                self._to_document(record),
                owner_id=owner_id,
                natural_key=record.natural_key,
            )
        except NotFound as exc:
            raise NotFound("Milk record not found") from exc
        return record
