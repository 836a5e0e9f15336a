from __future__ import annotations

from herdbook.application.errors import NotFound
from herdbook.application.interfaces.record_store import ANIMALS, Document
from herdbook.application.interfaces.repositories.animals import AnimalRepository
from herdbook.domain.models.animal import Animal
from herdbook.infrastructure.repos.document_repository import DocumentRepository
from herdbook.utils.datetime_tz import format_ymd, parse_ymd

_DATE_FIELDS = ("birth_date", "pregnancy_due_date", "last_weight_date")


def encode_animal_fields(data: dict) -> Document:
    """Partial update payload with calendar dates in their stored form."""
    encoded = dict(data)
    for field_name in _DATE_FIELDS:
        if field_name in encoded:
            encoded[field_name] = format_ymd(encoded[field_name])
    return encoded


class AnimalsDocumentRepository(DocumentRepository[Animal], AnimalRepository):
    collection = ANIMALS
    order_by = "name"
    direction = "asc"

    def _to_document(self, animal: Animal) -> Document:
        return {
            "id": animal.id,
            "owner_id": animal.owner_id,
            "name": animal.name,
            "breed": animal.breed,
            "birth_date": format_ymd(animal.birth_date),
            "sex": animal.sex,
            "pregnancy_due_date": format_ymd(animal.pregnancy_due_date),
            "last_weight": animal.last_weight,
            "last_weight_date": format_ymd(animal.last_weight_date),
            "today_milk": animal.today_milk,
            "average_milk": animal.average_milk,
            "health_status": animal.health_status,
            "observations": list(animal.observations),
            "notes": animal.notes,
        }

    def _to_domain(self, doc: Document) -> Animal:
        return Animal(
            id=doc["id"],
            name=doc.get("name") or "",
            breed=doc.get("breed") or "",
            birth_date=parse_ymd(doc.get("birth_date")),
            sex=doc.get("sex") or "female",
            pregnancy_due_date=parse_ymd(doc.get("pregnancy_due_date")),
            last_weight=float(doc.get("last_weight") or 0.0),
            last_weight_date=parse_ymd(doc.get("last_weight_date")),
            today_milk=float(doc.get("today_milk") or 0.0),
            average_milk=float(doc.get("average_milk") or 0.0),
            health_status=doc.get("health_status") or "healthy",
            observations=list(doc.get("observations") or []),
            notes=doc.get("notes"),
            owner_id=doc.get("owner_id"),
        )

    async def add(self, animal: Animal) -> Animal:
        await self.store.create(self.collection, self._to_document(animal))
        return animal

    async def get(self, animal_id: str, *, owner_id: str | None = None) -> Animal | None:
        return await self._get(animal_id, owner_id)

    async def list(self, owner_id: str | None = None) -> list[Animal]:
        return await self._list(owner_id)

    async def update(self, animal_id: str, data: dict, *, owner_id: str | None = None) -> None:
        try:
            await self.store.update(
                self.collection, animal_id, encode_animal_fields(data), owner_id=owner_id
            )
        except NotFound as exc:
            raise NotFound("Animal not found") from exc
