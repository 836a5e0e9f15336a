from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from herdbook.application.aggregation.weight import previous_weight_for
from herdbook.application.errors import NotFound, ValidationError
from herdbook.application.hooks.denormalization import sync_last_weight
from herdbook.application.interfaces.herd_store import HerdStore
from herdbook.domain.models.weight_record import WeightRecord

MIN_WEIGHT_KG = 50.0
MAX_WEIGHT_KG = 1200.0


@dataclass(slots=True)
class WeightEntryInput:
    animal_id: str
    weight_date: date
    weight_kg: float
    notes: str | None = None


@dataclass(slots=True)
class WeightWriteResult:
    record: WeightRecord
    animal_synced: bool


def validate_weight(weight_kg: float) -> None:
    if weight_kg < MIN_WEIGHT_KG or weight_kg > MAX_WEIGHT_KG:
        raise ValidationError(
            f"Weight must be between {MIN_WEIGHT_KG:g} and {MAX_WEIGHT_KG:g} kg",
            details={"field": "weight_kg"},
        )


async def execute(
    store: HerdStore,
    payload: WeightEntryInput,
    *,
    owner_id: str | None = None,
) -> WeightWriteResult:
    validate_weight(payload.weight_kg)
    animal = await store.animals.get(payload.animal_id, owner_id=owner_id)
    if animal is None:
        raise NotFound("Animal not found")
    history = await store.weight_records.list(owner_id, animal_id=animal.id)
    record = WeightRecord.create(
        animal_id=animal.id,
        animal_name=animal.name,
        animal_breed=animal.breed,
        weight_date=payload.weight_date,
        weight_kg=payload.weight_kg,
        previous_weight=previous_weight_for(history, payload.weight_date),
        notes=payload.notes,
        owner_id=owner_id,
    )
    created = await store.weight_records.add(record)
    synced = await sync_last_weight(store, created)
    return WeightWriteResult(record=created, animal_synced=synced)
