from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date

from herdbook.application.aggregation.milk import merge_milk_entry
from herdbook.application.errors import NotFound, ValidationError
from herdbook.application.hooks.denormalization import sync_today_milk
from herdbook.application.interfaces.herd_store import HerdStore
from herdbook.domain.models.milk_record import MilkRecord

logger = logging.getLogger(__name__)

MAX_SHIFT_LITERS = 50.0


@dataclass(slots=True)
class MilkEntryInput:
    animal_id: str
    production_date: date
    morning_liters: float = 0.0
    afternoon_liters: float = 0.0
    evening_liters: float = 0.0
    notes: str | None = None


@dataclass(slots=True)
class MilkWriteResult:
    record: MilkRecord
    merged: bool
    animal_synced: bool


def validate_shifts(morning: float, afternoon: float, evening: float) -> None:
    for label, value in (("morning", morning), ("afternoon", afternoon), ("evening", evening)):
        if value < 0 or value > MAX_SHIFT_LITERS:
            raise ValidationError(
                f"{label} liters must be between 0 and {MAX_SHIFT_LITERS:g}",
                details={"field": f"{label}_liters"},
            )
    if morning + afternoon + evening <= 0:
        raise ValidationError("At least one shift must have liters")


async def execute(
    store: HerdStore,
    payload: MilkEntryInput,
    *,
    today: date,
    owner_id: str | None = None,
) -> MilkWriteResult:
    validate_shifts(payload.morning_liters, payload.afternoon_liters, payload.evening_liters)
    animal = await store.animals.get(payload.animal_id, owner_id=owner_id)
    if animal is None:
        raise NotFound("Animal not found")
    entry = MilkRecord.create(
        animal_id=animal.id,
        animal_name=animal.name,
        animal_breed=animal.breed,
        production_date=payload.production_date,
        morning_liters=payload.morning_liters,
        afternoon_liters=payload.afternoon_liters,
        evening_liters=payload.evening_liters,
        notes=payload.notes,
        owner_id=owner_id,
    )
    record, merged = await store.milk_records.add_or_merge(
        entry, lambda existing: merge_milk_entry(existing, entry)
    )
    if merged:
        logger.info(
            "Milk entry merged into record %s (animal=%s date=%s)",
            record.id,
            record.animal_id,
            record.production_date,
        )
    synced = await sync_today_milk(store, record, today)
    return MilkWriteResult(record=record, merged=merged, animal_synced=synced)
