from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date

from herdbook.application.errors import NotFound
from herdbook.application.hooks.denormalization import sync_today_milk
from herdbook.application.interfaces.herd_store import HerdStore
from herdbook.application.use_cases.milk.add_milk_record import MilkWriteResult, validate_shifts


@dataclass(slots=True)
class UpdateMilkRecordInput:
    production_date: date | None = None
    morning_liters: float | None = None
    afternoon_liters: float | None = None
    evening_liters: float | None = None
    notes: str | None = None
    # Only notes can be cleared
    cleared: set[str] = field(default_factory=set)


async def execute(
    store: HerdStore,
    record_id: str,
    payload: UpdateMilkRecordInput,
    *,
    today: date,
    owner_id: str | None = None,
) -> MilkWriteResult:
    existing = await store.milk_records.get(record_id, owner_id=owner_id)
    if existing is None:
        raise NotFound("Milk record not found")
    changes = {
        name: getattr(payload, name)
        for name in (
            "production_date",
            "morning_liters",
            "afternoon_liters",
            "evening_liters",
            "notes",
        )
        if getattr(payload, name) is not None
    }
    if "notes" in payload.cleared:
        changes["notes"] = ""
    record = replace(existing, **changes)
    validate_shifts(record.morning_liters, record.afternoon_liters, record.evening_liters)
    # total_liters from the stored document is discarded here
    record.recompute_total()
    updated = await store.milk_records.update(record, owner_id=owner_id)
    synced = await sync_today_milk(store, updated, today)
    return MilkWriteResult(record=updated, merged=False, animal_synced=synced)
