from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date

from herdbook.application.errors import NotFound
from herdbook.application.hooks.denormalization import sync_last_weight
from herdbook.application.interfaces.herd_store import HerdStore
from herdbook.application.use_cases.weight.add_weight_record import (
    WeightWriteResult,
    validate_weight,
)
from herdbook.domain.models.weight_record import WeightRecord


async def _is_latest(store: HerdStore, record: WeightRecord, owner_id: str | None) -> bool:
    history = await store.weight_records.list(owner_id, animal_id=record.animal_id)
    return all(
        other.weight_date <= record.weight_date for other in history if other.id != record.id
    )


@dataclass(slots=True)
class UpdateWeightRecordInput:
    weight_date: date | None = None
    weight_kg: float | None = None
    notes: str | None = None
    # Only notes can be cleared
    cleared: set[str] = field(default_factory=set)


async def execute(
    store: HerdStore,
    record_id: str,
    payload: UpdateWeightRecordInput,
    *,
    owner_id: str | None = None,
) -> WeightWriteResult:
    existing = await store.weight_records.get(record_id, owner_id=owner_id)
    if existing is None:
        raise NotFound("Weight record not found")
    notes = payload.notes if payload.notes is not None else existing.notes
    if "notes" in payload.cleared:
        notes = ""
    record = replace(
        existing,
        weight_date=payload.weight_date or existing.weight_date,
        weight_kg=payload.weight_kg if payload.weight_kg is not None else existing.weight_kg,
        notes=notes,
    )
    validate_weight(record.weight_kg)
    if record.previous_weight is not None:
        record.weight_change = record.weight_kg - record.previous_weight
    updated = await store.weight_records.update(record, owner_id=owner_id)
    synced = False
    # Editing an older weighing leaves the animal's last weight alone
    if await _is_latest(store, updated, owner_id):
        synced = await sync_last_weight(store, updated)
    return WeightWriteResult(record=updated, animal_synced=synced)
