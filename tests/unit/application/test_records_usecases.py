from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from decimal import Decimal

import pytest

from herdbook.application.errors import StoreError, ValidationError
from herdbook.application.use_cases.animals import register_animal
from herdbook.application.use_cases.medical import (
    create_observation,
    observation_history,
    update_observation,
)
from herdbook.application.use_cases.milk import add_milk_record, milk_history, update_milk_record
from herdbook.application.use_cases.weight import (
    add_weight_record,
    update_weight_record,
    weight_evolution,
)

TODAY = date(2024, 7, 10)
NOW = datetime(2024, 7, 10, 12, 0, tzinfo=timezone.utc)


async def register(store, **overrides):
    fields = {"name": "Bella", "breed": "Holstein", "birth_date": date(2022, 1, 1)}
    fields.update(overrides)
    return await register_animal.execute(
        store, register_animal.RegisterAnimalInput(**fields), today=TODAY
    )


def milk_entry(animal_id: str, shifts=(2, 3, 1), production_date=TODAY, notes=None):
    return add_milk_record.MilkEntryInput(
        animal_id=animal_id,
        production_date=production_date,
        morning_liters=shifts[0],
        afternoon_liters=shifts[1],
        evening_liters=shifts[2],
        notes=notes,
    )


@pytest.mark.asyncio
async def test_second_entry_same_day_is_merged(store):
    animal = await register(store)
    first = await add_milk_record.execute(store, milk_entry(animal.id), today=TODAY)
    second = await add_milk_record.execute(
        store, milk_entry(animal.id, shifts=(1, 1, 1)), today=TODAY
    )
    assert first.merged is False
    assert second.merged is True
    assert second.record.id == first.record.id
    assert len(store.milk_records.items) == 1
    assert second.record.total_liters == 9
    assert second.animal_synced is True
    assert store.animals.items[animal.id].today_milk == 9


@pytest.mark.asyncio
async def test_entry_for_another_day_leaves_today_milk(store):
    animal = await register(store)
    result = await add_milk_record.execute(
        store,
        milk_entry(animal.id, production_date=TODAY - timedelta(days=1)),
        today=TODAY,
    )
    assert result.animal_synced is False
    assert store.animals.items[animal.id].today_milk == 0


@pytest.mark.asyncio
async def test_failed_animal_sync_keeps_primary_write(store):
    animal = await register(store)
    store.animals.fail_updates_with = StoreError("store offline")
    result = await add_milk_record.execute(store, milk_entry(animal.id), today=TODAY)
    assert result.animal_synced is False
    assert result.record.id in store.milk_records.items


@pytest.mark.asyncio
async def test_empty_milk_entry_is_rejected(store):
    animal = await register(store)
    with pytest.raises(ValidationError):
        await add_milk_record.execute(store, milk_entry(animal.id, shifts=(0, 0, 0)), today=TODAY)
    with pytest.raises(ValidationError):
        await add_milk_record.execute(store, milk_entry(animal.id, shifts=(60, 0, 0)), today=TODAY)


@pytest.mark.asyncio
async def test_update_recomputes_total_and_history_stats(store):
    animal = await register(store)
    created = await add_milk_record.execute(store, milk_entry(animal.id), today=TODAY)
    updated = await update_milk_record.execute(
        store,
        created.record.id,
        update_milk_record.UpdateMilkRecordInput(evening_liters=4),
        today=TODAY,
    )
    assert updated.record.total_liters == 9
    history = await milk_history.execute(store, today=TODAY)
    assert history.statistics.total_liters == 9
    assert (await milk_history.execute(store, today=TODAY, search="nobody")).statistics is None


@pytest.mark.asyncio
async def test_weight_change_uses_latest_previous_weighing(store):
    animal = await register(store)
    await add_weight_record.execute(
        store,
        add_weight_record.WeightEntryInput(
            animal_id=animal.id, weight_date=date(2024, 1, 1), weight_kg=300
        ),
    )
    await add_weight_record.execute(
        store,
        add_weight_record.WeightEntryInput(
            animal_id=animal.id, weight_date=date(2024, 3, 1), weight_kg=360
        ),
    )
    backfilled = await add_weight_record.execute(
        store,
        add_weight_record.WeightEntryInput(
            animal_id=animal.id, weight_date=date(2024, 2, 1), weight_kg=330
        ),
    )
    assert backfilled.record.previous_weight == 300
    assert backfilled.record.weight_change == 30
    assert backfilled.animal_synced is True
    assert store.animals.items[animal.id].last_weight == 330

    evolution = await weight_evolution.execute(store, animal.id, today=TODAY)
    assert [p.weight_kg for p in evolution.points] == [300, 330, 360]
    assert evolution.summary.trend == "gaining"


@pytest.mark.asyncio
async def test_weight_outside_limits_is_rejected(store):
    animal = await register(store)
    with pytest.raises(ValidationError):
        await add_weight_record.execute(
            store,
            add_weight_record.WeightEntryInput(
                animal_id=animal.id, weight_date=TODAY, weight_kg=40
            ),
        )


@pytest.mark.asyncio
async def test_illness_then_completion_drives_health_status(store):
    animal = await register(store)
    created = await create_observation.execute(
        store,
        create_observation.ObservationInput(
            animal_id=animal.id, observed_at=NOW, type="illness", cost=Decimal("80")
        ),
    )
    assert created.animal_synced is True
    assert store.animals.items[animal.id].health_status == "treatment"

    completed = await update_observation.execute(
        store,
        created.observation.id,
        update_observation.UpdateObservationInput(status="completed"),
    )
    assert completed.animal_synced is True
    assert store.animals.items[animal.id].health_status == "healthy"


@pytest.mark.asyncio
async def test_vaccination_leaves_health_status(store):
    animal = await register(store)
    store.animals.items[animal.id].health_status = "sick"
    result = await create_observation.execute(
        store,
        create_observation.ObservationInput(
            animal_id=animal.id, observed_at=NOW, type="vaccination"
        ),
    )
    assert result.animal_synced is False
    assert store.animals.items[animal.id].health_status == "sick"


@pytest.mark.asyncio
async def test_invalid_observation_values(store):
    animal = await register(store)
    with pytest.raises(ValidationError):
        await create_observation.execute(
            store,
            create_observation.ObservationInput(
                animal_id=animal.id, observed_at=NOW, type="surgery"
            ),
        )
    with pytest.raises(ValidationError):
        await create_observation.execute(
            store,
            create_observation.ObservationInput(
                animal_id=animal.id, observed_at=NOW, type="illness", cost=Decimal("-1")
            ),
        )


@pytest.mark.asyncio
async def test_observation_history_statistics_cover_everything(store):
    animal = await register(store)
    for kind, cost in (("illness", "10"), ("checkup", "5.5")):
        await create_observation.execute(
            store,
            create_observation.ObservationInput(
                animal_id=animal.id,
                observed_at=NOW,
                type=kind,
                cost=Decimal(cost),
                next_checkup=NOW + timedelta(days=2),
            ),
        )
    result = await observation_history.execute(store, now=NOW, type="checkup")
    assert len(result.items) == 1
    assert result.statistics.total == 2
    assert result.statistics.total_cost == Decimal("15.5")
    assert result.statistics.upcoming_checkups == 2


@pytest.mark.asyncio
async def test_update_clears_milk_notes(store):
    animal = await register(store)
    created = await add_milk_record.execute(
        store, milk_entry(animal.id, notes="mastitis check"), today=TODAY
    )
    updated = await update_milk_record.execute(
        store,
        created.record.id,
        update_milk_record.UpdateMilkRecordInput(cleared={"notes"}),
        today=TODAY,
    )
    assert updated.record.notes == ""
    assert updated.record.total_liters == 6


@pytest.mark.asyncio
async def test_editing_older_weighing_keeps_last_weight(store):
    animal = await register(store)
    older = await add_weight_record.execute(
        store,
        add_weight_record.WeightEntryInput(
            animal_id=animal.id, weight_date=TODAY - timedelta(days=60), weight_kg=400
        ),
    )
    latest = await add_weight_record.execute(
        store,
        add_weight_record.WeightEntryInput(
            animal_id=animal.id, weight_date=TODAY, weight_kg=450
        ),
    )

    result = await update_weight_record.execute(
        store,
        older.record.id,
        update_weight_record.UpdateWeightRecordInput(weight_kg=410, notes="recheck"),
    )
    assert result.animal_synced is False
    assert result.record.weight_kg == 410
    assert store.animals.items[animal.id].last_weight == 450
    assert store.animals.items[animal.id].last_weight_date == TODAY

    result = await update_weight_record.execute(
        store,
        latest.record.id,
        update_weight_record.UpdateWeightRecordInput(weight_kg=455, cleared={"notes"}),
    )
    assert result.animal_synced is True
    assert result.record.notes == ""
    assert store.animals.items[animal.id].last_weight == 455


@pytest.mark.asyncio
async def test_update_clears_next_checkup_and_notes(store):
    animal = await register(store)
    created = await create_observation.execute(
        store,
        create_observation.ObservationInput(
            animal_id=animal.id,
            observed_at=NOW,
            type="checkup",
            next_checkup=NOW + timedelta(days=3),
            notes="bring results",
        ),
    )
    updated = await update_observation.execute(
        store,
        created.observation.id,
        update_observation.UpdateObservationInput(cleared={"next_checkup", "notes", "type"}),
    )
    assert updated.observation.next_checkup is None
    assert updated.observation.notes == ""
    assert updated.observation.type == "checkup"
