from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime, timezone
from decimal import Decimal

import pytest

from herdbook.application.aggregation.milk import merge_milk_entry
from herdbook.application.errors import NotFound
from herdbook.domain.models.animal import Animal
from herdbook.domain.models.medical_observation import MedicalObservation
from herdbook.domain.models.milk_record import MilkRecord
from herdbook.domain.models.weight_record import WeightRecord
from herdbook.infrastructure.repos.herd_store import DocumentHerdStore


@pytest.fixture()
def herd(record_store) -> DocumentHerdStore:
    return DocumentHerdStore(record_store)


def make_animal(name: str = "Bella", **overrides) -> Animal:
    fields = {
        "name": name,
        "breed": "Holstein",
        "birth_date": date(2021, 3, 1),
        "sex": "female",
        "registered_on": date(2024, 7, 1),
        "pregnancy_due_date": date(2024, 9, 1),
        "initial_weight": 480,
        "owner_id": "farm-1",
    }
    fields.update(overrides)
    return Animal.create(**fields)


async def test_animal_round_trip_and_partial_update(herd):
    animal = await herd.animals.add(make_animal())
    stored = await herd.animals.get(animal.id)
    assert stored == animal

    await herd.animals.update(
        animal.id, {"last_weight": 500.0, "last_weight_date": date(2024, 7, 9)}
    )
    stored = await herd.animals.get(animal.id)
    assert stored.last_weight == 500
    assert stored.last_weight_date == date(2024, 7, 9)
    assert stored.pregnancy_due_date == date(2024, 9, 1)


async def test_animals_listed_by_name(herd):
    await herd.animals.add(make_animal("Luna"))
    await herd.animals.add(make_animal("Bella"))
    assert [a.name for a in await herd.animals.list("farm-1")] == ["Bella", "Luna"]


async def test_animal_update_missing(herd):
    with pytest.raises(NotFound):
        await herd.animals.update("missing", {"name": "X"})


async def test_milk_add_or_merge_sums_shifts(herd):
    def entry(**liters) -> MilkRecord:
        return MilkRecord.create(
            animal_id="a1",
            animal_name="Bella",
            animal_breed="Holstein",
            production_date=date(2024, 7, 10),
            morning_liters=liters.get("morning", 0),
            afternoon_liters=liters.get("afternoon", 0),
            evening_liters=liters.get("evening", 0),
        )

    first = entry(morning=3)
    record, merged = await herd.milk_records.add_or_merge(
        first, lambda existing: merge_milk_entry(existing, first)
    )
    assert merged is False

    second = entry(morning=1, evening=2)
    record, merged = await herd.milk_records.add_or_merge(
        second, lambda existing: merge_milk_entry(existing, second)
    )
    assert merged is True
    assert record.id == first.id
    assert (record.morning_liters, record.evening_liters) == (4, 2)
    assert record.total_liters == 6
    assert len(await herd.milk_records.list(animal_id="a1")) == 1


async def test_weight_records_newest_first(herd):
    for day, kg in ((1, 300.0), (20, 320.0), (10, 310.0)):
        await herd.weight_records.add(
            WeightRecord.create(
                animal_id="a1",
                animal_name="Bella",
                animal_breed="Holstein",
                weight_date=date(2024, 6, day),
                weight_kg=kg,
            )
        )
    records = await herd.weight_records.list(animal_id="a1")
    assert [r.weight_kg for r in records] == [320, 310, 300]
    assert records[0].previous_weight is None


async def test_medical_observation_keeps_cost_and_timestamps(herd):
    observation = MedicalObservation.create(
        animal_id="a1",
        animal_name="Bella",
        observed_at=datetime(2024, 7, 10, 8, 30, tzinfo=timezone.utc),
        type="treatment",
        severity="moderate",
        status="active",
        medication="Oxytetracycline",
        next_checkup=datetime(2024, 7, 14, 8, 0, tzinfo=timezone.utc),
        cost=Decimal("120.50"),
    )
    await herd.medical_observations.add(observation)
    stored = await herd.medical_observations.get(observation.id)
    assert stored.cost == Decimal("120.50")
    assert stored.observed_at == observation.observed_at
    assert stored.next_checkup == observation.next_checkup

    await herd.medical_observations.update(replace(stored, status="completed"))
    assert (await herd.medical_observations.get(observation.id)).status == "completed"


async def test_repository_subscription_yields_entities(herd):
    subscription = await herd.animals.subscribe("farm-1")
    assert await subscription.__anext__() == []
    animal = await herd.animals.add(make_animal())
    assert [a.id for a in await subscription.__anext__()] == [animal.id]
    subscription.unsubscribe()
