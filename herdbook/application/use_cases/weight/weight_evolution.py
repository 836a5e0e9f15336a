from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from herdbook.application.aggregation.cattle import age_in_months
from herdbook.application.aggregation.weight import (
    WeightBand,
    WeightPoint,
    WeightTrendSummary,
    expected_weight_band,
    weight_evolution,
    weight_trend_summary,
)
from herdbook.application.errors import NotFound
from herdbook.application.interfaces.herd_store import HerdStore
from herdbook.domain.models.animal import Animal


@dataclass(slots=True)
class WeightEvolutionResult:
    animal: Animal
    points: list[WeightPoint]
    summary: WeightTrendSummary
    current_band: WeightBand


async def execute(
    store: HerdStore, animal_id: str, *, today: date, owner_id: str | None = None
) -> WeightEvolutionResult:
    animal = await store.animals.get(animal_id, owner_id=owner_id)
    if animal is None:
        raise NotFound("Animal not found")
    records = await store.weight_records.list(owner_id, animal_id=animal_id)
    points = weight_evolution(records, animal)
    return WeightEvolutionResult(
        animal=animal,
        points=points,
        summary=weight_trend_summary(points),
        current_band=expected_weight_band(animal.breed, age_in_months(animal.birth_date, today)),
    )
