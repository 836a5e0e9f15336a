from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from herdbook.application.aggregation.milk import (
    DailyMilkPoint,
    DailyTrend,
    SeriesSummary,
    daily_milk_series,
    daily_trend,
    series_summary,
)
from herdbook.application.errors import ValidationError
from herdbook.application.interfaces.herd_store import HerdStore

MAX_SERIES_DAYS = 366


@dataclass(slots=True)
class MilkSeriesResult:
    points: list[DailyMilkPoint]
    trend: DailyTrend
    summary: SeriesSummary


async def execute(
    store: HerdStore,
    *,
    today: date,
    days: int = 7,
    animal_id: str | None = None,
    owner_id: str | None = None,
) -> MilkSeriesResult:
    """Daily production chart for the herd or, with `animal_id`, one animal."""
    if days < 1 or days > MAX_SERIES_DAYS:
        raise ValidationError(f"days must be between 1 and {MAX_SERIES_DAYS}")
    records = await store.milk_records.list(owner_id)
    animals = await store.animals.list(owner_id) if animal_id else []
    points = daily_milk_series(
        records, days=days, today=today, animal_id=animal_id, animals=animals
    )
    return MilkSeriesResult(
        points=points, trend=daily_trend(points), summary=series_summary(points)
    )
