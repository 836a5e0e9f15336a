from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from herdbook.application.aggregation.weight import (
    WeightStatistics,
    filter_weight_records,
    weight_statistics,
)
from herdbook.application.interfaces.herd_store import HerdStore
from herdbook.domain.models.weight_record import WeightRecord


@dataclass(slots=True)
class WeightHistoryResult:
    items: list[WeightRecord]
    statistics: WeightStatistics | None


async def execute(
    store: HerdStore,
    *,
    today: date,
    owner_id: str | None = None,
    search: str | None = None,
    animal_id: str | None = "all",
    date_range: str = "all",
    sort_by: str = "date-desc",
) -> WeightHistoryResult:
    records = await store.weight_records.list(owner_id)
    items = filter_weight_records(
        records,
        today=today,
        search=search,
        animal_id=animal_id,
        date_range=date_range,
        sort_by=sort_by,
    )
    return WeightHistoryResult(items=items, statistics=weight_statistics(items))
