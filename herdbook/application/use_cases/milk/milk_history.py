from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from herdbook.application.aggregation.milk import (
    MilkStatistics,
    filter_milk_records,
    milk_statistics,
)
from herdbook.application.interfaces.herd_store import HerdStore
from herdbook.domain.models.milk_record import MilkRecord


@dataclass(slots=True)
class MilkHistoryResult:
    items: list[MilkRecord]
    statistics: MilkStatistics | None


async def execute(
    store: HerdStore,
    *,
    today: date,
    owner_id: str | None = None,
    search: str | None = None,
    animal_id: str | None = "all",
    date_range: str = "all",
    sort_by: str = "date-desc",
) -> MilkHistoryResult:
    records = await store.milk_records.list(owner_id)
    items = filter_milk_records(
        records,
        today=today,
        search=search,
        animal_id=animal_id,
        date_range=date_range,
        sort_by=sort_by,
    )
    return MilkHistoryResult(items=items, statistics=milk_statistics(items))
