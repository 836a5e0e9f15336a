from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from herdbook.application.aggregation.cattle import (
    CattleCard,
    breed_options,
    cattle_card,
    filter_cattle,
)
from herdbook.application.interfaces.herd_store import HerdStore


@dataclass(slots=True)
class ListAnimalsResult:
    items: list[CattleCard]
    breeds: list[str]
    total: int


async def execute(
    store: HerdStore,
    *,
    today: date,
    owner_id: str | None = None,
    search: str | None = None,
    breed: str | None = "all",
    health_status: str | None = "all",
    sort_by: str = "name",
    upcoming_window_days: int = 30,
) -> ListAnimalsResult:
    animals = await store.animals.list(owner_id)
    selected = filter_cattle(
        animals, search=search, breed=breed, health_status=health_status, sort_by=sort_by
    )
    return ListAnimalsResult(
        items=[cattle_card(a, today, window_days=upcoming_window_days) for a in selected],
        # Built from the whole collection so the filter control keeps every option
        breeds=breed_options(animals),
        total=len(animals),
    )
