from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from herdbook.application.aggregation.cattle import UPCOMING_BIRTH_DAYS, CattleCard, cattle_card
from herdbook.application.aggregation.herd import (
    WEIGHT_CHECK_DAYS,
    HerdSummary,
    attention_list,
    herd_summary,
    needs_weight_check,
    upcoming_births,
)
from herdbook.application.interfaces.herd_store import HerdStore
from herdbook.domain.models.animal import Animal


@dataclass(slots=True)
class HerdOverview:
    summary: HerdSummary
    upcoming_births: list[CattleCard]
    needs_weight_check: list[Animal]
    attention: list[Animal]


def build_overview(
    animals: list[Animal],
    today: date,
    *,
    upcoming_window_days: int = UPCOMING_BIRTH_DAYS,
    weight_check_days: int = WEIGHT_CHECK_DAYS,
) -> HerdOverview:
    births = upcoming_births(animals, today, window_days=upcoming_window_days)
    births.sort(key=lambda a: a.pregnancy_due_date)
    return HerdOverview(
        summary=herd_summary(animals),
        upcoming_births=[
            cattle_card(a, today, window_days=upcoming_window_days) for a in births
        ],
        needs_weight_check=needs_weight_check(animals, today, interval_days=weight_check_days),
        attention=attention_list(animals),
    )


async def execute(
    store: HerdStore,
    *,
    today: date,
    owner_id: str | None = None,
    upcoming_window_days: int = UPCOMING_BIRTH_DAYS,
    weight_check_days: int = WEIGHT_CHECK_DAYS,
) -> HerdOverview:
    animals = await store.animals.list(owner_id)
    return build_overview(
        animals,
        today,
        upcoming_window_days=upcoming_window_days,
        weight_check_days=weight_check_days,
    )
