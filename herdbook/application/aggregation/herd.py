from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date

from herdbook.application.aggregation.cattle import UPCOMING_BIRTH_DAYS, is_birth_upcoming
from herdbook.domain.models.animal import Animal
from herdbook.domain.value_objects.animal import HealthStatus

WEIGHT_CHECK_DAYS = 30


@dataclass(slots=True)
class HerdSummary:
    total: int = 0
    pregnant: int = 0
    total_milk_today: float = 0.0
    needing_attention: int = 0
    average_weight: int = 0
    min_weight: float = 0.0
    max_weight: float = 0.0


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def herd_summary(animals: Sequence[Animal]) -> HerdSummary:
    total = len(animals)
    if total == 0:
        return HerdSummary()
    weights = [a.last_weight or 0.0 for a in animals]
    return HerdSummary(
        total=total,
        pregnant=sum(1 for a in animals if a.pregnancy_due_date is not None),
        total_milk_today=sum(a.today_milk or 0.0 for a in animals),
        needing_attention=len(attention_list(animals)),
        average_weight=_round_half_up(sum(weights) / total),
        min_weight=min(weights),
        max_weight=max(weights),
    )


def attention_list(animals: Sequence[Animal]) -> list[Animal]:
    return [a for a in animals if a.health_status != HealthStatus.HEALTHY.value]


def upcoming_births(
    animals: Sequence[Animal], today: date, *, window_days: int = UPCOMING_BIRTH_DAYS
) -> list[Animal]:
    return [a for a in animals if is_birth_upcoming(a.pregnancy_due_date, today, window_days)]


def days_since(value: date, today: date) -> int:
    return (today - value).days


def needs_weight_check(
    animals: Sequence[Animal], today: date, *, interval_days: int = WEIGHT_CHECK_DAYS
) -> list[Animal]:
    return [
        a
        for a in animals
        if a.last_weight_date is not None
        and days_since(a.last_weight_date, today) >= interval_days
    ]
