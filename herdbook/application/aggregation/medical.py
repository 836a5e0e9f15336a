from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import datetime, timedelta
from decimal import Decimal

from herdbook.application.aggregation.search import matches_choice, matches_search
from herdbook.domain.models.medical_observation import MedicalObservation
from herdbook.domain.value_objects.animal import HealthStatus
from herdbook.domain.value_objects.observation import ObservationStatus, ObservationType
from herdbook.utils.datetime_tz import ensure_utc

CHECKUP_WINDOW_DAYS = 7


def filter_observations(
    observations: Iterable[MedicalObservation],
    *,
    search: str | None = None,
    animal_id: str | None = "all",
    type: str | None = "all",
    status: str | None = "all",
    severity: str | None = "all",
) -> list[MedicalObservation]:
    return [
        o
        for o in observations
        if matches_search(search, o.animal_name, o.symptoms, o.diagnosis, o.medication)
        and matches_choice(animal_id, o.animal_id)
        and matches_choice(type, o.type)
        and matches_choice(status, o.status)
        and matches_choice(severity, o.severity)
    ]


@dataclass(slots=True)
class MedicalStatistics:
    total: int = 0
    active: int = 0
    upcoming_checkups: int = 0
    total_cost: Decimal = Decimal("0")


def medical_statistics(
    observations: Sequence[MedicalObservation],
    now: datetime,
    *,
    window_days: int = CHECKUP_WINDOW_DAYS,
) -> MedicalStatistics:
    """Statistics over the whole collection, never over a filtered view."""
    now = ensure_utc(now)
    horizon = now + timedelta(days=window_days)
    return MedicalStatistics(
        total=len(observations),
        active=sum(1 for o in observations if o.status == ObservationStatus.ACTIVE.value),
        upcoming_checkups=sum(
            1
            for o in observations
            if o.next_checkup is not None and now < ensure_utc(o.next_checkup) <= horizon
        ),
        total_cost=sum((o.cost or Decimal("0") for o in observations), Decimal("0")),
    )


def health_status_for(observation: MedicalObservation) -> str | None:
    """Health status an observation imposes on its animal, if any.

    Illness and treatment observations set "treatment" while active and
    "healthy" otherwise; other types leave the animal untouched. Earlier or
    concurrent observations are not considered.
    """
    try:
        kind = ObservationType(observation.type)
    except ValueError:
        return None
    if not kind.affects_health_status():
        return None
    if observation.status == ObservationStatus.ACTIVE.value:
        return HealthStatus.TREATMENT.value
    return HealthStatus.HEALTHY.value
