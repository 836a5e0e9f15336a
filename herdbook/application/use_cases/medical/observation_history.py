from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from herdbook.application.aggregation.medical import (
    CHECKUP_WINDOW_DAYS,
    MedicalStatistics,
    filter_observations,
    medical_statistics,
)
from herdbook.application.interfaces.herd_store import HerdStore
from herdbook.domain.models.medical_observation import MedicalObservation


@dataclass(slots=True)
class ObservationHistoryResult:
    items: list[MedicalObservation]
    statistics: MedicalStatistics


async def execute(
    store: HerdStore,
    *,
    now: datetime,
    owner_id: str | None = None,
    search: str | None = None,
    animal_id: str | None = "all",
    type: str | None = "all",
    status: str | None = "all",
    severity: str | None = "all",
    checkup_window_days: int = CHECKUP_WINDOW_DAYS,
) -> ObservationHistoryResult:
    observations = await store.medical_observations.list(owner_id)
    items = filter_observations(
        observations,
        search=search,
        animal_id=animal_id,
        type=type,
        status=status,
        severity=severity,
    )
    return ObservationHistoryResult(
        items=items,
        # Computed on the unfiltered collection
        statistics=medical_statistics(observations, now, window_days=checkup_window_days),
    )
