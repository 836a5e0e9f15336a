"""Best-effort updates of the denormalized fields kept on animal documents.

Each hook runs after the primary record has been written. A failure is
logged and reported as ``False``; the primary write is never rolled back and
the error is not propagated to the caller.
"""

from __future__ import annotations

import logging
from datetime import date

from herdbook.application.aggregation.medical import health_status_for
from herdbook.application.errors import AppError
from herdbook.application.interfaces.herd_store import HerdStore
from herdbook.domain.models.medical_observation import MedicalObservation
from herdbook.domain.models.milk_record import MilkRecord
from herdbook.domain.models.weight_record import WeightRecord

logger = logging.getLogger(__name__)


async def sync_today_milk(store: HerdStore, record: MilkRecord, today: date) -> bool:
    """Copy today's total onto the animal and refresh its average production.

    Records for any other day leave the animal untouched.
    """
    if record.production_date != today:
        return False
    try:
        history = await store.milk_records.list(record.owner_id, animal_id=record.animal_id)
        totals = [r.total_liters for r in history]
        data = {"today_milk": record.total_liters}
        if totals:
            data["average_milk"] = sum(totals) / len(totals)
        await store.animals.update(record.animal_id, data, owner_id=record.owner_id)
    except AppError as exc:
        logger.warning(
            "Could not update today's milk for animal %s: %s",
            record.animal_id,
            exc.message,
            exc_info=True,
        )
        return False
    return True


async def sync_last_weight(store: HerdStore, record: WeightRecord) -> bool:
    try:
        await store.animals.update(
            record.animal_id,
            {"last_weight": record.weight_kg, "last_weight_date": record.weight_date},
            owner_id=record.owner_id,
        )
    except AppError as exc:
        logger.warning(
            "Could not update last weight for animal %s: %s",
            record.animal_id,
            exc.message,
            exc_info=True,
        )
        return False
    return True


async def sync_health_status(store: HerdStore, observation: MedicalObservation) -> bool:
    """Overwrite the animal's health status from a single observation.

    Only illness and treatment observations apply; the status is set from
    this observation alone, other active observations are not consulted.
    """
    status = health_status_for(observation)
    if status is None:
        return False
    try:
        await store.animals.update(
            observation.animal_id, {"health_status": status}, owner_id=observation.owner_id
        )
    except AppError as exc:
        logger.warning(
            "Could not update health status for animal %s: %s",
            observation.animal_id,
            exc.message,
            exc_info=True,
        )
        return False
    return True
