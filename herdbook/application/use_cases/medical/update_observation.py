from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from decimal import Decimal

from herdbook.application.errors import NotFound
from herdbook.application.hooks.denormalization import sync_health_status
from herdbook.application.interfaces.herd_store import HerdStore
from herdbook.application.use_cases.medical.create_observation import (
    ObservationWriteResult,
    validate_observation,
)
from herdbook.utils.datetime_tz import ensure_utc

_FIELDS = (
    "observed_at",
    "type",
    "severity",
    "status",
    "symptoms",
    "diagnosis",
    "treatment",
    "medication",
    "dosage",
    "frequency",
    "duration",
    "next_checkup",
    "veterinarian",
    "cost",
    "notes",
)
_CLEARABLE = frozenset(_FIELDS) - {"observed_at", "type", "severity", "status", "cost"}


@dataclass(slots=True)
class UpdateObservationInput:
    observed_at: datetime | None = None
    type: str | None = None
    severity: str | None = None
    status: str | None = None
    symptoms: str | None = None
    diagnosis: str | None = None
    treatment: str | None = None
    medication: str | None = None
    dosage: str | None = None
    frequency: str | None = None
    duration: str | None = None
    next_checkup: datetime | None = None
    veterinarian: str | None = None
    cost: Decimal | None = None
    notes: str | None = None
    # Fields explicitly sent as null
    cleared: set[str] = field(default_factory=set)


async def execute(
    store: HerdStore,
    observation_id: str,
    payload: UpdateObservationInput,
    *,
    owner_id: str | None = None,
) -> ObservationWriteResult:
    """Apply the given fields, then re-derive the animal's health status.

    Completing an illness or treatment observation puts the animal back to
    healthy.
    """
    existing = await store.medical_observations.get(observation_id, owner_id=owner_id)
    if existing is None:
        raise NotFound("Medical observation not found")
    changes = {
        name: getattr(payload, name) for name in _FIELDS if getattr(payload, name) is not None
    }
    for name in payload.cleared & _CLEARABLE:
        changes[name] = None if name == "next_checkup" else ""
    for name in ("observed_at", "next_checkup"):
        if changes.get(name) is not None:
            changes[name] = ensure_utc(changes[name])
    observation = replace(existing, **changes)
    validate_observation(
        type=observation.type,
        severity=observation.severity,
        status=observation.status,
        cost=observation.cost,
    )
    updated = await store.medical_observations.update(observation, owner_id=owner_id)
    synced = await sync_health_status(store, updated)
    return ObservationWriteResult(observation=updated, animal_synced=synced)
