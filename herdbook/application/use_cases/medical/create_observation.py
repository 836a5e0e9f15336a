from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum

from herdbook.application.errors import NotFound, ValidationError
from herdbook.application.hooks.denormalization import sync_health_status
from herdbook.application.interfaces.herd_store import HerdStore
from herdbook.domain.models.medical_observation import MedicalObservation
from herdbook.domain.value_objects.observation import (
    ObservationStatus,
    ObservationType,
    Severity,
)


@dataclass(slots=True)
class ObservationInput:
    animal_id: str
    observed_at: datetime
    type: str
    severity: str = Severity.MILD.value
    status: str = ObservationStatus.ACTIVE.value
    symptoms: str = ""
    diagnosis: str = ""
    treatment: str = ""
    medication: str = ""
    dosage: str = ""
    frequency: str = ""
    duration: str = ""
    next_checkup: datetime | None = None
    veterinarian: str = ""
    cost: Decimal | None = None
    notes: str = ""


@dataclass(slots=True)
class ObservationWriteResult:
    observation: MedicalObservation
    animal_synced: bool


def ensure_choice(enum: type[Enum], value: str, field_name: str) -> None:
    try:
        enum(value)
    except ValueError as exc:
        raise ValidationError(
            f"Invalid {field_name}: {value}", details={"field": field_name}
        ) from exc


def validate_observation(*, type: str, severity: str, status: str, cost: Decimal | None) -> None:
    ensure_choice(ObservationType, type, "type")
    ensure_choice(Severity, severity, "severity")
    ensure_choice(ObservationStatus, status, "status")
    if cost is not None and cost < 0:
        raise ValidationError("Cost cannot be negative", details={"field": "cost"})


async def execute(
    store: HerdStore,
    payload: ObservationInput,
    *,
    owner_id: str | None = None,
) -> ObservationWriteResult:
    validate_observation(
        type=payload.type, severity=payload.severity, status=payload.status, cost=payload.cost
    )
    animal = await store.animals.get(payload.animal_id, owner_id=owner_id)
    if animal is None:
        raise NotFound("Animal not found")
    observation = MedicalObservation.create(
        animal_id=animal.id,
        animal_name=animal.name,
        observed_at=payload.observed_at,
        type=payload.type,
        severity=payload.severity,
        status=payload.status,
        symptoms=payload.symptoms,
        diagnosis=payload.diagnosis,
        treatment=payload.treatment,
        medication=payload.medication,
        dosage=payload.dosage,
        frequency=payload.frequency,
        duration=payload.duration,
        next_checkup=payload.next_checkup,
        veterinarian=payload.veterinarian,
        cost=payload.cost,
        notes=payload.notes,
        owner_id=owner_id,
    )
    created = await store.medical_observations.add(observation)
    synced = await sync_health_status(store, created)
    return ObservationWriteResult(observation=created, animal_synced=synced)
