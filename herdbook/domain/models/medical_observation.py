from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from uuid import uuid4

from herdbook.domain.value_objects.observation import ObservationStatus, Severity
from herdbook.utils.datetime_tz import ensure_utc


@dataclass(slots=True)
class MedicalObservation:
    id: str
    animal_id: str
    animal_name: str
    observed_at: datetime
    type: str  # ObservationType
    severity: str = Severity.MILD.value
    symptoms: str = ""
    diagnosis: str = ""
    treatment: str = ""
    medication: str = ""
    dosage: str = ""
    frequency: str = ""
    duration: str = ""
    next_checkup: datetime | None = None
    veterinarian: str = ""
    cost: Decimal = Decimal("0")
    notes: str = ""
    status: str = ObservationStatus.ACTIVE.value
    owner_id: str | None = None

    @classmethod
    def create(
        cls,
        *,
        animal_id: str,
        animal_name: str,
        observed_at: datetime,
        type: str,
        severity: str,
        status: str,
        symptoms: str = "",
        diagnosis: str = "",
        treatment: str = "",
        medication: str = "",
        dosage: str = "",
        frequency: str = "",
        duration: str = "",
        next_checkup: datetime | None = None,
        veterinarian: str = "",
        cost: Decimal | None = None,
        notes: str = "",
        owner_id: str | None = None,
    ) -> MedicalObservation:
        return cls(
            id=uuid4().hex,
            animal_id=animal_id,
            animal_name=animal_name,
            observed_at=ensure_utc(observed_at),
            type=type,
            severity=severity,
            symptoms=symptoms,
            diagnosis=diagnosis,
            treatment=treatment,
            medication=medication,
            dosage=dosage,
            frequency=frequency,
            duration=duration,
            next_checkup=ensure_utc(next_checkup) if next_checkup else None,
            veterinarian=veterinarian,
            cost=cost if cost is not None else Decimal("0"),
            notes=notes,
            status=status,
            owner_id=owner_id,
        )
