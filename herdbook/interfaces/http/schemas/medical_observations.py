from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from herdbook.domain.value_objects.observation import (
    ObservationStatus,
    ObservationType,
    Severity,
)


class ObservationCreate(BaseModel):
    animal_id: str = Field(min_length=1)
    observed_at: datetime
    type: ObservationType
    severity: Severity = Severity.MILD
    status: ObservationStatus = ObservationStatus.ACTIVE
    symptoms: str = ""
    diagnosis: str = ""
    treatment: str = ""
    medication: str = ""
    dosage: str = ""
    frequency: str = ""
    duration: str = ""
    next_checkup: datetime | None = None
    veterinarian: str = ""
    cost: Decimal | None = Field(default=None, ge=0)
    notes: str = ""


class ObservationUpdate(BaseModel):
    observed_at: datetime | None = None
    type: ObservationType | None = None
    severity: Severity | None = None
    status: ObservationStatus | None = None
    symptoms: str | None = None
    diagnosis: str | None = None
    treatment: str | None = None
    medication: str | None = None
    dosage: str | None = None
    frequency: str | None = None
    duration: str | None = None
    next_checkup: datetime | None = None
    veterinarian: str | None = None
    cost: Decimal | None = Field(default=None, ge=0)
    notes: str | None = None


class ObservationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: str
    animal_id: str
    animal_name: str
    observed_at: datetime
    type: str
    severity: str
    status: str
    symptoms: str
    diagnosis: str
    treatment: str
    medication: str
    dosage: str
    frequency: str
    duration: str
    next_checkup: datetime | None
    veterinarian: str
    cost: Decimal
    notes: str
    owner_id: str | None


class ObservationWriteResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    observation: ObservationResponse
    animal_synced: bool


class MedicalStatisticsResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    total: int
    active: int
    upcoming_checkups: int
    total_cost: Decimal


class ObservationHistoryResponse(BaseModel):
    items: list[ObservationResponse]
    statistics: MedicalStatisticsResponse
