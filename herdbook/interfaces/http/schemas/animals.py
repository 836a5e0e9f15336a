from __future__ import annotations

from datetime import date

from pydantic import BaseModel, ConfigDict, Field

from herdbook.domain.value_objects.animal import HealthStatus, Sex


class AnimalCreate(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    breed: str = Field(min_length=1, max_length=60)
    birth_date: date
    sex: Sex = Sex.FEMALE
    pregnancy_due_date: date | None = None
    initial_weight: float | None = Field(default=None, ge=50, le=1200)
    notes: str | None = None


class AnimalUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=100)
    breed: str | None = Field(default=None, min_length=1, max_length=60)
    birth_date: date | None = None
    sex: Sex | None = None
    pregnancy_due_date: date | None = None
    last_weight: float | None = Field(default=None, ge=50, le=1200)
    health_status: HealthStatus | None = None
    observations: list[str] | None = None
    notes: str | None = None


class AnimalResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: str
    name: str
    breed: str
    birth_date: date
    sex: str
    pregnancy_due_date: date | None
    last_weight: float
    last_weight_date: date | None
    today_milk: float
    average_milk: float
    health_status: str
    observations: list[str]
    notes: str | None
    owner_id: str | None


class CattleCardResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    animal: AnimalResponse
    age_months: int
    age_label: str
    days_until_birth: int | None
    birth_upcoming: bool


class AnimalListResponse(BaseModel):
    items: list[CattleCardResponse]
    breeds: list[str]
    total: int
