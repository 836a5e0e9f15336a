from __future__ import annotations

from datetime import date as DtDate

from pydantic import BaseModel, ConfigDict, Field, model_validator


class MilkRecordCreate(BaseModel):
    animal_id: str = Field(min_length=1)
    production_date: DtDate
    morning_liters: float = Field(default=0.0, ge=0, le=50)
    afternoon_liters: float = Field(default=0.0, ge=0, le=50)
    evening_liters: float = Field(default=0.0, ge=0, le=50)
    notes: str | None = None

    @model_validator(mode="after")
    def require_some_liters(self) -> MilkRecordCreate:
        if self.morning_liters + self.afternoon_liters + self.evening_liters <= 0:
            raise ValueError("At least one shift must have liters")
        return self


class MilkRecordUpdate(BaseModel):
    production_date: DtDate | None = None
    morning_liters: float | None = Field(default=None, ge=0, le=50)
    afternoon_liters: float | None = Field(default=None, ge=0, le=50)
    evening_liters: float | None = Field(default=None, ge=0, le=50)
    notes: str | None = None


class MilkRecordResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: str
    animal_id: str
    animal_name: str
    animal_breed: str
    production_date: DtDate
    morning_liters: float
    afternoon_liters: float
    evening_liters: float
    total_liters: float
    notes: str | None
    owner_id: str | None


class MilkWriteResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    record: MilkRecordResponse
    merged: bool
    animal_synced: bool


class MilkStatisticsResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    record_count: int
    total_liters: float
    average_liters: float
    max_liters: float
    min_liters: float
    trend: float


class MilkHistoryResponse(BaseModel):
    items: list[MilkRecordResponse]
    statistics: MilkStatisticsResponse | None


class DailyMilkPointResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    date: DtDate
    total_liters: float
    morning_liters: float
    afternoon_liters: float
    evening_liters: float
    animal_count: int
    average_liters: float
    animal_name: str | None = None
    reference_average: float | None = None


class DailyTrendResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    direction: str
    change: float
    percentage: float


class SeriesSummaryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    total_liters: float
    average_daily: float
    max_liters: float
    min_liters: float


class MilkSeriesResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    points: list[DailyMilkPointResponse]
    trend: DailyTrendResponse
    summary: SeriesSummaryResponse
