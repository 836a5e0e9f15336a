from __future__ import annotations

from datetime import date as DtDate

from pydantic import BaseModel, ConfigDict, Field

from herdbook.application.aggregation import weight as weight_aggregation
from herdbook.domain.models.weight_record import WeightRecord


class WeightRecordCreate(BaseModel):
    animal_id: str = Field(min_length=1)
    weight_date: DtDate
    weight_kg: float = Field(ge=50, le=1200)
    notes: str | None = None


class WeightRecordUpdate(BaseModel):
    weight_date: DtDate | None = None
    weight_kg: float | None = Field(default=None, ge=50, le=1200)
    notes: str | None = None


class WeightRecordResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: str
    animal_id: str
    animal_name: str
    animal_breed: str
    weight_date: DtDate
    weight_kg: float
    previous_weight: float | None
    weight_change: float | None
    notes: str | None
    owner_id: str | None


class WeightHistoryItem(WeightRecordResponse):
    # Against the adult reference range of the breed: low | normal | high
    reference_status: str
    change_direction: str

    @classmethod
    def from_record(cls, record: WeightRecord) -> WeightHistoryItem:
        return cls(
            **WeightRecordResponse.model_validate(record).model_dump(),
            reference_status=weight_aggregation.reference_status(
                record.weight_kg, record.animal_breed
            ),
            change_direction=weight_aggregation.change_direction(record.weight_change),
        )


class WeightWriteResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    record: WeightRecordResponse
    animal_synced: bool


class WeightStatisticsResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    record_count: int
    average_weight: float
    max_weight: float
    min_weight: float
    average_change: float
    positive_changes: int
    negative_changes: int


class WeightHistoryResponse(BaseModel):
    items: list[WeightHistoryItem]
    statistics: WeightStatisticsResponse | None


class WeightBandResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    min: float
    max: float
    target: float


class WeightPointResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    date: DtDate
    weight_kg: float
    weight_change: float
    age_months: int
    gain_rate: float
    band: WeightBandResponse
    status: str
    notes: str | None = None


class WeightTrendSummaryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    total_gain: float
    average_monthly_gain: float
    trend: str


class WeightEvolutionResponse(BaseModel):
    animal_id: str
    animal_name: str
    breed: str
    points: list[WeightPointResponse]
    summary: WeightTrendSummaryResponse
    current_band: WeightBandResponse
