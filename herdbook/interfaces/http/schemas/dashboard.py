from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from herdbook.interfaces.http.schemas.animals import AnimalResponse, CattleCardResponse


class HerdSummaryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    total: int
    pregnant: int
    total_milk_today: float
    needing_attention: int
    average_weight: int
    min_weight: float
    max_weight: float


class HerdOverviewResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    summary: HerdSummaryResponse
    upcoming_births: list[CattleCardResponse]
    needs_weight_check: list[AnimalResponse]
    attention: list[AnimalResponse]
