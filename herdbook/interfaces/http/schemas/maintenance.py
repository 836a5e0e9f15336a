from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class CleanupReportResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    milk_records: int
    weight_records: int
    medical_observations: int
    animal_ids: list[str]
    total: int
    dry_run: bool
