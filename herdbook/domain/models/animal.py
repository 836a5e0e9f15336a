from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from uuid import uuid4

from herdbook.domain.value_objects.animal import HealthStatus


@dataclass(slots=True)
class Animal:
    id: str
    name: str
    breed: str
    birth_date: date
    sex: str  # Sex
    pregnancy_due_date: date | None = None
    last_weight: float = 0.0
    last_weight_date: date | None = None
    today_milk: float = 0.0
    average_milk: float = 0.0
    health_status: str = HealthStatus.HEALTHY.value
    observations: list[str] = field(default_factory=list)
    notes: str | None = None
    owner_id: str | None = None

    @classmethod
    def create(
        cls,
        *,
        name: str,
        breed: str,
        birth_date: date,
        sex: str,
        registered_on: date,
        pregnancy_due_date: date | None = None,
        initial_weight: float | None = None,
        notes: str | None = None,
        owner_id: str | None = None,
    ) -> Animal:
        return cls(
            id=uuid4().hex,
            name=name,
            breed=breed,
            birth_date=birth_date,
            sex=sex,
            pregnancy_due_date=pregnancy_due_date,
            last_weight=initial_weight or 0.0,
            last_weight_date=registered_on,
            today_milk=0.0,
            average_milk=0.0,
            health_status=HealthStatus.HEALTHY.value,
            observations=[],
            notes=notes or "",
            owner_id=owner_id,
        )

    @property
    def is_pregnant(self) -> bool:
        return self.pregnancy_due_date is not None
