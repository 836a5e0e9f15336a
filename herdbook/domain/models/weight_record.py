from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from uuid import uuid4


@dataclass(slots=True)
class WeightRecord:
    id: str
    animal_id: str
    animal_name: str
    animal_breed: str
    weight_date: date
    weight_kg: float
    previous_weight: float | None = None
    weight_change: float | None = None
    notes: str | None = None
    owner_id: str | None = None

    @classmethod
    def create(
        cls,
        *,
        animal_id: str,
        animal_name: str,
        animal_breed: str,
        weight_date: date,
        weight_kg: float,
        previous_weight: float | None = None,
        notes: str | None = None,
        owner_id: str | None = None,
    ) -> WeightRecord:
        return cls(
            id=uuid4().hex,
            animal_id=animal_id,
            animal_name=animal_name,
            animal_breed=animal_breed,
            weight_date=weight_date,
            weight_kg=weight_kg,
            previous_weight=previous_weight,
            weight_change=(weight_kg - previous_weight) if previous_weight is not None else None,
            notes=notes or "",
            owner_id=owner_id,
        )
