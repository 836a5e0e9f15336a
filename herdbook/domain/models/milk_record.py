from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from uuid import uuid4


@dataclass(slots=True)
class MilkRecord:
    id: str
    animal_id: str
    animal_name: str
    animal_breed: str
    production_date: date
    morning_liters: float = 0.0
    afternoon_liters: float = 0.0
    evening_liters: float = 0.0
    total_liters: float = 0.0
    notes: str | None = None
    owner_id: str | None = None

    @classmethod
    def create(
        cls,
        *,
        animal_id: str,
        animal_name: str,
        animal_breed: str,
        production_date: date,
        morning_liters: float,
        afternoon_liters: float,
        evening_liters: float,
        notes: str | None = None,
        owner_id: str | None = None,
    ) -> MilkRecord:
        record = cls(
            id=uuid4().hex,
            animal_id=animal_id,
            animal_name=animal_name,
            animal_breed=animal_breed,
            production_date=production_date,
            morning_liters=morning_liters,
            afternoon_liters=afternoon_liters,
            evening_liters=evening_liters,
            notes=notes or "",
            owner_id=owner_id,
        )
        record.recompute_total()
        return record

    def recompute_total(self) -> None:
        # Never trust a total coming from input
        self.total_liters = (
            (self.morning_liters or 0.0)
            + (self.afternoon_liters or 0.0)
            + (self.evening_liters or 0.0)
        )

    @property
    def natural_key(self) -> str:
        return milk_natural_key(self.animal_id, self.production_date)


def milk_natural_key(animal_id: str, production_date: date) -> str:
    return f"{animal_id}:{production_date.isoformat()}"
