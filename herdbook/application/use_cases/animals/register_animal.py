from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from herdbook.application.errors import ValidationError
from herdbook.application.interfaces.herd_store import HerdStore
from herdbook.domain.models.animal import Animal
from herdbook.domain.value_objects.animal import Sex


@dataclass(slots=True)
class RegisterAnimalInput:
    name: str
    breed: str
    birth_date: date
    sex: str = Sex.FEMALE.value
    pregnancy_due_date: date | None = None
    initial_weight: float | None = None
    notes: str | None = None


def validate_animal_dates(
    *, birth_date: date | None, sex: str, pregnancy_due_date: date | None, today: date
) -> None:
    if birth_date is not None and birth_date > today:
        raise ValidationError("Birth date cannot be in the future")
    if pregnancy_due_date is None:
        return
    if sex != Sex.FEMALE.value:
        raise ValidationError("Only female animals can have a pregnancy due date")
    if pregnancy_due_date <= today:
        raise ValidationError("Pregnancy due date must be in the future")


async def execute(
    store: HerdStore,
    payload: RegisterAnimalInput,
    *,
    today: date,
    owner_id: str | None = None,
) -> Animal:
    if not payload.name.strip():
        raise ValidationError("Name is required")
    if not payload.breed.strip():
        raise ValidationError("Breed is required")
    validate_animal_dates(
        birth_date=payload.birth_date,
        sex=payload.sex,
        pregnancy_due_date=payload.pregnancy_due_date,
        today=today,
    )
    animal = Animal.create(
        name=payload.name.strip(),
        breed=payload.breed.strip(),
        birth_date=payload.birth_date,
        sex=payload.sex,
        registered_on=today,
        pregnancy_due_date=payload.pregnancy_due_date,
        initial_weight=payload.initial_weight,
        notes=payload.notes,
        owner_id=owner_id,
    )
    return await store.animals.add(animal)
