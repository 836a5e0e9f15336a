from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date

from herdbook.application.errors import NotFound, ValidationError
from herdbook.application.interfaces.herd_store import HerdStore
from herdbook.application.use_cases.animals.register_animal import validate_animal_dates
from herdbook.domain.models.animal import Animal
from herdbook.domain.value_objects.animal import HealthStatus, Sex

_UPDATABLE = (
    "name",
    "breed",
    "birth_date",
    "sex",
    "pregnancy_due_date",
    "last_weight",
    "health_status",
    "observations",
    "notes",
)


@dataclass(slots=True)
class UpdateAnimalInput:
    name: str | None = None
    breed: str | None = None
    birth_date: date | None = None
    sex: str | None = None
    pregnancy_due_date: date | None = None
    last_weight: float | None = None
    health_status: str | None = None
    observations: list[str] | None = None
    notes: str | None = None
    # Fields explicitly sent as null; lets a due date be cleared after calving
    cleared: set[str] = field(default_factory=set)


async def execute(
    store: HerdStore,
    animal_id: str,
    payload: UpdateAnimalInput,
    *,
    today: date,
    owner_id: str | None = None,
) -> Animal:
    existing = await store.animals.get(animal_id, owner_id=owner_id)
    if existing is None:
        raise NotFound("Animal not found")
    data: dict = {}
    for field_name in _UPDATABLE:
        value = getattr(payload, field_name)
        if value is not None:
            data[field_name] = value
    if "pregnancy_due_date" in payload.cleared:
        data["pregnancy_due_date"] = None
    if not data:
        return existing
    if "name" in data and not data["name"].strip():
        raise ValidationError("Name cannot be empty")
    if "health_status" in data:
        try:
            HealthStatus(data["health_status"])
        except ValueError as exc:
            raise ValidationError(f"Unknown health status: {data['health_status']}") from exc
    validate_animal_dates(
        birth_date=data.get("birth_date"),
        sex=data.get("sex", existing.sex),
        pregnancy_due_date=data.get("pregnancy_due_date")
        if "pregnancy_due_date" in data
        else None,
        today=today,
    )
    # The stored due date still applies when only the sex changes
    due_date = data.get("pregnancy_due_date", existing.pregnancy_due_date)
    if due_date is not None and data.get("sex", existing.sex) != Sex.FEMALE.value:
        raise ValidationError(
            "Only female animals can have a pregnancy due date",
            details={"field": "sex"},
        )
    await store.animals.update(animal_id, data, owner_id=owner_id)
    updated = await store.animals.get(animal_id, owner_id=owner_id)
    if updated is None:
        raise NotFound("Animal not found")
    return updated
