from __future__ import annotations

from herdbook.application.errors import NotFound
from herdbook.application.interfaces.herd_store import HerdStore
from herdbook.domain.models.animal import Animal


async def execute(store: HerdStore, animal_id: str, *, owner_id: str | None = None) -> Animal:
    animal = await store.animals.get(animal_id, owner_id=owner_id)
    if animal is None:
        raise NotFound("Animal not found")
    return animal
