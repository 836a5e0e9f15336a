from __future__ import annotations

from dataclasses import replace
from types import SimpleNamespace

import pytest

from herdbook.application.errors import NotFound


class MemoryRepo:
    def __init__(self) -> None:
        self.items: dict = {}

    async def add(self, entity):
        self.items[entity.id] = entity
        return entity

    async def get(self, record_id, *, owner_id=None):
        return self.items.get(record_id)

    async def list(self, owner_id=None, *, animal_id=None):
        return [e for e in self.items.values() if animal_id is None or e.animal_id == animal_id]

    async def update(self, entity, *, owner_id=None):
        if entity.id not in self.items:
            raise NotFound("missing")
        self.items[entity.id] = entity
        return entity

    async def delete(self, record_id, *, owner_id=None) -> bool:
        return self.items.pop(record_id, None) is not None


class MemoryAnimals(MemoryRepo):
    def __init__(self) -> None:
        super().__init__()
        self.fail_updates_with: Exception | None = None

    async def list(self, owner_id=None):
        return list(self.items.values())

    async def update(self, animal_id, data, *, owner_id=None):
        if self.fail_updates_with is not None:
            raise self.fail_updates_with
        if animal_id not in self.items:
            raise NotFound("Animal not found")
        self.items[animal_id] = replace(self.items[animal_id], **data)


class MemoryMilk(MemoryRepo):
    async def add_or_merge(self, record, merge):
        for existing in self.items.values():
            if existing.natural_key == record.natural_key:
                merged = merge(existing)
                self.items[merged.id] = merged
                return merged, True
        self.items[record.id] = record
        return record, False


def make_store():
    return SimpleNamespace(
        animals=MemoryAnimals(),
        milk_records=MemoryMilk(),
        weight_records=MemoryRepo(),
        medical_observations=MemoryRepo(),
    )


@pytest.fixture()
def store():
    return make_store()
