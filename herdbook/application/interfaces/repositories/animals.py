from __future__ import annotations

from typing import Protocol

from herdbook.application.interfaces.record_store import Subscription
from herdbook.domain.models.animal import Animal


class AnimalRepository(Protocol):
    async def add(self, animal: Animal) -> Animal: ...

    async def get(self, animal_id: str, *, owner_id: str | None = None) -> Animal | None: ...

    async def list(self, owner_id: str | None = None) -> list[Animal]: ...

    async def update(
        self, animal_id: str, data: dict, *, owner_id: str | None = None
    ) -> None: ...

    async def delete(self, animal_id: str, *, owner_id: str | None = None) -> bool: ...

    async def subscribe(self, owner_id: str | None = None) -> Subscription: ...
