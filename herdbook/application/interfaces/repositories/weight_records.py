from __future__ import annotations

from typing import Protocol

from herdbook.application.interfaces.record_store import Subscription
from herdbook.domain.models.weight_record import WeightRecord


class WeightRecordsRepository(Protocol):
    async def add(self, record: WeightRecord) -> WeightRecord: ...

    async def get(
        self, record_id: str, *, owner_id: str | None = None
    ) -> WeightRecord | None: ...

    async def list(
        self, owner_id: str | None = None, *, animal_id: str | None = None
    ) -> list[WeightRecord]: ...

    async def update(
        self, record: WeightRecord, *, owner_id: str | None = None
    ) -> WeightRecord: ...

    async def delete(self, record_id: str, *, owner_id: str | None = None) -> bool: ...

    async def subscribe(self, owner_id: str | None = None) -> Subscription: ...
