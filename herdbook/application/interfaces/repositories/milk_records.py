from __future__ import annotations

from collections.abc import Callable
from typing import Protocol

from herdbook.application.interfaces.record_store import Subscription
from herdbook.domain.models.milk_record import MilkRecord


class MilkRecordsRepository(Protocol):
    async def add_or_merge(
        self,
        record: MilkRecord,
        merge: Callable[[MilkRecord], MilkRecord],
    ) -> tuple[MilkRecord, bool]: ...

    async def get(self, record_id: str, *, owner_id: str | None = None) -> MilkRecord | None: ...

    async def list(
        self, owner_id: str | None = None, *, animal_id: str | None = None
    ) -> list[MilkRecord]: ...

    async def update(
        self, record: MilkRecord, *, owner_id: str | None = None
    ) -> MilkRecord: ...

    async def delete(self, record_id: str, *, owner_id: str | None = None) -> bool: ...

    async def subscribe(self, owner_id: str | None = None) -> Subscription: ...
