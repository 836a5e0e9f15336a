from __future__ import annotations

from herdbook.application.errors import NotFound
from herdbook.application.interfaces.herd_store import HerdStore


async def execute(store: HerdStore, record_id: str, *, owner_id: str | None = None) -> None:
    if not await store.weight_records.delete(record_id, owner_id=owner_id):
        raise NotFound("Weight record not found")
