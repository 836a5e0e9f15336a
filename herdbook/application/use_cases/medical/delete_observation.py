from __future__ import annotations

from herdbook.application.errors import NotFound
from herdbook.application.interfaces.herd_store import HerdStore


async def execute(store: HerdStore, observation_id: str, *, owner_id: str | None = None) -> None:
    if not await store.medical_observations.delete(observation_id, owner_id=owner_id):
        raise NotFound("Medical observation not found")
