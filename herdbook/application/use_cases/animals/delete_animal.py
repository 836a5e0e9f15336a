from __future__ import annotations

import logging

from herdbook.application.errors import NotFound
from herdbook.application.interfaces.herd_store import HerdStore

logger = logging.getLogger(__name__)


async def execute(store: HerdStore, animal_id: str, *, owner_id: str | None = None) -> None:
    """Delete the animal document only.

    Milk, weight and medical records that reference it are left in place;
    see the orphan cleanup maintenance operation.
    """
    deleted = await store.animals.delete(animal_id, owner_id=owner_id)
    if not deleted:
        raise NotFound("Animal not found")
    logger.info("Animal %s deleted", animal_id)
