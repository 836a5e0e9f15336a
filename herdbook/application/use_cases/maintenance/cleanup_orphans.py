from __future__ import annotations

import logging
from dataclasses import dataclass, field

from herdbook.application.interfaces.herd_store import HerdStore

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class CleanupReport:
    milk_records: int = 0
    weight_records: int = 0
    medical_observations: int = 0
    animal_ids: list[str] = field(default_factory=list)

    @property
    def total(self) -> int:
        return self.milk_records + self.weight_records + self.medical_observations


async def execute(
    store: HerdStore, *, owner_id: str | None = None, dry_run: bool = False
) -> CleanupReport:
    """Remove records whose animal no longer exists.

    Deleting an animal never cascades, so this is the explicit way to drop
    the milk, weight and medical history left behind.
    """
    known = {a.id for a in await store.animals.list(owner_id)}
    report = CleanupReport()
    orphan_ids: set[str] = set()
    for attr in ("milk_records", "weight_records", "medical_observations"):
        repo = getattr(store, attr)
        orphans = [r for r in await repo.list(owner_id) if r.animal_id not in known]
        for record in orphans:
            orphan_ids.add(record.animal_id)
            if not dry_run:
                await repo.delete(record.id, owner_id=owner_id)
        setattr(report, attr, len(orphans))
    report.animal_ids = sorted(orphan_ids)
    logger.info(
        "Orphan cleanup owner=%s dry_run=%s milk=%d weight=%d medical=%d",
        owner_id,
        dry_run,
        report.milk_records,
        report.weight_records,
        report.medical_observations,
    )
    return report
