from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from herdbook.application.interfaces.herd_store import HerdStore
from herdbook.application.use_cases.maintenance import cleanup_orphans
from herdbook.interfaces.http.deps import get_herd_store, get_owner_context
from herdbook.interfaces.http.schemas.maintenance import CleanupReportResponse
from herdbook.interfaces.middleware.owner_middleware import OwnerContext

router = APIRouter(prefix="/maintenance", tags=["maintenance"])


@router.post("/cleanup-orphans", response_model=CleanupReportResponse)
async def cleanup(
    dry_run: bool = Query(False),
    context: OwnerContext = Depends(get_owner_context),
    store: HerdStore = Depends(get_herd_store),
) -> CleanupReportResponse:
    report = await cleanup_orphans.execute(store, owner_id=context.owner_id, dry_run=dry_run)
    return CleanupReportResponse(
        milk_records=report.milk_records,
        weight_records=report.weight_records,
        medical_observations=report.medical_observations,
        animal_ids=report.animal_ids,
        total=report.total,
        dry_run=dry_run,
    )
