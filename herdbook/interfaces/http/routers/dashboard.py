from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends

from herdbook.application.interfaces.herd_store import HerdStore
from herdbook.application.use_cases.dashboard import herd_overview
from herdbook.config.settings import Settings
from herdbook.interfaces.http.deps import (
    get_app_settings,
    get_herd_store,
    get_owner_context,
    get_today,
)
from herdbook.interfaces.http.schemas.dashboard import HerdOverviewResponse
from herdbook.interfaces.middleware.owner_middleware import OwnerContext

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("/overview", response_model=HerdOverviewResponse)
async def overview(
    context: OwnerContext = Depends(get_owner_context),
    store: HerdStore = Depends(get_herd_store),
    settings: Settings = Depends(get_app_settings),
    today: date = Depends(get_today),
) -> HerdOverviewResponse:
    result = await herd_overview.execute(
        store,
        today=today,
        owner_id=context.owner_id,
        upcoming_window_days=settings.upcoming_birth_days,
        weight_check_days=settings.weight_check_days,
    )
    return HerdOverviewResponse.model_validate(result)
