from __future__ import annotations

from datetime import datetime

from fastapi import APIRouter, Depends, Query, Response, status

from herdbook.application.errors import NotFound
from herdbook.application.interfaces.herd_store import HerdStore
from herdbook.application.use_cases.medical import (
    create_observation,
    delete_observation,
    observation_history,
    update_observation,
)
from herdbook.config.settings import Settings
from herdbook.interfaces.http.deps import (
    get_app_settings,
    get_herd_store,
    get_now,
    get_owner_context,
)
from herdbook.interfaces.http.schemas.medical_observations import (
    ObservationCreate,
    ObservationHistoryResponse,
    ObservationResponse,
    ObservationUpdate,
    ObservationWriteResponse,
)
from herdbook.interfaces.middleware.owner_middleware import OwnerContext

router = APIRouter(prefix="/medical-observations", tags=["medical-observations"])


def _plain(payload: dict) -> dict:
    # Enum members to their stored string values
    return {k: getattr(v, "value", v) for k, v in payload.items()}


@router.get("", response_model=ObservationHistoryResponse)
async def history(
    search: str | None = Query(None),
    animal_id: str = Query("all"),
    type: str = Query("all"),
    status_filter: str = Query("all", alias="status"),
    severity: str = Query("all"),
    context: OwnerContext = Depends(get_owner_context),
    store: HerdStore = Depends(get_herd_store),
    settings: Settings = Depends(get_app_settings),
    now: datetime = Depends(get_now),
) -> ObservationHistoryResponse:
    result = await observation_history.execute(
        store,
        now=now,
        owner_id=context.owner_id,
        search=search,
        animal_id=animal_id,
        type=type,
        status=status_filter,
        severity=severity,
        checkup_window_days=settings.checkup_window_days,
    )
    return ObservationHistoryResponse.model_validate(result, from_attributes=True)


@router.post("", response_model=ObservationWriteResponse, status_code=status.HTTP_201_CREATED)
async def create(
    payload: ObservationCreate,
    context: OwnerContext = Depends(get_owner_context),
    store: HerdStore = Depends(get_herd_store),
) -> ObservationWriteResponse:
    result = await create_observation.execute(
        store,
        create_observation.ObservationInput(**_plain(payload.model_dump())),
        owner_id=context.owner_id,
    )
    return ObservationWriteResponse.model_validate(result)


@router.get("/{observation_id}", response_model=ObservationResponse)
async def get_one(
    observation_id: str,
    context: OwnerContext = Depends(get_owner_context),
    store: HerdStore = Depends(get_herd_store),
) -> ObservationResponse:
    observation = await store.medical_observations.get(observation_id, owner_id=context.owner_id)
    if observation is None:
        raise NotFound("Medical observation not found")
    return ObservationResponse.model_validate(observation)


@router.put("/{observation_id}", response_model=ObservationWriteResponse)
async def update(
    observation_id: str,
    payload: ObservationUpdate,
    context: OwnerContext = Depends(get_owner_context),
    store: HerdStore = Depends(get_herd_store),
) -> ObservationWriteResponse:
    result = await update_observation.execute(
        store,
        observation_id,
        update_observation.UpdateObservationInput(
            **_plain(payload.model_dump()),
            cleared={name for name in payload.model_fields_set if getattr(payload, name) is None},
        ),
        owner_id=context.owner_id,
    )
    return ObservationWriteResponse.model_validate(result)


@router.delete("/{observation_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete(
    observation_id: str,
    context: OwnerContext = Depends(get_owner_context),
    store: HerdStore = Depends(get_herd_store),
) -> Response:
    await delete_observation.execute(store, observation_id, owner_id=context.owner_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
