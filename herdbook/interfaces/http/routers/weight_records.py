from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends, Query, Response, status

from herdbook.application.errors import NotFound
from herdbook.application.interfaces.herd_store import HerdStore
from herdbook.application.use_cases.weight import (
    add_weight_record,
    delete_weight_record,
    update_weight_record,
    weight_evolution,
    weight_history,
)
from herdbook.interfaces.http.deps import get_herd_store, get_owner_context, get_today
from herdbook.interfaces.http.schemas.weight_records import (
    WeightBandResponse,
    WeightEvolutionResponse,
    WeightHistoryItem,
    WeightHistoryResponse,
    WeightPointResponse,
    WeightRecordCreate,
    WeightRecordResponse,
    WeightRecordUpdate,
    WeightStatisticsResponse,
    WeightTrendSummaryResponse,
    WeightWriteResponse,
)
from herdbook.interfaces.middleware.owner_middleware import OwnerContext

router = APIRouter(prefix="/weight-records", tags=["weight-records"])


@router.get("", response_model=WeightHistoryResponse)
async def history(
    search: str | None = Query(None),
    animal_id: str = Query("all"),
    date_range: str = Query("all", pattern="^(all|last-30-days|last-90-days|last-365-days)$"),
    sort_by: str = Query("date-desc"),
    context: OwnerContext = Depends(get_owner_context),
    store: HerdStore = Depends(get_herd_store),
    today: date = Depends(get_today),
) -> WeightHistoryResponse:
    result = await weight_history.execute(
        store,
        today=today,
        owner_id=context.owner_id,
        search=search,
        animal_id=animal_id,
        date_range=date_range,
        sort_by=sort_by,
    )
    stats = result.statistics
    return WeightHistoryResponse(
        items=[WeightHistoryItem.from_record(r) for r in result.items],
        statistics=WeightStatisticsResponse.model_validate(stats) if stats else None,
    )


@router.get("/evolution/{animal_id}", response_model=WeightEvolutionResponse)
async def evolution(
    animal_id: str,
    context: OwnerContext = Depends(get_owner_context),
    store: HerdStore = Depends(get_herd_store),
    today: date = Depends(get_today),
) -> WeightEvolutionResponse:
    result = await weight_evolution.execute(
        store, animal_id, today=today, owner_id=context.owner_id
    )
    return WeightEvolutionResponse(
        animal_id=result.animal.id,
        animal_name=result.animal.name,
        breed=result.animal.breed,
        points=[WeightPointResponse.model_validate(p) for p in result.points],
        summary=WeightTrendSummaryResponse.model_validate(result.summary),
        current_band=WeightBandResponse.model_validate(result.current_band),
    )


@router.post("", response_model=WeightWriteResponse, status_code=status.HTTP_201_CREATED)
async def add(
    payload: WeightRecordCreate,
    context: OwnerContext = Depends(get_owner_context),
    store: HerdStore = Depends(get_herd_store),
) -> WeightWriteResponse:
    result = await add_weight_record.execute(
        store,
        add_weight_record.WeightEntryInput(**payload.model_dump()),
        owner_id=context.owner_id,
    )
    return WeightWriteResponse.model_validate(result)


@router.get("/{record_id}", response_model=WeightRecordResponse)
async def get_one(
    record_id: str,
    context: OwnerContext = Depends(get_owner_context),
    store: HerdStore = Depends(get_herd_store),
) -> WeightRecordResponse:
    record = await store.weight_records.get(record_id, owner_id=context.owner_id)
    if record is None:
        raise NotFound("Weight record not found")
    return WeightRecordResponse.model_validate(record)


@router.put("/{record_id}", response_model=WeightWriteResponse)
async def update(
    record_id: str,
    payload: WeightRecordUpdate,
    context: OwnerContext = Depends(get_owner_context),
    store: HerdStore = Depends(get_herd_store),
) -> WeightWriteResponse:
    result = await update_weight_record.execute(
        store,
        record_id,
        update_weight_record.UpdateWeightRecordInput(
            **payload.model_dump(),
            cleared={name for name in payload.model_fields_set if getattr(payload, name) is None},
        ),
        owner_id=context.owner_id,
    )
    return WeightWriteResponse.model_validate(result)


@router.delete("/{record_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete(
    record_id: str,
    context: OwnerContext = Depends(get_owner_context),
    store: HerdStore = Depends(get_herd_store),
) -> Response:
    await delete_weight_record.execute(store, record_id, owner_id=context.owner_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
