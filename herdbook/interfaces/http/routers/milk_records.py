from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends, Query, Response, status

from herdbook.application.errors import NotFound
from herdbook.application.interfaces.herd_store import HerdStore
from herdbook.application.use_cases.milk import (
    add_milk_record,
    delete_milk_record,
    milk_history,
    milk_series,
    update_milk_record,
)
from herdbook.interfaces.http.deps import get_herd_store, get_owner_context, get_today
from herdbook.interfaces.http.schemas.milk_records import (
    MilkHistoryResponse,
    MilkRecordCreate,
    MilkRecordResponse,
    MilkRecordUpdate,
    MilkSeriesResponse,
    MilkWriteResponse,
)
from herdbook.interfaces.middleware.owner_middleware import OwnerContext

router = APIRouter(prefix="/milk-records", tags=["milk-records"])


@router.get("", response_model=MilkHistoryResponse)
async def history(
    search: str | None = Query(None),
    animal_id: str = Query("all"),
    date_range: str = Query("all", pattern="^(all|today|last-7-days|last-30-days)$"),
    sort_by: str = Query("date-desc"),
    context: OwnerContext = Depends(get_owner_context),
    store: HerdStore = Depends(get_herd_store),
    today: date = Depends(get_today),
) -> MilkHistoryResponse:
    result = await milk_history.execute(
        store,
        today=today,
        owner_id=context.owner_id,
        search=search,
        animal_id=animal_id,
        date_range=date_range,
        sort_by=sort_by,
    )
    return MilkHistoryResponse.model_validate(result, from_attributes=True)


@router.get("/series", response_model=MilkSeriesResponse)
async def series(
    days: int = Query(7, ge=1, le=366),
    animal_id: str | None = Query(None),
    context: OwnerContext = Depends(get_owner_context),
    store: HerdStore = Depends(get_herd_store),
    today: date = Depends(get_today),
) -> MilkSeriesResponse:
    result = await milk_series.execute(
        store, today=today, days=days, animal_id=animal_id, owner_id=context.owner_id
    )
    return MilkSeriesResponse.model_validate(result)


@router.post("", response_model=MilkWriteResponse, status_code=status.HTTP_201_CREATED)
async def add(
    payload: MilkRecordCreate,
    response: Response,
    context: OwnerContext = Depends(get_owner_context),
    store: HerdStore = Depends(get_herd_store),
    today: date = Depends(get_today),
) -> MilkWriteResponse:
    result = await add_milk_record.execute(
        store,
        add_milk_record.MilkEntryInput(**payload.model_dump()),
        today=today,
        owner_id=context.owner_id,
    )
    if result.merged:
        response.status_code = status.HTTP_200_OK
    return MilkWriteResponse.model_validate(result)


@router.get("/{record_id}", response_model=MilkRecordResponse)
async def get_one(
    record_id: str,
    context: OwnerContext = Depends(get_owner_context),
    store: HerdStore = Depends(get_herd_store),
) -> MilkRecordResponse:
    record = await store.milk_records.get(record_id, owner_id=context.owner_id)
    if record is None:
        raise NotFound("Milk record not found")
    return MilkRecordResponse.model_validate(record)


@router.put("/{record_id}", response_model=MilkWriteResponse)
async def update(
    record_id: str,
    payload: MilkRecordUpdate,
    context: OwnerContext = Depends(get_owner_context),
    store: HerdStore = Depends(get_herd_store),
    today: date = Depends(get_today),
) -> MilkWriteResponse:
    result = await update_milk_record.execute(
        store,
        record_id,
        update_milk_record.UpdateMilkRecordInput(
            **payload.model_dump(),
            cleared={name for name in payload.model_fields_set if getattr(payload, name) is None},
        ),
        today=today,
        owner_id=context.owner_id,
    )
    return MilkWriteResponse.model_validate(result)


@router.delete("/{record_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete(
    record_id: str,
    context: OwnerContext = Depends(get_owner_context),
    store: HerdStore = Depends(get_herd_store),
) -> Response:
    await delete_milk_record.execute(store, record_id, owner_id=context.owner_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
