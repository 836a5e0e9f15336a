from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends, Query, Response, status

from herdbook.application.interfaces.herd_store import HerdStore
from herdbook.application.use_cases.animals import (
    delete_animal,
    get_animal,
    list_animals,
    register_animal,
    update_animal,
)
from herdbook.config.settings import Settings
from herdbook.interfaces.http.deps import (
    get_app_settings,
    get_herd_store,
    get_owner_context,
    get_today,
)
from herdbook.interfaces.http.schemas.animals import (
    AnimalCreate,
    AnimalListResponse,
    AnimalResponse,
    AnimalUpdate,
)
from herdbook.interfaces.middleware.owner_middleware import OwnerContext

router = APIRouter(prefix="/animals", tags=["animals"])


@router.get("", response_model=AnimalListResponse)
async def list_all(
    search: str | None = Query(None),
    breed: str = Query("all"),
    health_status: str = Query("all"),
    sort_by: str = Query("name"),
    context: OwnerContext = Depends(get_owner_context),
    store: HerdStore = Depends(get_herd_store),
    settings: Settings = Depends(get_app_settings),
    today: date = Depends(get_today),
) -> AnimalListResponse:
    result = await list_animals.execute(
        store,
        today=today,
        owner_id=context.owner_id,
        search=search,
        breed=breed,
        health_status=health_status,
        sort_by=sort_by,
        upcoming_window_days=settings.upcoming_birth_days,
    )
    return AnimalListResponse.model_validate(result, from_attributes=True)


@router.post("", response_model=AnimalResponse, status_code=status.HTTP_201_CREATED)
async def register(
    payload: AnimalCreate,
    context: OwnerContext = Depends(get_owner_context),
    store: HerdStore = Depends(get_herd_store),
    today: date = Depends(get_today),
) -> AnimalResponse:
    animal = await register_animal.execute(
        store,
        register_animal.RegisterAnimalInput(
            name=payload.name,
            breed=payload.breed,
            birth_date=payload.birth_date,
            sex=payload.sex.value,
            pregnancy_due_date=payload.pregnancy_due_date,
            initial_weight=payload.initial_weight,
            notes=payload.notes,
        ),
        today=today,
        owner_id=context.owner_id,
    )
    return AnimalResponse.model_validate(animal)


@router.get("/{animal_id}", response_model=AnimalResponse)
async def get_one(
    animal_id: str,
    context: OwnerContext = Depends(get_owner_context),
    store: HerdStore = Depends(get_herd_store),
) -> AnimalResponse:
    animal = await get_animal.execute(store, animal_id, owner_id=context.owner_id)
    return AnimalResponse.model_validate(animal)


@router.put("/{animal_id}", response_model=AnimalResponse)
async def update(
    animal_id: str,
    payload: AnimalUpdate,
    context: OwnerContext = Depends(get_owner_context),
    store: HerdStore = Depends(get_herd_store),
    today: date = Depends(get_today),
) -> AnimalResponse:
    sent = payload.model_fields_set
    animal = await update_animal.execute(
        store,
        animal_id,
        update_animal.UpdateAnimalInput(
            name=payload.name,
            breed=payload.breed,
            birth_date=payload.birth_date,
            sex=payload.sex.value if payload.sex else None,
            pregnancy_due_date=payload.pregnancy_due_date,
            last_weight=payload.last_weight,
            health_status=payload.health_status.value if payload.health_status else None,
            observations=payload.observations,
            notes=payload.notes,
            cleared={name for name in sent if getattr(payload, name) is None},
        ),
        today=today,
        owner_id=context.owner_id,
    )
    return AnimalResponse.model_validate(animal)


@router.delete("/{animal_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete(
    animal_id: str,
    context: OwnerContext = Depends(get_owner_context),
    store: HerdStore = Depends(get_herd_store),
) -> Response:
    await delete_animal.execute(store, animal_id, owner_id=context.owner_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
