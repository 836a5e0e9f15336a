from __future__ import annotations

import asyncio
import contextlib
import logging
from collections.abc import Callable

from fastapi import APIRouter, WebSocket, WebSocketDisconnect
from pydantic import BaseModel

from herdbook.application.aggregation.medical import medical_statistics
from herdbook.application.aggregation.milk import milk_statistics
from herdbook.application.aggregation.weight import weight_statistics
from herdbook.application.errors import PermissionDenied
from herdbook.application.interfaces.herd_store import HerdStore
from herdbook.application.interfaces.record_store import (
    ANIMALS,
    MEDICAL_OBSERVATIONS,
    MILK_RECORDS,
    WEIGHT_RECORDS,
)
from herdbook.application.live.snapshot_channel import LiveView, SnapshotChannel
from herdbook.application.use_cases.dashboard.herd_overview import build_overview
from herdbook.config.settings import Settings, get_settings
from herdbook.interfaces.http.schemas.dashboard import HerdOverviewResponse
from herdbook.interfaces.http.schemas.medical_observations import ObservationHistoryResponse
from herdbook.interfaces.http.schemas.milk_records import MilkHistoryResponse
from herdbook.interfaces.http.schemas.weight_records import (
    WeightHistoryItem,
    WeightHistoryResponse,
    WeightStatisticsResponse,
)
from herdbook.interfaces.middleware.owner_middleware import parse_owner
from herdbook.utils.datetime_tz import local_today, utc_now

router = APIRouter(prefix="/live", tags=["live"])
logger = logging.getLogger(__name__)


def _views(settings: Settings) -> dict[str, tuple[str, Callable[[list], BaseModel]]]:
    """Per collection: the repository attribute and the aggregation of a snapshot."""

    def herd(animals: list) -> BaseModel:
        overview = build_overview(
            animals,
            local_today(settings.timezone),
            upcoming_window_days=settings.upcoming_birth_days,
            weight_check_days=settings.weight_check_days,
        )
        return HerdOverviewResponse.model_validate(overview)

    def milk(records: list) -> BaseModel:
        return MilkHistoryResponse.model_validate(
            {"items": records, "statistics": milk_statistics(records)}, from_attributes=True
        )

    def weight(records: list) -> BaseModel:
        stats = weight_statistics(records)
        return WeightHistoryResponse(
            items=[WeightHistoryItem.from_record(r) for r in records],
            statistics=WeightStatisticsResponse.model_validate(stats) if stats else None,
        )

    def medical(observations: list) -> BaseModel:
        now = utc_now()
        return ObservationHistoryResponse.model_validate(
            {
                "items": observations,
                "statistics": medical_statistics(
                    observations, now, window_days=settings.checkup_window_days
                ),
            },
            from_attributes=True,
        )

    return {
        ANIMALS: ("animals", herd),
        MILK_RECORDS: ("milk_records", milk),
        WEIGHT_RECORDS: ("weight_records", weight),
        MEDICAL_OBSERVATIONS: ("medical_observations", medical),
    }


async def _listen(websocket: WebSocket, view: LiveView) -> None:
    """Answer pings until the client goes away, then release the view."""
    try:
        while True:
            data = await websocket.receive_text()
            if data == "ping":
                await websocket.send_text("pong")
    except WebSocketDisconnect:
        logger.info("Live client disconnected")
    finally:
        await view.aclose()


@router.websocket("/{collection}")
async def live_collection(
    websocket: WebSocket,
    collection: str,
    owner_id: str | None = None,
) -> None:
    """Push a freshly aggregated view of `collection` after every change.

    The owner comes from the `owner_id` query parameter or the owner header.
    """
    settings: Settings = getattr(websocket.app.state, "settings", None) or get_settings()
    store: HerdStore | None = getattr(websocket.app.state, "herd_store", None)
    views = _views(settings)
    try:
        if store is None:
            raise RuntimeError("Herd store not configured")
        if collection not in views:
            raise ValueError(f"Unknown collection: {collection}")
        owner = parse_owner(
            owner_id or websocket.headers.get(settings.owner_header), settings.owner_header
        )
    except (PermissionDenied, ValueError, RuntimeError) as exc:
        logger.warning("Live connection rejected: %s", exc)
        await websocket.close(code=1008, reason=str(exc)[:120])
        return

    await websocket.accept()
    attr, aggregate = views[collection]
    subscription = await getattr(store, attr).subscribe(owner.owner_id)
    channel = SnapshotChannel(subscription, max_pending=settings.live_queue_size)
    async with LiveView(channel, aggregate) as view:
        listener = asyncio.create_task(_listen(websocket, view))
        try:
            async for payload in view:
                await websocket.send_text(payload.model_dump_json())
        except WebSocketDisconnect:
            logger.info("Live client disconnected: collection=%s", collection)
        except Exception as exc:
            logger.error("Live stream failed: collection=%s error=%s", collection, exc, exc_info=True)
            with contextlib.suppress(Exception):
                await websocket.close(code=1011)
        finally:
            listener.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await listener
