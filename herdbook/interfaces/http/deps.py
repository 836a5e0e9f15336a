from __future__ import annotations

from datetime import date, datetime

from fastapi import Depends, Request

from herdbook.application.errors import PermissionDenied
from herdbook.application.interfaces.herd_store import HerdStore
from herdbook.config.settings import Settings, get_settings
from herdbook.interfaces.middleware.owner_middleware import OwnerContext
from herdbook.utils.datetime_tz import local_today, utc_now


async def get_owner_context(request: Request) -> OwnerContext:
    context = getattr(request.state, "owner_context", None)
    if context is None:
        raise PermissionDenied("Owner identifier required")
    return context


def get_herd_store(request: Request) -> HerdStore:
    store = getattr(request.app.state, "herd_store", None)
    if store is None:
        raise RuntimeError("Herd store not configured")
    return store


def get_app_settings(request: Request) -> Settings:
    return getattr(request.app.state, "settings", None) or get_settings()


def get_today(settings: Settings = Depends(get_app_settings)) -> date:
    return local_today(settings.timezone)


def get_now() -> datetime:
    return utc_now()
