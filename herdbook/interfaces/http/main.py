from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import APIRouter, Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from herdbook.application.interfaces.herd_store import HerdStore
from herdbook.config.settings import Settings, get_settings
from herdbook.infrastructure.db.session import create_engine, create_schema, create_session_factory
from herdbook.infrastructure.repos.herd_store import DocumentHerdStore
from herdbook.infrastructure.store.sqlalchemy_store import SQLAlchemyRecordStore
from herdbook.interfaces.http.deps import get_app_settings
from herdbook.interfaces.http.routers import (
    animals,
    dashboard,
    live,
    maintenance,
    medical_observations,
    milk_records,
    weight_records,
)
from herdbook.interfaces.middleware.error_handler import register_error_handlers
from herdbook.interfaces.middleware.owner_middleware import OwnerMiddleware

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings
    engine = getattr(app.state, "engine", None)
    if engine is not None and settings.create_schema_on_startup:
        await create_schema(engine)
        logger.info("Database schema ensured")
    try:
        yield
    finally:
        if engine is not None:
            await engine.dispose()


def _configure_logging(level_name: str) -> None:
    level = getattr(logging, level_name.upper(), logging.INFO)
    root = logging.getLogger()
    # Avoid adding duplicate handlers on reload
    if not any(isinstance(h, logging.StreamHandler) for h in root.handlers):
        handler = logging.StreamHandler()
        formatter = logging.Formatter(
            fmt="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        )
        handler.setFormatter(formatter)
        root.addHandler(handler)
    root.setLevel(level)
    # Align common libraries
    for name in ("uvicorn", "uvicorn.error", "uvicorn.access", "sqlalchemy.engine"):
        logging.getLogger(name).setLevel(level)


def create_app(
    *,
    settings: Settings | None = None,
    store: HerdStore | None = None,
) -> FastAPI:
    """Build the API.

    `store` replaces the SQLAlchemy-backed herd store; when it is given no
    database engine is created.
    """
    settings = settings or get_settings()
    _configure_logging(settings.log_level)
    app = FastAPI(
        title="Herdbook",
        version="0.1.0",
        description="Dairy herd records and dashboard aggregates",
        lifespan=lifespan,
    )
    app.state.settings = settings
    if store is None:
        app.state.engine = create_engine(settings.database_url)
        app.state.session_factory = create_session_factory(app.state.engine)
        app.state.record_store = SQLAlchemyRecordStore(app.state.session_factory)
        store = DocumentHerdStore(app.state.record_store)
    app.state.herd_store = store
    register_error_handlers(app)

    # Group all API routes behind a single versioned prefix
    api = APIRouter(prefix="/api/v1")
    api.include_router(animals.router)
    api.include_router(milk_records.router)
    api.include_router(weight_records.router)
    api.include_router(medical_observations.router)
    api.include_router(dashboard.router)
    api.include_router(maintenance.router)
    api.include_router(live.router)

    @api.get("/health", tags=["health"])
    async def health(_: Settings = Depends(get_app_settings)) -> dict[str, str]:
        return {"status": "ok"}

    app.include_router(api)

    # Owner check first, then CORS last so CORS runs outermost and can handle preflight OPTIONS
    app.add_middleware(OwnerMiddleware, settings=settings)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    return app


def run() -> None:
    """Console entry point: serve the API with uvicorn."""
    import uvicorn

    uvicorn.run(
        "herdbook.interfaces.http.main:create_app",
        factory=True,
        host="0.0.0.0",
        port=8000,
        log_config=None,
    )
