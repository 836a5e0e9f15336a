from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse, Response

from herdbook.application.errors import PermissionDenied
from herdbook.config.settings import Settings

PUBLIC_PATHS: Iterable[str] = (
    "/api/v1/health",
    "/docs",
    "/openapi.json",
    "/redoc",
)

MAX_OWNER_LENGTH = 128


@dataclass(slots=True)
class OwnerContext:
    owner_id: str


def parse_owner(value: str | None, header_name: str) -> OwnerContext:
    if not value or not value.strip():
        raise PermissionDenied(f"Missing {header_name} header")
    owner_id = value.strip()
    if len(owner_id) > MAX_OWNER_LENGTH:
        raise PermissionDenied("Invalid owner identifier")
    return OwnerContext(owner_id=owner_id)


class OwnerMiddleware(BaseHTTPMiddleware):
    """Scopes every request to the owner named in the configured header."""

    def __init__(self, app, *, settings: Settings) -> None:
        super().__init__(app)
        self.settings = settings

    async def dispatch(self, request: Request, call_next) -> Response:
        # Let CORS preflight pass without owner checks
        if request.method == "OPTIONS":
            return await call_next(request)
        if any(request.url.path.startswith(path) for path in PUBLIC_PATHS):
            return await call_next(request)
        try:
            request.state.owner_context = parse_owner(
                request.headers.get(self.settings.owner_header), self.settings.owner_header
            )
        except PermissionDenied as exc:
            payload = {"code": exc.code, "message": exc.message}
            if exc.details is not None:
                payload["details"] = exc.details
            return JSONResponse(status_code=exc.status_code, content=payload)
        return await call_next(request)
