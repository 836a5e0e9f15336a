from __future__ import annotations

from typing import Any, Mapping


class AppError(Exception):
    code = "app_error"
    status_code = 400

    def __init__(self, message: str, *, details: Mapping[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details


class AuthError(AppError):
    code = "auth_error"
    status_code = 401


class PermissionDenied(AppError):
    code = "forbidden"
    status_code = 403


class NotFound(AppError):
    code = "not_found"
    status_code = 404


class ValidationError(AppError):
    code = "validation_error"
    status_code = 422


class ConflictError(AppError):
    code = "conflict"
    status_code = 409


class InfrastructureError(AppError):
    code = "infrastructure_error"
    status_code = 500


class StoreError(InfrastructureError):
    """The record store could not complete a read or write."""

    code = "store_error"
    status_code = 503


class StorePermissionDenied(PermissionDenied):
    """The record store refused access to a document.

    Usually a misconfigured owner scope rather than a transient fault, so it
    gets its own code for clients to show an actionable message.
    """

    code = "store_permission_denied"

    def __init__(
        self,
        message: str = "Permission denied by the record store: check the owner identifier "
        "sent with the request and the store access rules",
        *,
        details: Mapping[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details=details)
