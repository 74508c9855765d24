from __future__ import annotations

from typing import Any, Mapping


class AppError(Exception):
    """Base for errors surfaced to API callers as ``{"code", "message", "details"}``."""

    code = "app_error"
    status_code = 400
    # Whether the same request may succeed later without changing its input
    retryable = False

    def __init__(self, message: str, *, details: Mapping[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"code": self.code, "message": self.message}
        if self.details is not None:
            payload["details"] = dict(self.details)
        if self.retryable:
            payload["retryable"] = True
        return payload


class NotFound(AppError):
    code = "not_found"
    status_code = 404


class ValidationError(AppError):
    """A breeding rule or input check rejected the request; never retried automatically."""

    code = "validation_error"
    status_code = 422


class ConflictError(AppError):
    """Another writer changed the record; reload and try again."""

    code = "conflict"
    status_code = 409
    retryable = True


class TransientDispatchFailure(AppError):
    """Notification transport unavailable or over quota; retried on the next scan."""

    code = "dispatch_unavailable"
    status_code = 503
    retryable = True


class InfrastructureError(AppError):
    code = "infrastructure_error"
    status_code = 500
