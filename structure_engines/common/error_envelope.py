"""HTTP error bodies for the IWGO routes.

Every error leaves the API as ``{"detail": {"error": {...}}}`` so a client can
branch on ``code`` (``iwgo.not_found``, ``iwgo.loading_failed``) without
parsing messages.
"""
from __future__ import annotations

from typing import Any, Dict, NoReturn, Optional

from fastapi import HTTPException
from pydantic import BaseModel, Field

from structure_engines.common.errors import LoadingError


class ErrorDetail(BaseModel):
    code: str
    message: str
    http_status: int
    resource_kind: Optional[str] = None
    details: Dict[str, Any] = Field(default_factory=dict)


class ErrorEnvelope(BaseModel):
    error: ErrorDetail


def raise_error(
    resource_kind: str,
    reason: str,
    message: str,
    status_code: int,
    details: Optional[Dict[str, Any]] = None,
) -> NoReturn:
    """Raise an ``HTTPException`` whose detail is an ``ErrorEnvelope`` coded ``<kind>.<reason>``."""
    envelope = ErrorEnvelope(
        error=ErrorDetail(
            code=f"{resource_kind}.{reason}",
            message=message,
            http_status=status_code,
            resource_kind=resource_kind,
            details=details or {},
        )
    )
    raise HTTPException(status_code=status_code, detail=envelope.model_dump())


def not_found_error(resource_kind: str, name: str) -> NoReturn:
    raise_error(resource_kind, "not_found", f"{resource_kind} not found: {name}", 404, {"name": name})


def loading_error(resource_kind: str, exc: LoadingError) -> NoReturn:
    """422 for a blueprint that fails to load or evaluate; names the failing field when known."""
    details: Dict[str, Any] = {"error_type": type(exc).__name__}
    for attr in ("field", "key", "expression"):
        value = getattr(exc, attr, None)
        if value is not None:
            details[attr] = value
    raise_error(resource_kind, "loading_failed", str(exc), 422, details)
