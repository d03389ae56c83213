from __future__ import annotations

from contextlib import contextmanager
from email.utils import formatdate
from typing import Iterator

from fastapi import HTTPException, status

from ossgate.app.services.oss_service import StoreNotFoundError
from ossgate.infra.storage import (
    BackendError,
    InvalidConfigurationError,
    InvalidRequestError,
    NotInitializedError,
    StorageError,
    UnsupportedCapabilityError,
)

META_HEADER_PREFIX = "x-oss-meta-"


def http_error_for(exc: Exception) -> HTTPException:
    """Map a storage or registry error onto an HTTP error response."""
    if isinstance(exc, StoreNotFoundError):
        return HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={"message": str(exc), "error_code": "store_not_found"},
        )
    if isinstance(exc, NotInitializedError):
        return HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail={"message": str(exc), "error_code": "store_not_initialized"},
        )
    if isinstance(exc, InvalidConfigurationError):
        return HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"message": str(exc), "error_code": "invalid_configuration"},
        )
    if isinstance(exc, InvalidRequestError):
        return HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"message": str(exc), "error_code": "invalid_request"},
        )
    if isinstance(exc, UnsupportedCapabilityError):
        return HTTPException(
            status_code=status.HTTP_501_NOT_IMPLEMENTED,
            detail={
                "message": str(exc),
                "capability": exc.capability.value,
                "error_code": "unsupported_capability",
            },
        )
    if isinstance(exc, BackendError):
        # backend 4xx answers are the caller's problem; anything else is ours
        if exc.is_not_found:
            status_code = status.HTTP_404_NOT_FOUND
        elif exc.status_code and 400 <= exc.status_code < 500:
            status_code = exc.status_code
        else:
            status_code = status.HTTP_502_BAD_GATEWAY
        return HTTPException(
            status_code=status_code,
            detail={
                "message": str(exc),
                "backend_code": exc.code,
                "error_code": "backend_error",
            },
        )
    return HTTPException(
        status_code=status.HTTP_502_BAD_GATEWAY,
        detail={"message": str(exc), "error_code": "storage_error"},
    )


@contextmanager
def storage_errors() -> Iterator[None]:
    """Re-raise storage errors raised inside the block as HTTP errors."""
    try:
        yield
    except StorageError as exc:
        raise http_error_for(exc) from exc


def extract_user_metadata(headers) -> dict[str, str]:
    """Collect ``x-oss-meta-*`` request headers as object metadata."""
    return {
        name[len(META_HEADER_PREFIX) :]: value
        for name, value in headers.items()
        if name.lower().startswith(META_HEADER_PREFIX)
        and len(name) > len(META_HEADER_PREFIX)
    }


def http_date(epoch: int) -> str | None:
    if not epoch:
        return None
    return formatdate(epoch, usegmt=True)
