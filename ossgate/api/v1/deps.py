from __future__ import annotations

import logging

from fastapi import Depends, Header, HTTPException, Path, Request

from ossgate.api.v1.utils import http_error_for
from ossgate.app.services.oss_service import ObjectStorageService, StoreNotFoundError
from ossgate.common.config import get_settings
from ossgate.infra.storage import ObjectStorage

logger = logging.getLogger("http")


def get_oss_service(request: Request) -> ObjectStorageService:
    return request.app.state.oss_service


def get_store(
    store_name: str = Path(min_length=1),
    service: ObjectStorageService = Depends(get_oss_service),
) -> ObjectStorage:
    try:
        return service.get(store_name)
    except StoreNotFoundError as exc:
        raise http_error_for(exc) from exc


def require_api_key(x_api_key: str | None = Header(default=None)) -> None:
    settings = get_settings()
    if settings.API_KEY_ENABLED:
        api_key_expected = getattr(settings, "API_KEY", None)
        if not x_api_key or (api_key_expected and x_api_key != api_key_expected):
            preview = f"{x_api_key[:4]}***" if x_api_key else "<missing>"
            logger.warning("api_key_mismatch api_key_preview=%s", preview)
            raise HTTPException(status_code=401, detail="Invalid API key")
