"""Object storage store registry.

This module builds the named object storage stores the gateway serves from
configuration, and resolves a store by name for each request.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Mapping

from pydantic import BaseModel, Field, ValidationError

from ossgate.common.config import Settings
from ossgate.infra.storage import (
    BASIC_CONFIGURATION,
    InvalidConfigurationError,
    ObjectStorage,
    OssConfig,
    S3ObjectStorage,
    StorageError,
)

startup_logger = logging.getLogger("ossgate.startup")

# Driver type name -> driver constructor. All S3-compatible backends share
# one driver; the names only document what the store points at.
DRIVER_FACTORIES: dict[str, Callable[[], ObjectStorage]] = {
    "s3": S3ObjectStorage,
    "aws": S3ObjectStorage,
    "ceph": S3ObjectStorage,
    "minio": S3ObjectStorage,
}


class StoreNotFoundError(Exception):
    """Raised when no store is registered under the requested name."""


class StoreConfigEntry(BaseModel):
    type: str = Field(min_length=1)
    metadata: dict[str, Any] = Field(default_factory=dict)


class StoreConfigDocument(BaseModel):
    stores: dict[str, StoreConfigEntry] = Field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class StoreStatus:
    """Initialization outcome of one registered store."""

    name: str
    type: str
    initialized: bool
    error: str | None = None


def load_store_configs(settings: Settings) -> dict[str, OssConfig]:
    """Collect store configurations from the config file or environment.

    ``OSS_CONFIG_PATH`` takes precedence; otherwise a single store is built
    from the ``OSS_*`` connection variables when ``OSS_ENDPOINT`` is set.

    Raises:
        InvalidConfigurationError: If the config file is unreadable or
            malformed.
    """
    if settings.OSS_CONFIG_PATH:
        path = Path(settings.OSS_CONFIG_PATH)
        try:
            document = StoreConfigDocument.model_validate_json(
                path.read_text(encoding="utf-8")
            )
        except OSError as exc:
            raise InvalidConfigurationError(
                f"cannot read oss config file {path}: {exc}"
            ) from exc
        except ValidationError as exc:
            raise InvalidConfigurationError(
                f"invalid oss config file {path}: {exc}"
            ) from exc
        return {
            name: OssConfig(type=entry.type, metadata=dict(entry.metadata))
            for name, entry in document.stores.items()
        }

    if settings.inline_store_configured:
        basic_config = {
            "endpoint": settings.OSS_ENDPOINT,
            "region": settings.OSS_REGION or "",
            "accessKeyId": settings.OSS_ACCESS_KEY_ID or "",
            "accessKeySecret": settings.OSS_ACCESS_KEY_SECRET or "",
        }
        return {
            settings.OSS_STORE_NAME: OssConfig(
                type=settings.OSS_STORE_TYPE,
                metadata={BASIC_CONFIGURATION: basic_config},
            )
        }
    return {}


class ObjectStorageService:
    """Registry of named object storage stores."""

    def __init__(self, stores: Mapping[str, ObjectStorage] | None = None) -> None:
        self._stores: dict[str, ObjectStorage] = dict(stores or {})
        self._types: dict[str, str] = {name: "custom" for name in self._stores}
        self._errors: dict[str, str] = {}

    @classmethod
    def from_settings(cls, settings: Settings) -> "ObjectStorageService":
        service = cls()
        for name, config in load_store_configs(settings).items():
            service.register(name, config)
        return service

    def register(self, name: str, config: OssConfig) -> ObjectStorage:
        """Create and initialize the store ``name``.

        A store whose ``init`` fails is still registered, so requests against
        it report the store as not initialized instead of unknown.

        Raises:
            InvalidConfigurationError: If ``config.type`` names no driver.
        """
        factory = DRIVER_FACTORIES.get(config.type.strip().lower())
        if factory is None:
            raise InvalidConfigurationError(
                f"unsupported oss type '{config.type}' for store '{name}'"
            )
        store = factory()
        startup_logger.info(
            "正在初始化对象存储。[event=oss_store_init] (store=%s, type=%s)",
            name,
            config.type,
        )
        try:
            store.init(config)
        except StorageError as exc:
            startup_logger.error(
                "对象存储初始化失败，请检查 endpoint、region 与访问密钥配置。"
                " [event=oss_store_init_failed] (store=%s, error=%s)",
                name,
                exc,
            )
            self._errors[name] = str(exc)
        else:
            self._errors.pop(name, None)
        self._stores[name] = store
        self._types[name] = config.type
        return store

    def get(self, name: str) -> ObjectStorage:
        store = self._stores.get(name)
        if store is None:
            raise StoreNotFoundError(f"Store '{name}' is not configured")
        return store

    @property
    def names(self) -> list[str]:
        return sorted(self._stores)

    def statuses(self) -> list[StoreStatus]:
        return [
            StoreStatus(
                name=name,
                type=self._types.get(name, ""),
                initialized=name not in self._errors,
                error=self._errors.get(name),
            )
            for name in self.names
        ]
