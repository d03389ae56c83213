from .oss_service import (
    DRIVER_FACTORIES,
    ObjectStorageService,
    StoreNotFoundError,
    StoreStatus,
    load_store_configs,
)

__all__ = [
    "DRIVER_FACTORIES",
    "ObjectStorageService",
    "StoreNotFoundError",
    "StoreStatus",
    "load_store_configs",
]
