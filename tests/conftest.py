from __future__ import annotations

import os

import pytest
from fastapi.testclient import TestClient

from ossgate.common.config import get_settings

# 测试不连接真实对象存储，清理可能从外部环境继承的配置
for _name in (
    "OSS_CONFIG_PATH",
    "OSS_ENDPOINT",
    "OSS_REGION",
    "OSS_ACCESS_KEY_ID",
    "OSS_ACCESS_KEY_SECRET",
    "API_KEY_ENABLED",
    "API_KEY",
    "TRACE_HTTP",
):
    os.environ.pop(_name, None)
get_settings.cache_clear()  # type: ignore[attr-defined]

from ossgate.app.services.oss_service import ObjectStorageService  # noqa: E402
from ossgate.main import create_app  # noqa: E402
from tests.services.mock_storage import MockObjectStorage  # noqa: E402

STORE = "default"
API_PREFIX = f"/api/v1/oss/{STORE}"


@pytest.fixture(autouse=True)
def reset_settings_cache():
    get_settings.cache_clear()  # type: ignore[attr-defined]
    yield
    get_settings.cache_clear()  # type: ignore[attr-defined]


@pytest.fixture
def memory_storage() -> MockObjectStorage:
    return MockObjectStorage()


@pytest.fixture
def oss_service(memory_storage) -> ObjectStorageService:
    return ObjectStorageService({STORE: memory_storage})


@pytest.fixture
def api_client(oss_service) -> TestClient:
    return TestClient(create_app(oss_service=oss_service))
