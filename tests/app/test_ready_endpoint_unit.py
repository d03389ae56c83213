"""测试 /ready 端点的各种场景（使用内存存储，避免真实对象存储依赖）。"""

from __future__ import annotations

from unittest.mock import MagicMock, patch

from fastapi.testclient import TestClient

from ossgate.app.services.oss_service import ObjectStorageService
from ossgate.infra.storage import BASIC_CONFIGURATION, OssConfig, S3ObjectStorage
from ossgate.main import create_app
from tests.services.mock_storage import MockObjectStorage

BASIC_CONFIG = {
    "endpoint": "http://localhost:9000",
    "region": "us-east-1",
    "accessKeyId": "ak",
    "accessKeySecret": "sk",
}


class TestReadyEndpoint:
    """测试 /ready 端点。"""

    def test_ready_when_all_stores_initialized(self) -> None:
        """所有存储初始化成功时应该返回 ready。"""
        service = ObjectStorageService({"default": MockObjectStorage()})
        client = TestClient(create_app(oss_service=service))

        r = client.get("/ready")

        assert r.status_code == 200
        payload = r.json()
        assert payload["status"] == "ready"
        assert payload["stores"] == [
            {"name": "default", "type": "custom", "initialized": True, "error": None}
        ]

    def test_reports_failed_store(self) -> None:
        """存储初始化失败时应该报告 failed_stores。"""
        service = ObjectStorageService()
        with patch.object(S3ObjectStorage, "_build_client", return_value=MagicMock()):
            service.register(
                "good", OssConfig(type="s3", metadata={BASIC_CONFIGURATION: BASIC_CONFIG})
            )
        service.register("bad", OssConfig(type="s3", metadata={}))
        client = TestClient(create_app(oss_service=service))

        r = client.get("/ready")

        payload = r.json()
        assert payload["status"] == "not_ready"
        assert payload["detail"]["failed_stores"] == ["bad"]
        by_name = {store["name"]: store for store in payload["stores"]}
        assert by_name["good"]["initialized"] is True
        assert by_name["bad"]["error"]

    def test_reports_no_stores(self) -> None:
        """未配置存储时应该返回 not_ready。"""
        client = TestClient(create_app(oss_service=ObjectStorageService()))

        payload = client.get("/ready").json()

        assert payload["status"] == "not_ready"
        assert "stores" in payload["detail"]

    def test_startup_builds_registry_from_environment(self, monkeypatch) -> None:
        """启动时应该根据环境变量构建存储注册表。"""
        from ossgate.common.config import get_settings

        monkeypatch.setenv("OSS_ENDPOINT", "http://localhost:9000")
        monkeypatch.setenv("OSS_REGION", "us-east-1")
        monkeypatch.setenv("OSS_ACCESS_KEY_ID", "ak")
        monkeypatch.setenv("OSS_ACCESS_KEY_SECRET", "sk")
        get_settings.cache_clear()  # type: ignore[attr-defined]

        with patch.object(S3ObjectStorage, "_build_client", return_value=MagicMock()):
            with TestClient(create_app()) as client:
                payload = client.get("/ready").json()

        assert payload["status"] == "ready"
        assert payload["stores"][0]["name"] == "default"
        assert payload["stores"][0]["type"] == "s3"
