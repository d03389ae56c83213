from __future__ import annotations

import os
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path

ENV_FILE = Path(".env")

DEFAULT_STORE_NAME = "default"
DEFAULT_STORE_TYPE = "s3"


def _load_env_file() -> None:
    if not ENV_FILE.exists():
        return
    for raw_line in ENV_FILE.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        if key and key not in os.environ:
            os.environ[key] = value


def _as_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    return value.lower() in {"1", "true", "t", "yes", "y", "on"}


def _as_list(value: str | None) -> list[str]:
    if not value:
        return []
    return [item.strip() for item in value.split(",") if item.strip()]


@dataclass
class Settings:
    ENABLE_METRICS: bool = True
    API_KEY_ENABLED: bool = False
    API_KEY: str | None = None
    CORS_ENABLED: bool = False
    CORS_ORIGINS: list[str] = field(default_factory=list)
    TRACE_HTTP: bool = False
    LOG_LEVEL: str = "INFO"
    OSS_CONFIG_PATH: str | None = None
    OSS_STORE_NAME: str = DEFAULT_STORE_NAME
    OSS_STORE_TYPE: str = DEFAULT_STORE_TYPE
    OSS_ENDPOINT: str | None = None
    OSS_REGION: str | None = None
    OSS_ACCESS_KEY_ID: str | None = None
    OSS_ACCESS_KEY_SECRET: str | None = None
    OSS_PRESIGN_MAX_EXPIRES_SECONDS: int = 7 * 24 * 3600

    def __post_init__(self) -> None:
        if self.OSS_PRESIGN_MAX_EXPIRES_SECONDS <= 0:
            raise ValueError("OSS_PRESIGN_MAX_EXPIRES_SECONDS must be positive.")

    @property
    def inline_store_configured(self) -> bool:
        return bool(self.OSS_ENDPOINT)

    @classmethod
    def from_environment(cls) -> "Settings":
        _load_env_file()
        return cls(
            ENABLE_METRICS=_as_bool(
                os.environ.get("ENABLE_METRICS"), cls.ENABLE_METRICS
            ),
            API_KEY_ENABLED=_as_bool(
                os.environ.get("API_KEY_ENABLED"), cls.API_KEY_ENABLED
            ),
            API_KEY=os.environ.get("API_KEY"),
            CORS_ENABLED=_as_bool(os.environ.get("CORS_ENABLED"), cls.CORS_ENABLED),
            CORS_ORIGINS=_as_list(os.environ.get("CORS_ORIGINS")),
            TRACE_HTTP=_as_bool(os.environ.get("TRACE_HTTP"), cls.TRACE_HTTP),
            LOG_LEVEL=os.environ.get("LOG_LEVEL", cls.LOG_LEVEL),
            OSS_CONFIG_PATH=os.environ.get("OSS_CONFIG_PATH") or None,
            OSS_STORE_NAME=os.environ.get("OSS_STORE_NAME", cls.OSS_STORE_NAME),
            OSS_STORE_TYPE=os.environ.get("OSS_STORE_TYPE", cls.OSS_STORE_TYPE),
            OSS_ENDPOINT=os.environ.get("OSS_ENDPOINT") or None,
            OSS_REGION=os.environ.get("OSS_REGION"),
            OSS_ACCESS_KEY_ID=os.environ.get("OSS_ACCESS_KEY_ID"),
            OSS_ACCESS_KEY_SECRET=os.environ.get("OSS_ACCESS_KEY_SECRET"),
            OSS_PRESIGN_MAX_EXPIRES_SECONDS=int(
                os.environ.get(
                    "OSS_PRESIGN_MAX_EXPIRES_SECONDS",
                    cls.OSS_PRESIGN_MAX_EXPIRES_SECONDS,
                )
            ),
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings.from_environment()
