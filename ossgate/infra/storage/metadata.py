"""Parsing of the store ``basic_config`` metadata document."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ossgate.infra.storage.client import InvalidConfigurationError
from ossgate.infra.storage.types import OssConfig

BASIC_CONFIGURATION = "basic_config"


class OssMetadata(BaseModel):
    """Connection settings of one S3-compatible store."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    endpoint: str = Field(min_length=1)
    region: str
    access_key_id: str = Field(alias="accessKeyId")
    access_key_secret: str = Field(alias="accessKeySecret", repr=False)


def parse_basic_config(config: OssConfig) -> OssMetadata:
    """Extract and validate the ``basic_config`` entry of ``config.metadata``.

    The entry may be raw JSON (``str``/``bytes``) or an already decoded
    mapping.

    Raises:
        InvalidConfigurationError: If the entry is missing or malformed.
    """
    raw: Any = config.metadata.get(BASIC_CONFIGURATION)
    if raw is None:
        raise InvalidConfigurationError(
            f"store metadata is missing '{BASIC_CONFIGURATION}'"
        )
    try:
        if isinstance(raw, (str, bytes, bytearray)):
            return OssMetadata.model_validate_json(raw)
        return OssMetadata.model_validate(raw)
    except ValidationError as exc:
        raise InvalidConfigurationError(f"invalid {BASIC_CONFIGURATION}: {exc}") from exc
