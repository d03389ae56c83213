"""Field converters shared by the request/response translators."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Iterable, Mapping
from urllib.parse import urlencode

from ossgate.infra.storage.types import CopySource


def compact(params: Mapping[str, Any]) -> dict[str, Any]:
    """Drop unspecified values so backend defaults stay in effect.

    Empty strings, ``0``, ``False``, ``None`` and empty containers are all
    treated as "not specified".
    """
    return {name: value for name, value in params.items() if value}


def epoch_to_datetime(value: int | None) -> datetime | None:
    if not value:
        return None
    return datetime.fromtimestamp(int(value), tz=timezone.utc)


def datetime_to_epoch(value: Any) -> int:
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return int(value.timestamp())
    return 0


def enum_to_str(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)


def tags_to_tag_set(tags: Mapping[str, str]) -> list[dict[str, str]]:
    return [{"Key": key, "Value": value} for key, value in tags.items()]


def tag_set_to_tags(tag_set: Iterable[Mapping[str, Any]] | None) -> dict[str, str]:
    tags: dict[str, str] = {}
    for tag in tag_set or ():
        # later duplicates overwrite earlier ones
        tags[str(tag.get("Key", ""))] = str(tag.get("Value", ""))
    return tags


def tags_to_header(tags: Mapping[str, str]) -> str:
    """Render tags as the URL-encoded ``x-amz-tagging`` header value."""
    return urlencode(list(tags.items()))


def format_copy_source(source: CopySource) -> str:
    copy_source = f"{source.copy_source_bucket}/{source.copy_source_key}"
    if source.copy_source_version_id:
        copy_source += f"?versionId={source.copy_source_version_id}"
    return copy_source


def render_grants(grants: Any) -> str:
    """Render an ACL grant list as tab-indented JSON."""
    return json.dumps(grants or [], indent="\t", ensure_ascii=False, default=str)
