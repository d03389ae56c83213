"""Pydantic schemas for object storage API endpoints.

This module defines the JSON request bodies of the gateway routes. Responses
reuse the storage layer's output dataclasses directly.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from ossgate.infra.storage.types import CopySource


class ObjectRef(BaseModel):
    """Addresses one object (or one version of it)."""

    bucket: str = Field(min_length=1)
    key: str = Field(min_length=1)
    version_id: str = ""


class CopySourceIn(BaseModel):
    bucket: str = Field(min_length=1)
    key: str = Field(min_length=1)
    version_id: str = ""

    def to_copy_source(self) -> CopySource:
        return CopySource(
            copy_source_bucket=self.bucket,
            copy_source_key=self.key,
            copy_source_version_id=self.version_id,
        )


class ObjectIdentifierIn(BaseModel):
    key: str = Field(min_length=1)
    version_id: str = ""


class DeleteObjectsIn(BaseModel):
    """Request body for deleting several objects in one call."""

    bucket: str = Field(min_length=1)
    objects: list[ObjectIdentifierIn] = Field(min_length=1, max_length=1000)
    quiet: bool = False


class CopyObjectIn(BaseModel):
    """Request body for a server-side copy."""

    bucket: str = Field(min_length=1)
    key: str = Field(min_length=1)
    copy_source: CopySourceIn | None = None
    acl: str = ""
    content_type: str = ""
    copy_source_if_match: str = ""
    copy_source_if_none_match: str = ""
    copy_source_if_modified_since: int = Field(default=0, ge=0)
    copy_source_if_unmodified_since: int = Field(default=0, ge=0)
    metadata: dict[str, str] = Field(default_factory=dict)
    metadata_directive: str = ""
    tagging: dict[str, str] = Field(default_factory=dict)
    tagging_directive: str = ""
    storage_class: str = ""


class PutObjectTaggingIn(ObjectRef):
    tags: dict[str, str] = Field(default_factory=dict)


class PutObjectAclIn(ObjectRef):
    acl: str = Field(min_length=1)


class SignUrlIn(BaseModel):
    """Request body for generating a presigned URL."""

    bucket: str = Field(min_length=1)
    key: str = Field(min_length=1)
    method: str = Field(min_length=1)
    expired_in_sec: int = Field(ge=1)


class RestoreObjectIn(ObjectRef):
    days: int = Field(default=0, ge=0)


class BandwidthRateLimitIn(BaseModel):
    average_rate_limit_in_bits_per_sec: int = Field(ge=0)
    gateway_resource_name: str = ""


class CreateMultipartUploadIn(BaseModel):
    """Request body for initiating a multipart upload."""

    bucket: str = Field(min_length=1)
    key: str = Field(min_length=1)
    acl: str = ""
    cache_control: str = ""
    content_disposition: str = ""
    content_type: str = ""
    expires: int = Field(default=0, ge=0)
    meta_data: dict[str, str] = Field(default_factory=dict)
    storage_class: str = ""
    tagging: dict[str, str] = Field(default_factory=dict)


class UploadPartCopyIn(BaseModel):
    bucket: str = Field(min_length=1)
    key: str = Field(min_length=1)
    copy_source: CopySourceIn | None = None
    copy_source_range: str = ""


class CompletedPartIn(BaseModel):
    """Information about a completed upload part."""

    part_number: int = Field(ge=1, le=10000)
    etag: str = Field(min_length=1)


class CompleteMultipartUploadIn(BaseModel):
    """Request body for completing a multipart upload."""

    bucket: str = Field(min_length=1)
    key: str = Field(min_length=1)
    parts: list[CompletedPartIn] = Field(min_length=1)


class StoreStatusOut(BaseModel):
    name: str
    type: str
    initialized: bool
    error: str | None = None
