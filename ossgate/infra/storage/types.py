"""Generic request and response types for object storage operations.

Every operation has an ``<Operation>Input`` / ``<Operation>Output`` pair.
Zero values (empty strings, ``0``, ``False``, ``None``, empty containers)
mean "not specified" and are never forwarded to the backend. Times are epoch
seconds, with ``0`` meaning unset.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, BinaryIO


class CannedAcl(str, Enum):
    """Canned ACL names understood by S3-compatible backends."""

    PRIVATE = "private"
    PUBLIC_READ = "public-read"
    PUBLIC_READ_WRITE = "public-read-write"
    AUTHENTICATED_READ = "authenticated-read"
    AWS_EXEC_READ = "aws-exec-read"
    BUCKET_OWNER_READ = "bucket-owner-read"
    BUCKET_OWNER_FULL_CONTROL = "bucket-owner-full-control"


@dataclass(frozen=True, slots=True)
class OssConfig:
    """Store configuration handed to ``ObjectStorage.init``."""

    type: str = ""
    metadata: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class Owner:
    display_name: str = ""
    id: str = ""


@dataclass(frozen=True, slots=True)
class Initiator:
    display_name: str = ""
    id: str = ""


@dataclass(frozen=True, slots=True)
class CopySource:
    """Source object of a server-side copy."""

    copy_source_bucket: str
    copy_source_key: str
    copy_source_version_id: str = ""


# --- Get / Put -------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class GetObjectInput:
    bucket: str
    key: str
    version_id: str = ""
    range: str = ""
    part_number: int = 0
    if_match: str = ""
    if_none_match: str = ""
    if_modified_since: int = 0
    if_unmodified_since: int = 0
    expected_bucket_owner: str = ""
    request_payer: str = ""
    response_cache_control: str = ""
    response_content_disposition: str = ""
    response_content_encoding: str = ""
    response_content_language: str = ""
    response_content_type: str = ""
    response_expires: int = 0
    sse_customer_algorithm: str = ""
    sse_customer_key: str = ""
    sse_customer_key_md5: str = ""


@dataclass(frozen=True, slots=True)
class GetObjectOutput:
    data_stream: Any = None
    cache_control: str = ""
    content_disposition: str = ""
    content_encoding: str = ""
    content_language: str = ""
    content_length: int = 0
    content_range: str = ""
    content_type: str = ""
    delete_marker: bool = False
    etag: str = ""
    expiration: str = ""
    expires: int = 0
    last_modified: int = 0
    version_id: str = ""
    tag_count: int = 0
    storage_class: str = ""
    parts_count: int = 0
    metadata: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class PutObjectInput:
    bucket: str
    key: str
    data_stream: BinaryIO | None = None
    acl: str = ""
    cache_control: str = ""
    content_disposition: str = ""
    content_encoding: str = ""
    content_language: str = ""
    content_type: str = ""
    expires: int = 0
    server_side_encryption: str = ""
    storage_class: str = ""
    meta: dict[str, str] = field(default_factory=dict)
    tagging: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class PutObjectOutput:
    bucket_key_enabled: bool = False
    etag: str = ""
    expiration: str = ""
    request_charged: str = ""
    version_id: str = ""
    server_side_encryption: str = ""


# --- Delete ----------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class DeleteObjectInput:
    bucket: str
    key: str
    version_id: str = ""
    request_payer: str = ""
    expected_bucket_owner: str = ""


@dataclass(frozen=True, slots=True)
class DeleteObjectOutput:
    delete_marker: bool = False
    request_charged: str = ""
    version_id: str = ""


@dataclass(frozen=True, slots=True)
class ObjectIdentifier:
    key: str
    version_id: str = ""


@dataclass(frozen=True, slots=True)
class Delete:
    objects: list[ObjectIdentifier] = field(default_factory=list)
    quiet: bool = False


@dataclass(frozen=True, slots=True)
class DeleteObjectsInput:
    bucket: str
    delete: Delete | None = None
    request_payer: str = ""
    expected_bucket_owner: str = ""


@dataclass(frozen=True, slots=True)
class DeletedObject:
    key: str = ""
    version_id: str = ""
    delete_marker: bool = False
    delete_marker_version_id: str = ""


@dataclass(frozen=True, slots=True)
class DeleteObjectError:
    key: str = ""
    version_id: str = ""
    code: str = ""
    message: str = ""


@dataclass(frozen=True, slots=True)
class DeleteObjectsOutput:
    deleted: list[DeletedObject] = field(default_factory=list)
    errors: list[DeleteObjectError] = field(default_factory=list)
    request_charged: str = ""


# --- Tagging ---------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class PutObjectTaggingInput:
    bucket: str
    key: str
    tags: dict[str, str] = field(default_factory=dict)
    version_id: str = ""
    content_md5: str = ""
    expected_bucket_owner: str = ""
    request_payer: str = ""


@dataclass(frozen=True, slots=True)
class PutObjectTaggingOutput:
    version_id: str = ""


@dataclass(frozen=True, slots=True)
class DeleteObjectTaggingInput:
    bucket: str
    key: str
    version_id: str = ""
    expected_bucket_owner: str = ""


@dataclass(frozen=True, slots=True)
class DeleteObjectTaggingOutput:
    version_id: str = ""


@dataclass(frozen=True, slots=True)
class GetObjectTaggingInput:
    bucket: str
    key: str
    version_id: str = ""
    expected_bucket_owner: str = ""
    request_payer: str = ""


@dataclass(frozen=True, slots=True)
class GetObjectTaggingOutput:
    tags: dict[str, str] = field(default_factory=dict)
    version_id: str = ""


# --- ACL -------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class GetObjectCannedAclInput:
    bucket: str
    key: str
    version_id: str = ""
    expected_bucket_owner: str = ""
    request_payer: str = ""


@dataclass(frozen=True, slots=True)
class GetObjectCannedAclOutput:
    canned_acl: str = ""
    owner: Owner = field(default_factory=Owner)
    request_charged: str = ""


@dataclass(frozen=True, slots=True)
class PutObjectCannedAclInput:
    bucket: str
    key: str
    acl: str = ""
    version_id: str = ""


@dataclass(frozen=True, slots=True)
class PutObjectCannedAclOutput:
    request_charged: str = ""


# --- Copy ------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class CopyObjectInput:
    bucket: str
    key: str
    copy_source: CopySource | None = None
    acl: str = ""
    cache_control: str = ""
    content_disposition: str = ""
    content_encoding: str = ""
    content_language: str = ""
    content_type: str = ""
    copy_source_if_match: str = ""
    copy_source_if_modified_since: int = 0
    copy_source_if_none_match: str = ""
    copy_source_if_unmodified_since: int = 0
    expires: int = 0
    metadata: dict[str, str] = field(default_factory=dict)
    metadata_directive: str = ""
    tagging: dict[str, str] = field(default_factory=dict)
    tagging_directive: str = ""
    server_side_encryption: str = ""
    storage_class: str = ""
    expected_bucket_owner: str = ""


@dataclass(frozen=True, slots=True)
class CopyObjectResult:
    etag: str = ""
    last_modified: int = 0


@dataclass(frozen=True, slots=True)
class CopyObjectOutput:
    copy_object_result: CopyObjectResult = field(default_factory=CopyObjectResult)
    copy_source_version_id: str = ""
    version_id: str = ""
    expiration: str = ""
    request_charged: str = ""


# --- Listing ---------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class ListObjectsInput:
    bucket: str
    delimiter: str = ""
    encoding_type: str = ""
    expected_bucket_owner: str = ""
    marker: str = ""
    max_keys: int = 0
    prefix: str = ""
    request_payer: str = ""


@dataclass(frozen=True, slots=True)
class ObjectSummary:
    key: str = ""
    etag: str = ""
    last_modified: int = 0
    owner: Owner = field(default_factory=Owner)
    size: int = 0
    storage_class: str = ""


@dataclass(frozen=True, slots=True)
class ListObjectsOutput:
    common_prefixes: list[str] = field(default_factory=list)
    contents: list[ObjectSummary] = field(default_factory=list)
    delimiter: str = ""
    encoding_type: str = ""
    is_truncated: bool = False
    marker: str = ""
    max_keys: int = 0
    name: str = ""
    next_marker: str = ""
    prefix: str = ""


@dataclass(frozen=True, slots=True)
class ListObjectVersionsInput:
    bucket: str
    delimiter: str = ""
    encoding_type: str = ""
    expected_bucket_owner: str = ""
    key_marker: str = ""
    max_keys: int = 0
    prefix: str = ""
    version_id_marker: str = ""


@dataclass(frozen=True, slots=True)
class DeleteMarkerEntry:
    is_latest: bool = False
    key: str = ""
    last_modified: int = 0
    owner: Owner = field(default_factory=Owner)
    version_id: str = ""


@dataclass(frozen=True, slots=True)
class ObjectVersion:
    etag: str = ""
    is_latest: bool = False
    key: str = ""
    last_modified: int = 0
    owner: Owner = field(default_factory=Owner)
    size: int = 0
    storage_class: str = ""
    version_id: str = ""


@dataclass(frozen=True, slots=True)
class ListObjectVersionsOutput:
    common_prefixes: list[str] = field(default_factory=list)
    delete_markers: list[DeleteMarkerEntry] = field(default_factory=list)
    delimiter: str = ""
    encoding_type: str = ""
    is_truncated: bool = False
    key_marker: str = ""
    max_keys: int = 0
    name: str = ""
    next_key_marker: str = ""
    next_version_id_marker: str = ""
    prefix: str = ""
    version_id_marker: str = ""
    versions: list[ObjectVersion] = field(default_factory=list)


# --- Multipart -------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class CreateMultipartUploadInput:
    bucket: str
    key: str
    acl: str = ""
    bucket_key_enabled: bool = False
    cache_control: str = ""
    content_disposition: str = ""
    content_encoding: str = ""
    content_language: str = ""
    content_type: str = ""
    expected_bucket_owner: str = ""
    expires: int = 0
    meta_data: dict[str, str] = field(default_factory=dict)
    object_lock_legal_hold_status: str = ""
    object_lock_mode: str = ""
    object_lock_retain_until_date: int = 0
    request_payer: str = ""
    server_side_encryption: str = ""
    storage_class: str = ""
    tagging: dict[str, str] = field(default_factory=dict)
    website_redirect_location: str = ""


@dataclass(frozen=True, slots=True)
class CreateMultipartUploadOutput:
    bucket: str = ""
    key: str = ""
    upload_id: str = ""
    abort_date: int = 0
    abort_rule_id: str = ""
    bucket_key_enabled: bool = False
    request_charged: str = ""
    server_side_encryption: str = ""


@dataclass(frozen=True, slots=True)
class UploadPartInput:
    bucket: str
    key: str
    upload_id: str
    part_number: int
    data_stream: BinaryIO | None = None
    content_length: int = 0
    content_md5: str = ""
    expected_bucket_owner: str = ""
    request_payer: str = ""
    sse_customer_algorithm: str = ""
    sse_customer_key: str = ""
    sse_customer_key_md5: str = ""


@dataclass(frozen=True, slots=True)
class UploadPartOutput:
    etag: str = ""
    bucket_key_enabled: bool = False
    request_charged: str = ""
    server_side_encryption: str = ""


@dataclass(frozen=True, slots=True)
class UploadPartCopyInput:
    bucket: str
    key: str
    upload_id: str
    part_number: int
    copy_source: CopySource | None = None
    copy_source_range: str = ""
    copy_source_if_match: str = ""
    copy_source_if_none_match: str = ""
    expected_bucket_owner: str = ""
    request_payer: str = ""


@dataclass(frozen=True, slots=True)
class CopyPartResult:
    etag: str = ""
    last_modified: int = 0


@dataclass(frozen=True, slots=True)
class UploadPartCopyOutput:
    copy_part_result: CopyPartResult = field(default_factory=CopyPartResult)
    copy_source_version_id: str = ""
    bucket_key_enabled: bool = False
    request_charged: str = ""
    server_side_encryption: str = ""


@dataclass(frozen=True, slots=True)
class CompletedPart:
    """Represents a completed part in a multipart upload."""

    part_number: int
    etag: str


@dataclass(frozen=True, slots=True)
class CompletedMultipartUpload:
    parts: list[CompletedPart] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class CompleteMultipartUploadInput:
    bucket: str
    key: str
    upload_id: str
    multipart_upload: CompletedMultipartUpload | None = None
    expected_bucket_owner: str = ""
    request_payer: str = ""


@dataclass(frozen=True, slots=True)
class CompleteMultipartUploadOutput:
    bucket: str = ""
    key: str = ""
    etag: str = ""
    location: str = ""
    version_id: str = ""
    expiration: str = ""
    bucket_key_enabled: bool = False
    request_charged: str = ""
    server_side_encryption: str = ""


@dataclass(frozen=True, slots=True)
class AbortMultipartUploadInput:
    bucket: str
    key: str
    upload_id: str
    expected_bucket_owner: str = ""
    request_payer: str = ""


@dataclass(frozen=True, slots=True)
class AbortMultipartUploadOutput:
    request_charged: str = ""


@dataclass(frozen=True, slots=True)
class ListPartsInput:
    bucket: str
    key: str
    upload_id: str
    max_parts: int = 0
    part_number_marker: int = 0
    expected_bucket_owner: str = ""
    request_payer: str = ""


@dataclass(frozen=True, slots=True)
class Part:
    etag: str = ""
    last_modified: int = 0
    part_number: int = 0
    size: int = 0


@dataclass(frozen=True, slots=True)
class ListPartsOutput:
    bucket: str = ""
    key: str = ""
    upload_id: str = ""
    next_part_number_marker: int = 0
    part_number_marker: int = 0
    max_parts: int = 0
    is_truncated: bool = False
    parts: list[Part] = field(default_factory=list)
    initiator: Initiator = field(default_factory=Initiator)
    owner: Owner = field(default_factory=Owner)
    storage_class: str = ""
    request_charged: str = ""


@dataclass(frozen=True, slots=True)
class ListMultipartUploadsInput:
    bucket: str
    delimiter: str = ""
    encoding_type: str = ""
    expected_bucket_owner: str = ""
    key_marker: str = ""
    max_uploads: int = 0
    prefix: str = ""
    upload_id_marker: str = ""


@dataclass(frozen=True, slots=True)
class MultipartUploadSummary:
    initiated: int = 0
    initiator: Initiator = field(default_factory=Initiator)
    key: str = ""
    owner: Owner = field(default_factory=Owner)
    storage_class: str = ""
    upload_id: str = ""


@dataclass(frozen=True, slots=True)
class ListMultipartUploadsOutput:
    bucket: str = ""
    common_prefixes: list[str] = field(default_factory=list)
    delimiter: str = ""
    encoding_type: str = ""
    is_truncated: bool = False
    key_marker: str = ""
    max_uploads: int = 0
    next_key_marker: str = ""
    next_upload_id_marker: str = ""
    prefix: str = ""
    upload_id_marker: str = ""
    uploads: list[MultipartUploadSummary] = field(default_factory=list)


# --- Head / existence / signing --------------------------------------------


@dataclass(frozen=True, slots=True)
class HeadObjectInput:
    bucket: str
    key: str
    version_id: str = ""
    expected_bucket_owner: str = ""
    request_payer: str = ""


@dataclass(frozen=True, slots=True)
class HeadObjectOutput:
    result_metadata: dict[str, str] = field(default_factory=dict)
    content_length: int = 0
    content_type: str = ""
    etag: str = ""
    last_modified: int = 0
    version_id: str = ""


@dataclass(frozen=True, slots=True)
class IsObjectExistInput:
    bucket: str
    key: str
    version_id: str = ""


@dataclass(frozen=True, slots=True)
class IsObjectExistOutput:
    file_exist: bool = False


@dataclass(frozen=True, slots=True)
class SignURLInput:
    bucket: str
    key: str
    method: str
    expired_in_sec: int


@dataclass(frozen=True, slots=True)
class SignURLOutput:
    signed_url: str = ""


# --- Capabilities S3 does not offer ----------------------------------------


@dataclass(frozen=True, slots=True)
class RestoreObjectInput:
    bucket: str
    key: str
    version_id: str = ""
    days: int = 0


@dataclass(frozen=True, slots=True)
class RestoreObjectOutput:
    request_charged: str = ""
    restore_output_path: str = ""


@dataclass(frozen=True, slots=True)
class AppendObjectInput:
    bucket: str
    key: str
    position: int = 0
    data_stream: BinaryIO | None = None
    content_type: str = ""


@dataclass(frozen=True, slots=True)
class AppendObjectOutput:
    append_position: int = 0


@dataclass(frozen=True, slots=True)
class UpdateBandwidthRateLimitInput:
    average_rate_limit_in_bits_per_sec: int = 0
    gateway_resource_name: str = ""
