"""Storage client protocol and error taxonomy.

This module defines the provider-agnostic interface every object storage
driver implements, the capability flags a driver may lack, and the small set
of exceptions operations are allowed to raise.
"""

from __future__ import annotations

from enum import Enum
from typing import Protocol

from ossgate.infra.storage.types import (
    AbortMultipartUploadInput,
    AbortMultipartUploadOutput,
    AppendObjectInput,
    AppendObjectOutput,
    CompleteMultipartUploadInput,
    CompleteMultipartUploadOutput,
    CopyObjectInput,
    CopyObjectOutput,
    CreateMultipartUploadInput,
    CreateMultipartUploadOutput,
    DeleteObjectInput,
    DeleteObjectOutput,
    DeleteObjectsInput,
    DeleteObjectsOutput,
    DeleteObjectTaggingInput,
    DeleteObjectTaggingOutput,
    GetObjectCannedAclInput,
    GetObjectCannedAclOutput,
    GetObjectInput,
    GetObjectOutput,
    GetObjectTaggingInput,
    GetObjectTaggingOutput,
    HeadObjectInput,
    HeadObjectOutput,
    IsObjectExistInput,
    IsObjectExistOutput,
    ListMultipartUploadsInput,
    ListMultipartUploadsOutput,
    ListObjectsInput,
    ListObjectsOutput,
    ListObjectVersionsInput,
    ListObjectVersionsOutput,
    ListPartsInput,
    ListPartsOutput,
    OssConfig,
    PutObjectCannedAclInput,
    PutObjectCannedAclOutput,
    PutObjectInput,
    PutObjectOutput,
    PutObjectTaggingInput,
    PutObjectTaggingOutput,
    RestoreObjectInput,
    RestoreObjectOutput,
    SignURLInput,
    SignURLOutput,
    UpdateBandwidthRateLimitInput,
    UploadPartCopyInput,
    UploadPartCopyOutput,
    UploadPartInput,
    UploadPartOutput,
)


class StorageError(RuntimeError):
    """Raised when object storage operations fail."""


class NotInitializedError(StorageError):
    """Raised when an operation runs before a successful ``init``."""

    def __init__(self, message: str = "object storage client is not initialized"):
        super().__init__(message)


class InvalidConfigurationError(StorageError):
    """Raised when the store configuration cannot be parsed."""


class InvalidRequestError(StorageError):
    """Raised for contract violations detected before any network call."""


class BackendError(StorageError):
    """Raised when the storage backend rejects or fails a call.

    The original backend exception is chained as ``__cause__``.
    """

    def __init__(
        self,
        message: str,
        *,
        operation: str,
        code: str | None = None,
        status_code: int | None = None,
    ):
        super().__init__(message)
        self.operation = operation
        self.code = code
        self.status_code = status_code

    @property
    def is_not_found(self) -> bool:
        return self.status_code == 404 or self.code in NOT_FOUND_ERROR_CODES


class Capability(str, Enum):
    """Optional operations a backend may not offer."""

    RESTORE_OBJECT = "RestoreObject"
    APPEND_OBJECT = "AppendObject"
    UPDATE_DOWNLOAD_BANDWIDTH_RATE_LIMIT = "UpdateDownloadBandwidthRateLimit"
    UPDATE_UPLOAD_BANDWIDTH_RATE_LIMIT = "UpdateUploadBandwidthRateLimit"


class UnsupportedCapabilityError(StorageError):
    """Raised by operations the backend permanently does not support."""

    def __init__(self, capability: Capability, backend: str):
        super().__init__(f"{capability.value} method not supported on {backend}")
        self.capability = capability
        self.backend = backend


NOT_FOUND_ERROR_CODES = frozenset({"404", "NoSuchKey", "NotFound", "NoSuchVersion"})


class ObjectStorage(Protocol):
    """Protocol defining the interface for object storage backends.

    Each operation takes one generic input dataclass and returns the matching
    output dataclass. Implementations translate these to their native API and
    raise only ``StorageError`` subclasses.
    """

    def init(self, config: OssConfig) -> None:
        """Parse the store configuration and build the backend client.

        Raises:
            InvalidConfigurationError: If the configuration is malformed.
        """
        ...

    def get_object(self, req: GetObjectInput) -> GetObjectOutput:
        """Fetch object metadata and a live, unread body stream.

        The caller must drain or close ``data_stream``.
        """
        ...

    def put_object(self, req: PutObjectInput) -> PutObjectOutput:
        """Upload ``req.data_stream`` as the object body."""
        ...

    def delete_object(self, req: DeleteObjectInput) -> DeleteObjectOutput:
        ...

    def delete_objects(self, req: DeleteObjectsInput) -> DeleteObjectsOutput:
        """Delete several objects, reporting per-object outcomes."""
        ...

    def put_object_tagging(self, req: PutObjectTaggingInput) -> PutObjectTaggingOutput:
        ...

    def delete_object_tagging(
        self, req: DeleteObjectTaggingInput
    ) -> DeleteObjectTaggingOutput:
        ...

    def get_object_tagging(self, req: GetObjectTaggingInput) -> GetObjectTaggingOutput:
        ...

    def copy_object(self, req: CopyObjectInput) -> CopyObjectOutput:
        """Server-side copy.

        Raises:
            InvalidRequestError: If ``req.copy_source`` is missing.
        """
        ...

    def list_objects(self, req: ListObjectsInput) -> ListObjectsOutput:
        """List one page of objects.

        ``next_marker`` is always usable for continuation when
        ``is_truncated`` is true. When the backend omits it, it is the last
        returned key, or the last common prefix if a truncated page holds
        only prefixes.
        """
        ...

    def get_object_canned_acl(
        self, req: GetObjectCannedAclInput
    ) -> GetObjectCannedAclOutput:
        ...

    def put_object_canned_acl(
        self, req: PutObjectCannedAclInput
    ) -> PutObjectCannedAclOutput:
        ...

    def create_multipart_upload(
        self, req: CreateMultipartUploadInput
    ) -> CreateMultipartUploadOutput:
        ...

    def upload_part(self, req: UploadPartInput) -> UploadPartOutput:
        ...

    def upload_part_copy(self, req: UploadPartCopyInput) -> UploadPartCopyOutput:
        ...

    def complete_multipart_upload(
        self, req: CompleteMultipartUploadInput
    ) -> CompleteMultipartUploadOutput:
        ...

    def abort_multipart_upload(
        self, req: AbortMultipartUploadInput
    ) -> AbortMultipartUploadOutput:
        ...

    def list_parts(self, req: ListPartsInput) -> ListPartsOutput:
        ...

    def list_multipart_uploads(
        self, req: ListMultipartUploadsInput
    ) -> ListMultipartUploadsOutput:
        ...

    def list_object_versions(
        self, req: ListObjectVersionsInput
    ) -> ListObjectVersionsOutput:
        ...

    def head_object(self, req: HeadObjectInput) -> HeadObjectOutput:
        ...

    def is_object_exist(self, req: IsObjectExistInput) -> IsObjectExistOutput:
        """Report whether the object exists.

        Only a not-found answer maps to ``file_exist=False``; every other
        failure is raised.
        """
        ...

    def sign_url(self, req: SignURLInput) -> SignURLOutput:
        """Generate a presigned GET or PUT URL.

        Raises:
            InvalidRequestError: For any other method.
        """
        ...

    def restore_object(self, req: RestoreObjectInput) -> RestoreObjectOutput:
        ...

    def append_object(self, req: AppendObjectInput) -> AppendObjectOutput:
        ...

    def update_download_bandwidth_rate_limit(
        self, req: UpdateBandwidthRateLimitInput
    ) -> None:
        ...

    def update_upload_bandwidth_rate_limit(
        self, req: UpdateBandwidthRateLimitInput
    ) -> None:
        ...
