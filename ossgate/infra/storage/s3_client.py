"""S3-compatible storage driver.

This module provides the ``ObjectStorage`` implementation for AWS S3, Ceph
RGW, MinIO and other S3-compatible services. Every operation checks the
client handle, translates the generic input, makes one boto3 call and
translates the response back.

Dependencies:
    - boto3
    - botocore
"""

from __future__ import annotations

import io
import logging
import time
from dataclasses import replace
from typing import Any, NoReturn

import boto3
from boto3.exceptions import S3UploadFailedError
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from ossgate.infra.observability.metrics import STORAGE_LATENCY, STORAGE_OPERATIONS
from ossgate.infra.storage import translate
from ossgate.infra.storage.client import (
    BackendError,
    Capability,
    InvalidRequestError,
    NotInitializedError,
    StorageError,
    UnsupportedCapabilityError,
)
from ossgate.infra.storage.metadata import OssMetadata, parse_basic_config
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

logger = logging.getLogger(__name__)

BACKEND_NAME = "S3"

# Presignable HTTP methods and the client method each one signs.
SIGNABLE_METHODS = {
    "GET": "get_object",
    "PUT": "put_object",
}

_BACKEND_EXCEPTIONS = (ClientError, BotoCoreError, S3UploadFailedError)


def disable_payload_signing(request: Any, **kwargs: Any) -> None:
    """Sign the request body as UNSIGNED-PAYLOAD.

    Registered for ``UploadPart`` so part bodies of unknown size are streamed
    without a SHA-256 pass over the data.
    """
    client_config = request.context.get("client_config")
    if client_config is None:
        return
    s3_config = dict(client_config.s3 or {})
    s3_config["payload_signing_enabled"] = False
    request.context["client_config"] = client_config.merge(Config(s3=s3_config))


def is_not_found(exc: BackendError) -> bool:
    """Classify a backend failure as "object does not exist".

    Only errors answered by the backend (``ClientError``) qualify. The
    structured error code and HTTP status decide; matching ``"404"`` in the
    message is a fallback for responses carrying neither and breaks if the
    backend rewords its errors.
    """
    cause = exc.__cause__
    if not isinstance(cause, ClientError):
        return False
    if exc.code is not None or exc.status_code is not None:
        return exc.is_not_found
    return "404" in str(cause)


def _require_bucket(bucket: str) -> None:
    if not bucket:
        raise InvalidRequestError("bucket must not be empty")


def _require_object(bucket: str, key: str) -> None:
    _require_bucket(bucket)
    if not key:
        raise InvalidRequestError("key must not be empty")


class S3ObjectStorage:
    """S3-compatible object storage driver.

    Uses boto3 with a fixed endpoint, static credentials and path-style
    bucket addressing. ``init`` must complete before any other call;
    concurrent calls to ``init`` must be serialized by the caller.
    """

    def __init__(self) -> None:
        self._client: Any = None
        self._metadata: OssMetadata | None = None

    def init(self, config: OssConfig) -> None:
        metadata = parse_basic_config(config)
        self._client = self._build_client(metadata)
        self._metadata = metadata
        logger.info(
            "oss_client_initialized backend=%s endpoint=%s region=%s",
            BACKEND_NAME,
            metadata.endpoint,
            metadata.region,
        )

    @property
    def initialized(self) -> bool:
        return self._client is not None

    @staticmethod
    def _build_client(metadata: OssMetadata) -> Any:
        """Create a boto3 S3 client from the store metadata."""
        config = Config(
            signature_version="s3v4",
            s3={"addressing_style": "path"},
            request_checksum_calculation="when_required",
        )
        client = boto3.client(
            "s3",
            endpoint_url=metadata.endpoint,
            region_name=metadata.region or None,
            aws_access_key_id=metadata.access_key_id,
            aws_secret_access_key=metadata.access_key_secret,
            config=config,
        )
        client.meta.events.register(
            "before-sign.s3.UploadPart", disable_payload_signing
        )
        return client

    def _get_client(self) -> Any:
        if self._client is None:
            raise NotInitializedError()
        return self._client

    def _invoke(self, client: Any, operation: str, params: dict[str, Any]) -> Any:
        start = time.perf_counter()
        try:
            response = getattr(client, operation)(**params)
        except _BACKEND_EXCEPTIONS as exc:
            STORAGE_OPERATIONS.labels(operation, "error").inc()
            error = _to_backend_error(operation, exc)
            logger.warning(
                "oss_backend_error operation=%s code=%s status=%s",
                operation,
                error.code,
                error.status_code,
                extra={
                    "extra": {
                        "operation": operation,
                        "code": error.code,
                        "status": error.status_code,
                    }
                },
            )
            raise error from exc
        finally:
            STORAGE_LATENCY.labels(operation).observe(time.perf_counter() - start)
        STORAGE_OPERATIONS.labels(operation, "ok").inc()
        return response

    def _unsupported(self, capability: Capability) -> NoReturn:
        raise UnsupportedCapabilityError(capability, BACKEND_NAME)

    # --- objects -----------------------------------------------------------

    def get_object(self, req: GetObjectInput) -> GetObjectOutput:
        client = self._get_client()
        _require_object(req.bucket, req.key)
        response = self._invoke(client, "get_object", translate.get_object_params(req))
        # Body stays unread; the caller owns the connection until it is drained.
        return translate.get_object_output(response)

    def put_object(self, req: PutObjectInput) -> PutObjectOutput:
        client = self._get_client()
        _require_object(req.bucket, req.key)
        body = req.data_stream if req.data_stream is not None else io.BytesIO(b"")
        extra_args = translate.put_object_extra_args(req)
        self._invoke(
            client,
            "upload_fileobj",
            {
                "Fileobj": body,
                "Bucket": req.bucket,
                "Key": req.key,
                "ExtraArgs": extra_args or None,
            },
        )
        # The managed uploader returns nothing, so read back what was stored.
        # The write already succeeded; a failed read-back only loses metadata.
        try:
            head = self._invoke(
                client, "head_object", {"Bucket": req.bucket, "Key": req.key}
            )
        except BackendError as exc:
            logger.warning(
                "oss_put_readback_failed bucket=%s key=%s code=%s status=%s",
                req.bucket,
                req.key,
                exc.code,
                exc.status_code,
            )
            return PutObjectOutput()
        return translate.put_object_output(head)

    def delete_object(self, req: DeleteObjectInput) -> DeleteObjectOutput:
        client = self._get_client()
        _require_object(req.bucket, req.key)
        response = self._invoke(
            client, "delete_object", translate.delete_object_params(req)
        )
        return translate.delete_object_output(response)

    def delete_objects(self, req: DeleteObjectsInput) -> DeleteObjectsOutput:
        client = self._get_client()
        _require_bucket(req.bucket)
        response = self._invoke(
            client, "delete_objects", translate.delete_objects_params(req)
        )
        return translate.delete_objects_output(response)

    def put_object_tagging(self, req: PutObjectTaggingInput) -> PutObjectTaggingOutput:
        client = self._get_client()
        _require_object(req.bucket, req.key)
        response = self._invoke(
            client, "put_object_tagging", translate.put_object_tagging_params(req)
        )
        return translate.put_object_tagging_output(response)

    def delete_object_tagging(
        self, req: DeleteObjectTaggingInput
    ) -> DeleteObjectTaggingOutput:
        client = self._get_client()
        _require_object(req.bucket, req.key)
        response = self._invoke(
            client, "delete_object_tagging", translate.delete_object_tagging_params(req)
        )
        return translate.delete_object_tagging_output(response)

    def get_object_tagging(self, req: GetObjectTaggingInput) -> GetObjectTaggingOutput:
        client = self._get_client()
        _require_object(req.bucket, req.key)
        response = self._invoke(
            client, "get_object_tagging", translate.get_object_tagging_params(req)
        )
        return translate.get_object_tagging_output(response)

    def copy_object(self, req: CopyObjectInput) -> CopyObjectOutput:
        client = self._get_client()
        _require_object(req.bucket, req.key)
        if req.copy_source is None:
            raise InvalidRequestError("must specify copy_source")
        response = self._invoke(
            client, "copy_object", translate.copy_object_params(req)
        )
        return translate.copy_object_output(response)

    def list_objects(self, req: ListObjectsInput) -> ListObjectsOutput:
        client = self._get_client()
        _require_bucket(req.bucket)
        response = self._invoke(
            client, "list_objects", translate.list_objects_params(req)
        )
        output = translate.list_objects_output(response)
        # Without a delimiter S3 omits NextMarker; continue from the last key.
        if output.is_truncated and not output.next_marker:
            if output.contents:
                output = replace(output, next_marker=output.contents[-1].key)
            elif output.common_prefixes:
                output = replace(output, next_marker=output.common_prefixes[-1])
        return output

    def get_object_canned_acl(
        self, req: GetObjectCannedAclInput
    ) -> GetObjectCannedAclOutput:
        client = self._get_client()
        _require_object(req.bucket, req.key)
        response = self._invoke(
            client, "get_object_acl", translate.get_object_acl_params(req)
        )
        return translate.get_object_acl_output(response)

    def put_object_canned_acl(
        self, req: PutObjectCannedAclInput
    ) -> PutObjectCannedAclOutput:
        client = self._get_client()
        _require_object(req.bucket, req.key)
        response = self._invoke(
            client, "put_object_acl", translate.put_object_acl_params(req)
        )
        return translate.put_object_acl_output(response)

    # --- multipart ---------------------------------------------------------

    def create_multipart_upload(
        self, req: CreateMultipartUploadInput
    ) -> CreateMultipartUploadOutput:
        client = self._get_client()
        _require_object(req.bucket, req.key)
        response = self._invoke(
            client,
            "create_multipart_upload",
            translate.create_multipart_upload_params(req),
        )
        output = translate.create_multipart_upload_output(response)
        if not output.upload_id:
            raise StorageError("S3 response missing UploadId")
        return output

    def upload_part(self, req: UploadPartInput) -> UploadPartOutput:
        client = self._get_client()
        _require_object(req.bucket, req.key)
        response = self._invoke(client, "upload_part", translate.upload_part_params(req))
        return translate.upload_part_output(response)

    def upload_part_copy(self, req: UploadPartCopyInput) -> UploadPartCopyOutput:
        client = self._get_client()
        _require_object(req.bucket, req.key)
        if req.copy_source is None:
            raise InvalidRequestError("must specify copy_source")
        response = self._invoke(
            client, "upload_part_copy", translate.upload_part_copy_params(req)
        )
        return translate.upload_part_copy_output(response)

    def complete_multipart_upload(
        self, req: CompleteMultipartUploadInput
    ) -> CompleteMultipartUploadOutput:
        client = self._get_client()
        _require_object(req.bucket, req.key)
        response = self._invoke(
            client,
            "complete_multipart_upload",
            translate.complete_multipart_upload_params(req),
        )
        return translate.complete_multipart_upload_output(response)

    def abort_multipart_upload(
        self, req: AbortMultipartUploadInput
    ) -> AbortMultipartUploadOutput:
        client = self._get_client()
        _require_object(req.bucket, req.key)
        response = self._invoke(
            client,
            "abort_multipart_upload",
            translate.abort_multipart_upload_params(req),
        )
        return translate.abort_multipart_upload_output(response)

    def list_parts(self, req: ListPartsInput) -> ListPartsOutput:
        client = self._get_client()
        _require_object(req.bucket, req.key)
        response = self._invoke(client, "list_parts", translate.list_parts_params(req))
        return translate.list_parts_output(response)

    def list_multipart_uploads(
        self, req: ListMultipartUploadsInput
    ) -> ListMultipartUploadsOutput:
        client = self._get_client()
        _require_bucket(req.bucket)
        response = self._invoke(
            client,
            "list_multipart_uploads",
            translate.list_multipart_uploads_params(req),
        )
        return translate.list_multipart_uploads_output(response)

    def list_object_versions(
        self, req: ListObjectVersionsInput
    ) -> ListObjectVersionsOutput:
        client = self._get_client()
        _require_bucket(req.bucket)
        response = self._invoke(
            client,
            "list_object_versions",
            translate.list_object_versions_params(req),
        )
        return translate.list_object_versions_output(response)

    # --- metadata ----------------------------------------------------------

    def head_object(self, req: HeadObjectInput) -> HeadObjectOutput:
        client = self._get_client()
        _require_object(req.bucket, req.key)
        response = self._invoke(client, "head_object", translate.head_object_params(req))
        return translate.head_object_output(response)

    def is_object_exist(self, req: IsObjectExistInput) -> IsObjectExistOutput:
        client = self._get_client()
        _require_object(req.bucket, req.key)
        params = translate.head_object_params(
            HeadObjectInput(bucket=req.bucket, key=req.key, version_id=req.version_id)
        )
        try:
            self._invoke(client, "head_object", params)
        except BackendError as exc:
            if is_not_found(exc):
                return IsObjectExistOutput(file_exist=False)
            raise
        return IsObjectExistOutput(file_exist=True)

    def sign_url(self, req: SignURLInput) -> SignURLOutput:
        client = self._get_client()
        _require_object(req.bucket, req.key)
        client_method = SIGNABLE_METHODS.get((req.method or "").upper())
        if client_method is None:
            raise InvalidRequestError(f"not supported method {req.method!r} now")
        url = self._invoke(
            client,
            "generate_presigned_url",
            {
                "ClientMethod": client_method,
                "Params": {"Bucket": req.bucket, "Key": req.key},
                "ExpiresIn": int(req.expired_in_sec),
            },
        )
        if not url:
            raise StorageError("Generated presigned URL is empty")
        return SignURLOutput(signed_url=str(url))

    # --- capabilities S3 does not offer ------------------------------------

    def restore_object(self, req: RestoreObjectInput) -> RestoreObjectOutput:
        self._unsupported(Capability.RESTORE_OBJECT)

    def append_object(self, req: AppendObjectInput) -> AppendObjectOutput:
        self._unsupported(Capability.APPEND_OBJECT)

    def update_download_bandwidth_rate_limit(
        self, req: UpdateBandwidthRateLimitInput
    ) -> None:
        self._unsupported(Capability.UPDATE_DOWNLOAD_BANDWIDTH_RATE_LIMIT)

    def update_upload_bandwidth_rate_limit(
        self, req: UpdateBandwidthRateLimitInput
    ) -> None:
        self._unsupported(Capability.UPDATE_UPLOAD_BANDWIDTH_RATE_LIMIT)


def _to_backend_error(operation: str, exc: Exception) -> BackendError:
    code: str | None = None
    status_code: int | None = None
    if isinstance(exc, ClientError):
        error = exc.response.get("Error") or {}
        code = error.get("Code")
        status_code = (exc.response.get("ResponseMetadata") or {}).get(
            "HTTPStatusCode"
        )
    return BackendError(
        f"{operation} failed: {exc}",
        operation=operation,
        code=code,
        status_code=status_code,
    )
