"""Object API router.

This module exposes the per-object operations of a named store: streaming
get/put, deletion, listing, copy, tagging, ACLs, presigned URLs and the
capabilities the backend reports as unsupported.
"""

from __future__ import annotations

import io
from typing import Any, Iterator
from urllib.parse import parse_qsl

from fastapi import (
    APIRouter,
    Depends,
    File,
    Form,
    Header,
    HTTPException,
    Query,
    Request,
    Response,
    UploadFile,
    status,
)
from fastapi.responses import StreamingResponse

from ossgate.api.v1.deps import get_store
from ossgate.api.v1.schemas.oss import (
    BandwidthRateLimitIn,
    CopyObjectIn,
    DeleteObjectsIn,
    PutObjectAclIn,
    PutObjectTaggingIn,
    RestoreObjectIn,
    SignUrlIn,
)
from ossgate.api.v1.utils import (
    META_HEADER_PREFIX,
    extract_user_metadata,
    http_date,
    storage_errors,
)
from ossgate.common.config import get_settings
from ossgate.infra.storage import ObjectStorage
from ossgate.infra.storage.types import (
    AppendObjectInput,
    AppendObjectOutput,
    CopyObjectInput,
    CopyObjectOutput,
    Delete,
    DeleteObjectInput,
    DeleteObjectOutput,
    DeleteObjectsInput,
    DeleteObjectsOutput,
    DeleteObjectTaggingInput,
    DeleteObjectTaggingOutput,
    GetObjectCannedAclInput,
    GetObjectCannedAclOutput,
    GetObjectInput,
    GetObjectTaggingInput,
    GetObjectTaggingOutput,
    HeadObjectInput,
    HeadObjectOutput,
    IsObjectExistInput,
    IsObjectExistOutput,
    ListObjectsInput,
    ListObjectsOutput,
    ListObjectVersionsInput,
    ListObjectVersionsOutput,
    ObjectIdentifier,
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
)

router = APIRouter(prefix="/oss/{store_name}")

STREAM_CHUNK_SIZE = 64 * 1024


def _iter_stream(stream: Any) -> Iterator[bytes]:
    """Yield the body in chunks and release the connection when done."""
    try:
        while True:
            chunk = stream.read(STREAM_CHUNK_SIZE)
            if not chunk:
                break
            yield chunk
    finally:
        stream.close()


@router.get(
    "/object",
    response_class=StreamingResponse,
    summary="Get object",
    description="Stream an object body. Metadata is returned in response headers.",
)
def get_object(
    bucket: str = Query(min_length=1),
    key: str = Query(min_length=1),
    version_id: str = "",
    range_header: str | None = Header(default=None, alias="Range"),
    if_match: str | None = Header(default=None),
    if_none_match: str | None = Header(default=None),
    store: ObjectStorage = Depends(get_store),
) -> StreamingResponse:
    req = GetObjectInput(
        bucket=bucket,
        key=key,
        version_id=version_id,
        range=range_header or "",
        if_match=if_match or "",
        if_none_match=if_none_match or "",
    )
    with storage_errors():
        output = store.get_object(req)

    headers: dict[str, str] = {}
    if output.content_length:
        headers["Content-Length"] = str(output.content_length)
    if output.content_range:
        headers["Content-Range"] = output.content_range
    if output.etag:
        headers["ETag"] = output.etag
    if output.version_id:
        headers["X-Oss-Version-Id"] = output.version_id
    last_modified = http_date(output.last_modified)
    if last_modified:
        headers["Last-Modified"] = last_modified
    for name, value in output.metadata.items():
        headers[f"{META_HEADER_PREFIX}{name}"] = value

    stream = output.data_stream if output.data_stream is not None else io.BytesIO()
    return StreamingResponse(
        _iter_stream(stream),
        status_code=(
            status.HTTP_206_PARTIAL_CONTENT if output.content_range else status.HTTP_200_OK
        ),
        media_type=output.content_type or "application/octet-stream",
        headers=headers,
    )


@router.put(
    "/object",
    response_model=PutObjectOutput,
    summary="Put object",
    description=(
        "Upload the `file` form field as the object body. `x-oss-meta-*` headers "
        "become user metadata, `x-oss-tagging` carries URL-encoded tags."
    ),
)
def put_object(
    request: Request,
    bucket: str = Query(min_length=1),
    key: str = Query(min_length=1),
    file: UploadFile = File(...),
    acl: str = Form(default=""),
    storage_class: str = Form(default=""),
    x_oss_tagging: str | None = Header(default=None),
    store: ObjectStorage = Depends(get_store),
) -> PutObjectOutput:
    req = PutObjectInput(
        bucket=bucket,
        key=key,
        data_stream=file.file,
        acl=acl,
        content_type=file.content_type or "",
        storage_class=storage_class,
        meta=extract_user_metadata(request.headers),
        tagging=dict(parse_qsl(x_oss_tagging or "", keep_blank_values=True)),
    )
    with storage_errors():
        return store.put_object(req)


@router.delete(
    "/object",
    response_model=DeleteObjectOutput,
    summary="Delete object",
)
def delete_object(
    bucket: str = Query(min_length=1),
    key: str = Query(min_length=1),
    version_id: str = "",
    store: ObjectStorage = Depends(get_store),
) -> DeleteObjectOutput:
    with storage_errors():
        return store.delete_object(
            DeleteObjectInput(bucket=bucket, key=key, version_id=version_id)
        )


@router.get(
    "/object/head",
    response_model=HeadObjectOutput,
    summary="Head object",
    description="Get object metadata without downloading the content.",
)
def head_object(
    bucket: str = Query(min_length=1),
    key: str = Query(min_length=1),
    version_id: str = "",
    store: ObjectStorage = Depends(get_store),
) -> HeadObjectOutput:
    with storage_errors():
        return store.head_object(
            HeadObjectInput(bucket=bucket, key=key, version_id=version_id)
        )


@router.get(
    "/object/exists",
    response_model=IsObjectExistOutput,
    summary="Check object existence",
)
def is_object_exist(
    bucket: str = Query(min_length=1),
    key: str = Query(min_length=1),
    version_id: str = "",
    store: ObjectStorage = Depends(get_store),
) -> IsObjectExistOutput:
    with storage_errors():
        return store.is_object_exist(
            IsObjectExistInput(bucket=bucket, key=key, version_id=version_id)
        )


@router.get(
    "/objects",
    response_model=ListObjectsOutput,
    summary="List objects",
    description=(
        "List one page of objects. When `is_truncated` is true, pass "
        "`next_marker` as `marker` to fetch the next page."
    ),
)
def list_objects(
    bucket: str = Query(min_length=1),
    prefix: str = "",
    delimiter: str = "",
    marker: str = "",
    encoding_type: str = "",
    max_keys: int = Query(default=0, ge=0, le=1000),
    store: ObjectStorage = Depends(get_store),
) -> ListObjectsOutput:
    req = ListObjectsInput(
        bucket=bucket,
        prefix=prefix,
        delimiter=delimiter,
        marker=marker,
        encoding_type=encoding_type,
        max_keys=max_keys,
    )
    with storage_errors():
        return store.list_objects(req)


@router.get(
    "/object-versions",
    response_model=ListObjectVersionsOutput,
    summary="List object versions",
)
def list_object_versions(
    bucket: str = Query(min_length=1),
    prefix: str = "",
    delimiter: str = "",
    key_marker: str = "",
    version_id_marker: str = "",
    encoding_type: str = "",
    max_keys: int = Query(default=0, ge=0, le=1000),
    store: ObjectStorage = Depends(get_store),
) -> ListObjectVersionsOutput:
    req = ListObjectVersionsInput(
        bucket=bucket,
        prefix=prefix,
        delimiter=delimiter,
        key_marker=key_marker,
        version_id_marker=version_id_marker,
        encoding_type=encoding_type,
        max_keys=max_keys,
    )
    with storage_errors():
        return store.list_object_versions(req)


@router.post(
    "/objects/delete",
    response_model=DeleteObjectsOutput,
    summary="Delete objects",
    description="Delete several objects. Per-object failures are listed in `errors`.",
)
def delete_objects(
    payload: DeleteObjectsIn,
    store: ObjectStorage = Depends(get_store),
) -> DeleteObjectsOutput:
    req = DeleteObjectsInput(
        bucket=payload.bucket,
        delete=Delete(
            objects=[
                ObjectIdentifier(key=obj.key, version_id=obj.version_id)
                for obj in payload.objects
            ],
            quiet=payload.quiet,
        ),
    )
    with storage_errors():
        return store.delete_objects(req)


@router.post(
    "/object/copy",
    response_model=CopyObjectOutput,
    summary="Copy object",
)
def copy_object(
    payload: CopyObjectIn,
    store: ObjectStorage = Depends(get_store),
) -> CopyObjectOutput:
    req = CopyObjectInput(
        bucket=payload.bucket,
        key=payload.key,
        copy_source=(
            payload.copy_source.to_copy_source() if payload.copy_source else None
        ),
        acl=payload.acl,
        content_type=payload.content_type,
        copy_source_if_match=payload.copy_source_if_match,
        copy_source_if_none_match=payload.copy_source_if_none_match,
        copy_source_if_modified_since=payload.copy_source_if_modified_since,
        copy_source_if_unmodified_since=payload.copy_source_if_unmodified_since,
        metadata=payload.metadata,
        metadata_directive=payload.metadata_directive,
        tagging=payload.tagging,
        tagging_directive=payload.tagging_directive,
        storage_class=payload.storage_class,
    )
    with storage_errors():
        return store.copy_object(req)


@router.get(
    "/object/tagging",
    response_model=GetObjectTaggingOutput,
    summary="Get object tags",
)
def get_object_tagging(
    bucket: str = Query(min_length=1),
    key: str = Query(min_length=1),
    version_id: str = "",
    store: ObjectStorage = Depends(get_store),
) -> GetObjectTaggingOutput:
    with storage_errors():
        return store.get_object_tagging(
            GetObjectTaggingInput(bucket=bucket, key=key, version_id=version_id)
        )


@router.put(
    "/object/tagging",
    response_model=PutObjectTaggingOutput,
    summary="Replace object tags",
)
def put_object_tagging(
    payload: PutObjectTaggingIn,
    store: ObjectStorage = Depends(get_store),
) -> PutObjectTaggingOutput:
    req = PutObjectTaggingInput(
        bucket=payload.bucket,
        key=payload.key,
        version_id=payload.version_id,
        tags=payload.tags,
    )
    with storage_errors():
        return store.put_object_tagging(req)


@router.delete(
    "/object/tagging",
    response_model=DeleteObjectTaggingOutput,
    summary="Delete object tags",
)
def delete_object_tagging(
    bucket: str = Query(min_length=1),
    key: str = Query(min_length=1),
    version_id: str = "",
    store: ObjectStorage = Depends(get_store),
) -> DeleteObjectTaggingOutput:
    with storage_errors():
        return store.delete_object_tagging(
            DeleteObjectTaggingInput(bucket=bucket, key=key, version_id=version_id)
        )


@router.get(
    "/object/acl",
    response_model=GetObjectCannedAclOutput,
    summary="Get object ACL",
    description="`canned_acl` holds the backend grant list as JSON text.",
)
def get_object_canned_acl(
    bucket: str = Query(min_length=1),
    key: str = Query(min_length=1),
    version_id: str = "",
    store: ObjectStorage = Depends(get_store),
) -> GetObjectCannedAclOutput:
    with storage_errors():
        return store.get_object_canned_acl(
            GetObjectCannedAclInput(bucket=bucket, key=key, version_id=version_id)
        )


@router.put(
    "/object/acl",
    response_model=PutObjectCannedAclOutput,
    summary="Set object canned ACL",
)
def put_object_canned_acl(
    payload: PutObjectAclIn,
    store: ObjectStorage = Depends(get_store),
) -> PutObjectCannedAclOutput:
    req = PutObjectCannedAclInput(
        bucket=payload.bucket,
        key=payload.key,
        acl=payload.acl,
        version_id=payload.version_id,
    )
    with storage_errors():
        return store.put_object_canned_acl(req)


@router.post(
    "/object/sign-url",
    response_model=SignURLOutput,
    summary="Presign object URL",
    description="Generate a presigned GET or PUT URL.",
)
def sign_url(
    payload: SignUrlIn,
    store: ObjectStorage = Depends(get_store),
) -> SignURLOutput:
    max_expires = get_settings().OSS_PRESIGN_MAX_EXPIRES_SECONDS
    if payload.expired_in_sec > max_expires:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"expired_in_sec must not exceed {max_expires}",
        )
    req = SignURLInput(
        bucket=payload.bucket,
        key=payload.key,
        method=payload.method,
        expired_in_sec=payload.expired_in_sec,
    )
    with storage_errors():
        return store.sign_url(req)


@router.post(
    "/object/restore",
    response_model=RestoreObjectOutput,
    summary="Restore archived object",
)
def restore_object(
    payload: RestoreObjectIn,
    store: ObjectStorage = Depends(get_store),
) -> RestoreObjectOutput:
    req = RestoreObjectInput(
        bucket=payload.bucket,
        key=payload.key,
        version_id=payload.version_id,
        days=payload.days,
    )
    with storage_errors():
        return store.restore_object(req)


@router.post(
    "/object/append",
    response_model=AppendObjectOutput,
    summary="Append to object",
)
def append_object(
    bucket: str = Query(min_length=1),
    key: str = Query(min_length=1),
    position: int = Query(default=0, ge=0),
    file: UploadFile | None = File(default=None),
    store: ObjectStorage = Depends(get_store),
) -> AppendObjectOutput:
    req = AppendObjectInput(
        bucket=bucket,
        key=key,
        position=position,
        data_stream=file.file if file is not None else None,
        content_type=(file.content_type or "") if file is not None else "",
    )
    with storage_errors():
        return store.append_object(req)


@router.put(
    "/bandwidth/download",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Limit download bandwidth",
)
def update_download_bandwidth_rate_limit(
    payload: BandwidthRateLimitIn,
    store: ObjectStorage = Depends(get_store),
) -> Response:
    req = UpdateBandwidthRateLimitInput(
        average_rate_limit_in_bits_per_sec=payload.average_rate_limit_in_bits_per_sec,
        gateway_resource_name=payload.gateway_resource_name,
    )
    with storage_errors():
        store.update_download_bandwidth_rate_limit(req)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.put(
    "/bandwidth/upload",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Limit upload bandwidth",
)
def update_upload_bandwidth_rate_limit(
    payload: BandwidthRateLimitIn,
    store: ObjectStorage = Depends(get_store),
) -> Response:
    req = UpdateBandwidthRateLimitInput(
        average_rate_limit_in_bits_per_sec=payload.average_rate_limit_in_bits_per_sec,
        gateway_resource_name=payload.gateway_resource_name,
    )
    with storage_errors():
        store.update_upload_bandwidth_rate_limit(req)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
