"""Multipart upload API router."""

from __future__ import annotations

from fastapi import APIRouter, Depends, File, Path, Query, UploadFile, status

from ossgate.api.v1.deps import get_store
from ossgate.api.v1.schemas.oss import (
    CompleteMultipartUploadIn,
    CreateMultipartUploadIn,
    UploadPartCopyIn,
)
from ossgate.api.v1.utils import storage_errors
from ossgate.infra.storage import CompletedPart, ObjectStorage
from ossgate.infra.storage.types import (
    AbortMultipartUploadInput,
    AbortMultipartUploadOutput,
    CompletedMultipartUpload,
    CompleteMultipartUploadInput,
    CompleteMultipartUploadOutput,
    CreateMultipartUploadInput,
    CreateMultipartUploadOutput,
    ListMultipartUploadsInput,
    ListMultipartUploadsOutput,
    ListPartsInput,
    ListPartsOutput,
    UploadPartCopyInput,
    UploadPartCopyOutput,
    UploadPartInput,
    UploadPartOutput,
)

router = APIRouter(prefix="/oss/{store_name}/multipart")


@router.post(
    "",
    response_model=CreateMultipartUploadOutput,
    status_code=status.HTTP_201_CREATED,
    summary="Initiate multipart upload",
    description="Start a multipart upload and return its `upload_id`.",
)
def create_multipart_upload(
    payload: CreateMultipartUploadIn,
    store: ObjectStorage = Depends(get_store),
) -> CreateMultipartUploadOutput:
    req = CreateMultipartUploadInput(
        bucket=payload.bucket,
        key=payload.key,
        acl=payload.acl,
        cache_control=payload.cache_control,
        content_disposition=payload.content_disposition,
        content_type=payload.content_type,
        expires=payload.expires,
        meta_data=payload.meta_data,
        storage_class=payload.storage_class,
        tagging=payload.tagging,
    )
    with storage_errors():
        return store.create_multipart_upload(req)


@router.get(
    "",
    response_model=ListMultipartUploadsOutput,
    summary="List in-progress multipart uploads",
)
def list_multipart_uploads(
    bucket: str = Query(min_length=1),
    prefix: str = "",
    delimiter: str = "",
    key_marker: str = "",
    upload_id_marker: str = "",
    encoding_type: str = "",
    max_uploads: int = Query(default=0, ge=0, le=1000),
    store: ObjectStorage = Depends(get_store),
) -> ListMultipartUploadsOutput:
    req = ListMultipartUploadsInput(
        bucket=bucket,
        prefix=prefix,
        delimiter=delimiter,
        key_marker=key_marker,
        upload_id_marker=upload_id_marker,
        encoding_type=encoding_type,
        max_uploads=max_uploads,
    )
    with storage_errors():
        return store.list_multipart_uploads(req)


@router.put(
    "/{upload_id}/parts/{part_number}",
    response_model=UploadPartOutput,
    summary="Upload part",
    description="Upload the `file` form field as part `part_number` (1-10000).",
)
def upload_part(
    upload_id: str = Path(min_length=1),
    part_number: int = Path(ge=1, le=10000),
    bucket: str = Query(min_length=1),
    key: str = Query(min_length=1),
    file: UploadFile = File(...),
    store: ObjectStorage = Depends(get_store),
) -> UploadPartOutput:
    req = UploadPartInput(
        bucket=bucket,
        key=key,
        upload_id=upload_id,
        part_number=part_number,
        data_stream=file.file,
        content_length=file.size or 0,
    )
    with storage_errors():
        return store.upload_part(req)


@router.put(
    "/{upload_id}/parts/{part_number}/copy",
    response_model=UploadPartCopyOutput,
    summary="Upload part by copy",
    description="Fill part `part_number` from a range of an existing object.",
)
def upload_part_copy(
    payload: UploadPartCopyIn,
    upload_id: str = Path(min_length=1),
    part_number: int = Path(ge=1, le=10000),
    store: ObjectStorage = Depends(get_store),
) -> UploadPartCopyOutput:
    req = UploadPartCopyInput(
        bucket=payload.bucket,
        key=payload.key,
        upload_id=upload_id,
        part_number=part_number,
        copy_source=(
            payload.copy_source.to_copy_source() if payload.copy_source else None
        ),
        copy_source_range=payload.copy_source_range,
    )
    with storage_errors():
        return store.upload_part_copy(req)


@router.get(
    "/{upload_id}/parts",
    response_model=ListPartsOutput,
    summary="List uploaded parts",
)
def list_parts(
    upload_id: str = Path(min_length=1),
    bucket: str = Query(min_length=1),
    key: str = Query(min_length=1),
    max_parts: int = Query(default=0, ge=0, le=1000),
    part_number_marker: int = Query(default=0, ge=0),
    store: ObjectStorage = Depends(get_store),
) -> ListPartsOutput:
    req = ListPartsInput(
        bucket=bucket,
        key=key,
        upload_id=upload_id,
        max_parts=max_parts,
        part_number_marker=part_number_marker,
    )
    with storage_errors():
        return store.list_parts(req)


@router.post(
    "/{upload_id}/complete",
    response_model=CompleteMultipartUploadOutput,
    summary="Complete multipart upload",
    description="Assemble the listed parts, in the order given, into the final object.",
)
def complete_multipart_upload(
    payload: CompleteMultipartUploadIn,
    upload_id: str = Path(min_length=1),
    store: ObjectStorage = Depends(get_store),
) -> CompleteMultipartUploadOutput:
    req = CompleteMultipartUploadInput(
        bucket=payload.bucket,
        key=payload.key,
        upload_id=upload_id,
        multipart_upload=CompletedMultipartUpload(
            parts=[
                CompletedPart(part_number=part.part_number, etag=part.etag)
                for part in payload.parts
            ]
        ),
    )
    with storage_errors():
        return store.complete_multipart_upload(req)


@router.delete(
    "/{upload_id}",
    response_model=AbortMultipartUploadOutput,
    summary="Abort multipart upload",
)
def abort_multipart_upload(
    upload_id: str = Path(min_length=1),
    bucket: str = Query(min_length=1),
    key: str = Query(min_length=1),
    store: ObjectStorage = Depends(get_store),
) -> AbortMultipartUploadOutput:
    with storage_errors():
        return store.abort_multipart_upload(
            AbortMultipartUploadInput(bucket=bucket, key=key, upload_id=upload_id)
        )
