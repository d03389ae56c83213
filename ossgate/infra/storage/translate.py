"""Translation between generic storage types and boto3 S3 shapes.

Each operation has one function building the boto3 keyword arguments from
the generic input and one building the generic output from the boto3
response dict. Unspecified input fields are left out of the request.
"""

from __future__ import annotations

from typing import Any, Mapping

from ossgate.infra.storage.client import InvalidRequestError
from ossgate.infra.storage.converters import (
    compact,
    datetime_to_epoch,
    enum_to_str,
    epoch_to_datetime,
    format_copy_source,
    render_grants,
    tag_set_to_tags,
    tags_to_header,
    tags_to_tag_set,
)
from ossgate.infra.storage.types import (
    AbortMultipartUploadInput,
    AbortMultipartUploadOutput,
    CompleteMultipartUploadInput,
    CompleteMultipartUploadOutput,
    CopyObjectInput,
    CopyObjectOutput,
    CopyObjectResult,
    CopyPartResult,
    CreateMultipartUploadInput,
    CreateMultipartUploadOutput,
    DeletedObject,
    DeleteMarkerEntry,
    DeleteObjectError,
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
    Initiator,
    ListMultipartUploadsInput,
    ListMultipartUploadsOutput,
    ListObjectsInput,
    ListObjectsOutput,
    ListObjectVersionsInput,
    ListObjectVersionsOutput,
    ListPartsInput,
    ListPartsOutput,
    MultipartUploadSummary,
    ObjectSummary,
    ObjectVersion,
    Owner,
    Part,
    PutObjectCannedAclInput,
    PutObjectCannedAclOutput,
    PutObjectInput,
    PutObjectOutput,
    PutObjectTaggingInput,
    PutObjectTaggingOutput,
    UploadPartCopyInput,
    UploadPartCopyOutput,
    UploadPartInput,
    UploadPartOutput,
)

Response = Mapping[str, Any]


def _str(raw: Response, name: str) -> str:
    value = raw.get(name)
    return "" if value is None else enum_to_str(value)


def _int(raw: Response, name: str) -> int:
    value = raw.get(name)
    return int(value) if value else 0


def _bool(raw: Response, name: str) -> bool:
    return bool(raw.get(name))


def _owner(raw: Response | None) -> Owner:
    raw = raw or {}
    return Owner(display_name=_str(raw, "DisplayName"), id=_str(raw, "ID"))


def _initiator(raw: Response | None) -> Initiator:
    raw = raw or {}
    return Initiator(display_name=_str(raw, "DisplayName"), id=_str(raw, "ID"))


def _common_prefixes(raw: Response) -> list[str]:
    return [
        str(entry["Prefix"])
        for entry in raw.get("CommonPrefixes") or []
        if entry.get("Prefix") is not None
    ]


# --- Get / Put -------------------------------------------------------------


def get_object_params(req: GetObjectInput) -> dict[str, Any]:
    return compact(
        {
            "Bucket": req.bucket,
            "Key": req.key,
            "VersionId": req.version_id,
            "Range": req.range,
            "PartNumber": req.part_number,
            "IfMatch": req.if_match,
            "IfNoneMatch": req.if_none_match,
            "IfModifiedSince": epoch_to_datetime(req.if_modified_since),
            "IfUnmodifiedSince": epoch_to_datetime(req.if_unmodified_since),
            "ExpectedBucketOwner": req.expected_bucket_owner,
            "RequestPayer": req.request_payer,
            "ResponseCacheControl": req.response_cache_control,
            "ResponseContentDisposition": req.response_content_disposition,
            "ResponseContentEncoding": req.response_content_encoding,
            "ResponseContentLanguage": req.response_content_language,
            "ResponseContentType": req.response_content_type,
            "ResponseExpires": epoch_to_datetime(req.response_expires),
            "SSECustomerAlgorithm": req.sse_customer_algorithm,
            "SSECustomerKey": req.sse_customer_key,
            "SSECustomerKeyMD5": req.sse_customer_key_md5,
        }
    )


def get_object_output(resp: Response) -> GetObjectOutput:
    return GetObjectOutput(
        data_stream=resp.get("Body"),
        cache_control=_str(resp, "CacheControl"),
        content_disposition=_str(resp, "ContentDisposition"),
        content_encoding=_str(resp, "ContentEncoding"),
        content_language=_str(resp, "ContentLanguage"),
        content_length=_int(resp, "ContentLength"),
        content_range=_str(resp, "ContentRange"),
        content_type=_str(resp, "ContentType"),
        delete_marker=_bool(resp, "DeleteMarker"),
        etag=_str(resp, "ETag"),
        expiration=_str(resp, "Expiration"),
        expires=datetime_to_epoch(resp.get("Expires")),
        last_modified=datetime_to_epoch(resp.get("LastModified")),
        version_id=_str(resp, "VersionId"),
        tag_count=_int(resp, "TagCount"),
        storage_class=_str(resp, "StorageClass"),
        parts_count=_int(resp, "PartsCount"),
        metadata=dict(resp.get("Metadata") or {}),
    )


def put_object_extra_args(req: PutObjectInput) -> dict[str, Any]:
    """Build ``ExtraArgs`` for the managed uploader."""
    return compact(
        {
            "ACL": enum_to_str(req.acl),
            "CacheControl": req.cache_control,
            "ContentDisposition": req.content_disposition,
            "ContentEncoding": req.content_encoding,
            "ContentLanguage": req.content_language,
            "ContentType": req.content_type,
            "Expires": epoch_to_datetime(req.expires),
            "ServerSideEncryption": req.server_side_encryption,
            "StorageClass": req.storage_class,
            "Metadata": dict(req.meta),
            "Tagging": tags_to_header(req.tagging) if req.tagging else "",
        }
    )


def put_object_output(head: Response) -> PutObjectOutput:
    return PutObjectOutput(
        bucket_key_enabled=_bool(head, "BucketKeyEnabled"),
        etag=_str(head, "ETag"),
        expiration=_str(head, "Expiration"),
        request_charged=_str(head, "RequestCharged"),
        version_id=_str(head, "VersionId"),
        server_side_encryption=_str(head, "ServerSideEncryption"),
    )


# --- Delete ----------------------------------------------------------------


def delete_object_params(req: DeleteObjectInput) -> dict[str, Any]:
    return compact(
        {
            "Bucket": req.bucket,
            "Key": req.key,
            "VersionId": req.version_id,
            "RequestPayer": req.request_payer,
            "ExpectedBucketOwner": req.expected_bucket_owner,
        }
    )


def delete_object_output(resp: Response) -> DeleteObjectOutput:
    return DeleteObjectOutput(
        delete_marker=_bool(resp, "DeleteMarker"),
        request_charged=_str(resp, "RequestCharged"),
        version_id=_str(resp, "VersionId"),
    )


def delete_objects_params(req: DeleteObjectsInput) -> dict[str, Any]:
    delete: dict[str, Any] = {"Objects": []}
    if req.delete is not None:
        delete["Objects"] = [
            compact({"Key": obj.key, "VersionId": obj.version_id})
            for obj in req.delete.objects
        ]
        if req.delete.quiet:
            delete["Quiet"] = True
    params = compact(
        {
            "Bucket": req.bucket,
            "RequestPayer": req.request_payer,
            "ExpectedBucketOwner": req.expected_bucket_owner,
        }
    )
    params["Delete"] = delete
    return params


def delete_objects_output(resp: Response) -> DeleteObjectsOutput:
    return DeleteObjectsOutput(
        deleted=[
            DeletedObject(
                key=_str(item, "Key"),
                version_id=_str(item, "VersionId"),
                delete_marker=_bool(item, "DeleteMarker"),
                delete_marker_version_id=_str(item, "DeleteMarkerVersionId"),
            )
            for item in resp.get("Deleted") or []
        ],
        errors=[
            DeleteObjectError(
                key=_str(item, "Key"),
                version_id=_str(item, "VersionId"),
                code=_str(item, "Code"),
                message=_str(item, "Message"),
            )
            for item in resp.get("Errors") or []
        ],
        request_charged=_str(resp, "RequestCharged"),
    )


# --- Tagging ---------------------------------------------------------------


def put_object_tagging_params(req: PutObjectTaggingInput) -> dict[str, Any]:
    params = compact(
        {
            "Bucket": req.bucket,
            "Key": req.key,
            "VersionId": req.version_id,
            "ContentMD5": req.content_md5,
            "ExpectedBucketOwner": req.expected_bucket_owner,
            "RequestPayer": req.request_payer,
        }
    )
    # an empty tag set is a valid request that clears all tags
    params["Tagging"] = {"TagSet": tags_to_tag_set(req.tags)}
    return params


def put_object_tagging_output(resp: Response) -> PutObjectTaggingOutput:
    return PutObjectTaggingOutput(version_id=_str(resp, "VersionId"))


def delete_object_tagging_params(req: DeleteObjectTaggingInput) -> dict[str, Any]:
    return compact(
        {
            "Bucket": req.bucket,
            "Key": req.key,
            "VersionId": req.version_id,
            "ExpectedBucketOwner": req.expected_bucket_owner,
        }
    )


def delete_object_tagging_output(resp: Response) -> DeleteObjectTaggingOutput:
    return DeleteObjectTaggingOutput(version_id=_str(resp, "VersionId"))


def get_object_tagging_params(req: GetObjectTaggingInput) -> dict[str, Any]:
    return compact(
        {
            "Bucket": req.bucket,
            "Key": req.key,
            "VersionId": req.version_id,
            "ExpectedBucketOwner": req.expected_bucket_owner,
            "RequestPayer": req.request_payer,
        }
    )


def get_object_tagging_output(resp: Response) -> GetObjectTaggingOutput:
    return GetObjectTaggingOutput(
        tags=tag_set_to_tags(resp.get("TagSet")),
        version_id=_str(resp, "VersionId"),
    )


# --- ACL -------------------------------------------------------------------


def get_object_acl_params(req: GetObjectCannedAclInput) -> dict[str, Any]:
    return compact(
        {
            "Bucket": req.bucket,
            "Key": req.key,
            "VersionId": req.version_id,
            "ExpectedBucketOwner": req.expected_bucket_owner,
            "RequestPayer": req.request_payer,
        }
    )


def get_object_acl_output(resp: Response) -> GetObjectCannedAclOutput:
    return GetObjectCannedAclOutput(
        canned_acl=render_grants(resp.get("Grants")),
        owner=_owner(resp.get("Owner")),
        request_charged=_str(resp, "RequestCharged"),
    )


def put_object_acl_params(req: PutObjectCannedAclInput) -> dict[str, Any]:
    return compact(
        {
            "Bucket": req.bucket,
            "Key": req.key,
            "ACL": enum_to_str(req.acl),
            "VersionId": req.version_id,
        }
    )


def put_object_acl_output(resp: Response) -> PutObjectCannedAclOutput:
    return PutObjectCannedAclOutput(request_charged=_str(resp, "RequestCharged"))


# --- Copy ------------------------------------------------------------------


def copy_object_params(req: CopyObjectInput) -> dict[str, Any]:
    if req.copy_source is None:
        raise InvalidRequestError("must specify copy_source")
    return compact(
        {
            "Bucket": req.bucket,
            "Key": req.key,
            "CopySource": format_copy_source(req.copy_source),
            "ACL": enum_to_str(req.acl),
            "CacheControl": req.cache_control,
            "ContentDisposition": req.content_disposition,
            "ContentEncoding": req.content_encoding,
            "ContentLanguage": req.content_language,
            "ContentType": req.content_type,
            "CopySourceIfMatch": req.copy_source_if_match,
            "CopySourceIfModifiedSince": epoch_to_datetime(
                req.copy_source_if_modified_since
            ),
            "CopySourceIfNoneMatch": req.copy_source_if_none_match,
            "CopySourceIfUnmodifiedSince": epoch_to_datetime(
                req.copy_source_if_unmodified_since
            ),
            "Expires": epoch_to_datetime(req.expires),
            "Metadata": dict(req.metadata),
            "MetadataDirective": req.metadata_directive,
            "Tagging": tags_to_header(req.tagging) if req.tagging else "",
            "TaggingDirective": req.tagging_directive,
            "ServerSideEncryption": req.server_side_encryption,
            "StorageClass": req.storage_class,
            "ExpectedBucketOwner": req.expected_bucket_owner,
        }
    )


def copy_object_output(resp: Response) -> CopyObjectOutput:
    result = resp.get("CopyObjectResult") or {}
    return CopyObjectOutput(
        copy_object_result=CopyObjectResult(
            etag=_str(result, "ETag"),
            last_modified=datetime_to_epoch(result.get("LastModified")),
        ),
        copy_source_version_id=_str(resp, "CopySourceVersionId"),
        version_id=_str(resp, "VersionId"),
        expiration=_str(resp, "Expiration"),
        request_charged=_str(resp, "RequestCharged"),
    )


# --- Listing ---------------------------------------------------------------


def list_objects_params(req: ListObjectsInput) -> dict[str, Any]:
    return compact(
        {
            "Bucket": req.bucket,
            "Delimiter": req.delimiter,
            "EncodingType": req.encoding_type,
            "ExpectedBucketOwner": req.expected_bucket_owner,
            "Marker": req.marker,
            "MaxKeys": req.max_keys,
            "Prefix": req.prefix,
            "RequestPayer": req.request_payer,
        }
    )


def list_objects_output(resp: Response) -> ListObjectsOutput:
    return ListObjectsOutput(
        common_prefixes=_common_prefixes(resp),
        contents=[
            ObjectSummary(
                key=_str(item, "Key"),
                etag=_str(item, "ETag"),
                last_modified=datetime_to_epoch(item.get("LastModified")),
                owner=_owner(item.get("Owner")),
                size=_int(item, "Size"),
                storage_class=_str(item, "StorageClass"),
            )
            for item in resp.get("Contents") or []
        ],
        delimiter=_str(resp, "Delimiter"),
        encoding_type=_str(resp, "EncodingType"),
        is_truncated=_bool(resp, "IsTruncated"),
        marker=_str(resp, "Marker"),
        max_keys=_int(resp, "MaxKeys"),
        name=_str(resp, "Name"),
        next_marker=_str(resp, "NextMarker"),
        prefix=_str(resp, "Prefix"),
    )


def list_object_versions_params(req: ListObjectVersionsInput) -> dict[str, Any]:
    return compact(
        {
            "Bucket": req.bucket,
            "Delimiter": req.delimiter,
            "EncodingType": req.encoding_type,
            "ExpectedBucketOwner": req.expected_bucket_owner,
            "KeyMarker": req.key_marker,
            "MaxKeys": req.max_keys,
            "Prefix": req.prefix,
            "VersionIdMarker": req.version_id_marker,
        }
    )


def list_object_versions_output(resp: Response) -> ListObjectVersionsOutput:
    return ListObjectVersionsOutput(
        common_prefixes=_common_prefixes(resp),
        delete_markers=[
            DeleteMarkerEntry(
                is_latest=_bool(item, "IsLatest"),
                key=_str(item, "Key"),
                last_modified=datetime_to_epoch(item.get("LastModified")),
                owner=_owner(item.get("Owner")),
                version_id=_str(item, "VersionId"),
            )
            for item in resp.get("DeleteMarkers") or []
        ],
        delimiter=_str(resp, "Delimiter"),
        encoding_type=_str(resp, "EncodingType"),
        is_truncated=_bool(resp, "IsTruncated"),
        key_marker=_str(resp, "KeyMarker"),
        max_keys=_int(resp, "MaxKeys"),
        name=_str(resp, "Name"),
        next_key_marker=_str(resp, "NextKeyMarker"),
        next_version_id_marker=_str(resp, "NextVersionIdMarker"),
        prefix=_str(resp, "Prefix"),
        version_id_marker=_str(resp, "VersionIdMarker"),
        versions=[
            ObjectVersion(
                etag=_str(item, "ETag"),
                is_latest=_bool(item, "IsLatest"),
                key=_str(item, "Key"),
                last_modified=datetime_to_epoch(item.get("LastModified")),
                owner=_owner(item.get("Owner")),
                size=_int(item, "Size"),
                storage_class=_str(item, "StorageClass"),
                version_id=_str(item, "VersionId"),
            )
            for item in resp.get("Versions") or []
        ],
    )


# --- Multipart -------------------------------------------------------------


def create_multipart_upload_params(req: CreateMultipartUploadInput) -> dict[str, Any]:
    return compact(
        {
            "Bucket": req.bucket,
            "Key": req.key,
            "ACL": enum_to_str(req.acl),
            "BucketKeyEnabled": req.bucket_key_enabled,
            "CacheControl": req.cache_control,
            "ContentDisposition": req.content_disposition,
            "ContentEncoding": req.content_encoding,
            "ContentLanguage": req.content_language,
            "ContentType": req.content_type,
            "ExpectedBucketOwner": req.expected_bucket_owner,
            "Expires": epoch_to_datetime(req.expires),
            "Metadata": dict(req.meta_data),
            "ObjectLockLegalHoldStatus": req.object_lock_legal_hold_status,
            "ObjectLockMode": req.object_lock_mode,
            "ObjectLockRetainUntilDate": epoch_to_datetime(
                req.object_lock_retain_until_date
            ),
            "RequestPayer": req.request_payer,
            "ServerSideEncryption": req.server_side_encryption,
            "StorageClass": req.storage_class,
            "Tagging": tags_to_header(req.tagging) if req.tagging else "",
            "WebsiteRedirectLocation": req.website_redirect_location,
        }
    )


def create_multipart_upload_output(resp: Response) -> CreateMultipartUploadOutput:
    return CreateMultipartUploadOutput(
        bucket=_str(resp, "Bucket"),
        key=_str(resp, "Key"),
        upload_id=_str(resp, "UploadId"),
        abort_date=datetime_to_epoch(resp.get("AbortDate")),
        abort_rule_id=_str(resp, "AbortRuleId"),
        bucket_key_enabled=_bool(resp, "BucketKeyEnabled"),
        request_charged=_str(resp, "RequestCharged"),
        server_side_encryption=_str(resp, "ServerSideEncryption"),
    )


def upload_part_params(req: UploadPartInput) -> dict[str, Any]:
    params = compact(
        {
            "Bucket": req.bucket,
            "Key": req.key,
            "UploadId": req.upload_id,
            "PartNumber": req.part_number,
            "ContentLength": req.content_length,
            "ContentMD5": req.content_md5,
            "ExpectedBucketOwner": req.expected_bucket_owner,
            "RequestPayer": req.request_payer,
            "SSECustomerAlgorithm": req.sse_customer_algorithm,
            "SSECustomerKey": req.sse_customer_key,
            "SSECustomerKeyMD5": req.sse_customer_key_md5,
        }
    )
    if req.data_stream is not None:
        params["Body"] = req.data_stream
    return params


def upload_part_output(resp: Response) -> UploadPartOutput:
    return UploadPartOutput(
        etag=_str(resp, "ETag"),
        bucket_key_enabled=_bool(resp, "BucketKeyEnabled"),
        request_charged=_str(resp, "RequestCharged"),
        server_side_encryption=_str(resp, "ServerSideEncryption"),
    )


def upload_part_copy_params(req: UploadPartCopyInput) -> dict[str, Any]:
    if req.copy_source is None:
        raise InvalidRequestError("must specify copy_source")
    return compact(
        {
            "Bucket": req.bucket,
            "Key": req.key,
            "UploadId": req.upload_id,
            "PartNumber": req.part_number,
            "CopySource": format_copy_source(req.copy_source),
            "CopySourceRange": req.copy_source_range,
            "CopySourceIfMatch": req.copy_source_if_match,
            "CopySourceIfNoneMatch": req.copy_source_if_none_match,
            "ExpectedBucketOwner": req.expected_bucket_owner,
            "RequestPayer": req.request_payer,
        }
    )


def upload_part_copy_output(resp: Response) -> UploadPartCopyOutput:
    result = resp.get("CopyPartResult") or {}
    return UploadPartCopyOutput(
        copy_part_result=CopyPartResult(
            etag=_str(result, "ETag"),
            last_modified=datetime_to_epoch(result.get("LastModified")),
        ),
        copy_source_version_id=_str(resp, "CopySourceVersionId"),
        bucket_key_enabled=_bool(resp, "BucketKeyEnabled"),
        request_charged=_str(resp, "RequestCharged"),
        server_side_encryption=_str(resp, "ServerSideEncryption"),
    )


def complete_multipart_upload_params(
    req: CompleteMultipartUploadInput,
) -> dict[str, Any]:
    parts = req.multipart_upload.parts if req.multipart_upload is not None else []
    params = compact(
        {
            "Bucket": req.bucket,
            "Key": req.key,
            "UploadId": req.upload_id,
            "ExpectedBucketOwner": req.expected_bucket_owner,
            "RequestPayer": req.request_payer,
        }
    )
    params["MultipartUpload"] = {
        "Parts": [
            {"ETag": part.etag, "PartNumber": int(part.part_number)} for part in parts
        ]
    }
    return params


def complete_multipart_upload_output(resp: Response) -> CompleteMultipartUploadOutput:
    return CompleteMultipartUploadOutput(
        bucket=_str(resp, "Bucket"),
        key=_str(resp, "Key"),
        etag=_str(resp, "ETag"),
        location=_str(resp, "Location"),
        version_id=_str(resp, "VersionId"),
        expiration=_str(resp, "Expiration"),
        bucket_key_enabled=_bool(resp, "BucketKeyEnabled"),
        request_charged=_str(resp, "RequestCharged"),
        server_side_encryption=_str(resp, "ServerSideEncryption"),
    )


def abort_multipart_upload_params(req: AbortMultipartUploadInput) -> dict[str, Any]:
    return compact(
        {
            "Bucket": req.bucket,
            "Key": req.key,
            "UploadId": req.upload_id,
            "ExpectedBucketOwner": req.expected_bucket_owner,
            "RequestPayer": req.request_payer,
        }
    )


def abort_multipart_upload_output(resp: Response) -> AbortMultipartUploadOutput:
    return AbortMultipartUploadOutput(request_charged=_str(resp, "RequestCharged"))


def list_parts_params(req: ListPartsInput) -> dict[str, Any]:
    return compact(
        {
            "Bucket": req.bucket,
            "Key": req.key,
            "UploadId": req.upload_id,
            "MaxParts": req.max_parts,
            "PartNumberMarker": req.part_number_marker,
            "ExpectedBucketOwner": req.expected_bucket_owner,
            "RequestPayer": req.request_payer,
        }
    )


def list_parts_output(resp: Response) -> ListPartsOutput:
    return ListPartsOutput(
        bucket=_str(resp, "Bucket"),
        key=_str(resp, "Key"),
        upload_id=_str(resp, "UploadId"),
        next_part_number_marker=_int(resp, "NextPartNumberMarker"),
        part_number_marker=_int(resp, "PartNumberMarker"),
        max_parts=_int(resp, "MaxParts"),
        is_truncated=_bool(resp, "IsTruncated"),
        parts=[
            Part(
                etag=_str(item, "ETag"),
                last_modified=datetime_to_epoch(item.get("LastModified")),
                part_number=_int(item, "PartNumber"),
                size=_int(item, "Size"),
            )
            for item in resp.get("Parts") or []
        ],
        initiator=_initiator(resp.get("Initiator")),
        owner=_owner(resp.get("Owner")),
        storage_class=_str(resp, "StorageClass"),
        request_charged=_str(resp, "RequestCharged"),
    )


def list_multipart_uploads_params(req: ListMultipartUploadsInput) -> dict[str, Any]:
    return compact(
        {
            "Bucket": req.bucket,
            "Delimiter": req.delimiter,
            "EncodingType": req.encoding_type,
            "ExpectedBucketOwner": req.expected_bucket_owner,
            "KeyMarker": req.key_marker,
            "MaxUploads": req.max_uploads,
            "Prefix": req.prefix,
            "UploadIdMarker": req.upload_id_marker,
        }
    )


def list_multipart_uploads_output(resp: Response) -> ListMultipartUploadsOutput:
    return ListMultipartUploadsOutput(
        bucket=_str(resp, "Bucket"),
        common_prefixes=_common_prefixes(resp),
        delimiter=_str(resp, "Delimiter"),
        encoding_type=_str(resp, "EncodingType"),
        is_truncated=_bool(resp, "IsTruncated"),
        key_marker=_str(resp, "KeyMarker"),
        max_uploads=_int(resp, "MaxUploads"),
        next_key_marker=_str(resp, "NextKeyMarker"),
        next_upload_id_marker=_str(resp, "NextUploadIdMarker"),
        prefix=_str(resp, "Prefix"),
        upload_id_marker=_str(resp, "UploadIdMarker"),
        uploads=[
            MultipartUploadSummary(
                initiated=datetime_to_epoch(item.get("Initiated")),
                initiator=_initiator(item.get("Initiator")),
                key=_str(item, "Key"),
                owner=_owner(item.get("Owner")),
                storage_class=_str(item, "StorageClass"),
                upload_id=_str(item, "UploadId"),
            )
            for item in resp.get("Uploads") or []
        ],
    )


# --- Head ------------------------------------------------------------------


def head_object_params(req: HeadObjectInput) -> dict[str, Any]:
    return compact(
        {
            "Bucket": req.bucket,
            "Key": req.key,
            "VersionId": req.version_id,
            "ExpectedBucketOwner": req.expected_bucket_owner,
            "RequestPayer": req.request_payer,
        }
    )


def head_object_output(resp: Response) -> HeadObjectOutput:
    return HeadObjectOutput(
        result_metadata=dict(resp.get("Metadata") or {}),
        content_length=_int(resp, "ContentLength"),
        content_type=_str(resp, "ContentType"),
        etag=_str(resp, "ETag"),
        last_modified=datetime_to_epoch(resp.get("LastModified")),
        version_id=_str(resp, "VersionId"),
    )
