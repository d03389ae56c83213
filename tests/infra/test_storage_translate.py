"""Tests for request/response translation to boto3 shapes."""

import io
from datetime import datetime, timezone

import pytest

from ossgate.infra.storage import InvalidRequestError, translate
from ossgate.infra.storage.types import (
    CannedAcl,
    CompletedMultipartUpload,
    CompletedPart,
    CompleteMultipartUploadInput,
    CopyObjectInput,
    CopySource,
    CreateMultipartUploadInput,
    Delete,
    DeleteObjectsInput,
    GetObjectInput,
    ObjectIdentifier,
    PutObjectCannedAclInput,
    PutObjectInput,
    UploadPartCopyInput,
    UploadPartInput,
)

MOMENT = datetime(2024, 1, 1, tzinfo=timezone.utc)
EPOCH = int(MOMENT.timestamp())


class TestRequestParams:
    def test_unspecified_fields_are_omitted(self):
        assert translate.get_object_params(GetObjectInput(bucket="b", key="k")) == {
            "Bucket": "b",
            "Key": "k",
        }

    def test_get_object_response_overrides(self):
        params = translate.get_object_params(
            GetObjectInput(
                bucket="b",
                key="k",
                part_number=2,
                response_content_type="text/csv",
                response_expires=EPOCH,
            )
        )
        assert params["PartNumber"] == 2
        assert params["ResponseContentType"] == "text/csv"
        assert params["ResponseExpires"] == MOMENT

    def test_put_object_extra_args(self):
        extra = translate.put_object_extra_args(
            PutObjectInput(
                bucket="b",
                key="k",
                data_stream=io.BytesIO(b"x"),
                acl=CannedAcl.PRIVATE,
                expires=EPOCH,
                storage_class="STANDARD_IA",
            )
        )
        # bucket, key and body travel as uploader arguments, not ExtraArgs
        assert extra == {"ACL": "private", "Expires": MOMENT, "StorageClass": "STANDARD_IA"}

    def test_delete_objects_quiet_omitted_when_false(self):
        params = translate.delete_objects_params(
            DeleteObjectsInput(
                bucket="b", delete=Delete(objects=[ObjectIdentifier(key="a")])
            )
        )
        assert params == {"Bucket": "b", "Delete": {"Objects": [{"Key": "a"}]}}

    def test_delete_objects_without_delete_block(self):
        params = translate.delete_objects_params(DeleteObjectsInput(bucket="b"))
        assert params == {"Bucket": "b", "Delete": {"Objects": []}}

    def test_copy_object_with_directives(self):
        params = translate.copy_object_params(
            CopyObjectInput(
                bucket="dst",
                key="k",
                copy_source=CopySource(copy_source_bucket="src", copy_source_key="k"),
                metadata={"a": "1"},
                metadata_directive="REPLACE",
                tagging={"t": "v"},
                tagging_directive="REPLACE",
                copy_source_if_unmodified_since=EPOCH,
            )
        )
        assert params == {
            "Bucket": "dst",
            "Key": "k",
            "CopySource": "src/k",
            "Metadata": {"a": "1"},
            "MetadataDirective": "REPLACE",
            "Tagging": "t=v",
            "TaggingDirective": "REPLACE",
            "CopySourceIfUnmodifiedSince": MOMENT,
        }

    def test_copy_requires_source(self):
        with pytest.raises(InvalidRequestError, match="copy_source"):
            translate.copy_object_params(CopyObjectInput(bucket="b", key="k"))
        with pytest.raises(InvalidRequestError, match="copy_source"):
            translate.upload_part_copy_params(
                UploadPartCopyInput(bucket="b", key="k", upload_id="u", part_number=1)
            )

    def test_put_object_acl(self):
        params = translate.put_object_acl_params(
            PutObjectCannedAclInput(bucket="b", key="k", acl=CannedAcl.BUCKET_OWNER_READ)
        )
        assert params == {"Bucket": "b", "Key": "k", "ACL": "bucket-owner-read"}

    def test_create_multipart_upload_metadata_and_tags(self):
        params = translate.create_multipart_upload_params(
            CreateMultipartUploadInput(
                bucket="b",
                key="k",
                meta_data={"owner": "alice"},
                tagging={"env": "dev"},
                object_lock_retain_until_date=EPOCH,
            )
        )
        assert params["Metadata"] == {"owner": "alice"}
        assert params["Tagging"] == "env=dev"
        assert params["ObjectLockRetainUntilDate"] == MOMENT

    def test_upload_part_without_body(self):
        params = translate.upload_part_params(
            UploadPartInput(bucket="b", key="k", upload_id="u", part_number=1)
        )
        assert "Body" not in params
        assert params == {"Bucket": "b", "Key": "k", "UploadId": "u", "PartNumber": 1}

    def test_complete_keeps_caller_part_order(self):
        params = translate.complete_multipart_upload_params(
            CompleteMultipartUploadInput(
                bucket="b",
                key="k",
                upload_id="u",
                multipart_upload=CompletedMultipartUpload(
                    parts=[
                        CompletedPart(part_number=2, etag="e2"),
                        CompletedPart(part_number=1, etag="e1"),
                    ]
                ),
            )
        )
        assert params["MultipartUpload"]["Parts"] == [
            {"ETag": "e2", "PartNumber": 2},
            {"ETag": "e1", "PartNumber": 1},
        ]


class TestResponseOutputs:
    def test_missing_fields_default_to_zero_values(self):
        output = translate.get_object_output({})
        assert output.data_stream is None
        assert output.content_length == 0
        assert output.etag == ""
        assert output.last_modified == 0
        assert output.metadata == {}

    def test_common_prefixes_skip_empty_entries(self):
        output = translate.list_objects_output(
            {"CommonPrefixes": [{"Prefix": "a/"}, {}, {"Prefix": "b/"}]}
        )
        assert output.common_prefixes == ["a/", "b/"]

    def test_delete_objects_output(self):
        output = translate.delete_objects_output(
            {
                "Deleted": [
                    {"Key": "a", "DeleteMarker": True, "DeleteMarkerVersionId": "dm"}
                ],
                "RequestCharged": "requester",
            }
        )
        assert output.deleted[0].delete_marker is True
        assert output.deleted[0].delete_marker_version_id == "dm"
        assert output.errors == []
        assert output.request_charged == "requester"

    def test_get_object_expires(self):
        output = translate.get_object_output({"Expires": MOMENT, "TagCount": 2})
        assert output.expires == EPOCH
        assert output.tag_count == 2
