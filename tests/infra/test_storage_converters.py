"""Tests for storage field converters."""

import json
from datetime import datetime, timezone

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
from ossgate.infra.storage.types import CannedAcl, CopySource


def test_compact_drops_unspecified_values():
    params = compact(
        {
            "Bucket": "b",
            "VersionId": "",
            "MaxKeys": 0,
            "Quiet": False,
            "Expires": None,
            "Metadata": {},
            "PartNumber": 2,
        }
    )
    assert params == {"Bucket": "b", "PartNumber": 2}


def test_epoch_conversions():
    moment = datetime(2024, 5, 6, 7, 8, 9, tzinfo=timezone.utc)
    epoch = int(moment.timestamp())

    assert epoch_to_datetime(epoch) == moment
    assert epoch_to_datetime(0) is None
    assert datetime_to_epoch(moment) == epoch
    # naive datetimes are read as UTC
    assert datetime_to_epoch(moment.replace(tzinfo=None)) == epoch
    assert datetime_to_epoch(None) == 0


def test_enum_to_str():
    assert enum_to_str(CannedAcl.PUBLIC_READ) == "public-read"
    assert enum_to_str("private") == "private"
    assert enum_to_str(None) == ""


def test_tag_set_round_trip_and_duplicates():
    tags = {"team": "core", "env": "dev"}
    assert tag_set_to_tags(tags_to_tag_set(tags)) == tags

    duplicated = [{"Key": "a", "Value": "1"}, {"Key": "a", "Value": "2"}]
    assert tag_set_to_tags(duplicated) == {"a": "2"}
    assert tag_set_to_tags(None) == {}


def test_tags_to_header_is_url_encoded():
    assert tags_to_header({"a b": "c&d", "x": "y"}) == "a+b=c%26d&x=y"


def test_format_copy_source():
    assert (
        format_copy_source(CopySource(copy_source_bucket="b", copy_source_key="dir/k"))
        == "b/dir/k"
    )
    assert (
        format_copy_source(
            CopySource(
                copy_source_bucket="b", copy_source_key="k", copy_source_version_id="v9"
            )
        )
        == "b/k?versionId=v9"
    )


def test_render_grants():
    grants = [{"Grantee": {"ID": "id"}, "Permission": "READ"}]
    rendered = render_grants(grants)

    assert json.loads(rendered) == grants
    assert rendered.startswith("[\n\t{")
    assert render_grants(None) == "[]"
