"""Object storage abstraction layer.

This module provides a protocol-based abstraction for object storage backends,
with one driver for S3, Ceph RGW, MinIO and other S3-compatible services.
"""

from .client import (
    BackendError,
    Capability,
    InvalidConfigurationError,
    InvalidRequestError,
    NotInitializedError,
    ObjectStorage,
    StorageError,
    UnsupportedCapabilityError,
)
from .metadata import BASIC_CONFIGURATION, OssMetadata
from .s3_client import S3ObjectStorage
from .types import CannedAcl, CompletedPart, CopySource, OssConfig

__all__ = [
    "BASIC_CONFIGURATION",
    "BackendError",
    "CannedAcl",
    "Capability",
    "CompletedPart",
    "CopySource",
    "InvalidConfigurationError",
    "InvalidRequestError",
    "NotInitializedError",
    "ObjectStorage",
    "OssConfig",
    "OssMetadata",
    "S3ObjectStorage",
    "StorageError",
    "UnsupportedCapabilityError",
]
