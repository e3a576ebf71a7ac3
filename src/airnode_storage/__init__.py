"""Airnode bucket storage.

Manages the single Airnode bucket of a cloud project and provides a
directory view over its flat object namespace.

Backends:
- GcsBucketProvider: Google Cloud Storage

Environment Variables:
    AIRNODE_CLOUD_PROVIDER: Cloud provider type (default: "gcp")
    AIRNODE_CLOUD_REGION: Bucket region
    AIRNODE_GCP_PROJECT_ID: GCP project owning the bucket
    AIRNODE_OTEL_ENABLED: "1" to emit OpenTelemetry spans
"""

from airnode_storage.config import ProviderConfig, load_provider_config
from airnode_storage.errors import (
    AccessControlError,
    BucketStorageError,
    CopyFileError,
    CreateBucketError,
    DeleteBucketError,
    DeleteObjectError,
    FetchFileError,
    ListBucketContentError,
    ListBucketsError,
    MultipleBucketsError,
    PolicyError,
    ProviderConfigError,
    StoreFileError,
    UnsupportedProviderError,
)
from airnode_storage.models import DirectoryNode, FileNode, build_directory_tree
from airnode_storage.naming import generate_bucket_name, is_managed_bucket_name
from airnode_storage.provider import BucketProvider, get_bucket_provider

__all__ = [
    "BucketProvider",
    "get_bucket_provider",
    "ProviderConfig",
    "load_provider_config",
    "DirectoryNode",
    "FileNode",
    "build_directory_tree",
    "generate_bucket_name",
    "is_managed_bucket_name",
    "BucketStorageError",
    "ProviderConfigError",
    "UnsupportedProviderError",
    "ListBucketsError",
    "MultipleBucketsError",
    "CreateBucketError",
    "AccessControlError",
    "PolicyError",
    "ListBucketContentError",
    "StoreFileError",
    "FetchFileError",
    "CopyFileError",
    "DeleteObjectError",
    "DeleteBucketError",
]
