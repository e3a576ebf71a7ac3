"""Airnode bucket provider interface definition.

Provides the BucketProvider interface that every cloud backend implements and
the factory that selects a backend from a ProviderConfig.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from airnode_storage.config import GCP_PROVIDER_TYPE, ProviderConfig
from airnode_storage.errors import UnsupportedProviderError

if TYPE_CHECKING:
    from airnode_storage.models import DirectoryNode


class BucketProvider(ABC):
    """Abstract base class for Airnode bucket backends.

    A provider is bound to one ProviderConfig and manages at most one
    Airnode bucket in that account/project. It holds no state between calls
    apart from its client handle.
    """

    def __init__(self, config: ProviderConfig) -> None:
        self._config = config

    @property
    def config(self) -> ProviderConfig:
        """Return the provider configuration."""
        return self._config

    @property
    @abstractmethod
    def backend_name(self) -> str:
        """Return the backend identifier for observability (e.g. "gcs")."""
        ...

    @abstractmethod
    def get_airnode_bucket(self) -> str | None:
        """Discover the Airnode bucket of the project.

        Returns:
            The bucket name, or None if no managed bucket exists.

        Raises:
            ListBucketsError: If the bucket listing fails.
            MultipleBucketsError: If more than one managed bucket exists.
        """
        ...

    @abstractmethod
    def create_airnode_bucket(self) -> str:
        """Create and harden a new Airnode bucket.

        Returns:
            Name of the created bucket.

        Raises:
            CreateBucketError: If the bucket cannot be created.
            AccessControlError: If access hardening fails.
            PolicyError: If the IAM policy cannot be set.
        """
        ...

    @abstractmethod
    def get_directory_structure(self, bucket_name: str) -> DirectoryNode:
        """List the bucket and return its content as a directory tree.

        Raises:
            ListBucketContentError: If the bucket content cannot be listed.
        """
        ...

    @abstractmethod
    def store_file(self, bucket_name: str, destination_key: str, source_path: str) -> None:
        """Upload a local file to ``destination_key``, overwriting any object there.

        Raises:
            StoreFileError: If the upload fails.
        """
        ...

    @abstractmethod
    def fetch_file(self, bucket_name: str, key: str) -> bytes:
        """Download the full content of an object.

        Raises:
            FetchFileError: If the download fails, including when the key is absent.
        """
        ...

    @abstractmethod
    def copy_file(self, bucket_name: str, from_key: str, to_key: str) -> None:
        """Copy an object within the bucket, overwriting ``to_key``.

        Raises:
            CopyFileError: If the copy fails.
        """
        ...

    @abstractmethod
    def delete_directory(self, bucket_name: str, node: DirectoryNode) -> None:
        """Delete every object below ``node``, stopping at the first failure.

        Raises:
            DeleteObjectError: Naming the first key that could not be deleted.
        """
        ...

    @abstractmethod
    def delete_bucket(self, bucket_name: str) -> None:
        """Delete the (already emptied) bucket itself.

        Raises:
            DeleteBucketError: If the bucket cannot be deleted.
        """
        ...


def get_bucket_provider(config: ProviderConfig) -> BucketProvider:
    """Return the backend serving ``config.type``.

    Raises:
        UnsupportedProviderError: If no backend exists for the provider type.
    """
    if config.type == GCP_PROVIDER_TYPE:
        from airnode_storage.gcs_provider import GcsBucketProvider

        return GcsBucketProvider(config)
    raise UnsupportedProviderError(config.type)
