"""Google Cloud Storage backend for Airnode buckets.

Provides:
- Discovery of the single Airnode bucket of a GCP project
- Bucket creation with uniform access, public access prevention and IAM policy
- Directory view over the flat object listing
- Store/fetch/copy of single objects
- Fail-fast recursive directory deletion and bucket deletion

Every google-cloud-storage failure is wrapped into the errors of
airnode_storage.errors and re-raised from the original exception. Nothing is
retried or rolled back here.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from google.api_core.iam import Policy
from google.cloud.storage.constants import PUBLIC_ACCESS_PREVENTION_ENFORCED

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
)
from airnode_storage.models import DirectoryNode, build_directory_tree
from airnode_storage.naming import generate_bucket_name, is_managed_bucket_name
from airnode_storage.provider import BucketProvider
from airnode_storage.tracing import traced_bucket_operation

if TYPE_CHECKING:
    from google.cloud import storage

    from airnode_storage.config import ProviderConfig

logger = logging.getLogger(__name__)


def build_bucket_policy(project_id: str) -> Policy:
    """Return the fixed IAM policy applied to every new Airnode bucket.

    Project viewers get read-only access, project editors and owners get full
    access, on both the bucket and its objects.
    """
    viewers = [f"projectViewer:{project_id}"]
    owners = [f"projectEditor:{project_id}", f"projectOwner:{project_id}"]

    policy = Policy()
    policy.bindings = [
        {"role": "roles/storage.legacyBucketReader", "members": viewers},
        {"role": "roles/storage.legacyBucketOwner", "members": owners},
        {"role": "roles/storage.legacyObjectReader", "members": viewers},
        {"role": "roles/storage.legacyObjectOwner", "members": owners},
    ]
    return policy


@dataclass(frozen=True)
class ProvisioningStep:
    """One step of the bucket creation sequence.

    Attributes:
        name: Step identifier used in logs.
        action: Remote call performing the step.
        on_failure: Builds the domain error for a failed call.
    """

    name: str
    action: Callable[[], Any]
    on_failure: Callable[[Exception], BucketStorageError]


@dataclass(frozen=True)
class StepResult:
    """Tagged outcome of a ProvisioningStep."""

    step: str
    error: BucketStorageError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def run_step(step: ProvisioningStep) -> StepResult:
    """Run a single provisioning step and tag its outcome."""
    try:
        step.action()
    except Exception as e:
        return StepResult(step=step.name, error=step.on_failure(e))
    return StepResult(step=step.name)


class GcsBucketProvider(BucketProvider):
    """Airnode bucket management on Google Cloud Storage.

    The google-cloud-storage client is created lazily for the configured
    project unless one is injected.
    """

    def __init__(
        self,
        config: ProviderConfig,
        client: storage.Client | None = None,
    ) -> None:
        if not config.project_id:
            raise ProviderConfigError("GCP provider configuration requires a project id")
        super().__init__(config)
        self._client = client

    @property
    def backend_name(self) -> str:
        """Return the backend identifier."""
        return "gcs"

    @property
    def client(self) -> storage.Client:
        """Return the storage client, creating it on first use."""
        if self._client is None:
            from google.cloud import storage

            self._client = storage.Client(project=self.config.project_id)
            logger.debug("Created GCS client for project=%s", self.config.project_id)
        return self._client

    @traced_bucket_operation("get_bucket")
    def get_airnode_bucket(self) -> str | None:
        try:
            buckets = list(self.client.list_buckets())
        except Exception as e:
            raise ListBucketsError(e) from e

        managed = [bucket for bucket in buckets if is_managed_bucket_name(bucket.name)]
        logger.debug(
            "Listed %d buckets in project=%s, %d managed",
            len(buckets),
            self.config.project_id,
            len(managed),
        )

        if not managed:
            return None
        if len(managed) > 1:
            raise MultipleBucketsError(managed)
        return managed[0].name

    @traced_bucket_operation("create_bucket")
    def create_airnode_bucket(self) -> str:
        bucket_name = generate_bucket_name(self.config)
        bucket = self.client.bucket(bucket_name)

        steps = (
            ProvisioningStep(
                name="create",
                action=lambda: self.client.create_bucket(bucket, location=self.config.region),
                on_failure=lambda e: CreateBucketError(bucket_name, e),
            ),
            ProvisioningStep(
                name="access_control",
                action=lambda: self._enforce_uniform_access(bucket),
                on_failure=lambda e: AccessControlError(bucket_name, e),
            ),
            ProvisioningStep(
                name="iam_policy",
                action=lambda: bucket.set_iam_policy(build_bucket_policy(self.config.project_id)),
                on_failure=lambda e: PolicyError(bucket_name, e),
            ),
        )

        for step in steps:
            result = run_step(step)
            if not result.ok:
                logger.warning(
                    "Bucket provisioning stopped at step=%s bucket=%s", result.step, bucket_name
                )
                raise result.error from result.error.cause
            logger.debug("Bucket provisioning step=%s done bucket=%s", result.step, bucket_name)

        logger.info(
            "Created Airnode bucket %s in project=%s region=%s",
            bucket_name,
            self.config.project_id,
            self.config.region,
        )
        return bucket_name

    @staticmethod
    def _enforce_uniform_access(bucket: storage.Bucket) -> None:
        iam_configuration = bucket.iam_configuration
        iam_configuration.uniform_bucket_level_access_enabled = True
        iam_configuration.public_access_prevention = PUBLIC_ACCESS_PREVENTION_ENFORCED
        bucket.patch()

    @traced_bucket_operation("get_directory_structure")
    def get_directory_structure(self, bucket_name: str) -> DirectoryNode:
        try:
            keys = [blob.name for blob in self.client.bucket(bucket_name).list_blobs()]
        except Exception as e:
            raise ListBucketContentError(bucket_name, e) from e

        logger.debug("Listed %d objects in bucket=%s", len(keys), bucket_name)
        return build_directory_tree(keys)

    @traced_bucket_operation("store_file")
    def store_file(self, bucket_name: str, destination_key: str, source_path: str) -> None:
        try:
            self.client.bucket(bucket_name).blob(destination_key).upload_from_filename(
                source_path
            )
        except Exception as e:
            raise StoreFileError(source_path, bucket_name, destination_key, e) from e

        logger.debug("Stored %s as key=%s bucket=%s", source_path, destination_key, bucket_name)

    @traced_bucket_operation("fetch_file")
    def fetch_file(self, bucket_name: str, key: str) -> bytes:
        try:
            return self.client.bucket(bucket_name).blob(key).download_as_bytes()
        except Exception as e:
            raise FetchFileError(key, bucket_name, e) from e

    @traced_bucket_operation("copy_file")
    def copy_file(self, bucket_name: str, from_key: str, to_key: str) -> None:
        bucket = self.client.bucket(bucket_name)
        try:
            bucket.copy_blob(bucket.blob(from_key), bucket, new_name=to_key)
        except Exception as e:
            raise CopyFileError(from_key, to_key, bucket_name, e) from e

        logger.debug("Copied key=%s to key=%s bucket=%s", from_key, to_key, bucket_name)

    @traced_bucket_operation("delete_directory")
    def delete_directory(self, bucket_name: str, node: DirectoryNode) -> None:
        bucket = self.client.bucket(bucket_name)
        deleted = 0
        for key in node.iter_file_keys():
            try:
                bucket.blob(key).delete()
            except Exception as e:
                logger.warning(
                    "Directory deletion stopped after %d objects in bucket=%s",
                    deleted,
                    bucket_name,
                )
                raise DeleteObjectError(key, bucket_name, e) from e
            deleted += 1
            logger.debug("Deleted key=%s bucket=%s", key, bucket_name)

        logger.info(
            "Deleted directory '%s' (%d objects) from bucket=%s",
            node.bucket_key,
            deleted,
            bucket_name,
        )

    @traced_bucket_operation("delete_bucket")
    def delete_bucket(self, bucket_name: str) -> None:
        try:
            self.client.bucket(bucket_name).delete()
        except Exception as e:
            raise DeleteBucketError(bucket_name, e) from e

        logger.info("Deleted Airnode bucket %s", bucket_name)
