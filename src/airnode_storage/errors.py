"""Airnode bucket storage error types.

Every failure of the underlying GCS client is wrapped into one of the typed
errors below. Messages follow a fixed one-line shape that calling automation
matches on:

    Failed to <action> '<subject>' <context>: <original error>

The original exception is never swallowed: it is embedded in the message,
kept on ``.cause`` and chained as ``__cause__`` when raised ``from`` it.
"""

from __future__ import annotations

import json
from collections.abc import Sequence
from typing import Any


def describe_cause(cause: BaseException) -> str:
    """Render an exception the way a traceback's last line does."""
    return f"{type(cause).__name__}: {cause}"


def failure_message(
    action: str,
    subject: str | None = None,
    context: str | None = None,
    cause: BaseException | None = None,
) -> str:
    """Build a ``Failed to ...`` message.

    Args:
        action: Verb phrase, e.g. "fetch file".
        subject: Quoted object of the action (key, path or bucket name).
        context: Trailing qualifier, e.g. "from GCS bucket 'airnode-...'".
        cause: Original transport error.

    Returns:
        One-line message.
    """
    parts = [f"Failed to {action}"]
    if subject is not None:
        parts.append(f"'{subject}'")
    if context:
        parts.append(context)
    message = " ".join(parts)
    if cause is not None:
        message = f"{message}: {describe_cause(cause)}"
    return message


class BucketStorageError(Exception):
    """Base exception for bucket storage operations.

    Attributes:
        message: Human-readable error message.
        bucket_name: Bucket the operation targeted (if applicable).
        key: Object key the operation targeted (if applicable).
        cause: Wrapped transport error (if any).
    """

    def __init__(
        self,
        message: str,
        *,
        bucket_name: str | None = None,
        key: str | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.bucket_name = bucket_name
        self.key = key
        self.cause = cause

    def __str__(self) -> str:
        return self.message


class ProviderConfigError(BucketStorageError):
    """Raised when a provider configuration is missing or malformed."""


class UnsupportedProviderError(BucketStorageError):
    """Raised when no backend exists for the configured cloud provider type."""

    def __init__(self, provider_type: str) -> None:
        super().__init__(f"Unsupported cloud provider type '{provider_type}'")
        self.provider_type = provider_type


class ListBucketsError(BucketStorageError):
    def __init__(self, cause: BaseException) -> None:
        super().__init__(failure_message("list GCS buckets", cause=cause), cause=cause)


class MultipleBucketsError(BucketStorageError):
    """More than one managed bucket exists for a single project.

    This is a structural invariant violation rather than a transient
    failure: an operator has to remove the extra bucket(s).

    Attributes:
        buckets: The matching bucket descriptors as returned by the client.
    """

    def __init__(self, buckets: Sequence[Any]) -> None:
        self.buckets = list(buckets)
        listing = json.dumps([{"name": bucket.name} for bucket in self.buckets])
        super().__init__(f"Multiple Airnode buckets found, stopping. Buckets: {listing}")


class CreateBucketError(BucketStorageError):
    def __init__(self, bucket_name: str, cause: BaseException) -> None:
        super().__init__(
            failure_message("create GCS bucket", bucket_name, cause=cause),
            bucket_name=bucket_name,
            cause=cause,
        )


class AccessControlError(BucketStorageError):
    def __init__(self, bucket_name: str, cause: BaseException) -> None:
        super().__init__(
            failure_message(
                "setup a uniform bucket-level access for bucket", bucket_name, cause=cause
            ),
            bucket_name=bucket_name,
            cause=cause,
        )


class PolicyError(BucketStorageError):
    def __init__(self, bucket_name: str, cause: BaseException) -> None:
        super().__init__(
            failure_message("setup IAM policy for bucket", bucket_name, cause=cause),
            bucket_name=bucket_name,
            cause=cause,
        )


class ListBucketContentError(BucketStorageError):
    def __init__(self, bucket_name: str, cause: BaseException) -> None:
        super().__init__(
            failure_message("list content of bucket", bucket_name, cause=cause),
            bucket_name=bucket_name,
            cause=cause,
        )


class StoreFileError(BucketStorageError):
    def __init__(
        self, source_path: str, bucket_name: str, key: str, cause: BaseException
    ) -> None:
        super().__init__(
            failure_message(
                "store file", source_path, f"to GCS bucket '{bucket_name}'", cause
            ),
            bucket_name=bucket_name,
            key=key,
            cause=cause,
        )
        self.source_path = source_path


class FetchFileError(BucketStorageError):
    def __init__(self, key: str, bucket_name: str, cause: BaseException) -> None:
        super().__init__(
            failure_message("fetch file", key, f"from GCS bucket '{bucket_name}'", cause),
            bucket_name=bucket_name,
            key=key,
            cause=cause,
        )


class CopyFileError(BucketStorageError):
    def __init__(
        self, from_key: str, to_key: str, bucket_name: str, cause: BaseException
    ) -> None:
        super().__init__(
            failure_message(
                "copy file",
                from_key,
                f"to file '{to_key}' within GCS bucket '{bucket_name}'",
                cause,
            ),
            bucket_name=bucket_name,
            key=from_key,
            cause=cause,
        )
        self.to_key = to_key


class DeleteObjectError(BucketStorageError):
    def __init__(self, key: str, bucket_name: str, cause: BaseException) -> None:
        super().__init__(
            failure_message("delete bucket file", key, cause=cause),
            bucket_name=bucket_name,
            key=key,
            cause=cause,
        )


class DeleteBucketError(BucketStorageError):
    def __init__(self, bucket_name: str, cause: BaseException) -> None:
        super().__init__(
            failure_message("delete GCS bucket", bucket_name, cause=cause),
            bucket_name=bucket_name,
            cause=cause,
        )
