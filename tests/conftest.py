"""Pytest configuration and fixtures for airnode_storage tests.

This module provides common fixtures and configuration for all tests.
"""

from __future__ import annotations

import pytest
from bucket_fixtures import BUCKET_KEYS, BUCKET_NAME, PROJECT_ID
from gcs_fakes import FakeStorageClient

from airnode_storage.config import ProviderConfig
from airnode_storage.gcs_provider import GcsBucketProvider


@pytest.fixture
def provider_config() -> ProviderConfig:
    """Return the GCP provider configuration used across tests."""
    return ProviderConfig(
        type="gcp",
        region="us-east1",
        projectId=PROJECT_ID,
        disableConcurrencyReservations=False,
    )


@pytest.fixture
def gcs_client() -> FakeStorageClient:
    """Return an in-memory GCS client with no buckets."""
    return FakeStorageClient()


@pytest.fixture
def provider(provider_config: ProviderConfig, gcs_client: FakeStorageClient) -> GcsBucketProvider:
    """Return a GCS provider bound to the fake client."""
    return GcsBucketProvider(provider_config, client=gcs_client)


@pytest.fixture
def populated_client(gcs_client: FakeStorageClient) -> FakeStorageClient:
    """Return the fake client holding BUCKET_NAME filled with BUCKET_KEYS."""
    gcs_client.buckets[BUCKET_NAME] = {
        key: b"" if key.endswith("/") else f"content of {key}".encode() for key in BUCKET_KEYS
    }
    return gcs_client
