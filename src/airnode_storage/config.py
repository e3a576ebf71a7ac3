"""Cloud provider configuration for Airnode bucket storage.

Environment Variables:
    AIRNODE_CLOUD_PROVIDER: Cloud provider type (default: "gcp")
    AIRNODE_CLOUD_REGION: Region the bucket is created in (required)
    AIRNODE_GCP_PROJECT_ID: GCP project owning the bucket (required for "gcp")
    AIRNODE_DISABLE_CONCURRENCY_RESERVATIONS: "1"/"true" to disable
        concurrency reservations (default: false)
"""

from __future__ import annotations

import os
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from airnode_storage.errors import ProviderConfigError

AIRNODE_CLOUD_PROVIDER_ENV = "AIRNODE_CLOUD_PROVIDER"
AIRNODE_CLOUD_REGION_ENV = "AIRNODE_CLOUD_REGION"
AIRNODE_GCP_PROJECT_ID_ENV = "AIRNODE_GCP_PROJECT_ID"
AIRNODE_DISABLE_CONCURRENCY_RESERVATIONS_ENV = "AIRNODE_DISABLE_CONCURRENCY_RESERVATIONS"

GCP_PROVIDER_TYPE = "gcp"


class ProviderConfig(BaseModel):
    """Identifies the cloud account/project that owns the Airnode bucket.

    Supplied by the caller and never mutated. Accepts both the snake_case
    field names and the camelCase names used in deployment config files.

    Attributes:
        type: Cloud provider type, e.g. "gcp".
        region: Region/location of the bucket.
        project_id: Cloud project identifier (GCP only).
        disable_concurrency_reservations: Deployment flag carried through
            unchanged; storage operations do not use it.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        populate_by_name=True,
        str_strip_whitespace=True,
    )

    type: Annotated[str, Field(min_length=1, description="Cloud provider type")]
    region: Annotated[str, Field(min_length=1, description="Bucket region")]
    project_id: Annotated[
        str | None,
        Field(default=None, alias="projectId", description="Cloud project identifier"),
    ]
    disable_concurrency_reservations: Annotated[
        bool,
        Field(default=False, alias="disableConcurrencyReservations"),
    ]


def _get_env_bool(key: str, default: bool = False) -> bool:
    """Get boolean from environment variable."""
    val = os.environ.get(key, "").strip().lower()
    if val in ("1", "true", "yes"):
        return True
    if val in ("0", "false", "no"):
        return False
    return default


def load_provider_config() -> ProviderConfig:
    """Build a ProviderConfig from AIRNODE_* environment variables.

    Raises:
        ProviderConfigError: If a required variable is missing or invalid.
    """
    provider_type = os.environ.get(AIRNODE_CLOUD_PROVIDER_ENV, GCP_PROVIDER_TYPE).strip()
    region = os.environ.get(AIRNODE_CLOUD_REGION_ENV, "").strip()
    project_id = os.environ.get(AIRNODE_GCP_PROJECT_ID_ENV, "").strip() or None

    if not region:
        raise ProviderConfigError(f"{AIRNODE_CLOUD_REGION_ENV} is required")
    if provider_type == GCP_PROVIDER_TYPE and project_id is None:
        raise ProviderConfigError(f"{AIRNODE_GCP_PROJECT_ID_ENV} is required for GCP")

    try:
        return ProviderConfig(
            type=provider_type,
            region=region,
            project_id=project_id,
            disable_concurrency_reservations=_get_env_bool(
                AIRNODE_DISABLE_CONCURRENCY_RESERVATIONS_ENV
            ),
        )
    except ValidationError as e:
        raise ProviderConfigError(f"Invalid provider configuration: {e}") from e
