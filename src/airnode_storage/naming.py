"""Airnode bucket naming policy.

Managed buckets are named ``airnode-<12 hex chars>``. Any other bucket in the
project is ignored by discovery.
"""

from __future__ import annotations

import re
import secrets
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from airnode_storage.config import ProviderConfig

BUCKET_NAME_PREFIX = "airnode"
BUCKET_NAME_SUFFIX_BYTES = 6

_MANAGED_NAME_PATTERN = re.compile(
    rf"^{BUCKET_NAME_PREFIX}-[0-9a-f]{{{BUCKET_NAME_SUFFIX_BYTES * 2}}}$"
)


def generate_bucket_name(config: ProviderConfig | None = None) -> str:
    """Return a fresh random bucket name.

    The config is accepted for call-site symmetry with the provisioner but
    does not influence the name.
    """
    return f"{BUCKET_NAME_PREFIX}-{secrets.token_hex(BUCKET_NAME_SUFFIX_BYTES)}"


def is_managed_bucket_name(name: str) -> bool:
    """Check whether a bucket name follows the Airnode naming convention."""
    return bool(_MANAGED_NAME_PATTERN.fullmatch(name))
